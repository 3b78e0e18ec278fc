"""
Progress Tracker

Orchestrates the session analyses into progress records:
- track_progress_with_emotions: one analysis cycle, five analyses run
  concurrently, record validated and saved
- end_session: final cycle merged with the previous session's record,
  engagement recomputed as a trend, holistic analysis appended
"""

import asyncio
import logging
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from .analyzer import SessionAnalyzer
from .config import (
    ASSISTANT_LABEL,
    GEMINI_API_KEY,
    MAX_RETRIES,
    PROGRESS_STORE_DIR,
    RETRY_DELAY_SECONDS,
)
from .errors import ConfigurationError, MessageValidationError, ProgressTrackingError
from .gemini_client import GeminiTextModel, TextModel
from .models import (
    EmotionalJourney,
    Goal,
    Message,
    ProgressRecord,
    SessionAnalysis,
    is_valid_progress_record,
    utc_now_iso,
)
from .retry import retry_operation
from .store import FileStorage, ProgressHistoryStore
from .trends import average_engagement_levels, split_into_segments

logger = logging.getLogger(__name__)


def merge_goals(previous: Sequence[Goal], new: Sequence[Goal]) -> List[Goal]:
    """
    Merge this session's goals into the previous ones.

    Goals match on exact (case-sensitive) text. A matched goal keeps the
    higher progress and its derived status; unmatched new goals are
    appended after the previous ones.
    """
    merged = [goal.model_copy() for goal in previous]

    for goal in new:
        index = next((i for i, g in enumerate(merged) if g.goal == goal.goal), None)
        if index is None:
            merged.append(goal)
        else:
            merged[index] = Goal(
                goal=goal.goal,
                progress=max(merged[index].progress, goal.progress),
            )

    return merged


def generate_comprehensive_summary(current_summary: str, analysis: SessionAnalysis) -> str:
    """Append the holistic session analysis to the summary text."""
    parts = [
        current_summary,
        f"\n\nEmotional State: {analysis.emotional_state}",
        "\nKey Topics:",
        *[f"- {topic}" for topic in analysis.key_topics],
        "\nKey Insights:",
        *[f"- {insight}" for insight in analysis.insights],
    ]
    return "\n".join(parts).strip()


class ProgressTracker:
    """
    Tracks therapy progress across sessions using Gemini analyses.

    Args:
        api_key: Gemini API key; falls back to GEMINI_API_KEY from config
        model: Text model to use instead of a Gemini client
        store: History store; defaults to a file store in PROGRESS_STORE_DIR
        retries: Retry budget for each analysis call
        retry_delay: Seconds between retries

    Raises:
        ConfigurationError: if no API key is available
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[TextModel] = None,
        store: Optional[ProgressHistoryStore] = None,
        retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY_SECONDS,
        assistant_label: str = ASSISTANT_LABEL,
    ):
        self.api_key = api_key or GEMINI_API_KEY
        if not self.api_key:
            raise ConfigurationError("API key is required for progress tracking")

        self.retries = retries
        self.retry_delay = retry_delay
        self.model = model or GeminiTextModel(self.api_key)
        self.store = store or ProgressHistoryStore(
            FileStorage(PROGRESS_STORE_DIR),
            retries=retries,
            retry_delay=retry_delay,
        )
        self.analyzer = SessionAnalyzer(self.model, assistant_label)

    # ── History ─────────────────────────────────────────────────────────

    async def get_progress_history(self) -> List[ProgressRecord]:
        return await self.store.history()

    async def get_latest_progress(self) -> Optional[ProgressRecord]:
        return await self.store.latest()

    async def save_progress(self, record: ProgressRecord) -> None:
        await self.store.save(record)

    # ── Analysis cycles ─────────────────────────────────────────────────

    def _validate_messages(self, messages: Any) -> List[Message]:
        if not isinstance(messages, (list, tuple)) or len(messages) == 0:
            raise MessageValidationError("No messages provided for progress tracking")
        try:
            return [m if isinstance(m, Message) else Message.model_validate(m) for m in messages]
        except ValidationError as e:
            raise MessageValidationError(f"Invalid message in input: {e}") from e

    def _retry(self, operation):
        return retry_operation(operation, retries=self.retries, delay=self.retry_delay)

    async def track_progress_with_emotions(self, messages: Sequence[Any]) -> ProgressRecord:
        """
        Run one full analysis cycle and save the resulting record.

        Emotions, engagement, summary, goals and improvements are analyzed
        concurrently. A record that fails validation is returned but not saved.
        """
        try:
            messages = self._validate_messages(messages)

            emotions, engagement, summary, goals, improvements = await asyncio.gather(
                self._retry(lambda: self.analyzer.analyze_emotions(messages)),
                self._retry(lambda: self.analyzer.analyze_engagement(messages)),
                self._retry(lambda: self.analyzer.analyze_session_summary(messages)),
                self._retry(lambda: self.analyzer.analyze_goals(messages)),
                self._retry(lambda: self.analyzer.analyze_improvements(messages)),
            )

            record = ProgressRecord(
                session_summary=summary,
                goals=[Goal(goal=g.title, progress=g.progress) for g in goals if g.title],
                improvements=improvements,
                timestamp=utc_now_iso(),
                emotional_journey=EmotionalJourney(
                    emotions=emotions.emotions,
                    dominant_emotions=emotions.dominant_emotions,
                    engagement_level=engagement,
                ),
            )

            if is_valid_progress_record(record.to_dict()):
                await self.store.save(record)
            else:
                logger.warning("Progress record failed validation, not saved")

            return record

        except ProgressTrackingError as e:
            logger.error(f"Error tracking progress with emotions: {e}")
            raise
        except Exception as e:
            logger.error(f"Error tracking progress with emotions: {e}")
            raise ProgressTrackingError("Failed to track progress") from e

    async def calculate_engagement_trend(self, messages: Sequence[Message]) -> List[int]:
        """Score three contiguous segments in turn and average them."""
        results = []
        for segment in split_into_segments(messages):
            results.append(await self.analyzer.analyze_engagement(segment))
        return average_engagement_levels(results)

    async def end_session(self, messages: Sequence[Any]) -> ProgressRecord:
        """
        Final analysis for a session, merged with the previous record.

        The merged record is saved and returned. Failures propagate.
        """
        try:
            messages = self._validate_messages(messages)

            latest = await self.store.latest()
            record = await self.track_progress_with_emotions(messages)

            if latest is not None and latest.goals:
                record.goals = merge_goals(latest.goals, record.goals)

            if latest is not None and latest.emotional_journey.emotions:
                record.emotional_journey.emotions = (
                    latest.emotional_journey.emotions + record.emotional_journey.emotions
                )

            record.emotional_journey.engagement_level = await self.calculate_engagement_trend(messages)

            analysis = await self.analyzer.analyze_session(messages)
            record.session_summary = generate_comprehensive_summary(record.session_summary, analysis)

            await self.store.save(record)
            logger.info(f"Session ended with {len(record.goals)} goals tracked")
            return record

        except ProgressTrackingError as e:
            logger.error(f"Error ending session: {e}")
            raise
        except Exception as e:
            logger.error(f"Error ending session: {e}")
            raise ProgressTrackingError("Failed to end session") from e


def initialize_progress_tracker(api_key: str) -> ProgressTracker:
    return ProgressTracker(api_key=api_key)
