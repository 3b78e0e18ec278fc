"""
Gemini Session Analyzer

One operation per analysis prompt: build the prompt from the
conversation, ask the model, parse the reply.

Every operation comes in two flavours:
- ``run_*`` returns an AnalysisResult (value or failure reason)
- ``analyze_*`` unwraps it to the value, or to a safe default when the
  model call failed, so it never raises
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from .config import ASSISTANT_LABEL
from .gemini_client import TextModel
from .models import (
    EmotionAnalysis,
    GoalDetail,
    Improvements,
    Message,
    ProgressRecord,
    ProgressReport,
    SessionAnalysis,
)
from . import parsers
from . import prompts

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNABLE_TO_SUMMARIZE = "Unable to generate session summary"


@dataclass
class AnalysisResult(Generic[T]):
    """Outcome of one analysis call."""
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        return self.value if self.ok else default


class SessionAnalyzer:
    """Runs the individual session analyses against a text model."""

    def __init__(self, model: TextModel, assistant_label: str = ASSISTANT_LABEL):
        self.model = model
        self.assistant_label = assistant_label

    def _conversation(self, messages: Sequence[Message]) -> str:
        return prompts.format_conversation(messages, self.assistant_label)

    async def _run(self, name: str, prompt: str, parse: Callable[[str], T]) -> AnalysisResult[T]:
        try:
            text = await self.model.generate_content(prompt)
            value = parse(text or "")
        except Exception as e:
            logger.error(f"Error analyzing {name}: {e}")
            return AnalysisResult(error=str(e) or type(e).__name__)
        return AnalysisResult(value=value)

    # ── Explicit results ────────────────────────────────────────────────

    async def run_emotions(self, messages: Sequence[Message]) -> AnalysisResult[EmotionAnalysis]:
        return await self._run(
            "emotions", prompts.build_emotion_prompt(messages), parsers.parse_emotion_list
        )

    async def run_engagement(self, messages: Sequence[Message]) -> AnalysisResult[List[int]]:
        return await self._run(
            "engagement",
            prompts.build_engagement_prompt(self._conversation(messages)),
            parsers.parse_engagement,
        )

    async def run_session_summary(self, messages: Sequence[Message]) -> AnalysisResult[str]:
        return await self._run(
            "session summary",
            prompts.build_summary_prompt(self._conversation(messages)),
            str.strip,
        )

    async def run_goals(self, messages: Sequence[Message]) -> AnalysisResult[List[GoalDetail]]:
        return await self._run(
            "goals",
            prompts.build_goals_prompt(self._conversation(messages)),
            parsers.parse_goal_list,
        )

    async def run_improvements(self, messages: Sequence[Message]) -> AnalysisResult[Improvements]:
        return await self._run(
            "improvements",
            prompts.build_improvements_prompt(self._conversation(messages)),
            parsers.parse_improvement_list,
        )

    async def run_session(self, messages: Sequence[Message]) -> AnalysisResult[SessionAnalysis]:
        # Holistic pass sees message texts only, without speaker labels
        return await self._run(
            "session",
            prompts.build_session_analysis_prompt([m.text for m in messages]),
            parsers.parse_session_analysis,
        )

    async def run_progress_report(self, messages: Sequence[Message]) -> AnalysisResult[ProgressReport]:
        return await self._run(
            "progress report",
            prompts.build_progress_report_prompt(self._conversation(messages)),
            parsers.parse_progress_report,
        )

    # ── Defaulting wrappers ─────────────────────────────────────────────

    async def analyze_emotions(self, messages: Sequence[Message]) -> EmotionAnalysis:
        return (await self.run_emotions(messages)).unwrap_or(EmotionAnalysis())

    async def analyze_engagement(self, messages: Sequence[Message]) -> List[int]:
        return (await self.run_engagement(messages)).unwrap_or([0, 0, 0, 0, 0])

    async def analyze_session_summary(self, messages: Sequence[Message]) -> str:
        return (await self.run_session_summary(messages)).unwrap_or("")

    async def analyze_goals(self, messages: Sequence[Message]) -> List[GoalDetail]:
        return (await self.run_goals(messages)).unwrap_or([])

    async def analyze_improvements(self, messages: Sequence[Message]) -> Improvements:
        return (await self.run_improvements(messages)).unwrap_or(Improvements())

    async def analyze_session(self, messages: Sequence[Message]) -> SessionAnalysis:
        return (await self.run_session(messages)).unwrap_or(
            SessionAnalysis(emotional_state="Unable to analyze")
        )

    async def generate_progress_report(self, messages: Sequence[Message]) -> ProgressRecord:
        """Single-prompt progress record, without emotional journey data."""
        report = (await self.run_progress_report(messages)).unwrap_or(
            ProgressReport(session_summary=UNABLE_TO_SUMMARIZE)
        )
        return ProgressRecord(
            session_summary=report.session_summary or "Unable to generate summary",
            goals=report.goals,
            improvements=report.improvements,
        )

    async def track_progress_manual(self, conversation: str) -> ProgressRecord:
        """
        Progress record from a numbered free-form report.

        Goals are not extracted by this prompt and stay empty.
        """
        result = await self._run(
            "manual progress",
            prompts.build_manual_report_prompt(conversation),
            parsers.parse_manual_report,
        )
        report = result.unwrap_or(ProgressReport(session_summary=UNABLE_TO_SUMMARIZE))
        return ProgressRecord(
            session_summary=report.session_summary,
            improvements=report.improvements,
        )
