"""
Response Parsers

Turn free-text Gemini replies into typed records. Every parser is a pure
function that never raises: on any internal failure it logs the error
and returns the empty default for its record type.

Parsing is best-effort string splitting and regex matching; replies with
missing or reordered sections simply yield fewer fields.
"""

import re
import logging
from typing import List

from .models import (
    DominantEmotion,
    EmotionAnalysis,
    EmotionPoint,
    Goal,
    GoalDetail,
    GoalStatus,
    Improvements,
    ProgressReport,
    SessionAnalysis,
    clamp_progress,
)

logger = logging.getLogger(__name__)

ENGAGEMENT_SIZE = 5

_PERCENT_RE = re.compile(r"(\d+)%")
_INTEGER_RE = re.compile(r"\d+")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_DISTRIBUTION_RE = re.compile(r"(\w+):\s*(\d+)%")
_BULLET_RE = re.compile(r"^[-•*]\s*")

_TITLE_RE = re.compile(r"Title: (.+)")
_DESCRIPTION_RE = re.compile(r"Description: (.+)")
_PROGRESS_RE = re.compile(r"Progress: (\d+)%")
_STATUS_RE = re.compile(r"Status: (not-started|in-progress|achieved)")

IMPROVEMENT_LABELS = {
    "strengths": "Strengths:",
    "challenges": "Challenges:",
    "recommendations": "Recommendations:",
}


def _sections(text: str) -> List[str]:
    return text.split("\n\n")


def _after_colon(text: str) -> str:
    """Text between the first and second colon, or '' when there is none."""
    parts = text.split(":")
    return parts[1] if len(parts) > 1 else ""


def _split_dashes(text: str) -> List[str]:
    return [item.strip() for item in text.strip().split("-") if item.strip()]


def _leading_int(text: str) -> int:
    match = _LEADING_INT_RE.match(text)
    return int(match.group(1)) if match else 0


def parse_session_analysis(text: str) -> SessionAnalysis:
    """
    Parse the holistic session analysis reply.

    Sections are attributed by keyword, in order: emotional state,
    key topics, insights.
    """
    try:
        emotional_state = ""
        key_topics: List[str] = []
        insights: List[str] = []

        for section in _sections(text):
            lowered = section.lower()
            if "emotional state" in lowered:
                emotional_state = _after_colon(section).strip()
            elif "key topics" in lowered:
                key_topics = _split_dashes(_after_colon(section))
            elif "insights" in lowered:
                insights = _split_dashes(_after_colon(section))

        return SessionAnalysis(
            emotional_state=emotional_state,
            key_topics=key_topics,
            insights=insights,
        )
    except Exception as e:
        logger.error(f"Error parsing analysis: {e}")
        return SessionAnalysis()


def _parse_goal_line(line: str):
    fields = [part.strip() for part in line.split("|")]
    goal_text = fields[0]
    if not goal_text:
        return None
    status_text = fields[1] if len(fields) > 1 else ""
    match = _PERCENT_RE.search(status_text)
    progress = int(match.group(1)) if match else 0
    return Goal(goal=goal_text, progress=progress)


def parse_progress_report(text: str) -> ProgressReport:
    """
    Parse a structured progress report.

    The first line of each section names it (summary / goals /
    improvements). Goal lines look like ``Sleep better | 40% - in-progress``;
    the literal status text is ignored, status comes from the percentage.
    """
    try:
        summary = ""
        goals: List[Goal] = []
        improvements = Improvements()

        for section in _sections(text):
            lines = section.split("\n")
            title = lines[0].lower()

            if "summary" in title:
                summary = " ".join(lines[1:]).strip()
            elif "goals" in title:
                goals = [g for g in (_parse_goal_line(line) for line in lines[1:]) if g]
            elif "improvements" in title:
                for line in lines[1:]:
                    lowered = line.lower()
                    for field, label in IMPROVEMENT_LABELS.items():
                        if label.lower() in lowered:
                            setattr(improvements, field, _split_dashes(_after_colon(line)))
                            break

        return ProgressReport(
            session_summary=summary,
            goals=goals,
            improvements=improvements,
        )
    except Exception as e:
        logger.error(f"Error parsing progress: {e}")
        return ProgressReport()


def parse_goal_list(text: str) -> List[GoalDetail]:
    """
    Parse ``Title / Description / Progress / Status`` goal blocks.

    A block needs both a title and a description to be kept.
    """
    try:
        goals = []
        for block in _sections(text):
            title = _TITLE_RE.search(block)
            description = _DESCRIPTION_RE.search(block)
            if not (title and description):
                continue
            if not (title.group(1).strip() and description.group(1).strip()):
                continue

            progress = _PROGRESS_RE.search(block)
            status = _STATUS_RE.search(block)
            goals.append(GoalDetail(
                title=title.group(1).strip(),
                description=description.group(1).strip(),
                progress=int(progress.group(1)) if progress else 0,
                status=GoalStatus(status.group(1)) if status else GoalStatus.NOT_STARTED,
            ))
        return goals
    except Exception as e:
        logger.error(f"Error parsing goals: {e}")
        return []


def parse_improvement_list(text: str) -> Improvements:
    """Parse labelled bullet blocks (Strengths: / Challenges: / Recommendations:)."""
    try:
        improvements = Improvements()
        for block in _sections(text):
            block = block.strip()
            for field, label in IMPROVEMENT_LABELS.items():
                if block.startswith(label):
                    items = [
                        line.replace("-", "", 1).strip()
                        for line in block.replace(label, "", 1).split("\n")
                        if line.strip().startswith("-")
                    ]
                    setattr(improvements, field, items)
                    break
        return improvements
    except Exception as e:
        logger.error(f"Error parsing improvements: {e}")
        return Improvements()


def parse_engagement(text: str) -> List[int]:
    """
    Extract five engagement ratings.

    Takes the first five integers anywhere in the text, clamps each to
    [0, 100] and pads with zeros, so the result always has five entries.
    """
    try:
        ratings = [clamp_progress(n) for n in _INTEGER_RE.findall(text)[:ENGAGEMENT_SIZE]]
    except Exception as e:
        logger.error(f"Error parsing engagement: {e}")
        ratings = []
    return ratings + [0] * (ENGAGEMENT_SIZE - len(ratings))


def parse_emotion_list(text: str) -> EmotionAnalysis:
    """
    Parse ``timestamp|emotion|intensity`` lines and the dominant-emotion
    distribution that follows a ``Distribution:`` marker.
    """
    try:
        emotions = []
        for line in text.split("\n"):
            if "|" not in line:
                continue
            fields = [part.strip() for part in line.split("|")]
            if len(fields) < 3:
                continue
            timestamp, emotion, value = fields[:3]
            if timestamp and emotion and value:
                emotions.append(EmotionPoint(
                    timestamp=timestamp,
                    emotion=emotion,
                    value=_leading_int(value),
                ))

        dominant = []
        parts = text.split("Distribution:")
        if len(parts) > 1:
            for match in _DISTRIBUTION_RE.finditer(parts[1]):
                dominant.append(DominantEmotion(
                    emotion=match.group(1),
                    percentage=int(match.group(2)),
                ))

        return EmotionAnalysis(emotions=emotions, dominant_emotions=dominant)
    except Exception as e:
        logger.error(f"Error parsing emotions: {e}")
        return EmotionAnalysis()


def extract_bullet_points(text: str) -> List[str]:
    """Strip -, • or * markers and drop blank lines."""
    return [
        stripped for stripped in
        (_BULLET_RE.sub("", line).strip() for line in text.split("\n"))
        if stripped
    ]


def parse_manual_report(text: str) -> ProgressReport:
    """
    Parse a numbered free-form report (1. summary ... 5. recommendations).

    Section 2 (emotional journey) is not mapped onto the record.
    """
    try:
        sections = [s for s in re.split(r"\d\.", text) if s]

        def section(index: int) -> str:
            return sections[index] if len(sections) > index else ""

        return ProgressReport(
            session_summary=section(0).strip(),
            improvements=Improvements(
                strengths=extract_bullet_points(section(2)),
                challenges=extract_bullet_points(section(3)),
                recommendations=extract_bullet_points(section(4)),
            ),
        )
    except Exception as e:
        logger.error(f"Error parsing manual report: {e}")
        return ProgressReport()
