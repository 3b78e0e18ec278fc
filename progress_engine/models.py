"""
Progress Record Models

Pydantic models for session progress records and the intermediate
results produced by each analysis. Attributes are snake_case; the
stored JSON uses camelCase keys (sessionSummary, emotionalJourney, ...).
"""

from enum import Enum
from typing import Any, Dict, List
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel


class GoalStatus(str, Enum):
    """Goal completion status, always derived from progress."""
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    ACHIEVED = "achieved"


def determine_goal_status(progress: int) -> GoalStatus:
    """Map a progress percentage to its status."""
    if progress >= 100:
        return GoalStatus.ACHIEVED
    if progress > 0:
        return GoalStatus.IN_PROGRESS
    return GoalStatus.NOT_STARTED


def clamp_progress(value: int) -> int:
    return max(0, min(100, int(value)))


def coerce_progress(value) -> int:
    """Clamp for validators; non-numeric input becomes a validation error."""
    try:
        return clamp_progress(value)
    except TypeError:
        raise ValueError(f"progress must be a number, got {value!r}")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class Message(CamelModel):
    """A chat message produced by the UI (read-only input)."""
    text: str
    timestamp: str = ""
    is_user: bool


class Goal(CamelModel):
    """A therapy goal with its progress; status follows progress."""
    goal: str = Field(min_length=1)
    progress: int = 0
    status: GoalStatus = GoalStatus.NOT_STARTED

    @field_validator("progress", mode="before")
    @classmethod
    def clamp(cls, value):
        return coerce_progress(value)

    @model_validator(mode="after")
    def derive_status(self):
        self.status = determine_goal_status(self.progress)
        return self


class GoalDetail(CamelModel):
    """Goal as extracted by the goal-list analysis."""
    title: str
    description: str
    progress: int = 0
    status: GoalStatus = GoalStatus.NOT_STARTED

    @field_validator("progress", mode="before")
    @classmethod
    def clamp(cls, value):
        return coerce_progress(value)


class Improvements(CamelModel):
    strengths: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class EmotionPoint(CamelModel):
    timestamp: str
    value: int
    emotion: str


class DominantEmotion(CamelModel):
    emotion: str
    percentage: int


class EmotionAnalysis(CamelModel):
    """Per-message emotions plus the dominant-emotion distribution."""
    emotions: List[EmotionPoint] = Field(default_factory=list)
    dominant_emotions: List[DominantEmotion] = Field(default_factory=list)


class EmotionalJourney(CamelModel):
    emotions: List[EmotionPoint] = Field(default_factory=list)
    dominant_emotions: List[DominantEmotion] = Field(default_factory=list)
    # participation, emotional depth, self-reflection, progress, openness
    engagement_level: List[int] = Field(default_factory=list)


class SessionAnalysis(CamelModel):
    """Holistic read of a session: state, topics and insights."""
    emotional_state: str = ""
    key_topics: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)


class ProgressReport(CamelModel):
    """Partial record parsed from a single progress-report reply."""
    session_summary: str = ""
    goals: List[Goal] = Field(default_factory=list)
    improvements: Improvements = Field(default_factory=Improvements)


class ProgressRecord(CamelModel):
    """Aggregate per-session snapshot persisted in the history store."""
    session_summary: str
    goals: List[Goal] = Field(default_factory=list)
    improvements: Improvements = Field(default_factory=Improvements)
    timestamp: str = Field(default_factory=utc_now_iso)
    emotional_journey: EmotionalJourney = Field(default_factory=EmotionalJourney)


def is_valid_progress_record(data: Any) -> bool:
    """
    Shape check for a serialized progress record.

    All required keys must be present with the right container types;
    the nested values are then validated by ProgressRecord.
    """
    if not isinstance(data, dict):
        return False
    improvements = data.get("improvements")
    journey = data.get("emotionalJourney")
    shape_ok = (
        isinstance(data.get("sessionSummary"), str) and
        isinstance(data.get("goals"), list) and
        isinstance(improvements, dict) and
        isinstance(data.get("timestamp"), str) and
        isinstance(journey, dict)
    )
    if not shape_ok:
        return False
    if not all(isinstance(improvements.get(k), list)
               for k in ("strengths", "challenges", "recommendations")):
        return False
    if not all(isinstance(journey.get(k), list)
               for k in ("emotions", "dominantEmotions", "engagementLevel")):
        return False
    try:
        ProgressRecord.model_validate(data)
    except ValidationError:
        return False
    return True
