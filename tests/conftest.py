"""
Shared fixtures: a scripted text model, sample messages and an
in-memory history store.
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from progress_engine.models import Message
from progress_engine.store import MemoryStorage, ProgressHistoryStore


# Marker text that identifies each prompt type
PROMPT_MARKERS = {
    "emotions": "Analyze the emotional content",
    "engagement": "rate the following aspects",
    "summary": "concise summary of the key points",
    "goals": "identify the goals discussed",
    "improvements": "Key strengths demonstrated",
    "session": "provide a structured response with",
    "report": "structured progress report",
    "manual": "provide structured insights",
}

EMOTIONS_REPLY = """2026-10-12T18:00:05Z|anxious|7
2026-10-12T18:01:02Z|worried|6
2026-10-12T18:03:25Z|hopeful|5

Distribution: anxious: 50% worried: 30% hopeful: 20%"""

ENGAGEMENT_REPLY = "80,60,70,90,50"

SUMMARY_REPLY = """
1. Work deadlines are driving anxiety and poor sleep.
2. The wind-down routine helped on three nights.
"""

GOALS_REPLY = """Title: Sleep better
Description: Reach seven hours of sleep most nights
Progress: 40%
Status: in-progress

Title: Set work boundaries
Description: Leave the office on time
Progress: 0%
Status: not-started"""

IMPROVEMENTS_REPLY = """Strengths:
- Self-awareness
- Consistency with routine

Challenges:
- Work deadlines

Recommendations:
- Keep the wind-down routine
- No email after 9pm"""

SESSION_REPLY = """Emotional State: Anxious but hopeful

Key Topics:
- Work stress
- Sleep

Insights:
- Routine helps sleep"""


class ScriptedModel:
    """
    Fake text model answering each prompt type with a canned reply.

    A reply may be a string, an exception (raised), or a list consumed
    one item per call.
    """

    def __init__(self, **replies):
        self.replies = replies
        self.calls = []  # (kind, prompt)

    async def generate_content(self, prompt: str) -> str:
        kind = next(k for k, marker in PROMPT_MARKERS.items() if marker in prompt)
        self.calls.append((kind, prompt))

        reply = self.replies.get(kind, "")
        if isinstance(reply, list):
            reply = reply.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def count(self, kind: str) -> int:
        return sum(1 for k, _ in self.calls if k == kind)


class CountingStorage(MemoryStorage):
    """MemoryStorage that records every access."""

    def __init__(self, data=None):
        super().__init__(data)
        self.gets = 0
        self.sets = 0

    def get(self, key):
        self.gets += 1
        return super().get(key)

    def set(self, key, value):
        self.sets += 1
        super().set(key, value)


def full_replies(**overrides):
    replies = {
        "emotions": EMOTIONS_REPLY,
        "engagement": ENGAGEMENT_REPLY,
        "summary": SUMMARY_REPLY,
        "goals": GOALS_REPLY,
        "improvements": IMPROVEMENTS_REPLY,
        "session": SESSION_REPLY,
    }
    replies.update(overrides)
    return replies


@pytest.fixture
def messages():
    """Nine alternating user / assistant messages."""
    return [
        Message(
            text=f"message {i}",
            timestamp=f"2026-10-12T18:0{i}:00Z",
            is_user=(i % 2 == 0),
        )
        for i in range(9)
    ]


@pytest.fixture
def storage():
    return CountingStorage()


@pytest.fixture
def store(storage):
    return ProgressHistoryStore(storage, retry_delay=0)


@pytest.fixture
def model():
    return ScriptedModel(**full_replies())
