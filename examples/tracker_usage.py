"""
Progress Tracker Usage Examples

This file demonstrates how to use the progress engine with Gemini,
and how to choose your own fallback using explicit analysis results.
"""

import os
import asyncio

from progress_engine import (
    MemoryStorage,
    Message,
    ProgressHistoryStore,
    ProgressTracker,
)


def build_tracker() -> ProgressTracker:
    """Tracker with an in-memory history (nothing written to disk)."""

    # Set API key (or set GEMINI_API_KEY environment variable)
    api_key = os.getenv('GEMINI_API_KEY') or "your-api-key-here"

    store = ProgressHistoryStore(MemoryStorage())
    return ProgressTracker(api_key=api_key, store=store)


async def demonstrate_session_end():
    """Two sessions in a row: the second merges goals from the first."""

    tracker = build_tracker()

    first = [
        Message(text="I want to sleep better.", timestamp="2026-10-05T18:00:00Z", is_user=True),
        Message(text="What gets in the way?", timestamp="2026-10-05T18:00:30Z", is_user=False),
        Message(text="Checking email in bed.", timestamp="2026-10-05T18:01:00Z", is_user=True),
    ]
    second = [
        Message(text="I slept seven hours four nights this week.", timestamp="2026-10-12T18:00:00Z", is_user=True),
        Message(text="That's great progress.", timestamp="2026-10-12T18:00:30Z", is_user=False),
        Message(text="I also started walking after work.", timestamp="2026-10-12T18:01:00Z", is_user=True),
    ]

    await tracker.end_session(first)
    record = await tracker.end_session(second)

    print("=== Goals after two sessions ===")
    for goal in record.goals:
        print(f"{goal.goal}: {goal.progress}% ({goal.status.value})")

    history = await tracker.get_progress_history()
    print(f"Records stored: {len(history)}")


async def demonstrate_explicit_results():
    """Handle a failed analysis yourself instead of taking the default."""

    tracker = build_tracker()
    messages = [Message(text="I feel calmer today.", timestamp="2026-10-12T18:00:00Z", is_user=True)]

    result = await tracker.analyzer.run_engagement(messages)
    if result.ok:
        print(f"Engagement: {result.value}")
    else:
        print(f"Engagement unavailable ({result.error}), skipping chart")


if __name__ == "__main__":
    asyncio.run(demonstrate_session_end())
    asyncio.run(demonstrate_explicit_results())
