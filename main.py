#!/usr/bin/env python3
"""
Progress Engine - Main Runner

Local runner for trying the progress tracker against a sample
therapy conversation and inspecting the stored history.

Usage:
    python main.py demo          # End a session on mock data and print the record
    python main.py history       # List stored progress records
    python main.py clear         # Empty the stored history
"""

import json
import asyncio
import logging
import argparse
from pathlib import Path
from typing import List

from progress_engine.config import PROGRESS_STORE_DIR
from progress_engine.models import Message, ProgressRecord
from progress_engine.store import FileStorage, ProgressHistoryStore
from progress_engine.tracker import ProgressTracker

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_DATA = Path(__file__).parent / "mock_data" / "sample_session.json"


def load_messages(path: Path) -> List[Message]:
    """Load a conversation from a JSON array of {text, timestamp, isUser}."""
    with open(path, "r", encoding="utf-8") as f:
        return [Message.model_validate(item) for item in json.load(f)]


def print_header(text: str):
    """Print a formatted header."""
    print("\n" + "=" * 60)
    print(f"  {text}")
    print("=" * 60)


def print_section(text: str):
    """Print a formatted section header."""
    print(f"\n--- {text} ---")


def print_record(record: ProgressRecord):
    print_section("Summary")
    print(record.session_summary)

    print_section("Goals")
    for goal in record.goals:
        print(f"  {goal.goal}: {goal.progress}% ({goal.status.value})")

    print_section("Improvements")
    for label, items in [
        ("Strengths", record.improvements.strengths),
        ("Challenges", record.improvements.challenges),
        ("Recommendations", record.improvements.recommendations),
    ]:
        print(f"  {label}: {', '.join(items) or '-'}")

    print_section("Emotional Journey")
    journey = record.emotional_journey
    print(f"  Emotions tracked: {len(journey.emotions)}")
    for dominant in journey.dominant_emotions:
        print(f"  {dominant.emotion}: {dominant.percentage}%")
    print(f"  Engagement: {journey.engagement_level}")


async def run_demo(api_key: str, data_path: Path):
    print_header("Progress Engine Demo - End of Session Analysis")

    messages = load_messages(data_path)
    print(f"\nLoaded {len(messages)} messages from {data_path.name}")

    tracker = ProgressTracker(api_key=api_key)
    record = await tracker.end_session(messages)
    print_record(record)


async def run_history():
    print_header("Stored Progress History")
    store = ProgressHistoryStore(FileStorage(PROGRESS_STORE_DIR))
    records = await store.history()
    if not records:
        print("\nNo progress records stored yet.")
        return
    for i, record in enumerate(records, 1):
        print(f"{i:>3}. {record.timestamp}  goals={len(record.goals)}  "
              f"engagement={record.emotional_journey.engagement_level}")


async def run_clear():
    store = ProgressHistoryStore(FileStorage(PROGRESS_STORE_DIR))
    await store.clear()
    print("Progress history cleared.")


def main():
    parser = argparse.ArgumentParser(description="Therapy progress tracking runner")
    parser.add_argument("command", choices=["demo", "history", "clear"])
    parser.add_argument("--api-key", default=None, help="Gemini API key (defaults to GEMINI_API_KEY)")
    parser.add_argument("--data", type=Path, default=DEFAULT_DATA, help="Conversation JSON file")
    args = parser.parse_args()

    if args.command == "demo":
        asyncio.run(run_demo(args.api_key, args.data))
    elif args.command == "history":
        asyncio.run(run_history())
    elif args.command == "clear":
        asyncio.run(run_clear())


if __name__ == "__main__":
    main()
