"""
Tests for Progress History Store

Tests forgiving reads, the 50-record cap and retried writes.
"""

import asyncio
import json
import pytest
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from progress_engine.errors import ProgressSaveError
from progress_engine.models import Goal, ProgressRecord
from progress_engine.store import FileStorage, MemoryStorage, ProgressHistoryStore


def record(summary: str) -> ProgressRecord:
    """Minimal valid record with one goal."""
    return ProgressRecord(session_summary=summary, goals=[Goal(goal="Sleep better", progress=10)])


class FlakyStorage(MemoryStorage):
    """Fails the first ``failures`` writes."""

    def __init__(self, failures: int):
        super().__init__()
        self.failures = failures
        self.write_attempts = 0

    def set(self, key, value):
        self.write_attempts += 1
        if self.write_attempts <= self.failures:
            raise OSError("disk full")
        super().set(key, value)


class BrokenReadStorage(MemoryStorage):
    """Every read raises."""

    def get(self, key):
        raise OSError("unreadable")


class TestHistoryReads:
    """Test cases for forgiving history reads."""

    def test_missing_key_is_empty(self, store):
        """Nothing stored yet means an empty history and no latest record."""
        assert asyncio.run(store.history()) == []
        assert asyncio.run(store.latest()) is None

    def test_non_list_payload_is_empty(self, storage, store):
        """A stored object instead of a list reads as empty."""
        storage.set("therapy-progress", json.dumps({"sessionSummary": "x"}))

        assert asyncio.run(store.history()) == []

    def test_bad_json_is_empty(self, storage, store):
        """Malformed JSON reads as empty."""
        storage.set("therapy-progress", "{not json")

        assert asyncio.run(store.history()) == []

    def test_read_failure_is_empty(self):
        """A storage error on read is logged, not raised."""
        store = ProgressHistoryStore(BrokenReadStorage())

        assert asyncio.run(store.history()) == []

    def test_invalid_entries_dropped(self, storage, store):
        """Entries failing the shape check are skipped."""
        good = record("good").to_dict()
        storage.set("therapy-progress", json.dumps([good, {"sessionSummary": 3}, "junk", good]))

        history = asyncio.run(store.history())

        assert [r.session_summary for r in history] == ["good", "good"]


class TestHistoryWrites:
    """Test cases for appending, eviction and retried writes."""

    def test_save_and_latest(self, store):
        """Records come back oldest first; latest is the last one."""
        asyncio.run(store.save(record("first")))
        asyncio.run(store.save(record("second")))

        assert [r.session_summary for r in asyncio.run(store.history())] == ["first", "second"]
        assert asyncio.run(store.latest()).session_summary == "second"

    def test_stored_as_camel_case_json(self, storage, store):
        """Stored payload uses camelCase keys and status strings."""
        asyncio.run(store.save(record("first")))

        payload = json.loads(storage.get("therapy-progress"))
        assert payload[0]["sessionSummary"] == "first"
        assert payload[0]["goals"][0]["status"] == "in-progress"

    def test_capacity_evicts_oldest(self, store):
        """The 51st save evicts the first record."""
        async def fill():
            for i in range(51):
                await store.save(record(f"session {i}"))
            return await store.history()

        history = asyncio.run(fill())

        assert len(history) == 50
        assert history[0].session_summary == "session 1"
        assert history[-1].session_summary == "session 50"

    def test_custom_capacity(self, storage):
        """A smaller capacity keeps only the newest records."""
        store = ProgressHistoryStore(storage, capacity=2, retry_delay=0)

        async def fill():
            for i in range(3):
                await store.save(record(f"s{i}"))
            return await store.history()

        assert [r.session_summary for r in asyncio.run(fill())] == ["s1", "s2"]

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_rejected(self, storage, capacity):
        """A store that could never keep a record is refused up front."""
        with pytest.raises(ValueError):
            ProgressHistoryStore(storage, capacity=capacity)

    def test_capacity_of_one_keeps_newest(self, storage):
        """Capacity 1 keeps exactly the last saved record."""
        store = ProgressHistoryStore(storage, capacity=1, retry_delay=0)

        async def fill():
            for i in range(3):
                await store.save(record(f"s{i}"))
            return await store.history()

        assert [r.session_summary for r in asyncio.run(fill())] == ["s2"]

    def test_write_retried(self):
        """Transient write errors are retried until one succeeds."""
        storage = FlakyStorage(failures=2)
        store = ProgressHistoryStore(storage, retry_delay=0)

        asyncio.run(store.save(record("kept")))

        assert storage.write_attempts == 3
        assert asyncio.run(store.latest()).session_summary == "kept"

    def test_write_failure_after_retries(self):
        """One attempt plus three retries, then ProgressSaveError."""
        storage = FlakyStorage(failures=10)
        store = ProgressHistoryStore(storage, retries=3, retry_delay=0)

        with pytest.raises(ProgressSaveError, match="Failed to save progress data"):
            asyncio.run(store.save(record("lost")))

        assert storage.write_attempts == 4

    def test_clear(self, store):
        """Clear empties the history."""
        asyncio.run(store.save(record("first")))
        asyncio.run(store.clear())

        assert asyncio.run(store.history()) == []


class TestFileStorage:
    """Test cases for the directory-backed storage."""

    def test_round_trip(self, tmp_path):
        """A value written under a key reads back from its JSON file."""
        storage = FileStorage(str(tmp_path / "store"))

        assert storage.get("therapy-progress") is None
        storage.set("therapy-progress", "[]")

        assert storage.get("therapy-progress") == "[]"
        assert (tmp_path / "store" / "therapy-progress.json").exists()

    def test_history_persists_across_instances(self, tmp_path):
        """A second store over the same directory sees earlier saves."""
        directory = str(tmp_path / "store")
        asyncio.run(ProgressHistoryStore(FileStorage(directory)).save(record("saved")))

        history = asyncio.run(ProgressHistoryStore(FileStorage(directory)).history())

        assert [r.session_summary for r in history] == ["saved"]

    def test_directory_created_on_first_write(self, tmp_path):
        """Building the storage touches nothing; the first write creates the directory."""
        directory = tmp_path / "store"
        storage = FileStorage(str(directory))

        assert not directory.exists()
        assert storage.get("therapy-progress") is None
        assert not directory.exists()

        storage.set("therapy-progress", "[]")

        assert (directory / "therapy-progress.json").exists()
