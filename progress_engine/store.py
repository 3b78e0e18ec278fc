"""
Progress History Store

Keeps the last N progress records as one JSON array under a single key
of a key-value storage port. Reads are forgiving (bad data degrades to
an empty or filtered history); writes go through the retry policy.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from .config import HISTORY_LIMIT, MAX_RETRIES, RETRY_DELAY_SECONDS, STORAGE_KEY
from .errors import ProgressSaveError
from .models import ProgressRecord, is_valid_progress_record
from .retry import retry_operation

logger = logging.getLogger(__name__)


class StoragePort(Protocol):
    """Text key-value storage."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """In-process storage, used by tests and one-off runs."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileStorage:
    """One ``<key>.json`` file per key inside a directory."""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        # Write-then-rename so a crash never leaves half a file
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)


class ProgressHistoryStore:
    """Bounded, oldest-first history of progress records."""

    def __init__(
        self,
        storage: StoragePort,
        key: str = STORAGE_KEY,
        capacity: int = HISTORY_LIMIT,
        retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY_SECONDS,
    ):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.storage = storage
        self.key = key
        self.capacity = capacity
        self.retries = retries
        self.retry_delay = retry_delay

    async def history(self) -> List[ProgressRecord]:
        """
        All stored records, oldest first.

        A missing key, unreadable storage, bad JSON or a non-list payload
        gives an empty history; malformed entries are dropped one by one.
        """
        try:
            raw = self.storage.get(self.key)
            if not raw:
                return []
            payload = json.loads(raw)
        except Exception as e:
            logger.error(f"Error getting progress history: {e}")
            return []

        if not isinstance(payload, list):
            return []

        return [
            ProgressRecord.model_validate(item)
            for item in payload
            if is_valid_progress_record(item)
        ]

    async def latest(self) -> Optional[ProgressRecord]:
        records = await self.history()
        return records[-1] if records else None

    async def save(self, record: ProgressRecord) -> None:
        """Append a record, evicting the oldest beyond capacity."""
        try:
            data = record.to_dict()
            if not is_valid_progress_record(data):
                raise ValueError("Invalid progress data format")

            existing = [r.to_dict() for r in await self.history()]
            limited = (existing + [data])[-self.capacity:]
            payload = json.dumps(limited)

            await retry_operation(
                lambda: self._write(payload),
                retries=self.retries,
                delay=self.retry_delay,
            )
        except Exception as e:
            logger.error(f"Error saving progress: {e}")
            raise ProgressSaveError("Failed to save progress data") from e

        logger.info(f"Saved progress record ({len(limited)} in history)")

    async def clear(self) -> None:
        await self._write(json.dumps([]))

    async def _write(self, payload: str) -> None:
        self.storage.set(self.key, payload)
