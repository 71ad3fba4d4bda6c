from __future__ import annotations

import threading
from typing import List

from .config import HISTORY_SIZE
from .models import ClassificationResult


class HistoryStore:
    """Newest-first log of past spam/ham results, capped at ``max_entries``.

    Lives for the process only. append/clear are serialized by a lock.
    """

    def __init__(self, max_entries: int = HISTORY_SIZE):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: List[ClassificationResult] = []
        self._lock = threading.Lock()

    def append(self, result: ClassificationResult) -> None:
        if result.is_error:
            raise ValueError("error results are not kept in history")
        with self._lock:
            self._entries.insert(0, result)
            del self._entries[self.max_entries:]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def all(self) -> List[ClassificationResult]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
