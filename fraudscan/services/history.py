"""
Scan History
Bounded in-memory list of recent analysis results, owned by the caller.
Nothing is persisted; restarting the process clears it.
"""

import logging
import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from fraudscan.core.config import settings
from fraudscan.core.scoring import AnalysisResult

logger = logging.getLogger(__name__)


@dataclass
class HistoryEntry:
    """One remembered analysis"""
    id: str
    type: str  # "email" or "url"
    truncated_content: str
    result: AnalysisResult
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def truncate_content(content: str, length: int) -> str:
    """First `length` characters, with an ellipsis if anything was cut"""
    content = content or ""
    if len(content) <= length:
        return content
    return content[:length] + "..."


class ScanHistory:
    """Thread-safe ring buffer of the most recent results"""

    def __init__(self, max_entries: Optional[int] = None, preview_length: Optional[int] = None):
        self.max_entries = settings.HISTORY_SIZE if max_entries is None else max_entries
        self.preview_length = settings.HISTORY_PREVIEW_LENGTH if preview_length is None else preview_length
        self._entries: deque = deque(maxlen=self.max_entries)
        self._lock = threading.Lock()

    def add(self, kind: str, content: str, result: AnalysisResult) -> HistoryEntry:
        """Record a result; the oldest entry is dropped once the buffer is full"""
        entry = HistoryEntry(
            id=uuid.uuid4().hex,
            type=kind,
            truncated_content=truncate_content(content, self.preview_length),
            result=result,
        )
        with self._lock:
            self._entries.append(entry)
        logger.debug(f"History: recorded {kind} result {entry.id} ({result.level.value})")
        return entry

    def list(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        """Newest entries first"""
        with self._lock:
            entries = list(reversed(self._entries))
        if limit is not None:
            entries = entries[:limit]
        return entries

    def clear(self) -> int:
        """Drop every entry; returns how many were removed"""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info(f"History cleared ({removed} entries)")
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Singleton instance
_history: Optional[ScanHistory] = None


def get_scan_history() -> ScanHistory:
    """Get or create the process-wide history"""
    global _history
    if _history is None:
        _history = ScanHistory()
    return _history
