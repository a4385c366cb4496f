"""In-process cache for lint reports."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import time
from typing import Callable, Dict, Iterable, Optional

from ..linter import LintReport

DEFAULT_TTL_SECONDS = 10 * 60


def document_key(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


@dataclass
class _Entry:
    signature: str
    report: LintReport
    stored_at: float


class LintCache:
    """Stores lint reports keyed by document hash and rule registry signature.

    Entries expire a fixed time after they were stored; expiry is checked on
    read and nothing is written to disk.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, text: str, *, signature: str) -> Optional[LintReport]:
        key = document_key(text)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self._ttl:
            self._entries.pop(key, None)
            return None
        if entry.signature != signature:
            return None
        return entry.report

    def store(self, text: str, *, signature: str, report: LintReport) -> None:
        self.prune()
        self._entries[document_key(text)] = _Entry(
            signature=signature, report=report, stored_at=self._clock()
        )

    def prune(self, keys_to_keep: Optional[Iterable[str]] = None) -> None:
        """Drop expired entries, and entries not listed in `keys_to_keep`."""
        now = self._clock()
        keep = set(keys_to_keep) if keys_to_keep is not None else None
        for key in list(self._entries):
            entry = self._entries[key]
            if now - entry.stored_at >= self._ttl or (keep is not None and key not in keep):
                del self._entries[key]


__all__ = ["DEFAULT_TTL_SECONDS", "LintCache", "document_key"]
