"""Bounded record of evaluated expressions, newest first."""

from collections import deque
from typing import Iterator

from pydantic import BaseModel, ConfigDict


class HistoryEntry(BaseModel):
    """One evaluated input line and its result."""

    model_config = ConfigDict(frozen=True)

    expression: str
    result: float


class History:
    """
    Keeps the last max_size entries; pushing onto a full history drops the oldest.
    """

    def __init__(self, max_size: int = 10):
        if max_size < 1:
            raise ValueError("History size must be at least 1")
        self.max_size = max_size
        self._entries: deque[HistoryEntry] = deque(maxlen=max_size)

    def push(self, expression: str, result: float) -> HistoryEntry:
        entry = HistoryEntry(expression=expression, result=result)
        self._entries.appendleft(entry)
        return entry

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
