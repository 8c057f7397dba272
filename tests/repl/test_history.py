"""Tests for the bounded history."""

import pytest
from pydantic import ValidationError

from calc.repl import History, HistoryEntry


class TestHistory:
    """Test History ordering and bounds."""

    def test_newest_first(self):
        history = History(3)
        history.push("1", 1.0)
        history.push("2", 2.0)
        assert [entry.expression for entry in history] == ["2", "1"]

    def test_drops_oldest_when_full(self):
        history = History(2)
        for value in range(4):
            history.push(str(value), float(value))
        assert len(history) == 2
        assert history.entries == [
            HistoryEntry(expression="3", result=3.0),
            HistoryEntry(expression="2", result=2.0),
        ]

    def test_clear(self):
        history = History()
        history.push("x", 1.0)
        history.clear()
        assert len(history) == 0

    def test_size_must_be_positive(self):
        with pytest.raises(ValueError):
            History(0)


class TestHistoryEntry:
    """Test the entry model."""

    def test_frozen(self):
        entry = HistoryEntry(expression="1 + 1", result=2.0)
        with pytest.raises(ValidationError):
            entry.result = 3.0

    def test_result_coerced_to_float(self):
        assert HistoryEntry(expression="2", result=2).result == 2.0
