"""
Interactive calculator session: environment, history, console and CLI.
"""

from .environment import default_environment, load_constants
from .history import History, HistoryEntry
from .session import Session
from .cli import Console, main

__all__ = [
    "default_environment",
    "load_constants",
    "History",
    "HistoryEntry",
    "Session",
    "Console",
    "main",
]
