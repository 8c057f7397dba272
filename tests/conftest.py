"""
Shared pytest fixtures for the calculator tests.

This module provides:
- A default parser and a fresh environment per test
- An evaluate helper that parses and evaluates in one call
- A session wired to in-memory settings
- A reset of the "calc" log handlers after every test
"""

import logging

import pytest

from calc.parser import Parser
from calc.repl import Session


@pytest.fixture
def parser() -> Parser:
    """Parser over the default registry."""
    return Parser()


@pytest.fixture
def environment() -> dict[str, float]:
    """Empty environment, mutated by assignments."""
    return {}


@pytest.fixture
def evaluate(parser, environment):
    """Parse and evaluate an expression against the test environment."""
    def _evaluate(text: str) -> float:
        node = parser.parse(text)
        assert node is not None, f"'{text}' did not parse"
        return parser.evaluate(node, environment)
    return _evaluate


@pytest.fixture
def render(parser):
    """Parse an expression and return its printed tree."""
    def _render(text: str, indent: int = 0) -> str:
        node = parser.parse(text)
        assert node is not None, f"'{text}' did not parse"
        return parser.render(node, indent)
    return _render


@pytest.fixture
def session(parser) -> Session:
    """Session with the default constants and a small history."""
    return Session(parser=parser, history_size=3, answer_name="ans")


@pytest.fixture(autouse=True)
def reset_calc_logging():
    """Drop handlers installed by setup_logging so they never outlive a captured stream."""
    yield
    logger = logging.getLogger("calc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
