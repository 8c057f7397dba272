"""Tests for Session and environment seeding."""

import logging
import math

import pytest

from calc.core.errors import (
    CannotParseError,
    ConfigurationError,
    ExpressionTooDeepError,
    InvalidParenthesesError,
    UndefinedVariableError,
)
from calc.repl import Session, default_environment, load_constants


class TestEnvironment:
    """Test environment seeding."""

    def test_default_has_pi(self):
        assert default_environment() == {"pi": math.asin(1.0) * 2.0}
        assert default_environment()["pi"] == pytest.approx(math.pi)

    def test_defaults_are_fresh(self):
        first = default_environment()
        first["x"] = 1.0
        assert "x" not in default_environment()

    def test_load_constants(self, tmp_path):
        path = tmp_path / "constants.yaml"
        path.write_text("constants:\n  g: 9.81\n  e: 2.718281828459045\n")
        assert load_constants(path) == {"g": 9.81, "e": 2.718281828459045}

    def test_empty_constants_file(self, tmp_path):
        path = tmp_path / "constants.yaml"
        path.write_text("")
        assert load_constants(path) == {}

    @pytest.mark.parametrize(
        "content",
        [
            "constants:\n  g1: 9.81\n",
            "constants:\n  g: fast\n",
            "values:\n  g: 1\n",
            "constants: {g: 9.81\n",
            "constants:\n\tg: 1\n",
        ],
    )
    def test_invalid_constants(self, tmp_path, content):
        path = tmp_path / "constants.yaml"
        path.write_text(content)
        with pytest.raises(ConfigurationError):
            load_constants(path)


class TestSession:
    """Test evaluating lines through a session."""

    def test_result_stored_as_ans(self, session):
        assert session.evaluate("2 * 21") == 42
        assert session.environment["ans"] == 42
        assert session.evaluate("ans / 2") == 21

    def test_pi_available(self, session):
        assert session.evaluate("cos(pi)") == pytest.approx(-1.0)

    def test_history_records_lines(self, session):
        session.evaluate("1 + 1")
        session.evaluate("x = 3")
        assert [(e.expression, e.result) for e in session.history] == [("x = 3", 3.0), ("1 + 1", 2.0)]

    def test_history_is_bounded(self, session):
        for value in range(5):
            session.evaluate(str(value))
        assert [e.result for e in session.history] == [4.0, 3.0, 2.0]

    def test_cannot_parse(self, session):
        with pytest.raises(CannotParseError):
            session.evaluate("1 +")
        assert len(session.history) == 0
        assert "ans" not in session.environment

    def test_invalid_parentheses(self, session):
        with pytest.raises(InvalidParenthesesError):
            session.evaluate("(1")

    def test_failure_keeps_previous_answer(self, session):
        session.evaluate("5")
        with pytest.raises(UndefinedVariableError):
            session.evaluate("nope")
        assert session.environment["ans"] == 5

    def test_variables_sorted(self, session):
        session.evaluate("b = 2")
        session.evaluate("a = 1")
        assert [name for name, _ in session.variables()] == ["a", "ans", "b", "pi"]

    def test_tree(self, session):
        assert session.tree("x = 1") == "x\n  1\n"
        assert "x" not in session.environment

    def test_custom_answer_name(self):
        session = Session(answer_name="last", environment={})
        session.evaluate("7")
        assert session.environment == {"last": 7}

    def test_zero_history_size_rejected(self):
        with pytest.raises(ValueError):
            Session(history_size=0)

    def test_deep_expression_is_a_parse_error(self, session):
        with pytest.raises(ExpressionTooDeepError):
            session.evaluate(" + ".join(["1"] * 1000))
        assert len(session.history) == 0
        assert session.evaluate("1 + 1") == 2

    def test_deep_expression_tree(self, session):
        with pytest.raises(ExpressionTooDeepError):
            session.tree(" + ".join(["1"] * 1000))

    def test_failures_logged_at_info(self, session, caplog):
        caplog.set_level(logging.INFO, logger="calc")
        with pytest.raises(UndefinedVariableError):
            session.evaluate("nope")
        failures = [record for record in caplog.records if record.getMessage() == "Expression failed"]
        assert [record.levelno for record in failures] == [logging.INFO]
        assert failures[0].extra_data["expression"] == "nope"
        assert failures[0].extra_data["component"] == "session"
