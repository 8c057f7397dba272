"""Tests for the operator/function registry."""

import math

import pytest

from calc.core.errors import ArityError, ConfigurationError
from calc.parser import Associativity, Context, Parser


class TestDefaultContext:
    """Test the standard registry tables."""

    def test_binary_precedence_table(self):
        context = Context.default()
        table = {info.symbol: (info.precedence, info.associativity) for info in context.binary_operators}
        assert table == {
            "=": (5, Associativity.RIGHT),
            "==": (10, Associativity.LEFT),
            "!=": (10, Associativity.LEFT),
            "<": (10, Associativity.LEFT),
            "<=": (10, Associativity.LEFT),
            ">": (10, Associativity.LEFT),
            ">=": (10, Associativity.LEFT),
            "+": (20, Associativity.LEFT),
            "-": (20, Associativity.LEFT),
            "^": (30, Associativity.RIGHT),
            "*": (40, Associativity.LEFT),
            "/": (40, Associativity.LEFT),
        }

    def test_only_assignment_has_no_function(self):
        context = Context.default()
        assignments = [info.symbol for info in context.binary_operators if info.is_assignment]
        assert assignments == ["="]

    def test_unary_operators(self):
        context = Context.default()
        ops = {info.symbol: info.function for info in context.unary_operators}
        assert ops["+"](3.0) == 3.0
        assert ops["-"](3.0) == -3.0

    def test_builtin_functions(self):
        context = Context.default()
        names = [info.name for info in context.functions]
        assert names == ["sum", "sin", "cos", "max", "min", "sqrt"]

    def test_each_default_is_independent(self):
        first = Context.default()
        second = Context.default()
        first.register_function("double", lambda args: args[0] * 2)
        assert second.find_function("double") is None


class TestBuiltinFunctions:
    """Test the variadic builtin implementations."""

    def _call(self, name, *args):
        context = Context.default()
        return context.function(context.find_function(name)).function(list(args))

    def test_sum_folds_all_arguments(self):
        assert self._call("sum", 1.0, 2.0, 3.5) == 6.5

    def test_sum_of_nothing_is_zero(self):
        assert self._call("sum") == 0.0

    def test_sin_cos_read_first_argument(self):
        assert self._call("sin", 0.0, 99.0) == 0.0
        assert self._call("cos", 0.0, 99.0) == 1.0

    def test_max_min_reduce(self):
        assert self._call("max", 3.0, 9.0, -1.0) == 9.0
        assert self._call("min", 3.0, 9.0, -1.0) == -1.0

    def test_max_without_arguments(self):
        with pytest.raises(ArityError):
            self._call("max")

    def test_sqrt_of_negative_is_nan(self):
        assert math.isnan(self._call("sqrt", -4.0))
        assert self._call("sqrt", 16.0) == 4.0


class TestRegistration:
    """Test function registration and lookup."""

    def test_register_returns_handle(self):
        context = Context()
        first = context.register_function("f", lambda args: 1.0)
        second = context.register_function("g", lambda args: 2.0)
        assert (first, second) == (0, 1)
        assert context.function(second).name == "g"

    def test_duplicate_names_first_wins(self):
        context = Context()
        first = context.register_function("f", lambda args: 1.0)
        context.register_function("f", lambda args: 2.0)
        assert context.find_function("f") == first

    def test_find_function_over_span(self):
        context = Context.default()
        text = "  sqrt (4)"
        assert context.find_function(text, 2, 6) == context.find_function("sqrt")
        assert context.find_function(text, 2, 5) is None

    def test_parser_register_function(self, parser, environment):
        parser.register_function("twice", lambda args: args[0] * 2)
        node = parser.parse("twice(21)")
        assert parser.evaluate(node, environment) == 42.0

    def test_operator_characters(self):
        assert Context.default().operator_characters() == frozenset("=!<>+-^*/")


class TestContextFromYaml:
    """Test loading a registry from YAML."""

    def test_load_minimal_registry(self, tmp_path):
        path = tmp_path / "minimal.yaml"
        path.write_text(
            """
name: Minimal
binary_operators:
  - {symbol: "=", precedence: 5, associativity: right, assignment: true}
  - {symbol: "+", precedence: 20, associativity: left, operation: add}
  - {symbol: "*", precedence: 40, associativity: left, operation: multiply}
unary_operators:
  - {symbol: "-", operation: negate}
functions:
  - sum
  - {name: root, builtin: sqrt}
"""
        )
        context = Context.from_yaml(path)
        assert context.name == "Minimal"
        assert [info.symbol for info in context.binary_operators] == ["=", "+", "*"]
        assert context.binary_operators[0].is_assignment

        parser = Parser(context)
        environment = {}
        assert parser.evaluate(parser.parse("y = root(16) + -2 * 3"), environment) == -2.0
        assert environment == {"y": -2.0}
        # Subtraction is not part of this registry
        assert parser.parse("4 - 1") is None

    def test_unknown_operation(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("binary_operators:\n  - {symbol: '%', precedence: 40, operation: modulo}\n")
        with pytest.raises(ConfigurationError, match="modulo"):
            Context.from_yaml(path)

    def test_missing_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("unary_operators:\n  - {symbol: '-'}\n")
        with pytest.raises(ConfigurationError):
            Context.from_yaml(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            Context.from_yaml(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("binary_operators: [\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            Context.from_yaml(path)

    @pytest.mark.parametrize(
        "content",
        [
            "binary_operators:\n  - '+'\n",
            "unary_operators:\n  - '-'\n",
            "functions:\n  - [sin]\n",
            "binary_operators:\n  symbol: '+'\n",
        ],
    )
    def test_entries_must_be_mappings(self, tmp_path, content):
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        with pytest.raises(ConfigurationError):
            Context.from_yaml(path)
