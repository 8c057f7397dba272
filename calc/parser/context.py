"""
Operator and function registry.

A Context owns three append-only tables: unary operators, binary operators
and named functions. Tree nodes refer to table entries by integer handle, so
a handle stays valid for as long as its Context lives.

Precedence is "lower binds weaker": the binary-operator scan splits an
expression at the operator with the numerically lowest precedence.

Default table:

    =                    5   right   (assignment, no function)
    == != < <= > >=     10   left
    + -                 20   left
    ^                   30   right
    * /                 40   left

Note that ^ binds weaker than * and /, so "2 * 10 ^ 3" is (2*10)^3.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from pathlib import Path
from typing import Callable, Sequence

import yaml

from ..core.errors import ArityError, ConfigurationError

UnaryFunction = Callable[[float], float]
BinaryFunction = Callable[[float, float], float]
VariadicFunction = Callable[[Sequence[float]], float]


class Associativity(Enum):
    """Operator associativity."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class UnaryOperatorInfo:
    """A prefix operator such as unary minus."""

    symbol: str
    function: UnaryFunction


@dataclass(frozen=True)
class BinaryOperatorInfo:
    """
    An infix operator.

    A missing function marks the assignment operator.
    """

    symbol: str
    precedence: int
    associativity: Associativity
    function: BinaryFunction | None = None

    @property
    def is_assignment(self) -> bool:
        return self.function is None


@dataclass(frozen=True)
class FunctionInfo:
    """A named function taking a sequence of arguments."""

    name: str
    function: VariadicFunction


# Builtin implementations (IEEE double semantics, no Python exceptions)


def _divide(x: float, y: float) -> float:
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def _power(x: float, y: float) -> float:
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and float(y).is_integer() and int(y) % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative is a pole, everything else here is a domain error
        return math.inf if x == 0 else math.nan


def _compare(predicate: Callable[[float, float], bool]) -> BinaryFunction:
    return lambda x, y: 1.0 if predicate(x, y) else 0.0


def _sum(args: Sequence[float]) -> float:
    return reduce(operator.add, args, 0.0)


def _sin(args: Sequence[float]) -> float:
    x = args[0]
    return math.sin(x) if math.isfinite(x) else math.nan


def _cos(args: Sequence[float]) -> float:
    x = args[0]
    return math.cos(x) if math.isfinite(x) else math.nan


def _sqrt(args: Sequence[float]) -> float:
    x = args[0]
    return math.sqrt(x) if x >= 0 else math.nan


def _max(args: Sequence[float]) -> float:
    if not args:
        raise ArityError("max", 0)
    return max(args)


def _min(args: Sequence[float]) -> float:
    if not args:
        raise ArityError("min", 0)
    return min(args)


UNARY_OPERATIONS: dict[str, UnaryFunction] = {
    "identity": lambda x: x,
    "negate": operator.neg,
}

BINARY_OPERATIONS: dict[str, BinaryFunction] = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": _divide,
    "power": _power,
    "equal": _compare(operator.eq),
    "not_equal": _compare(operator.ne),
    "less": _compare(operator.lt),
    "less_equal": _compare(operator.le),
    "greater": _compare(operator.gt),
    "greater_equal": _compare(operator.ge),
}

BUILTIN_FUNCTIONS: dict[str, VariadicFunction] = {
    "sum": _sum,
    "sin": _sin,
    "cos": _cos,
    "max": _max,
    "min": _min,
    "sqrt": _sqrt,
}


class Context:
    """
    Registry of operators and functions used by a Parser.

    Attributes:
        name: Registry name (e.g., "Default")
    """

    def __init__(self, name: str = "Default"):
        self.name = name
        self._unary_operators: list[UnaryOperatorInfo] = []
        self._binary_operators: list[BinaryOperatorInfo] = []
        self._functions: list[FunctionInfo] = []

    @classmethod
    def default(cls) -> "Context":
        """Create the standard calculator registry."""
        context = cls(name="Default")

        context.add_binary_operator("==", 10, Associativity.LEFT, BINARY_OPERATIONS["equal"])
        context.add_binary_operator("!=", 10, Associativity.LEFT, BINARY_OPERATIONS["not_equal"])
        context.add_binary_operator("<", 10, Associativity.LEFT, BINARY_OPERATIONS["less"])
        context.add_binary_operator("<=", 10, Associativity.LEFT, BINARY_OPERATIONS["less_equal"])
        context.add_binary_operator(">", 10, Associativity.LEFT, BINARY_OPERATIONS["greater"])
        context.add_binary_operator(">=", 10, Associativity.LEFT, BINARY_OPERATIONS["greater_equal"])
        context.add_binary_operator("+", 20, Associativity.LEFT, BINARY_OPERATIONS["add"])
        context.add_binary_operator("-", 20, Associativity.LEFT, BINARY_OPERATIONS["subtract"])
        context.add_binary_operator("*", 40, Associativity.LEFT, BINARY_OPERATIONS["multiply"])
        context.add_binary_operator("/", 40, Associativity.LEFT, BINARY_OPERATIONS["divide"])
        context.add_binary_operator("^", 30, Associativity.RIGHT, BINARY_OPERATIONS["power"])
        context.add_binary_operator("=", 5, Associativity.RIGHT)

        context.add_unary_operator("+", UNARY_OPERATIONS["identity"])
        context.add_unary_operator("-", UNARY_OPERATIONS["negate"])

        for name, function in BUILTIN_FUNCTIONS.items():
            context.register_function(name, function)

        return context

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Context":
        """
        Load a registry from a YAML file.

        Operations are referenced by builtin name:

            name: Minimal
            binary_operators:
              - {symbol: "+", precedence: 20, associativity: left, operation: add}
              - {symbol: "=", precedence: 5, associativity: right, assignment: true}
            unary_operators:
              - {symbol: "-", operation: negate}
            functions:
              - sum
              - {name: root, builtin: sqrt}

        Args:
            path: Path to YAML configuration file

        Returns:
            Context instance

        Raises:
            ConfigurationError: For invalid YAML, unknown operations or malformed entries
        """
        source = str(path)
        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML: {exc}", source) from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Registry file must contain a mapping", source)

        context = cls(name=data.get("name", Path(path).stem))

        try:
            for op_data in data.get("binary_operators", []):
                _require_mapping(op_data, "binary operator", source)
                function = None
                if not op_data.get("assignment", False):
                    function = _lookup(BINARY_OPERATIONS, op_data["operation"], source)
                context.add_binary_operator(
                    op_data["symbol"],
                    int(op_data["precedence"]),
                    Associativity(op_data.get("associativity", "left")),
                    function,
                )

            for op_data in data.get("unary_operators", []):
                _require_mapping(op_data, "unary operator", source)
                context.add_unary_operator(
                    op_data["symbol"],
                    _lookup(UNARY_OPERATIONS, op_data["operation"], source),
                )

            for func_data in data.get("functions", []):
                if isinstance(func_data, str):
                    name, builtin = func_data, func_data
                else:
                    _require_mapping(func_data, "function", source)
                    name = func_data["name"]
                    builtin = func_data.get("builtin", name)
                context.register_function(name, _lookup(BUILTIN_FUNCTIONS, builtin, source))
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Malformed registry entry: {exc}", source) from exc

        return context

    # Registration (append-only: existing handles never move)

    def add_unary_operator(self, symbol: str, function: UnaryFunction) -> int:
        self._unary_operators.append(UnaryOperatorInfo(symbol, function))
        return len(self._unary_operators) - 1

    def add_binary_operator(
        self,
        symbol: str,
        precedence: int,
        associativity: Associativity,
        function: BinaryFunction | None = None,
    ) -> int:
        self._binary_operators.append(
            BinaryOperatorInfo(symbol, precedence, associativity, function)
        )
        return len(self._binary_operators) - 1

    def register_function(self, name: str, function: VariadicFunction) -> int:
        """
        Append a named function.

        Names are not deduplicated; lookup scans front to back, so the first
        registration of a name wins.
        """
        self._functions.append(FunctionInfo(name, function))
        return len(self._functions) - 1

    # Lookup

    @property
    def unary_operators(self) -> tuple[UnaryOperatorInfo, ...]:
        return tuple(self._unary_operators)

    @property
    def binary_operators(self) -> tuple[BinaryOperatorInfo, ...]:
        return tuple(self._binary_operators)

    @property
    def functions(self) -> tuple[FunctionInfo, ...]:
        return tuple(self._functions)

    def unary_operator(self, handle: int) -> UnaryOperatorInfo:
        return self._unary_operators[handle]

    def binary_operator(self, handle: int) -> BinaryOperatorInfo:
        return self._binary_operators[handle]

    def function(self, handle: int) -> FunctionInfo:
        return self._functions[handle]

    def find_function(self, name: str, start: int = 0, end: int | None = None) -> int | None:
        """
        Find the handle of the first function called name[start:end].

        Returns:
            Function handle, or None when no function has that name
        """
        if end is None:
            end = len(name)
        length = end - start
        for handle, info in enumerate(self._functions):
            if len(info.name) == length and name.startswith(info.name, start, end):
                return handle
        return None

    def is_unary_symbol(self, symbol: str) -> bool:
        return any(info.symbol == symbol for info in self._unary_operators)

    def operator_characters(self) -> frozenset[str]:
        """Every character that occurs in a binary operator symbol."""
        return frozenset("".join(info.symbol for info in self._binary_operators))


def _lookup(table: dict, name: str, source: str):
    try:
        return table[name]
    except KeyError:
        raise ConfigurationError(f"Unknown operation '{name}'", source) from None


def _require_mapping(entry, kind: str, source: str) -> None:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Each {kind} entry must be a mapping, got {entry!r}", source)
