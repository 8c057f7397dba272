"""
Recursive descent parser for calculator expressions.

There is no tokenizer. Each rule looks at a span of the raw expression string
and either builds a node or returns None; the dispatcher tries the rules in a
fixed order and keeps the first node produced:

    number → binary/assignment → unary → function call → variable

Binary operators are resolved by scanning the span for the weakest-binding
operator outside any parentheses and splitting there, then recursing into
both sides. Associativity decides which occurrence wins among equals: the
rightmost for left-associative operators, the leftmost for right-associative
ones.
"""

import re
from typing import Callable, MutableMapping, Optional

from ..core.errors import AssignmentTargetError, InvalidParenthesesError
from ..core.logging import get_logger
from .ast import (
    ASTNode,
    Assignment,
    BinaryApplication,
    FunctionCall,
    Literal,
    UnaryApplication,
    VariableRef,
)
from .context import Associativity, Context, VariadicFunction
from .scanning import is_identifier, parse_number, simplify_span, trim_span, valid_parens
from .visitors import EvalVisitor, TreePrinter

logger = get_logger("parser")

Rule = Callable[[str, int, int], Optional[ASTNode]]

# A sign right after the exponent marker of a numeric literal, as in 1e-5
_EXPONENT_MARKER = re.compile(r"\d\.?[eE]$")


class Parser:
    """
    Parser bound to one operator/function registry.

    Trees produced by a Parser refer to its Context by handle, so evaluate and
    render them through the same Parser (or the same Context).
    """

    def __init__(self, context: Context | None = None):
        """
        Initialize parser with optional context.

        Args:
            context: Operator/function registry (defaults to Context.default())
        """
        self.context = context or Context.default()
        self._rules: tuple[Rule, ...] = (
            self.parse_number,
            self.parse_binary_or_assignment,
            self.parse_unary,
            self.parse_function_call,
            self.parse_variable,
        )

    def register_function(self, name: str, function: VariadicFunction) -> int:
        """Make a function callable by name in expressions parsed from now on."""
        return self.context.register_function(name, function)

    def parse(self, expression: str) -> ASTNode | None:
        """
        Parse an expression string to an AST.

        Args:
            expression: The expression, e.g. "x = 2 * (y + 1)"

        Returns:
            Root AST node, or None when no grammar rule matches

        Raises:
            InvalidParenthesesError: If parentheses are unbalanced
            AssignmentTargetError: If '=' has something other than a name on its left
        """
        node = self.parse_expression(expression, 0, len(expression))
        if node is None:
            logger.debug("No rule matched", extra_data={"expression": expression})
        return node

    __call__ = parse

    def evaluate(self, node: ASTNode, environment: MutableMapping[str, float]) -> float:
        """Evaluate a tree produced by this parser."""
        return node.accept(EvalVisitor(environment, self.context))

    def render(self, node: ASTNode, indent: int = 0) -> str:
        """Render a tree produced by this parser as indented lines."""
        return TreePrinter(self.context, indent).render(node)

    def parse_expression(self, text: str, start: int, end: int) -> ASTNode | None:
        """
        Parse text[start:end] by trying each grammar rule in order.

        Returns:
            AST node, or None if no rule matches
        """
        if not valid_parens(text, start, end):
            raise InvalidParenthesesError(text[start:end])

        start, end = simplify_span(text, start, end)

        for rule in self._rules:
            node = rule(text, start, end)
            if node is not None:
                return node
        return None

    def parse_number(self, text: str, start: int, end: int) -> Literal | None:
        value = parse_number(text, start, end)
        if value is None:
            return None
        return Literal(value)

    def parse_variable(self, text: str, start: int, end: int) -> VariableRef | None:
        if not is_identifier(text, start, end):
            return None
        return VariableRef(text[start:end])

    def parse_unary(self, text: str, start: int, end: int) -> UnaryApplication | None:
        """First registered prefix operator whose operand parses wins."""
        for handle, info in enumerate(self.context.unary_operators):
            if not text.startswith(info.symbol, start, end):
                continue
            operand = self.parse_expression(text, start + len(info.symbol), end)
            if operand is not None:
                return UnaryApplication(handle, operand)
        return None

    def parse_binary_or_assignment(self, text: str, start: int, end: int) -> ASTNode | None:
        """
        Split at the weakest-binding operator.

        The right side is parsed first; if it fails the rule fails. With the
        assignment operator the left side must be a bare name and is never
        parsed as an expression.
        """
        found = self.find_binary_operator(text, start, end)
        if found is None:
            return None

        pos, handle = found
        info = self.context.binary_operator(handle)

        right = self.parse_expression(text, pos + len(info.symbol), end)
        if right is None:
            return None

        left_start, left_end = trim_span(text, start, pos)

        if info.is_assignment:
            if not is_identifier(text, left_start, left_end):
                raise AssignmentTargetError(text[left_start:left_end])
            return Assignment(text[left_start:left_end], right)

        left = self.parse_expression(text, left_start, left_end)
        if left is None:
            return None
        return BinaryApplication(handle, left, right)

    def parse_function_call(self, text: str, start: int, end: int) -> FunctionCall | None:
        """
        Parse name(arg, arg, ...).

        Arguments are split at commas outside nested parentheses. An argument
        that does not parse fails the whole call.
        """
        paren = text.find("(", start, end)
        if paren == -1 or text[end - 1] != ")":
            return None

        name_start, name_end = trim_span(text, start, paren)
        handle = self.context.find_function(text, name_start, name_end)
        if handle is None:
            return None

        args: list[ASTNode] = []
        arg_start, args_end = simplify_span(text, paren, end)
        while arg_start < args_end:
            arg_end = _find_top_level(text, ",", arg_start, args_end)
            arg = self.parse_expression(text, arg_start, arg_end)
            if arg is None:
                return None
            args.append(arg)
            arg_start, args_end = trim_span(text, arg_end + 1, args_end)
        return FunctionCall(handle, args)

    def find_binary_operator(self, text: str, start: int, end: int) -> tuple[int, int] | None:
        """
        Locate the operator to split text[start:end] at.

        Only positions outside parentheses and after the first character are
        candidates. At each candidate the longest matching symbol is taken.
        Among all matches the lowest precedence wins; on a tie a later
        left-associative occurrence replaces the current one, a later
        right-associative one does not.

        Returns:
            (position, operator handle), or None when there is no operator
        """
        operators = self.context.binary_operators
        operator_chars = self.context.operator_characters()

        best: tuple[int, int] | None = None
        best_precedence = 0
        depth = 0
        pos = start
        while pos < end:
            char = text[pos]
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1

            if depth != 0 or pos == start or char not in operator_chars:
                pos += 1
                continue

            handle = _longest_match(text, pos, end, operators)
            if handle is None:
                pos += 1
                continue

            info = operators[handle]
            if not self._is_sign(text, start, pos, info.symbol, operator_chars):
                if (
                    best is None
                    or info.precedence < best_precedence
                    or (
                        info.precedence == best_precedence
                        and info.associativity is Associativity.LEFT
                    )
                ):
                    best = (pos, handle)
                    best_precedence = info.precedence
            pos += len(info.symbol)

        return best

    def _is_sign(
        self, text: str, start: int, pos: int, symbol: str, operator_chars: frozenset[str]
    ) -> bool:
        """True when the symbol at pos reads as a prefix sign, not an infix operator."""
        if not self.context.is_unary_symbol(symbol):
            return False
        if _EXPONENT_MARKER.search(text, start, pos):
            return True
        _, before = trim_span(text, start, pos)
        return before == start or text[before - 1] in operator_chars


def _longest_match(text: str, pos: int, end: int, operators) -> int | None:
    """Handle of the longest operator symbol starting at pos (earliest on ties)."""
    found = None
    length = 0
    for handle, info in enumerate(operators):
        if len(info.symbol) > length and text.startswith(info.symbol, pos, end):
            found = handle
            length = len(info.symbol)
    return found


def _find_top_level(text: str, char: str, start: int, end: int) -> int:
    """Position of the first char outside parentheses, or end."""
    depth = 0
    for pos in range(start, end):
        current = text[pos]
        if current == "(":
            depth += 1
        elif current == ")":
            depth -= 1
        elif current == char and depth == 0:
            return pos
    return end
