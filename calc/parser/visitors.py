"""
AST Visitor implementations.

- EvalVisitor: Evaluate a tree against a mutable environment
- TreePrinter: Render a tree as indented lines, one node per line
"""

from typing import MutableMapping

from ..core.errors import ArityError, UndefinedVariableError
from .ast import (
    ASTNode,
    Assignment,
    BinaryApplication,
    FunctionCall,
    Literal,
    UnaryApplication,
    VariableRef,
)
from .context import Context

INDENT = "  "


def format_number(value: float) -> str:
    """Format a double the way printf's %g does (6 significant digits)."""
    return f"{value:g}"


class EvalVisitor:
    """
    Evaluate AST to a float.

    Operands are evaluated left to right. The environment is read by
    VariableRef and written only by Assignment.

    Args:
        environment: Variable name → value mapping, shared across evaluations
        context: Registry the tree was parsed with
    """

    def __init__(self, environment: MutableMapping[str, float], context: Context):
        self.environment = environment
        self.context = context

    def visit_literal(self, node: Literal) -> float:
        return node.value

    def visit_variable_ref(self, node: VariableRef) -> float:
        if node.name in self.environment:
            return self.environment[node.name]
        raise UndefinedVariableError(node.name)

    def visit_unary_application(self, node: UnaryApplication) -> float:
        info = self.context.unary_operator(node.op)
        return info.function(node.operand.accept(self))

    def visit_binary_application(self, node: BinaryApplication) -> float:
        info = self.context.binary_operator(node.op)
        left = node.left.accept(self)
        right = node.right.accept(self)
        return info.function(left, right)

    def visit_function_call(self, node: FunctionCall) -> float:
        info = self.context.function(node.function)
        args = [arg.accept(self) for arg in node.args]
        try:
            return info.function(args)
        except IndexError as exc:
            raise ArityError(info.name, len(args)) from exc

    def visit_assignment(self, node: Assignment) -> float:
        self.environment[node.name] = node.value.accept(self)
        return self.environment[node.name]


class TreePrinter:
    """
    Render AST as an indented outline.

    Each node gets one line at its depth (two spaces per level): literals show
    their value, variables and assignments their name, operators their symbol
    and calls the function name. Children follow in left-to-right order.

    Example, for "2 * (x + 1)":

        *
          2
          +
            x
            1
    """

    def __init__(self, context: Context, level: int = 0):
        self.context = context
        self.level = level

    def render(self, node: ASTNode) -> str:
        return "".join(line + "\n" for line in node.accept(self))

    def visit_literal(self, node: Literal) -> list[str]:
        return [self._line(format_number(node.value))]

    def visit_variable_ref(self, node: VariableRef) -> list[str]:
        return [self._line(node.name)]

    def visit_unary_application(self, node: UnaryApplication) -> list[str]:
        symbol = self.context.unary_operator(node.op).symbol
        return self._branch(symbol, [node.operand])

    def visit_binary_application(self, node: BinaryApplication) -> list[str]:
        symbol = self.context.binary_operator(node.op).symbol
        return self._branch(symbol, [node.left, node.right])

    def visit_function_call(self, node: FunctionCall) -> list[str]:
        name = self.context.function(node.function).name
        return self._branch(name, node.args)

    def visit_assignment(self, node: Assignment) -> list[str]:
        return self._branch(node.name, [node.value])

    def _line(self, label: str) -> str:
        return INDENT * self.level + label

    def _branch(self, label: str, children: list[ASTNode]) -> list[str]:
        lines = [self._line(label)]
        self.level += 1
        try:
            for child in children:
                lines.extend(child.accept(self))
        finally:
            self.level -= 1
        return lines
