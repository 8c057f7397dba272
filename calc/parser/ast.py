"""
Abstract Syntax Tree (AST) node definitions for calculator expressions.

The node set is closed: literals, variable references, unary and binary
operator applications, function calls and assignments. Operator and function
nodes carry integer handles into the Context that produced them rather than
the operator metadata itself; visitors resolve handles through that Context.

Trees are built bottom-up by the parser and never rewritten afterwards.
Evaluation only touches the environment.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol


class ASTVisitor(Protocol):
    """
    Visitor protocol for traversing AST nodes.

    Implementations provide evaluation and tree printing.
    """

    def visit_literal(self, node: "Literal") -> Any:
        ...

    def visit_variable_ref(self, node: "VariableRef") -> Any:
        ...

    def visit_unary_application(self, node: "UnaryApplication") -> Any:
        ...

    def visit_binary_application(self, node: "BinaryApplication") -> Any:
        ...

    def visit_function_call(self, node: "FunctionCall") -> Any:
        ...

    def visit_assignment(self, node: "Assignment") -> Any:
        ...


class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor for traversal."""
        pass

    @abstractmethod
    def __repr__(self) -> str:
        pass


# Leaf Nodes (terminals)


class Literal(ASTNode):
    """
    Represents a numeric literal.

    Examples: 42, 3.14, -2.5, 1e-10
    """

    def __init__(self, value: float | int):
        self.value = float(value)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_literal(self)

    def __repr__(self) -> str:
        return f"Literal({self.value})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Literal) and self.value == other.value


class VariableRef(ASTNode):
    """
    Represents a variable read.

    Examples: x, pi, ans
    """

    def __init__(self, name: str):
        self.name = name

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable_ref(self)

    def __repr__(self) -> str:
        return f"VariableRef('{self.name}')"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, VariableRef) and self.name == other.name


# Composite Nodes (operators, functions and assignment)


class UnaryApplication(ASTNode):
    """
    Represents a prefix operator applied to one operand.

    Examples: -x, +(1 + 3)
    """

    def __init__(self, op: int, operand: ASTNode):
        self.op = op
        self.operand = operand

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary_application(self)

    def __repr__(self) -> str:
        return f"UnaryApplication({self.op}, {self.operand!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, UnaryApplication)
            and self.op == other.op
            and self.operand == other.operand
        )


class BinaryApplication(ASTNode):
    """
    Represents an infix operator applied to two operands.

    Examples: 2 + 3, x * y, a ^ b, x <= 1
    """

    def __init__(self, op: int, left: ASTNode, right: ASTNode):
        self.op = op
        self.left = left
        self.right = right

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_application(self)

    def __repr__(self) -> str:
        return f"BinaryApplication({self.op}, {self.left!r}, {self.right!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BinaryApplication)
            and self.op == other.op
            and self.left == other.left
            and self.right == other.right
        )


class FunctionCall(ASTNode):
    """
    Represents a function call.

    Examples: sin(x), sqrt(2), max(a, b, c), sum()
    """

    def __init__(self, function: int, args: list[ASTNode]):
        self.function = function
        self.args = args

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_call(self)

    def __repr__(self) -> str:
        args_repr = ", ".join(repr(arg) for arg in self.args)
        return f"FunctionCall({self.function}, [{args_repr}])"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FunctionCall)
            and self.function == other.function
            and self.args == other.args
        )


class Assignment(ASTNode):
    """
    Represents storing a value under a name.

    Examples: x = 5, rate = ans / 12
    """

    def __init__(self, name: str, value: ASTNode):
        self.name = name
        self.value = value

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_assignment(self)

    def __repr__(self) -> str:
        return f"Assignment('{self.name}', {self.value!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Assignment)
            and self.name == other.name
            and self.value == other.value
        )
