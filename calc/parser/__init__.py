"""
Calc Parser Package

This package provides expression parsing for the calculator. It includes
character-level scanning helpers, the operator/function registry, AST
construction and the evaluation and tree-printing visitors.
"""

from .ast import (
    ASTNode,
    Assignment,
    BinaryApplication,
    FunctionCall,
    Literal,
    UnaryApplication,
    VariableRef,
)
from .context import (
    Associativity,
    BinaryOperatorInfo,
    Context,
    FunctionInfo,
    UnaryOperatorInfo,
)
from .parser import Parser
from .scanning import simplify_parens, starts_with, trim_whitespace, valid_parens
from .visitors import EvalVisitor, TreePrinter

__all__ = [
    "ASTNode",
    "Assignment",
    "BinaryApplication",
    "FunctionCall",
    "Literal",
    "UnaryApplication",
    "VariableRef",
    "Associativity",
    "BinaryOperatorInfo",
    "Context",
    "FunctionInfo",
    "UnaryOperatorInfo",
    "Parser",
    "simplify_parens",
    "starts_with",
    "trim_whitespace",
    "valid_parens",
    "EvalVisitor",
    "TreePrinter",
]
