"""
Calculator exceptions.

Every failure raised by the parser, the evaluator or the session derives from
CalcError so the console can report it per input line and keep going.
"""

from typing import Any, Dict, Optional


class CalcError(Exception):
    """Base exception for calculator errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Parse-time errors

class ParseError(CalcError):
    """Raised when an expression cannot be turned into a tree"""


class InvalidParenthesesError(ParseError):
    """Raised when parentheses are unbalanced anywhere in the expression"""

    def __init__(self, text: str):
        super().__init__(
            message="Invalid parens",
            details={"text": text}
        )


class AssignmentTargetError(ParseError):
    """Raised when the left-hand side of '=' is not a bare identifier"""

    def __init__(self, target: str):
        super().__init__(
            message=f"Cannot assign to '{target}'",
            details={"target": target}
        )


class CannotParseError(ParseError):
    """Raised by the session when no grammar rule matches the input"""

    def __init__(self, text: str):
        super().__init__(
            message="cannot parse expression",
            details={"text": text}
        )


class ExpressionTooDeepError(ParseError):
    """Raised when an expression nests deeper than the interpreter stack allows"""

    def __init__(self, text: str):
        super().__init__(
            message="expression nested too deeply",
            details={"length": len(text)}
        )


# Evaluation-time errors

class EvaluationError(CalcError):
    """Raised when a parsed tree cannot be evaluated"""


class UndefinedVariableError(EvaluationError):
    """Raised when a variable is read before it is assigned"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            message=f"undefined variable '{name}'",
            details={"name": name}
        )


class ArityError(EvaluationError):
    """Raised when a function reads an argument that was not supplied"""

    def __init__(self, function: str, supplied: int):
        self.function = function
        self.supplied = supplied
        super().__init__(
            message=f"function '{function}' called with too few arguments ({supplied})",
            details={"function": function, "supplied": supplied}
        )


# Configuration errors

class ConfigurationError(CalcError):
    """Raised for malformed registry or constants files"""

    def __init__(self, message: str, source: Optional[str] = None):
        details = {"source": source} if source else {}
        super().__init__(message=message, details=details)
