"""Core utilities package"""

from .config import settings, get_settings, Settings
from .logging import setup_logging, get_logger, ComponentLogger
from .errors import (
    CalcError,
    ParseError,
    InvalidParenthesesError,
    AssignmentTargetError,
    CannotParseError,
    ExpressionTooDeepError,
    EvaluationError,
    UndefinedVariableError,
    ArityError,
    ConfigurationError,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "ComponentLogger",
    "CalcError",
    "ParseError",
    "InvalidParenthesesError",
    "AssignmentTargetError",
    "CannotParseError",
    "ExpressionTooDeepError",
    "EvaluationError",
    "UndefinedVariableError",
    "ArityError",
    "ConfigurationError",
]
