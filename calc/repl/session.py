"""
Calculator session.

A session owns the environment and the history and is the only caller of the
parser's parse and evaluate entry points. One session serves one console.
"""

from __future__ import annotations

from typing import Optional

from ..core.config import settings
from ..core.errors import CalcError, CannotParseError, ExpressionTooDeepError
from ..core.logging import get_logger
from ..parser import ASTNode, Parser
from .environment import default_environment
from .history import History

logger = get_logger("session")


class Session:
    """
    Evaluate input lines against a persistent environment.

    Args:
        parser: Parser to use (a fresh default Parser when omitted)
        environment: Starting variables (default_environment() when omitted)
        history_size: Number of results to remember (settings.HISTORY_SIZE)
        answer_name: Variable that receives every top-level result (settings.ANSWER_NAME)
    """

    def __init__(
        self,
        parser: Optional[Parser] = None,
        environment: Optional[dict[str, float]] = None,
        history_size: Optional[int] = None,
        answer_name: Optional[str] = None,
    ):
        self.parser = parser or Parser()
        self.environment = environment if environment is not None else default_environment()
        self.history = History(settings.HISTORY_SIZE if history_size is None else history_size)
        self.answer_name = answer_name or settings.ANSWER_NAME

    def parse(self, line: str) -> ASTNode:
        """
        Parse one line.

        Raises:
            CannotParseError: If no grammar rule matches
            ExpressionTooDeepError: If the parser runs out of stack
            ParseError: For unbalanced parentheses or a bad assignment target
        """
        try:
            node = self.parser.parse(line)
        except RecursionError as exc:
            raise ExpressionTooDeepError(line) from exc
        if node is None:
            raise CannotParseError(line)
        return node

    def evaluate(self, line: str) -> float:
        """
        Parse and evaluate one line, then record the result.

        The result is stored under the answer name and pushed onto the history.
        Nothing is recorded when parsing or evaluation fails. Failures are
        reported to the caller, so they are only logged at INFO.
        """
        try:
            node = self.parse(line)
            try:
                result = self.parser.evaluate(node, self.environment)
            except RecursionError as exc:
                raise ExpressionTooDeepError(line) from exc
        except CalcError as exc:
            logger.info(
                "Expression failed",
                extra_data={"expression": line, "error": exc.message, **exc.details},
            )
            raise

        self.environment[self.answer_name] = result
        self.history.push(line, result)
        logger.info("Evaluated expression", extra_data={"expression": line, "result": result})
        return result

    def tree(self, line: str) -> str:
        """Indented tree of one line, without evaluating it."""
        return self.parser.render(self.parse(line))

    def variables(self) -> list[tuple[str, float]]:
        return sorted(self.environment.items())
