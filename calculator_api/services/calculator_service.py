"""
Calculator service for business logic.

Implements the Service pattern for evaluation and session operations.
"""

from typing import Optional
from uuid import UUID

from calclib.evaluator import evaluate
from calclib.session import is_valid_key
from calclib.validator import invalid_characters

from ..models.domain import Evaluation, SessionRecord, Validation
from ..repositories.session_repository import SessionRepositoryInterface
from ..core.errors import HistoryEntryNotFoundError, InvalidKeyError
from ..core.config import settings
from ..core.logging import get_context_logger, get_logger

logger = get_logger(__name__)


class CalculatorService:
    """
    Service for calculator operations.

    Stateless evaluation plus keypad-driven sessions kept in a repository.
    """

    def __init__(
        self,
        repository: SessionRepositoryInterface,
        history_limit: Optional[int] = None
    ):
        self.repository = repository
        self.history_limit = history_limit if history_limit is not None else settings.HISTORY_LIMIT

    async def evaluate(self, expression: str) -> Evaluation:
        """
        Evaluate one expression.

        Raises:
            CalcError: If the expression is incomplete or invalid
        """
        logger.debug(
            "Evaluating expression",
            extra_data={"expression": expression}
        )

        result = evaluate(expression)
        return Evaluation.from_result(expression, result)

    async def validate(self, text: str) -> Validation:
        rejected = invalid_characters(text)
        return Validation(text=text, valid=not rejected, invalid_characters=rejected)

    async def create_session(self) -> SessionRecord:
        record = await self.repository.add(SessionRecord(history_limit=self.history_limit))

        logger.info(
            "Session created",
            extra_data={"session_id": str(record.session_id)}
        )
        return record

    async def get_session(self, session_id: UUID) -> SessionRecord:
        return await self.repository.get(session_id)

    async def delete_session(self, session_id: UUID) -> None:
        await self.repository.delete(session_id)

        logger.info(
            "Session deleted",
            extra_data={"session_id": str(session_id)}
        )

    async def press_key(self, session_id: UUID, key: str) -> SessionRecord:
        """
        Press a keypad key in a session.

        Raises:
            SessionNotFoundError: If the session doesn't exist
            InvalidKeyError: If the key is not a keypad key or valid character
        """
        if not is_valid_key(key):
            raise InvalidKeyError(key)

        record = await self.repository.get(session_id)
        handled = record.calculator.press(key)
        get_context_logger(__name__, session_id=str(session_id)).debug(
            "Key pressed",
            extra_data={"key": key, "handled": handled, "result": record.calculator.result}
        )
        record.update_activity()
        return record

    async def type_text(self, session_id: UUID, text: str) -> tuple[SessionRecord, bool]:
        """
        Replace a session's input line with typed text.

        Returns:
            Tuple of (session, accepted)
        """
        record = await self.repository.get(session_id)
        accepted = record.calculator.type_text(text)
        get_context_logger(__name__, session_id=str(session_id)).debug(
            "Text typed",
            extra_data={"accepted": accepted}
        )
        record.update_activity()
        return record, accepted

    async def copy_result(self, session_id: UUID, index: int) -> SessionRecord:
        """Append the result of a history entry to the session input"""
        record = await self.repository.get(session_id)
        history = record.calculator.history
        if not -len(history) <= index < len(history):
            raise HistoryEntryNotFoundError(str(session_id), index)

        record.calculator.copy_result_to_input(history[index].result)
        record.update_activity()
        return record


def get_calculator_service(
    repository: SessionRepositoryInterface
) -> CalculatorService:
    """Create calculator service instance"""
    return CalculatorService(repository)
