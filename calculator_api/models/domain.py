"""
Domain models for the calculator service.

These are the core business entities with validation and behavior.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from calclib.numeric import EvaluationResult
from calclib.session import CalculatorSession, HistoryEntry


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Evaluation(BaseModel):
    """Outcome of evaluating one expression"""
    expression: str
    result: str = Field(..., description="Displayed result")
    is_integer: bool = Field(..., description="True if the value is integer-valued")

    @classmethod
    def from_result(cls, expression: str, result: EvaluationResult) -> "Evaluation":
        return cls(
            expression=expression,
            result=result.display(),
            is_integer=result.is_integer(),
        )


class Validation(BaseModel):
    """Keystroke validation outcome for a piece of text"""
    text: str
    valid: bool
    invalid_characters: List[str] = Field(default_factory=list)


class SessionRecord(BaseModel):
    """A calculator session owned by one client"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    session_id: UUID = Field(default_factory=uuid4)
    history_limit: Optional[int] = None
    created_at: datetime = Field(default_factory=_utcnow)
    last_activity: datetime = Field(default_factory=_utcnow)

    _calculator: CalculatorSession = PrivateAttr()

    def model_post_init(self, __context) -> None:
        self._calculator = CalculatorSession(history_limit=self.history_limit)

    @property
    def calculator(self) -> CalculatorSession:
        return self._calculator

    def update_activity(self):
        """Update last activity timestamp"""
        self.last_activity = _utcnow()

    def idle_seconds(self, now: Optional[datetime] = None) -> float:
        """Seconds since the last key press or typed text"""
        return ((now or _utcnow()) - self.last_activity).total_seconds()


class SessionView(BaseModel):
    """Public state of a calculator session"""
    session_id: UUID
    input: str
    result: str
    history: List[HistoryEntry]
    created_at: datetime
    last_activity: datetime

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionView":
        state = record.calculator.snapshot()
        return cls(
            session_id=record.session_id,
            input=state.input,
            result=state.result,
            history=state.history,
            created_at=record.created_at,
            last_activity=record.last_activity,
        )
