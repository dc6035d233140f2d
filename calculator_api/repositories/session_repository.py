"""
Session repository for data access.

Implements the Repository pattern for calculator session storage.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
from uuid import UUID

from ..models.domain import SessionRecord
from ..core.errors import SessionLimitError, SessionNotFoundError
from ..core.logging import get_logger
from ..core.config import settings

logger = get_logger(__name__)


class SessionRepositoryInterface(ABC):
    """Abstract interface for session repository"""

    @abstractmethod
    async def add(self, record: SessionRecord) -> SessionRecord:
        """Store a new session"""
        pass

    @abstractmethod
    async def get(self, session_id: UUID) -> SessionRecord:
        """Get session by ID"""
        pass

    @abstractmethod
    async def delete(self, session_id: UUID) -> None:
        """Remove a session"""
        pass


class InMemorySessionRepository(SessionRepositoryInterface):
    """
    Process-local session repository.

    Sessions are lost on restart. Sessions idle for longer than
    ``session_ttl`` seconds are dropped when a new session is added.
    """

    def __init__(
        self,
        max_sessions: Optional[int] = None,
        session_ttl: Optional[float] = None
    ):
        self.max_sessions = max_sessions if max_sessions is not None else settings.MAX_SESSIONS
        self.session_ttl = session_ttl if session_ttl is not None else settings.SESSION_TTL_SECONDS
        self._sessions: Dict[UUID, SessionRecord] = {}

        logger.info(
            "Initialized InMemorySessionRepository",
            extra_data={"max_sessions": self.max_sessions, "session_ttl": self.session_ttl}
        )

    def evict_idle(self) -> int:
        """
        Drop sessions idle for longer than the TTL.

        Returns:
            Number of sessions dropped
        """
        if self.session_ttl is None:
            return 0

        expired = [
            session_id
            for session_id, record in self._sessions.items()
            if record.idle_seconds() > self.session_ttl
        ]
        for session_id in expired:
            del self._sessions[session_id]

        if expired:
            logger.info(
                "Evicted idle sessions",
                extra_data={"count": len(expired), "session_ttl": self.session_ttl}
            )
        return len(expired)

    async def add(self, record: SessionRecord) -> SessionRecord:
        self.evict_idle()

        if len(self._sessions) >= self.max_sessions:
            logger.warning(
                "Session limit reached",
                extra_data={"max_sessions": self.max_sessions}
            )
            raise SessionLimitError(self.max_sessions)

        self._sessions[record.session_id] = record
        return record

    async def get(self, session_id: UUID) -> SessionRecord:
        record = self._sessions.get(session_id)
        if record is None:
            logger.warning(
                "Session not found",
                extra_data={"session_id": str(session_id)}
            )
            raise SessionNotFoundError(str(session_id))
        return record

    async def delete(self, session_id: UUID) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(str(session_id))


# Global repository instance
_session_repository: Optional[InMemorySessionRepository] = None


def get_session_repository() -> InMemorySessionRepository:
    """Get session repository instance (singleton)"""
    global _session_repository

    if _session_repository is None:
        _session_repository = InMemorySessionRepository()

    return _session_repository
