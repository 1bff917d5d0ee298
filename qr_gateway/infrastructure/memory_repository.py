"""
In-memory session repository.

Keeps sessions in a dict for the lifetime of the process. Used in tests
and for throwaway runs (SESSION_STORE=memory).
"""

from typing import Optional

from core.interfaces import SessionRepository
from domain.device_session import DeviceSession


class InMemorySessionRepository(SessionRepository):
    """Dict-backed session repository, insertion ordered."""

    def __init__(self, sessions: Optional[list[DeviceSession]] = None) -> None:
        self._sessions: dict[str, DeviceSession] = {}
        for session in sessions or []:
            self._sessions[session.session_id] = session

    def __len__(self) -> int:
        return len(self._sessions)

    async def save(self, session: DeviceSession) -> None:
        self._sessions[session.session_id] = session

    async def find_by_id(self, session_id: str) -> Optional[DeviceSession]:
        return self._sessions.get(session_id)

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def find_all(self) -> list[DeviceSession]:
        return list(self._sessions.values())
