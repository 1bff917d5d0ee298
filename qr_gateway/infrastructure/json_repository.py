"""
JSON file session repository.

Stores every session in a single JSON object keyed by session id:

    {"<sessionId>": {"token": "...", "createdAt": 1700000000000, "expiresIn": 21600}}

Each save/delete rewrites the whole file atomically. File access runs in a
worker thread so the event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Optional

from configs import DEFAULT_SESSIONS_FILE
from core.exceptions import StorageError, ValidationError
from core.interfaces import SessionRepository
from domain.device_session import DeviceSession
from loggers import logger


def session_from_record(session_id: str, record: Any) -> DeviceSession:
    """
    Build a session from a stored record.

    Older files stored the bare token string instead of an object.
    """
    try:
        if isinstance(record, str):
            return DeviceSession.from_storage(session_id, record)
        if not isinstance(record, dict):
            raise ValidationError(f"Unexpected record type {type(record).__name__}")
        return DeviceSession.from_storage(
            session_id,
            record.get("token"),
            record.get("createdAt"),
            record.get("expiresIn"),
        )
    except (ValidationError, TypeError, ValueError) as e:
        raise StorageError(f"Corrupt session record {session_id}: {e}")


def session_to_record(session: DeviceSession) -> dict[str, Any]:
    """Get the stored value of a session (its id is the key)."""
    return {
        "token": session.token,
        "createdAt": session.created_at,
        "expiresIn": session.expires_in,
    }


class JsonSessionRepository(SessionRepository):
    """Session repository backed by a JSON file."""

    def __init__(self, file_path: str | Path = DEFAULT_SESSIONS_FILE) -> None:
        """
        Initialize the repository.

        Args:
            file_path: Location of the sessions file. Created on first write.
        """
        self._path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._path

    async def save(self, session: DeviceSession) -> None:
        sessions = await self._read()
        sessions[session.session_id] = session_to_record(session)
        await self._write(sessions)

    async def find_by_id(self, session_id: str) -> Optional[DeviceSession]:
        sessions = await self._read()
        record = sessions.get(session_id)
        if record is None:
            return None
        return session_from_record(session_id, record)

    async def delete(self, session_id: str) -> None:
        sessions = await self._read()
        if sessions.pop(session_id, None) is None:
            return
        await self._write(sessions)

    async def find_all(self) -> list[DeviceSession]:
        sessions = await self._read()
        return [
            session_from_record(session_id, record)
            for session_id, record in sessions.items()
        ]

    # =========================================================================
    # File Access
    # =========================================================================

    async def _read(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._read_sync)

    async def _write(self, sessions: dict[str, Any]) -> None:
        await asyncio.to_thread(self._write_sync, sessions)

    def _read_sync(self) -> dict[str, Any]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"Sessions file {self._path} does not exist yet")
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read sessions file: {e}")

        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageError(f"Sessions file is not valid JSON: {e}")
        if not isinstance(data, dict):
            raise StorageError("Sessions file must contain a JSON object")
        return data

    def _write_sync(self, sessions: dict[str, Any]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            if not self._path.parent.exists():
                logger.info(f"Creating sessions directory {self._path.parent}")
                self._path.parent.mkdir(parents=True, exist_ok=True)
            # Atomic write
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(sessions, f, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Failed to write sessions file: {e}")
