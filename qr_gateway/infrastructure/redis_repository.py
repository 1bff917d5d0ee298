"""
Redis session repository.

Keys:
- device_sessions: hash of session id -> JSON record {token, createdAt, expiresIn}
- device_sessions:order: list of session ids in insertion order
"""

from __future__ import annotations

import json
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from configs import REDIS_SESSIONS_KEY, REDIS_SESSIONS_ORDER_KEY
from core.exceptions import StorageError
from core.interfaces import SessionRepository
from domain.device_session import DeviceSession
from infrastructure.json_repository import session_from_record, session_to_record


class RedisSessionRepository(SessionRepository):
    """
    Session repository backed by Redis.

    The hash holds the records, the list keeps find_all() in insertion order.
    Writes touching both keys run in one MULTI/EXEC transaction.
    """

    def __init__(
        self,
        redis: Redis,
        key: str = REDIS_SESSIONS_KEY,
        order_key: str = REDIS_SESSIONS_ORDER_KEY,
    ) -> None:
        """
        Initialize the repository.

        Args:
            redis: Redis client instance (decode_responses=True).
            key: Hash holding the session records.
            order_key: List holding the session ids in insertion order.
        """
        self._redis = redis
        self._key = key
        self._order_key = order_key

    async def save(self, session: DeviceSession) -> None:
        record = json.dumps(session_to_record(session))
        try:
            known = await self._redis.hexists(self._key, session.session_id)
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.hset(self._key, session.session_id, record)
                # Upserts keep their place in the order list
                if not known:
                    pipe.rpush(self._order_key, session.session_id)
                await pipe.execute()
        except RedisError as e:
            raise StorageError(f"Redis error saving session: {e}")

    async def find_by_id(self, session_id: str) -> Optional[DeviceSession]:
        try:
            raw = await self._redis.hget(self._key, session_id)
        except RedisError as e:
            raise StorageError(f"Redis error reading session: {e}")
        if raw is None:
            return None
        return session_from_record(session_id, self._decode(session_id, raw))

    async def delete(self, session_id: str) -> None:
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.hdel(self._key, session_id)
                pipe.lrem(self._order_key, 0, session_id)
                await pipe.execute()
        except RedisError as e:
            raise StorageError(f"Redis error deleting session: {e}")

    async def find_all(self) -> list[DeviceSession]:
        try:
            session_ids = await self._redis.lrange(self._order_key, 0, -1)
            if not session_ids:
                return []
            records = await self._redis.hmget(self._key, session_ids)
        except RedisError as e:
            raise StorageError(f"Redis error listing sessions: {e}")

        return [
            session_from_record(session_id, self._decode(session_id, raw))
            for session_id, raw in zip(session_ids, records)
            if raw is not None
        ]

    @staticmethod
    def _decode(session_id: str, raw: str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt session record {session_id}: {e}")
