"""
Token Provider - decides which bearer token a payment call uses.

Reuses the last non-expired stored session when there is one. Otherwise it
either provisions a new session through the device-authentication exchange
or refuses, depending on the caller.
"""

from typing import Any, Mapping, Optional

from core.exceptions import NoActiveSessionError, ValidationError
from core.interfaces import DeviceDatasource, SessionRepository
from core.value_objects import Err
from domain.device_session import DeviceSession
from domain.requests import validate_open_device
from loggers import logger


class TokenProvider:
    """
    Provisioning policy for device session tokens.

    Selection is "last non-expired session in store order", which matches
    the most recently created session for insertion-ordered stores.
    """

    def __init__(
        self,
        session_repository: SessionRepository,
        device_datasource: DeviceDatasource,
        default_device: Mapping[str, Any],
    ) -> None:
        """
        Initialize the provider.

        Args:
            session_repository: Store holding device sessions.
            device_datasource: Provider client for the device-auth exchange.
            default_device: Raw device descriptor used when provisioning.
        """
        self._sessions = session_repository
        self._devices = device_datasource
        self._default_device = dict(default_device)

    async def find_active_session(self) -> Optional[DeviceSession]:
        """Get the last non-expired stored session, if any."""
        sessions = await self._sessions.find_all()
        active = [session for session in sessions if not session.is_expired()]
        if not active:
            return None
        return active[-1]

    async def acquire(self, provision: bool = False) -> str:
        """
        Get a usable bearer token.

        Args:
            provision: Open and persist a new session when none is active.

        Returns:
            Bearer token.

        Raises:
            NoActiveSessionError: No active session and provisioning disabled.
            ValidationError: The configured default device is incomplete.
        """
        session = await self.find_active_session()
        if session is not None:
            logger.debug(f"Reusing device session {session.session_id}")
            return session.token

        if not provision:
            raise NoActiveSessionError()

        session = await self.provision()
        return session.token

    async def provision(self) -> DeviceSession:
        """Open a device session with the default descriptor and store it."""
        result = validate_open_device(self._default_device)
        if isinstance(result, Err):
            raise ValidationError(f"Invalid default device configuration: {result.error}")

        logger.info("No active device session, opening a new one")
        token = await self._devices.open_device(result.value)
        session = DeviceSession.create_new(token)
        await self._sessions.save(session)
        logger.info(f"Provisioned device session {session.session_id}")
        return session
