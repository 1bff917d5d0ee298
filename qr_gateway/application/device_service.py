"""
Device Service - Application service for device sessions.

Opens a device session with the payment provider and persists it, and
closes a stored session, returning the provider's usage summary.
"""

from core.exceptions import NotFoundError
from core.interfaces import DeviceDatasource, SessionRepository
from core.value_objects import DeviceSummary
from domain.device_session import DeviceSession
from domain.requests import CloseDeviceRequest, OpenDeviceRequest
from loggers import logger


class DeviceService:
    """
    Application service for device session management.

    Coordinates the provider's device-auth calls with the session store.
    """

    def __init__(
        self,
        device_datasource: DeviceDatasource,
        session_repository: SessionRepository,
    ) -> None:
        """
        Initialize the device service.

        Args:
            device_datasource: Provider client for device sessions.
            session_repository: Store holding device sessions.
        """
        self._devices = device_datasource
        self._sessions = session_repository

    async def open_device(self, request: OpenDeviceRequest) -> DeviceSession:
        """
        Open a device session and persist it.

        Args:
            request: Validated device descriptor.

        Returns:
            The new session.
        """
        logger.info(f"Opening device session for device {request.id_device}")
        token = await self._devices.open_device(request)
        session = DeviceSession.create_new(token)
        await self._sessions.save(session)
        logger.info(f"Device session {session.session_id} opened")
        return session

    async def close_device(self, request: CloseDeviceRequest) -> DeviceSummary:
        """
        Close a stored session with the provider, then delete it.

        Args:
            request: Validated reference to the session.

        Returns:
            Usage summary reported by the provider.

        Raises:
            NotFoundError: The session is not stored.
        """
        session = await self._sessions.find_by_id(request.session_id)
        if session is None:
            logger.warning(f"Session {request.session_id} not found")
            raise NotFoundError(
                f"Session {request.session_id} not found",
                resource_id=request.session_id,
            )

        summary = await self._devices.close_device(session.token)
        await self._sessions.delete(session.session_id)
        logger.info(
            f"Device session {session.session_id} closed: "
            f"{summary.transactions} transactions, amount {summary.amount}"
        )
        return summary

    async def latest_session_id(self) -> str:
        """
        Get the id of the last stored session, expired or not.

        Raises:
            NotFoundError: No session is stored.
        """
        sessions = await self._sessions.find_all()
        if not sessions:
            raise NotFoundError("No active sessions to close")
        return sessions[-1].session_id
