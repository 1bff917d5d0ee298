"""
Infrastructure layer - External dependencies and implementations.

Contains:
- Session repository implementations (JSON file, Redis, memory)
- Yappy provider client
- Configuration
"""

from .json_repository import JsonSessionRepository
from .memory_repository import InMemorySessionRepository
from .redis_repository import RedisSessionRepository
from .settings import (
    Settings,
    get_settings,
)
from .yappy_client import (
    YappyClient,
    YappyDeviceDatasource,
    YappyPaymentDatasource,
)


__all__ = [
    # Repositories
    "JsonSessionRepository",
    "InMemorySessionRepository",
    "RedisSessionRepository",
    # Provider
    "YappyClient",
    "YappyDeviceDatasource",
    "YappyPaymentDatasource",
    # Settings
    "Settings",
    "get_settings",
]
