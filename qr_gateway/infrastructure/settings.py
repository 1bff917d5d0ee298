"""
Application settings.

Provides typed configuration sections built from environment variables.
A local .env file is loaded by configs before any value is read.
"""

import os
from dataclasses import dataclass, field
from typing import Final, Optional

from configs import DEFAULT_SESSIONS_FILE, REMOTE_TIMEOUT_SECONDS


TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


# =============================================================================
# Configuration Classes
# =============================================================================


@dataclass(frozen=True)
class YappySettings:
    """Payment provider credentials and endpoints."""

    api_key: str = ""
    secret_key: str = ""
    base_url: str = ""
    sandbox_base_url: str = ""
    sandbox: bool = True
    timeout: float = REMOTE_TIMEOUT_SECONDS

    @property
    def active_base_url(self) -> str:
        """Get the base URL for the selected environment."""
        return self.sandbox_base_url if self.sandbox else self.base_url


@dataclass(frozen=True)
class DeviceSettings:
    """Default device descriptor used when a session is provisioned on demand."""

    id_device: str = ""
    name_device: str = ""
    user_device: str = ""
    group_id: str = ""

    def as_raw(self) -> dict[str, str]:
        """Get the descriptor in the same shape as an open-device request body."""
        return {
            "idDevice": self.id_device,
            "nameDevice": self.name_device,
            "userDevice": self.user_device,
            "groupId": self.group_id,
        }


@dataclass(frozen=True)
class RedisSettings:
    """Redis connection settings."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    decode_responses: bool = True


@dataclass(frozen=True)
class StorageSettings:
    """Session store selection."""

    backend: str = "json"
    sessions_file: str = DEFAULT_SESSIONS_FILE


@dataclass(frozen=True)
class ServerSettings:
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = True


# =============================================================================
# Main Settings
# =============================================================================


@dataclass
class Settings:
    """
    Main application settings.

    Aggregates all configuration sections.
    """

    yappy: YappySettings = field(default_factory=YappySettings)
    device: DeviceSettings = field(default_factory=DeviceSettings)
    redis: RedisSettings = field(default_factory=RedisSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    server: ServerSettings = field(default_factory=ServerSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Returns:
            Settings instance.
        """
        return cls(
            yappy=YappySettings(
                api_key=os.getenv("YAPPY_API_KEY", ""),
                secret_key=os.getenv("YAPPY_SECRET_KEY", ""),
                base_url=os.getenv("YAPPY_BASE_URL", ""),
                sandbox_base_url=os.getenv("YAPPY_SANDBOX_BASE_URL", ""),
                sandbox=_env_bool("YAPPY_SANDBOX", True),
                timeout=float(os.getenv("YAPPY_TIMEOUT", str(REMOTE_TIMEOUT_SECONDS))),
            ),
            device=DeviceSettings(
                id_device=os.getenv("YAPPY_ID_DEVICE", ""),
                name_device=os.getenv("YAPPY_NAME_DEVICE", ""),
                user_device=os.getenv("YAPPY_USER_DEVICE", ""),
                group_id=os.getenv("YAPPY_ID_GROUP", ""),
            ),
            redis=RedisSettings(
                host=os.getenv("REDIS_HOST", "localhost"),
                port=int(os.getenv("REDIS_PORT", "6379")),
                db=int(os.getenv("REDIS_DB", "0")),
            ),
            storage=StorageSettings(
                backend=os.getenv("SESSION_STORE", "json").strip().lower(),
                sessions_file=os.getenv("SESSIONS_FILE", DEFAULT_SESSIONS_FILE),
            ),
            server=ServerSettings(
                host=os.getenv("HOST", "0.0.0.0"),
                port=int(os.getenv("PORT", "3000")),
                debug=_env_bool("DEBUG", True),
            ),
        )


# =============================================================================
# Settings Singleton
# =============================================================================


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
