"""Pydantic models for ccDeluge.

Provides validated domain and configuration models.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ProtocolVersion(int, Enum):
    """Daemon RPC protocol generations."""

    V1 = 1  # legacy daemons (1.3.x)
    V2 = 2


class AuthLevel(str, Enum):
    """Daemon account permission levels."""

    NONE = "NONE"
    READONLY = "READONLY"
    NORMAL = "NORMAL"
    ADMIN = "ADMIN"

    @property
    def level(self) -> int:
        """Numeric level used by the daemon."""
        return _AUTH_LEVEL_VALUES[self]

    @classmethod
    def from_level(cls, level: int) -> AuthLevel:
        """Map a numeric daemon level back to its name.

        Raises:
            ValueError: If the level is not one the daemon defines

        """
        for member, value in _AUTH_LEVEL_VALUES.items():
            if value == level:
                return member
        msg = f"Unknown auth level: {level}"
        raise ValueError(msg)


_AUTH_LEVEL_VALUES: dict[AuthLevel, int] = {
    AuthLevel.NONE: 0,
    AuthLevel.READONLY: 1,
    AuthLevel.NORMAL: 5,
    AuthLevel.ADMIN: 10,
}


class Account(BaseModel):
    """Daemon user account."""

    username: str = Field(..., description="Account user name")
    password: str = Field(..., description="Account password")
    auth_level: AuthLevel = Field(..., description="Permission level")

    def to_args(self) -> list[Any]:
        """Positional arguments for account create/update calls."""
        return [self.username, self.password, self.auth_level.value]


class TorrentError(BaseModel):
    """Failure of a single torrent inside a batch operation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Hash of the torrent that failed")
    message: str = Field(..., description="Daemon error message")

    def __str__(self) -> str:
        return f"<{self.id}>: '{self.message}'"


class V2Options(BaseModel):
    """Torrent options only understood by V2 daemons."""

    sequential_download: bool | None = Field(None, description="Download pieces in order")
    shared: bool | None = Field(None, description="Share torrent with other users")
    super_seeding: bool | None = Field(None, description="Enable super seeding")


class Options(BaseModel):
    """Torrent options for add/set calls.

    Only fields that were set are sent to the daemon.
    """

    max_connections: int | None = Field(None, description="Maximum peer connections")
    max_upload_slots: int | None = Field(None, description="Maximum upload slots")
    max_upload_speed: int | None = Field(None, description="Upload limit in KiB/s")
    max_download_speed: int | None = Field(None, description="Download limit in KiB/s")
    prioritize_first_last_pieces: bool | None = Field(
        None, description="Prioritize first and last pieces"
    )
    pre_allocate_storage: bool | None = Field(
        None, description="Pre-allocate disk space (compact_allocation on V1)"
    )
    download_location: str | None = Field(None, description="Save path")
    auto_managed: bool | None = Field(None, description="Let the queue manage the torrent")
    stop_at_ratio: bool | None = Field(None, description="Stop seeding at ratio")
    stop_ratio: float | None = Field(None, description="Seeding ratio to stop at")
    remove_at_ratio: bool | None = Field(None, description="Remove torrent at stop ratio")
    move_completed: bool | None = Field(None, description="Move files when completed")
    move_completed_path: str | None = Field(None, description="Destination for completed files")
    add_paused: bool | None = Field(None, description="Add torrent in paused state")
    v2: V2Options = Field(default_factory=V2Options, description="V2-only options")

    def to_dictionary(self, version: ProtocolVersion) -> dict[str, Any]:
        """Serialize set options for the given protocol version."""
        out: dict[str, Any] = {}
        for key in (
            "max_connections",
            "max_upload_slots",
            "max_upload_speed",
            "max_download_speed",
            "prioritize_first_last_pieces",
        ):
            value = getattr(self, key)
            if value is not None:
                out[key] = value

        if self.pre_allocate_storage is not None:
            if version >= ProtocolVersion.V2:
                out["pre_allocate_storage"] = self.pre_allocate_storage
            else:
                out["compact_allocation"] = not self.pre_allocate_storage

        for key in (
            "download_location",
            "auto_managed",
            "stop_at_ratio",
            "stop_ratio",
            "remove_at_ratio",
            "move_completed",
            "move_completed_path",
            "add_paused",
        ):
            value = getattr(self, key)
            if value is not None:
                out[key] = value

        if version >= ProtocolVersion.V2:
            out.update(self.v2.model_dump(exclude_none=True))

        return out


def options_to_dictionary(options: Options | None, version: ProtocolVersion) -> dict[str, Any]:
    """Serialize optional options; ``None`` means no options."""
    if options is None:
        return {}
    return options.to_dictionary(version)


class DaemonConnectionConfig(BaseModel):
    """Daemon connection configuration."""

    host: str = Field("127.0.0.1", description="Daemon host")
    port: int = Field(58846, ge=1, le=65535, description="Daemon RPC port")
    username: str = Field("", description="Login user name")
    password: str = Field("", description="Login password")
    protocol_version: ProtocolVersion = Field(
        ProtocolVersion.V2, description="Daemon protocol generation"
    )
    timeout: float | None = Field(
        30.0, gt=0.0, description="Per-call timeout in seconds (None disables)"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(default=False, description="Use structured logging")
    log_correlation_id: bool = Field(default=True, description="Include correlation IDs")


class Config(BaseModel):
    """Main configuration model."""

    daemon: DaemonConnectionConfig = Field(
        default_factory=DaemonConnectionConfig,
        description="Daemon connection configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
