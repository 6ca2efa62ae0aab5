"""Exception hierarchy for ccDeluge.

Separates the three failure channels of the command layer: transport
failures, daemon-reported errors and shape (decode) errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ccdeluge.models import TorrentError


class CCDelugeError(Exception):
    """Base exception for all ccDeluge errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize ccDeluge error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class TransportError(CCDelugeError):
    """Connectivity, authentication or framing failure raised by a transport."""


class CallCancelledError(TransportError):
    """The pending call was abandoned before the daemon replied."""


class DaemonError(CCDelugeError):
    """Error reported by the daemon for a call it understood but failed.

    Carries the daemon's own exception type, message and traceback.
    """

    def __init__(
        self,
        exception_type: str,
        exception_message: str,
        traceback: str = "",
        exception_kwargs: dict[str, Any] | None = None,
    ):
        """Initialize daemon error."""
        super().__init__(f"{exception_type}: {exception_message}")
        self.exception_type = exception_type
        self.exception_message = exception_message
        self.traceback = traceback
        self.exception_kwargs = exception_kwargs or {}

    def __repr__(self) -> str:
        return (
            f"DaemonError(exception_type={self.exception_type!r}, "
            f"exception_message={self.exception_message!r})"
        )


class ProtocolError(CCDelugeError):
    """Deluge RPC protocol errors."""


class ShapeError(ProtocolError):
    """Response payload did not match the expected arity or type."""


class InvalidReturnValueError(ShapeError):
    """Invalid return value."""

    def __init__(self, message: str = "invalid return value", details: dict[str, Any] | None = None):
        """Initialize invalid return value error."""
        super().__init__(message, details)


class TorrentErrorsDecodeError(InvalidReturnValueError):
    """A batch failure list contained an entry of unexpected shape.

    ``torrent_errors`` holds the entries decoded before the malformed one.
    """

    def __init__(
        self,
        torrent_errors: list[TorrentError],
        message: str = "invalid return value",
        details: dict[str, Any] | None = None,
    ):
        """Initialize with the failure records decoded so far."""
        super().__init__(message, details)
        self.torrent_errors = torrent_errors


class InvalidDictionaryResponseError(ShapeError):
    """Invalid dictionary response."""

    def __init__(
        self, message: str = "invalid dictionary response", details: dict[str, Any] | None = None
    ):
        """Initialize invalid dictionary response error."""
        super().__init__(message, details)


class ValidationError(CCDelugeError):
    """Data validation errors."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""
