"""RPC protocol definitions for daemon communication.

Defines message type constants, the response envelope and the transport
contract consumed by the command layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Protocol, runtime_checkable

from ccdeluge.exceptions import DaemonError, InvalidReturnValueError


class MessageType(IntEnum):
    """Daemon RPC message types (first element of every message)."""

    RESPONSE = 1
    ERROR = 2
    EVENT = 3


def _text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def daemon_error_from_payload(payload: list[Any]) -> DaemonError:
    """Build a DaemonError from an error message payload.

    Legacy daemons send ``[type, message, traceback]``; newer ones insert the
    exception keyword arguments before the traceback.
    """
    if len(payload) == 3:
        exc_type, exc_message, traceback = payload
        exc_kwargs: Any = {}
    elif len(payload) == 4:
        exc_type, exc_message, exc_kwargs, traceback = payload
    else:
        raise InvalidReturnValueError(
            "invalid error payload", details={"length": len(payload)}
        )

    if not isinstance(exc_kwargs, dict):
        exc_kwargs = {}
    return DaemonError(
        _text(exc_type),
        _text(exc_message),
        _text(traceback),
        {_text(k): v for k, v in exc_kwargs.items()},
    )


@dataclass(frozen=True)
class RPCResponse:
    """Response envelope: either a daemon error or the decoded return values.

    ``return_value`` is the ordered list of values following the request id.
    """

    return_value: list[Any] = field(default_factory=list)
    error: DaemonError | None = None

    @property
    def is_error(self) -> bool:
        """Whether the daemon reported an error."""
        return self.error is not None

    @classmethod
    def success(cls, *values: Any) -> RPCResponse:
        """Envelope carrying a successful payload."""
        return cls(return_value=list(values))

    @classmethod
    def failure(cls, error: DaemonError) -> RPCResponse:
        """Envelope carrying a daemon-reported error."""
        return cls(error=error)

    @classmethod
    def from_message(cls, message: Any) -> RPCResponse:
        """Interpret a raw ``[message_type, request_id, *payload]`` message.

        Raises:
            InvalidReturnValueError: If the message is not a response or error

        """
        if not isinstance(message, (list, tuple)) or len(message) < 2:
            raise InvalidReturnValueError("invalid response message")

        message_type, _request_id, *payload = message
        if message_type == MessageType.RESPONSE:
            return cls.success(*payload)
        if message_type == MessageType.ERROR:
            return cls.failure(daemon_error_from_payload(payload))

        raise InvalidReturnValueError(
            "unexpected message type", details={"message_type": message_type}
        )


@runtime_checkable
class RPCTransport(Protocol):
    """Performs one daemon call.

    Implementations own connection handling, TLS, login, framing and
    serialization. Failures are raised as exceptions (ideally subclasses of
    :class:`ccdeluge.exceptions.TransportError`) and are propagated unchanged
    by the command layer.
    """

    async def call(self, method: str, args: list[Any], kwargs: dict[str, Any]) -> RPCResponse:
        """Invoke ``method`` and return its response envelope."""
        ...
