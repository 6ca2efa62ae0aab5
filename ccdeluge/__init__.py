"""ccDeluge - A typed command client for the Deluge daemon RPC interface."""

from __future__ import annotations

__version__ = "0.1.0"

from ccdeluge.exceptions import (
    CallCancelledError,
    CCDelugeError,
    DaemonError,
    InvalidDictionaryResponseError,
    InvalidReturnValueError,
    ShapeError,
    TorrentErrorsDecodeError,
    TransportError,
)
from ccdeluge.models import (
    Account,
    AuthLevel,
    Options,
    ProtocolVersion,
    TorrentError,
    V2Options,
)
from ccdeluge.rpc import DelugeClient, DelugeClientV2, RPCResponse, RPCTransport

__all__ = [
    "Account",
    "AuthLevel",
    "CCDelugeError",
    "CallCancelledError",
    "DaemonError",
    "DelugeClient",
    "DelugeClientV2",
    "InvalidDictionaryResponseError",
    "InvalidReturnValueError",
    "Options",
    "ProtocolVersion",
    "RPCResponse",
    "RPCTransport",
    "ShapeError",
    "TorrentError",
    "TorrentErrorsDecodeError",
    "TransportError",
    "V2Options",
    "__version__",
]
