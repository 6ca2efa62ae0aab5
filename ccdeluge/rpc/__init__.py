"""Deluge daemon RPC command layer."""

from __future__ import annotations

from ccdeluge.rpc.client import DelugeClient, DelugeClientV2
from ccdeluge.rpc.protocol import MessageType, RPCResponse, RPCTransport

__all__ = [
    "DelugeClient",
    "DelugeClientV2",
    "MessageType",
    "RPCResponse",
    "RPCTransport",
]
