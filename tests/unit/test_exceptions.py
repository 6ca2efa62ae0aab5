"""Tests for the ccDeluge exception hierarchy."""

from __future__ import annotations

import pytest

from ccdeluge.exceptions import (
    CallCancelledError,
    CCDelugeError,
    ConfigurationError,
    DaemonError,
    InvalidDictionaryResponseError,
    InvalidReturnValueError,
    ProtocolError,
    ShapeError,
    TorrentErrorsDecodeError,
    TransportError,
    ValidationError,
)
from ccdeluge.models import TorrentError

pytestmark = [pytest.mark.unit]


def test_base_error_str():
    assert str(CCDelugeError("boom")) == "boom"
    assert str(CCDelugeError("boom", {"method": "core.x"})) == "boom (Details: {'method': 'core.x'})"


def test_hierarchy():
    assert issubclass(CallCancelledError, TransportError)
    assert issubclass(InvalidReturnValueError, ShapeError)
    assert issubclass(InvalidDictionaryResponseError, ShapeError)
    assert issubclass(ShapeError, ProtocolError)
    assert issubclass(TorrentErrorsDecodeError, InvalidReturnValueError)
    assert issubclass(ConfigurationError, ValidationError)
    assert not issubclass(DaemonError, ShapeError)
    assert not issubclass(DaemonError, TransportError)


def test_default_messages():
    assert InvalidReturnValueError().message == "invalid return value"
    assert InvalidDictionaryResponseError().message == "invalid dictionary response"


def test_daemon_error_fields():
    error = DaemonError("AddTorrentError", "Torrent already in session", "tb", {"torrent_id": "aaa"})
    assert error.exception_type == "AddTorrentError"
    assert error.exception_message == "Torrent already in session"
    assert error.traceback == "tb"
    assert error.exception_kwargs == {"torrent_id": "aaa"}
    assert str(error) == "AddTorrentError: Torrent already in session"
    assert "AddTorrentError" in repr(error)


def test_torrent_errors_decode_error_carries_partial_list():
    partial = [TorrentError(id="aaa", message="bad")]
    error = TorrentErrorsDecodeError(partial)
    assert error.torrent_errors is partial
    assert error.message == "invalid return value"
