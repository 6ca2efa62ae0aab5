"""Tests for protocol-version method dispatch."""

from __future__ import annotations

import pytest

from ccdeluge.models import ProtocolVersion
from ccdeluge.rpc.dispatch import (
    PAUSE_TORRENTS,
    RESUME_TORRENTS,
    MethodPair,
    pause_torrents_call,
    resume_torrents_call,
)

pytestmark = [pytest.mark.unit, pytest.mark.rpc]


def test_method_pair_select():
    pair = MethodPair(legacy="core.old", current="core.new")
    assert pair.select(ProtocolVersion.V1) == "core.old"
    assert pair.select(ProtocolVersion.V2) == "core.new"


def test_pause_legacy_uses_singular_method():
    method, args = pause_torrents_call(ProtocolVersion.V1, ("abc",))
    assert method == "core.pause_torrent"
    assert args == [["abc"]]


def test_pause_v2_uses_plural_method_with_sequence():
    method, args = pause_torrents_call(ProtocolVersion.V2, ("abc",))
    assert method == "core.pause_torrents"
    assert args == [["abc"]]


def test_resume_dispatch():
    assert resume_torrents_call(ProtocolVersion.V1, ["a", "b"]) == ("core.resume_torrent", [["a", "b"]])
    assert resume_torrents_call(ProtocolVersion.V2, ["a", "b"]) == ("core.resume_torrents", [["a", "b"]])


def test_pairs():
    assert PAUSE_TORRENTS.current == "core.pause_torrents"
    assert RESUME_TORRENTS.legacy == "core.resume_torrent"
