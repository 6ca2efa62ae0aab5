"""Protocol-version dependent method selection.

Operations whose daemon method changed between protocol generations are
resolved here, once per call, from the client's immutable protocol version.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ccdeluge.models import ProtocolVersion


@dataclass(frozen=True)
class MethodPair:
    """Legacy and current daemon names of one operation."""

    legacy: str
    current: str

    def select(self, version: ProtocolVersion) -> str:
        """Method name for ``version``."""
        if version >= ProtocolVersion.V2:
            return self.current
        return self.legacy


PAUSE_TORRENTS = MethodPair(legacy="core.pause_torrent", current="core.pause_torrents")
RESUME_TORRENTS = MethodPair(legacy="core.resume_torrent", current="core.resume_torrents")


def pause_torrents_call(version: ProtocolVersion, ids: Sequence[str]) -> tuple[str, list[Any]]:
    """Method name and positional arguments for pausing ``ids``.

    Both generations take the id sequence, even for a single torrent.
    """
    return PAUSE_TORRENTS.select(version), [list(ids)]


def resume_torrents_call(version: ProtocolVersion, ids: Sequence[str]) -> tuple[str, list[Any]]:
    """Method name and positional arguments for resuming ``ids``."""
    return RESUME_TORRENTS.select(version), [list(ids)]
