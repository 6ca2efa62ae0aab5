"""Deluge daemon command client.

Turns typed operations into daemon method calls and decodes the daemon's
responses into typed results.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Sequence
from functools import partial
from typing import Any

from ccdeluge.exceptions import CallCancelledError, InvalidReturnValueError
from ccdeluge.i18n import _
from ccdeluge.models import (
    Account,
    Config,
    Options,
    ProtocolVersion,
    TorrentError,
    options_to_dictionary,
)
from ccdeluge.rpc.decoding import (
    INT32_MAX,
    INT32_MIN,
    UINT16_MAX,
    as_bool,
    as_int,
    as_str,
    as_str_list,
    scan,
    single,
)
from ccdeluge.rpc.dispatch import pause_torrents_call, resume_torrents_call
from ccdeluge.rpc.mappers import (
    accounts_from_values,
    torrent_errors_from_values,
    torrent_hash_from_values,
)
from ccdeluge.rpc.protocol import RPCResponse, RPCTransport
from ccdeluge.utils.logging_config import correlation_id

logger = logging.getLogger(__name__)


class DelugeClient:
    """Command client for a Deluge daemon.

    The client keeps no per-call state, so one instance may serve concurrent
    tasks; serializing requests over a single connection is up to the
    transport.
    """

    def __init__(
        self,
        transport: RPCTransport,
        protocol_version: ProtocolVersion = ProtocolVersion.V1,
        *,
        timeout: float | None = None,
        diagnostic_logger: logging.Logger | None = None,
    ):
        """Initialize client.

        Args:
            transport: Performs the daemon calls
            protocol_version: Daemon protocol generation, fixed for the client's lifetime
            timeout: Seconds to wait for each reply (None waits indefinitely)
            diagnostic_logger: Receives reports of anomalous daemon responses

        """
        self._transport = transport
        self._protocol_version = ProtocolVersion(protocol_version)
        self.timeout = timeout
        self.diagnostic_logger = diagnostic_logger

    @classmethod
    def from_config(
        cls,
        transport: RPCTransport,
        config: Config,
        diagnostic_logger: logging.Logger | None = None,
    ) -> DelugeClient:
        """Create a client from the daemon section of ``config``."""
        return cls(
            transport,
            config.daemon.protocol_version,
            timeout=config.daemon.timeout,
            diagnostic_logger=diagnostic_logger,
        )

    @property
    def protocol_version(self) -> ProtocolVersion:
        """Protocol generation used for method selection."""
        return self._protocol_version

    async def _rpc(
        self,
        method: str,
        args: list[Any] | None = None,
        kwargs: dict[str, Any] | None = None,
    ) -> list[Any]:
        """Call ``method`` and return the decoded return values.

        Transport failures propagate unchanged and daemon errors are raised
        as-is; only a successful envelope yields values.
        """
        args = args if args is not None else []
        kwargs = kwargs if kwargs is not None else {}

        token = correlation_id.set(correlation_id.get() or str(uuid.uuid4()))
        try:
            logger.debug(_("Calling %s with %d argument(s)"), method, len(args))
            call = self._transport.call(method, args, kwargs)
            if self.timeout is None:
                resp = await call
            else:
                resp = await self._await_reply(method, call)

            if resp.is_error:
                logger.debug(_("Daemon returned error for %s: %s"), method, resp.error)
                raise resp.error
            return resp.return_value
        finally:
            correlation_id.reset(token)

    async def _await_reply(self, method: str, call: Awaitable[RPCResponse]) -> RPCResponse:
        """Await ``call`` for at most ``self.timeout`` seconds.

        Only the expiry of this deadline becomes CallCancelledError; whatever
        the transport raises itself, TimeoutError included, propagates as-is.
        """
        task = asyncio.ensure_future(call)
        try:
            done, _pending = await asyncio.wait({task}, timeout=self.timeout)
        except asyncio.CancelledError:
            task.cancel()
            await asyncio.wait({task})
            raise

        if not done:
            task.cancel()
            await asyncio.wait({task})
            msg = _("Call cancelled: no reply within timeout")
            raise CallCancelledError(msg, details={"method": method, "timeout": self.timeout})

        return task.result()

    async def daemon_version(self) -> str:
        """Return the daemon version string."""
        return as_str(single(await self._rpc("daemon.info")))

    async def methods_list(self) -> list[str]:
        """Return the names of all methods the daemon exports."""
        return as_str_list(single(await self._rpc("daemon.get_method_list")))

    async def get_free_space(self, path: str = "") -> int:
        """Return the free space in bytes; ``path`` defaults to the download location."""
        (free_space,) = scan(await self._rpc("core.get_free_space", [path]), as_int)
        return free_space

    async def get_libtorrent_version(self) -> str:
        """Return the libtorrent version."""
        return as_str(single(await self._rpc("core.get_libtorrent_version")))

    async def add_torrent_magnet(self, magnet_uri: str, options: Options | None = None) -> str:
        """Add a torrent via magnet URI.

        Returns:
            Torrent hash, or an empty string if the torrent was already added

        """
        values = await self._rpc(
            "core.add_torrent_magnet",
            [magnet_uri, options_to_dictionary(options, self._protocol_version)],
        )
        return torrent_hash_from_values(values)

    async def add_torrent_url(self, url: str, options: Options | None = None) -> str:
        """Add a torrent via URL.

        Returns:
            Torrent hash, or an empty string if the torrent was already added

        """
        values = await self._rpc(
            "core.add_torrent_url",
            [url, options_to_dictionary(options, self._protocol_version)],
        )
        return torrent_hash_from_values(values)

    async def add_torrent_file(
        self,
        file_name: str,
        file_content_base64: str,
        options: Options | None = None,
    ) -> str:
        """Add a torrent from base64 encoded metainfo.

        Args:
            file_name: Name of the .torrent file
            file_content_base64: Base64 encoded file content
            options: Torrent options

        Returns:
            Torrent hash, or an empty string if the torrent was already added

        """
        values = await self._rpc(
            "core.add_torrent_file",
            [file_name, file_content_base64, options_to_dictionary(options, self._protocol_version)],
        )
        return torrent_hash_from_values(values)

    async def remove_torrents(self, ids: Sequence[str], rm_files: bool) -> list[TorrentError]:
        """Remove several torrents at once.

        If ``rm_files`` is set the downloaded data is deleted as well. Torrents
        that could not be removed are returned as TorrentError records; an
        empty list means none failed.

        Do not rely on files or torrents being gone from the session just
        because no errors were returned: returned errors primarily indicate
        that some of the supplied hashes were invalid.

        Raises:
            TorrentErrorsDecodeError: If a failure entry is malformed; its
                ``torrent_errors`` holds the entries decoded before it

        """
        values = await self._rpc("core.remove_torrents", [list(ids), rm_files])
        return torrent_errors_from_values(values)

    async def remove_torrent(self, torrent_id: str, rm_files: bool) -> bool:
        """Remove a single torrent, returning True if successful."""
        return as_bool(single(await self._rpc("core.remove_torrent", [torrent_id, rm_files])))

    async def pause_torrents(self, *ids: str) -> None:
        """Pause the torrents with the given ids."""
        method, args = pause_torrents_call(self._protocol_version, ids)
        await self._rpc(method, args)

    async def resume_torrents(self, *ids: str) -> None:
        """Resume the torrents with the given ids."""
        method, args = resume_torrents_call(self._protocol_version, ids)
        await self._rpc(method, args)

    async def move_storage(self, torrent_ids: Sequence[str], dest: str) -> None:
        """Move the storage of the given torrents to ``dest``."""
        await self._rpc("core.move_storage", [list(torrent_ids), dest])

    async def session_state(self) -> list[str]:
        """Return the ids of all torrents in the session."""
        return as_str_list(single(await self._rpc("core.get_session_state")))

    async def set_torrent_options(self, torrent_id: str, options: Options | None) -> None:
        """Update options of the torrent ``torrent_id``."""
        await self._rpc(
            "core.set_torrent_options",
            [torrent_id, options_to_dictionary(options, self._protocol_version)],
        )

    async def set_torrent_tracker(self, torrent_id: str, tracker_url: str) -> None:
        """Make ``tracker_url`` the only tracker of the torrent ``torrent_id``."""
        trackers = [{"url": tracker_url, "tier": 0}]
        await self._rpc("core.set_torrent_trackers", [torrent_id, trackers])

    async def force_reannounce(self, ids: Sequence[str]) -> None:
        """Reannounce the given torrents to their trackers."""
        await self._rpc("core.force_reannounce", [list(ids)])

    async def get_enabled_plugins(self) -> list[str]:
        """Return the names of enabled plugins."""
        return as_str_list(single(await self._rpc("core.get_enabled_plugins")))

    async def get_available_plugins(self) -> list[str]:
        """Return the names of available plugins."""
        return as_str_list(single(await self._rpc("core.get_available_plugins")))

    async def enable_plugin(self, name: str) -> None:
        """Enable the plugin ``name``."""
        # V2 daemons return a boolean, V1 daemons nothing
        await self._rpc("core.enable_plugin", [name])

    async def disable_plugin(self, name: str) -> None:
        """Disable the plugin ``name``."""
        await self._rpc("core.disable_plugin", [name])

    async def test_listen_port(self) -> bool:
        """Check whether the active listen port is reachable.

        Some daemons answer with ``None`` or a list instead of a boolean. Such
        responses are reported to the diagnostic logger and raised as
        InvalidReturnValueError rather than read as ``False``.
        """
        first = single(await self._rpc("core.test_listen_port"))
        try:
            return as_bool(first)
        except InvalidReturnValueError:
            if self.diagnostic_logger is not None:
                self.diagnostic_logger.warning(_("test_listen_port returned %r"), first)
            raise

    async def get_listen_port(self) -> int:
        """Return the daemon's listen port."""
        (port,) = scan(
            await self._rpc("core.get_listen_port"),
            partial(as_int, minimum=INT32_MIN, maximum=INT32_MAX),
        )
        return as_int(port, minimum=0, maximum=UINT16_MAX)


class DelugeClientV2(DelugeClient):
    """Client for V2 daemons, adding account management."""

    def __init__(
        self,
        transport: RPCTransport,
        *,
        timeout: float | None = None,
        diagnostic_logger: logging.Logger | None = None,
    ):
        """Initialize a client pinned to protocol V2."""
        super().__init__(
            transport,
            ProtocolVersion.V2,
            timeout=timeout,
            diagnostic_logger=diagnostic_logger,
        )

    @classmethod
    def from_config(
        cls,
        transport: RPCTransport,
        config: Config,
        diagnostic_logger: logging.Logger | None = None,
    ) -> DelugeClientV2:
        """Create a V2 client using the timeout from ``config``."""
        return cls(transport, timeout=config.daemon.timeout, diagnostic_logger=diagnostic_logger)

    async def known_accounts(self) -> list[Account]:
        """Return all known accounts, including passwords and levels."""
        return accounts_from_values(await self._rpc("core.get_known_accounts"))

    async def create_account(self, account: Account) -> bool:
        """Create a daemon user. Requires an ADMIN session."""
        return as_bool(single(await self._rpc("core.create_account", account.to_args())))

    async def update_account(self, account: Account) -> bool:
        """Set a new password and level for an existing user. Requires an ADMIN session."""
        return as_bool(single(await self._rpc("core.update_account", account.to_args())))

    async def remove_account(self, username: str) -> bool:
        """Delete the user ``username``. Requires an ADMIN session."""
        return as_bool(single(await self._rpc("core.remove_account", [username])))
