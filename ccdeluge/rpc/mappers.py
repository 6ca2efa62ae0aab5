"""Mapping of decoded response payloads to domain values."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ccdeluge.exceptions import (
    InvalidDictionaryResponseError,
    InvalidReturnValueError,
    ShapeError,
    TorrentErrorsDecodeError,
)
from ccdeluge.models import Account, AuthLevel, TorrentError
from ccdeluge.rpc.decoding import (
    ValueKind,
    as_dict,
    as_int,
    as_list,
    as_str,
    kind_of,
    optional,
    single,
)

ACCOUNT_FIELDS = frozenset({"username", "password", "authlevel"})


def torrent_hash_from_values(values: Sequence[Any]) -> str:
    """Decode the hash returned by the add-torrent calls.

    The daemon returns no hash when the torrent was already added; that
    case yields an empty string.
    """
    torrent_hash = optional(as_str)(single(values))
    return torrent_hash or ""


def torrent_errors_from_values(values: Sequence[Any]) -> list[TorrentError]:
    """Decode the failure list returned by batch removal.

    Each failure is an ``(id, message)`` pair. An empty list means no torrent
    failed.

    Raises:
        TorrentErrorsDecodeError: On a malformed entry, carrying the errors
            decoded before it

    """
    failed = as_list(single(values))

    torrent_errors: list[TorrentError] = []
    for index, entry in enumerate(failed):
        if kind_of(entry) is not ValueKind.LIST or len(entry) != 2:
            raise TorrentErrorsDecodeError(
                torrent_errors,
                details={"index": index, "got": kind_of(entry).value},
            )
        torrent_id, message = entry
        try:
            torrent_errors.append(TorrentError(id=as_str(torrent_id), message=as_str(message)))
        except ShapeError as e:
            raise TorrentErrorsDecodeError(torrent_errors, details={"index": index}) from e

    return torrent_errors


def _auth_level(value: Any) -> AuthLevel:
    kind = kind_of(value)
    if kind is ValueKind.INT:
        return AuthLevel.from_level(value)
    return AuthLevel(as_str(value).upper())


def account_from_dictionary(value: Any) -> Account:
    """Decode one account entry.

    Entries carry ``username``, ``password`` and ``authlevel``; newer daemons
    add ``authlevel_int`` which must agree with ``authlevel``.
    """
    fields = as_dict(value)
    keys = set(fields)
    if not ACCOUNT_FIELDS <= keys or keys - ACCOUNT_FIELDS - {"authlevel_int"}:
        raise InvalidDictionaryResponseError(details={"keys": sorted(keys)})

    try:
        auth_level = _auth_level(fields["authlevel"])
        if "authlevel_int" in fields and as_int(fields["authlevel_int"]) != auth_level.level:
            raise InvalidDictionaryResponseError(
                details={"authlevel": auth_level.value, "authlevel_int": fields["authlevel_int"]}
            )
        return Account(
            username=as_str(fields["username"]),
            password=as_str(fields["password"]),
            auth_level=auth_level,
        )
    except (InvalidReturnValueError, ValueError) as e:
        raise InvalidDictionaryResponseError(details={"error": str(e)}) from e


def accounts_from_values(values: Sequence[Any]) -> list[Account]:
    """Decode the account list returned by the daemon."""
    return [account_from_dictionary(item) for item in as_list(single(values))]
