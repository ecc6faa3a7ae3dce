"""Roster tracking from the player identity string table.

Usage:
    tracker = RosterTracker()
    tracker.handle_string_entry("userinfo", index, entry, context)
    profiles = tracker.roster
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from demoreel.core.messages import (
    STRING_TABLE_KINDS,
    MessageType,
    StringTableEntry,
    message_kind,
)
from demoreel.core.records import Profile
from demoreel.core.types import UserId
from demoreel.decoding import UserInfo, decode_user_info
from demoreel.errors import IdentityDecodeError, UnexpectedMessageShapeError
from demoreel.tracing.models import DecodeErrorPolicy

logger = logging.getLogger(__name__)

UserInfoDecoder = Callable[[int, str | None, bytes | None], UserInfo | None]
"""Signature: (index, text, extra_data) -> UserInfo or None for an empty slot"""


class StringTableRegistry:
    """Resolves string-table names. Updates address tables by creation order."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def resolve(self, message: Any) -> str:
        """Get the table name a string-table message applies to.

        Creations register their table and return its name.

        Raises:
            UnexpectedMessageShapeError: If the message is not a string-table
                message or refers to a table that was never created.
        """
        kind = message_kind(message)
        if kind is MessageType.CREATE_STRING_TABLE:
            name = getattr(getattr(message, "table", None), "name", None)
            if not isinstance(name, str):
                raise UnexpectedMessageShapeError("String table creation carries no table name")
            self._names.append(name)
            return name
        if kind is MessageType.UPDATE_STRING_TABLE:
            table_id = getattr(message, "table_id", None)
            if not isinstance(table_id, int) or not 0 <= table_id < len(self._names):
                raise UnexpectedMessageShapeError(
                    f"String table update refers to unknown table {table_id!r}"
                )
            return self._names[table_id]
        raise UnexpectedMessageShapeError(f"{kind.name} is not a string-table message")

    def __len__(self) -> int:
        return len(self._names)


class RosterTracker:
    """Builds the roster from identity table entries, first-seen wins.

    A profile is recorded the first time its user id is decoded. Later entries
    for the same user id (reconnects, name changes) are discarded.

    Args:
        identity_table: Name of the table holding player identities.
        on_decode_error: Policy for entries that fail to decode.
        decoder: Entry decoder (default decodes player info blocks).
    """

    def __init__(
        self,
        identity_table: str = "userinfo",
        on_decode_error: DecodeErrorPolicy = DecodeErrorPolicy.SKIP,
        decoder: UserInfoDecoder = decode_user_info,
    ):
        self._identity_table = identity_table
        self._on_decode_error = on_decode_error
        self._decoder = decoder
        self._profiles: dict[UserId, Profile] = {}
        self._failures: list[IdentityDecodeError] = []

    @staticmethod
    def does_handle(kind: MessageType) -> bool:
        return kind in STRING_TABLE_KINDS

    def handle_string_entry(
        self, table: str, index: int, entry: StringTableEntry, context: Any
    ) -> None:
        """Record the profile in an identity table entry, if new.

        Raises:
            IdentityDecodeError: If decoding fails and the policy is RAISE.
        """
        if table != self._identity_table:
            return
        try:
            info = self._decoder(index, entry.text, entry.extra_data)
        except IdentityDecodeError as e:
            if self._on_decode_error is DecodeErrorPolicy.RAISE:
                raise
            logger.warning("Skipping %s entry %d: %s", table, index, e.reason)
            self._failures.append(e)
            return
        if info is None:
            return
        profile = info.profile
        if profile.user_id not in self._profiles:
            self._profiles[profile.user_id] = profile

    @property
    def roster(self) -> tuple[Profile, ...]:
        """Profiles in first-seen order."""
        return tuple(self._profiles.values())

    @property
    def failures(self) -> tuple[IdentityDecodeError, ...]:
        """Entries skipped under the SKIP policy, in encounter order."""
        return tuple(self._failures)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
