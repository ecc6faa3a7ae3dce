"""Decoding of ``userinfo`` string-table entries.

Each entry of the player identity table holds a fixed-size ``player_info``
block in its extra data. The entry index is the player's entity slot minus
one. Empty entries (no extra data) mean the slot is free.

Usage:
    info = decode_user_info(index, entry.text, entry.extra_data)
    if info is not None:
        roster.add(info.profile)
"""

from __future__ import annotations

from dataclasses import dataclass

from construct import Array, Bytes, Int8ul, Int32ul, Padding, Struct
from construct.core import ConstructError

from demoreel.core.records import Profile
from demoreel.core.types import EntityIndex
from demoreel.errors import IdentityDecodeError

NAME_SIZE = 32
STEAM_ID_SIZE = 33

PLAYER_INFO = Struct(
    "name" / Bytes(NAME_SIZE),
    "user_id" / Int32ul,
    "steam_id" / Bytes(STEAM_ID_SIZE),
    Padding(3),
    "friends_id" / Int32ul,
    "friends_name" / Bytes(NAME_SIZE),
    "is_fake_player" / Int8ul,
    "is_hl_tv" / Int8ul,
    "is_replay" / Int8ul,
    "more_extra" / Int8ul,
    "custom_file" / Array(4, Int32ul),
    "files_downloaded" / Int32ul,
)

PLAYER_INFO_SIZE = PLAYER_INFO.sizeof()

MAX_USER_ID = 0xFFFF
"""User ids travel as 16-bit values in game events; the block's u32 is truncated."""


@dataclass(frozen=True, slots=True)
class UserInfo:
    """A decoded identity entry: the player's profile and its entity slot."""

    entity: EntityIndex
    profile: Profile


def _c_string(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _c_bytes(text: str, size: int) -> bytes:
    return text.encode("utf-8")[: size - 1].ljust(size, b"\0")


def decode_player_info(index: int, data: bytes) -> Profile:
    """Decode one ``player_info`` block.

    Fixed-size strings end at their first NUL; whatever follows is garbage
    left in the client's buffer. The user id keeps its low 16 bits.

    Args:
        index: Table index of the entry, for error reporting.
        data: Extra data of the entry.

    Returns:
        The decoded profile.

    Raises:
        IdentityDecodeError: If the block is truncated.
    """
    try:
        raw = PLAYER_INFO.parse(data)
    except ConstructError as exc:
        raise IdentityDecodeError(
            index, f"expected {PLAYER_INFO_SIZE} bytes of player info, got {len(data)}"
        ) from exc
    return Profile(
        name=_c_string(raw.name),
        user_id=raw.user_id & MAX_USER_ID,
        steam_id=_c_string(raw.steam_id),
        friends_id=raw.friends_id,
        is_fake_player=raw.is_fake_player != 0,
        is_hl_tv=raw.is_hl_tv != 0,
        is_replay=raw.is_replay != 0,
        custom_file=tuple(raw.custom_file),
        files_downloaded=raw.files_downloaded,
        more_extra=raw.more_extra != 0,
    )


def decode_user_info(index: int, text: str | None, data: bytes | None) -> UserInfo | None:
    """Decode a ``userinfo`` entry into a profile and entity slot.

    Args:
        index: Table index of the entry.
        text: Entry string (the player's slot key); unused beyond presence.
        data: Entry extra data holding the player info block.

    Returns:
        UserInfo for occupied slots, None for empty ones.

    Raises:
        IdentityDecodeError: If the entry has data that cannot be decoded.
    """
    if not data:
        return None
    return UserInfo(entity=index + 1, profile=decode_player_info(index, data))


def encode_player_info(profile: Profile, friends_name: str = "", *, user_id: int | None = None) -> bytes:
    """Encode a profile as a ``player_info`` block (for fixtures and tools).

    ``user_id`` overrides the wire value, e.g. to write ids wider than 16 bits.
    """
    return PLAYER_INFO.build(
        {
            "name": _c_bytes(profile.name, NAME_SIZE),
            "user_id": profile.user_id if user_id is None else user_id,
            "steam_id": _c_bytes(profile.steam_id, STEAM_ID_SIZE),
            "friends_id": profile.friends_id,
            "friends_name": _c_bytes(friends_name, NAME_SIZE),
            "is_fake_player": int(profile.is_fake_player),
            "is_hl_tv": int(profile.is_hl_tv),
            "is_replay": int(profile.is_replay),
            "more_extra": int(profile.more_extra),
            "custom_file": list(profile.custom_file),
            "files_downloaded": profile.files_downloaded,
        }
    )
