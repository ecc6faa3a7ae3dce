"""Pure functions over messages: kind lookup, interest sets and payload checks."""

from __future__ import annotations

from typing import Any, TypeGuard

from demoreel.core.messages.models import (
    GameEvent,
    GenericGameEvent,
    MessageType,
    StringTableEntry,
)
from demoreel.core.records import PlayerHurtEvent
from demoreel.errors import UnexpectedMessageShapeError

STRING_TABLE_KINDS = frozenset({MessageType.CREATE_STRING_TABLE, MessageType.UPDATE_STRING_TABLE})
"""Kinds whose entries are routed through ``handle_string_entry``."""

STRUCTURAL_KINDS = frozenset({MessageType.PACKET_META, MessageType.DATA_TABLES})
"""Kinds forwarded to the integrator unconditionally. They never produce rows."""

TRACER_KINDS = frozenset({MessageType.GAME_EVENT}) | STRING_TABLE_KINDS
"""Kinds the tracer itself is interested in, before adding the integrator's."""


def message_kind(message: Any) -> MessageType:
    """Get the kind tag of a message.

    Raises:
        UnexpectedMessageShapeError: If the message has no MessageType tag.
    """
    kind = getattr(message, "kind", None)
    if not isinstance(kind, MessageType):
        raise UnexpectedMessageShapeError(
            f"{type(message).__name__} carries no MessageType kind tag"
        )
    return kind


def require_game_event(message: Any) -> GameEvent:
    """Get the event payload of a GAME_EVENT message.

    Raises:
        UnexpectedMessageShapeError: If the payload is missing or not a game event.
    """
    event = getattr(message, "event", None)
    if not isinstance(event, (PlayerHurtEvent, GenericGameEvent)):
        raise UnexpectedMessageShapeError(
            f"Game event message carries {type(event).__name__}, expected a game event"
        )
    return event


def require_entries(message: Any) -> tuple[tuple[int, StringTableEntry], ...]:
    """Get the ``(index, entry)`` pairs of a string-table message.

    Works for both creations (entries live on ``message.table``) and updates.

    Raises:
        UnexpectedMessageShapeError: If entries are missing or malformed.
    """
    holder = message
    if message_kind(message) is MessageType.CREATE_STRING_TABLE:
        holder = getattr(message, "table", None)
    entries = getattr(holder, "entries", None)
    if entries is None:
        raise UnexpectedMessageShapeError(f"{type(message).__name__} carries no entries")
    for item in entries:
        if (
            not isinstance(item, tuple)
            or len(item) != 2
            or not isinstance(item[1], StringTableEntry)
        ):
            raise UnexpectedMessageShapeError(
                f"Expected (index, StringTableEntry) pair, got {item!r}"
            )
    return tuple(entries)


def is_player_hurt(event: GameEvent) -> TypeGuard[PlayerHurtEvent]:
    return isinstance(event, PlayerHurtEvent)
