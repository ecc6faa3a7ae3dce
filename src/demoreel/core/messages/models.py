"""Decoded demo message models.

Messages arrive already decoded; this module only fixes their shape. The set
of variants is closed: every message carries a class-level ``kind`` from
``MessageType`` and consumers dispatch on it.

Usage:
    message = GameEventMessage(event=PlayerHurtEvent(user_id=2, health=80, attacker=3, damage_amount=45))
    assert message.kind is MessageType.GAME_EVENT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar, TypeAlias

from demoreel.core.records import PlayerHurtEvent
from demoreel.core.types import EntityIndex


class MessageType(Enum):
    """Closed enumeration of message kinds a source can produce."""

    NET_TICK = auto()
    PRINT = auto()
    SERVER_INFO = auto()
    CREATE_STRING_TABLE = auto()
    UPDATE_STRING_TABLE = auto()
    GAME_EVENT = auto()
    PACKET_ENTITIES = auto()
    PACKET_META = auto()
    DATA_TABLES = auto()


@dataclass(frozen=True, slots=True)
class Header:
    """Demo file header.

    Attributes:
        demo_type: Magic string, "HL2DEMO" for valid files.
        version: Demo format version.
        protocol: Network protocol version.
        server: Server name; "host:port" for point-of-view recordings.
        nick: Name of the recording client.
        map: Map name.
        game: Game directory.
        duration: Playback length in seconds.
        ticks: Number of ticks.
        frames: Number of frames.
        signon: Length of the signon data in bytes.
    """

    demo_type: str = "HL2DEMO"
    version: int = 3
    protocol: int = 24
    server: str = ""
    nick: str = ""
    map: str = ""
    game: str = "tf"
    duration: float = 0.0
    ticks: int = 0
    frames: int = 0
    signon: int = 0


@dataclass(frozen=True, slots=True)
class StringTableEntry:
    text: str | None = None
    extra_data: bytes | None = None


@dataclass(frozen=True, slots=True)
class StringTable:
    """A string table as created on the wire, with its initial entries."""

    name: str
    entries: tuple[tuple[int, StringTableEntry], ...] = ()
    max_entries: int = 0


@dataclass(frozen=True, slots=True)
class GenericGameEvent:
    """Any game event other than ``player_hurt``. Carried through, never traced."""

    name: str
    values: dict[str, Any] = field(default_factory=dict)


GameEvent: TypeAlias = PlayerHurtEvent | GenericGameEvent


@dataclass(frozen=True, slots=True)
class PacketMeta:
    flags: int = 0
    sequence_in: int = 0
    sequence_out: int = 0


@dataclass(frozen=True, slots=True)
class SendTable:
    name: str
    props: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ServerClass:
    id: int
    name: str
    data_table: str = ""


class PVS(Enum):
    """How an entity update relates to the recorder's visible set."""

    PRESERVE = auto()
    ENTER = auto()
    LEAVE = auto()
    DELETE = auto()


@dataclass(frozen=True, slots=True)
class EntityUpdate:
    """Property changes for one entity. ``props`` maps send-prop names to values."""

    entity: EntityIndex
    class_id: int
    pvs: PVS = PVS.PRESERVE
    props: dict[str, Any] = field(default_factory=dict)


# --- Message variants ---


@dataclass(frozen=True, slots=True)
class NetTickMessage:
    kind: ClassVar[MessageType] = MessageType.NET_TICK

    tick: int = 0


@dataclass(frozen=True, slots=True)
class PrintMessage:
    kind: ClassVar[MessageType] = MessageType.PRINT

    value: str = ""


@dataclass(frozen=True, slots=True)
class ServerInfoMessage:
    kind: ClassVar[MessageType] = MessageType.SERVER_INFO

    map: str = ""
    max_player_count: int = 0
    interval_per_tick: float = 0.015


@dataclass(frozen=True, slots=True)
class CreateStringTableMessage:
    kind: ClassVar[MessageType] = MessageType.CREATE_STRING_TABLE

    table: StringTable


@dataclass(frozen=True, slots=True)
class UpdateStringTableMessage:
    """Changes to an existing table. Tables are numbered in creation order."""

    kind: ClassVar[MessageType] = MessageType.UPDATE_STRING_TABLE

    table_id: int
    entries: tuple[tuple[int, StringTableEntry], ...] = ()


@dataclass(frozen=True, slots=True)
class GameEventMessage:
    kind: ClassVar[MessageType] = MessageType.GAME_EVENT

    event: GameEvent


@dataclass(frozen=True, slots=True)
class PacketEntitiesMessage:
    kind: ClassVar[MessageType] = MessageType.PACKET_ENTITIES

    entities: tuple[EntityUpdate, ...] = ()
    removed: tuple[EntityIndex, ...] = ()


@dataclass(frozen=True, slots=True)
class PacketMetaMessage:
    kind: ClassVar[MessageType] = MessageType.PACKET_META

    meta: PacketMeta = PacketMeta()


@dataclass(frozen=True, slots=True)
class DataTablesMessage:
    kind: ClassVar[MessageType] = MessageType.DATA_TABLES

    tables: tuple[SendTable, ...] = ()
    server_classes: tuple[ServerClass, ...] = ()


Message: TypeAlias = (
    NetTickMessage
    | PrintMessage
    | ServerInfoMessage
    | CreateStringTableMessage
    | UpdateStringTableMessage
    | GameEventMessage
    | PacketEntitiesMessage
    | PacketMetaMessage
    | DataTablesMessage
)
