"""Decoded message models and the helpers the tracer dispatches with."""

from demoreel.core.messages.models import (
    PVS,
    CreateStringTableMessage,
    DataTablesMessage,
    EntityUpdate,
    GameEvent,
    GameEventMessage,
    GenericGameEvent,
    Header,
    Message,
    MessageType,
    NetTickMessage,
    PacketEntitiesMessage,
    PacketMeta,
    PacketMetaMessage,
    PrintMessage,
    SendTable,
    ServerClass,
    ServerInfoMessage,
    StringTable,
    StringTableEntry,
    UpdateStringTableMessage,
)
from demoreel.core.messages.operations import (
    STRING_TABLE_KINDS,
    STRUCTURAL_KINDS,
    TRACER_KINDS,
    is_player_hurt,
    message_kind,
    require_entries,
    require_game_event,
)

__all__ = [
    # Models
    "MessageType",
    "Message",
    "Header",
    "StringTable",
    "StringTableEntry",
    "GameEvent",
    "GenericGameEvent",
    "GameEventMessage",
    "CreateStringTableMessage",
    "UpdateStringTableMessage",
    "PacketMeta",
    "PacketMetaMessage",
    "SendTable",
    "ServerClass",
    "DataTablesMessage",
    "PVS",
    "EntityUpdate",
    "PacketEntitiesMessage",
    "NetTickMessage",
    "PrintMessage",
    "ServerInfoMessage",
    # Operations
    "STRING_TABLE_KINDS",
    "STRUCTURAL_KINDS",
    "TRACER_KINDS",
    "message_kind",
    "require_game_event",
    "require_entries",
    "is_player_hurt",
]
