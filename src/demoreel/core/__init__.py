"""Core functionalities: records, messages and stateless helpers.

Architecture Note:
    core/ contains plain data models and pure functions with no runtime
    state. Stateful services (the state integrator, the tracer and its
    collaborators) live in state/ and tracing/.
"""

from demoreel.core.messages import (
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
from demoreel.core.records import (
    LifeState,
    PlayerClass,
    PlayerHurtEvent,
    Profile,
    Snapshot,
    Team,
    Vector,
    WithTick,
    WorldBounds,
)
from demoreel.core.types import EntityIndex, Tick, UserId

__all__ = [
    # Types
    "Tick",
    "UserId",
    "EntityIndex",
    # Records
    "Vector",
    "PlayerClass",
    "Team",
    "LifeState",
    "Profile",
    "Snapshot",
    "WorldBounds",
    "PlayerHurtEvent",
    "WithTick",
    # Messages
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
]
