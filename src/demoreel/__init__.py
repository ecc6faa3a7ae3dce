"""demoreel: tick-indexed traces from decoded demo message streams.

Usage:
    from demoreel import Header, MemorySource, dtrace

    source = MemorySource(header=Header(map="cp_process_final"))
    source.push(1, CreateStringTableMessage(table=StringTable(name="userinfo", entries=...)))
    source.push(2, GameEventMessage(event=PlayerHurtEvent(...)))

    trace = dtrace(source)
    trace.roster   # one Profile per player
    trace.states   # WithTick[Snapshot] per player per message
    trace.events   # WithTick[PlayerHurtEvent]
    trace.bounds   # WithTick[WorldBounds] per change
"""

__version__ = "0.1.0"

# Core records and messages
from demoreel.core import (
    PVS,
    CreateStringTableMessage,
    DataTablesMessage,
    EntityUpdate,
    GameEventMessage,
    GenericGameEvent,
    Header,
    LifeState,
    MessageType,
    NetTickMessage,
    PacketEntitiesMessage,
    PacketMeta,
    PacketMetaMessage,
    PlayerClass,
    PlayerHurtEvent,
    PrintMessage,
    Profile,
    SendTable,
    ServerClass,
    ServerInfoMessage,
    Snapshot,
    StringTable,
    StringTableEntry,
    Team,
    UpdateStringTableMessage,
    Vector,
    WithTick,
    WorldBounds,
)

# Configuration
from demoreel.config import TraceSettings

# Errors
from demoreel.errors import (
    IdentityDecodeError,
    SourceError,
    SourceExhaustedError,
    TickOrderError,
    TraceError,
    TracerStateError,
    UnexpectedMessageShapeError,
)

# Sources
from demoreel.source import DemoSource, MemorySource

# State integrators
from demoreel.state import GameStateIntegrator, StateIntegrator

# Tracing
from demoreel.tracing import (
    DecodeErrorPolicy,
    EmitPolicy,
    Trace,
    Tracer,
    TracerPhase,
    dtrace,
    is_pov,
    roster,
)

__all__ = [
    # Version
    "__version__",
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
    "Header",
    "StringTable",
    "StringTableEntry",
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
    # Config
    "TraceSettings",
    # Errors
    "TraceError",
    "IdentityDecodeError",
    "UnexpectedMessageShapeError",
    "SourceError",
    "SourceExhaustedError",
    "TickOrderError",
    "TracerStateError",
    # Sources
    "DemoSource",
    "MemorySource",
    # State
    "StateIntegrator",
    "GameStateIntegrator",
    # Tracing
    "Tracer",
    "TracerPhase",
    "Trace",
    "DecodeErrorPolicy",
    "EmitPolicy",
    "dtrace",
    "roster",
    "is_pov",
]
