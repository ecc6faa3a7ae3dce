"""State integrator protocol.

The integrator owns the canonical, cumulative model of world geometry and
every known player. The tracer feeds it each message and polls it before and
after, so any model that can answer those two reads can back a trace:

- GameStateIntegrator: in-memory reference model (default)
- Test doubles scripted per message

Usage:
    integrator = GameStateIntegrator()
    tracer = Tracer(integrator=integrator)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from demoreel.core.messages import (
        Header,
        Message,
        MessageType,
        PacketMeta,
        SendTable,
        ServerClass,
        StringTableEntry,
    )
    from demoreel.core.records import Snapshot, WorldBounds
    from demoreel.core.types import Tick


@runtime_checkable
class StateIntegrator(Protocol):
    """Applies messages to a running world/player model.

    All mutation methods are synchronous and total: they never raise for
    well-typed input. A payload of the wrong shape raises
    UnexpectedMessageShapeError. Reads reflect the most recent mutation
    immediately.
    """

    def does_handle(self, kind: MessageType) -> bool:
        """Whether ``handle_message`` should receive messages of this kind."""
        ...

    def handle_header(self, header: Header) -> None:
        """Observe the stream header."""
        ...

    def handle_message(self, message: Message, tick: Tick, context: Any) -> None:
        """Apply one message to the model."""
        ...

    def handle_string_entry(
        self, table: str, index: int, entry: StringTableEntry, context: Any
    ) -> None:
        """Apply one string-table entry to the model."""
        ...

    def handle_data_tables(
        self,
        tables: tuple[SendTable, ...],
        server_classes: tuple[ServerClass, ...],
        context: Any,
    ) -> None:
        """Observe the send tables and server classes of the stream."""
        ...

    def handle_packet_meta(self, tick: Tick, meta: PacketMeta, context: Any) -> None:
        """Observe per-packet metadata."""
        ...

    def snapshot_players(self) -> list[Snapshot]:
        """Current players in model order, as immutable snapshots."""
        ...

    def snapshot_world(self) -> WorldBounds | None:
        """Current world bounds, None until the world entity has been seen."""
        ...
