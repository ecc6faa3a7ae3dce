"""Tracer: folds a demo message stream into roster, state, event and bounds series.

Usage:
    tracer = Tracer()
    tracer.handle_header(source.header)
    for tick, message, context in source:
        tracer.apply(tick, message, context)
    trace = tracer.finish()
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from demoreel.config import TraceSettings
from demoreel.core.messages import (
    STRING_TABLE_KINDS,
    STRUCTURAL_KINDS,
    TRACER_KINDS,
    Header,
    Message,
    MessageType,
    PacketMeta,
    SendTable,
    ServerClass,
    StringTableEntry,
    message_kind,
    require_entries,
    require_game_event,
)
from demoreel.core.records import PlayerHurtEvent, Profile, Snapshot, WithTick, WorldBounds
from demoreel.core.types import Tick
from demoreel.errors import TickOrderError, TracerStateError, UnexpectedMessageShapeError
from demoreel.state import GameStateIntegrator, StateIntegrator
from demoreel.tracing.bounds import WorldBoundsDetector
from demoreel.tracing.events import DamageEventFilter
from demoreel.tracing.identities import RosterTracker, StringTableRegistry
from demoreel.tracing.merge import merge_continuity
from demoreel.tracing.models import DecodeErrorPolicy, EmitPolicy, Trace, TracerPhase

logger = logging.getLogger(__name__)


class Tracer:
    """Single-pass fold over a decoded message stream.

    Owns the state integrator for the duration of the fold and the four
    output series. For every interesting message it captures the player view,
    delegates the message, then runs bounds detection, damage filtering and
    continuity merging against the updated model.

    Interesting kinds are game events and string-table messages, plus whatever
    the integrator declares. Packet metadata and data tables are always
    forwarded to the integrator but never produce rows. Everything else is
    skipped without effect.

    Args:
        integrator: State model to fold into (default GameStateIntegrator).
        settings: Trace settings (default loaded from the environment).
        roster: Roster tracker override (default built from settings).
    """

    def __init__(
        self,
        integrator: StateIntegrator | None = None,
        settings: TraceSettings | None = None,
        *,
        roster: RosterTracker | None = None,
    ):
        settings = settings or TraceSettings()
        self._integrator = integrator or GameStateIntegrator(
            identity_table=settings.identity_table
        )
        self._roster = roster or RosterTracker(
            identity_table=settings.identity_table,
            on_decode_error=DecodeErrorPolicy(settings.on_decode_error),
        )
        self._emit_policy = EmitPolicy(settings.emit_on)
        self._emitter = self._emit_policy.get_emitter()
        self._bounds = WorldBoundsDetector()
        self._events = DamageEventFilter()
        self._states: list[WithTick[Snapshot]] = []
        self._tables = StringTableRegistry()
        self._header: Header | None = None
        self._last_tick: Tick | None = None
        self._phase = TracerPhase.UNINITIALIZED

    @property
    def phase(self) -> TracerPhase:
        return self._phase

    @property
    def emit_policy(self) -> EmitPolicy:
        return self._emit_policy

    def does_handle(self, kind: MessageType) -> bool:
        """Whether messages of this kind are folded into the trace."""
        return kind in TRACER_KINDS or self._integrator.does_handle(kind)

    def handle_header(self, header: Header) -> None:
        """Forward the stream header to the integrator.

        Raises:
            TracerStateError: If a header was already applied.
        """
        if self._phase is not TracerPhase.UNINITIALIZED:
            raise TracerStateError(f"Header received in phase {self._phase.name}")
        self._integrator.handle_header(header)
        self._header = header
        self._phase = TracerPhase.HEADER_APPLIED
        logger.debug("Header applied for map %r", header.map)

    def apply(self, tick: Tick, message: Message, context: Any = None) -> None:
        """Route one stream item.

        Raises:
            TracerStateError: If no header was applied or the trace is finished or aborted.
            TickOrderError: If the tick is lower than one already applied.
            UnexpectedMessageShapeError: If the message lacks its kind's payload.
            IdentityDecodeError: If an identity entry fails under the RAISE policy.
                The tracer is then ABORTED, as for any error raised mid-fold.
        """
        self._require_open()
        kind = message_kind(message)
        if kind not in STRUCTURAL_KINDS and not self.does_handle(kind):
            return

        if kind is MessageType.PACKET_META:
            meta = getattr(message, "meta", None)
            if not isinstance(meta, PacketMeta):
                raise UnexpectedMessageShapeError("Packet meta message carries no PacketMeta")
            self.handle_packet_meta(tick, meta, context)
        elif kind is MessageType.DATA_TABLES:
            self.handle_data_tables(
                getattr(message, "tables", ()),
                getattr(message, "server_classes", ()),
                context,
            )
        else:
            self.handle_message(message, tick, context)

    def handle_message(self, message: Message, tick: Tick, context: Any = None) -> None:
        """Apply one interesting message and extend the series.

        Payload and tick checks run before any effect; failing them leaves the
        tracer usable. Anything raised once the fold has started aborts it.
        """
        self._require_open()
        kind = message_kind(message)
        if not self.does_handle(kind):
            return
        if kind is MessageType.GAME_EVENT:
            require_game_event(message)
        entries = require_entries(message) if kind in STRING_TABLE_KINDS else ()
        self._advance(tick)

        with self._aborting_on_error():
            previous = self._integrator.snapshot_players()
            if kind in STRING_TABLE_KINDS:
                table = self._tables.resolve(message)
                for index, entry in entries:
                    self.handle_string_entry(table, index, entry, context)
            elif self._integrator.does_handle(kind):
                self._integrator.handle_message(message, tick, context)

            self._bounds.observe(tick, self._integrator.snapshot_world())
            self._events.observe(tick, message)
            candidates = merge_continuity(self._integrator.snapshot_players(), previous)
            self._emitter.emit(tick, candidates, self._states)
        self._phase = TracerPhase.FOLDING

    def handle_string_entry(
        self, table: str, index: int, entry: StringTableEntry, context: Any = None
    ) -> None:
        """Forward one string-table entry to the integrator and the roster."""
        self._require_open()
        with self._aborting_on_error():
            self._integrator.handle_string_entry(table, index, entry, context)
            self._roster.handle_string_entry(table, index, entry, context)

    def handle_data_tables(
        self,
        tables: tuple[SendTable, ...],
        server_classes: tuple[ServerClass, ...],
        context: Any = None,
    ) -> None:
        self._require_open()
        self._integrator.handle_data_tables(tables, server_classes, context)

    def handle_packet_meta(self, tick: Tick, meta: PacketMeta, context: Any = None) -> None:
        self._require_open()
        self._advance(tick)
        self._integrator.handle_packet_meta(tick, meta, context)

    def finish(self) -> Trace:
        """Close the fold and hand out the series.

        Returns:
            The finished trace. Its series are immutable.

        Raises:
            TracerStateError: If no header was applied or the trace is already finished.
        """
        self._require_open()
        self._emitter.flush(self._states)
        self._phase = TracerPhase.FINALIZED
        trace = Trace(
            header=self._header,
            roster=self._roster.roster,
            states=tuple(self._states),
            events=tuple(self._events.series),
            bounds=tuple(self._bounds.series),
            decode_failures=self._roster.failures,
        )
        logger.info(
            "Trace finished: %d players, %d states, %d events, %d bounds, %d skipped entries",
            len(trace.roster),
            len(trace.states),
            len(trace.events),
            len(trace.bounds),
            len(trace.decode_failures),
        )
        return trace

    # Read-only views of the series while folding

    @property
    def roster(self) -> tuple[Profile, ...]:
        return self._roster.roster

    @property
    def states(self) -> tuple[WithTick[Snapshot], ...]:
        return tuple(self._states)

    @property
    def events(self) -> tuple[WithTick[PlayerHurtEvent], ...]:
        return tuple(self._events.series)

    @property
    def bounds(self) -> tuple[WithTick[WorldBounds], ...]:
        return tuple(self._bounds.series)

    def _require_open(self) -> None:
        if self._phase is TracerPhase.UNINITIALIZED:
            raise TracerStateError("No header applied yet")
        if self._phase is TracerPhase.FINALIZED:
            raise TracerStateError("Trace already finished")
        if self._phase is TracerPhase.ABORTED:
            raise TracerStateError("Trace aborted by an earlier error")

    @contextmanager
    def _aborting_on_error(self) -> Iterator[None]:
        try:
            yield
        except Exception:
            if self._phase is not TracerPhase.ABORTED:
                logger.debug("Aborting trace at tick %s", self._last_tick)
            self._phase = TracerPhase.ABORTED
            raise

    def _advance(self, tick: Tick) -> None:
        if self._last_tick is not None and tick < self._last_tick:
            raise TickOrderError(tick, self._last_tick)
        self._last_tick = tick
