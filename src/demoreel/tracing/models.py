"""Tracing models: tracer phases, policies and the finished trace."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from demoreel.core.messages import Header
from demoreel.core.records import PlayerHurtEvent, Profile, Snapshot, WithTick, WorldBounds
from demoreel.errors import IdentityDecodeError

if TYPE_CHECKING:
    from demoreel.tracing.merge import SnapshotEmitter


class TracerPhase(Enum):
    """Lifecycle of a tracer. Transitions only move forward.

    FINALIZED and ABORTED are terminal.
    """

    UNINITIALIZED = auto()
    """No header yet. Messages are rejected."""

    HEADER_APPLIED = auto()
    """Header forwarded to the integrator; no interesting message applied yet."""

    FOLDING = auto()
    """At least one interesting message applied."""

    FINALIZED = auto()
    """Series handed out. The tracer accepts nothing further."""

    ABORTED = auto()
    """A message failed part-way through the fold. The series are incomplete
    and the tracer accepts nothing further."""


class DecodeErrorPolicy(Enum):
    """What the roster does with an identity entry that fails to decode."""

    SKIP = "skip"
    """Record the failure, log it, and keep tracing."""

    RAISE = "raise"
    """Propagate IdentityDecodeError and abort the trace."""


class EmitPolicy(Enum):
    """When player state rows are emitted."""

    PER_MESSAGE = "per_message"
    """One row per linked player for every applied message. Ticks may repeat."""

    PER_TICK = "per_tick"
    """One row per linked player per tick, holding the last value seen in that tick."""

    def get_emitter(self) -> SnapshotEmitter:
        """Get a fresh emitter implementing this policy."""
        # Late import to avoid circular dependency
        from demoreel.tracing import merge

        emitters = {
            EmitPolicy.PER_MESSAGE: merge.PerMessageEmitter,
            EmitPolicy.PER_TICK: merge.PerTickEmitter,
        }
        return emitters[self]()


@dataclass(frozen=True, slots=True)
class Trace:
    """The four series of a finished trace, plus skipped identity entries.

    Every series may be empty. Timeline series are ordered by emission, which
    is non-decreasing in tick.

    Attributes:
        header: Stream header the trace started from.
        roster: One profile per identity, in first-seen order.
        states: Player state rows.
        events: Damage events.
        bounds: World bounds, one row per change.
        decode_failures: Identity entries skipped because they failed to decode.
    """

    header: Header | None
    roster: tuple[Profile, ...] = ()
    states: tuple[WithTick[Snapshot], ...] = ()
    events: tuple[WithTick[PlayerHurtEvent], ...] = ()
    bounds: tuple[WithTick[WorldBounds], ...] = ()
    decode_failures: tuple[IdentityDecodeError, ...] = ()
