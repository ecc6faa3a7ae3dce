"""Snapshot continuity merging and state row emission.

After each message the tracer has the player view from before and after it.
``merge_continuity`` reconciles the two so a player that drops out of the
live view for a single message is still reported. An emitter then turns the
merged candidates into state rows according to the emission policy.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from demoreel.core.records import Snapshot, WithTick
from demoreel.core.types import Tick, UserId


def merge_continuity(
    current: Sequence[Snapshot],
    previous: Sequence[Snapshot],
) -> list[Snapshot]:
    """Union the current and previous player views, keyed by user id.

    Current players are walked first, then previous ones; only the first
    occurrence of each user id is kept, so current values win and a previous
    player missing from the current view is carried forward unchanged.
    Players without a linked user id are not keyed and are all kept.

    Args:
        current: Player view after the message was applied.
        previous: Player view before the message was applied.

    Returns:
        Merged candidates, current order first.
    """
    merged: list[Snapshot] = []
    seen: set[UserId] = set()
    for snapshot in (*current, *previous):
        if snapshot.user_id is None:
            merged.append(snapshot)
        elif snapshot.user_id not in seen:
            seen.add(snapshot.user_id)
            merged.append(snapshot)
    return merged


@runtime_checkable
class SnapshotEmitter(Protocol):
    """Turns merged candidates into state rows.

    Only candidates with a linked user id become rows. Emitters append to the
    series they are given and never reorder rows already in it.
    """

    def emit(
        self,
        tick: Tick,
        candidates: Sequence[Snapshot],
        states: list[WithTick[Snapshot]],
    ) -> None:
        """Handle the candidates produced by one applied message."""
        ...

    def flush(self, states: list[WithTick[Snapshot]]) -> None:
        """Append anything still held back. Called once when the trace finishes."""
        ...


class PerMessageEmitter:
    """Emit a row for every linked candidate of every message."""

    def emit(
        self,
        tick: Tick,
        candidates: Sequence[Snapshot],
        states: list[WithTick[Snapshot]],
    ) -> None:
        for snapshot in candidates:
            if snapshot.user_id is not None:
                states.append(WithTick(tick=tick, inner=snapshot))

    def flush(self, states: list[WithTick[Snapshot]]) -> None:
        pass


class PerTickEmitter:
    """Emit one row per linked player per tick.

    Rows are held until the tick advances. Within a tick a player keeps the
    position of its first appearance and the value of its last.
    """

    def __init__(self) -> None:
        self._tick: Tick | None = None
        self._pending: dict[UserId, Snapshot] = {}

    def emit(
        self,
        tick: Tick,
        candidates: Sequence[Snapshot],
        states: list[WithTick[Snapshot]],
    ) -> None:
        if self._tick is not None and tick != self._tick:
            self.flush(states)
        self._tick = tick
        for snapshot in candidates:
            if snapshot.user_id is not None:
                self._pending[snapshot.user_id] = snapshot

    def flush(self, states: list[WithTick[Snapshot]]) -> None:
        if self._tick is not None:
            for snapshot in self._pending.values():
                states.append(WithTick(tick=self._tick, inner=snapshot))
        self._pending.clear()
