"""Trace records: profiles, player snapshots, world bounds and damage events."""

from demoreel.core.records.models import (
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

__all__ = [
    "Vector",
    "PlayerClass",
    "Team",
    "LifeState",
    "Profile",
    "Snapshot",
    "WorldBounds",
    "PlayerHurtEvent",
    "WithTick",
]
