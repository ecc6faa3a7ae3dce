"""Trace record models.

Every record is a flat, frozen, slotted dataclass with no references back to
the live game state, so a series of them can be decomposed column-wise
without further processing.

Usage:
    profile = Profile(name="alice", user_id=1, steam_id="[U:1:1]", friends_id=1)
    row = WithTick(tick=100, inner=profile)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from demoreel.core.types import Tick, UserId


@dataclass(frozen=True, slots=True)
class Vector:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class PlayerClass(Enum):
    """Player class, valued by its trace label."""

    SCOUT = "scout"
    SOLDIER = "soldier"
    PYRO = "pyro"
    DEMOMAN = "demoman"
    HEAVY = "heavy"
    ENGINEER = "engineer"
    MEDIC = "medic"
    SNIPER = "sniper"
    SPY = "spy"
    OTHER = "other"


class Team(Enum):
    """Team membership, valued by its trace label."""

    BLU = "blu"
    RED = "red"
    SPECTATOR = "spectator"
    OTHER = "other"


class LifeState(Enum):
    """Player life state. RESPAWNABLE is labelled "queue" in traces."""

    ALIVE = "alive"
    DYING = "dying"
    DEATH = "death"
    RESPAWNABLE = "queue"


@dataclass(frozen=True, slots=True)
class Profile:
    """Identity metadata for one player, created the first time it is seen.

    A profile is never updated after creation. Later string-table updates for
    the same user_id are discarded by the roster.

    Attributes:
        name: Display name.
        user_id: Stable identity handle for the trace.
        steam_id: Platform id string.
        friends_id: Numeric friend id.
        is_fake_player: Bot client.
        is_hl_tv: SourceTV client.
        is_replay: Replay client.
        custom_file: CRCs of the player's custom files (spray etc.).
        files_downloaded: Download bookkeeping counter.
        more_extra: Trailing flag byte of the player info block.
    """

    name: str
    user_id: UserId
    steam_id: str
    friends_id: int = 0
    is_fake_player: bool = False
    is_hl_tv: bool = False
    is_replay: bool = False
    custom_file: tuple[int, int, int, int] = (0, 0, 0, 0)
    files_downloaded: int = 0
    more_extra: bool = False


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One observation of a player's mutable state.

    Attributes:
        position: World position.
        health: Current health.
        max_health: Maximum health.
        player_class: Selected class.
        team: Team membership.
        view_angle: Yaw in degrees.
        pitch_angle: Pitch in degrees.
        state: Life state.
        user_id: Linked identity, None until the player's userinfo entry is seen.
        charge: Charge meter (medigun uber, demo charge) in percent.
        in_pvs: Whether the entity is in the recorder's potentially visible set.
        simtime: Entity simulation time, in ticks.
    """

    position: Vector = Vector()
    health: int = 0
    max_health: int = 0
    player_class: PlayerClass = PlayerClass.OTHER
    team: Team = Team.OTHER
    view_angle: float = 0.0
    pitch_angle: float = 0.0
    state: LifeState = LifeState.ALIVE
    user_id: UserId | None = None
    charge: int = 0
    in_pvs: bool = False
    simtime: int = 0


@dataclass(frozen=True, slots=True)
class WorldBounds:
    """Map extents. Two bounds are the same when their corners are equal."""

    boundary_min: Vector
    boundary_max: Vector


@dataclass(frozen=True, slots=True)
class PlayerHurtEvent:
    """Payload of a ``player_hurt`` game event, copied verbatim into the trace."""

    user_id: UserId
    health: int
    attacker: UserId
    damage_amount: int
    custom: int = 0
    show_disguised_crit: bool = False
    crit: bool = False
    mini_crit: bool = False
    all_see_crit: bool = False
    weapon_id: int = 0
    bonus_effect: int = 0


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class WithTick(Generic[T]):
    """Pairs a record with the tick it was observed at."""

    tick: Tick
    inner: T
