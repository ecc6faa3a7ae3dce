"""Live game state models owned by the integrator.

Unlike the trace records these are mutable and updated in place as entity
updates arrive. ``Player.snapshot()`` projects one into an immutable record.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from demoreel.core.records import LifeState, PlayerClass, Profile, Snapshot, Team, Vector, WorldBounds
from demoreel.core.types import EntityIndex, UserId

# Wire ids of classes, teams and life states as the game networks them
CLASS_IDS: dict[int, PlayerClass] = {
    1: PlayerClass.SCOUT,
    2: PlayerClass.SNIPER,
    3: PlayerClass.SOLDIER,
    4: PlayerClass.DEMOMAN,
    5: PlayerClass.MEDIC,
    6: PlayerClass.HEAVY,
    7: PlayerClass.PYRO,
    8: PlayerClass.SPY,
    9: PlayerClass.ENGINEER,
}

TEAM_IDS: dict[int, Team] = {
    1: Team.SPECTATOR,
    2: Team.RED,
    3: Team.BLU,
}

LIFE_STATE_IDS: dict[int, LifeState] = {
    0: LifeState.ALIVE,
    1: LifeState.DYING,
    2: LifeState.DEATH,
    3: LifeState.RESPAWNABLE,
}


@dataclass(slots=True)
class Player:
    """A player entity as currently known to the integrator.

    Attributes:
        entity: Entity slot.
        info: Identity profile, linked once the slot's userinfo entry is seen.
    """

    entity: EntityIndex
    position: Vector = field(default_factory=Vector)
    health: int = 0
    max_health: int = 0
    player_class: PlayerClass = PlayerClass.OTHER
    team: Team = Team.OTHER
    view_angle: float = 0.0
    pitch_angle: float = 0.0
    state: LifeState = LifeState.ALIVE
    info: Profile | None = None
    charge: int = 0
    simtime: int = 0
    in_pvs: bool = False

    @property
    def user_id(self) -> UserId | None:
        return self.info.user_id if self.info is not None else None

    def snapshot(self) -> Snapshot:
        """Project into an immutable trace record."""
        return Snapshot(
            position=self.position,
            health=self.health,
            max_health=self.max_health,
            player_class=self.player_class,
            team=self.team,
            view_angle=self.view_angle,
            pitch_angle=self.pitch_angle,
            state=self.state,
            user_id=self.user_id,
            charge=self.charge,
            in_pvs=self.in_pvs,
            simtime=self.simtime,
        )


@dataclass(slots=True)
class GameState:
    """Everything the integrator knows: players in first-seen order and the world."""

    players: list[Player] = field(default_factory=list)
    world: WorldBounds | None = None

    def get_player(self, entity: EntityIndex) -> Player | None:
        for player in self.players:
            if player.entity == entity:
                return player
        return None

    def get_or_create_player(self, entity: EntityIndex) -> Player:
        player = self.get_player(entity)
        if player is None:
            player = Player(entity=entity)
            self.players.append(player)
        return player

    def find_by_user_id(self, user_id: UserId) -> Player | None:
        for player in self.players:
            if player.user_id == user_id:
                return player
        return None

    def remove_player(self, entity: EntityIndex) -> bool:
        """Remove a player entity. Returns True if it existed."""
        for i, player in enumerate(self.players):
            if player.entity == entity:
                del self.players[i]
                return True
        return False
