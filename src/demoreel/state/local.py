"""In-memory reference state integrator.

Tracks player entities and world bounds from decoded entity updates, links
players to identities through the ``userinfo`` table, and applies the health
carried by ``player_hurt`` events.

Usage:
    integrator = GameStateIntegrator()
    integrator.handle_data_tables(tables, server_classes, context)
    integrator.handle_message(entities_message, tick, context)
    players = integrator.snapshot_players()
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from demoreel.core.messages import (
    PVS,
    EntityUpdate,
    GameEventMessage,
    Header,
    Message,
    MessageType,
    PacketEntitiesMessage,
    PacketMeta,
    SendTable,
    ServerClass,
    StringTableEntry,
)
from demoreel.core.records import PlayerClass, PlayerHurtEvent, Snapshot, Team, Vector, WorldBounds
from demoreel.core.types import EntityIndex, Tick
from demoreel.decoding import decode_user_info
from demoreel.errors import IdentityDecodeError, UnexpectedMessageShapeError
from demoreel.state.models import CLASS_IDS, LIFE_STATE_IDS, TEAM_IDS, GameState, Player

logger = logging.getLogger(__name__)

PLAYER_CLASS_NAME = "CTFPlayer"
WORLD_CLASS_NAME = "CWorld"
USERINFO_TABLE = "userinfo"


def _as_vector(value: Any, current: Vector) -> Vector:
    """Coerce a networked vector prop. Two-component origins keep the current z."""
    if isinstance(value, Vector):
        return value
    if isinstance(value, Sequence) and not isinstance(value, str):
        coords = [float(c) for c in value]
        if len(coords) == 2:
            return Vector(coords[0], coords[1], current.z)
        if len(coords) == 3:
            return Vector(*coords)
    raise TypeError(f"Cannot read a vector from {value!r}")


class GameStateIntegrator:
    """Reference StateIntegrator backed by a GameState.

    Args:
        identity_table: Name of the string table holding player identities.
    """

    def __init__(self, identity_table: str = USERINFO_TABLE):
        self.state = GameState()
        self.header: Header | None = None
        self.last_packet_tick: Tick | None = None
        self._identity_table = identity_table
        self._class_names: dict[int, str] = {}

    def does_handle(self, kind: MessageType) -> bool:
        return kind in (MessageType.PACKET_ENTITIES, MessageType.GAME_EVENT)

    def handle_header(self, header: Header) -> None:
        self.header = header

    def handle_message(self, message: Message, tick: Tick, context: Any) -> None:
        if isinstance(message, PacketEntitiesMessage):
            self._handle_entities(message)
        elif isinstance(message, GameEventMessage):
            event = message.event
            if isinstance(event, PlayerHurtEvent):
                player = self.state.find_by_user_id(event.user_id)
                if player is not None:
                    player.health = event.health

    def handle_string_entry(
        self, table: str, index: int, entry: StringTableEntry, context: Any
    ) -> None:
        if table != self._identity_table:
            return
        try:
            info = decode_user_info(index, entry.text, entry.extra_data)
        except IdentityDecodeError as e:
            # The roster records decode failures; the model just keeps the slot unlinked
            logger.debug("Leaving entity %d unlinked: %s", index + 1, e.reason)
            return
        if info is not None:
            self.state.get_or_create_player(info.entity).info = info.profile

    def handle_data_tables(
        self,
        tables: tuple[SendTable, ...],
        server_classes: tuple[ServerClass, ...],
        context: Any,
    ) -> None:
        self._class_names = {server_class.id: server_class.name for server_class in server_classes}

    def handle_packet_meta(self, tick: Tick, meta: PacketMeta, context: Any) -> None:
        self.last_packet_tick = tick

    def snapshot_players(self) -> list[Snapshot]:
        return [player.snapshot() for player in self.state.players]

    def snapshot_world(self) -> WorldBounds | None:
        return self.state.world

    def _handle_entities(self, message: PacketEntitiesMessage) -> None:
        for update in message.entities:
            class_name = self._class_names.get(update.class_id)
            try:
                if class_name == PLAYER_CLASS_NAME:
                    self._handle_player_update(update)
                elif class_name == WORLD_CLASS_NAME:
                    self._handle_world_update(update)
            except (TypeError, ValueError) as e:
                raise UnexpectedMessageShapeError(
                    f"Malformed prop on {class_name} entity {update.entity}: {e}"
                ) from e
        for entity in message.removed:
            self._remove_player(entity)

    def _remove_player(self, entity: EntityIndex) -> None:
        if self.state.remove_player(entity):
            logger.debug("Removed player entity %d", entity)

    def _handle_player_update(self, update: EntityUpdate) -> None:
        if update.pvs is PVS.DELETE:
            self._remove_player(update.entity)
            return

        player = self.state.get_or_create_player(update.entity)
        player.in_pvs = update.pvs is not PVS.LEAVE
        self._apply_player_props(player, update.props)

    def _apply_player_props(self, player: Player, props: dict[str, Any]) -> None:
        for name, value in props.items():
            if name == "m_vecOrigin":
                player.position = _as_vector(value, player.position)
            elif name == "m_vecOrigin[2]":
                player.position = Vector(player.position.x, player.position.y, float(value))
            elif name == "m_iHealth":
                player.health = int(value)
            elif name == "m_iMaxHealth":
                player.max_health = int(value)
            elif name == "m_iClass":
                player.player_class = CLASS_IDS.get(int(value), PlayerClass.OTHER)
            elif name == "m_iTeamNum":
                player.team = TEAM_IDS.get(int(value), Team.OTHER)
            elif name == "m_angEyeAngles[0]":
                player.pitch_angle = float(value)
            elif name == "m_angEyeAngles[1]":
                player.view_angle = float(value)
            elif name == "m_lifeState":
                player.state = LIFE_STATE_IDS.get(int(value), player.state)
            elif name == "m_flChargeLevel":
                player.charge = round(float(value) * 100)
            elif name == "m_flSimulationTime":
                player.simtime = int(value)

    def _handle_world_update(self, update: EntityUpdate) -> None:
        world = self.state.world
        boundary_min = world.boundary_min if world is not None else Vector()
        boundary_max = world.boundary_max if world is not None else Vector()
        if "m_WorldMins" in update.props:
            boundary_min = _as_vector(update.props["m_WorldMins"], boundary_min)
        if "m_WorldMaxs" in update.props:
            boundary_max = _as_vector(update.props["m_WorldMaxs"], boundary_max)
        self.state.world = WorldBounds(boundary_min=boundary_min, boundary_max=boundary_max)
