"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from demoreel import (
    EntityUpdate,
    Header,
    MessageType,
    PacketEntitiesMessage,
    Profile,
    Snapshot,
    StringTableEntry,
    TraceSettings,
)
from demoreel.decoding import encode_player_info


class ScriptedIntegrator:
    """StateIntegrator double driven by whole snapshots.

    Entity updates carry a complete Snapshot under props["snapshot"] and/or
    WorldBounds under props["world"]; removed entities disappear from the view.
    """

    def __init__(self) -> None:
        self.players: dict[int, Snapshot] = {}
        self.world = None
        self.header = None
        self.calls: list[tuple] = []

    def does_handle(self, kind):
        return kind is MessageType.PACKET_ENTITIES

    def handle_header(self, header):
        self.header = header

    def handle_message(self, message, tick, context):
        self.calls.append(("message", tick, context))
        for update in message.entities:
            if "snapshot" in update.props:
                self.players[update.entity] = update.props["snapshot"]
            if "world" in update.props:
                self.world = update.props["world"]
        for entity in message.removed:
            self.players.pop(entity, None)

    def handle_string_entry(self, table, index, entry, context):
        self.calls.append(("string_entry", table, index, context))

    def handle_data_tables(self, tables, server_classes, context):
        self.calls.append(("data_tables", len(tables), len(server_classes)))

    def handle_packet_meta(self, tick, meta, context):
        self.calls.append(("packet_meta", tick))

    def snapshot_players(self):
        return list(self.players.values())

    def snapshot_world(self):
        return self.world


@pytest.fixture
def settings():
    """Default settings, isolated from .env files."""
    return TraceSettings(_env_file=None)


@pytest.fixture
def header():
    return Header(server="Team Comtress SourceTV", nick="SourceTV", map="cp_badlands", ticks=1000)


@pytest.fixture(scope="session")
def integrator_class():
    """ScriptedIntegrator class, for tests that build several integrators."""
    return ScriptedIntegrator


@pytest.fixture
def integrator():
    """Fresh scripted integrator."""
    return ScriptedIntegrator()


@pytest.fixture
def userinfo_entry():
    """Factory: userinfo entry for a player."""

    def make(user_id: int, name: str, steam_id: str | None = None, **kwargs) -> StringTableEntry:
        profile = Profile(
            name=name,
            user_id=user_id,
            steam_id=steam_id or f"[U:1:{user_id}]",
            **kwargs,
        )
        return StringTableEntry(text=str(user_id), extra_data=encode_player_info(profile))

    return make


@pytest.fixture
def entities():
    """Factory: PacketEntitiesMessage setting scripted snapshots by entity slot."""

    def make(*players: tuple[int, Snapshot], world=None, removed=()) -> PacketEntitiesMessage:
        updates = [EntityUpdate(entity=e, class_id=0, props={"snapshot": s}) for e, s in players]
        if world is not None:
            updates.append(EntityUpdate(entity=0, class_id=0, props={"world": world}))
        return PacketEntitiesMessage(entities=tuple(updates), removed=tuple(removed))

    return make
