"""End-to-end traces over in-memory streams with the reference integrator.

Why these tests exist:
- dtrace, roster and is_pov are the entry points callers actually use
- The reference integrator and the tracer must agree on identities
"""

import logging

import pytest

from demoreel import (
    PVS,
    CreateStringTableMessage,
    DataTablesMessage,
    EntityUpdate,
    GameEventMessage,
    GenericGameEvent,
    Header,
    MemorySource,
    NetTickMessage,
    PacketEntitiesMessage,
    PacketMetaMessage,
    PlayerClass,
    PlayerHurtEvent,
    PrintMessage,
    ServerClass,
    ServerInfoMessage,
    SourceError,
    StringTable,
    StringTableEntry,
    Team,
    TickOrderError,
    TraceSettings,
    UpdateStringTableMessage,
    Vector,
    WorldBounds,
    dtrace,
    is_pov,
    roster,
)

PLAYER = 246
WORLD = 274


def player(entity, pvs=PVS.PRESERVE, **props):
    return EntityUpdate(entity=entity, class_id=PLAYER, pvs=pvs, props=props)


@pytest.fixture
def match(header, userinfo_entry):
    """A short match: two players join, fight, one leaves view and returns."""
    source = MemorySource(header=header)
    source.push(
        0,
        DataTablesMessage(
            server_classes=(ServerClass(id=PLAYER, name="CTFPlayer"), ServerClass(id=WORLD, name="CWorld")),
        ),
    )
    source.extend(
        1,
        ServerInfoMessage(map="cp_badlands", max_player_count=24),
        CreateStringTableMessage(table=StringTable(name="downloadables")),
        CreateStringTableMessage(
            table=StringTable(
                name="userinfo",
                entries=((0, userinfo_entry(2, "alice")), (1, userinfo_entry(3, "bob"))),
            )
        ),
    )
    source.extend(
        2,
        NetTickMessage(tick=2),
        PacketEntitiesMessage(
            entities=(
                EntityUpdate(
                    entity=0,
                    class_id=WORLD,
                    props={"m_WorldMins": (-5000, -5000, -800), "m_WorldMaxs": (5000, 5000, 800)},
                ),
                player(1, PVS.ENTER, m_iHealth=125, m_iClass=1, m_iTeamNum=3),
                player(2, PVS.ENTER, m_iHealth=300, m_iClass=6, m_iTeamNum=2),
            )
        ),
    )
    source.extend(
        3,
        PacketMetaMessage(),
        GameEventMessage(event=PlayerHurtEvent(user_id=2, health=20, attacker=3, damage_amount=105)),
        PrintMessage(value="ignored"),
    )
    source.extend(
        4,
        PacketEntitiesMessage(removed=(2,)),
        UpdateStringTableMessage(table_id=1, entries=((1, userinfo_entry(3, "bobby")),)),
    )
    source.extend(
        5,
        GameEventMessage(event=GenericGameEvent(name="player_death", values={"userid": 2})),
        PacketEntitiesMessage(
            entities=(
                EntityUpdate(
                    entity=0,
                    class_id=WORLD,
                    props={"m_WorldMins": (-5000, -5000, -800), "m_WorldMaxs": (5000, 5000, 800)},
                ),
            )
        ),
    )
    return source


def test_dtrace_roster(match, settings):
    trace = dtrace(match, settings=settings)

    assert [(p.user_id, p.name) for p in trace.roster] == [(2, "alice"), (3, "bob")]


def test_dtrace_states(match, settings):
    trace = dtrace(match, settings=settings)

    rows = [(row.tick, row.inner.user_id, row.inner.health) for row in trace.states]
    assert rows == [
        # userinfo entries create both player slots before any entity update
        (1, 2, 0),
        (1, 3, 0),
        (2, 2, 125),
        (2, 3, 300),
        (3, 2, 20),
        (3, 3, 300),
        # bob leaves the live view and is carried forward once
        (4, 2, 20),
        (4, 3, 300),
        # the identity update recreates bob's slot with default state
        (4, 2, 20),
        (4, 3, 0),
        (5, 2, 20),
        (5, 3, 0),
        (5, 2, 20),
        (5, 3, 0),
    ]
    scout = trace.states[2].inner
    assert scout.player_class is PlayerClass.SCOUT
    assert scout.team is Team.BLU
    assert scout.in_pvs


def test_dtrace_events_and_bounds(match, settings):
    trace = dtrace(match, settings=settings)

    assert [(row.tick, row.inner.damage_amount) for row in trace.events] == [(3, 105)]
    assert [(row.tick, row.inner) for row in trace.bounds] == [
        (2, WorldBounds(Vector(-5000, -5000, -800), Vector(5000, 5000, 800))),
    ]
    assert trace.decode_failures == ()


def test_dtrace_per_tick(match):
    trace = dtrace(match, settings=TraceSettings(_env_file=None, emit_on="per_tick"))

    rows = [(row.tick, row.inner.user_id, row.inner.health) for row in trace.states]
    assert rows == [
        (1, 2, 0),
        (1, 3, 0),
        (2, 2, 125),
        (2, 3, 300),
        (3, 2, 20),
        (3, 3, 300),
        (4, 2, 20),
        (4, 3, 0),
        (5, 2, 20),
        (5, 3, 0),
    ]


def test_dtrace_logs_summary(match, settings, caplog):
    with caplog.at_level(logging.INFO, logger="demoreel"):
        dtrace(match, settings=settings)

    assert "Trace finished: 2 players, 14 states, 1 events, 1 bounds, 0 skipped entries" in caplog.text


def test_dtrace_with_custom_integrator(header, integrator, settings):
    source = MemorySource(header=header, context="ctx")
    source.push(1, PacketEntitiesMessage())

    dtrace(source, integrator=integrator, settings=settings)

    assert integrator.header == header
    assert integrator.calls == [("message", 1, "ctx")]


def test_dtrace_empty_stream(header, settings):
    trace = dtrace(MemorySource(header=header), settings=settings)

    assert (trace.roster, trace.states, trace.events, trace.bounds) == ((), (), (), ())


def test_dtrace_rejects_reordered_ticks(header, settings):
    source = MemorySource(header=header)
    source.push(5, GameEventMessage(event=GenericGameEvent(name="a")))
    source.push(4, GameEventMessage(event=GenericGameEvent(name="b")))

    with pytest.raises(TickOrderError):
        dtrace(source, settings=settings)


def test_dtrace_propagates_source_errors(header, settings):
    class BrokenSource:
        def __init__(self):
            self.header = header

        def __iter__(self):
            yield 1, PrintMessage(value="ok"), None
            raise SourceError("truncated frame")

    with pytest.raises(SourceError, match="truncated"):
        dtrace(BrokenSource(), settings=settings)


def test_roster_only(match, settings):
    profiles = roster(match, settings=settings)

    assert [p.name for p in profiles] == ["alice", "bob"]


def test_roster_only_skips_bad_entries(header, settings, userinfo_entry):
    source = MemorySource(header=header)
    source.push(
        1,
        CreateStringTableMessage(
            table=StringTable(
                name="userinfo",
                entries=((0, StringTableEntry(text="x", extra_data=b"\x00" * 10)), (1, userinfo_entry(8, "dan"))),
            )
        ),
    )

    assert [p.user_id for p in roster(source, settings=settings)] == [8]


@pytest.mark.parametrize(
    "server, expected",
    [
        ("192.168.1.10:27015", True),
        ("localhost:27015", True),
        ("Team Comtress SourceTV", False),
        (":27015", False),
        ("host:", False),
        ("host:port", False),
        ("host:70000", False),
        ("host:２７０１５", False),
        ("", False),
    ],
)
def test_is_pov(server, expected):
    assert is_pov(Header(server=server)) is expected
