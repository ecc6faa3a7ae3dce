import logging

from demoreel import (
    PVS,
    CreateStringTableMessage,
    DataTablesMessage,
    EntityUpdate,
    GameEventMessage,
    Header,
    MemorySource,
    PacketEntitiesMessage,
    PlayerHurtEvent,
    Profile,
    ServerClass,
    StringTable,
    StringTableEntry,
    dtrace,
    is_pov,
)
from demoreel.decoding import encode_player_info

PLAYER_CLASS = 1
WORLD_CLASS = 2


def userinfo(user_id: int, name: str) -> StringTableEntry:
    """Identity table entry as a decoder would deliver it."""
    profile = Profile(name=name, user_id=user_id, steam_id=f"[U:1:{1000 + user_id}]")
    return StringTableEntry(text=str(user_id), extra_data=encode_player_info(profile))


def build_source() -> MemorySource:
    """A few ticks of a match: a soldier rocket-jumps and a scout takes a hit."""
    source = MemorySource(header=Header(server="Team Comtress SourceTV", map="cp_gullywash_final1"))
    source.push(
        0,
        DataTablesMessage(
            server_classes=(
                ServerClass(id=PLAYER_CLASS, name="CTFPlayer"),
                ServerClass(id=WORLD_CLASS, name="CWorld"),
            )
        ),
    )
    source.push(
        1,
        CreateStringTableMessage(
            table=StringTable(name="userinfo", entries=((0, userinfo(11, "soldier")), (1, userinfo(12, "scout"))))
        ),
    )
    source.push(
        2,
        PacketEntitiesMessage(
            entities=(
                EntityUpdate(
                    entity=0,
                    class_id=WORLD_CLASS,
                    props={"m_WorldMins": (-6144, -4096, -1024), "m_WorldMaxs": (6144, 4096, 1024)},
                ),
                EntityUpdate(
                    entity=1,
                    class_id=PLAYER_CLASS,
                    pvs=PVS.ENTER,
                    props={"m_vecOrigin": (0.0, 0.0), "m_iHealth": 200, "m_iClass": 3, "m_iTeamNum": 3},
                ),
                EntityUpdate(
                    entity=2,
                    class_id=PLAYER_CLASS,
                    pvs=PVS.ENTER,
                    props={"m_vecOrigin": (512.0, 64.0), "m_iHealth": 125, "m_iClass": 1, "m_iTeamNum": 2},
                ),
            )
        ),
    )
    for tick, z in ((3, 180.0), (4, 310.0), (5, 120.0)):
        source.push(
            tick,
            PacketEntitiesMessage(
                entities=(EntityUpdate(entity=1, class_id=PLAYER_CLASS, props={"m_vecOrigin[2]": z}),)
            ),
        )
    source.push(
        5,
        GameEventMessage(
            event=PlayerHurtEvent(user_id=12, health=35, attacker=11, damage_amount=90, mini_crit=True)
        ),
    )
    return source


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    source = build_source()
    print(f"Point-of-view demo: {is_pov(source.header)}")

    trace = dtrace(source)

    for profile in trace.roster:
        print(f"Player {profile.user_id}: {profile.name} ({profile.steam_id})")
    for row in trace.states:
        state = row.inner
        print(
            f"[{row.tick:>3}] user {state.user_id} {state.player_class.value:<8} "
            f"hp={state.health:<3} z={state.position.z:.0f}"
        )
    for row in trace.events:
        print(f"[{row.tick:>3}] {row.inner.attacker} hit {row.inner.user_id} for {row.inner.damage_amount}")
    print(f"World bounds changes: {len(trace.bounds)}")


if __name__ == "__main__":
    main()
