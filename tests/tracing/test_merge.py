"""Tests for continuity merging and state row emitters."""

from demoreel import EmitPolicy, Snapshot, WithTick
from demoreel.tracing import PerMessageEmitter, PerTickEmitter, SnapshotEmitter, merge_continuity


def snap(user_id, health=100):
    return Snapshot(user_id=user_id, health=health)


class TestMergeContinuity:
    def test_current_wins_over_previous(self):
        merged = merge_continuity([snap(1, 40)], [snap(1, 100)])

        assert merged == [snap(1, 40)]

    def test_previous_carried_forward(self):
        """A player missing from the current view is still a candidate."""
        merged = merge_continuity([snap(1)], [snap(1, 90), snap(5, 75)])

        assert merged == [snap(1), snap(5, 75)]

    def test_current_order_first(self):
        merged = merge_continuity([snap(3), snap(1)], [snap(2), snap(3, 10)])

        assert [s.user_id for s in merged] == [3, 1, 2]

    def test_unlinked_players_all_kept(self):
        unlinked = Snapshot(user_id=None, health=50)

        merged = merge_continuity([unlinked, snap(1)], [unlinked])

        assert merged == [unlinked, snap(1), unlinked]

    def test_empty_views(self):
        assert merge_continuity([], []) == []


class TestEmitters:
    def test_policies_build_emitters(self):
        assert isinstance(EmitPolicy.PER_MESSAGE.get_emitter(), PerMessageEmitter)
        assert isinstance(EmitPolicy.PER_TICK.get_emitter(), PerTickEmitter)
        assert isinstance(EmitPolicy.PER_TICK.get_emitter(), SnapshotEmitter)

    def test_policy_emitters_are_fresh(self):
        assert EmitPolicy.PER_TICK.get_emitter() is not EmitPolicy.PER_TICK.get_emitter()

    def test_per_message_emits_linked_candidates(self):
        states = []
        emitter = PerMessageEmitter()

        emitter.emit(7, [snap(1), Snapshot(user_id=None), snap(2)], states)
        emitter.emit(7, [snap(1, 20)], states)
        emitter.flush(states)

        assert states == [
            WithTick(tick=7, inner=snap(1)),
            WithTick(tick=7, inner=snap(2)),
            WithTick(tick=7, inner=snap(1, 20)),
        ]

    def test_per_tick_holds_rows_until_tick_changes(self):
        states = []
        emitter = PerTickEmitter()

        emitter.emit(7, [snap(1), snap(2)], states)
        emitter.emit(7, [snap(1, 20)], states)
        assert states == []

        emitter.emit(8, [snap(2, 5)], states)
        assert states == [WithTick(tick=7, inner=snap(1, 20)), WithTick(tick=7, inner=snap(2))]

        emitter.flush(states)
        assert states[-1] == WithTick(tick=8, inner=snap(2, 5))
        assert len(states) == 3

    def test_per_tick_flush_without_rows(self):
        states = []
        PerTickEmitter().flush(states)

        assert states == []
