"""Tests for roster tracking and string-table name resolution."""

import pytest

from demoreel import (
    CreateStringTableMessage,
    DecodeErrorPolicy,
    IdentityDecodeError,
    MessageType,
    PrintMessage,
    StringTable,
    StringTableEntry,
    UnexpectedMessageShapeError,
    UpdateStringTableMessage,
)
from demoreel.tracing import RosterTracker, StringTableRegistry


class TestStringTableRegistry:
    def test_creations_register_in_order(self):
        registry = StringTableRegistry()

        assert registry.resolve(CreateStringTableMessage(table=StringTable(name="downloadables"))) == "downloadables"
        assert registry.resolve(CreateStringTableMessage(table=StringTable(name="userinfo"))) == "userinfo"
        assert len(registry) == 2

    def test_updates_resolve_by_creation_index(self):
        registry = StringTableRegistry()
        registry.resolve(CreateStringTableMessage(table=StringTable(name="downloadables")))
        registry.resolve(CreateStringTableMessage(table=StringTable(name="userinfo")))

        assert registry.resolve(UpdateStringTableMessage(table_id=1)) == "userinfo"
        assert registry.resolve(UpdateStringTableMessage(table_id=0)) == "downloadables"

    @pytest.mark.parametrize("table_id", [1, 5, -1])
    def test_unknown_table_rejected(self, table_id):
        registry = StringTableRegistry()
        registry.resolve(CreateStringTableMessage(table=StringTable(name="userinfo")))

        with pytest.raises(UnexpectedMessageShapeError):
            registry.resolve(UpdateStringTableMessage(table_id=table_id))

    def test_other_messages_rejected(self):
        with pytest.raises(UnexpectedMessageShapeError):
            StringTableRegistry().resolve(PrintMessage(value="hi"))


class TestRosterTracker:
    def test_first_seen_wins(self, userinfo_entry):
        """Reconnects and renames keep the first profile seen for a user id."""
        tracker = RosterTracker()
        tracker.handle_string_entry("userinfo", 0, userinfo_entry(1, "alice"), None)
        tracker.handle_string_entry("userinfo", 1, userinfo_entry(2, "bob"), None)
        tracker.handle_string_entry("userinfo", 5, userinfo_entry(1, "carol"), None)

        assert [p.name for p in tracker.roster] == ["alice", "bob"]
        assert len(tracker) == 2
        assert 1 in tracker
        assert 3 not in tracker

    def test_ignores_other_tables(self, userinfo_entry):
        tracker = RosterTracker()
        tracker.handle_string_entry("instancebaseline", 0, userinfo_entry(1, "alice"), None)

        assert tracker.roster == ()

    def test_custom_identity_table(self, userinfo_entry):
        tracker = RosterTracker(identity_table="players")
        tracker.handle_string_entry("userinfo", 0, userinfo_entry(1, "alice"), None)
        tracker.handle_string_entry("players", 0, userinfo_entry(2, "bob"), None)

        assert [p.user_id for p in tracker.roster] == [2]

    def test_empty_slot_ignored(self):
        tracker = RosterTracker()
        tracker.handle_string_entry("userinfo", 3, StringTableEntry(text="3"), None)

        assert tracker.roster == ()
        assert tracker.failures == ()

    def test_skip_policy_records_failure(self, userinfo_entry, caplog):
        tracker = RosterTracker(on_decode_error=DecodeErrorPolicy.SKIP)
        tracker.handle_string_entry("userinfo", 4, StringTableEntry(text="4", extra_data=b"\xff" * 8), None)
        tracker.handle_string_entry("userinfo", 5, userinfo_entry(2, "bob"), None)

        assert [p.name for p in tracker.roster] == ["bob"]
        assert [f.index for f in tracker.failures] == [4]
        assert "Skipping userinfo entry 4" in caplog.text

    def test_raise_policy_propagates(self):
        tracker = RosterTracker(on_decode_error=DecodeErrorPolicy.RAISE)

        with pytest.raises(IdentityDecodeError) as exc_info:
            tracker.handle_string_entry("userinfo", 4, StringTableEntry(text="4", extra_data=b"\xff"), None)
        assert exc_info.value.index == 4

    def test_custom_decoder(self, userinfo_entry):
        """The decoder is injectable, e.g. for other games' identity layouts."""
        seen = []

        def decoder(index, text, data):
            seen.append((index, text))
            return None

        tracker = RosterTracker(decoder=decoder)
        tracker.handle_string_entry("userinfo", 7, userinfo_entry(1, "alice"), None)

        assert seen == [(7, "1")]
        assert tracker.roster == ()

    def test_handles_string_table_kinds(self):
        assert RosterTracker.does_handle(MessageType.CREATE_STRING_TABLE)
        assert RosterTracker.does_handle(MessageType.UPDATE_STRING_TABLE)
        assert not RosterTracker.does_handle(MessageType.GAME_EVENT)
