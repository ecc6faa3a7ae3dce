"""Tests for the in-memory message source."""

import pytest

from demoreel import DemoSource, Header, MemorySource, NetTickMessage, PrintMessage, SourceError


@pytest.fixture
def source():
    return MemorySource(header=Header(map="pl_upward"), context="parser")


def test_satisfies_protocol(source):
    assert isinstance(source, DemoSource)


def test_push_uses_default_context(source):
    source.push(1, NetTickMessage(tick=1))
    source.push(2, NetTickMessage(tick=2), context="override")

    assert [context for _, _, context in source] == ["parser", "override"]


def test_extend_shares_tick(source):
    source.extend(4, NetTickMessage(tick=4), PrintMessage(value="hi"))

    assert [tick for tick, _, _ in source] == [4, 4]
    assert len(source) == 2


def test_negative_tick_rejected(source):
    with pytest.raises(SourceError):
        source.push(-1, NetTickMessage())


def test_malformed_item_rejected():
    source = MemorySource(header=Header(), items=[(1, NetTickMessage())])

    with pytest.raises(SourceError, match="Expected"):
        list(source)
