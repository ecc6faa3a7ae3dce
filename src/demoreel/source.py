"""Message sources.

A source supplies the stream header and an ordered sequence of
``(tick, message, context)`` items. Decoders of raw demo files implement
``DemoSource``; ``MemorySource`` serves items that are already materialized.

Failures inside a source are its own to report. Raise ``SourceError`` (or
``SourceExhaustedError`` for a truncated stream); the tracer propagates it
unchanged.

Usage:
    source = MemorySource(header=Header(map="cp_badlands"))
    source.push(1, NetTickMessage(tick=1))
    trace = dtrace(source)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias, runtime_checkable

from demoreel.core.messages import Header, Message
from demoreel.core.types import Tick
from demoreel.errors import SourceError

StreamItem: TypeAlias = tuple[Tick, Message, Any]
"""One decoded message with its tick and opaque parser context."""


@runtime_checkable
class DemoSource(Protocol):
    """Protocol for decoded message streams."""

    @property
    def header(self) -> Header:
        """Header of the stream."""
        ...

    def __iter__(self) -> Iterator[StreamItem]:
        """Iterate items in stream order."""
        ...


@dataclass
class MemorySource:
    """In-memory source over already decoded items.

    Attributes:
        header: Header of the stream.
        items: Stream items in order.
        context: Context handed out with items pushed without one.
    """

    header: Header
    items: list[StreamItem] = field(default_factory=list)
    context: Any = None

    def push(self, tick: Tick, message: Message, context: Any = None) -> None:
        """Append one message to the stream.

        Raises:
            SourceError: If the tick is negative.
        """
        if tick < 0:
            raise SourceError(f"Tick must be non-negative, got {tick}")
        self.items.append((tick, message, self.context if context is None else context))

    def extend(self, tick: Tick, *messages: Message) -> None:
        """Append several messages sharing one tick."""
        for message in messages:
            self.push(tick, message)

    def __iter__(self) -> Iterator[StreamItem]:
        for item in self.items:
            if not isinstance(item, tuple) or len(item) != 3:
                raise SourceError(f"Expected (tick, message, context) item, got {item!r}")
            yield item

    def __len__(self) -> int:
        return len(self.items)
