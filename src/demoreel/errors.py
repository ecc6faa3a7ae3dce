"""Error hierarchy for demoreel.

Only genuine failures are errors. Unknown game events, repeated world bounds
and duplicate identities are handled by policy and never raise.
"""

from __future__ import annotations


class TraceError(Exception):
    """Base class for every error raised by demoreel."""

    pass


class IdentityDecodeError(TraceError):
    """A player identity table entry could not be decoded.

    Recoverable: the roster skips the entry by default and keeps the error in
    the trace's ``decode_failures``.
    """

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Cannot decode userinfo entry {index}: {reason}")


class UnexpectedMessageShapeError(TraceError):
    """A message of an interesting kind lacks the payload its kind promises."""

    pass


class SourceError(TraceError):
    """The message source failed or produced an unusable stream."""

    pass


class SourceExhaustedError(SourceError):
    """The message source ended before the stream was complete."""

    pass


class TickOrderError(SourceError):
    """A message arrived with a tick lower than one already applied."""

    def __init__(self, tick: int, last_tick: int):
        self.tick = tick
        self.last_tick = last_tick
        super().__init__(f"Tick {tick} arrived after tick {last_tick}")


class TracerStateError(TraceError):
    """The tracer was driven through a transition its state machine forbids."""

    pass
