"""Whole-stream entry points.

Usage:
    trace = dtrace(source)
    profiles = roster(source)
    if is_pov(source.header):
        ...
"""

from __future__ import annotations

from demoreel.config import TraceSettings
from demoreel.core.messages import Header, message_kind, require_entries
from demoreel.core.records import Profile
from demoreel.source import DemoSource
from demoreel.state import StateIntegrator
from demoreel.tracing.identities import RosterTracker, StringTableRegistry
from demoreel.tracing.models import DecodeErrorPolicy, Trace
from demoreel.tracing.tracer import Tracer


def dtrace(
    source: DemoSource,
    *,
    integrator: StateIntegrator | None = None,
    settings: TraceSettings | None = None,
) -> Trace:
    """Trace all players, states, damage events and world bounds of a stream.

    Args:
        source: Decoded message stream.
        integrator: State model to fold into (default GameStateIntegrator).
        settings: Trace settings (default loaded from the environment).

    Returns:
        The finished trace.

    Raises:
        SourceError: Propagated unchanged from the source.
        TraceError: Any error raised while folding aborts the trace.
    """
    tracer = Tracer(integrator=integrator, settings=settings)
    tracer.handle_header(source.header)
    for tick, message, context in source:
        tracer.apply(tick, message, context)
    return tracer.finish()


def roster(source: DemoSource, *, settings: TraceSettings | None = None) -> tuple[Profile, ...]:
    """Collect only the roster of a stream, without modelling game state.

    Args:
        source: Decoded message stream.
        settings: Trace settings (default loaded from the environment).

    Returns:
        Profiles in first-seen order.
    """
    settings = settings or TraceSettings()
    tracker = RosterTracker(
        identity_table=settings.identity_table,
        on_decode_error=DecodeErrorPolicy(settings.on_decode_error),
    )
    tables = StringTableRegistry()
    for _tick, message, context in source:
        if not tracker.does_handle(message_kind(message)):
            continue
        entries = require_entries(message)
        table = tables.resolve(message)
        for index, entry in entries:
            tracker.handle_string_entry(table, index, entry, context)
    return tracker.roster


def is_pov(header: Header) -> bool:
    """Check whether a demo was recorded client-side.

    Point-of-view demos name their server as ``host:port``; SourceTV demos
    carry the server's display name. Players can misreport this, so treat the
    answer as a hint.
    """
    host, sep, port = header.server.partition(":")
    if not sep or not host:
        return False
    return port.isascii() and port.isdigit() and int(port) <= 0xFFFF
