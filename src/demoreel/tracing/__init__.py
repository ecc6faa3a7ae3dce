"""Tracing: the fold from a decoded message stream to four trace series.

Architecture Note:
    tracing/ is a stateful service layer. The Tracer owns one collaborator
    per series (RosterTracker, a SnapshotEmitter fed by merge_continuity,
    WorldBoundsDetector, DamageEventFilter) and the state integrator it
    delegates messages to.
"""

from demoreel.tracing.bounds import WorldBoundsDetector
from demoreel.tracing.driver import dtrace, is_pov, roster
from demoreel.tracing.events import DamageEventFilter
from demoreel.tracing.identities import RosterTracker, StringTableRegistry
from demoreel.tracing.merge import (
    PerMessageEmitter,
    PerTickEmitter,
    SnapshotEmitter,
    merge_continuity,
)
from demoreel.tracing.models import DecodeErrorPolicy, EmitPolicy, Trace, TracerPhase
from demoreel.tracing.tracer import Tracer

__all__ = [
    # Orchestration
    "Tracer",
    "TracerPhase",
    "Trace",
    "dtrace",
    "roster",
    "is_pov",
    # Collaborators
    "RosterTracker",
    "StringTableRegistry",
    "WorldBoundsDetector",
    "DamageEventFilter",
    "merge_continuity",
    # Policies
    "DecodeErrorPolicy",
    "EmitPolicy",
    "SnapshotEmitter",
    "PerMessageEmitter",
    "PerTickEmitter",
]
