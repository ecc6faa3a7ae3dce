"""Core type definitions for demoreel."""

from typing import TypeAlias

Tick: TypeAlias = int
"""Discrete simulation step. Non-decreasing across a message stream; ties are common."""

UserId: TypeAlias = int
"""Stable player handle for the life of a trace. Join key across roster, states and events."""

EntityIndex: TypeAlias = int
"""Server entity slot. Player entities occupy slots 1..max_players."""
