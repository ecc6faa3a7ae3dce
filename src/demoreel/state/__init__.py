"""State integrators: the canonical world/player model the tracer polls.

Architecture Note:
    state/ holds the stateful model a trace is derived from. The tracer only
    depends on the StateIntegrator protocol, so the reference
    GameStateIntegrator can be swapped for any other model.
"""

from demoreel.state.local import GameStateIntegrator
from demoreel.state.models import GameState, Player
from demoreel.state.protocol import StateIntegrator

__all__ = [
    "StateIntegrator",
    "GameStateIntegrator",
    "GameState",
    "Player",
]
