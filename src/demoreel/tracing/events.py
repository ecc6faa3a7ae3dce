"""Damage event filtering."""

from __future__ import annotations

from typing import Any

from demoreel.core.messages import MessageType, is_player_hurt, message_kind, require_game_event
from demoreel.core.records import PlayerHurtEvent, WithTick
from demoreel.core.types import Tick


class DamageEventFilter:
    """Collects ``player_hurt`` payloads from game event messages.

    Other event kinds and other message kinds are ignored, not rejected.
    """

    def __init__(self) -> None:
        self.series: list[WithTick[PlayerHurtEvent]] = []

    def observe(self, tick: Tick, message: Any) -> bool:
        """Offer one applied message.

        Returns:
            True if a damage event row was appended.

        Raises:
            UnexpectedMessageShapeError: If a game event message has no event payload.
        """
        if message_kind(message) is not MessageType.GAME_EVENT:
            return False
        event = require_game_event(message)
        if not is_player_hurt(event):
            return False
        self.series.append(WithTick(tick=tick, inner=event))
        return True
