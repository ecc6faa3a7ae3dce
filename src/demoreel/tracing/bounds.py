"""World bounds change detection."""

from __future__ import annotations

from demoreel.core.records import WithTick, WorldBounds
from demoreel.core.types import Tick


class WorldBoundsDetector:
    """Records world bounds only when they change.

    The first bounds observed are always recorded. After that a row is
    appended only if the bounds differ by value from the last recorded row;
    equal values and absent values are dropped silently.
    """

    def __init__(self) -> None:
        self.series: list[WithTick[WorldBounds]] = []

    def observe(self, tick: Tick, world: WorldBounds | None) -> bool:
        """Offer the integrator's current bounds.

        Returns:
            True if a row was appended.
        """
        if world is None:
            return False
        if self.series and self.series[-1].inner == world:
            return False
        self.series.append(WithTick(tick=tick, inner=world))
        return True
