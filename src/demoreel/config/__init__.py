"""Configuration module using Pydantic Settings.

Usage:
    from demoreel.config import TraceSettings

    settings = TraceSettings(emit_on="per_tick")
"""

from demoreel.config.settings import TraceSettings

__all__ = [
    "TraceSettings",
]
