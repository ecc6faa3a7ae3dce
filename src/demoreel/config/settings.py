"""Configuration settings using Pydantic Settings.

Provides typed trace configuration with environment variable support.

Usage:
    from demoreel.config import TraceSettings

    # Load from environment variables (DEMOREEL_*)
    settings = TraceSettings()

    # Or override with explicit values
    settings = TraceSettings(on_decode_error="raise", emit_on="per_tick")
"""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class TraceSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for a trace run.

    Attributes:
        identity_table: Name of the string table holding player identities.
        on_decode_error: What to do with an undecodable identity entry:
            skip it and keep going, or abort the trace.
        emit_on: When to emit player state rows: for every applied message,
            or once per identity per tick.

    Environment Variables:
        DEMOREEL_IDENTITY_TABLE
        DEMOREEL_ON_DECODE_ERROR
        DEMOREEL_EMIT_ON
    """

    model_config = SettingsConfigDict(
        env_prefix="DEMOREEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    identity_table: str = "userinfo"
    on_decode_error: Literal["skip", "raise"] = "skip"
    emit_on: Literal["per_message", "per_tick"] = "per_message"
