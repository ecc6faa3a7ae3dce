"""Export of trace series to columns and (optionally) pandas DataFrames."""

from demoreel.export.columns import (
    SERIES_SCHEMAS,
    TICK_COLUMN,
    column_names,
    column_plan,
    ticked_columns,
    to_columns,
    trace_columns,
)
from demoreel.export.frames import to_frame, trace_frames

__all__ = [
    "SERIES_SCHEMAS",
    "TICK_COLUMN",
    "column_names",
    "column_plan",
    "to_columns",
    "ticked_columns",
    "trace_columns",
    "to_frame",
    "trace_frames",
]
