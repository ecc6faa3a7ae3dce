"""pandas DataFrames for trace series.

Requires pandas: pip install demoreel[frames]

Usage:
    frames = trace_frames(trace)
    frames["states"].groupby("user_id")["health"].min()
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from demoreel.export.columns import SERIES_SCHEMAS, column_names, ticked_columns, to_columns

if TYPE_CHECKING:
    import pandas as pd


def _pandas() -> Any:
    try:
        import pandas
    except ImportError as e:
        raise ImportError(
            "pandas is required for DataFrame export. Install with: pip install demoreel[frames]"
        ) from e
    return pandas


def to_frame(records: Iterable[Any], schema: type, *, ticked: bool = False) -> pd.DataFrame:
    """Build a DataFrame with one row per record.

    An empty series gives an empty frame that still has every column.
    """
    pandas = _pandas()
    columns = ticked_columns(records, schema) if ticked else to_columns(records, schema)
    return pandas.DataFrame(columns, columns=column_names(schema, ticked=ticked))


def trace_frames(trace: Any) -> dict[str, pd.DataFrame]:
    """Build one DataFrame per series of a finished Trace."""
    return {
        series: to_frame(getattr(trace, series), schema, ticked=ticked)
        for series, (schema, ticked) in SERIES_SCHEMAS.items()
    }
