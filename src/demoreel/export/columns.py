"""Column-wise decomposition of trace series.

Records are flat dataclasses, so every series maps onto a fixed set of
columns derived from its record type alone. Nested vectors become
``<field>_x``/``_y``/``_z`` columns, fixed-size tuples become ``<field>_<i>``
columns and enums are stored by value. An empty series yields the same
columns with no rows.

Usage:
    columns = ticked_columns(trace.states, Snapshot)
    columns["position_x"], columns["tick"]
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import fields, is_dataclass
from enum import Enum
from functools import cache
from typing import Any, TypeAlias, get_args, get_origin, get_type_hints

from demoreel.core.records import PlayerHurtEvent, Profile, Snapshot, WithTick, WorldBounds

Column: TypeAlias = tuple[str, tuple[str | int, ...]]
"""Column name and the attribute/index path leading to its value."""

TICK_COLUMN = "tick"


@cache
def column_plan(schema: type) -> tuple[Column, ...]:
    """Get the columns of a record type, in field order.

    Raises:
        TypeError: If schema is not a dataclass type.
    """
    if not (isinstance(schema, type) and is_dataclass(schema)):
        raise TypeError(f"Expected a dataclass record type, got {schema!r}")
    hints = get_type_hints(schema)
    plan: list[Column] = []
    for f in fields(schema):
        hint = hints[f.name]
        if isinstance(hint, type) and is_dataclass(hint):
            for name, path in column_plan(hint):
                plan.append((f"{f.name}_{name}", (f.name, *path)))
        elif get_origin(hint) is tuple and Ellipsis not in get_args(hint):
            for i in range(len(get_args(hint))):
                plan.append((f"{f.name}_{i}", (f.name, i)))
        else:
            plan.append((f.name, (f.name,)))
    return tuple(plan)


def column_names(schema: type, *, ticked: bool = False) -> list[str]:
    names = [name for name, _ in column_plan(schema)]
    if ticked:
        names.append(TICK_COLUMN)
    return names


def _resolve(record: Any, path: tuple[str | int, ...]) -> Any:
    value = record
    for step in path:
        value = value[step] if isinstance(step, int) else getattr(value, step)
    if isinstance(value, Enum):
        return value.value
    return value


def to_columns(records: Iterable[Any], schema: type) -> dict[str, list[Any]]:
    """Decompose records of one type into named columns.

    Args:
        records: Records of type ``schema``.
        schema: Record dataclass type.

    Returns:
        Mapping of column name to values, one value per record.
    """
    plan = column_plan(schema)
    columns: dict[str, list[Any]] = {name: [] for name, _ in plan}
    for record in records:
        for name, path in plan:
            columns[name].append(_resolve(record, path))
    return columns


def ticked_columns(records: Iterable[WithTick[Any]], schema: type) -> dict[str, list[Any]]:
    """Decompose tick-stamped records, appending a ``tick`` column."""
    records = list(records)
    columns = to_columns((r.inner for r in records), schema)
    columns[TICK_COLUMN] = [r.tick for r in records]
    return columns


SERIES_SCHEMAS: dict[str, tuple[type, bool]] = {
    "roster": (Profile, False),
    "states": (Snapshot, True),
    "events": (PlayerHurtEvent, True),
    "bounds": (WorldBounds, True),
}
"""Series name -> (record type, tick-stamped)"""


def trace_columns(trace: Any) -> dict[str, dict[str, list[Any]]]:
    """Decompose the four series of a trace.

    Args:
        trace: A finished Trace.

    Returns:
        Mapping of series name to its columns.
    """
    result: dict[str, dict[str, list[Any]]] = {}
    for series, (schema, ticked) in SERIES_SCHEMAS.items():
        records = getattr(trace, series)
        result[series] = ticked_columns(records, schema) if ticked else to_columns(records, schema)
    return result
