"""
jobly.db.sql

Partial-update SQL fragment builder.

Responsibilities:
- Turn a mapping of logical field names to new values into an ordered
  `SET` fragment with numbered bind placeholders, plus the matching values.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from jobly.errors import ValidationError


def build_update_fragment(
    fields: Mapping[str, Any],
    column_map: Mapping[str, str] | None = None,
) -> tuple[str, list[Any]]:
    """
    Build the assignment list of an UPDATE statement.

    {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}
        => ('"first_name"=:p1, "age"=:p2', ["Aliya", 32])

    Keys absent from `column_map` are used as the column name verbatim.
    Placeholder `:pN` is aligned with `values[N - 1]`.
    """

    if not fields:
        raise ValidationError("No data to update")

    column_map = column_map or {}
    assignments = [
        f'"{column_map.get(key, key)}"=:p{idx}' for idx, key in enumerate(fields, start=1)
    ]
    return ", ".join(assignments), list(fields.values())


def bind_params(values: Sequence[Any], *, start: int = 1) -> dict[str, Any]:
    # Named counterparts of the `:pN` placeholders emitted above.
    return {f"p{idx}": value for idx, value in enumerate(values, start=start)}


def next_placeholder(values: Sequence[Any]) -> str:
    # First placeholder free after the SET fragment, for the row key in WHERE.
    return f"p{len(values) + 1}"
