"""
jobly.db.filters

WHERE-clause builders for list queries.

Responsibilities:
- Enumerate the recognized filter keys per entity (companies vs jobs).
- Produce a conjunctive WHERE fragment whose values travel as bind
  parameters, never as SQL text.

Known quirks kept on purpose:
- Numeric lower/upper bounds are skipped when falsy, so a bound of 0 is
  treated as "not supplied".
- `has_equity=True` selects `equity >= 0`, which includes zero-equity jobs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple, Protocol


class FilterClause(NamedTuple):
    sql: str
    params: dict[str, Any]


EMPTY_CLAUSE = FilterClause("", {})


class Filters(Protocol):
    def predicates(self) -> list[tuple[str, dict[str, Any]]]: ...


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column: str, param: str, value: str) -> tuple[str, dict[str, Any]]:
    # lower() on both sides keeps the match case-insensitive on every backend.
    return (
        f"lower({column}) LIKE lower(:{param}) ESCAPE '\\'",
        {param: f"%{_escape_like(value)}%"},
    )


@dataclass(frozen=True, slots=True)
class CompanyFilters:
    name_like: str | None = None
    min_employees: int | None = None
    max_employees: int | None = None

    def predicates(self) -> list[tuple[str, dict[str, Any]]]:
        preds: list[tuple[str, dict[str, Any]]] = []
        if self.name_like:
            preds.append(_contains("name", "name_like", self.name_like))
        if self.min_employees:
            preds.append(("num_employees >= :min_employees", {"min_employees": self.min_employees}))
        if self.max_employees:
            preds.append(("num_employees <= :max_employees", {"max_employees": self.max_employees}))
        return preds


@dataclass(frozen=True, slots=True)
class JobFilters:
    title: str | None = None
    min_salary: int | None = None
    has_equity: bool | None = None

    def predicates(self) -> list[tuple[str, dict[str, Any]]]:
        preds: list[tuple[str, dict[str, Any]]] = []
        if self.title:
            preds.append(_contains("title", "title", self.title))
        if self.min_salary:
            preds.append(("salary >= :min_salary", {"min_salary": self.min_salary}))
        if self.has_equity is True:
            preds.append(("equity >= 0", {}))
        elif self.has_equity is False:
            preds.append(("(equity = 0 OR equity IS NULL)", {}))
        return preds


def build_filter_clause(filters: Filters | None) -> FilterClause:
    if filters is None:
        return EMPTY_CLAUSE

    preds = filters.predicates()
    if not preds:
        return EMPTY_CLAUSE

    params: dict[str, Any] = {}
    for _, pred_params in preds:
        params.update(pred_params)
    return FilterClause("WHERE " + " AND ".join(sql for sql, _ in preds), params)
