"""Keyset sort strategies.

A sort strategy answers three questions for a named sort key:

1. How are rows ordered? Always terminated by the id column so the order
   is total.
2. Which rows come strictly after the cursor row under that order?
3. What does the cursor for a given row look like?

The continuation predicate is the standard lexicographic seek condition.
For ORDER BY a DESC, b ASC, id ASC with cursor (a1, b1, id1):

    (a < a1)
    OR (a = a1 AND b > b1)
    OR (a = a1 AND b = b1 AND id > id1)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import DateTime, Numeric, and_, literal, or_
from sqlalchemy.sql.expression import ClauseElement

from catalog_service.core.pagination.types import CursorState, SortConfig

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import ColumnElement, Row

    from catalog_service.core.pagination.types import CursorScalar, SortOrder


@dataclass(slots=True, frozen=True)
class SortField:
    """One orderable expression and the token key that carries its value.

    Attributes:
        expression: Column or SQL expression to order by.
        cursor_key: Key under which the value travels in the token.
        default_order: Direction used when the request gives none.
        attribute: Entity attribute holding the value; defaults to the
            expression's key.
    """

    expression: ColumnElement[Any]
    cursor_key: str
    default_order: SortOrder = "asc"
    attribute: str | None = None

    @property
    def attribute_name(self) -> str:
        return self.attribute or self.expression.key  # type: ignore[attr-defined]


@dataclass(slots=True, frozen=True)
class KeysetTerm:
    """One ORDER BY term with the cursor row's value for it."""

    expression: ColumnElement[Any]
    order: SortOrder
    cursor_value: Any


class Sorter(Protocol):
    """What the page executor needs from a sort strategy."""

    def default_order(self, sort_by: str) -> SortOrder: ...

    def build_order_by(self, config: SortConfig) -> list[ColumnElement[Any]]: ...

    def build_continuation(
        self, cursor: CursorState, config: SortConfig
    ) -> ColumnElement[bool] | None: ...

    def extract_cursor(self, row: Row[Any], config: SortConfig) -> CursorState: ...


def directed(expression: ColumnElement[Any], order: SortOrder) -> ColumnElement[Any]:
    """Apply a direction to an ORDER BY expression."""
    return expression.desc() if order == "desc" else expression.asc()


def bind_cursor_value(expression: ColumnElement[Any], value: Any) -> ColumnElement[Any]:
    """Bind a cursor value with the type of the expression it is compared to.

    SQL expressions (recomputed boosts) are used as they are. Python
    ``True``/``False`` must be bound, since SQLAlchemy only accepts them
    as bare operands of ``=``, ``!=`` and ``IS``.
    """
    if isinstance(value, ClauseElement):
        return value  # type: ignore[return-value]
    return literal(value, type_=expression.type)


def after(expression: ColumnElement[Any], order: SortOrder, value: Any) -> ColumnElement[bool]:
    """Predicate for "comes strictly after ``value``" under ``order``."""
    bound = bind_cursor_value(expression, value)
    return expression < bound if order == "desc" else expression > bound


def keyset_predicate(terms: Sequence[KeysetTerm]) -> ColumnElement[bool]:
    """Build the lexicographic "strictly after the cursor row" predicate.

    The last term must be unique across rows (the id column) for the
    result to be gap-free and duplicate-free.

    Args:
        terms: ORDER BY terms in order, each with the cursor row's value.

    Returns:
        OR over each prefix: earlier terms equal, this term strictly after.
    """
    clauses: list[ColumnElement[bool]] = []
    for i, term in enumerate(terms):
        equal_prefix = [
            prev.expression == bind_cursor_value(prev.expression, prev.cursor_value)
            for prev in terms[:i]
        ]
        clauses.append(and_(*equal_prefix, after(term.expression, term.order, term.cursor_value)))
    return or_(*clauses)


def convert_cursor_value(expression: ColumnElement[Any], value: CursorScalar) -> Any:
    """Convert a token value back to the column's Python type.

    Decimals travel as strings; datetimes are normally rehydrated by the
    codec but a plain ISO string is still accepted.
    """
    column_type = getattr(expression.type, "impl", expression.type)
    if isinstance(column_type, Numeric) and column_type.asdecimal:
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return Decimal(str(value))
        return value
    if isinstance(column_type, DateTime) and isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value


class KeysetSortStrategy:
    """Single-field keyset sort with an id tiebreaker.

    Known sort keys order by ``[field dir, id dir]``. Unknown keys fall back
    to a fixed multi-column order whose directions do not depend on the
    request.

    Example:
        strategy = KeysetSortStrategy(
            id_column=Category.id,
            fields={
                "name": SortField(Category.name, "name"),
                "createdAt": SortField(Category.created_at, "createdAt", "desc"),
            },
            fallback=[
                SortField(Category.weight, "weight"),
                SortField(Category.name, "name"),
            ],
        )

    Rows handed to ``extract_cursor`` carry the entity in their first
    position, as produced by ``select(Model, ...)``.
    """

    def __init__(
        self,
        *,
        id_column: ColumnElement[Any],
        fields: Mapping[str, SortField],
        fallback: Sequence[SortField],
        fallback_id_order: SortOrder = "asc",
    ) -> None:
        self.id_column = id_column
        self.fields = dict(fields)
        self.fallback = list(fallback)
        self.fallback_id_order = fallback_id_order

    def default_order(self, sort_by: str) -> SortOrder:
        field = self.fields.get(sort_by)
        return field.default_order if field is not None else self.fallback_id_order

    def build_order_by(self, config: SortConfig) -> list[ColumnElement[Any]]:
        terms, id_order = self._resolve(config)
        return [directed(field.expression, order) for field, order in terms] + [
            directed(self.id_column, id_order)
        ]

    def build_continuation(
        self, cursor: CursorState, config: SortConfig
    ) -> ColumnElement[bool] | None:
        """Predicate selecting rows after the cursor row.

        Degrades to an id-only comparison when the token does not carry a
        value for every sort field.
        """
        terms, id_order = self._resolve(config)
        if any(field.cursor_key not in cursor.fields for field, _ in terms):
            return after(self.id_column, id_order, cursor.id)

        keyset = [
            KeysetTerm(
                field.expression,
                order,
                convert_cursor_value(field.expression, cursor.fields[field.cursor_key]),
            )
            for field, order in terms
        ]
        keyset.append(KeysetTerm(self.id_column, id_order, cursor.id))
        return keyset_predicate(keyset)

    def extract_cursor(self, row: Row[Any], config: SortConfig) -> CursorState:
        entity = row[0]
        terms, _ = self._resolve(config)
        values = {field.cursor_key: getattr(entity, field.attribute_name) for field, _ in terms}
        return CursorState(
            id=str(entity.id),
            fields={key: value for key, value in values.items() if value is not None},
        )

    def _resolve(self, config: SortConfig) -> tuple[list[tuple[SortField, SortOrder]], SortOrder]:
        field = self.fields.get(config.sort_by)
        if field is None:
            return [(f, f.default_order) for f in self.fallback], self.fallback_id_order
        return [(field, config.sort_order)], config.sort_order


__all__ = [
    "KeysetSortStrategy",
    "KeysetTerm",
    "SortField",
    "Sorter",
    "after",
    "bind_cursor_value",
    "convert_cursor_value",
    "directed",
    "keyset_predicate",
]
