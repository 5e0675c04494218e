"""SQLAlchemy predicate builders for both catalog schemas.

Both builders express the same conditions; they only differ in how a
logical field is reached:

- Denormalized (``car_listings`` view): every field is a column on the row.
- Normalized (``cars`` + lookup tables): dimension names live on related
  tables and are matched through ``relationship.has()`` (an EXISTS join).
  A car without a trim simply has no related trim row, so trim conditions
  evaluate false for it instead of dropping the row from an OR.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import Any, Callable, Sequence

from sqlalchemy import String, and_, false, func, or_, true
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from autotrader.domain.predicates import ListingField, PredicateBuilder
from autotrader.infra.db.models.car import CarRow
from autotrader.infra.db.models.car_listing import CarListingRow
from autotrader.infra.db.models.catalog import (
    BodyTypeRow,
    MakeRow,
    ModelRow,
    TransmissionRow,
    TrimRow,
)

SqlPredicate = ColumnElement[bool]
Condition = Callable[[Any], SqlPredicate]


def _lower(column: Any) -> ColumnElement[str]:
    return func.lower(column, type_=String)


class _SqlPredicateBuilder(PredicateBuilder[SqlPredicate]):
    """Shared condition logic; subclasses decide how a field is reached."""

    @abstractmethod
    def _compare(self, field: ListingField, condition: Condition) -> SqlPredicate:
        """Apply ``condition`` to the column holding ``field``."""
        ...

    def is_false(self, field: ListingField) -> SqlPredicate:
        return self._compare(field, lambda column: column.is_(false()))

    def contains_any_ignore_case(
        self, fields: Sequence[ListingField], token: str
    ) -> SqlPredicate:
        needle = token.lower()
        return or_(
            *(
                self._compare(
                    field,
                    lambda column: func.coalesce(_lower(column), "").contains(
                        needle, autoescape=True
                    ),
                )
                for field in fields
            )
        )

    def at_least(self, field: ListingField, value: Decimal) -> SqlPredicate:
        return self._compare(field, lambda column: column >= value)

    def at_most(self, field: ListingField, value: Decimal) -> SqlPredicate:
        return self._compare(field, lambda column: column <= value)

    def equals_ignore_case(self, field: ListingField, value: str) -> SqlPredicate:
        expected = value.lower()
        return self._compare(field, lambda column: _lower(column) == expected)

    def in_ignore_case(self, field: ListingField, values: Sequence[str]) -> SqlPredicate:
        expected = [value.lower() for value in values]
        return self._compare(field, lambda column: _lower(column).in_(expected))

    def all_of(self, clauses: Sequence[SqlPredicate]) -> SqlPredicate:
        return and_(true(), *clauses)


class DenormalizedSqlPredicateBuilder(_SqlPredicateBuilder):
    """Predicates over ``CarListingRow`` (direct column comparisons)."""

    _COLUMNS: dict[ListingField, InstrumentedAttribute[Any]] = {
        ListingField.IS_SOLD: CarListingRow.is_sold,
        ListingField.PRICE: CarListingRow.price,
        ListingField.MAKE_NAME: CarListingRow.make_name,
        ListingField.MODEL_NAME: CarListingRow.model_name,
        ListingField.TRIM_NAME: CarListingRow.trim_name,
        ListingField.BODY_TYPE_NAME: CarListingRow.body_type_name,
        ListingField.TRANSMISSION_TYPE: CarListingRow.transmission_type,
    }

    def _compare(self, field: ListingField, condition: Condition) -> SqlPredicate:
        return condition(self._COLUMNS[field])


class NormalizedSqlPredicateBuilder(_SqlPredicateBuilder):
    """Predicates over ``CarRow``, joining lookup tables to match by name."""

    _COLUMNS: dict[ListingField, InstrumentedAttribute[Any]] = {
        ListingField.IS_SOLD: CarRow.is_sold,
        ListingField.PRICE: CarRow.price,
    }

    # field -> (relationship on CarRow, name column on the related table)
    _RELATED: dict[ListingField, tuple[InstrumentedAttribute[Any], InstrumentedAttribute[Any]]] = {
        ListingField.MAKE_NAME: (CarRow.make, MakeRow.name),
        ListingField.MODEL_NAME: (CarRow.model, ModelRow.name),
        ListingField.TRIM_NAME: (CarRow.trim, TrimRow.name),
        ListingField.BODY_TYPE_NAME: (CarRow.body_type, BodyTypeRow.name),
        ListingField.TRANSMISSION_TYPE: (CarRow.transmission, TransmissionRow.type),
    }

    def _compare(self, field: ListingField, condition: Condition) -> SqlPredicate:
        if field in self._COLUMNS:
            return condition(self._COLUMNS[field])

        relationship, name_column = self._RELATED[field]
        return relationship.has(condition(name_column))
