"""
Shared fixtures for adapter tests.

Builds one small inventory three ways: normalized rows (cars + lookup
tables), flattened ``car_listings`` rows as the view would return them, and
plain CarListing records. SQLite stands in for PostgreSQL; every table,
including the view's mapping, is created with ``create_all``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from autotrader.domain.listing import Badge, CarListing
from autotrader.infra.db.models import (
    Base,
    BadgeRow,
    BodyTypeRow,
    CarListingRow,
    CarRow,
    ConditionRow,
    DealerRow,
    MakeRow,
    ModelRow,
    TransmissionRow,
    TrimRow,
)

BASE_TIME = datetime(2026, 9, 1, 12, 0, 0)


@dataclass(frozen=True)
class StockCar:
    index: int
    make: str
    model: str
    trim: str | None
    body_type: str
    transmission: str
    price: str
    year: int
    mileage: int
    is_sold: bool = False
    badges: tuple[str, ...] = field(default_factory=tuple)

    @property
    def id(self) -> uuid.UUID:
        return uuid.UUID(int=self.index)

    @property
    def created_at(self) -> datetime:
        return BASE_TIME + timedelta(days=self.index)


INVENTORY: tuple[StockCar, ...] = (
    StockCar(1, "Toyota", "Camry", "SE", "Sedan", "Automatic", "24000.00", 2021, 30000, badges=("Great Price",)),
    StockCar(2, "Honda", "Civic", None, "Sedan", "Manual", "18000.00", 2019, 60000),
    StockCar(3, "Toyota", "RAV4", "XLE", "SUV", "Automatic", "31000.00", 2022, 15000, badges=("Low Mileage", "Great Price")),
    StockCar(4, "Ford", "F-150", "Lariat", "Truck", "Automatic", "38000.00", 2020, 45000),
    StockCar(5, "Toyota", "Camry", "LE", "Sedan", "Automatic", "16000.00", 2018, 90000, is_sold=True),
    StockCar(6, "Honda", "CR-V", None, "SUV", "CVT", "27000.00", 2021, 20000),
    StockCar(7, "Ford", "Mustang", "GT", "Coupe", "Manual", "24000.00", 2019, 41000),
)

BADGE_COLORS = {"Great Price": "#10B981", "Low Mileage": "#3B82F6"}


def to_listing(car: StockCar) -> CarListing:
    return CarListing(
        id=str(car.id),
        make_name=car.make,
        model_name=car.model,
        trim_name=car.trim,
        year=car.year,
        price=Decimal(car.price),
        mileage=car.mileage,
        body_type_name=car.body_type,
        transmission_type=car.transmission,
        badges=tuple(
            Badge(id=str(uuid.uuid5(uuid.NAMESPACE_DNS, name)), name=name, color=BADGE_COLORS[name])
            for name in sorted(car.badges)
        ),
        is_sold=car.is_sold,
        created_at=car.created_at,
    )


def _get_or_add(session: Session, cache: dict, key: object, factory) -> object:
    if key not in cache:
        cache[key] = factory()
        session.add(cache[key])
    return cache[key]


def populate(session: Session) -> None:
    """Insert INVENTORY as normalized rows and as flattened view rows."""
    cache: dict[str, dict] = {name: {} for name in ("make", "model", "trim", "body", "trans", "badge")}
    condition = ConditionRow(name="Used")
    dealer = DealerRow(name="Downtown Motors", location="Austin, TX")
    session.add_all([condition, dealer])

    for car in INVENTORY:
        make = _get_or_add(session, cache["make"], car.make, lambda: MakeRow(name=car.make))
        model = _get_or_add(
            session, cache["model"], car.model, lambda: ModelRow(make=make, name=car.model)
        )
        trim = (
            _get_or_add(
                session,
                cache["trim"],
                (car.model, car.trim),
                lambda: TrimRow(model=model, name=car.trim),
            )
            if car.trim
            else None
        )
        body_type = _get_or_add(
            session, cache["body"], car.body_type, lambda: BodyTypeRow(name=car.body_type, icon="🚗")
        )
        transmission = _get_or_add(
            session, cache["trans"], car.transmission, lambda: TransmissionRow(type=car.transmission)
        )
        badges = [
            _get_or_add(
                session,
                cache["badge"],
                name,
                lambda name=name: BadgeRow(
                    id=uuid.uuid5(uuid.NAMESPACE_DNS, name), name=name, color=BADGE_COLORS[name]
                ),
            )
            for name in car.badges
        ]

        session.add(
            CarRow(
                id=car.id,
                make=make,
                model=model,
                trim=trim,
                body_type=body_type,
                transmission=transmission,
                condition=condition,
                dealer=dealer,
                year=car.year,
                price=Decimal(car.price),
                mileage=car.mileage,
                is_sold=car.is_sold,
                badges=badges,
                created_at=car.created_at,
            )
        )

        session.add(
            CarListingRow(
                id=car.id,
                year=car.year,
                mileage=car.mileage,
                price=Decimal(car.price),
                is_featured=False,
                is_sold=car.is_sold,
                views_count=0,
                created_at=car.created_at,
                make_name=car.make,
                model_name=car.model,
                trim_name=car.trim,
                body_type_name=car.body_type,
                body_type_icon="🚗",
                transmission_type=car.transmission,
                condition_name="Used",
                dealer_name="Downtown Motors",
                dealer_location="Austin, TX",
                badge_count=len(car.badges),
                badges=[
                    {
                        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, name)),
                        "name": name,
                        "color": BADGE_COLORS[name],
                    }
                    for name in sorted(car.badges)
                ],
            )
        )

    session.flush()


@pytest.fixture()
def session() -> Iterator[Session]:
    """SQLite session with the inventory loaded in both layouts."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)

    with Session(engine) as db:
        populate(db)
        yield db

    engine.dispose()


@pytest.fixture()
def inventory() -> list[CarListing]:
    return [to_listing(car) for car in INVENTORY]
