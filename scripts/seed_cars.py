#!/usr/bin/env python3
"""
Seed the normalized catalog (makes, models, trims, lookups) and cars.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: prices correlated with year + make band, mileage with age
- Some cars have no trim, some are sold, some carry badges

The ``car_listings`` view picks the rows up immediately; no refresh needed.

Usage:
    python scripts/seed_cars.py
"""

from __future__ import annotations

import logging
import random
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import delete
from sqlalchemy.orm import Session

from autotrader.infra.db.models import (
    BadgeRow,
    BodyTypeRow,
    CarRow,
    ConditionRow,
    DealerRow,
    MakeRow,
    ModelRow,
    TransmissionRow,
    TrimRow,
    car_badges,
)
from autotrader.infra.db.session import get_session

logger = logging.getLogger("seed_cars")


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_CARS = 60  # Number of cars to generate
CURRENT_YEAR = 2026
# Listing dates are spread backwards from here
SEED_EPOCH = datetime(2026, 10, 1, tzinfo=timezone.utc)


# ==============================================================================
# Catalog Data
# ==============================================================================

# Make price bands (base prices in USD)
MAKE_BANDS = {
    "economy": {
        "makes": ["Nissan", "Chevrolet", "Kia", "Hyundai"],
        "base_price_min": Decimal("15000"),
        "base_price_max": Decimal("25000"),
    },
    "mid_range": {
        "makes": ["Toyota", "Honda", "Mazda", "Ford"],
        "base_price_min": Decimal("25000"),
        "base_price_max": Decimal("45000"),
    },
    "premium": {
        "makes": ["BMW", "Audi", "Volvo"],
        "base_price_min": Decimal("45000"),
        "base_price_max": Decimal("80000"),
    },
}

MAKE_COUNTRIES = {
    "Nissan": "Japan",
    "Chevrolet": "USA",
    "Kia": "South Korea",
    "Hyundai": "South Korea",
    "Toyota": "Japan",
    "Honda": "Japan",
    "Mazda": "Japan",
    "Ford": "USA",
    "BMW": "Germany",
    "Audi": "Germany",
    "Volvo": "Sweden",
}

# model -> (body type, trims)
MODELS_BY_MAKE: dict[str, dict[str, tuple[str, list[str]]]] = {
    "Nissan": {"Sentra": ("Sedan", ["S", "SV", "SR"]), "Rogue": ("SUV", ["S", "SV"])},
    "Chevrolet": {"Malibu": ("Sedan", ["LS", "LT"]), "Silverado": ("Truck", ["WT", "LT"])},
    "Kia": {"Forte": ("Sedan", ["LXS", "GT-Line"]), "Soul": ("Hatchback", [])},
    "Hyundai": {"Elantra": ("Sedan", ["SE", "SEL"]), "Tucson": ("SUV", ["SE", "Limited"])},
    "Toyota": {"Camry": ("Sedan", ["LE", "SE", "XSE"]), "RAV4": ("SUV", ["LE", "XLE"])},
    "Honda": {"Civic": ("Sedan", ["LX", "Sport", "Touring"]), "Fit": ("Hatchback", [])},
    "Mazda": {"Mazda3": ("Hatchback", ["Select", "Premium"]), "CX-5": ("SUV", ["Sport"])},
    "Ford": {"Mustang": ("Coupe", ["EcoBoost", "GT"]), "F-150": ("Truck", ["XL", "Lariat"])},
    "BMW": {"3 Series": ("Sedan", ["330i", "M340i"]), "X5": ("SUV", ["xDrive40i"])},
    "Audi": {"A4": ("Sedan", ["Premium", "Prestige"]), "Q5": ("SUV", [])},
    "Volvo": {"S60": ("Sedan", ["Core", "Plus"]), "XC90": ("SUV", ["Ultimate"])},
}

BODY_TYPES = {
    "Sedan": "🚗",
    "SUV": "🚙",
    "Hatchback": "🚘",
    "Truck": "🛻",
    "Coupe": "🏎️",
}

TRANSMISSIONS = ["Automatic", "Manual", "CVT"]

CONDITIONS = ["New", "Used", "Certified Pre-Owned"]

DEALERS = [
    ("Downtown Motors", "Austin, TX"),
    ("Lakeside Auto", "Chicago, IL"),
    ("Pacific Car Center", "San Diego, CA"),
    ("Peachtree Autos", "Atlanta, GA"),
]

BADGES = [
    ("Great Price", "#10B981"),
    ("Low Mileage", "#3B82F6"),
    ("One Owner", "#8B5CF6"),
    ("Just Arrived", "#F59E0B"),
]


# ==============================================================================
# Price Calculation with Realism
# ==============================================================================


def calculate_price(rng: random.Random, make: str, year: int) -> Decimal:
    """
    Calculate price based on make band and year.

    Logic:
    - Newer cars are more expensive
    - Premium brands cost more than economy
    - Price depreciates ~10% per year from base price, capped at 70%
    """
    band = next(
        (band for band in MAKE_BANDS.values() if make in band["makes"]),
        MAKE_BANDS["mid_range"],
    )

    base_price = Decimal(rng.randint(int(band["base_price_min"]), int(band["base_price_max"])))

    years_old = max(0, CURRENT_YEAR - year)
    total_depreciation = min(Decimal("0.10") * years_old, Decimal("0.70"))
    depreciated_price = base_price * (Decimal("1") - total_depreciation)

    # +/- 10%
    variance = Decimal(str(round(rng.uniform(0.90, 1.10), 4)))
    final_price = depreciated_price * variance

    # Round to nearest 100
    final_price = (final_price / 100).quantize(Decimal("1")) * 100

    return max(final_price, Decimal("5000"))


# ==============================================================================
# Seed Generation
# ==============================================================================


class Catalog:
    """Lookup rows created for one seeding run, indexed by name."""

    def __init__(self, session: Session) -> None:
        self.makes = {name: MakeRow(name=name, country=MAKE_COUNTRIES[name]) for name in MAKE_COUNTRIES}
        self.body_types = {name: BodyTypeRow(name=name, icon=icon) for name, icon in BODY_TYPES.items()}
        self.transmissions = {name: TransmissionRow(type=name) for name in TRANSMISSIONS}
        self.conditions = {name: ConditionRow(name=name) for name in CONDITIONS}
        self.dealers = [DealerRow(name=name, location=location) for name, location in DEALERS]
        self.badges = {name: BadgeRow(name=name, color=color) for name, color in BADGES}

        self.models: dict[tuple[str, str], ModelRow] = {}
        self.trims: dict[tuple[str, str, str], TrimRow] = {}

        for make_name, models in MODELS_BY_MAKE.items():
            for model_name, (_, trims) in models.items():
                model = ModelRow(make=self.makes[make_name], name=model_name)
                self.models[(make_name, model_name)] = model
                for trim_name in trims:
                    self.trims[(make_name, model_name, trim_name)] = TrimRow(
                        model=model, name=trim_name
                    )

        session.add_all(self.makes.values())
        session.add_all(self.body_types.values())
        session.add_all(self.transmissions.values())
        session.add_all(self.conditions.values())
        session.add_all(self.dealers)
        session.add_all(self.badges.values())
        session.add_all(self.models.values())
        session.add_all(self.trims.values())
        session.flush()


def generate_car(rng: random.Random, catalog: Catalog, index: int) -> CarRow:
    """Generate a single random car with realistic data."""
    band = rng.choice(list(MAKE_BANDS.keys()))
    make_name = rng.choice(MAKE_BANDS[band]["makes"])
    model_name = rng.choice(list(MODELS_BY_MAKE[make_name]))
    body_type, trims = MODELS_BY_MAKE[make_name][model_name]

    # Some listings do not state a trim
    trim_name = rng.choice(trims) if trims and rng.random() > 0.2 else None

    # Year: weighted toward newer
    year = rng.choices(
        range(CURRENT_YEAR - 9, CURRENT_YEAR + 1),
        weights=[1, 1, 2, 2, 3, 3, 4, 5, 6, 7],
        k=1,
    )[0]

    years_old = CURRENT_YEAR - year
    max_mileage = min(200000, years_old * 15000 + rng.randint(0, 20000))
    mileage = 0 if years_old == 0 and rng.random() < 0.5 else rng.randint(0, max(1000, max_mileage))

    if year >= CURRENT_YEAR - 4 or band == "premium":
        transmission = rng.choices(TRANSMISSIONS, weights=[6, 1, 2], k=1)[0]
    else:
        transmission = rng.choices(TRANSMISSIONS, weights=[4, 3, 1], k=1)[0]

    condition = "New" if mileage == 0 else rng.choice(["Used", "Used", "Certified Pre-Owned"])

    badges = []
    if rng.random() < 0.25:
        badges.append(catalog.badges["Great Price"])
    if mileage < 20000:
        badges.append(catalog.badges["Low Mileage"])
    if rng.random() < 0.15:
        badges.append(catalog.badges["One Owner"])
    if index < 5:
        badges.append(catalog.badges["Just Arrived"])

    slug = f"{make_name}-{model_name}-{year}".lower().replace(" ", "-")

    return CarRow(
        make=catalog.makes[make_name],
        model=catalog.models[(make_name, model_name)],
        trim=catalog.trims[(make_name, model_name, trim_name)] if trim_name else None,
        body_type=catalog.body_types[body_type],
        transmission=catalog.transmissions[transmission],
        condition=catalog.conditions[condition],
        dealer=rng.choice(catalog.dealers),
        year=year,
        price=calculate_price(rng, make_name, year),
        mileage=mileage,
        image_url=f"https://images.autotrader.example/{slug}.jpg",
        is_featured=rng.random() < 0.1,
        is_sold=rng.random() < 0.1,
        views_count=rng.randint(0, 500),
        badges=badges,
        created_at=SEED_EPOCH - timedelta(hours=index * 7),
    )


def clear_catalog(session: Session) -> None:
    """Delete every seeded row, children before parents."""
    for table in (
        car_badges,
        CarRow.__table__,
        TrimRow.__table__,
        ModelRow.__table__,
        MakeRow.__table__,
        BodyTypeRow.__table__,
        TransmissionRow.__table__,
        ConditionRow.__table__,
        DealerRow.__table__,
        BadgeRow.__table__,
    ):
        session.execute(delete(table))


def seed_cars(num_cars: int = NUM_CARS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with random catalog and car data.

    Args:
        num_cars: Number of cars to generate
        seed: Random seed for deterministic results
    """
    rng = random.Random(seed)

    logger.info("Seeding database with %d cars (seed=%d)", num_cars, seed)

    with get_session() as session:
        clear_catalog(session)

        catalog = Catalog(session)
        cars = [generate_car(rng, catalog, index) for index in range(num_cars)]

        session.add_all(cars)
        session.flush()

        sold = sum(1 for car in cars if car.is_sold)
        logger.info("Seeded %d cars (%d sold)", len(cars), sold)

        for car in cars[:5]:
            logger.info(
                "  %s %s %s%s - $%s",
                car.year,
                car.make.name,
                car.model.name,
                f" {car.trim.name}" if car.trim else "",
                f"{car.price:,.2f}",
            )


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        seed_cars()
    except Exception:
        logger.exception("Error seeding database")
        sys.exit(1)
