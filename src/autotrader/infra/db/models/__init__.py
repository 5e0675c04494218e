from autotrader.infra.db.models.base import Base
from autotrader.infra.db.models.car import CarRow, car_badges
from autotrader.infra.db.models.car_listing import CarListingRow
from autotrader.infra.db.models.catalog import (
    BadgeRow,
    BodyTypeRow,
    ConditionRow,
    DealerRow,
    MakeRow,
    ModelRow,
    TransmissionRow,
    TrimRow,
)

__all__ = [
    "Base",
    "BadgeRow",
    "BodyTypeRow",
    "CarListingRow",
    "CarRow",
    "ConditionRow",
    "DealerRow",
    "MakeRow",
    "ModelRow",
    "TransmissionRow",
    "TrimRow",
    "car_badges",
]
