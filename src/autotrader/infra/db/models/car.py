from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from autotrader.infra.db.models.base import Base
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

car_badges = Table(
    "car_badges",
    Base.metadata,
    Column("car_id", ForeignKey("cars.id", ondelete="CASCADE"), primary_key=True),
    Column("badge_id", ForeignKey("badges.id", ondelete="CASCADE"), primary_key=True),
)


class CarRow(Base):
    """A listing in the normalized schema: dimensions are foreign keys."""

    __tablename__ = "cars"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2), nullable=False, index=True
    )  # $9,999,999,999.99
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    make_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("makes.id"), nullable=False)
    model_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("models.id"), nullable=False)
    trim_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("trims.id"), nullable=True)
    body_type_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("body_types.id"), nullable=False)
    transmission_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("transmissions.id"), nullable=False
    )
    condition_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("conditions.id"), nullable=False)
    dealer_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("dealers.id"), nullable=False)

    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    views_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    make: Mapped[MakeRow] = relationship()
    model: Mapped[ModelRow] = relationship()
    trim: Mapped[TrimRow | None] = relationship()
    body_type: Mapped[BodyTypeRow] = relationship()
    transmission: Mapped[TransmissionRow] = relationship()
    condition: Mapped[ConditionRow] = relationship()
    dealer: Mapped[DealerRow] = relationship()
    badges: Mapped[list[BadgeRow]] = relationship(secondary=car_badges)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
