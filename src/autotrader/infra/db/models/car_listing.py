from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from autotrader.infra.db.models.base import Base


class CarListingRow(Base):
    """
    Read-only mapping of the ``car_listings`` view.

    Every dimension is pre-joined onto one row (make_name, model_name, ...),
    and badges are aggregated as a JSON array of {id, name, color}.
    The view itself is created by migration; ``is_view`` keeps it out of
    autogenerate.
    """

    __tablename__ = "car_listings"
    __table_args__ = {"info": {"is_view": True}}

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    year: Mapped[int] = mapped_column(Integer)
    mileage: Mapped[int] = mapped_column(Integer)
    price: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2))
    image_url: Mapped[str | None] = mapped_column(String(500))

    is_featured: Mapped[bool] = mapped_column(Boolean)
    is_sold: Mapped[bool] = mapped_column(Boolean)
    views_count: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    make_name: Mapped[str] = mapped_column(String(100))
    model_name: Mapped[str] = mapped_column(String(150))
    trim_name: Mapped[str | None] = mapped_column(String(150))
    body_type_name: Mapped[str | None] = mapped_column(String(50))
    body_type_icon: Mapped[str | None] = mapped_column(String(10))
    transmission_type: Mapped[str | None] = mapped_column(String(20))
    condition_name: Mapped[str | None] = mapped_column(String(50))
    dealer_name: Mapped[str | None] = mapped_column(String(200))
    dealer_location: Mapped[str | None] = mapped_column(String(200))

    badge_count: Mapped[int] = mapped_column(Integer, default=0)
    badges: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON)
