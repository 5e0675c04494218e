"""Create catalog tables and car_listings view

Revision ID: 3c1f0b7e2a94
Revises:
Create Date: 2026-10-18 09:12:40.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f0b7e2a94"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


CAR_LISTINGS_VIEW = """
CREATE VIEW car_listings AS
SELECT
    c.id,
    c.year,
    c.mileage,
    c.price,
    c.image_url,
    c.is_featured,
    c.is_sold,
    c.views_count,
    c.created_at,
    mk.name AS make_name,
    md.name AS model_name,
    tr.name AS trim_name,
    bt.name AS body_type_name,
    bt.icon AS body_type_icon,
    tm.type AS transmission_type,
    cd.name AS condition_name,
    dl.name AS dealer_name,
    dl.location AS dealer_location,
    COUNT(b.id) AS badge_count,
    COALESCE(
        json_agg(
            json_build_object('id', b.id, 'name', b.name, 'color', b.color)
            ORDER BY b.name
        ) FILTER (WHERE b.id IS NOT NULL),
        '[]'::json
    ) AS badges
FROM cars c
JOIN makes mk ON mk.id = c.make_id
JOIN models md ON md.id = c.model_id
LEFT JOIN trims tr ON tr.id = c.trim_id
LEFT JOIN body_types bt ON bt.id = c.body_type_id
LEFT JOIN transmissions tm ON tm.id = c.transmission_id
LEFT JOIN conditions cd ON cd.id = c.condition_id
LEFT JOIN dealers dl ON dl.id = c.dealer_id
LEFT JOIN car_badges cb ON cb.car_id = c.id
LEFT JOIN badges b ON b.id = cb.badge_id
GROUP BY c.id, mk.name, md.name, tr.name, bt.name, bt.icon, tm.type,
         cd.name, dl.name, dl.location
"""


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "makes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("logo_url", sa.String(length=500), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "models",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("make_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["make_id"], ["makes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("make_id", "name"),
    )
    op.create_table(
        "trims",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("model_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("engine_type", sa.String(length=100), nullable=True),
        sa.Column("horsepower", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["model_id"], ["models.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("model_id", "name"),
    )
    op.create_table(
        "body_types",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("icon", sa.String(length=10), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "transmissions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("type"),
    )
    op.create_table(
        "conditions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "dealers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=200), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "badges",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "cars",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("make_id", sa.Uuid(), nullable=False),
        sa.Column("model_id", sa.Uuid(), nullable=False),
        sa.Column("trim_id", sa.Uuid(), nullable=True),
        sa.Column("body_type_id", sa.Uuid(), nullable=False),
        sa.Column("transmission_id", sa.Uuid(), nullable=False),
        sa.Column("condition_id", sa.Uuid(), nullable=False),
        sa.Column("dealer_id", sa.Uuid(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("is_sold", sa.Boolean(), nullable=False),
        sa.Column("views_count", sa.Integer(), nullable=False),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["make_id"], ["makes.id"]),
        sa.ForeignKeyConstraint(["model_id"], ["models.id"]),
        sa.ForeignKeyConstraint(["trim_id"], ["trims.id"]),
        sa.ForeignKeyConstraint(["body_type_id"], ["body_types.id"]),
        sa.ForeignKeyConstraint(["transmission_id"], ["transmissions.id"]),
        sa.ForeignKeyConstraint(["condition_id"], ["conditions.id"]),
        sa.ForeignKeyConstraint(["dealer_id"], ["dealers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_cars_price", "cars", ["price"])
    op.create_index("ix_cars_created_at", "cars", ["created_at"])
    op.create_index("ix_cars_is_sold", "cars", ["is_sold"])
    op.create_table(
        "car_badges",
        sa.Column("car_id", sa.Uuid(), nullable=False),
        sa.Column("badge_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["car_id"], ["cars.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["badge_id"], ["badges.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("car_id", "badge_id"),
    )

    op.execute(CAR_LISTINGS_VIEW)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP VIEW IF EXISTS car_listings")
    op.drop_table("car_badges")
    op.drop_index("ix_cars_is_sold", table_name="cars")
    op.drop_index("ix_cars_created_at", table_name="cars")
    op.drop_index("ix_cars_price", table_name="cars")
    op.drop_table("cars")
    op.drop_table("badges")
    op.drop_table("dealers")
    op.drop_table("conditions")
    op.drop_table("transmissions")
    op.drop_table("body_types")
    op.drop_table("trims")
    op.drop_table("models")
    op.drop_table("makes")
