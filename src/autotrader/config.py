from __future__ import annotations

import os
from dataclasses import dataclass

from autotrader.domain.listing import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class ListingSettings:
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE
    validate_price_range: bool = True


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)

    if raw is None or raw.strip() == "":
        return default

    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None

    if value < 1:
        raise RuntimeError(f"{name} must be >= 1, got {value}")

    return value


def listing_settings() -> ListingSettings:
    """Read listing settings from the environment, falling back to defaults."""
    default_page_size = _int_from_env("LISTINGS_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    max_page_size = _int_from_env("LISTINGS_MAX_PAGE_SIZE", MAX_PAGE_SIZE)

    if default_page_size > max_page_size:
        raise RuntimeError("LISTINGS_DEFAULT_PAGE_SIZE cannot exceed LISTINGS_MAX_PAGE_SIZE")

    validate_price_range = (
        os.getenv("LISTINGS_VALIDATE_PRICE_RANGE", "true").strip().lower() not in _FALSE_VALUES
    )

    return ListingSettings(
        default_page_size=default_page_size,
        max_page_size=max_page_size,
        validate_price_range=validate_price_range,
    )
