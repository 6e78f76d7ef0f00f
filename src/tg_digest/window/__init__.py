"""Calendar window resolution for digest requests."""

from tg_digest.window.resolver import (
    DateWindow,
    get_date_from_month,
    get_date_from_week,
    get_date_from_year,
    resolve_window,
)


__all__ = [
    "DateWindow",
    "get_date_from_month",
    "get_date_from_week",
    "get_date_from_year",
    "resolve_window",
]
