"""Bulletin timestamp formatting. No engine imports."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

# Philippine Standard Time. A fixed offset: the Philippines observes no DST.
PHT = timezone(timedelta(hours=8), "PHT")

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def zero_pad(num: int, places: int = 2) -> str:
    """Left-pad a non-negative integer with zeros: zero_pad(7) -> '07'."""
    return str(num).rjust(places, "0")


def format_issued(instant: datetime) -> str:
    """Render an instant as ``HH:MM, D Mon YYYY`` in UTC+8.

    Naive datetimes are taken to be UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    local = instant.astimezone(PHT)
    return (
        f"{zero_pad(local.hour)}:{zero_pad(local.minute)}, "
        f"{local.day} {MONTHS[local.month - 1]} {local.year}"
    )
