"""Utility helpers for the Cinepage service."""

from __future__ import annotations

from datetime import date
from urllib.parse import quote

# Movie ids are stored in a 32-bit signed integer column.
MAX_MOVIE_ID = 2**31 - 1


def class_names(*names: str | None) -> str:
    """Join the truthy CSS class names with single spaces."""

    return " ".join(name for name in names if name)


def category_href(name: str) -> str:
    """Return the listing URL for a category or genre name."""

    return f"/category/{quote(name, safe='')}"


def movie_href(movie_id: int) -> str:
    return f"/movie/{movie_id}"


def format_rating(vote_average: float) -> str:
    """Format a 0-10 vote average with one decimal, e.g. ``7.5/10``."""

    return f"{vote_average:.1f}/10"


def format_release_date(value: date | None) -> str:
    """Return the day/month/year form shown to French-speaking visitors."""

    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def parse_movie_id(raw: str) -> int | None:
    """Return the numeric movie id, or ``None`` for malformed path values."""

    candidate = (raw or "").strip()
    if not (candidate.isascii() and candidate.isdigit()) or len(candidate) > 10:
        return None
    movie_id = int(candidate)
    if movie_id > MAX_MOVIE_ID:
        return None
    return movie_id
