"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from app.models import Category, Movie  # noqa: E402


def make_movie(movie_id: int, **overrides: object) -> Movie:
    """Build a movie with sensible defaults for rendering and queries."""

    data: dict[str, object] = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "title_seo": f"Movie {movie_id} streaming",
        "meta_description_seo": f"Watch movie {movie_id} online.",
        "overview": f"Synopsis of movie {movie_id}.",
        "poster_path": f"/poster-{movie_id}.jpg",
        "release_date": date(2020, 1, 15),
        "runtime": 100,
        "genres": ["Action"],
        "cast": [{"name": "Jane Doe"}],
        "vote_average": 5.0,
    }
    data.update(overrides)
    return Movie.model_validate(data)


@pytest.fixture
def catalog_movies() -> list[Movie]:
    """A small catalog spanning two genres with distinct ratings."""

    return [
        make_movie(
            1,
            title="Heat",
            runtime=120,
            genres=["Action", "Drama"],
            cast=[{"name": "Al Pacino"}, {"name": "Robert De Niro"}],
            vote_average=8.3,
            trailer_url="https://www.youtube.com/embed/heat",
        ),
        make_movie(2, title="Speed", genres=["Action", "Thriller"], vote_average=7.2),
        make_movie(3, title="Ronin", genres=["Thriller", "Action"], vote_average=6.9),
        make_movie(4, title="Taken", genres=["Action"], vote_average=7.8),
        make_movie(5, title="Commando", genres=["Action"], vote_average=6.7),
        make_movie(6, title="Die Hard", genres=["Action"], vote_average=8.2),
        make_movie(7, title="Amélie", genres=["Comédie", "Romance"], vote_average=7.9),
        make_movie(8, title="Drive", genres=["Drama"], vote_average=7.6),
    ]


@pytest.fixture
def catalog_categories() -> list[Category]:
    return [
        Category(id=1, name="Action"),
        Category(id=2, name="Comédie"),
        Category(id=3, name="Drama"),
    ]
