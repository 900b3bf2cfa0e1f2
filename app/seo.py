"""Search-engine metadata and schema.org structured data for movie pages."""

from __future__ import annotations

from typing import Any

from .models import Movie, PageMetadata

NOT_FOUND_TITLE = "Film non trouvé"

POSTER_SIZE = "w500"
BACKDROP_SIZE = "original"

# Provisional placeholders: the movies table carries no vote count, so the
# rating block advertises fixed bounds and count until one is ingested.
RATING_BEST = "10"
RATING_WORST = "1"
RATING_COUNT = "1000"


def image_url(image_base_url: str, size: str, path: str | None) -> str | None:
    """Return the CDN URL for a stored partial image path."""

    if not path:
        return None
    if path.startswith("http"):
        return path
    return f"{image_base_url}/{size}{path}"


def build_movie_metadata(
    movie: Movie,
    *,
    image_base_url: str,
    canonical_url: str | None = None,
) -> PageMetadata:
    """Derive page metadata from the movie's precomputed SEO fields."""

    return PageMetadata(
        title=movie.title_seo or movie.title,
        description=movie.meta_description_seo,
        image_url=image_url(image_base_url, POSTER_SIZE, movie.poster_path),
        canonical_url=canonical_url,
    )


def not_found_metadata() -> PageMetadata:
    return PageMetadata(title=NOT_FOUND_TITLE)


def format_duration(runtime: int | None) -> str | None:
    """Return the ISO 8601 duration used by schema.org, e.g. ``PT120M``."""

    if runtime is None:
        return None
    return f"PT{runtime}M"


def build_movie_structured_data(movie: Movie, *, image_base_url: str) -> dict[str, Any]:
    """Return the schema.org ``Movie`` JSON-LD document for ``movie``."""

    document: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "Movie",
        "name": movie.title,
        "description": movie.overview,
        "image": image_url(image_base_url, BACKDROP_SIZE, movie.poster_path),
        "datePublished": (
            movie.release_date.isoformat() if movie.release_date else None
        ),
        "duration": format_duration(movie.runtime),
        "genre": list(movie.genres),
        "actor": [{"@type": "Person", "name": actor.name} for actor in movie.cast],
        "aggregateRating": {
            "@type": "AggregateRating",
            "ratingValue": movie.vote_average,
            "bestRating": RATING_BEST,
            "worstRating": RATING_WORST,
            "ratingCount": RATING_COUNT,
        },
    }
    return {key: value for key, value in document.items() if value is not None}
