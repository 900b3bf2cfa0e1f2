"""Read operations backing the movie detail and category pages."""

from __future__ import annotations

import logging

from ..models import Category, CategoryPage, Movie, PaginationState
from ..utils import category_href
from .movie_store import MovieStore, StoreUnavailableError

logger = logging.getLogger(__name__)

SIMILAR_MOVIES_LIMIT = 4


class CatalogService:
    """Coordinates store lookups for the page handlers."""

    def __init__(self, store: MovieStore):
        self._store = store

    @property
    def store(self) -> MovieStore:
        return self._store

    async def get_movie(self, movie_id: int) -> Movie | None:
        """Return the movie with ``movie_id`` or ``None`` when it does not exist.

        Store failures propagate as :class:`StoreUnavailableError` so callers
        can tell an outage apart from a genuine miss.
        """

        movie = await self._store.fetch_movie(movie_id)
        if movie is None:
            logger.info("Movie %s not found", movie_id)
        return movie

    async def get_similar_movies(self, movie: Movie) -> list[Movie]:
        """Return up to four top-rated movies sharing ``movie``'s first genre.

        Never raises: an empty list is returned when the movie has no genre,
        nothing matches, or the store query fails.
        """

        genre = movie.primary_genre
        if genre is None:
            return []
        try:
            similar = await self._store.fetch_movies_by_genre(
                genre, exclude_id=movie.id, limit=SIMILAR_MOVIES_LIMIT
            )
        except StoreUnavailableError:
            logger.warning("Similar movies unavailable for movie %s", movie.id)
            return []
        return [candidate for candidate in similar if candidate.id != movie.id][
            :SIMILAR_MOVIES_LIMIT
        ]

    async def list_categories(self) -> list[Category]:
        return await self._store.fetch_categories()

    async def get_category_page(
        self, name: str, *, page: int, page_size: int
    ) -> CategoryPage:
        """Return one page of movies in the ``name`` genre, best rated first."""

        total = await self._store.count_movies_by_genre(name)
        pagination = PaginationState.from_count(
            total_items=total,
            page_size=page_size,
            current_page=page,
            base_url=category_href(name),
        )
        movies: list[Movie] = []
        if page <= pagination.total_pages:
            movies = await self._store.fetch_movies_by_genre(
                name, limit=page_size, offset=(page - 1) * page_size
            )
        return CategoryPage(name=name, movies=movies, pagination=pagination)
