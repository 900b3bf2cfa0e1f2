"""Read-only access to the ``movies`` and ``categories`` tables."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence

from pydantic import ValidationError
from sqlalchemy import Select, false, func, literal_column, select, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError

from ..database import Database
from ..db_models import CategoryRecord, MovieRecord
from ..models import Category, Movie

logger = logging.getLogger(__name__)


class StoreUnavailableError(RuntimeError):
    """Raised when the backing store could not answer a query."""


class MovieStore(Protocol):
    """Minimal read-query interface the page code depends on."""

    async def fetch_movie(self, movie_id: int) -> Movie | None: ...

    async def fetch_movies_by_genre(
        self,
        genre: str,
        *,
        exclude_id: int | None = None,
        limit: int,
        offset: int = 0,
    ) -> list[Movie]: ...

    async def count_movies_by_genre(self, genre: str) -> int: ...

    async def fetch_categories(self) -> list[Category]: ...


class SqlMovieStore:
    """``MovieStore`` backed by SQLAlchemy's asyncio engine."""

    def __init__(self, database: Database):
        self._database = database

    async def fetch_movie(self, movie_id: int) -> Movie | None:
        try:
            async with self._database.session() as session:
                record = await session.get(MovieRecord, movie_id)
                if record is None:
                    return None
                return Movie.model_validate(record)
        except SQLAlchemyError as exc:
            logger.exception("Movie lookup failed for id %s", movie_id)
            raise StoreUnavailableError(f"Could not load movie {movie_id}") from exc
        except ValidationError as exc:
            logger.exception("Movie row %s is malformed", movie_id)
            raise StoreUnavailableError(f"Movie {movie_id} has malformed data") from exc

    async def fetch_movies_by_genre(
        self,
        genre: str,
        *,
        exclude_id: int | None = None,
        limit: int,
        offset: int = 0,
    ) -> list[Movie]:
        statement = self._listing_statement(
            genre, exclude_id=exclude_id, limit=limit, offset=offset
        )
        try:
            async with self._database.session() as session:
                records = (await session.scalars(statement)).all()
                return [Movie.model_validate(record) for record in records]
        except SQLAlchemyError as exc:
            logger.exception("Genre lookup failed for %r", genre)
            raise StoreUnavailableError(f"Could not load movies for {genre!r}") from exc
        except ValidationError as exc:
            logger.exception("Malformed movie row in genre %r", genre)
            raise StoreUnavailableError(f"Malformed movie data for {genre!r}") from exc

    async def count_movies_by_genre(self, genre: str) -> int:
        statement = self._genre_query(
            select(func.count()).select_from(MovieRecord), genre
        )
        try:
            async with self._database.session() as session:
                total = await session.scalar(statement)
        except SQLAlchemyError as exc:
            logger.exception("Genre count failed for %r", genre)
            raise StoreUnavailableError(f"Could not count movies for {genre!r}") from exc
        return int(total or 0)

    async def fetch_categories(self) -> list[Category]:
        statement = select(CategoryRecord).order_by(CategoryRecord.id)
        try:
            async with self._database.session() as session:
                records = (await session.scalars(statement)).all()
                return [Category.model_validate(record) for record in records]
        except SQLAlchemyError as exc:
            logger.exception("Category lookup failed")
            raise StoreUnavailableError("Could not load categories") from exc
        except ValidationError as exc:
            logger.exception("Malformed category row")
            raise StoreUnavailableError("Malformed category data") from exc

    def _listing_statement(
        self, genre: str, *, exclude_id: int | None, limit: int, offset: int
    ) -> Select:
        """Best rated first; unrated rows sort last on every dialect."""

        statement = self._genre_query(select(MovieRecord), genre)
        if exclude_id is not None:
            statement = statement.where(MovieRecord.id != exclude_id)
        return (
            statement.order_by(
                MovieRecord.vote_average.desc().nulls_last(), MovieRecord.id
            )
            .limit(limit)
            .offset(offset)
        )

    def _genre_query(self, statement: Select, genre: str) -> Select:
        """Restrict ``statement`` to movies whose genre list contains ``genre``."""

        dialect = self._database.dialect_name
        if dialect == "postgresql":
            return statement.where(
                type_coerce(MovieRecord.genres, JSONB).contains([genre])
            )
        if dialect == "sqlite":
            elements = func.json_each(MovieRecord.genres).table_valued("value")
            contains = (
                select(literal_column("1"))
                .select_from(elements)
                .where(elements.c.value == genre)
                .correlate(MovieRecord.__table__)
                .exists()
            )
            return statement.where(contains)
        logger.warning("Genre containment unsupported on %s", dialect)
        return statement.where(false())


class InMemoryMovieStore:
    """``MovieStore`` over plain lists, used for tests and local demos."""

    def __init__(
        self,
        movies: Iterable[Movie] = (),
        categories: Iterable[Category] = (),
    ) -> None:
        self._movies: dict[int, Movie] = {movie.id: movie for movie in movies}
        self._categories: list[Category] = list(categories)

    async def fetch_movie(self, movie_id: int) -> Movie | None:
        return self._movies.get(movie_id)

    async def fetch_movies_by_genre(
        self,
        genre: str,
        *,
        exclude_id: int | None = None,
        limit: int,
        offset: int = 0,
    ) -> list[Movie]:
        matches = [
            movie
            for movie in self._matching(genre)
            if exclude_id is None or movie.id != exclude_id
        ]
        matches.sort(key=lambda movie: (-movie.vote_average, movie.id))
        return matches[offset : offset + limit]

    async def count_movies_by_genre(self, genre: str) -> int:
        return len(self._matching(genre))

    async def fetch_categories(self) -> list[Category]:
        return list(self._categories)

    def _matching(self, genre: str) -> Sequence[Movie]:
        return [movie for movie in self._movies.values() if genre in movie.genres]
