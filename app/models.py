"""Pydantic view-models materialized for a single render."""

from __future__ import annotations

import math
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CastMember(BaseModel):
    """A credited actor; only the name is rendered."""

    name: str


class Movie(BaseModel):
    """Read-only movie record as stored in the ``movies`` table."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    title_seo: str | None = None
    meta_description_seo: str | None = None
    overview: str | None = None
    poster_path: str | None = None
    release_date: date | None = None
    runtime: int | None = None
    genres: list[str] = Field(default_factory=list)
    cast: list[CastMember] = Field(default_factory=list)
    vote_average: float = 0.0
    trailer_url: str | None = None

    @field_validator("genres", mode="before")
    @classmethod
    def _clean_genres(cls, value: object) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [str(genre).strip() for genre in value if genre and str(genre).strip()]

    @field_validator("cast", mode="before")
    @classmethod
    def _coerce_cast(cls, value: object) -> list[object]:
        if value is None:
            return []
        # Rows ingested from older dumps store bare actor names.
        return [{"name": entry} if isinstance(entry, str) else entry for entry in value]

    @field_validator("vote_average", mode="before")
    @classmethod
    def _default_vote_average(cls, value: object) -> object:
        return 0.0 if value is None else value

    @field_validator("trailer_url", mode="before")
    @classmethod
    def _embeddable_trailer_url(cls, value: object) -> object:
        # Only web URLs may end up in the trailer iframe.
        if value is None:
            return None
        cleaned = str(value).strip()
        if not cleaned.lower().startswith(("http://", "https://")):
            return None
        return cleaned

    @property
    def primary_genre(self) -> str | None:
        """The genre used as the similarity lookup key."""

        return self.genres[0] if self.genres else None


class Category(BaseModel):
    """Navigation category rendered by the category grid."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class PaginationState(BaseModel):
    """Pagination inputs derived per request."""

    current_page: int
    total_pages: int
    base_url: str

    @classmethod
    def from_count(
        cls, *, total_items: int, page_size: int, current_page: int, base_url: str
    ) -> "PaginationState":
        total_pages = math.ceil(total_items / page_size) if total_items > 0 else 0
        return cls(
            current_page=current_page, total_pages=total_pages, base_url=base_url
        )

    def page_url(self, page: int) -> str:
        return f"{self.base_url}?page={page}"


class PageMetadata(BaseModel):
    """Values rendered into ``<title>`` and the meta/OpenGraph tags."""

    title: str
    description: str | None = None
    image_url: str | None = None
    canonical_url: str | None = None


class CategoryPage(BaseModel):
    """One page of a genre listing."""

    name: str
    movies: list[Movie] = Field(default_factory=list)
    pagination: PaginationState
