"""SQLAlchemy ORM models mapping the catalog tables."""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import JSON, Date, Float, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base

# JSONB on PostgreSQL so genre containment can use the ``@>`` operator.
JSONList = JSON().with_variant(JSONB(), "postgresql")


class MovieRecord(Base):
    """A movie row as stored by the ingestion side."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    title_seo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description_seo: Mapped[str | None] = mapped_column(Text, nullable=True)
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    poster_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    runtime: Mapped[int | None] = mapped_column(Integer, nullable=True)
    genres: Mapped[list[str]] = mapped_column(JSONList, default=list)
    cast: Mapped[list[dict[str, Any]]] = mapped_column(JSONList, default=list)
    vote_average: Mapped[float] = mapped_column(Float, default=0.0, index=True)
    trailer_url: Mapped[str | None] = mapped_column(String(512), nullable=True)


class CategoryRecord(Base):
    """A navigable category, matched by name against movie genres."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), unique=True)
