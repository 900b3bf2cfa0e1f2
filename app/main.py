"""Entry point for the FastAPI-powered movie catalog site."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse

from .config import settings
from .database import Database
from .seo import (
    build_movie_metadata,
    build_movie_structured_data,
    not_found_metadata,
)
from .services.catalog import CatalogService
from .services.movie_store import SqlMovieStore, StoreUnavailableError
from .utils import movie_href, parse_movie_id
from .web import (
    render_category_page,
    render_home_page,
    render_movie_page,
    render_not_found_page,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    database = Database(settings.database_url)
    if settings.database_auto_create:
        await database.create_all()

    fastapi_app.state.database = database
    fastapi_app.state.catalog_service = CatalogService(SqlMovieStore(database))
    logger.info("Catalog store ready (%s)", database.dialect_name)

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await database.dispose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Server-rendered movie catalog with SEO metadata",
        version="1.0.0",
        lifespan=lifespan,
    )
    register_routes(fastapi_app)
    return fastapi_app


def get_catalog_service(app: FastAPI) -> CatalogService:
    service = getattr(app.state, "catalog_service", None)
    if not isinstance(service, CatalogService):
        raise RuntimeError("Catalog service not initialised")
    return service


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/", response_class=HTMLResponse)
    async def home() -> HTMLResponse:
        service = get_catalog_service(fastapi_app)
        try:
            categories = await service.list_categories()
        except StoreUnavailableError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return HTMLResponse(render_home_page(settings.app_name, categories))

    @fastapi_app.get("/movie/{movie_id}", response_class=HTMLResponse)
    async def movie_page(movie_id: str) -> HTMLResponse:
        service = get_catalog_service(fastapi_app)
        parsed_id = parse_movie_id(movie_id)
        try:
            movie = await service.get_movie(parsed_id) if parsed_id is not None else None
        except StoreUnavailableError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        if movie is None:
            return HTMLResponse(
                render_not_found_page(not_found_metadata()), status_code=404
            )

        similar_movies = await service.get_similar_movies(movie)

        canonical_url = None
        if settings.site_origin:
            canonical_url = f"{settings.site_origin}{movie_href(movie.id)}"
        metadata = build_movie_metadata(
            movie,
            image_base_url=settings.image_base_url,
            canonical_url=canonical_url,
        )
        structured_data = build_movie_structured_data(
            movie, image_base_url=settings.image_base_url
        )
        return HTMLResponse(
            render_movie_page(
                movie,
                similar_movies,
                metadata=metadata,
                structured_data=structured_data,
                image_base_url=settings.image_base_url,
            )
        )

    @fastapi_app.get("/category/{name}", response_class=HTMLResponse)
    async def category_page(name: str, page: int = Query(default=1, ge=1)) -> HTMLResponse:
        service = get_catalog_service(fastapi_app)
        try:
            listing = await service.get_category_page(
                name, page=page, page_size=settings.category_page_size
            )
        except StoreUnavailableError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return HTMLResponse(
            render_category_page(
                listing,
                app_name=settings.app_name,
                image_base_url=settings.image_base_url,
            )
        )


app = create_app()
