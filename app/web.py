"""HTML page rendering for the catalog pages."""

from __future__ import annotations

import json
import re
from html import escape
from textwrap import dedent
from typing import Any, Iterable, Mapping, Sequence

from .models import Category, CategoryPage, Movie, PageMetadata, PaginationState
from .seo import BACKDROP_SIZE, NOT_FOUND_TITLE, POSTER_SIZE, image_url
from .utils import (
    category_href,
    class_names,
    format_rating,
    format_release_date,
    movie_href,
)

TITLE_SUFFIX = "Streaming gratuit"
PLAYER_PLACEHOLDER = "Lecteur vidéo à venir"


PAGE_TEMPLATE = dedent(
    """
<!DOCTYPE html>
<html lang="fr">
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>__TITLE__</title>
__HEAD__
    <style>
        :root {
            color-scheme: dark;
            font-family: 'Inter', 'Segoe UI', system-ui, -apple-system, sans-serif;
            --text-muted: rgba(255, 255, 255, 0.6);
            --chip: rgba(255, 255, 255, 0.1);
            --chip-hover: rgba(255, 255, 255, 0.2);
            --accent: #dc2626;
            --accent-soft: #ef4444;
            --accent-strong: #b91c1c;
            background: #000000;
            color: #ffffff;
        }
        * {
            box-sizing: border-box;
        }
        body {
            margin: 0;
            min-height: 100vh;
        }
        a {
            color: inherit;
            text-decoration: none;
        }
        .container {
            max-width: 1200px;
            margin: 0 auto;
            padding: 0 1rem 4rem;
        }
        .hero {
            position: absolute;
            inset: 0 0 auto 0;
            height: 50vh;
            overflow: hidden;
        }
        .hero-backdrop {
            width: 100%;
            height: 100%;
            object-fit: cover;
            opacity: 0.2;
        }
        .hero-gradient {
            position: absolute;
            inset: 0;
            background: linear-gradient(to bottom, rgba(0, 0, 0, 0.6), #000000);
        }
        .movie {
            position: relative;
            display: grid;
            gap: 2rem;
            padding-top: 20vh;
        }
        @media (min-width: 768px) {
            .movie {
                grid-template-columns: 300px 1fr;
            }
        }
        .poster {
            border-radius: 0.75rem;
            box-shadow: 0 25px 50px -12px rgba(0, 0, 0, 0.5);
        }
        h1 {
            font-size: 2.25rem;
            margin: 0 0 1rem;
        }
        h2 {
            font-size: 1.5rem;
            margin: 0 0 1rem;
        }
        .facts {
            display: flex;
            align-items: center;
            gap: 1.5rem;
            margin-bottom: 1.5rem;
        }
        .rating::before {
            content: "\\2605";
            color: #facc15;
            margin-right: 0.5rem;
        }
        .muted {
            color: var(--text-muted);
        }
        .chips {
            display: flex;
            flex-wrap: wrap;
            gap: 0.5rem;
            margin-bottom: 1.5rem;
        }
        .chip {
            background: var(--chip);
            padding: 0.25rem 0.75rem;
            border-radius: 9999px;
            font-size: 0.875rem;
        }
        a.chip:hover {
            background: var(--chip-hover);
        }
        .synopsis {
            font-size: 1.125rem;
            color: rgba(255, 255, 255, 0.8);
            margin-bottom: 2rem;
        }
        section {
            margin-bottom: 2rem;
        }
        .video {
            aspect-ratio: 16 / 9;
            border-radius: 0.75rem;
            overflow: hidden;
            background: #000000;
            display: flex;
            align-items: center;
            justify-content: center;
        }
        .video iframe {
            width: 100%;
            height: 100%;
            border: 0;
        }
        .card-grid {
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(180px, 1fr));
            gap: 1rem;
        }
        .movie-card img {
            width: 100%;
            border-radius: 0.5rem;
        }
        .category-grid {
            display: grid;
            grid-template-columns: repeat(2, 1fr);
            gap: 1rem;
        }
        @media (min-width: 1024px) {
            .category-grid {
                grid-template-columns: repeat(4, 1fr);
            }
        }
        .category-link {
            background: var(--accent);
            border-radius: 0.5rem;
            padding: 1.5rem;
            text-align: center;
            transition: background 0.2s ease;
        }
        .category-link:hover {
            background: var(--accent-strong);
        }
        .pagination {
            display: flex;
            justify-content: center;
            gap: 0.5rem;
            margin-top: 2rem;
        }
        .pagination-link {
            padding: 0.5rem 1rem;
            border-radius: 0.375rem;
            color: #000000;
            font-weight: 500;
            background: var(--accent-soft);
        }
        .pagination-link:hover,
        .pagination-link.is-current {
            background: var(--accent);
        }
    </style>
</head>
<body>
__BODY__
</body>
</html>
    """
).strip()


MOVIE_TEMPLATE = dedent(
    """
<div class="hero">
    __BACKDROP__
    <div class="hero-gradient"></div>
</div>
<main class="container">
    <article class="movie">
        <div>
            __POSTER__
        </div>
        <div>
            <h1>__TITLE__ __TITLE_SUFFIX__</h1>
            <div class="facts">
                <span class="rating">__RATING__</span>
                <span class="muted">__RUNTIME__ minutes</span>
                <span class="muted">__RELEASE_DATE__</span>
            </div>
            <div class="chips">__GENRES__</div>
            <h2>Synopsis __TITLE__ streaming gratuit</h2>
            <p class="synopsis">__OVERVIEW__</p>
            <section>
                <h2>Acteurs principaux</h2>
                <div class="chips">__CAST__</div>
            </section>
__TRAILER__
            <section>
                <h2>Regarder __TITLE__ __TITLE_SUFFIX__</h2>
                <div class="video">
                    <span class="muted">__PLAYER_PLACEHOLDER__</span>
                </div>
            </section>
        </div>
    </article>
__SIMILAR__
</main>
    """
).strip()


TRAILER_TEMPLATE = dedent(
    """
            <section>
                <h2>Bande annonce __TITLE__ streaming gratuit</h2>
                <div class="video">
                    <iframe src="__TRAILER_URL__" allowfullscreen></iframe>
                </div>
            </section>
    """
).strip("\n")


def _fill(template: str, replacements: Mapping[str, str]) -> str:
    """Substitute every placeholder in a single pass.

    Replacement values are never rescanned, so user content that happens to
    look like a placeholder is left alone.
    """

    keys = sorted(replacements, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern.sub(lambda match: replacements[match.group(0)], template)


def _attr(value: object) -> str:
    return escape(str(value), quote=True)


def render_head(metadata: PageMetadata, *, structured_data: Any = None) -> str:
    """Return the meta, OpenGraph and JSON-LD tags for a page head."""

    tags: list[str] = [f'<meta property="og:title" content="{_attr(metadata.title)}" />']
    if metadata.description:
        tags.append(
            f'<meta name="description" content="{_attr(metadata.description)}" />'
        )
        tags.append(
            f'<meta property="og:description" content="{_attr(metadata.description)}" />'
        )
    if metadata.image_url:
        tags.append(f'<meta property="og:image" content="{_attr(metadata.image_url)}" />')
    if metadata.canonical_url:
        tags.append(f'<link rel="canonical" href="{_attr(metadata.canonical_url)}" />')
        tags.append(
            f'<meta property="og:url" content="{_attr(metadata.canonical_url)}" />'
        )
    if structured_data is not None:
        payload = json.dumps(structured_data, ensure_ascii=False).replace("</", "<\\/")
        tags.append(f'<script type="application/ld+json">{payload}</script>')
    return "\n".join(f"    {tag}" for tag in tags)


def render_document(
    metadata: PageMetadata, body: str, *, structured_data: Any = None
) -> str:
    """Wrap ``body`` in the shared page layout."""

    return _fill(
        PAGE_TEMPLATE,
        {
            "__TITLE__": escape(metadata.title),
            "__HEAD__": render_head(metadata, structured_data=structured_data),
            "__BODY__": body,
        },
    )


def render_category_list(categories: Iterable[Category] | None) -> str:
    """Return the category grid; each entry links to its listing page."""

    links = [
        f'<a class="category-link" href="{_attr(category_href(category.name))}">'
        f"<h3>{escape(category.name)}</h3></a>"
        for category in categories or ()
    ]
    return f'<div class="category-grid">{"".join(links)}</div>'


def render_pagination(current_page: int, total_pages: int, base_url: str) -> str:
    """Return one link per page; the current page only differs in style."""

    links = []
    for page in range(1, total_pages + 1):
        css = class_names("pagination-link", "is-current" if page == current_page else None)
        href = f"{base_url}?page={page}"
        links.append(f'<a class="{css}" href="{_attr(href)}">{page}</a>')
    return f'<nav class="pagination">{"".join(links)}</nav>'


def render_pagination_state(state: PaginationState) -> str:
    return render_pagination(state.current_page, state.total_pages, state.base_url)


def render_movie_card(movie: Movie, *, image_base_url: str) -> str:
    poster = image_url(image_base_url, POSTER_SIZE, movie.poster_path)
    image = (
        f'<img src="{_attr(poster)}" alt="{_attr(movie.title)}" loading="lazy" />'
        if poster
        else ""
    )
    return (
        f'<a class="movie-card" href="{movie_href(movie.id)}">{image}'
        f"<h3>{escape(movie.title)}</h3>"
        f'<span class="rating">{format_rating(movie.vote_average)}</span></a>'
    )


def render_similar_movies(movies: Sequence[Movie], *, image_base_url: str) -> str:
    """Return the "similar movies" section, or nothing when there are none."""

    if not movies:
        return ""
    cards = "".join(
        render_movie_card(movie, image_base_url=image_base_url) for movie in movies
    )
    return (
        '    <section class="similar">\n'
        "        <h2>Films similaires</h2>\n"
        f'        <div class="card-grid">{cards}</div>\n'
        "    </section>"
    )


def render_movie_body(
    movie: Movie, similar_movies: Sequence[Movie], *, image_base_url: str
) -> str:
    """Return the detail page markup for ``movie``."""

    title = escape(movie.title)
    backdrop = image_url(image_base_url, BACKDROP_SIZE, movie.poster_path)
    poster = image_url(image_base_url, POSTER_SIZE, movie.poster_path)

    trailer = ""
    if movie.trailer_url:
        trailer = _fill(
            TRAILER_TEMPLATE,
            {"__TITLE__": title, "__TRAILER_URL__": _attr(movie.trailer_url)},
        )

    genres = "".join(
        f'<a class="chip" href="{_attr(category_href(genre))}">{escape(genre)}</a>'
        for genre in movie.genres
    )
    cast = "".join(
        f'<span class="chip">{escape(actor.name)}</span>' for actor in movie.cast
    )

    return _fill(
        MOVIE_TEMPLATE,
        {
            "__BACKDROP__": (
                f'<img class="hero-backdrop" src="{_attr(backdrop)}" alt="" />'
                if backdrop
                else ""
            ),
            "__POSTER__": (
                f'<img class="poster" src="{_attr(poster)}" alt="{title}" '
                'width="300" height="450" />'
                if poster
                else ""
            ),
            "__TITLE__": title,
            "__TITLE_SUFFIX__": TITLE_SUFFIX,
            "__RATING__": format_rating(movie.vote_average),
            "__RUNTIME__": str(movie.runtime) if movie.runtime is not None else "?",
            "__RELEASE_DATE__": format_release_date(movie.release_date),
            "__GENRES__": genres,
            "__OVERVIEW__": escape(movie.overview or ""),
            "__CAST__": cast,
            "__TRAILER__": trailer,
            "__PLAYER_PLACEHOLDER__": PLAYER_PLACEHOLDER,
            "__SIMILAR__": render_similar_movies(
                similar_movies, image_base_url=image_base_url
            ),
        },
    )


def render_movie_page(
    movie: Movie,
    similar_movies: Sequence[Movie],
    *,
    metadata: PageMetadata,
    structured_data: dict[str, Any],
    image_base_url: str,
) -> str:
    """Return the full HTML document for a movie detail page."""

    body = render_movie_body(movie, similar_movies, image_base_url=image_base_url)
    return render_document(metadata, body, structured_data=structured_data)


def render_not_found_page(metadata: PageMetadata) -> str:
    return render_document(metadata, f"<div>{escape(NOT_FOUND_TITLE)}</div>")


def render_home_page(app_name: str, categories: Sequence[Category]) -> str:
    """Return the landing page listing every category."""

    body = (
        '<main class="container">\n'
        f"    <h1>{escape(app_name)}</h1>\n"
        "    <h2>Catégories</h2>\n"
        f"    {render_category_list(categories)}\n"
        "</main>"
    )
    return render_document(PageMetadata(title=app_name), body)


def render_category_page(
    page: CategoryPage, *, app_name: str, image_base_url: str
) -> str:
    """Return a paginated genre listing."""

    cards = "".join(
        render_movie_card(movie, image_base_url=image_base_url) for movie in page.movies
    )
    body = (
        '<main class="container">\n'
        f"    <h1>Films {escape(page.name)} {TITLE_SUFFIX}</h1>\n"
        f'    <div class="card-grid">{cards}</div>\n'
        f"    {render_pagination_state(page.pagination)}\n"
        "</main>"
    )
    metadata = PageMetadata(
        title=f"Films {page.name} {TITLE_SUFFIX} | {app_name}",
        description=f"Les meilleurs films {page.name} à regarder en streaming gratuit.",
    )
    return render_document(metadata, body)
