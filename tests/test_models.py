from datetime import date

from app.db_models import MovieRecord
from app.models import Movie, PaginationState


def test_movie_from_record_maps_json_columns():
    record = MovieRecord(
        id=603,
        title="The Matrix",
        title_seo="The Matrix streaming",
        meta_description_seo="Neo discovers the truth.",
        overview="A hacker learns about the true nature of reality.",
        poster_path="/matrix.jpg",
        release_date=date(1999, 3, 31),
        runtime=136,
        genres=["Action", "Science-Fiction"],
        cast=[{"name": "Keanu Reeves"}, {"name": "Carrie-Anne Moss"}],
        vote_average=8.2,
        trailer_url=None,
    )

    movie = Movie.model_validate(record)

    assert movie.id == 603
    assert movie.primary_genre == "Action"
    assert [actor.name for actor in movie.cast] == ["Keanu Reeves", "Carrie-Anne Moss"]
    assert movie.trailer_url is None


def test_movie_cleans_genres_and_accepts_bare_cast_names():
    movie = Movie.model_validate(
        {
            "id": 1,
            "title": "Sample",
            "genres": ["  Drama ", "", None],
            "cast": ["Actor One", {"name": "Actor Two"}],
            "vote_average": None,
        }
    )

    assert movie.genres == ["Drama"]
    assert [actor.name for actor in movie.cast] == ["Actor One", "Actor Two"]
    assert movie.vote_average == 0.0


def test_movie_without_genres_has_no_primary_genre():
    movie = Movie(id=1, title="Untitled")

    assert movie.primary_genre is None


def test_pagination_state_from_count_rounds_up():
    state = PaginationState.from_count(
        total_items=41, page_size=20, current_page=2, base_url="/category/Action"
    )

    assert state.total_pages == 3
    assert state.page_url(3) == "/category/Action?page=3"


def test_pagination_state_empty_listing_has_no_pages():
    state = PaginationState.from_count(
        total_items=0, page_size=20, current_page=1, base_url="/category/Action"
    )

    assert state.total_pages == 0


def test_movie_keeps_only_web_trailer_urls():
    def trailer(url):
        return Movie(id=1, title="Sample", trailer_url=url).trailer_url

    assert trailer("https://www.youtube.com/embed/abc") == "https://www.youtube.com/embed/abc"
    assert trailer("  http://videos.example.com/t.mp4 ") == "http://videos.example.com/t.mp4"
    assert trailer("javascript:alert(1)") is None
    assert trailer("JaVaScRiPt:alert(1)") is None
    assert trailer("data:text/html,<script>x</script>") is None
    assert trailer(None) is None
