import json
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.schemas.movies_schemas import MovieSummary
from app.stores.favorites_store import (
    FavoritesStore,
    favorites_stats,
    filter_favorites,
    sort_favorites,
    year_value,
)


def movie(imdb_id, title, year="2000", genre=None):
    return MovieSummary(imdb_id=imdb_id, title=title, year=year, genre=genre)


# --- toggle / membership ---


@pytest.mark.asyncio
async def test_toggle_twice_restores_membership(fake_redis):
    store = FavoritesStore(fake_redis)
    alien = movie("tt1", "Alien")

    assert await store.toggle(alien) is True
    assert store.is_favorite("tt1")
    assert await store.toggle(alien) is False
    assert not store.is_favorite("tt1")
    assert store.snapshot() == []


@pytest.mark.asyncio
async def test_toggle_keys_on_identifier_not_record(fake_redis):
    store = FavoritesStore(fake_redis)
    await store.toggle(movie("tt1", "Alien"))
    # same identifier, different fields, still removes
    await store.toggle(movie("tt1", "Alien (Director's Cut)", year="2003"))
    assert len(store) == 0


@pytest.mark.asyncio
async def test_every_mutation_is_persisted(fake_redis):
    store = FavoritesStore(fake_redis)
    await store.toggle(movie("tt1", "Alien"))
    await store.toggle(movie("tt2", "Aliens"))
    assert fake_redis.writes == 2
    saved = json.loads(fake_redis.data["movieFavorites"])
    assert [m["imdb_id"] for m in saved] == ["tt1", "tt2"]


# --- persistence ---


@pytest.mark.asyncio
async def test_reload_reproduces_identifiers(fake_redis):
    store = FavoritesStore(fake_redis)
    for m in [movie("tt1", "Alien"), movie("tt2", "Aliens"), movie("tt3", "Alien 3")]:
        await store.toggle(m)
    await store.toggle(movie("tt2", "Aliens"))

    reloaded = FavoritesStore(fake_redis)
    favorites = await reloaded.load()
    assert [m.imdb_id for m in favorites] == ["tt1", "tt3"]


@pytest.mark.asyncio
async def test_load_missing_key_is_empty(fake_redis):
    store = FavoritesStore(fake_redis)
    assert await store.load() == []


@pytest.mark.asyncio
async def test_load_ignores_corrupt_payload(fake_redis):
    fake_redis.data["movieFavorites"] = "{not json"
    store = FavoritesStore(fake_redis)
    assert await store.load() == []

    fake_redis.data["movieFavorites"] = json.dumps([{"title": "no id"}])
    assert await store.load() == []


@pytest.mark.asyncio
async def test_snapshot_is_a_copy(fake_redis):
    store = FavoritesStore(fake_redis)
    await store.toggle(movie("tt1", "Alien"))
    snap = store.snapshot()
    snap.clear()
    assert store.is_favorite("tt1")


# --- clear ---


@pytest.mark.asyncio
async def test_clear_all_requires_confirmation(fake_redis):
    store = FavoritesStore(fake_redis)
    await store.toggle(movie("tt1", "Alien"))
    with pytest.raises(ValueError):
        await store.clear_all(confirm=False)
    assert len(store) == 1

    assert await store.clear_all(confirm=True) == 1
    assert len(store) == 0
    assert json.loads(fake_redis.data["movieFavorites"]) == []


# --- sort / filter / stats ---


def test_sort_by_title_is_case_insensitive():
    movies = [movie("1", "beta"), movie("2", "Alpha"), movie("3", "gamma"), movie("4", "Delta")]
    assert [m.title for m in sort_favorites(movies, "title")] == ["Alpha", "beta", "Delta", "gamma"]


def test_sort_by_year_descending_with_non_numeric_last():
    movies = [
        movie("1", "A", year="1999"),
        movie("2", "B", year="N/A"),
        movie("3", "C", year="2010–2015"),
        movie("4", "D", year="1979"),
    ]
    assert [m.imdb_id for m in sort_favorites(movies, "year")] == ["3", "1", "4", "2"]


def test_sort_by_date_added_reverses_insertion_order():
    movies = [movie("1", "A"), movie("2", "B"), movie("3", "C")]
    assert [m.imdb_id for m in sort_favorites(movies, "dateAdded")] == ["3", "2", "1"]


def test_sort_never_mutates_input():
    movies = [movie("2", "b"), movie("1", "a")]
    sort_favorites(movies, "title")
    sort_favorites(movies, "dateAdded")
    assert [m.imdb_id for m in movies] == ["2", "1"]


def test_filter_matches_title_year_and_genre():
    movies = [
        movie("1", "Alien", year="1979", genre="Horror, Sci-Fi"),
        movie("2", "Heat", year="1995", genre="Crime"),
        movie("3", "Up", year="2009"),
    ]
    assert [m.imdb_id for m in filter_favorites(movies, "ALI")] == ["1"]
    assert [m.imdb_id for m in filter_favorites(movies, "199")] == ["2"]
    assert [m.imdb_id for m in filter_favorites(movies, "crime")] == ["2"]
    assert len(filter_favorites(movies, "   ")) == 3


def test_year_value():
    assert year_value("2010–2015") == 2010
    assert year_value("N/A") == 0
    assert year_value("") == 0


def test_favorites_stats():
    stats = favorites_stats([
        movie("1", "A", year="1979"),
        movie("2", "B", year="1979"),
        movie("3", "C", year="2000"),
        movie("4", "D", year="N/A"),
    ])
    assert stats.total == 4
    assert stats.distinct_years == 3
    assert stats.average_year == 1986
    assert favorites_stats([]).average_year is None


def test_favorites_stats_rounds_half_up():
    stats = favorites_stats([movie("1", "A", year="2010"), movie("2", "B", year="2011")])
    assert stats.average_year == 2011


# --- storage failures ---


@pytest.mark.asyncio
async def test_failed_save_rolls_back_toggle(broken_redis):
    store = FavoritesStore(broken_redis)
    with pytest.raises(RedisConnectionError):
        await store.toggle(movie("tt1", "Alien"))
    assert not store.is_favorite("tt1")


@pytest.mark.asyncio
async def test_failed_save_rolls_back_clear(broken_redis):
    saved = json.dumps([movie("tt1", "Alien").model_dump()])
    broken_redis.data["movieFavorites"] = saved
    store = FavoritesStore(broken_redis)
    await store.load()

    with pytest.raises(RedisConnectionError):
        await store.clear_all(confirm=True)
    # memory still matches what redis holds
    assert [m.imdb_id for m in store.snapshot()] == ["tt1"]
    assert broken_redis.data["movieFavorites"] == saved
