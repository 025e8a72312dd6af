import json
import math
import re
from typing import List, Optional
from pydantic import ValidationError
from redis.exceptions import RedisError
from ..config import settings
from ..schemas.movies_schemas import MovieSummary
from ..schemas.pages_schemas import FavoritesStats
from ..utils.logging_service import logger

_LEADING_INT = re.compile(r'\s*(\d+)')


class FavoritesStore:
    """
    In-memory list of favorite movies mirrored to a single Redis key.

    The list keeps insertion order. Every mutation rewrites the whole key,
    so the stored JSON always matches the in-memory list once a call returns.
    """

    def __init__(self, redis_client, key: str = settings.FAVORITES_KEY):
        self._redis = redis_client
        self.key = key
        self._movies: List[MovieSummary] = []

    async def load(self) -> List[MovieSummary]:
        """
        Hydrate the list from Redis. A missing key means no favorites yet;
        an unreadable payload is logged and discarded.
        """
        raw = await self._redis.get(self.key)
        if not raw:
            self._movies = []
            return self.snapshot()
        try:
            self._movies = [MovieSummary.model_validate(item) for item in json.loads(raw)]
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable favorites under '{self.key}': {e}")
            self._movies = []
        return self.snapshot()

    async def save(self) -> None:
        payload = json.dumps([m.model_dump() for m in self._movies])
        await self._redis.set(self.key, payload)

    async def _commit(self, movies: List[MovieSummary]) -> None:
        # the in-memory list only changes once Redis accepted the write
        previous = self._movies
        self._movies = movies
        try:
            await self.save()
        except RedisError:
            self._movies = previous
            raise

    async def toggle(self, movie: MovieSummary) -> bool:
        """
        Add the movie if its identifier is absent, remove it otherwise.

        :param movie: Movie to toggle.
        :return: True if the movie is a favorite after the call.
        """
        if self.is_favorite(movie.imdb_id):
            await self._commit([m for m in self._movies if m.imdb_id != movie.imdb_id])
            added = False
        else:
            await self._commit(self._movies + [movie])
            added = True
        logger.debug(f"Favorite {movie.imdb_id} {'added' if added else 'removed'}")
        return added

    def is_favorite(self, imdb_id: str) -> bool:
        return any(m.imdb_id == imdb_id for m in self._movies)

    async def clear_all(self, confirm: bool) -> int:
        if not confirm:
            raise ValueError('Clearing favorites requires confirmation')
        removed = len(self._movies)
        await self._commit([])
        logger.info(f"Cleared {removed} favorites")
        return removed

    def snapshot(self) -> List[MovieSummary]:
        return list(self._movies)

    def __len__(self) -> int:
        return len(self._movies)


def year_value(year: Optional[str]) -> int:
    """Leading integer of a provider year ("2010–2015" -> 2010), 0 if none."""
    match = _LEADING_INT.match(year or '')
    return int(match.group(1)) if match else 0


def sort_favorites(movies: List[MovieSummary], by: str = 'title') -> List[MovieSummary]:
    """
    Return a sorted copy of the list; the input is left untouched.

    :param movies: Favorites snapshot.
    :param by: 'title' (A-Z, case-insensitive), 'year' (newest first)
        or 'dateAdded' (most recently added first).
    :return: New list.
    """
    if by == 'title':
        return sorted(movies, key=lambda m: m.title.lower())
    if by == 'year':
        return sorted(movies, key=lambda m: year_value(m.year), reverse=True)
    if by == 'dateAdded':
        return list(reversed(movies))
    return list(movies)


def filter_favorites(movies: List[MovieSummary], term: str = '') -> List[MovieSummary]:
    if not term or not term.strip():
        return list(movies)
    needle = term.lower()
    return [
        m for m in movies
        if needle in m.title.lower()
        or term in m.year
        or (m.genre and needle in m.genre.lower())
    ]


def favorites_stats(movies: List[MovieSummary]) -> FavoritesStats:
    years = [year_value(m.year) for m in movies]
    numeric = [y for y in years if y]
    return FavoritesStats(
        total=len(movies),
        distinct_years=len({m.year for m in movies}),
        average_year=math.floor(sum(numeric) / len(numeric) + 0.5) if numeric else None,
    )
