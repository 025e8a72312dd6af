from typing import Optional
from redis.exceptions import RedisError
from ..clients.omdb_client import (
    MovieClientError,
    get_movie_details,
    search_movies,
    search_movies_with_filters,
)
from ..schemas.movies_schemas import MovieDetail, MovieSummary
from ..schemas.pages_schemas import FavoritesPage, MovieCard, SessionState
from ..stores.favorites_store import (
    FavoritesStore,
    favorites_stats,
    filter_favorites,
    sort_favorites,
)
from ..utils.logging_service import logger

EMPTY_SEARCH_MESSAGE = 'Please enter a movie title'
SEARCH_FAILED_MESSAGE = 'Failed to fetch movies. Please try again.'
DETAILS_FAILED_MESSAGE = 'Failed to fetch movie details. Please try again.'
SAVE_FAILED_MESSAGE = 'Failed to save favorites'


class SearchController:
    """
    Owns the session state and drives search, selection and favorites.

    States are idle, loading, loaded and error. Requests are not cancelled:
    when two triggers overlap, whichever response lands last wins the
    shared state slots.
    `loading` stays set while any request is still pending.
    """

    def __init__(self, favorites: FavoritesStore):
        self.favorites = favorites
        self.state = SessionState()
        self._pending = 0

    async def submit_search(
        self,
        title: str,
        page: int = 1,
        year: Optional[str] = None,
        type: Optional[str] = None
    ) -> SessionState:
        """
        Run a title search. Blank input is rejected without calling out.
        A year or type filter switches to the filtered search.

        :param title: Raw search input.
        :param page: 1-based result page (paged search only).
        :param year: Optional release year filter.
        :param type: Optional media type filter.
        :return: The updated session state.
        """
        if not title or not title.strip():
            self.state.error = EMPTY_SEARCH_MESSAGE
            self.state.status = 'error'
            return self.state

        title = title.strip()
        # the filtered search has no paging
        page = 1 if (year or type) else max(page, 1)
        self.state.query = title
        self.state.page = page
        self._start()
        try:
            if year or type:
                results = await search_movies_with_filters(title, year, type)
            else:
                results = await search_movies(title, page)
        except MovieClientError:
            self.state.results = []
            self.state.total_results = 0
            self._fail(SEARCH_FAILED_MESSAGE)
        else:
            if results.error:
                self.state.results = []
                self.state.total_results = 0
                self._fail(results.error)
            else:
                self.state.results = results.movies
                self.state.total_results = results.total_results
                self.state.status = 'loaded'
        finally:
            self._finish()
        return self.state

    async def select_movie(self, imdb_id: str) -> SessionState:
        self._start()
        try:
            result = await get_movie_details(imdb_id)
        except MovieClientError:
            self._fail(DETAILS_FAILED_MESSAGE)
        else:
            if result.error:
                self._fail(result.error)
            else:
                self.state.selected = result.movie
                self.state.status = 'loaded'
        finally:
            self._finish()
        return self.state

    async def toggle_favorite(self, movie: MovieSummary) -> bool:
        """
        Flip the favorite status of a movie. Details are stored as summaries.

        :return: True if the movie is a favorite afterwards.
        """
        if isinstance(movie, MovieDetail):
            movie = movie.to_summary()
        try:
            return await self.favorites.toggle(movie)
        except RedisError as e:
            logger.error(f"Could not persist favorites: {e}")
            self.state.error = SAVE_FAILED_MESSAGE
            return self.favorites.is_favorite(movie.imdb_id)

    def is_favorite(self, imdb_id: str) -> bool:
        return self.favorites.is_favorite(imdb_id)

    async def clear_favorites(self, confirm: bool) -> int:
        try:
            return await self.favorites.clear_all(confirm)
        except RedisError as e:
            logger.error(f"Could not persist favorites: {e}")
            self.state.error = SAVE_FAILED_MESSAGE
            return 0

    def card(self, movie: MovieSummary) -> MovieCard:
        return MovieCard(**movie.model_dump(), is_favorite=self.is_favorite(movie.imdb_id))

    def favorites_page(self, sort_by: str = 'title', term: str = '') -> FavoritesPage:
        """
        Build the favorites view from a snapshot; stored order is never changed.
        """
        movies = self.favorites.snapshot()
        shown = sort_favorites(filter_favorites(movies, term), sort_by)
        return FavoritesPage(
            sort=sort_by,
            query=term,
            total=len(movies),
            shown=len(shown),
            movies=[self.card(m) for m in shown],
            stats=favorites_stats(movies),
        )

    def _start(self) -> None:
        self._pending += 1
        self.state.loading = True
        self.state.error = ''
        self.state.status = 'loading'
        logger.debug("Controller entering loading state")

    def _finish(self) -> None:
        self._pending -= 1
        self.state.loading = self._pending > 0

    def _fail(self, message: str) -> None:
        self.state.error = message
        self.state.status = 'error'
        logger.debug(f"Controller error: {message}")
