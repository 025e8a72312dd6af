from typing import Optional
import httpx
from ..config import settings
from ..schemas.movies_schemas import DetailResult, SearchResults
from ..utils.logging_service import logger
from ..utils.utils_omdb_client import (
    DEFAULT_DETAIL_ERROR,
    DEFAULT_SEARCH_ERROR,
    fetch_omdb,
    is_success,
    map_to_detail,
    map_to_summary,
    parse_total,
    provider_error,
)

SEARCH_FAILED = 'Failed to search movies'
DETAILS_FAILED = 'Failed to fetch movie details'


class MovieClientError(Exception):
    """Raised when the provider cannot be reached or returns an unreadable body."""


async def search_movies(title: str, page: int = 1) -> SearchResults:
    """
    Search OMDb for movies by title, one page at a time.
    Only feature films are requested.

    :param title: Title to search for.
    :param page: 1-based result page.
    :return: SearchResults; `error` is set when the provider reports no matches.
    """
    params = {'s': title, 'page': page, 'type': 'movie'}
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        data = await _request(client, params, SEARCH_FAILED)
    return _to_search_results(data)


async def get_movie_details(imdb_id: str) -> DetailResult:
    """
    Fetch the full record for one title, including the full plot.

    :param imdb_id: External identifier assigned by OMDb.
    :return: DetailResult; `error` carries the provider message on "not found".
    """
    params = {'i': imdb_id, 'plot': 'full'}
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        data = await _request(client, params, DETAILS_FAILED)
    if not is_success(data):
        return DetailResult(error=provider_error(data, DEFAULT_DETAIL_ERROR))
    return DetailResult(movie=map_to_detail(data))


async def search_movies_with_filters(
    title: str,
    year: Optional[str] = None,
    type: Optional[str] = None
) -> SearchResults:
    """
    Search OMDb by title, narrowing by release year and/or media type.
    Filters that are not supplied are left out of the request.

    :param title: Title to search for.
    :param year: Optional release year.
    :param type: Optional media type (movie, series, episode).
    :return: SearchResults.
    """
    params = {'s': title}
    if year:
        params['y'] = year
    if type:
        params['type'] = type
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        data = await _request(client, params, SEARCH_FAILED)
    return _to_search_results(data)


async def _request(
    client: httpx.AsyncClient,
    params: dict,
    failure: str
) -> dict:
    try:
        return await fetch_omdb(client, params)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"OMDb request {params} failed: {e}")
        raise MovieClientError(failure) from e


def _to_search_results(data: dict) -> SearchResults:
    if not is_success(data):
        return SearchResults(error=provider_error(data, DEFAULT_SEARCH_ERROR))
    return SearchResults(
        movies=[map_to_summary(item) for item in data.get('Search', [])],
        total_results=parse_total(data),
    )
