import httpx
from typing import List, Optional
from ..config import settings
from ..schemas.movies_schemas import MovieDetail, MovieSummary, Rating

OMDB_API_KEY = settings.OMDB_API_KEY
OMDB_BASE_URL = settings.OMDB_BASE_URL

DEFAULT_SEARCH_ERROR = 'No movies found'
DEFAULT_DETAIL_ERROR = 'Failed to fetch movie details'


async def fetch_omdb(
    client: httpx.AsyncClient,
    params: dict
) -> dict:
    """
    Issue a single GET against OMDb with the API key attached.

    :param client: HTTP client for making API requests.
    :param params: Query parameters, without the API key.
    :return: Parsed JSON body.
    """
    resp = await client.get(
        OMDB_BASE_URL, params={'apikey': OMDB_API_KEY, **params}
    )
    resp.raise_for_status()
    return resp.json()


def is_success(data: dict) -> bool:
    return data.get('Response') == 'True'


def provider_error(data: dict, default: str) -> str:
    return data.get('Error') or default


def _clean(value: Optional[str]) -> Optional[str]:
    # OMDb reports missing fields as the literal "N/A"
    if not value or value == 'N/A':
        return None
    return value


def _split(value: Optional[str]) -> List[str]:
    value = _clean(value)
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


def parse_total(data: dict) -> int:
    try:
        return int(data.get('totalResults') or 0)
    except (TypeError, ValueError):
        return 0


def map_to_summary(item: dict) -> MovieSummary:
    """
    Map an OMDb search hit to a MovieSummary.

    :param item: One entry of the OMDb "Search" array.
    :return: MovieSummary object.
    """
    return MovieSummary(
        imdb_id=item.get('imdbID', ''),
        title=item.get('Title', ''),
        year=item.get('Year', ''),
        type=item.get('Type') or 'movie',
        poster_url=_clean(item.get('Poster')),
    )


def map_to_detail(data: dict) -> MovieDetail:
    """
    Map an OMDb title lookup (plot=full) to a MovieDetail.

    :param data: Successful OMDb response body.
    :return: MovieDetail object.
    """
    ratings = [
        Rating(source=r['Source'], value=r['Value'])
        for r in data.get('Ratings', []) if r.get('Source') and r.get('Value')
    ]
    return MovieDetail(
        imdb_id=data.get('imdbID', ''),
        title=data.get('Title', ''),
        year=data.get('Year', ''),
        type=data.get('Type') or 'movie',
        poster_url=_clean(data.get('Poster')),
        genre=_clean(data.get('Genre')),
        rated=_clean(data.get('Rated')),
        released=_clean(data.get('Released')),
        runtime=_clean(data.get('Runtime')),
        director=_clean(data.get('Director')),
        writer=_clean(data.get('Writer')),
        actors=_split(data.get('Actors')),
        plot=_clean(data.get('Plot')),
        language=_clean(data.get('Language')),
        country=_clean(data.get('Country')),
        awards=_clean(data.get('Awards')),
        ratings=ratings,
        metascore=_clean(data.get('Metascore')),
        imdb_rating=_clean(data.get('imdbRating')),
        imdb_votes=_clean(data.get('imdbVotes')),
        box_office=_clean(data.get('BoxOffice')),
        production=_clean(data.get('Production')),
        website=_clean(data.get('Website')),
    )
