from typing import List, Optional, Literal
from pydantic import BaseModel
from .movies_schemas import MovieDetail, MovieSummary

Status = Literal['idle', 'loading', 'loaded', 'error']
SortKey = Literal['title', 'year', 'dateAdded']


class SessionState(BaseModel):
    status: Status = 'idle'
    loading: bool = False
    error: str = ''
    query: str = ''
    page: int = 1
    total_results: int = 0
    results: List[MovieSummary] = []
    selected: Optional[MovieDetail] = None


class MovieCard(MovieSummary):
    is_favorite: bool = False


class HomePage(BaseModel):
    status: Status
    loading: bool
    error: str
    query: str
    page: int
    total_results: int
    results: List[MovieCard]


class DetailPage(BaseModel):
    status: Status
    loading: bool
    error: str
    movie: Optional[MovieDetail]
    is_favorite: bool


class FavoritesStats(BaseModel):
    total: int
    distinct_years: int
    average_year: Optional[int]


class FavoritesPage(BaseModel):
    sort: SortKey
    query: str
    total: int
    shown: int
    movies: List[MovieCard]
    stats: FavoritesStats


class ToggleResponse(BaseModel):
    imdb_id: str
    is_favorite: bool
    count: int
    error: str = ''


class ClearResponse(BaseModel):
    removed: int
    error: str = ''
