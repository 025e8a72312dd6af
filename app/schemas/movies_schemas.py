from typing import List, Optional, Literal
from pydantic import BaseModel


class SearchParams(BaseModel):
    title: str = ''
    page: int = 1
    year: Optional[str] = None
    type: Optional[Literal['movie', 'series', 'episode']] = None


class MovieSummary(BaseModel):
    imdb_id: str
    title: str
    year: str = ''
    type: str = 'movie'
    poster_url: Optional[str] = None
    genre: Optional[str] = None


class Rating(BaseModel):
    source: str
    value: str


class MovieDetail(MovieSummary):
    rated: Optional[str] = None
    released: Optional[str] = None
    runtime: Optional[str] = None
    director: Optional[str] = None
    writer: Optional[str] = None
    actors: List[str] = []
    plot: Optional[str] = None
    language: Optional[str] = None
    country: Optional[str] = None
    awards: Optional[str] = None
    ratings: List[Rating] = []
    metascore: Optional[str] = None
    imdb_rating: Optional[str] = None
    imdb_votes: Optional[str] = None
    box_office: Optional[str] = None
    production: Optional[str] = None
    website: Optional[str] = None

    def to_summary(self) -> MovieSummary:
        return MovieSummary(**self.model_dump(include=set(MovieSummary.model_fields)))


class SearchResults(BaseModel):
    movies: List[MovieSummary] = []
    total_results: int = 0
    error: Optional[str] = None


class DetailResult(BaseModel):
    movie: Optional[MovieDetail] = None
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: str
