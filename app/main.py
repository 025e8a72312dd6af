from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Depends
import redis.asyncio as redis
from redis.exceptions import RedisError
from .config import settings
from .controllers.search_controller import SearchController
from .schemas.movies_schemas import ErrorResponse, MovieSummary, SearchParams
from .schemas.pages_schemas import (
    ClearResponse,
    DetailPage,
    FavoritesPage,
    HomePage,
    SortKey,
    ToggleResponse,
)
from .stores.favorites_store import FavoritesStore
from .utils.logging_service import logger

_redis = redis.from_url(
    settings.REDIS_URL, encoding="utf-8", decode_responses=True)
controller = SearchController(FavoritesStore(_redis))


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        favorites = await controller.favorites.load()
        logger.info(f"Loaded {len(favorites)} favorites")
    except RedisError as e:
        logger.error(f"Favorites storage unavailable, starting empty: {e}")
    yield
    await _redis.aclose()


app = FastAPI(title="Movie Search", lifespan=lifespan)


def _home_page() -> HomePage:
    state = controller.state
    return HomePage(
        status=state.status,
        loading=state.loading,
        error=state.error,
        query=state.query,
        page=state.page,
        total_results=state.total_results,
        results=[controller.card(m) for m in state.results],
    )


@app.get('/', response_model=HomePage)
async def home():
    return _home_page()


@app.get('/movies/search', response_model=HomePage)
async def search_movies(params: SearchParams = Depends()):
    await controller.submit_search(
        params.title, page=params.page, year=params.year, type=params.type
    )
    return _home_page()


@app.get('/movies/{imdb_id}', response_model=DetailPage)
async def movie_details(imdb_id: str):
    state = await controller.select_movie(imdb_id)
    movie = state.selected
    if movie and movie.imdb_id != imdb_id:
        movie = None
    return DetailPage(
        status=state.status,
        loading=state.loading,
        error=state.error,
        movie=movie,
        is_favorite=controller.is_favorite(movie.imdb_id) if movie else False,
    )


@app.get('/favorites', response_model=FavoritesPage)
async def favorites(sort: SortKey = 'title', q: str = ''):
    return controller.favorites_page(sort, q)


@app.post('/favorites/toggle', response_model=ToggleResponse)
async def toggle_favorite(movie: MovieSummary):
    controller.state.error = ''
    is_favorite = await controller.toggle_favorite(movie)
    return ToggleResponse(
        imdb_id=movie.imdb_id,
        is_favorite=is_favorite,
        count=len(controller.favorites),
        error=controller.state.error,
    )


@app.delete('/favorites', response_model=ClearResponse, responses={400: {'model': ErrorResponse}})
async def clear_favorites(confirm: bool = False):
    controller.state.error = ''
    try:
        removed = await controller.clear_favorites(confirm)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ClearResponse(removed=removed, error=controller.state.error)
