from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class Settings(BaseSettings):
    OMDB_API_KEY: str = 'YOUR_API_KEY_HERE'
    OMDB_BASE_URL: str = 'http://www.omdbapi.com/'
    REDIS_URL: str = 'redis://localhost:6379/0'
    FAVORITES_KEY: str = 'movieFavorites'
    HTTP_TIMEOUT: float = 10.0
    LOG_LEVEL: str = 'INFO'

    model_config = ConfigDict(
        env_file=".env"
    )


settings = Settings()
