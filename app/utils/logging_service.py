import logging
import sys
from ..config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("movie_search")

if not logger.handlers:  # avoid duplicate handlers on reload
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

logger.setLevel(settings.LOG_LEVEL.upper())
logger.propagate = False
