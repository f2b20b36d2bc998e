from pathlib import Path
import os
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

# Load environment variables
load_dotenv(BASE_DIR / "secret.env")

_PLACEHOLDER_KEYS = {"your_tmdb_api_key_here", "your_omdb_api_key_here"}


def _api_key(name: str) -> str:
    value = os.getenv(name, "").strip()
    return "" if value in _PLACEHOLDER_KEYS else value


TMDB_API_KEY = _api_key("TMDB_API_KEY")
OMDB_API_KEY = _api_key("OMDB_API_KEY")

# Missing keys switch the matching provider to offline sample data
TMDB_DEMO_MODE = not TMDB_API_KEY
OMDB_DEMO_MODE = not OMDB_API_KEY

# API endpoints
TMDB_BASE_URL  = "https://api.themoviedb.org/3"
OMDB_BASE_URL  = "https://www.omdbapi.com/"
IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
REQUEST_TIMEOUT = 10

# Cache / pacing
CACHE_TTL_SECONDS = float(os.getenv("CINEVAULT_CACHE_TTL", 5 * 60))
RATE_LIMIT_DELAY  = float(os.getenv("CINEVAULT_RATE_LIMIT_DELAY", 0.1))

# File / folder paths
DATA_DIR      = Path(os.getenv("CINEVAULT_DATA_DIR", BASE_DIR))
DATABASE_PATH = DATA_DIR / "cinevault.sqlite"
LOG_PATH      = DATA_DIR / "cinevault_debug.log"

WATCHLIST_KEY     = "cinevault_watchlist"
PLACEHOLDER_IMAGE = "/placeholder-movie.svg"
IMAGE_SIZES       = ("w200", "w300", "w500", "w780", "original")
