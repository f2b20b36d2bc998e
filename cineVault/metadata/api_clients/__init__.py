"""
metadata.api_clients
~~~~~~~~~~~~~~~~~~~~
Thin wrappers around external REST APIs, plus offline stand-ins with the
same surface for when no API key is configured.
"""

from .tmdb_client import TMDBClient
from .omdb_client import OMDBClient
from .demo_client import DemoTMDBClient, DemoOMDBClient

__all__ = ["TMDBClient", "OMDBClient", "DemoTMDBClient", "DemoOMDBClient"]
