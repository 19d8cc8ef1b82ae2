# config.py
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

@dataclass
class Config:
    """Holds all application configuration."""
    OMDB_API_KEY: str = field(default_factory=lambda: os.environ.get("OMDB_API_KEY", "be127e16"))
    OMDB_BASE_URL: str = "https://www.omdbapi.com/"
    RESULT_LIMIT: int = 10
    REQUEST_TIMEOUT: float = 10.0
    START_QUERY: str = "christmas"
    PRESET_QUERIES: Tuple[str, ...] = ("christmas", "grinch", "elf", "home alone", "santa")
    LOG_LEVEL: str = field(default_factory=lambda: os.environ.get("MOVIE_BROWSER_LOG_LEVEL", "INFO"))
    LOG_FILE: Optional[str] = field(default_factory=lambda: os.environ.get("MOVIE_BROWSER_LOG_FILE"))
