# services.py
from typing import Any, List, Optional

import httpx
import structlog

from config import Config
from models import QueryOutcome, SearchEmpty, SearchResult, SearchSuccess, TransportFailure

log = structlog.get_logger(__name__)


class MovieSearchService:
    """A service to handle interactions with the OMDb catalog API."""
    def __init__(self, config: Config, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._http = http_client or httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT)

    async def close(self) -> None:
        await self._http.aclose()

    async def search(self, query: str) -> QueryOutcome:
        """Searches movies by keyword. Never raises; failures come back as outcomes."""
        try:
            data = await self._get({"s": query, "type": "movie"})
        except (httpx.HTTPError, ValueError):
            log.exception("omdb_search_failed", query=query)
            return TransportFailure()

        if data.get("Response") == "False":
            reason = str(data.get("Error") or "")
            log.info("omdb_search_empty", query=query, reason=reason)
            return SearchEmpty(reason)

        items = self._parse_items(data.get("Search"))
        total = str(data.get("totalResults") or len(items))
        log.debug("omdb_search_ok", query=query, items=len(items), total=total)
        return SearchSuccess(items=items, total_count=total)

    async def resolve_rating(self, imdb_id: str) -> Optional[str]:
        """Looks up the IMDb rating for one movie, or None when there is none to show."""
        try:
            data = await self._get({"i": imdb_id})
        except Exception:
            log.warning("rating_lookup_failed", imdb_id=imdb_id, exc_info=True)
            return None

        if data.get("Response") != "True":
            return None
        rating = data.get("imdbRating")
        if not isinstance(rating, str) or not rating or rating == "N/A":
            return None
        return rating

    async def _get(self, params: dict) -> dict:
        response = await self._http.get(
            self.config.OMDB_BASE_URL,
            params={"apikey": self.config.OMDB_API_KEY, **params},
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response body: {type(data).__name__}")
        return data

    def _parse_items(self, raw: Any) -> List[SearchResult]:
        if not isinstance(raw, list):
            return []
        results = []
        for item in raw:
            parsed = self._parse_item(item)
            if parsed:
                results.append(parsed)
        return results

    def _parse_item(self, item: Any) -> Optional[SearchResult]:
        """Parses a single raw API item into our SearchResult data model."""
        if not isinstance(item, dict) or not item.get("imdbID"):
            return None
        return SearchResult(
            imdb_id=item["imdbID"],
            title=item.get("Title", ""),
            year=item.get("Year", ""),
            poster_url=item.get("Poster"),
        )
