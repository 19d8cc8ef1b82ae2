# models.py
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union
from urllib.parse import quote

POSTER_MISSING = "N/A"
NO_RESULTS_TEXT = "Inga träffar."

_FALLBACK_SVG = """<svg xmlns="http://www.w3.org/2000/svg" width="300" height="450">
  <rect width="100%" height="100%" fill="rgba(255,255,255,0.08)"/>
  <text x="50%" y="50%" dominant-baseline="middle" text-anchor="middle"
    fill="rgba(255,255,255,0.6)" font-family="Arial" font-size="18">Saknar bild</text>
</svg>"""


def poster_fallback() -> str:
    """Builds the inline placeholder image used when a movie has no poster."""
    return "data:image/svg+xml;charset=utf-8," + quote(_FALLBACK_SVG, safe="")


class RatingAlreadySettled(Exception):
    """Raised when a unit's rating is settled a second time."""


@dataclass(frozen=True)
class SearchResult:
    """One movie summary as returned by a catalog search."""
    imdb_id: str
    title: str
    year: str
    poster_url: Optional[str] = None

    @property
    def has_poster(self) -> bool:
        return bool(self.poster_url) and self.poster_url != POSTER_MISSING

    @property
    def poster_src(self) -> str:
        return self.poster_url if self.has_poster else poster_fallback()

    @property
    def alt_text(self) -> str:
        return f"Poster: {self.title}" if self.title else "Poster"

    @property
    def imdb_link(self) -> str:
        return f"https://www.imdb.com/title/{self.imdb_id}/"


class RatingState(Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    UNAVAILABLE = "unavailable"


@dataclass(eq=False)
class DisplayUnit:
    """A rendered result card and its rating enrichment state."""
    result: SearchResult
    rating_state: RatingState = RatingState.PENDING
    rating: Optional[str] = None

    def settle(self, rating: Optional[str]) -> None:
        """Moves the unit out of PENDING. Allowed exactly once."""
        if self.rating_state is not RatingState.PENDING:
            raise RatingAlreadySettled(self.result.imdb_id)
        if rating is None:
            self.rating_state = RatingState.UNAVAILABLE
        else:
            self.rating_state = RatingState.RESOLVED
            self.rating = rating

    @property
    def title_text(self) -> str:
        return self.result.title or "Okänd titel"

    @property
    def year_text(self) -> str:
        return f"År: {self.result.year or '—'}"

    @property
    def rating_text(self) -> str:
        if self.rating_state is RatingState.PENDING:
            return "IMDb-betyg: …/10"
        if self.rating_state is RatingState.RESOLVED:
            return f"IMDb-betyg: {self.rating}/10"
        return "IMDb-betyg: —/10"


@dataclass(frozen=True)
class SearchSuccess:
    items: List[SearchResult]
    total_count: str


@dataclass(frozen=True)
class SearchEmpty:
    reason: str = ""


@dataclass(frozen=True)
class TransportFailure:
    pass


QueryOutcome = Union[SearchSuccess, SearchEmpty, TransportFailure]


@dataclass
class AppState:
    """A single object to hold the entire application state."""
    query: str = ""
    is_start: bool = False
    outcome: Optional[QueryOutcome] = None
