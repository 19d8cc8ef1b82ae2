"""Shared test fixtures for the movie browser test suite."""

from __future__ import annotations

from typing import Any

import pytest

from config import Config
from models import DisplayUnit, SearchResult

OMDB_URL = "https://www.omdbapi.com/"


def omdb_item(n: int, poster: str | None = None) -> dict[str, Any]:
    return {
        "Title": f"Christmas Movie {n}",
        "Year": str(1990 + n),
        "imdbID": f"tt{n:07d}",
        "Type": "movie",
        "Poster": poster if poster is not None else f"https://img.example.com/{n}.jpg",
    }


def search_payload(count: int, total: int | None = None) -> dict[str, Any]:
    return {
        "Search": [omdb_item(i) for i in range(count)],
        "totalResults": str(total if total is not None else count),
        "Response": "True",
    }


def make_result(n: int, poster: str | None = "https://img.example.com/x.jpg") -> SearchResult:
    return SearchResult(imdb_id=f"tt{n:07d}", title=f"Movie {n}", year="2001", poster_url=poster)


class FakeSurface:
    """Records everything the renderer draws."""

    def __init__(self) -> None:
        self.units: list[DisplayUnit] = []
        self.placeholder_shown = False
        self.clears = 0
        self.updates: list[DisplayUnit] = []

    def clear(self) -> None:
        self.clears += 1
        self.units = []
        self.placeholder_shown = False

    def show_no_results(self) -> None:
        self.placeholder_shown = True

    def add_unit(self, unit: DisplayUnit) -> None:
        self.units.append(unit)

    def update_unit(self, unit: DisplayUnit) -> None:
        self.updates.append(unit)


class FakeText:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.writes = 0

    def update(self, content: str = "") -> None:
        self.text = content
        self.writes += 1


@pytest.fixture()
def config() -> Config:
    return Config(OMDB_API_KEY="test-key")


@pytest.fixture()
def surface() -> FakeSurface:
    return FakeSurface()
