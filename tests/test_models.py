"""Tests for the data model."""

from __future__ import annotations

from urllib.parse import unquote

import pytest

from conftest import make_result
from models import DisplayUnit, RatingAlreadySettled, RatingState, SearchResult, poster_fallback


class TestPoster:
    def test_uses_poster_url(self) -> None:
        result = make_result(1, poster="https://img.example.com/1.jpg")
        assert result.poster_src == "https://img.example.com/1.jpg"

    @pytest.mark.parametrize("poster", [None, "", "N/A"])
    def test_missing_poster_uses_fallback(self, poster) -> None:
        result = make_result(1, poster=poster)
        assert not result.has_poster
        assert result.poster_src == poster_fallback()

    def test_fallback_is_inline_svg(self) -> None:
        src = poster_fallback()
        assert src.startswith("data:image/svg+xml;charset=utf-8,")
        assert "Saknar bild" in unquote(src)

    def test_alt_text(self) -> None:
        assert make_result(1).alt_text == "Poster: Movie 1"
        assert SearchResult("tt1", "", "").alt_text == "Poster"

    def test_imdb_link(self) -> None:
        assert make_result(7).imdb_link == "https://www.imdb.com/title/tt0000007/"


class TestDisplayUnit:
    def test_starts_pending(self) -> None:
        unit = DisplayUnit(make_result(1))
        assert unit.rating_state is RatingState.PENDING
        assert unit.rating_text == "IMDb-betyg: …/10"

    def test_settle_with_rating(self) -> None:
        unit = DisplayUnit(make_result(1))
        unit.settle("8.2")
        assert unit.rating_state is RatingState.RESOLVED
        assert unit.rating_text == "IMDb-betyg: 8.2/10"

    def test_settle_without_rating(self) -> None:
        unit = DisplayUnit(make_result(1))
        unit.settle(None)
        assert unit.rating_state is RatingState.UNAVAILABLE
        assert unit.rating_text == "IMDb-betyg: —/10"

    def test_settles_only_once(self) -> None:
        unit = DisplayUnit(make_result(1))
        unit.settle(None)
        with pytest.raises(RatingAlreadySettled):
            unit.settle("7.0")
        assert unit.rating_state is RatingState.UNAVAILABLE

    def test_fallback_texts(self) -> None:
        unit = DisplayUnit(SearchResult("tt1", "", ""))
        assert unit.title_text == "Okänd titel"
        assert unit.year_text == "År: —"
