# renderer.py
import asyncio
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence, Set

import structlog

from models import (NO_RESULTS_TEXT, DisplayUnit, QueryOutcome, SearchEmpty, SearchResult,
                    SearchSuccess, TransportFailure)

log = structlog.get_logger(__name__)

RatingResolver = Callable[[str], Awaitable[Optional[str]]]
Searcher = Callable[[str], Awaitable[QueryOutcome]]

LOADING_TEXT = "Hämtar..."
FAILURE_TEXT = "Något gick fel (nätverk/API-nyckel)."
START_TITLE = "Utvalda julfilmer:"


class TextTarget(Protocol):
    def update(self, content: str) -> None: ...


class ResultsSurface(Protocol):
    """Whatever the cards are drawn on."""
    def clear(self) -> None: ...
    def show_no_results(self) -> None: ...
    def add_unit(self, unit: DisplayUnit) -> None: ...
    def update_unit(self, unit: DisplayUnit) -> None: ...


class StatusPresenter:
    """Writes the status line and the results heading. Last write wins."""
    def __init__(self, status: TextTarget, title: TextTarget):
        self.status = status
        self.title = title

    def set_status(self, message: str) -> None:
        self.status.update(message)

    def set_results_title(self, count) -> None:
        self.title.update(f"Träffar: {count}")

    def set_start_title(self) -> None:
        self.title.update(START_TITLE)


class ResultsRenderer:
    """Inserts result cards at once and fills in each rating when its lookup settles."""
    def __init__(self, surface: ResultsSurface, resolve_rating: RatingResolver, limit: int = 10):
        self.surface = surface
        self.resolve_rating = resolve_rating
        self.limit = limit
        self.generation = 0
        self.units: List[DisplayUnit] = []
        self._tasks: Set[asyncio.Task] = set()

    def clear(self) -> None:
        self.generation += 1
        self.units = []
        self.surface.clear()

    def render(self, results: Sequence[SearchResult]) -> None:
        self.clear()
        if not results:
            self.surface.show_no_results()
            return

        generation = self.generation
        for result in results[:self.limit]:
            unit = DisplayUnit(result)
            self.units.append(unit)
            self.surface.add_unit(unit)
            task = asyncio.create_task(self._enrich(unit, generation))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def wait_idle(self) -> None:
        """Waits for every outstanding rating lookup, including stale ones."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _enrich(self, unit: DisplayUnit, generation: int) -> None:
        try:
            rating = await self.resolve_rating(unit.result.imdb_id)
        except Exception:
            log.exception("rating_enrichment_failed", imdb_id=unit.result.imdb_id)
            rating = None

        if generation != self.generation:
            log.debug("rating_discarded_stale", imdb_id=unit.result.imdb_id,
                      generation=generation, current=self.generation)
            return
        try:
            unit.settle(rating)
            self.surface.update_unit(unit)
        except Exception:
            log.exception("rating_patch_failed", imdb_id=unit.result.imdb_id)


class SearchController:
    """Runs one search from user input through to the rendered grid."""
    def __init__(self, search: Searcher, renderer: ResultsRenderer, presenter: StatusPresenter,
                 start_query: str = "christmas"):
        self.search = search
        self.renderer = renderer
        self.presenter = presenter
        self.start_query = start_query

    async def submit(self, raw: str) -> Optional[QueryOutcome]:
        """Runs a titled search for the trimmed input. Blank input does nothing."""
        query = raw.strip()
        if not query:
            return None
        return await self.run(query)

    async def start(self) -> QueryOutcome:
        self.presenter.set_start_title()
        return await self.run(self.start_query, is_start=True)

    async def run(self, query: str, is_start: bool = False) -> QueryOutcome:
        self.presenter.set_status(LOADING_TEXT)
        self.renderer.clear()

        outcome = await self.search(query)

        if isinstance(outcome, SearchEmpty):
            if not is_start:
                self.presenter.set_results_title(0)
            self.presenter.set_status(outcome.reason or NO_RESULTS_TEXT)
            self.renderer.render([])
        elif isinstance(outcome, TransportFailure):
            self.presenter.set_status(FAILURE_TEXT)
            self.renderer.render([])
        elif isinstance(outcome, SearchSuccess):
            if not is_start:
                self.presenter.set_results_title(outcome.total_count)
            self.presenter.set_status("" if outcome.items else NO_RESULTS_TEXT)
            self.renderer.render(outcome.items)
        return outcome
