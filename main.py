# main.py
try:
    import pyperclip
except ImportError:
    pyperclip = None

import structlog
from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.widgets import Footer, Header

from config import Config
from logging_setup import configure_logging
from models import AppState, SearchEmpty, SearchSuccess, TransportFailure
from renderer import ResultsRenderer, SearchController, StatusPresenter
from services import MovieSearchService
from ui import LogPane, ResultsGrid, SearchControls, TextLine

log = structlog.get_logger(__name__)


class MovieBrowserApp(App):
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("c", "copy_link", "Copy IMDb link"),
    ]
    CSS_PATH = "movie_browser.css"
    TITLE = "Holiday Movie Browser"

    app_state = reactive(AppState(), always_update=True)

    def __init__(self, search_service: MovieSearchService, config: Config):
        super().__init__()
        self.search_service = search_service
        self.config = config
        self.renderer = None
        self.controller = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield SearchControls(self.config.PRESET_QUERIES, id="search-controls")
            yield TextLine(id="status")
            yield TextLine(id="results-title")
            yield ResultsGrid(id="grid")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        presenter = StatusPresenter(self.query_one("#status", TextLine),
                                    self.query_one("#results-title", TextLine))
        self.renderer = ResultsRenderer(self.query_one(ResultsGrid),
                                        self.search_service.resolve_rating,
                                        limit=self.config.RESULT_LIMIT)
        self.controller = SearchController(self.search_service.search, self.renderer, presenter,
                                           start_query=self.config.START_QUERY)

        log_pane = self.query_one(LogPane)
        if pyperclip:
            log_pane.add_message("[green]✅ Clipboard found.[/green]")
        else:
            log_pane.add_message("[yellow]⚠️ 'pyperclip' not installed.[/yellow]")
        self.query_one("#search-input").focus()
        self.run_worker(self.perform_search(self.config.START_QUERY, is_start=True),
                        group="search_worker", exclusive=True)

    async def on_unmount(self) -> None:
        if self.renderer is not None:
            await self.renderer.wait_idle()
        await self.search_service.close()

    def watch_app_state(self, old_state: AppState, new_state: AppState) -> None:
        self.sub_title = new_state.query

    def action_copy_link(self) -> None:
        log_pane = self.query_one(LogPane)
        if not pyperclip:
            log_pane.add_message("[red]❌ 'pyperclip' not installed.[/red]")
            return
        card = self.query_one(ResultsGrid).focused_card()
        if card:
            pyperclip.copy(card.unit.result.imdb_link)
            log_pane.add_message(f"📋 Copied IMDb link for '[b]{escape(card.unit.title_text)}[/b]'.")
        else:
            log_pane.add_message("[yellow]⚠️ No movie selected.[/yellow]")

    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        self.query_one(LogPane).add_message(f"🔎 Searching for '{escape(message.query)}'...")
        self.workers.cancel_group(self, "search_worker")
        self.run_worker(self.perform_search(message.query), group="search_worker", exclusive=True)

    async def perform_search(self, query: str, is_start: bool = False) -> None:
        log_pane = self.query_one(LogPane)
        log.info("search_started", query=query, is_start=is_start)
        if is_start:
            outcome = await self.controller.start()
        else:
            outcome = await self.controller.submit(query)
        if outcome is None:
            return

        self.app_state = AppState(query=query, is_start=is_start, outcome=outcome)
        if isinstance(outcome, TransportFailure):
            log_pane.add_message("[red]❌ An error occurred during search.[/red]")
        elif isinstance(outcome, SearchEmpty) or not outcome.items:
            log_pane.add_message(f"🤷 No movies found for '{escape(query)}'.")
        elif isinstance(outcome, SearchSuccess):
            shown = min(len(outcome.items), self.config.RESULT_LIMIT)
            log_pane.add_message(f"🎬 Showing {shown} of {escape(outcome.total_count)} results.")


if __name__ == "__main__":
    app_config = Config()
    configure_logging(app_config.LOG_LEVEL, app_config.LOG_FILE)
    search_service = MovieSearchService(app_config)

    app = MovieBrowserApp(search_service, app_config)
    app.run()
