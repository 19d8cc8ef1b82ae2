# ui.py
from typing import Dict, Optional, Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Label, RichLog, Static

from models import NO_RESULTS_TEXT, DisplayUnit, RatingState

class SearchControls(Static):
    """Widget for the search input, the search button and the preset chips."""
    class SearchRequested(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def __init__(self, presets: Sequence[str] = (), **kwargs) -> None:
        super().__init__(**kwargs)
        self.presets = tuple(presets)

    def compose(self) -> ComposeResult:
        yield Label("Sök film:")
        with Horizontal(id="search-row"):
            yield Input(placeholder="t.ex. christmas", id="search-input")
            yield Button("Sök", variant="primary", id="search-button")
        with Horizontal(id="chips"):
            for i, term in enumerate(self.presets):
                yield Button(term, name=term, classes="chip", id=f"chip-{i}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("chip"):
            self.query_one(Input).value = event.button.name or ""
        self.post_search_message()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_search_message()

    def post_search_message(self) -> None:
        query = self.query_one(Input).value.strip()
        if query:
            self.post_message(self.SearchRequested(query))


class TextLine(Static):
    """A single line of plain text that remembers what it shows."""
    def __init__(self, text: str = "", **kwargs) -> None:
        super().__init__(text, markup=False, **kwargs)
        self.current_text = text

    def update(self, content: str = "") -> None:
        self.current_text = content
        super().update(content)


class MovieCard(Static, can_focus=True):
    """One result card. Only the rating line ever changes after mount."""
    def __init__(self, unit: DisplayUnit, **kwargs) -> None:
        super().__init__(**kwargs)
        self.unit = unit
        self.poster_src = unit.result.poster_src

    def on_mount(self) -> None:
        self.refresh_unit()

    @property
    def poster_line(self) -> str:
        if self.poster_src.startswith("data:"):
            return f"{self.unit.result.alt_text}: Saknar bild"
        return f"{self.unit.result.alt_text}: {self.poster_src}"

    def refresh_unit(self) -> None:
        text = Text()
        text.append(self.unit.title_text, style="bold")
        text.append(f"\n{self.unit.year_text}")
        text.append(f"\n🖼 {self.poster_line}", style="dim")
        style = "italic" if self.unit.rating_state is RatingState.PENDING else ""
        text.append(f"\n{self.unit.rating_text}", style=style)
        self.update(text)


class ResultsGrid(VerticalScroll):
    """The card grid. Implements the renderer's drawing surface."""
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cards: Dict[int, MovieCard] = {}
        self.placeholder_shown = False

    def clear(self) -> None:
        self.cards = {}
        self.placeholder_shown = False
        self.remove_children()

    def show_no_results(self) -> None:
        self.placeholder_shown = True
        self.mount(Static(NO_RESULTS_TEXT, classes="no-results"))

    def add_unit(self, unit: DisplayUnit) -> None:
        card = MovieCard(unit, classes="card")
        self.cards[id(unit)] = card
        self.mount(card)

    def update_unit(self, unit: DisplayUnit) -> None:
        card = self.cards.get(id(unit))
        if card is not None and card.is_mounted:
            card.refresh_unit()

    def focused_card(self) -> Optional[MovieCard]:
        focused = self.screen.focused if self.is_mounted else None
        return focused if isinstance(focused, MovieCard) else None


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)
