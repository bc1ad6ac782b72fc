"""PlayerStats widget - player lookup with trends and prop recommendations."""

from __future__ import annotations

from rich.markdown import Markdown as RichMarkdown
from textual import work
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.containers import Horizontal, VerticalScroll
from textual.widget import Widget
from textual.widgets import Button, Input, Static

from ...views.player_lookup import PlayerLookupView
from ..render import player_markdown


class PlayerStats(Widget):
    DEFAULT_CSS = """
    PlayerStats {
        height: 100%;
        width: 100%;
        padding: 0 1;
    }
    PlayerStats .ps-search {
        height: auto;
    }
    PlayerStats #player-input {
        width: 1fr;
    }
    PlayerStats .ps-error {
        color: $error;
    }
    PlayerStats .ps-muted {
        color: $text-muted;
    }
    """

    def __init__(self, view: PlayerLookupView, **kwargs) -> None:
        super().__init__(**kwargs)
        self._view = view

    def compose(self) -> ComposeResult:
        yield Static("Player Lookup", classes="ps-title")
        with Horizontal(classes="ps-search"):
            yield Input(placeholder="Enter NBA player name (e.g., LeBron James)", id="player-input")
            yield Button("Search", id="player-search", variant="primary")
        with VerticalScroll():
            yield Static("", id="player-body")

    def on_mount(self) -> None:
        self._view.subscribe(self._render_view)
        self._render_view()

    def on_unmount(self) -> None:
        self._view.unsubscribe(self._render_view)

    def lookup(self, name: str) -> None:
        """Fill the search box and run the lookup (used by /player)."""
        self.query_one("#player-input", Input).value = name
        self._search(name)

    @work(exclusive=True, group="player")
    async def _search(self, name: str) -> None:
        await self._view.search(name)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "player-input":
            self._search(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "player-search":
            self._search(self.query_one("#player-input", Input).value)

    def _render_view(self) -> None:
        try:
            body = self.query_one("#player-body", Static)
            button = self.query_one("#player-search", Button)
        except NoMatches:
            return

        slot = self._view.stats
        button.disabled = slot.loading
        body.set_class(bool(slot.error_message), "ps-error")
        body.set_class(slot.result is None and not slot.error_message, "ps-muted")

        if slot.loading:
            body.update("Analyzing player performance & recent trends...")
        elif slot.error_message:
            body.update(slot.error_message)
        elif slot.result is not None:
            body.update(RichMarkdown(player_markdown(slot.result)))
        else:
            body.update("Search for a player to see season averages, trends and prop ideas.")
