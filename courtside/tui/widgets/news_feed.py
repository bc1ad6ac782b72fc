"""NewsFeed widget - AI-curated NBA headlines with background refresh."""

from __future__ import annotations

from rich.markdown import Markdown as RichMarkdown
from textual import work
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.containers import Horizontal, VerticalScroll
from textual.widget import Widget
from textual.widgets import Button, Static

from ...views.feed import NewsFeedView
from ..render import news_markdown
from .status_bar import format_stamp


class NewsFeed(Widget):
    """Headline list fed by NewsFeedView."""

    DEFAULT_CSS = """
    NewsFeed {
        height: 1fr;
        border: round $accent;
        padding: 0 1;
    }
    NewsFeed .nf-header {
        height: auto;
    }
    NewsFeed .nf-title {
        width: 1fr;
        text-style: bold;
    }
    NewsFeed .nf-updated {
        color: $text-muted;
    }
    NewsFeed .nf-error {
        color: $error;
    }
    """

    def __init__(self, view: NewsFeedView, **kwargs) -> None:
        super().__init__(**kwargs)
        self._view = view

    def compose(self) -> ComposeResult:
        with Horizontal(classes="nf-header"):
            yield Static("CourtSide Wire", classes="nf-title")
            yield Button("Refresh", id="news-refresh")
        yield Static("", id="news-updated", classes="nf-updated")
        with VerticalScroll():
            yield Static("", id="news-body")

    def on_mount(self) -> None:
        self._view.subscribe(self._render_view)
        self._view.start()
        self.reload()

    def on_unmount(self) -> None:
        self._view.stop()
        self._view.unsubscribe(self._render_view)

    @work
    async def reload(self, silent: bool = False) -> None:
        await self._view.load(silent=silent)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "news-refresh":
            self.reload()

    def _render_view(self) -> None:
        slot = self._view.news
        try:
            body = self.query_one("#news-body", Static)
            updated = self.query_one("#news-updated", Static)
            button = self.query_one("#news-refresh", Button)
        except NoMatches:
            return

        button.disabled = slot.loading
        updated.update(f"Updated {format_stamp(slot.last_updated)}")

        if slot.loading and not self._view.items:
            body.set_class(False, "nf-error")
            body.update("Loading headlines...")
        elif slot.error_message:
            body.set_class(True, "nf-error")
            body.update(slot.error_message)
        else:
            body.set_class(False, "nf-error")
            body.update(RichMarkdown(news_markdown(self._view.items)))
