"""StatusBar widget - reactive status line at the top of the TUI."""

from datetime import datetime

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static


def format_stamp(value: datetime | None) -> str:
    return value.strftime("%H:%M:%S") if value else "--"


class StatusBar(Widget):
    """Displays the AI provider, key state and last refresh times."""

    DEFAULT_CSS = """
    StatusBar {
        dock: top;
        height: 1;
        background: $accent;
        color: $text;
    }
    StatusBar Static {
        width: 1fr;
        content-align: center middle;
    }
    """

    provider: reactive[str] = reactive("--")
    has_key: reactive[bool] = reactive(True)
    news_updated: reactive[str] = reactive("--")
    lines_updated: reactive[str] = reactive("--")

    def compose(self) -> ComposeResult:
        yield Static(id="status-text")

    def _render_status(self) -> str:
        key = "" if self.has_key else "  |  NO API KEY (set OPENAI_API_KEY or ANTHROPIC_API_KEY)"
        return (
            f" AI: {self.provider}  |  News: {self.news_updated}  |  "
            f"Lines: {self.lines_updated}{key}"
        )

    def watch_provider(self) -> None:
        self._update_display()

    def watch_has_key(self) -> None:
        self._update_display()

    def watch_news_updated(self) -> None:
        self._update_display()

    def watch_lines_updated(self) -> None:
        self._update_display()

    def _update_display(self) -> None:
        try:
            self.query_one("#status-text", Static).update(self._render_status())
        except NoMatches:
            pass

    def on_mount(self) -> None:
        self._update_display()
