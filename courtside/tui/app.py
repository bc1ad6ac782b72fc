"""CourtSide TUI Application - dashboard, copilot chat and player lookup."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.containers import Horizontal, Vertical
from textual.widgets import ContentSwitcher, Footer, Static

from ..chat.errors import MissingApiKeyError
from ..chat.providers import UnconfiguredProvider, create_provider, provider_kind
from ..chat.structured import StructuredRequestClient
from ..config import Settings
from ..views.analyzer import AnalyzerView
from ..views.chat import ChatView
from ..views.feed import NewsFeedView
from ..views.player_lookup import PlayerLookupView
from .widgets.activity_panel import ActivityPanel
from .widgets.bet_analyzer import BetAnalyzer
from .widgets.chat_panel import ChatPanel
from .widgets.event_log import EventLog, EventLogHandler
from .widgets.news_feed import NewsFeed
from .widgets.player_stats import PlayerStats
from .widgets.status_bar import StatusBar, format_stamp

logger = logging.getLogger(__name__)

MIN_WIDTH = 116
MIN_HEIGHT = 30

DESTINATIONS = ("dashboard", "chat", "players")


def build_client(settings: Settings) -> tuple[StructuredRequestClient, str | None]:
    """Create the long-lived AI client. Returns the client and a startup error, if any."""
    try:
        kind = provider_kind(settings)
        provider = create_provider(settings)
    except MissingApiKeyError as exc:
        return StructuredRequestClient(UnconfiguredProvider(str(exc)), settings), str(exc)
    return StructuredRequestClient(provider, settings, provider_kind=kind), None


class CourtsideApp(App):
    """CourtSide TUI - AI-driven NBA betting research."""

    TITLE = "CourtSide"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("d", "show('dashboard')", "Dashboard"),
        Binding("c", "show('chat')", "Chat"),
        Binding("p", "show('players')", "Players"),
        Binding("g", "generate_parlay", "AI Parlay"),
        Binding("r", "refresh_news", "Refresh news"),
        Binding("ctrl+q", "quit_app", "Quit", show=True),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings.from_env()
        self.client, self._startup_error = build_client(self.settings)

        self.feed_view = NewsFeedView(self.client, refresh_interval=self.settings.news_refresh_seconds)
        self.analyzer_view = AnalyzerView(
            self.client, refresh_interval=self.settings.matchup_refresh_seconds
        )
        self.chat_view = ChatView(self.client)
        self.player_view = PlayerLookupView(self.client)
        self._log_handler: EventLogHandler | None = None

    def compose(self) -> ComposeResult:
        yield StatusBar(id="status-bar")
        with ContentSwitcher(initial="dashboard", id="destinations"):
            with Horizontal(id="dashboard"):
                yield BetAnalyzer(self.analyzer_view, id="bet-analyzer")
                with Vertical(id="dashboard-side"):
                    yield NewsFeed(self.feed_view, id="news-feed")
                    yield ChatPanel(self.chat_view, id="mini-chat")
            with Vertical(id="chat"):
                yield ChatPanel(self.chat_view, id="full-chat")
            with Vertical(id="players"):
                yield PlayerStats(self.player_view, id="player-stats")
        with Horizontal(id="bottom-panel"):
            yield ActivityPanel(id="activity-panel")
            yield EventLog(id="event-log", markup=True)
        yield Static(
            "Terminal too small (minimum 116x30)",
            id="size-warning",
        )
        yield Footer()

    def on_mount(self) -> None:
        self._install_log_handler()
        status = self._status_bar
        status.provider = self.client.provider_name
        status.has_key = self._startup_error is None
        for view in (self.feed_view, self.analyzer_view, self.chat_view, self.player_view):
            view.subscribe(self._on_view_changed)

        logger.info("CourtSide started (AI: %s)", self.client.provider_name)
        if self._startup_error:
            logger.error(self._startup_error)
        self._check_terminal_size()

    def _install_log_handler(self) -> None:
        self._log_handler = EventLogHandler(self._event_log)
        root = logging.getLogger()
        root.addHandler(self._log_handler)
        root.setLevel(self.settings.log_level)
        logging.getLogger("httpx").setLevel(logging.WARNING)

    def on_resize(self) -> None:
        self._check_terminal_size()

    def _check_terminal_size(self) -> None:
        warning = self.query_one("#size-warning", Static)
        too_small = self.size.width < MIN_WIDTH or self.size.height < MIN_HEIGHT
        warning.display = too_small

    # --- Widget accessors ---

    @property
    def _event_log(self) -> EventLog:
        return self.query_one("#event-log", EventLog)

    @property
    def _activity_panel(self) -> ActivityPanel:
        return self.query_one("#activity-panel", ActivityPanel)

    @property
    def _status_bar(self) -> StatusBar:
        return self.query_one("#status-bar", StatusBar)

    # --- Activity ---

    def _active_requests(self) -> list[str]:
        active = []
        if self.feed_view.loading:
            active.append("Fetching news")
        if self.analyzer_view.matchups.loading:
            active.append("Loading matchups")
        if self.analyzer_view.markets.loading:
            active.append("Loading bets")
        if self.analyzer_view.bet_analysis.loading:
            active.append("Analyzing bet")
        if self.analyzer_view.custom.loading:
            active.append("Analyzing matchup")
        if self.analyzer_view.parlay.loading:
            active.append(self.analyzer_view.parlay_stage_label)
        if self.chat_view.is_typing:
            active.append("Copilot typing")
        if self.player_view.stats.loading:
            active.append(f"Looking up {self.player_view.player_name}")
        return active

    def _on_view_changed(self) -> None:
        try:
            panel = self._activity_panel
            status = self._status_bar
        except NoMatches:
            return
        panel.show_tasks(self._active_requests())
        status.news_updated = format_stamp(self.feed_view.news.last_updated)
        status.lines_updated = format_stamp(self.analyzer_view.matchups.last_updated)

    # --- Command routing from ChatPanel ---

    def on_chat_panel_command_requested(self, message: ChatPanel.CommandRequested) -> None:
        if message.command == "news":
            self.action_refresh_news()
        elif message.command == "parlay":
            self.action_generate_parlay()
        elif message.command == "player":
            if not message.args.strip():
                self._event_log.log_warning("Usage: /player <name>")
                return
            self.action_show("players")
            self.query_one("#player-stats", PlayerStats).lookup(message.args)

    # --- Actions ---

    def action_show(self, destination: str) -> None:
        if destination not in DESTINATIONS:
            return
        self.query_one("#destinations", ContentSwitcher).current = destination

    def action_generate_parlay(self) -> None:
        self.action_show("dashboard")
        self.query_one("#bet-analyzer", BetAnalyzer).generate_parlay()

    def action_refresh_news(self) -> None:
        self.query_one("#news-feed", NewsFeed).reload()

    async def action_quit_app(self) -> None:
        self._event_log.log_info("Shutting down CourtSide...")
        self.feed_view.stop()
        self.analyzer_view.stop()
        if self._log_handler is not None:
            logging.getLogger().removeHandler(self._log_handler)
        await self.client.aclose()
        self.exit()


def main() -> None:
    load_dotenv()
    app = CourtsideApp()
    app.run()
