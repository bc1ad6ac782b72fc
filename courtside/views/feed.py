"""News feed view: headline list with silent background refresh."""

from __future__ import annotations

import asyncio

from ..chat.retry import Sleep
from ..chat.structured import StructuredRequestClient
from ..queries.models import NewsItem
from ..queries.operations import fetch_news
from .polling import Poller
from .state import QuerySlot, ViewModel

NEWS_REFRESH_SECONDS = 300.0


class NewsFeedView(ViewModel):
    def __init__(
        self,
        client: StructuredRequestClient,
        refresh_interval: float = NEWS_REFRESH_SECONDS,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        super().__init__()
        self._client = client
        self.news: QuerySlot[list[NewsItem]] = QuerySlot("news", on_change=self._notify)
        self._poller = Poller(refresh_interval, lambda: self.load(silent=True), sleep=sleep)

    @property
    def items(self) -> list[NewsItem]:
        return self.news.result or []

    @property
    def loading(self) -> bool:
        return self.news.loading

    async def load(self, silent: bool = False) -> bool:
        """Fetch headlines. An empty answer keeps the headlines already shown."""
        return await self.news.run(
            lambda: fetch_news(self._client),
            silent=silent,
            replace_when=bool,
        )

    def start(self) -> None:
        self._poller.start()

    def stop(self) -> None:
        self._poller.stop()
