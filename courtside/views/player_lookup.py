"""Player lookup view."""

from __future__ import annotations

from ..chat.structured import StructuredRequestClient
from ..queries import operations
from ..queries.models import PlayerStatsReport
from .state import QuerySlot, ViewModel


class PlayerLookupView(ViewModel):
    def __init__(self, client: StructuredRequestClient) -> None:
        super().__init__()
        self._client = client
        self.player_name = ""
        self.stats: QuerySlot[PlayerStatsReport] = QuerySlot("player_stats", self._notify)

    async def search(self, player_name: str) -> bool:
        name = player_name.strip()
        if not name:
            return False
        self.player_name = name
        return await self.stats.run(lambda: operations.analyze_player_stats(self._client, name))
