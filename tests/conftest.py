"""Shared fixtures: a scripted provider and a recording sleep."""

from __future__ import annotations

import asyncio
import json

import pytest

from courtside.chat.llm_provider import GenerationRequest, GenerationResult
from courtside.chat.structured import StructuredRequestClient
from courtside.config import Settings


class StatusError(Exception):
    """Mimics an SDK APIStatusError carrying an HTTP status code."""

    def __init__(self, status_code: int, message: str = "upstream error") -> None:
        super().__init__(f"Error code: {status_code} - {message}")
        self.status_code = status_code


class FakeProvider:
    """Scripted provider keyed by schema name ("chat" for free-text turns).

    Each value is a response or a list of responses consumed in order. A
    response is a str, a GenerationResult, an exception to raise, or an
    async callable taking the request.
    """

    def __init__(self, responses: dict | None = None) -> None:
        self.responses = dict(responses or {})
        self.requests: list[GenerationRequest] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "Fake"

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        key = request.schema_name if request.schema is not None else "chat"
        scripted = self.responses[key]
        value = scripted.pop(0) if isinstance(scripted, list) else scripted
        if callable(value):
            value = await value(request)
        if isinstance(value, BaseException):
            raise value
        if isinstance(value, str):
            return GenerationResult(text=value)
        return value

    async def aclose(self) -> None:
        self.closed = True


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


def as_json(payload) -> str:
    return json.dumps(payload)


NEWS_PAYLOAD = {
    "items": [
        {"title": "Star guard out 2 weeks", "source": "ESPN", "snippet": "Hamstring strain."},
        {"title": "Trade deadline blockbuster", "source": "The Athletic", "snippet": "Three-team deal."},
        {"title": "Rookie cleared to play", "source": "Team PR", "snippet": "Returns tonight."},
    ]
}

MATCHUPS_PAYLOAD = {
    "items": [
        {
            "homeTeam": "Boston Celtics",
            "awayTeam": "Los Angeles Lakers",
            "time": "7:30 PM ET",
            "date": "2026-10-18",
            "odds": {
                "draftKings": {"spread": "BOS -6.5", "moneyline": "-250", "total": "228.5"},
                "fanDuel": {"spread": "BOS -6", "moneyline": "unavailable"},
            },
        },
        {
            "homeTeam": "Denver Nuggets",
            "awayTeam": "Phoenix Suns",
            "time": "10:00 PM ET",
            "date": "2026-10-18",
        },
    ]
}

MARKETS_PAYLOAD = {
    "items": [
        {"id": "1", "label": "Celtics -6.5", "category": "Spread", "book": "DraftKings", "highConfidence": True},
        {"id": "2", "label": "Lakers ML +210", "category": "Moneyline", "book": "FanDuel"},
        {"id": "3", "label": "Over 228.5", "category": "Total", "book": "DraftKings", "highConfidence": False},
        {"id": "4", "label": "Jayson Tatum Over 27.5 Points", "category": "Prop", "book": "FanDuel", "highConfidence": True},
        {"id": "5", "label": "Anthony Davis Over 11.5 Rebounds", "category": "Prop", "book": "DraftKings"},
        {"id": "6", "label": "LeBron James Over 7.5 Ast", "category": "Prop", "book": "FanDuel"},
    ]
}

BET_PAYLOAD = {
    "title": "Celtics -6.5",
    "type": "Spread",
    "odds": "-110",
    "confidence": "High",
    "reasoning": "Home rest advantage and Lakers missing a starter.",
    "riskLevel": 4,
}

PARLAY_PAYLOAD = {
    "legs": [
        {"game": "Lakers @ Celtics", "leg": "Celtics -6.5", "odds": "-110", "reason": "Rest edge."},
        {"game": "Suns @ Nuggets", "leg": "Jokic Over 11.5 Reb", "odds": "-120", "reason": "Pace."},
        {"game": "Suns @ Nuggets", "leg": "Under 231.5", "odds": "-105", "reason": "Defense."},
        {"game": "Lakers @ Celtics", "leg": "Tatum Over 27.5 Pts", "odds": "-115", "reason": "Usage."},
    ],
    "totalOdds": "+1180",
    "masterReasoning": "Correlated home favorites with pace-driven props.",
    "confidenceScore": 62,
}

PLAYER_PAYLOAD = {
    "playerName": "LeBron James",
    "team": "Los Angeles Lakers",
    "seasonAverages": {"points": 24.1, "rebounds": 7.8, "assists": 8.3},
    "recentTrends": ["Minutes trending up", "Shooting 41% from three over last 5"],
    "propRecommendations": [
        {"prop": "Over 7.5 Assists", "reasoning": "Ball-handler usage up.", "confidence": "Medium"}
    ],
}


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def retry_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def client(provider, settings, retry_sleep) -> StructuredRequestClient:
    return StructuredRequestClient(provider, settings, sleep=retry_sleep)
