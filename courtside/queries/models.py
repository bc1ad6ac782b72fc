"""Pydantic models for query results (camelCase on the wire)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MarketCategory = Literal["Spread", "Moneyline", "Total", "Prop"]
BetType = Literal["Spread", "Moneyline", "Over/Under", "Player Prop"]
Confidence = Literal["High", "Medium", "Low"]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewsItem(WireModel):
    title: str
    source: str
    snippet: str
    url: str | None = None


class BookOdds(WireModel):
    spread: str | None = None
    moneyline: str | None = None
    total: str | None = None


class MatchupOdds(WireModel):
    draft_kings: BookOdds | None = None
    fan_duel: BookOdds | None = None


class Matchup(WireModel):
    home_team: str
    away_team: str
    time: str
    date: str
    odds: MatchupOdds | None = None

    @model_validator(mode="after")
    def _distinct_teams(self) -> Matchup:
        home = self.home_team.strip()
        away = self.away_team.strip()
        if not home or not away:
            raise ValueError("home and away team must be non-empty")
        if home.lower() == away.lower():
            raise ValueError(f"home and away team are the same: {home}")
        return self

    @property
    def label(self) -> str:
        return f"{self.away_team} @ {self.home_team}"


class MarketOption(WireModel):
    id: str | None = None
    label: str
    category: MarketCategory
    book: str
    high_confidence: bool | None = None


class BetSuggestion(WireModel):
    title: str
    type: BetType | None = None
    odds: str = ""
    confidence: Confidence
    reasoning: str
    risk_level: int = Field(description="1-10 scale")

    @field_validator("risk_level", mode="before")
    @classmethod
    def _round_risk(cls, value):
        if isinstance(value, float):
            return round(value)
        return value


class ParlayLeg(WireModel):
    game: str = Field(description="e.g. Lakers vs Celtics")
    leg: str = Field(description="e.g. LeBron Over 24.5 Pts")
    odds: str
    reason: str


class AIParlay(WireModel):
    legs: list[ParlayLeg]
    total_odds: str
    master_reasoning: str
    confidence_score: float = Field(description="0-100 scale")


class SeasonAverages(WireModel):
    points: float | None = None
    rebounds: float | None = None
    assists: float | None = None


class PropRecommendation(WireModel):
    prop: str
    reasoning: str = ""
    confidence: Confidence | None = None


class PlayerStatsReport(WireModel):
    player_name: str = ""
    team: str = ""
    season_averages: SeasonAverages = Field(default_factory=SeasonAverages)
    recent_trends: list[str] = Field(default_factory=list)
    prop_recommendations: list[PropRecommendation] = Field(default_factory=list)


def risk_band(level: int) -> str:
    """Bucket a 1-10 risk level into "low", "medium" or "high"."""
    if level <= 3:
        return "low"
    if level <= 6:
        return "medium"
    return "high"
