"""Markdown and label formatting for query results."""

from __future__ import annotations

from typing import Sequence

from ..queries.models import (
    AIParlay,
    BetSuggestion,
    BookOdds,
    MarketOption,
    Matchup,
    NewsItem,
    PlayerStatsReport,
    risk_band,
)

RISK_MARKERS = {"low": "LOW", "medium": "MED", "high": "HIGH"}


def news_markdown(items: Sequence[NewsItem]) -> str:
    if not items:
        return "_No critical news found._"
    blocks = []
    for item in items:
        title = f"[{item.title}]({item.url})" if item.url else item.title
        blocks.append(f"**{title}**  \n_{item.source}_  \n{item.snippet}")
    return "\n\n".join(blocks)


def _book_line(name: str, odds: BookOdds | None) -> str | None:
    if odds is None:
        return None
    parts = [
        f"{label} {value}"
        for label, value in (("SPR", odds.spread), ("ML", odds.moneyline), ("O/U", odds.total))
        if value
    ]
    return f"{name}: {' / '.join(parts)}" if parts else None


def matchup_label(matchup: Matchup) -> str:
    lines = [f"{matchup.away_team} @ {matchup.home_team}  ({matchup.date} {matchup.time})"]
    if matchup.odds:
        for name, odds in (("DK", matchup.odds.draft_kings), ("FD", matchup.odds.fan_duel)):
            line = _book_line(name, odds)
            if line:
                lines.append(f"  {line}")
    return "\n".join(lines)


def market_label(option: MarketOption) -> str:
    star = "* " if option.high_confidence else "  "
    return f"{star}{option.label}  ({option.category}, {option.book})"


def bet_markdown(bet: BetSuggestion) -> str:
    band = risk_band(bet.risk_level)
    header = f"### {bet.title}"
    meta = (
        f"**Type:** {bet.type or '-'}  **Odds:** {bet.odds or '-'}  "
        f"**Confidence:** {bet.confidence}  **Risk:** {bet.risk_level}/10 ({RISK_MARKERS[band]})"
    )
    return f"{header}\n\n{meta}\n\n{bet.reasoning}"


def suggestions_markdown(bets: Sequence[BetSuggestion]) -> str:
    if not bets:
        return "_No suggestions returned for this matchup._"
    return "\n\n---\n\n".join(bet_markdown(b) for b in bets)


def parlay_markdown(parlay: AIParlay, slip_id: str = "") -> str:
    lines = ["## AI Power Parlay", ""]
    lines.append("| # | Game | Leg | Odds |")
    lines.append("|---|------|-----|------|")
    for i, leg in enumerate(parlay.legs, start=1):
        lines.append(f"| {i} | {leg.game} | {leg.leg} | {leg.odds} |")
    lines.append("")
    lines.append(f"**Total odds:** {parlay.total_odds}  **Confidence:** {parlay.confidence_score:.0f}/100")
    if slip_id:
        lines.append(f"Slip ID: `{slip_id}`")
    lines.append("")
    for i, leg in enumerate(parlay.legs, start=1):
        lines.append(f"{i}. _{leg.reason}_")
    lines.append("")
    lines.append("### Master reasoning")
    lines.append(parlay.master_reasoning)
    lines.append("")
    lines.append("_Bet responsibly._")
    return "\n".join(lines)


def parlay_stages_markdown(stages: Sequence[str], current: int) -> str:
    lines = []
    for i, stage in enumerate(stages):
        if i < current:
            lines.append(f"- [x] {stage}")
        elif i == current:
            lines.append(f"- **> {stage}**")
        else:
            lines.append(f"- [ ] {stage}")
    return "\n".join(lines)


def _fmt(value: float | None) -> str:
    return f"{value:.1f}" if value is not None else "-"


def player_markdown(report: PlayerStatsReport) -> str:
    avg = report.season_averages
    lines = [f"## {report.player_name or 'Player'}"]
    if report.team:
        lines.append(f"_{report.team}_")
    lines.append("")
    lines.append("| PTS | REB | AST |")
    lines.append("|-----|-----|-----|")
    lines.append(f"| {_fmt(avg.points)} | {_fmt(avg.rebounds)} | {_fmt(avg.assists)} |")
    if report.recent_trends:
        lines.append("")
        lines.append("### Recent trends")
        lines.extend(f"- {trend}" for trend in report.recent_trends)
    if report.prop_recommendations:
        lines.append("")
        lines.append("### Prop recommendations")
        for rec in report.prop_recommendations:
            conf = f" ({rec.confidence})" if rec.confidence else ""
            lines.append(f"- **{rec.prop}**{conf}: {rec.reasoning}")
    return "\n".join(lines)
