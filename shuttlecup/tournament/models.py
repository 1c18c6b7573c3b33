"""Score sheet templates and round-robin match generation."""

from __future__ import annotations

from itertools import combinations
from typing import TYPE_CHECKING, Any, Optional

from shuttlecup.core.constants import (
    CATEGORIES,
    CATEGORY_ABBREVIATIONS,
    POOLS,
    TIE_BREAKER_SIDE_SIZE,
)

if TYPE_CHECKING:
    from shuttlecup.core.types import CategoryScore, Match, TieBreaker
    from shuttlecup.seasons import SeasonConfig


def is_doubles_category(category: str) -> bool:
    """Doubles categories field two players per side."""
    return "Doubles" in category


def category_abbreviation(category: str) -> str:
    """Short label used on compact score cards (MS, RMS, MD, ...)."""
    return CATEGORY_ABBREVIATIONS.get(category, category)


def empty_category_score(category: str) -> CategoryScore:
    """An unplayed category: 0-0 and no players."""
    score: CategoryScore = {
        "category": category,
        "teamAScore": 0,
        "teamBScore": 0,
        "teamAPlayer1": "",
        "teamBPlayer1": "",
    }
    if is_doubles_category(category):
        score["teamAPlayer2"] = ""
        score["teamBPlayer2"] = ""
    return score


def empty_scores() -> list[CategoryScore]:
    """A blank score sheet in canonical category order."""
    return [empty_category_score(category) for category in CATEGORIES]


def empty_tie_breaker() -> TieBreaker:
    """A tie-breaker with no players picked and no result."""
    return {
        "teamAPlayers": [""] * TIE_BREAKER_SIDE_SIZE,
        "teamBPlayers": [""] * TIE_BREAKER_SIDE_SIZE,
        "teamAScore": None,
        "teamBScore": None,
    }


def generate_pool_matches(teams: list[str], pool: str) -> list[Match]:
    """Generate one match per unordered pair of teams in ``pool``.

    Ids are ``"{pool}-{n}"`` numbered from 1 in pairing order, so the same
    roster always yields the same ids.
    """
    matches: list[Match] = []
    for number, (team_a, team_b) in enumerate(combinations(teams, 2), start=1):
        matches.append({
            "id": f"{pool}-{number}",
            "teamA": team_a,
            "teamB": team_b,
            "pool": pool,
            "scores": empty_scores(),
            "tieBreaker": empty_tie_breaker(),
        })
    return matches


def generate_all_matches(season: SeasonConfig) -> list[Match]:
    """Generate the round robin for every pool in the season roster."""
    matches: list[Match] = []
    for pool in POOLS:
        matches.extend(generate_pool_matches(season.pool_teams(pool), pool))
    return matches


def _coerce_score(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _fit_players(players: Any) -> list[str]:
    if not isinstance(players, list):
        players = []
    fitted = [p if isinstance(p, str) else "" for p in players[:TIE_BREAKER_SIDE_SIZE]]
    return fitted + [""] * (TIE_BREAKER_SIDE_SIZE - len(fitted))


def normalize_tie_breaker(raw: Any) -> TieBreaker:
    """Repair a stored tie-breaker: exactly three player slots a side, int-or-None scores."""
    if not isinstance(raw, dict):
        return empty_tie_breaker()
    return {
        "teamAPlayers": _fit_players(raw.get("teamAPlayers")),
        "teamBPlayers": _fit_players(raw.get("teamBPlayers")),
        "teamAScore": _coerce_score(raw.get("teamAScore")),
        "teamBScore": _coerce_score(raw.get("teamBScore")),
    }
