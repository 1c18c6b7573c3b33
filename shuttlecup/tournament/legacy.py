"""Migration of stored season documents into the canonical shape.

Earlier builds wrote a bare list of matches, then ``{"matches": [...]}``,
before the knockout section existed. Tie-breakers were added later still
and placeholder team names were used before the roster was announced.
Everything is repaired here, once, at load time.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from shuttlecup.core.constants import (
    CATEGORIES,
    FINAL,
    FINAL_TYPE,
    KNOCKOUT_IDS,
    POOLS,
    SEMI,
    TBD,
)

from .models import (
    empty_category_score,
    is_doubles_category,
    normalize_tie_breaker,
)

if TYPE_CHECKING:
    from shuttlecup.core.types import (
        CategoryScore,
        KnockoutMatch,
        Match,
        TeamInfo,
        TournamentDocument,
    )
    from shuttlecup.seasons import SeasonConfig


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


def _as_name(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _normalize_score(category: str, raw: dict[str, Any] | None) -> CategoryScore:
    score = empty_category_score(category)
    if not raw:
        return score
    score["teamAScore"] = max(_as_int(raw.get("teamAScore")), 0)
    score["teamBScore"] = max(_as_int(raw.get("teamBScore")), 0)
    score["teamAPlayer1"] = _as_name(raw.get("teamAPlayer1"))
    score["teamBPlayer1"] = _as_name(raw.get("teamBPlayer1"))
    if is_doubles_category(category):
        score["teamAPlayer2"] = _as_name(raw.get("teamAPlayer2"))
        score["teamBPlayer2"] = _as_name(raw.get("teamBPlayer2"))
    return score


def normalize_scores(raw_scores: Any) -> list[CategoryScore]:
    """Lay a stored score list out in canonical category order.

    Scores are matched by category name; an entry without a category falls
    back to its position. Missing categories come back empty.
    """
    if not isinstance(raw_scores, list):
        raw_scores = []
    by_category: dict[str, dict[str, Any]] = {}
    for index, raw in enumerate(raw_scores):
        if not isinstance(raw, dict):
            continue
        category = raw.get("category")
        if category not in CATEGORIES and index < len(CATEGORIES):
            category = CATEGORIES[index]
        by_category.setdefault(category, raw)
    return [_normalize_score(c, by_category.get(c)) for c in CATEGORIES]


def _infer_pool(raw: dict[str, Any], team_pools: dict[str, str]) -> str:
    pool = raw.get("pool")
    if pool in POOLS:
        return pool
    for team in (raw.get("teamA"), raw.get("teamB")):
        if team in team_pools:
            return team_pools[team]
    match_id = str(raw.get("id", ""))
    prefix = match_id.split("-", 1)[0]
    return prefix if prefix in POOLS else POOLS[0]


def _normalize_pool_match(
    raw: dict[str, Any], season: SeasonConfig, team_pools: dict[str, str]
) -> Match:
    renamed = dict(raw)
    renamed["teamA"] = season.canonical_name(_as_name(raw.get("teamA")))
    renamed["teamB"] = season.canonical_name(_as_name(raw.get("teamB")))
    return {
        "id": str(raw.get("id", "")),
        "teamA": renamed["teamA"],
        "teamB": renamed["teamB"],
        "pool": _infer_pool(renamed, team_pools),
        "scores": normalize_scores(raw.get("scores")),
        "tieBreaker": normalize_tie_breaker(raw.get("tieBreaker")),
    }


def _knockout_side(value: Any, season: SeasonConfig) -> str:
    name = _as_name(value)
    if not name or name == TBD:
        return TBD
    return season.canonical_name(name)


def _normalize_knockout_match(raw: dict[str, Any], season: SeasonConfig) -> KnockoutMatch:
    match_id = str(raw.get("id", ""))
    return {
        "id": match_id,
        "teamA": _knockout_side(raw.get("teamA"), season),
        "teamB": _knockout_side(raw.get("teamB"), season),
        "type": FINAL_TYPE if match_id == FINAL else SEMI,
        "scores": normalize_scores(raw.get("scores")),
        "tieBreaker": normalize_tie_breaker(raw.get("tieBreaker")),
    }


def _pending_knockout(match_id: str, season: SeasonConfig) -> KnockoutMatch:
    return _normalize_knockout_match({"id": match_id}, season)


def _normalize_teams(raw_teams: Any, season: SeasonConfig) -> list[TeamInfo]:
    if not isinstance(raw_teams, list) or not raw_teams:
        return copy.deepcopy(list(season.roster))
    teams: list[TeamInfo] = []
    for raw in raw_teams:
        if not isinstance(raw, dict) or not raw.get("name"):
            continue
        name = season.canonical_name(str(raw["name"]))
        pool = raw.get("pool")
        players = raw.get("players")
        teams.append({
            "name": name,
            "pool": pool if pool in POOLS else season.pool_for(name) or POOLS[0],
            "players": [p for p in players if isinstance(p, str)]
            if isinstance(players, list)
            else season.players_for(name),
        })
    return teams


def normalize_legacy_document(raw: Any, season: SeasonConfig) -> TournamentDocument:
    """Turn any stored shape into a canonical ``TournamentDocument``."""
    if isinstance(raw, list):
        raw = {"poolMatches": raw}
    elif not isinstance(raw, dict):
        raw = {}

    raw_pool = raw.get("poolMatches")
    if raw_pool is None:
        raw_pool = raw.get("matches")
    if not isinstance(raw_pool, list):
        raw_pool = []

    teams = _normalize_teams(raw.get("teams"), season)
    team_pools = {team["name"]: team["pool"] for team in teams}
    pool_matches = [
        _normalize_pool_match(m, season, team_pools)
        for m in raw_pool
        if isinstance(m, dict)
    ]

    raw_knockout = raw.get("knockoutMatches")
    if not isinstance(raw_knockout, list):
        raw_knockout = []
    stored = {
        str(m.get("id")): _normalize_knockout_match(m, season)
        for m in raw_knockout
        if isinstance(m, dict) and m.get("id") in KNOCKOUT_IDS
    }
    knockout_matches = [
        stored.get(match_id) or _pending_knockout(match_id, season)
        for match_id in KNOCKOUT_IDS
    ]

    return {
        "teams": teams,
        "poolMatches": pool_matches,
        "knockoutMatches": knockout_matches,
    }
