"""Pool standings and top-two qualification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import groupby
from typing import TYPE_CHECKING, Iterable, Optional  # noqa: UP035

from shuttlecup.core.constants import POOL_A, POOL_B

from .completion import is_match_complete

if TYPE_CHECKING:
    from shuttlecup.core.types import KnockoutMatch, Match, Standing

logger = logging.getLogger(__name__)

SIDE_A = "A"
SIDE_B = "B"


@dataclass(frozen=True)
class MatchTally:
    """Category wins and raw points for each side of one match."""

    categories_a: int
    categories_b: int
    points_a: int
    points_b: int


def tally_match(match: Match | KnockoutMatch) -> MatchTally:
    """Count category wins and sum raw points. A drawn category counts for no one."""
    categories_a = categories_b = points_a = points_b = 0
    for score in match["scores"]:
        a = score.get("teamAScore") or 0
        b = score.get("teamBScore") or 0
        if a > b:
            categories_a += 1
        elif b > a:
            categories_b += 1
        points_a += a
        points_b += b
    return MatchTally(categories_a, categories_b, points_a, points_b)


def _tie_breaker_side(match: Match | KnockoutMatch) -> Optional[str]:
    tie_breaker = match.get("tieBreaker")
    if not tie_breaker:
        return None
    a = tie_breaker.get("teamAScore")
    b = tie_breaker.get("teamBScore")
    if not isinstance(a, int) or not isinstance(b, int):
        return None
    if a > b:
        return SIDE_A
    if b > a:
        return SIDE_B
    return None


def winning_side(match: Match | KnockoutMatch, tally: MatchTally | None = None) -> Optional[str]:
    """Decide which side won, or ``None`` if the match is unresolved.

    Order: category wins, then summed raw points, then the tie-breaker
    result when both of its scores are recorded.
    """
    if tally is None:
        tally = tally_match(match)
    if tally.categories_a != tally.categories_b:
        return SIDE_A if tally.categories_a > tally.categories_b else SIDE_B
    if tally.points_a != tally.points_b:
        return SIDE_A if tally.points_a > tally.points_b else SIDE_B
    return _tie_breaker_side(match)


def _empty_standing(team: str) -> Standing:
    return {
        "team": team,
        "wins": 0,
        "losses": 0,
        "points": 0,
        "eventsWonInVictories": 0,
        "pointsInVictories": 0,
    }


def _record_result(
    standings: dict[str, Standing], match: Match, side: str, tally: MatchTally
) -> None:
    if side == SIDE_A:
        winner, loser = match["teamA"], match["teamB"]
        categories, points = tally.categories_a, tally.points_a
    else:
        winner, loser = match["teamB"], match["teamA"]
        categories, points = tally.categories_b, tally.points_b

    for team in (winner, loser):
        standings.setdefault(team, _empty_standing(team))

    standings[winner]["wins"] += 1
    standings[winner]["points"] += 1
    standings[winner]["eventsWonInVictories"] += categories
    standings[winner]["pointsInVictories"] += points
    standings[loser]["losses"] += 1


def _display_key(standing: Standing) -> tuple:
    return (
        -standing["points"],
        -standing["eventsWonInVictories"],
        -standing["pointsInVictories"],
        standing["team"],
    )


def sort_for_display(pool: Iterable[Standing]) -> list[Standing]:
    """Order a pool table: points, events won in victories, points in victories, name."""
    return sorted(pool, key=_display_key)


def calculate_pool_standings(matches: list[Match], teams: list[str]) -> dict[str, Standing]:
    """Aggregate complete matches into one unsorted Standing per team."""
    standings = {team: _empty_standing(team) for team in teams}
    for match in matches:
        if not is_match_complete(match):
            continue
        tally = tally_match(match)
        side = winning_side(match, tally)
        if side is None:
            logger.debug(f"Match {match['id']} is level with no tie-breaker result")
            continue
        _record_result(standings, match, side, tally)
    return standings


def calculate_standings(
    matches: list[Match], pool_a_teams: list[str], pool_b_teams: list[str]
) -> dict[str, list[Standing]]:
    """Build sorted standings for both pools.

    Every rostered team gets a row even before it has played.
    """
    by_pool = {
        POOL_A: calculate_pool_standings(
            [m for m in matches if m.get("pool") == POOL_A], pool_a_teams
        ),
        POOL_B: calculate_pool_standings(
            [m for m in matches if m.get("pool") == POOL_B], pool_b_teams
        ),
    }
    return {
        "poolA": sort_for_display(by_pool[POOL_A][t] for t in pool_a_teams),
        "poolB": sort_for_display(by_pool[POOL_B][t] for t in pool_b_teams),
    }


def _qualification_key(standing: Standing) -> tuple:
    return (
        -standing["eventsWonInVictories"],
        -standing["pointsInVictories"],
        -standing["wins"],
        standing["team"],
    )


def rank_for_qualification(pool: Iterable[Standing]) -> list[Standing]:
    """Re-rank a pool from scratch for qualification.

    Teams are grouped by points; each tied group is ordered by events won
    in victories, points in victories, wins and finally team name. The
    incoming order is ignored.
    """
    by_points = sorted(pool, key=lambda s: -s["points"])
    ranked: list[Standing] = []
    for _, group in groupby(by_points, key=lambda s: s["points"]):
        ranked.extend(sorted(group, key=_qualification_key))
    return ranked


def top_two(pool: Iterable[Standing]) -> list[str]:
    """Names of the first two qualified teams in a pool (fewer if the pool is smaller)."""
    return [s["team"] for s in rank_for_qualification(pool)[:2]]


def get_qualified_teams(standings: dict[str, list[Standing]]) -> dict[str, list[str]]:
    """Top two of each pool, keyed ``poolATop2``/``poolBTop2``."""
    return {
        "poolATop2": top_two(standings["poolA"]),
        "poolBTop2": top_two(standings["poolB"]),
    }
