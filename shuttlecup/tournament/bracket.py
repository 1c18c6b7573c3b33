"""Knockout bracket generation and re-derivation.

Semifinal and final participants are derived state. They are recomputed
from pool results and semifinal winners on every change; entered scores
survive only while a slot keeps the same two participants.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from shuttlecup.core.constants import (
    FINAL,
    FINAL_TYPE,
    POOL_A,
    POOL_B,
    SEMI,
    SEMI_1,
    SEMI_2,
    TBD,
)

from .completion import is_knockout_match_complete, is_pool_complete
from .models import empty_scores, empty_tie_breaker, normalize_tie_breaker
from .standings import SIDE_A, calculate_standings, top_two, winning_side

if TYPE_CHECKING:
    from shuttlecup.core.types import KnockoutMatch, Match

logger = logging.getLogger(__name__)

PENDING_PAIR = [TBD, TBD]


def _shell(match_id: str, match_type: str, team_a: str, team_b: str) -> KnockoutMatch:
    return {
        "id": match_id,
        "teamA": team_a,
        "teamB": team_b,
        "type": match_type,
        "scores": empty_scores(),
        "tieBreaker": empty_tie_breaker(),
    }


def generate_knockout_matches(
    pool_a_top2: list[str], pool_b_top2: list[str]
) -> list[KnockoutMatch]:
    """Build empty semifinal and final shells, crossing the pools.

    semi-1 is Pool A 1st vs Pool B 2nd, semi-2 is Pool B 1st vs Pool A 2nd.
    The final always starts as TBD vs TBD.
    """
    return [
        _shell(SEMI_1, SEMI, pool_a_top2[0], pool_b_top2[1]),
        _shell(SEMI_2, SEMI, pool_b_top2[0], pool_a_top2[1]),
        _shell(FINAL, FINAL_TYPE, TBD, TBD),
    ]


def get_knockout_match_winner(match: KnockoutMatch) -> str:
    """The winning team of a complete knockout match, otherwise ``"TBD"``."""
    if not is_knockout_match_complete(match):
        return TBD
    side = winning_side(match)
    if side is None:
        return TBD
    return match["teamA"] if side == SIDE_A else match["teamB"]


def _padded(teams: list[str]) -> list[str]:
    return (teams + PENDING_PAIR)[:2]


def qualified_or_pending(
    pool_matches: list[Match], pool_a_teams: list[str], pool_b_teams: list[str]
) -> tuple[list[str], list[str]]:
    """Top two per pool, or TBD for a pool that has not finished."""
    standings = calculate_standings(pool_matches, pool_a_teams, pool_b_teams)
    pool_a = (
        _padded(top_two(standings["poolA"]))
        if is_pool_complete(pool_matches, POOL_A)
        else list(PENDING_PAIR)
    )
    pool_b = (
        _padded(top_two(standings["poolB"]))
        if is_pool_complete(pool_matches, POOL_B)
        else list(PENDING_PAIR)
    )
    return pool_a, pool_b


def _reconcile(current: KnockoutMatch | None, intended: KnockoutMatch) -> KnockoutMatch:
    """Carry entered scores over only when participants are unchanged and known."""
    if current is None:
        return intended

    same_sides = (
        current["teamA"] == intended["teamA"] and current["teamB"] == intended["teamB"]
    )
    pending = intended["teamA"] == TBD or intended["teamB"] == TBD

    if same_sides and not pending:
        kept = copy.deepcopy(current)
        kept["type"] = intended["type"]
        kept["tieBreaker"] = normalize_tie_breaker(current.get("tieBreaker"))
        return kept

    if not same_sides:
        logger.info(
            f"Knockout {intended['id']} participants changed: "
            f"{current['teamA']} vs {current['teamB']} -> "
            f"{intended['teamA']} vs {intended['teamB']}; scores reset"
        )
    return intended


def update_knockout_bracket(
    pool_matches: list[Match],
    knockout_matches: list[KnockoutMatch],
    pool_a_teams: list[str],
    pool_b_teams: list[str],
) -> list[KnockoutMatch]:
    """Re-derive all three knockout slots from the current results.

    Returns a new list; the inputs are not modified. The final is driven
    only by semifinal winners, never by the TBD template that
    ``generate_knockout_matches`` produces for it.
    """
    current = {m["id"]: m for m in knockout_matches}
    pool_a_top2, pool_b_top2 = qualified_or_pending(
        pool_matches, pool_a_teams, pool_b_teams
    )
    template = {m["id"]: m for m in generate_knockout_matches(pool_a_top2, pool_b_top2)}

    semi_1 = _reconcile(current.get(SEMI_1), template[SEMI_1])
    semi_2 = _reconcile(current.get(SEMI_2), template[SEMI_2])

    final_intended = _shell(
        FINAL,
        FINAL_TYPE,
        get_knockout_match_winner(semi_1),
        get_knockout_match_winner(semi_2),
    )
    final = _reconcile(current.get(FINAL), final_intended)

    return [semi_1, semi_2, final]
