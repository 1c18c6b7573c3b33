"""Builders for score sheets and seasons used across the test suite."""

from __future__ import annotations

from typing import Any, Callable

from shuttlecup.core.constants import CATEGORIES, POOL_A, POOL_B
from shuttlecup.seasons import SeasonConfig
from shuttlecup.tournament.models import empty_scores, is_doubles_category

POOL_A_TEAMS = ["T1", "T2", "T3", "T4"]
POOL_B_TEAMS = ["U1", "U2", "U3", "U4"]


def _roster(teams: list[str], pool: str) -> list[dict[str, Any]]:
    return [
        {"name": t, "pool": pool, "players": [f"{t} player {i}" for i in range(1, 7)]}
        for t in teams
    ]


TEST_SEASON = SeasonConfig(
    season_id="test",
    roster=tuple(_roster(POOL_A_TEAMS, POOL_A) + _roster(POOL_B_TEAMS, POOL_B)),
    legacy_name_map={"Old One": "T1"},
)


def scores_from_pairs(
    pairs: list[tuple[int, int]], with_players: bool = False
) -> list[dict[str, Any]]:
    """A full sheet with the given (teamA, teamB) score per category."""
    sheet = empty_scores()
    for score, (a, b) in zip(sheet, pairs):
        score["teamAScore"] = a
        score["teamBScore"] = b
        if with_players:
            score["teamAPlayer1"] = "Player A"
            score["teamBPlayer1"] = "Player B"
            if is_doubles_category(score["category"]):
                score["teamAPlayer2"] = "Partner A"
                score["teamBPlayer2"] = "Partner B"
    return sheet


def winning_sheet(side: str = "A", categories: int = 4) -> list[dict[str, Any]]:
    """``side`` wins ``categories`` categories 21-10 and loses the rest 10-21."""
    pairs = []
    for index in range(len(CATEGORIES)):
        won = index < categories
        if side == "A":
            pairs.append((21, 10) if won else (10, 21))
        else:
            pairs.append((10, 21) if won else (21, 10))
    return scores_from_pairs(pairs)


def dead_even_sheet() -> list[dict[str, Any]]:
    """Categories split 3-3 with equal raw point totals."""
    return scores_from_pairs([(21, 10)] * 3 + [(10, 21)] * 3)


def play_pool(
    matches: list[dict[str, Any]], pick_side: Callable[[dict[str, Any]], str]
) -> None:
    """Fill every match in place; ``pick_side`` returns "A" or "B" for the winner."""
    for match in matches:
        match["scores"] = winning_sheet(pick_side(match))


def higher_seed_wins(order: list[str]) -> Callable[[dict[str, Any]], str]:
    """Winner picker where the team earlier in ``order`` always wins."""

    def pick(match: dict[str, Any]) -> str:
        return "A" if order.index(match["teamA"]) < order.index(match["teamB"]) else "B"

    return pick
