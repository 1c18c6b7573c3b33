"""Completion predicates for matches, pools and knockout matches."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shuttlecup.core.constants import TBD

if TYPE_CHECKING:
    from shuttlecup.core.types import CategoryScore, KnockoutMatch, Match


def _has_name(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def is_category_filled(score: CategoryScore) -> bool:
    """A category counts as recorded once it has a non-zero score or a player."""
    has_score = bool(score.get("teamAScore")) or bool(score.get("teamBScore"))
    has_player = _has_name(score.get("teamAPlayer1")) or _has_name(
        score.get("teamBPlayer1")
    )
    return has_score or has_player


def is_match_played(match: Match | KnockoutMatch) -> bool:
    """True once anything at all has been entered for the match."""
    return any(is_category_filled(score) for score in match["scores"])


def is_match_complete(match: Match | KnockoutMatch) -> bool:
    """True when every category of the match has been recorded.

    Player assignment alone is enough; a sheet of 0-0 scores with names
    filled in is complete.
    """
    scores = match["scores"]
    return bool(scores) and all(is_category_filled(score) for score in scores)


def is_pool_complete(matches: list[Match], pool: str) -> bool:
    """True when the pool has matches and all of them are complete."""
    pool_matches = [m for m in matches if m.get("pool") == pool]
    if not pool_matches:
        return False
    return all(is_match_complete(m) for m in pool_matches)


def are_all_pool_matches_complete(matches: list[Match]) -> bool:
    """True when every pool match in the season is complete."""
    return all(is_match_complete(m) for m in matches)


def is_knockout_match_complete(match: KnockoutMatch) -> bool:
    """Like ``is_match_complete``, but never true while a side is TBD."""
    if match["teamA"] == TBD or match["teamB"] == TBD:
        return False
    return is_match_complete(match)
