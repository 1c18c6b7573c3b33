"""Core module for the shuttlecup application."""

from .types import (
    CategoryScore,
    KnockoutMatch,
    Match,
    Standing,
    TeamInfo,
    TieBreaker,
    TournamentDocument,
)

__all__ = [
    "CategoryScore",
    "KnockoutMatch",
    "Match",
    "Standing",
    "TeamInfo",
    "TieBreaker",
    "TournamentDocument",
]
