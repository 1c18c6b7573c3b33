"""Core data types for the shuttlecup application.

These mirror the JSON blob stored per season, so field names keep the
camelCase keys of the stored document.
"""

from typing import List, Optional, TypedDict  # noqa: UP035


class _CategoryScoreBase(TypedDict):
    category: str
    teamAScore: int
    teamBScore: int
    teamAPlayer1: str
    teamBPlayer1: str


class CategoryScore(_CategoryScoreBase, total=False):
    """One category within one match.

    ``teamAPlayer2``/``teamBPlayer2`` are only present on doubles categories.
    """

    teamAPlayer2: str
    teamBPlayer2: str


class TieBreaker(TypedDict):
    """A 3v3 decider for a dead-even match. ``None`` scores mean not played."""

    teamAPlayers: List[str]  # noqa: UP006
    teamBPlayers: List[str]  # noqa: UP006
    teamAScore: Optional[int]
    teamBScore: Optional[int]


class _MatchBase(TypedDict):
    id: str
    teamA: str
    teamB: str
    scores: List[CategoryScore]  # noqa: UP006


class Match(_MatchBase, total=False):
    """A pool-stage match."""

    pool: str
    tieBreaker: TieBreaker


class KnockoutMatch(_MatchBase, total=False):
    """A semifinal or the final. Either side may be ``"TBD"``."""

    type: str
    tieBreaker: TieBreaker


class Standing(TypedDict):
    """A team's record within its pool."""

    team: str
    wins: int
    losses: int
    points: int
    # Sum of categories won, counted only in matches this team won
    eventsWonInVictories: int
    # Sum of raw points scored, counted only in matches this team won
    pointsInVictories: int


class TeamInfo(TypedDict):
    """A roster entry."""

    name: str
    pool: str
    players: List[str]  # noqa: UP006


class TournamentDocument(TypedDict):
    """The Firestore document stored for one season."""

    teams: List[TeamInfo]  # noqa: UP006
    poolMatches: List[Match]  # noqa: UP006
    knockoutMatches: List[KnockoutMatch]  # noqa: UP006
