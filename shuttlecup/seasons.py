"""Season configuration: rosters, pool composition and legacy team names."""

from __future__ import annotations

from dataclasses import dataclass, field

from .core.constants import POOL_A, POOL_B
from .core.types import TeamInfo


@dataclass(frozen=True)
class SeasonConfig:
    """Everything that differs between seasons."""

    season_id: str
    roster: tuple[TeamInfo, ...]
    # Names written by earlier builds, mapped to the current roster names
    legacy_name_map: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> str:
        """Firestore document id for this season."""
        return f"season-{self.season_id}"

    def pool_teams(self, pool: str) -> list[str]:
        """Team names in ``pool``, in roster order."""
        return [team["name"] for team in self.roster if team["pool"] == pool]

    def players_for(self, team_name: str) -> list[str]:
        """Roster players for ``team_name``, or an empty list."""
        for team in self.roster:
            if team["name"] == team_name:
                return list(team["players"])
        return []

    def pool_for(self, team_name: str) -> str | None:
        """Roster pool for ``team_name``, or ``None`` if it is not on the roster."""
        for team in self.roster:
            if team["name"] == team_name:
                return team["pool"]
        return None

    def canonical_name(self, team_name: str) -> str:
        """Map a stored team name through the legacy rename map."""
        return self.legacy_name_map.get(team_name, team_name)


def _team(name: str, pool: str, players: list[str]) -> TeamInfo:
    return {"name": name, "pool": pool, "players": players}


SEASON_1 = SeasonConfig(
    season_id="1",
    roster=(
        _team(
            "Rising Phoenix",
            POOL_A,
            ["Aman", "Deepika", "Ramanan", "Chirag", "Prajwal P", "Kingsly"],
        ),
        _team(
            "Mighty Spartans",
            POOL_A,
            ["Nithin Bhaskar", "Rubini", "Preetham", "Mithun", "Nattu", "Shiva"],
        ),
        _team(
            "Racket Blitz",
            POOL_A,
            ["Ninad", "Divya", "Suresh", "Srujan", "Aditya", "Nikhila"],
        ),
        _team(
            "SmashOps",
            POOL_A,
            ["Ajay", "Lakshitha", "Shreesha", "Ganesh", "Aswin", "Vipin"],
        ),
        _team(
            "Lord of the strings",
            POOL_B,
            [
                "Prajwal S",
                "Ananya",
                "Nithish B M",
                "Mohanraj",
                "Karthik",
                "Pratham Pote",
                "Anika",
            ],
        ),
        _team(
            "The BaddyVerse",
            POOL_B,
            [
                "Chaitanya",
                "Amrutha",
                "Manu",
                "Shreeharsha",
                "Shashikumar",
                "Abhishek",
                "Garima",
            ],
        ),
        _team(
            "Silicon Swat",
            POOL_B,
            ["Nithin P", "Kiruthika", "Arya", "Hari Siva Shankar", "Alex", "Vikrant"],
        ),
        _team(
            "Herricanes",
            POOL_B,
            ["Vikram", "Anoohya", "Manish", "Khalid", "Naresh", "Kiran"],
        ),
    ),
    # Documents created before team names were announced used placeholders
    legacy_name_map={
        "Team 1": "Rising Phoenix",
        "Team 2": "Mighty Spartans",
        "Team 3": "Racket Blitz",
        "Team 4": "SmashOps",
        "Team 5": "Lord of the strings",
        "Team 6": "The BaddyVerse",
        "Team 7": "Silicon Swat",
        "Team 8": "Herricanes",
    },
)

SEASONS: dict[str, SeasonConfig] = {SEASON_1.season_id: SEASON_1}


def get_season(season_id: str) -> SeasonConfig:
    """Look up a configured season.

    Raises:
        ValueError: If no season with that id is configured.
    """
    try:
        return SEASONS[str(season_id)]
    except KeyError:
        raise ValueError(f"Unknown season: {season_id!r}") from None
