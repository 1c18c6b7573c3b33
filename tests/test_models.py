"""Tests for score sheet templates and round-robin generation."""

from __future__ import annotations

import unittest
from itertools import combinations

from shuttlecup.core.constants import CATEGORIES
from shuttlecup.seasons import SEASON_1
from shuttlecup.tournament.models import (
    category_abbreviation,
    empty_scores,
    generate_all_matches,
    generate_pool_matches,
    is_doubles_category,
    normalize_tie_breaker,
)


class RoundRobinTestCase(unittest.TestCase):
    """Test case for pool match generation."""

    def test_every_pair_plays_once(self) -> None:
        """N teams produce N*(N-1)/2 matches covering each unordered pair once."""
        for size in range(2, 9):
            teams = [f"Team {i}" for i in range(size)]
            matches = generate_pool_matches(teams, "A")

            self.assertEqual(len(matches), size * (size - 1) // 2)
            pairs = {frozenset((m["teamA"], m["teamB"])) for m in matches}
            self.assertEqual(pairs, {frozenset(p) for p in combinations(teams, 2)})

    def test_ids_are_unique_and_stable(self) -> None:
        """Ids follow "{pool}-{n}" and regenerate identically."""
        teams = ["W", "X", "Y", "Z"]
        first = generate_pool_matches(teams, "B")
        second = generate_pool_matches(teams, "B")

        ids = [m["id"] for m in first]
        self.assertEqual(ids, ["B-1", "B-2", "B-3", "B-4", "B-5", "B-6"])
        self.assertEqual(ids, [m["id"] for m in second])
        self.assertTrue(all(m["pool"] == "B" for m in first))

    def test_single_team_pool_has_no_matches(self) -> None:
        """A pool of one plays nobody."""
        self.assertEqual(generate_pool_matches(["Solo"], "A"), [])

    def test_generate_all_matches_for_season(self) -> None:
        """The configured season yields six matches in each pool."""
        matches = generate_all_matches(SEASON_1)

        self.assertEqual(len(matches), 12)
        self.assertEqual(sum(1 for m in matches if m["pool"] == "A"), 6)
        self.assertEqual(sum(1 for m in matches if m["pool"] == "B"), 6)
        self.assertEqual(matches[0]["teamA"], "Rising Phoenix")


class TemplateTestCase(unittest.TestCase):
    """Test case for empty score sheets and tie-breakers."""

    def test_empty_scores_in_category_order(self) -> None:
        """A blank sheet lists all six categories in canonical order."""
        sheet = empty_scores()

        self.assertEqual([s["category"] for s in sheet], list(CATEGORIES))
        for score in sheet:
            self.assertEqual(score["teamAScore"], 0)
            self.assertEqual(score["teamBScore"], 0)
            self.assertEqual(score["teamAPlayer1"], "")

    def test_player_two_only_on_doubles(self) -> None:
        """Doubles categories carry player-2 keys; singles do not."""
        for score in empty_scores():
            doubles = is_doubles_category(score["category"])
            self.assertEqual("teamAPlayer2" in score, doubles)
            self.assertEqual("teamBPlayer2" in score, doubles)

    def test_category_abbreviations(self) -> None:
        """Compact labels match the printed score cards."""
        self.assertEqual(
            [category_abbreviation(c) for c in CATEGORIES],
            ["MS", "RMS", "MD", "RMD", "WS", "XD"],
        )
        self.assertEqual(category_abbreviation("Veterans"), "Veterans")

    def test_normalize_tie_breaker_pads_and_truncates(self) -> None:
        """Player lists come back with exactly three slots."""
        tie_breaker = normalize_tie_breaker({
            "teamAPlayers": ["a"],
            "teamBPlayers": ["b1", "b2", "b3", "b4"],
            "teamAScore": 1,
            "teamBScore": "0",
        })

        self.assertEqual(tie_breaker["teamAPlayers"], ["a", "", ""])
        self.assertEqual(tie_breaker["teamBPlayers"], ["b1", "b2", "b3"])
        self.assertEqual(tie_breaker["teamAScore"], 1)
        self.assertEqual(tie_breaker["teamBScore"], 0)

    def test_normalize_tie_breaker_from_garbage(self) -> None:
        """Missing or non-dict tie-breakers become the empty template."""
        for raw in (None, "x", []):
            tie_breaker = normalize_tie_breaker(raw)
            self.assertEqual(tie_breaker["teamAPlayers"], ["", "", ""])
            self.assertIsNone(tie_breaker["teamAScore"])
            self.assertIsNone(tie_breaker["teamBScore"])


if __name__ == "__main__":
    unittest.main()
