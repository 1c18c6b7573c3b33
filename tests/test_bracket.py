"""Tests for knockout bracket generation and re-derivation."""

from __future__ import annotations

import copy
import unittest

from shuttlecup.core.constants import FINAL, SEMI_1, SEMI_2, TBD
from shuttlecup.tournament.bracket import (
    generate_knockout_matches,
    get_knockout_match_winner,
    update_knockout_bracket,
)
from shuttlecup.tournament.models import empty_scores, generate_pool_matches

from tests.helpers import (
    POOL_A_TEAMS,
    POOL_B_TEAMS,
    dead_even_sheet,
    higher_seed_wins,
    play_pool,
    winning_sheet,
)


def _by_id(knockout):
    return {m["id"]: m for m in knockout}


class GenerateKnockoutTestCase(unittest.TestCase):
    """Test case for the bracket shell."""

    def test_cross_pool_pairing(self) -> None:
        """Pool winners meet the other pool's runner-up."""
        knockout = _by_id(generate_knockout_matches(["A1", "A2"], ["B1", "B2"]))

        self.assertEqual((knockout[SEMI_1]["teamA"], knockout[SEMI_1]["teamB"]), ("A1", "B2"))
        self.assertEqual((knockout[SEMI_2]["teamA"], knockout[SEMI_2]["teamB"]), ("B1", "A2"))
        self.assertEqual((knockout[FINAL]["teamA"], knockout[FINAL]["teamB"]), (TBD, TBD))
        self.assertEqual(knockout[FINAL]["type"], "final")
        self.assertEqual(knockout[SEMI_1]["type"], "semi")

    def test_pending_template(self) -> None:
        """An all-TBD bracket still produces three empty shells."""
        knockout = generate_knockout_matches([TBD, TBD], [TBD, TBD])

        self.assertEqual([m["id"] for m in knockout], [SEMI_1, SEMI_2, FINAL])
        for match in knockout:
            self.assertEqual(match["scores"], empty_scores())


class KnockoutWinnerTestCase(unittest.TestCase):
    """Test case for knockout winners."""

    def test_incomplete_match_has_no_winner(self) -> None:
        """A blank or TBD match reports TBD."""
        match = generate_knockout_matches(["A1", "A2"], ["B1", "B2"])[0]
        self.assertEqual(get_knockout_match_winner(match), TBD)

        match["teamB"] = TBD
        match["scores"] = winning_sheet("A")
        self.assertEqual(get_knockout_match_winner(match), TBD)

    def test_winner_by_categories(self) -> None:
        """The side with more categories goes through."""
        match = generate_knockout_matches(["A1", "A2"], ["B1", "B2"])[0]
        match["scores"] = winning_sheet("B")
        self.assertEqual(get_knockout_match_winner(match), "B2")

    def test_dead_even_needs_tie_breaker(self) -> None:
        """A level semifinal is decided only by its tie-breaker."""
        match = generate_knockout_matches(["A1", "A2"], ["B1", "B2"])[0]
        match["scores"] = dead_even_sheet()
        self.assertEqual(get_knockout_match_winner(match), TBD)

        match["tieBreaker"]["teamAScore"] = 1
        match["tieBreaker"]["teamBScore"] = 0
        self.assertEqual(get_knockout_match_winner(match), "A1")


class UpdateKnockoutBracketTestCase(unittest.TestCase):
    """Test case for re-deriving participants as results change."""

    def setUp(self) -> None:
        """Generate both pools with no results."""
        self.pool_a = generate_pool_matches(POOL_A_TEAMS, "A")
        self.pool_b = generate_pool_matches(POOL_B_TEAMS, "B")

    @property
    def matches(self):
        return self.pool_a + self.pool_b

    def _update(self, knockout):
        return update_knockout_bracket(
            self.matches, knockout, POOL_A_TEAMS, POOL_B_TEAMS
        )

    def _complete_pools(self) -> None:
        play_pool(self.pool_a, higher_seed_wins(POOL_A_TEAMS))
        play_pool(self.pool_b, higher_seed_wins(POOL_B_TEAMS))

    def test_nothing_known_yet(self) -> None:
        """With no finished pool every slot is TBD vs TBD."""
        knockout = self._update([])
        for match in knockout:
            self.assertEqual((match["teamA"], match["teamB"]), (TBD, TBD))

    def test_one_pool_finished_populates_half(self) -> None:
        """Only the finished pool's qualifiers are filled in."""
        play_pool(self.pool_a, higher_seed_wins(POOL_A_TEAMS))
        knockout = _by_id(self._update([]))

        self.assertEqual((knockout[SEMI_1]["teamA"], knockout[SEMI_1]["teamB"]), ("T1", TBD))
        self.assertEqual((knockout[SEMI_2]["teamA"], knockout[SEMI_2]["teamB"]), (TBD, "T2"))

    def test_end_to_end_semifinals(self) -> None:
        """T1 and T2 qualify and are crossed against pool B."""
        self._complete_pools()
        knockout = _by_id(self._update([]))

        self.assertEqual(knockout[SEMI_1]["teamA"], "T1")
        self.assertEqual(knockout[SEMI_1]["teamB"], "U2")
        self.assertEqual(knockout[SEMI_2]["teamA"], "U1")
        self.assertEqual(knockout[SEMI_2]["teamB"], "T2")
        self.assertEqual((knockout[FINAL]["teamA"], knockout[FINAL]["teamB"]), (TBD, TBD))

    def test_pending_slot_scores_are_forced_empty(self) -> None:
        """Scores on a slot with a TBD side do not survive a recompute."""
        play_pool(self.pool_a, higher_seed_wins(POOL_A_TEAMS))
        knockout = _by_id(self._update([]))
        knockout[SEMI_1]["scores"] = winning_sheet("A")

        knockout = _by_id(self._update(list(knockout.values())))
        self.assertEqual(knockout[SEMI_1]["scores"], empty_scores())

    def test_recompute_without_changes_keeps_scores(self) -> None:
        """Running the updater twice leaves entered semifinal scores untouched."""
        self._complete_pools()
        knockout = self._update([])
        knockout[0]["scores"] = winning_sheet("A", categories=5)
        knockout[1]["scores"][0]["teamAPlayer1"] = "U1 player 1"

        first = self._update(knockout)
        second = self._update(first)

        self.assertEqual(first[0]["scores"], knockout[0]["scores"])
        self.assertEqual(second[0]["scores"], first[0]["scores"])
        self.assertEqual(second[1]["scores"], first[1]["scores"])
        self.assertEqual(second, first)

    def test_updater_does_not_mutate_input(self) -> None:
        """The previous bracket is left as it was."""
        self._complete_pools()
        knockout = self._update([])
        snapshot = copy.deepcopy(knockout)

        self.pool_a[0]["scores"] = winning_sheet("B")
        self._update(knockout)
        self.assertEqual(knockout, snapshot)

    def test_changed_qualifier_resets_semifinal(self) -> None:
        """Editing a pool result that changes a qualifier discards semifinal scores."""
        self._complete_pools()
        knockout = self._update([])
        knockout[0]["scores"] = winning_sheet("A")

        # T4 now beats everyone it played in pool A
        for match in self.pool_a:
            if "T4" in (match["teamA"], match["teamB"]):
                match["scores"] = winning_sheet("A" if match["teamA"] == "T4" else "B")
        updated = _by_id(self._update(knockout))

        self.assertNotEqual(updated[SEMI_1]["teamA"], "T1")
        self.assertEqual(updated[SEMI_1]["scores"], empty_scores())

    def test_semifinal_winner_reaches_final(self) -> None:
        """A finished semifinal fills its side of the final."""
        self._complete_pools()
        knockout = self._update([])
        knockout[0]["scores"] = winning_sheet("A", categories=4)

        final = _by_id(self._update(knockout))[FINAL]
        self.assertEqual(final["teamA"], "T1")
        self.assertEqual(final["teamB"], TBD)

    def test_cleared_semifinal_reverts_final(self) -> None:
        """Clearing a semifinal sends the final side back to TBD and wipes final scores."""
        self._complete_pools()
        knockout = self._update([])
        knockout[0]["scores"] = winning_sheet("A", categories=4)
        knockout[1]["scores"] = winning_sheet("B", categories=4)
        knockout = self._update(knockout)

        final = _by_id(knockout)[FINAL]
        self.assertEqual((final["teamA"], final["teamB"]), ("T1", "T2"))
        final["scores"] = winning_sheet("A")
        knockout = self._update(knockout)
        self.assertEqual(_by_id(knockout)[FINAL]["scores"], winning_sheet("A"))

        knockout[0]["scores"] = empty_scores()
        final = _by_id(self._update(knockout))[FINAL]

        self.assertEqual(final["teamA"], TBD)
        self.assertEqual(final["teamB"], "T2")
        self.assertEqual(final["scores"], empty_scores())

    def test_malformed_tie_breaker_is_repaired(self) -> None:
        """Short tie-breaker player lists are padded on kept slots."""
        self._complete_pools()
        knockout = self._update([])
        knockout[0]["tieBreaker"] = {"teamAPlayers": ["x"], "teamBPlayers": None}

        semi = _by_id(self._update(knockout))[SEMI_1]
        self.assertEqual(semi["tieBreaker"]["teamAPlayers"], ["x", "", ""])
        self.assertEqual(semi["tieBreaker"]["teamBPlayers"], ["", "", ""])


if __name__ == "__main__":
    unittest.main()
