"""Validation of score sheets submitted by admins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from shuttlecup.core.constants import (
    CATEGORIES,
    MAX_CATEGORY_SCORE,
    TIE_BREAKER_SIDE_SIZE,
)
from shuttlecup.errors import ValidationError

from .models import is_doubles_category

PLAYER_1_FIELDS = ("teamAPlayer1", "teamBPlayer1")
PLAYER_2_FIELDS = ("teamAPlayer2", "teamBPlayer2")
SCORE_FIELDS = ("teamAScore", "teamBScore")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class ScoreSubmission:
    """A full score sheet for one match, as received from an admin."""

    scores: Any
    tie_breaker: Optional[Any] = None

    def validate(self) -> None:
        """Reject malformed sheets before anything is mutated.

        Raises:
            ValidationError: Describing the first problem found.
        """
        if not isinstance(self.scores, list):
            raise ValidationError("Scores must be a list of category scores.")
        if len(self.scores) != len(CATEGORIES):
            raise ValidationError(
                f"Expected {len(CATEGORIES)} category scores, got {len(self.scores)}."
            )
        for expected, score in zip(CATEGORIES, self.scores):
            self._validate_category(expected, score)
        if self.tie_breaker is not None:
            self._validate_tie_breaker(self.tie_breaker)

    @staticmethod
    def _validate_category(expected: str, score: Any) -> None:
        if not isinstance(score, dict):
            raise ValidationError(f"{expected}: score must be an object.")
        if score.get("category") != expected:
            raise ValidationError(
                f"Categories out of order: expected {expected!r}, "
                f"got {score.get('category')!r}."
            )

        for field in SCORE_FIELDS:
            value = score.get(field)
            if not _is_int(value):
                raise ValidationError(f"{expected}: {field} must be a whole number.")
            if not 0 <= value <= MAX_CATEGORY_SCORE:
                raise ValidationError(
                    f"{expected}: {field} must be between 0 and {MAX_CATEGORY_SCORE}."
                )

        for field in PLAYER_1_FIELDS:
            if not isinstance(score.get(field), str):
                raise ValidationError(f"{expected}: {field} must be a name.")

        if is_doubles_category(expected):
            for field in PLAYER_2_FIELDS:
                if not isinstance(score.get(field), str):
                    raise ValidationError(
                        f"{expected}: doubles categories need {field}."
                    )
        else:
            for field in PLAYER_2_FIELDS:
                if score.get(field):
                    raise ValidationError(
                        f"{expected}: singles categories cannot have {field}."
                    )

    @staticmethod
    def _validate_tie_breaker(tie_breaker: Any) -> None:
        if not isinstance(tie_breaker, dict):
            raise ValidationError("Tie-breaker must be an object.")
        for field in ("teamAPlayers", "teamBPlayers"):
            players = tie_breaker.get(field)
            if (
                not isinstance(players, list)
                or len(players) != TIE_BREAKER_SIDE_SIZE
                or not all(isinstance(p, str) for p in players)
            ):
                raise ValidationError(
                    f"Tie-breaker {field} must list exactly "
                    f"{TIE_BREAKER_SIDE_SIZE} names."
                )
        for field in SCORE_FIELDS:
            value = tie_breaker.get(field)
            if value is not None and (not _is_int(value) or value < 0):
                raise ValidationError(
                    f"Tie-breaker {field} must be a non-negative whole number."
                )

    def cleaned_scores(self) -> list[dict[str, Any]]:
        """Copy of the sheet with only known keys, player-2 only on doubles."""
        cleaned = []
        for score in self.scores:
            entry = {"category": score["category"]}
            for field in SCORE_FIELDS + PLAYER_1_FIELDS:
                entry[field] = score[field]
            if is_doubles_category(score["category"]):
                for field in PLAYER_2_FIELDS:
                    entry[field] = score[field]
            cleaned.append(entry)
        return cleaned
