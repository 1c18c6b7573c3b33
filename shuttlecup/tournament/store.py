"""The tournament state for one season and the events that change it."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from shuttlecup.core.constants import POOL_A, POOL_B, TBD
from shuttlecup.errors import AppError, NotFoundError, PersistenceError, ValidationError

from .bracket import get_knockout_match_winner, update_knockout_bracket
from .legacy import normalize_legacy_document
from .models import empty_tie_breaker, generate_all_matches, normalize_tie_breaker
from .standings import calculate_standings, get_qualified_teams
from .submission import ScoreSubmission

if TYPE_CHECKING:
    from shuttlecup.core.types import KnockoutMatch, Match, Standing, TournamentDocument
    from shuttlecup.seasons import SeasonConfig

    from .repository import SeasonRepository

logger = logging.getLogger(__name__)

Listener = Callable[["TournamentDocument"], None]


@dataclass(frozen=True)
class SubmitMatchScore:
    """Replace the score sheet of a pool match."""

    match_id: str
    scores: Any
    tie_breaker: Any = None


@dataclass(frozen=True)
class SubmitKnockoutScore:
    """Replace the score sheet of a semifinal or the final."""

    match_id: str
    scores: Any
    tie_breaker: Any = None


@dataclass(frozen=True)
class ResetSeason:
    """Throw away all results and regenerate the season."""


Event = Union[SubmitMatchScore, SubmitKnockoutScore, ResetSeason]


@dataclass
class UpdateResult:
    """Outcome of applying an event.

    A rejected event leaves ``state`` as it was. An accepted event whose
    save failed has ``persisted=False`` and the persistence error attached;
    the in-memory state is still the new one.
    """

    accepted: bool
    state: TournamentDocument
    persisted: bool = False
    error: Optional[AppError] = None
    standings: dict[str, list[Standing]] = field(default_factory=dict)


def seed_document(season: SeasonConfig) -> TournamentDocument:
    """A fresh season: empty round robin and a pending bracket."""
    return normalize_legacy_document(
        {"teams": list(season.roster), "poolMatches": generate_all_matches(season)},
        season,
    )


class TournamentStore:
    """Owns the pool and knockout matches of one season.

    Every accepted event recomputes the bracket from scratch, commits the
    new state in memory, notifies subscribers in subscription order and
    then tries to persist.
    """

    def __init__(
        self,
        season: SeasonConfig,
        repository: SeasonRepository | None = None,
        document: TournamentDocument | None = None,
    ) -> None:
        """Create a store from a document, the repository, or a fresh seed."""
        self.season = season
        self.repository = repository
        self._listeners: list[Listener] = []
        if document is None:
            document = self._load_or_seed()
        self._state = self._with_bracket(copy.deepcopy(document))

    def _load_or_seed(self) -> TournamentDocument:
        if self.repository is None:
            return seed_document(self.season)
        document = self.repository.load(self.season.key)
        if document is not None:
            return document
        logger.info(f"No stored document for {self.season.key}; seeding a new season")
        document = self._with_bracket(seed_document(self.season))
        try:
            self.repository.save(self.season.key, document)
        except PersistenceError as e:
            logger.error(f"Seeded {self.season.key} but could not save it: {e.message}")
        return document

    # Reads

    def get_state(self) -> TournamentDocument:
        """A copy of the current document."""
        return copy.deepcopy(self._state)

    def get_matches(self) -> list[Match]:
        """All pool matches."""
        return copy.deepcopy(self._state["poolMatches"])

    def get_knockout_matches(self) -> list[KnockoutMatch]:
        """semi-1, semi-2 and final, in that order."""
        return copy.deepcopy(self._state["knockoutMatches"])

    def pool_teams(self, pool: str) -> list[str]:
        """Team names in ``pool`` according to the stored roster."""
        return [t["name"] for t in self._state["teams"] if t["pool"] == pool]

    def get_standings(self) -> dict[str, list[Standing]]:
        """Sorted standings for both pools, computed from the matches."""
        return calculate_standings(
            self._state["poolMatches"], self.pool_teams(POOL_A), self.pool_teams(POOL_B)
        )

    def get_qualified_teams(self) -> dict[str, list[str]]:
        """Current top two in each pool, whether or not the pool is finished."""
        return get_qualified_teams(self.get_standings())

    def get_knockout_winner(self, match_id: str) -> str:
        """Winner of a knockout match, or ``"TBD"``.

        Raises:
            NotFoundError: If there is no such knockout match.
        """
        return get_knockout_match_winner(
            self._find(self._state["knockoutMatches"], match_id)
        )

    # Observers

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for committed changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.get_state())

    # Events

    def submit_match_score(
        self, match_id: str, scores: Any, tie_breaker: Any = None
    ) -> UpdateResult:
        """Record a pool match score sheet."""
        return self.apply_event(SubmitMatchScore(match_id, scores, tie_breaker))

    def submit_knockout_score(
        self, match_id: str, scores: Any, tie_breaker: Any = None
    ) -> UpdateResult:
        """Record a knockout match score sheet."""
        return self.apply_event(SubmitKnockoutScore(match_id, scores, tie_breaker))

    def reset_season(self) -> UpdateResult:
        """Regenerate the season from the configured roster."""
        return self.apply_event(ResetSeason())

    def apply_event(self, event: Event) -> UpdateResult:
        """Apply one event and commit it, or reject it without side effects."""
        try:
            new_state = self._apply(copy.deepcopy(self._state), event)
        except (ValidationError, NotFoundError) as e:
            logger.warning(f"Rejected {type(event).__name__}: {e.message}")
            return UpdateResult(
                accepted=False,
                state=self.get_state(),
                error=e,
                standings=self.get_standings(),
            )

        self._state = new_state
        self._notify()

        persisted, error = self._persist()
        return UpdateResult(
            accepted=True,
            state=self.get_state(),
            persisted=persisted,
            error=error,
            standings=self.get_standings(),
        )

    def _apply(self, state: TournamentDocument, event: Event) -> TournamentDocument:
        if isinstance(event, ResetSeason):
            return self._with_bracket(seed_document(self.season))

        submission = ScoreSubmission(event.scores, event.tie_breaker)
        if isinstance(event, SubmitMatchScore):
            target = self._find(state["poolMatches"], event.match_id)
        else:
            target = self._find(state["knockoutMatches"], event.match_id)
            if TBD in (target["teamA"], target["teamB"]):
                raise ValidationError(
                    f"Match {event.match_id} has no participants yet."
                )
        submission.validate()

        target["scores"] = submission.cleaned_scores()
        if event.tie_breaker is not None:
            target["tieBreaker"] = normalize_tie_breaker(event.tie_breaker)
        elif "tieBreaker" not in target:
            target["tieBreaker"] = empty_tie_breaker()
        return self._with_bracket(state)

    @staticmethod
    def _find(matches: list[Any], match_id: str) -> Any:
        for match in matches:
            if match["id"] == match_id:
                return match
        raise NotFoundError(f"Match {match_id} not found.")

    def _with_bracket(self, state: TournamentDocument) -> TournamentDocument:
        pool_a = [t["name"] for t in state["teams"] if t["pool"] == POOL_A]
        pool_b = [t["name"] for t in state["teams"] if t["pool"] == POOL_B]
        state["knockoutMatches"] = update_knockout_bracket(
            state["poolMatches"], state["knockoutMatches"], pool_a, pool_b
        )
        return state

    def _persist(self) -> tuple[bool, Optional[PersistenceError]]:
        if self.repository is None:
            return False, None
        try:
            self.repository.save(self.season.key, self._state)
        except PersistenceError as e:
            logger.error(f"Changes to {self.season.key} kept in memory only: {e.message}")
            return False, e
        return True, None
