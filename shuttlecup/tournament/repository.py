"""Firestore persistence for season documents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from shuttlecup.core.constants import SEASONS_COLLECTION
from shuttlecup.errors import PersistenceError

from .legacy import normalize_legacy_document

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from shuttlecup.core.types import TournamentDocument
    from shuttlecup.seasons import SeasonConfig

logger = logging.getLogger(__name__)


class SeasonRepository:
    """Loads and saves one JSON document per season.

    Writes replace the whole document, so concurrent editors resolve as
    last write wins.
    """

    def __init__(
        self,
        season: SeasonConfig,
        db: Client | None = None,
        collection: str = SEASONS_COLLECTION,
    ) -> None:
        """Bind the repository to a season and a Firestore client."""
        self.season = season
        self._db = db
        self.collection = collection

    @property
    def db(self) -> Client:
        """The Firestore client, resolved lazily from the default app."""
        if self._db is None:
            self._db = firestore.client()
        return self._db

    def _ref(self, season_key: str) -> Any:
        return self.db.collection(self.collection).document(season_key)

    def load(self, season_key: str) -> TournamentDocument | None:
        """Read and normalize the stored document, or ``None`` if there is none."""
        try:
            doc = cast(Any, self._ref(season_key).get())
        except Exception as e:
            logger.error(f"Failed to read season {season_key}: {e}")
            raise PersistenceError(f"Could not load season {season_key}.") from e
        if not doc.exists:
            return None
        return normalize_legacy_document(doc.to_dict(), self.season)

    def save(self, season_key: str, document: TournamentDocument) -> None:
        """Overwrite the stored document for ``season_key``.

        Raises:
            PersistenceError: If the write fails.
        """
        try:
            self._ref(season_key).set(dict(document))
        except Exception as e:
            logger.error(f"Failed to save season {season_key}: {e}")
            raise PersistenceError(f"Could not save season {season_key}.") from e
