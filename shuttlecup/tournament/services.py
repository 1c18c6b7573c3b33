"""Service layer tying the tournament store to the running application."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from flask import current_app

from shuttlecup.core.constants import CATEGORIES
from shuttlecup.seasons import get_season

from .completion import (
    are_all_pool_matches_complete,
    is_match_complete,
    is_match_played,
)
from .models import category_abbreviation, is_doubles_category
from .repository import SeasonRepository
from .store import TournamentStore

if TYPE_CHECKING:
    from flask import Flask

    from shuttlecup.core.types import Match

    from .store import UpdateResult

STORE_EXTENSION_KEY = "shuttlecup.store"

_store_lock = threading.Lock()


class TournamentService:
    """Handles access to the season store for request handlers."""

    @staticmethod
    def create_store(app: Flask, db: Any = None) -> TournamentStore:
        """Build the store for the configured season and attach it to ``app``."""
        season = get_season(app.config["SEASON_ID"])
        repository = SeasonRepository(
            season, db=db, collection=app.config["SEASONS_COLLECTION"]
        )
        store = TournamentStore(season, repository)
        app.extensions[STORE_EXTENSION_KEY] = store
        return store

    @staticmethod
    def get_store() -> TournamentStore:
        """The process-wide store, created on first use."""
        app = current_app._get_current_object()  # type: ignore[attr-defined]
        store = app.extensions.get(STORE_EXTENSION_KEY)
        if store is not None:
            return store
        with _store_lock:
            store = app.extensions.get(STORE_EXTENSION_KEY)
            if store is None:
                store = TournamentService.create_store(app)
        return store

    @staticmethod
    def result_response(result: UpdateResult) -> tuple[dict[str, Any], int]:
        """Shape an ``UpdateResult`` into a JSON body and status code."""
        if not result.accepted:
            error = result.error
            return {"error": error.message if error else "Rejected."}, (
                error.status_code if error else 400
            )

        body: dict[str, Any] = {
            "success": True,
            "matches": result.state["poolMatches"],
            "knockoutMatches": result.state["knockoutMatches"],
            "standings": result.standings,
            "persisted": result.persisted,
        }
        if result.error is not None:
            body["warning"] = result.error.message
        return body, 200

    @staticmethod
    def match_listing(matches: list[Match]) -> dict[str, Any]:
        """Pool matches with ``played``/``complete`` flags for the score board."""
        listed = []
        for match in matches:
            entry: dict[str, Any] = dict(match)
            entry["played"] = is_match_played(match)
            entry["complete"] = is_match_complete(match)
            listed.append(entry)
        return {
            "matches": listed,
            "allComplete": are_all_pool_matches_complete(matches),
        }

    @staticmethod
    def category_listing() -> list[dict[str, Any]]:
        """Categories in canonical order with their short labels."""
        return [
            {
                "name": category,
                "abbreviation": category_abbreviation(category),
                "doubles": is_doubles_category(category),
            }
            for category in CATEGORIES
        ]
