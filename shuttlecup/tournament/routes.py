"""Routes for the tournament blueprint."""

from __future__ import annotations

from typing import Any

from flask import current_app, jsonify, request

from shuttlecup.auth.decorators import admin_required
from shuttlecup.errors import ValidationError

from . import bp
from .services import TournamentService


def _score_payload() -> tuple[Any, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or "scores" not in body:
        raise ValidationError("Missing required data.")
    return body["scores"], body.get("tieBreaker")


@bp.route("/standings", methods=["GET"])
def standings() -> Any:
    """Both pool tables."""
    return jsonify(TournamentService.get_store().get_standings())


@bp.route("/matches", methods=["GET"])
def matches() -> Any:
    """All pool matches."""
    return jsonify(
        TournamentService.match_listing(TournamentService.get_store().get_matches())
    )


@bp.route("/knockout", methods=["GET"])
def knockout() -> Any:
    """Semifinals and final."""
    return jsonify(
        {"knockoutMatches": TournamentService.get_store().get_knockout_matches()}
    )


@bp.route("/categories", methods=["GET"])
def categories() -> Any:
    """Category names, short labels and whether each is doubles."""
    return jsonify({"categories": TournamentService.category_listing()})


@bp.route("/qualified", methods=["GET"])
def qualified() -> Any:
    """Current top two of each pool."""
    return jsonify(TournamentService.get_store().get_qualified_teams())


@bp.route("/matches/<string:match_id>", methods=["POST"])
@admin_required
def submit_match_score(match_id: str) -> Any:
    """Replace a pool match score sheet."""
    scores, tie_breaker = _score_payload()
    result = TournamentService.get_store().submit_match_score(
        match_id, scores, tie_breaker
    )
    body, status = TournamentService.result_response(result)
    if result.accepted and not result.persisted:
        current_app.logger.warning(f"Match {match_id} updated but not saved")
    return jsonify(body), status


@bp.route("/knockout/<string:match_id>", methods=["POST"])
@admin_required
def submit_knockout_score(match_id: str) -> Any:
    """Replace a semifinal or final score sheet."""
    scores, tie_breaker = _score_payload()
    result = TournamentService.get_store().submit_knockout_score(
        match_id, scores, tie_breaker
    )
    body, status = TournamentService.result_response(result)
    if result.accepted and not result.persisted:
        current_app.logger.warning(f"Knockout {match_id} updated but not saved")
    return jsonify(body), status


@bp.route("/reset", methods=["POST"])
@admin_required
def reset() -> Any:
    """Start the season over."""
    result = TournamentService.get_store().reset_season()
    current_app.logger.info("Season reset by admin")
    body, status = TournamentService.result_response(result)
    return jsonify(body), status
