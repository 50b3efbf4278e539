"""JSON endpoints for reading and writing user profiles."""

import structlog
from quart import Blueprint, current_app, jsonify, request
from returns.result import Failure

from services import profiles
from storage.errors import ProfileNotFoundError, RepositoryError
from storage.types import UserID, UserProfile

log = structlog.get_logger(__name__)

profiles_bp = Blueprint("profiles", __name__)


def _error_response(error: RepositoryError, user_id: str):
    if isinstance(error, ProfileNotFoundError):
        return jsonify({"error": "not_found", "user_id": user_id}), 404
    log.warning("profile_backend_unavailable", user_id=user_id, error=str(error))
    return jsonify({"error": "unavailable"}), 503


@profiles_bp.route("/<user_id>", methods=["GET"])
async def get_profile(user_id: str):
    repo = current_app.profile_repository  # type: ignore[attr-defined]
    result = await profiles.lookup(repo, UserID(user_id))
    if isinstance(result, Failure):
        return _error_response(result.failure(), user_id)
    return jsonify({"user_id": user_id, "profile": result.unwrap()})


@profiles_bp.route("/<user_id>", methods=["PUT"])
async def put_profile(user_id: str):
    payload = await request.get_json(silent=True)
    profile = payload.get("profile") if isinstance(payload, dict) else None
    if not isinstance(profile, str):
        return jsonify({"error": "invalid_profile"}), 400

    repo = current_app.profile_repository  # type: ignore[attr-defined]
    result = await profiles.update(repo, UserID(user_id), UserProfile(profile))
    if isinstance(result, Failure):
        return _error_response(result.failure(), user_id)

    log.info("profile_updated", user_id=user_id)
    return jsonify({"user_id": user_id, "profile": profile})
