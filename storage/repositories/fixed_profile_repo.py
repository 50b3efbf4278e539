"""Placeholder backend that answers every lookup with the same profile."""

import structlog
from returns.result import Result, Success

from config.constants import DEFAULT_FIXED_PROFILE
from storage.errors import RepositoryError
from storage.types import UserID, UserProfile

log = structlog.get_logger(__name__)


class FixedProfileRepository:
    """Ignores the user id on lookup and stores nothing on update.

    Only useful for wiring a caller up before a real store exists.
    """

    def __init__(self, profile: str = DEFAULT_FIXED_PROFILE) -> None:
        self._profile = UserProfile(profile)

    async def lookup(self, user_id: UserID) -> Result[UserProfile, RepositoryError]:
        return Success(self._profile)

    async def update(self, user_id: UserID, profile: UserProfile) -> Result[None, RepositoryError]:
        log.info("profile_update_ignored", user_id=user_id, profile=profile)
        return Success(None)
