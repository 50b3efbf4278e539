"""In-memory profile store for tests and local runs."""

import asyncio
from collections.abc import Mapping

import structlog
from returns.result import Failure, Result, Success

from storage.errors import ProfileNotFoundError, RepositoryError
from storage.types import ProfileMap, UserID, UserProfile

log = structlog.get_logger(__name__)


class InMemoryProfileRepository:
    """Dict-backed profile store guarded by a single asyncio lock.

    The dict is never handed out: ``seed`` and ``snapshot`` copy on the way
    in and out, so callers cannot mutate state behind the lock.
    """

    def __init__(self, initial: Mapping[UserID, UserProfile] | None = None) -> None:
        self._profiles: ProfileMap = dict(initial or {})
        self._lock = asyncio.Lock()

    async def lookup(self, user_id: UserID) -> Result[UserProfile, RepositoryError]:
        async with self._lock:
            profile = self._profiles.get(user_id)
        if profile is None:
            return Failure(ProfileNotFoundError(user_id))
        return Success(profile)

    async def update(self, user_id: UserID, profile: UserProfile) -> Result[None, RepositoryError]:
        async with self._lock:
            self._profiles[user_id] = profile
        return Success(None)

    async def seed(self, profiles: Mapping[UserID, UserProfile]) -> None:
        """Replace the whole store with a copy of ``profiles``."""
        replacement = dict(profiles)
        async with self._lock:
            self._profiles = replacement
        log.debug("profiles_seeded", count=len(replacement))

    async def snapshot(self) -> ProfileMap:
        """Return a copy of everything currently stored."""
        async with self._lock:
            return dict(self._profiles)
