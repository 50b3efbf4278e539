"""Profile repository capability and its PostgreSQL backend."""

from typing import Any, Protocol, runtime_checkable

import asyncpg
import structlog
from returns.result import Failure, Result, Success

from config.constants import DB_RETRY_ATTEMPTS, DB_RETRY_BASE_DELAY, DB_RETRY_MAX_DELAY
from storage.errors import ProfileNotFoundError, RepositoryError, RepositoryUnavailableError
from storage.types import UserID, UserProfile
from utils.retry import async_retry, sanitize_error

log = structlog.get_logger(__name__)

# Failures worth another attempt: the server went away or never answered
_TRANSIENT_ERRORS = (asyncpg.PostgresConnectionError, OSError)
_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


@runtime_checkable
class ProfileRepository(Protocol):
    """Anything that can look up and upsert one profile per user.

    Implementations report failures as ``Failure(RepositoryError)`` values
    instead of raising them.
    """

    async def lookup(self, user_id: UserID) -> Result[UserProfile, RepositoryError]:
        ...

    async def update(self, user_id: UserID, profile: UserProfile) -> Result[None, RepositoryError]:
        ...


class PostgresProfileRepository:
    """Profiles stored in the ``user_profiles`` table."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def lookup(self, user_id: UserID) -> Result[UserProfile, RepositoryError]:
        try:
            profile = await self._fetch_profile(user_id)
        except _DRIVER_ERRORS as e:
            return self._unavailable("profile_lookup_failed", user_id, e)
        if profile is None:
            return Failure(ProfileNotFoundError(user_id))
        return Success(UserProfile(profile))

    async def update(self, user_id: UserID, profile: UserProfile) -> Result[None, RepositoryError]:
        try:
            await self._upsert_profile(user_id, profile)
        except _DRIVER_ERRORS as e:
            return self._unavailable("profile_update_failed", user_id, e)
        return Success(None)

    @async_retry(
        max_retries=DB_RETRY_ATTEMPTS,
        base_delay=DB_RETRY_BASE_DELAY,
        max_delay=DB_RETRY_MAX_DELAY,
        exceptions=_TRANSIENT_ERRORS,
    )
    async def _fetch_profile(self, user_id: UserID) -> str | None:
        async with self._pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT profile FROM user_profiles WHERE user_id = $1", user_id
            )

    @async_retry(
        max_retries=DB_RETRY_ATTEMPTS,
        base_delay=DB_RETRY_BASE_DELAY,
        max_delay=DB_RETRY_MAX_DELAY,
        exceptions=_TRANSIENT_ERRORS,
    )
    async def _upsert_profile(self, user_id: UserID, profile: UserProfile) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO user_profiles (user_id, profile)
                VALUES ($1, $2)
                ON CONFLICT (user_id) DO UPDATE
                SET profile = EXCLUDED.profile, updated_at = NOW()
                """,
                user_id,
                profile,
            )

    @staticmethod
    def _unavailable(event: str, user_id: UserID, error: Exception) -> Result[Any, RepositoryError]:
        reason = sanitize_error(str(error)) or type(error).__name__
        log.error(event, user_id=user_id, error=reason)
        return Failure(RepositoryUnavailableError(reason))
