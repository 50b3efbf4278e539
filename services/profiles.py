"""Profile access for callers that only know the repository capability.

Every function takes the repository as its first argument; nothing here
looks one up from a global. Results come back exactly as the repository
produced them.
"""

import asyncpg
import structlog
from returns.result import Failure, Result

from config.constants import (
    BACKEND_FIXED,
    BACKEND_MEMORY,
    BACKEND_POSTGRES,
    BACKENDS,
    DEFAULT_FIXED_PROFILE,
)
from storage.errors import RepositoryError
from storage.repositories.fixed_profile_repo import FixedProfileRepository
from storage.repositories.memory_profile_repo import InMemoryProfileRepository
from storage.repositories.profile_repo import PostgresProfileRepository, ProfileRepository
from storage.types import UserID, UserProfile

log = structlog.get_logger(__name__)


async def lookup(
    repository: ProfileRepository, user_id: UserID
) -> Result[UserProfile, RepositoryError]:
    result = await repository.lookup(user_id)
    if isinstance(result, Failure):
        log.debug("profile_lookup_miss", user_id=user_id, error=str(result.failure()))
    return result


async def update(
    repository: ProfileRepository, user_id: UserID, profile: UserProfile
) -> Result[None, RepositoryError]:
    return await repository.update(user_id, profile)


def create_repository(
    backend: str,
    *,
    pool: asyncpg.Pool | None = None,
    fixed_profile: str = DEFAULT_FIXED_PROFILE,
) -> ProfileRepository:
    """Build the repository for a configured backend name."""
    if backend == BACKEND_FIXED:
        repository: ProfileRepository = FixedProfileRepository(fixed_profile)
    elif backend == BACKEND_MEMORY:
        repository = InMemoryProfileRepository()
    elif backend == BACKEND_POSTGRES:
        if pool is None:
            raise ValueError("postgres backend needs a connection pool")
        repository = PostgresProfileRepository(pool)
    else:
        raise ValueError(f"Unknown profile backend {backend!r}; expected one of {BACKENDS}")

    log.info("profile_repository_created", backend=backend)
    return repository
