"""Failure values carried inside repository results."""

from storage.types import UserID


class RepositoryError(Exception):
    """Base class for every profile repository failure."""


class ProfileNotFoundError(RepositoryError):
    """No profile is stored for the requested user."""

    def __init__(self, user_id: UserID) -> None:
        self.user_id = user_id
        super().__init__(f"No profile for user {user_id!r}")


class RepositoryUnavailableError(RepositoryError):
    """The backing store could not be reached or rejected the query."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
