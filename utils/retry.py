"""Async retry decorator with exponential backoff."""

import asyncio
import functools
import re
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar
import structlog

log = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# user:password@ in connection strings
_DSN_CREDENTIALS = re.compile(r"(\w+://[^:/@\s]+:)[^@\s]+(@)")
# password=... in keyword/value connection strings
_SENSITIVE_PARAMS = re.compile(
    r"((?:password|passwd|secret|token)=)[^&\s'\")]+",
    re.IGNORECASE,
)


def sanitize_error(error: str) -> str:
    """Strip credentials from driver error messages."""
    error = _DSN_CREDENTIALS.sub(r"\1[REDACTED]\2", error)
    return _SENSITIVE_PARAMS.sub(r"\1[REDACTED]", error)


def async_retry(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator for async functions with exponential backoff retry."""

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            last_exception: Exception | None = None
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    if attempt == max_retries:
                        break
                    delay = min(base_delay * (2 ** attempt), max_delay)
                    log.warning(
                        "retry_attempt",
                        func=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        delay=delay,
                        error=sanitize_error(str(e)),
                    )
                    await asyncio.sleep(delay)
            raise last_exception  # type: ignore[misc]

        return wrapper

    return decorator
