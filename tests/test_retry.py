"""Tests for utils/retry.py — backoff decorator and error sanitising."""

import pytest
from unittest.mock import AsyncMock, patch

from utils.retry import async_retry, sanitize_error


class TestSanitizeError:
    def test_redacts_dsn_password(self):
        msg = sanitize_error("connect failed: postgresql://app:hunter2@db:5432/profiles")
        assert "hunter2" not in msg
        assert "postgresql://app:[REDACTED]@db:5432/profiles" in msg

    def test_redacts_keyword_password(self):
        msg = sanitize_error("host=db user=app password=hunter2 dbname=profiles")
        assert msg == "host=db user=app password=[REDACTED] dbname=profiles"

    def test_leaves_plain_messages(self):
        assert sanitize_error("connection refused") == "connection refused"


class TestAsyncRetry:
    @pytest.fixture(autouse=True)
    def sleep(self):
        with patch("utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            yield sleep

    async def test_returns_on_first_success(self, sleep):
        func = AsyncMock(return_value="ok")
        wrapped = async_retry(max_retries=2)(func)
        assert await wrapped() == "ok"
        assert func.await_count == 1
        sleep.assert_not_awaited()

    async def test_retries_then_succeeds(self, sleep):
        func = AsyncMock(side_effect=[OSError("a"), OSError("b"), "ok"])
        wrapped = async_retry(max_retries=2, base_delay=1.0)(func)
        assert await wrapped() == "ok"
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    async def test_delay_is_capped(self, sleep):
        func = AsyncMock(side_effect=[OSError(), OSError(), OSError(), "ok"])
        wrapped = async_retry(max_retries=3, base_delay=4.0, max_delay=5.0)(func)
        await wrapped()
        assert [c.args[0] for c in sleep.await_args_list] == [4.0, 5.0, 5.0]

    async def test_raises_last_error(self):
        func = AsyncMock(side_effect=[OSError("first"), OSError("last")])
        wrapped = async_retry(max_retries=1)(func)
        with pytest.raises(OSError, match="last"):
            await wrapped()

    async def test_other_exceptions_propagate_immediately(self):
        func = AsyncMock(side_effect=ValueError("bad"))
        wrapped = async_retry(max_retries=3, exceptions=(OSError,))(func)
        with pytest.raises(ValueError):
            await wrapped()
        assert func.await_count == 1
