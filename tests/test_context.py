"""Context のユニットテスト"""

import asyncio

from graphql_http import Context, GraphQlClientErrorCodes


def test_new_context_is_not_cancelled() -> None:
    ctx = Context()
    assert ctx.cancelled is False
    assert ctx.err() is None
    assert ctx.deadline is None


def test_cancel() -> None:
    ctx = Context()
    ctx.cancel()
    err = ctx.err()
    assert err is not None
    assert err.code == GraphQlClientErrorCodes.CANCELLED
    assert ctx.cancelled is True


def test_first_cancel_reason_wins() -> None:
    ctx = Context()
    ctx.cancel("shutting down")
    ctx.cancel("again")
    assert ctx.err().message == "shutting down"


def test_expired_deadline() -> None:
    ctx = Context(timeout=0)
    assert ctx.err().code == GraphQlClientErrorCodes.DEADLINE_EXCEEDED


async def test_wait_returns_on_cancel() -> None:
    ctx = Context()
    asyncio.get_running_loop().call_later(0.01, ctx.cancel)
    err = await asyncio.wait_for(ctx.wait(), timeout=1)
    assert err.code == GraphQlClientErrorCodes.CANCELLED


async def test_wait_returns_on_deadline() -> None:
    ctx = Context(timeout=0.01)
    err = await asyncio.wait_for(ctx.wait(), timeout=1)
    assert err.code == GraphQlClientErrorCodes.DEADLINE_EXCEEDED
