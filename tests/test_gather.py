"""Tests for the best-effort gather."""

import asyncio

from storymap.gather import Outcome, gather_settled


async def _value(v, delay: float = 0):
    await asyncio.sleep(delay)
    return v


async def _fail(msg: str):
    raise RuntimeError(msg)


async def test_failed_branch_is_isolated():
    results = await gather_settled(_value("one"), _fail("two broke"), _value("three"))
    assert [r.ok for r in results] == [True, False, True]
    assert results[0].value == "one"
    assert results[2].value == "three"
    assert str(results[1].error) == "two broke"


async def test_results_keep_argument_order():
    results = await gather_settled(_value("slow", 0.02), _value("fast"))
    assert [r.value for r in results] == ["slow", "fast"]


async def test_all_failing_never_raises():
    results = await gather_settled(_fail("a"), _fail("b"))
    assert all(not r.ok for r in results)


async def test_empty_group():
    assert await gather_settled() == []


def test_value_or():
    assert Outcome(ok=True, value=3).value_or(0) == 3
    assert Outcome(ok=False, error=ValueError()).value_or(0) == 0
