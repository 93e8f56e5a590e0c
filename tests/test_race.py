import asyncio

import pytest

from docdigest.summarizer.errors import AllFallbacksFailedError
from docdigest.summarizer.race import (
    race_providers,
    race_then_fallback,
    run_fallback_chain,
)

from conftest import StubProvider


@pytest.mark.anyio
async def test_fastest_success_wins():
    slow = StubProvider("slow", "slow answer", delay=0.2)
    quick = StubProvider("quick", "quick answer", delay=0.01)
    fallback = StubProvider("fallback", "fallback answer")

    text = await race_then_fallback([slow, quick], [fallback], "prompt")

    assert text == "quick answer"
    assert fallback.calls == []


@pytest.mark.anyio
async def test_first_settled_error_does_not_beat_later_success():
    failing = StubProvider("failing", error=RuntimeError("401 unauthorized"))
    later = StubProvider("later", "later answer", delay=0.05)
    fallback = StubProvider("fallback", "fallback answer")

    text = await race_then_fallback([failing, later], [fallback], "prompt")

    assert text == "later answer"
    assert fallback.calls == []


@pytest.mark.anyio
async def test_losing_racers_are_cancelled():
    hung = StubProvider("hung", "never", delay=30)
    quick = StubProvider("quick", "quick answer")

    results = await asyncio.wait_for(race_providers([hung, quick], "prompt"), timeout=5)

    assert results[-1].provider == "quick"
    assert results[-1].result == "quick answer"
    assert hung.cancelled


@pytest.mark.anyio
async def test_simultaneous_successes_prefer_tier_order():
    first = StubProvider("first", "first answer")
    second = StubProvider("second", "second answer")
    results = await race_providers([first, second], "prompt")
    assert results[-1].provider == "first"


@pytest.mark.anyio
async def test_results_record_errors_before_the_winner():
    failing = StubProvider("failing", error=ValueError("bad gateway"))
    ok = StubProvider("ok", "fine", delay=0.02)
    results = await race_providers([failing, ok], "prompt")

    assert [r.provider for r in results] == ["failing", "ok"]
    assert results[0].result is None
    assert "bad gateway" in results[0].error
    assert results[1].error is None


@pytest.mark.anyio
async def test_all_fast_failures_use_fallback_chain_in_order():
    fast = [
        StubProvider("fast-a", error=RuntimeError("down")),
        StubProvider("fast-b", error=RuntimeError("down")),
    ]
    first_fallback = StubProvider("fallback-a", error=RuntimeError("quota"))
    second_fallback = StubProvider("fallback-b", "rescued")

    text = await race_then_fallback(fast, [first_fallback, second_fallback], "prompt")

    assert text == "rescued"
    assert len(first_fallback.calls) == 1
    assert len(second_fallback.calls) == 1


@pytest.mark.anyio
async def test_no_fast_tier_goes_straight_to_fallback():
    fallback = StubProvider("fallback", "from fallback")
    assert await race_then_fallback([], [fallback], "prompt") == "from fallback"
    assert await race_providers([], "prompt") == []


@pytest.mark.anyio
async def test_fallback_chain_stops_at_first_success():
    first = StubProvider("first", "first wins")
    second = StubProvider("second", "unused")
    assert await run_fallback_chain([first, second], "prompt") == "first wins"
    assert second.calls == []


@pytest.mark.anyio
async def test_exhausted_fallback_chain_is_terminal():
    chain = [
        StubProvider("a", error=RuntimeError("network")),
        StubProvider("b", "   "),
    ]
    with pytest.raises(AllFallbacksFailedError) as excinfo:
        await run_fallback_chain(chain, "prompt")
    assert len(excinfo.value.errors) == 2
    assert "all fallbacks failed" in str(excinfo.value)


@pytest.mark.anyio
async def test_empty_fallback_chain_is_terminal():
    with pytest.raises(AllFallbacksFailedError):
        await race_then_fallback([StubProvider("a", error=RuntimeError("x"))], [], "prompt")


@pytest.mark.anyio
async def test_cancelling_the_race_cancels_every_racer():
    racers = [StubProvider("a", "a", delay=30), StubProvider("b", "b", delay=30)]
    task = asyncio.create_task(race_providers(racers, "prompt"))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert all(racer.cancelled for racer in racers)
