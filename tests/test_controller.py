"""Tests for the incremental search controller."""

import asyncio

import pytest

from shelfwise_cli.search import ELLIPSIS, SearchController

from conftest import settle

DEBOUNCE_MS = 30
QUIET = DEBOUNCE_MS / 1000 * 4


@pytest.mark.asyncio
async def test_rapid_typing_issues_one_fetch_for_final_text(instant_fetcher):
    controller = SearchController(instant_fetcher, debounce_ms=DEBOUNCE_MS)

    for text in ("b", "bo", "boo"):
        controller.set_query(text)
    await asyncio.sleep(QUIET)

    assert instant_fetcher.calls == [("boo", 0)]
    assert controller.state.results == ["boo:0:0", "boo:0:1", "boo:0:2"]


@pytest.mark.asyncio
async def test_query_updates_synchronously(instant_fetcher):
    controller = SearchController(instant_fetcher, debounce_ms=DEBOUNCE_MS)

    controller.set_query("tagore")

    assert controller.query == "tagore"
    assert controller.search_pending
    assert instant_fetcher.calls == []
    controller.close()


@pytest.mark.asyncio
async def test_new_query_resets_to_first_page(instant_fetcher):
    controller = SearchController(instant_fetcher, debounce_ms=DEBOUNCE_MS)
    controller.set_query("a")
    await asyncio.sleep(QUIET)
    await controller.change_page(3)
    assert controller.state.current_page == 3

    controller.set_query("ab")
    await asyncio.sleep(QUIET)

    assert instant_fetcher.calls[-1] == ("ab", 0)
    assert controller.state.current_page == 0


@pytest.mark.asyncio
async def test_change_page_bypasses_debounce(instant_fetcher):
    controller = SearchController(instant_fetcher, debounce_ms=10_000, initial_query="x")

    result = await controller.change_page(2)

    assert instant_fetcher.calls == [("x", 2)]
    assert result.current_page == 2
    assert controller.state.current_page == 2
    assert controller.state.total_pages == 5


@pytest.mark.asyncio
async def test_change_page_does_not_cancel_pending_keystroke_search(instant_fetcher):
    controller = SearchController(instant_fetcher, debounce_ms=DEBOUNCE_MS, initial_query="x")

    controller.set_query("xy")
    await controller.change_page(2)
    assert controller.search_pending

    await asyncio.sleep(QUIET)
    assert instant_fetcher.calls == [("xy", 2), ("xy", 0)]
    assert controller.state.current_page == 0


@pytest.mark.asyncio
async def test_page_change_supersedes_earlier_keystroke_fetch(gated_fetcher):
    controller = SearchController(gated_fetcher, debounce_ms=DEBOUNCE_MS)

    controller.set_query("x")
    await asyncio.sleep(QUIET)
    assert gated_fetcher.calls == [("x", 0)]

    page_task = asyncio.create_task(controller.change_page(2))
    await settle()

    gated_fetcher.release("x", 2)
    await page_task
    gated_fetcher.release("x", 0)
    await settle()

    assert controller.state.results == ["x:2"]
    assert controller.state.current_page == 2
    assert not controller.state.is_loading


@pytest.mark.asyncio
async def test_later_query_wins_when_earlier_resolves_last(gated_fetcher):
    controller = SearchController(gated_fetcher, debounce_ms=DEBOUNCE_MS)

    controller.set_query("x")
    await asyncio.sleep(QUIET)
    controller.set_query("y")
    await asyncio.sleep(QUIET)

    gated_fetcher.release("y")
    await settle()
    assert controller.state.results == ["y:0"]

    gated_fetcher.release("x")
    await settle()
    assert controller.state.results == ["y:0"]
    assert controller.state.query == "y"


@pytest.mark.asyncio
async def test_loading_stays_until_latest_request_resolves(gated_fetcher):
    controller = SearchController(gated_fetcher, debounce_ms=DEBOUNCE_MS, initial_query="q")

    first = asyncio.create_task(controller.change_page(0))
    await settle()
    second = asyncio.create_task(controller.change_page(1))
    await settle()
    assert controller.state.is_loading

    gated_fetcher.release("q", 0)
    await first
    assert controller.state.is_loading

    gated_fetcher.release("q", 1)
    await second
    assert not controller.state.is_loading


@pytest.mark.asyncio
async def test_failure_clears_results_and_refresh_recovers(instant_fetcher):
    controller = SearchController(instant_fetcher, debounce_ms=DEBOUNCE_MS, initial_query="q")
    await controller.change_page(1)
    assert controller.state.results

    instant_fetcher.fail_with = RuntimeError("Failed to fetch books")
    await controller.change_page(3)

    assert controller.state.results == []
    assert controller.state.total_pages == 0
    assert controller.state.error == "Failed to fetch books"
    assert not controller.state.is_loading

    instant_fetcher.fail_with = None
    await controller.refresh()

    assert instant_fetcher.calls[-1] == ("q", 3)
    assert controller.state.error is None
    assert controller.state.results == ["q:3:0", "q:3:1", "q:3:2"]


@pytest.mark.asyncio
async def test_new_fetch_clears_previous_error(gated_fetcher):
    gated_fetcher.failures[("q", 0)] = RuntimeError("down")
    controller = SearchController(gated_fetcher, initial_query="q")

    task = asyncio.create_task(controller.refresh())
    await settle()
    gated_fetcher.release("q")
    await task
    assert controller.state.error == "down"

    retry = asyncio.create_task(controller.change_page(1))
    await settle()
    assert controller.state.error is None
    assert controller.state.is_loading
    gated_fetcher.release("q", 1)
    await retry


@pytest.mark.asyncio
async def test_submit_cancels_pending_search(instant_fetcher):
    controller = SearchController(instant_fetcher, debounce_ms=DEBOUNCE_MS)

    controller.set_query("dickens")
    await controller.submit()
    await asyncio.sleep(QUIET)

    assert instant_fetcher.calls == [("dickens", 0)]


@pytest.mark.asyncio
async def test_short_queries_are_not_sent(instant_fetcher):
    controller = SearchController(
        instant_fetcher, debounce_ms=DEBOUNCE_MS, min_query_length=2
    )

    controller.set_query("ab")
    controller.set_query("a")
    await asyncio.sleep(QUIET)

    assert controller.query == "a"
    assert instant_fetcher.calls == []


@pytest.mark.asyncio
async def test_start_searches_initial_query(instant_fetcher):
    controller = SearchController(
        instant_fetcher, debounce_ms=DEBOUNCE_MS, initial_query="gita"
    )

    controller.start()
    await asyncio.sleep(QUIET)

    assert instant_fetcher.calls == [("gita", 0)]


@pytest.mark.asyncio
async def test_close_drops_pending_search(instant_fetcher):
    controller = SearchController(instant_fetcher, debounce_ms=DEBOUNCE_MS)

    controller.set_query("x")
    controller.close()
    await asyncio.sleep(QUIET)

    assert instant_fetcher.calls == []


@pytest.mark.asyncio
async def test_next_and_previous_stay_in_range(instant_fetcher):
    controller = SearchController(instant_fetcher, initial_query="q")

    assert await controller.previous_page() is None
    await controller.change_page(4)
    assert await controller.next_page() is None
    await controller.previous_page()

    assert instant_fetcher.calls == [("q", 4), ("q", 3)]


@pytest.mark.asyncio
async def test_on_change_sees_each_transition(instant_fetcher):
    seen = []
    controller = SearchController(
        instant_fetcher,
        initial_query="q",
        on_change=lambda state: seen.append(state.is_loading),
    )

    await controller.refresh()

    assert seen == [True, False]


@pytest.mark.asyncio
async def test_page_window_uses_current_state(instant_fetcher):
    instant_fetcher.total_pages = 100
    controller = SearchController(instant_fetcher, initial_query="q", window_size=2)
    assert controller.page_window() == []

    await controller.change_page(50)

    assert controller.page_window() == [0, ELLIPSIS, 48, 49, 50, 51, 52, ELLIPSIS, 99]


@pytest.mark.asyncio
async def test_shortened_query_drops_in_flight_results(gated_fetcher):
    controller = SearchController(
        gated_fetcher, debounce_ms=DEBOUNCE_MS, min_query_length=2
    )

    controller.set_query("abc")
    await asyncio.sleep(QUIET)
    assert gated_fetcher.calls == [("abc", 0)]
    assert controller.state.is_loading

    controller.set_query("a")
    assert not controller.state.is_loading

    gated_fetcher.release("abc")
    await settle()

    assert controller.state.query == "a"
    assert controller.state.results == []
    assert controller.state.total_pages == 0
    assert not controller.state.is_loading
