"""Tests for the session and pipeline run ids."""

import asyncio
import contextvars

import pytest

from slides2scene.internals import run_context
from slides2scene.internals.run_context import (
    UNKNOWN_RUN_ID,
    get_pipeline_run_id,
    get_session_id,
    start_pipeline_run,
)


def test_session_id_is_stable_within_a_process() -> None:
    assert get_session_id() == get_session_id()


def test_session_id_comes_from_env_when_first_generated(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(run_context, "_session_id", None)
    monkeypatch.setenv("SLIDES2SCENE_SESSION_ID", "feedbeef")

    assert get_session_id() == "feedbeef"


def test_each_pipeline_run_gets_a_new_id() -> None:
    def two_runs() -> tuple[str, str, str]:
        first = start_pipeline_run()
        second = start_pipeline_run()
        return first, second, get_pipeline_run_id()

    first, second, current = contextvars.copy_context().run(two_runs)

    assert first != second
    assert current == second
    assert len(first) == 8


def test_run_id_is_unknown_outside_a_run() -> None:
    assert contextvars.Context().run(get_pipeline_run_id) == UNKNOWN_RUN_ID


def test_worker_threads_see_the_run_id() -> None:
    async def scenario() -> tuple[str, str]:
        run_id = start_pipeline_run()
        return run_id, await asyncio.to_thread(get_pipeline_run_id)

    run_id, seen_in_thread = asyncio.run(scenario())

    assert seen_in_thread == run_id
