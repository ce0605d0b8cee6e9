"""Ids that tie log lines and manifests to one process and one render.

The session id is fixed for the life of the process. The pipeline run id changes with every
run_pipeline() call and lives in a ContextVar, so the event loop started for a render and the
worker threads it reads parts on all see the id of the run that started them.
"""

from __future__ import annotations

import contextvars
import os
import uuid

SESSION_ID_ENV_VAR = "SLIDES2SCENE_SESSION_ID"
UNKNOWN_RUN_ID = "Unknown"

_session_id: str | None = None
_pipeline_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "slides2scene_pipeline_run_id", default=None
)


def _new_id() -> str:
    return uuid.uuid4().hex[:8]


# region session id
def get_session_id() -> str:
    """Session id for this process, taken from SLIDES2SCENE_SESSION_ID when that is set."""
    global _session_id
    if _session_id is None:
        _session_id = os.environ.get(SESSION_ID_ENV_VAR) or _new_id()
    return _session_id


# endregion


# region pipeline run id
def start_pipeline_run() -> str:
    """Begin a new render: generate a fresh run id and make it current."""
    run_id = _new_id()
    _pipeline_run_id.set(run_id)
    return run_id


def get_pipeline_run_id() -> str:
    """
    The current run id.

    Core functions can be called on their own, outside run_pipeline(); they log with
    "Unknown" then.
    """
    return _pipeline_run_id.get() or UNKNOWN_RUN_ID


# endregion
