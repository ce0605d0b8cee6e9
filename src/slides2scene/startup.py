"""Startup logic that has to happen before anything else.

- Console encoding (Windows)
- Logging configuration
- User directory scaffolding (input/output/logs/configs/manifests folders)
"""

import io
import logging
import platform
import sys

from slides2scene.internals.define_config import debug_mode_from_env
from slides2scene.internals.logger import setup_logger
from slides2scene.internals.scaffold import ensure_user_scaffold


# region initialize_application
def initialize_application(debug_mode: bool = False) -> logging.Logger:
    """
    Common startup tasks.

    Args:
        debug_mode: Turn on the trace log even if SLIDES2SCENE_DEBUG is not set.
    """
    # Must happen before the console handler is created.
    _use_utf8_console()

    log = setup_logger(enable_trace=debug_mode or debug_mode_from_env())
    log.info("Starting slides2scene Log.")

    log.debug("Checking for existing slides2scene user folders and scaffolding if needed.")
    ensure_user_scaffold()

    return log


def _use_utf8_console() -> None:
    # Slide text is often non-ASCII; the Windows console default codepage can't print it.
    if platform.system() == "Windows":
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")


# endregion
