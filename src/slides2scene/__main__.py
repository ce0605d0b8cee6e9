"""Entry point for slides2scene."""

from __future__ import annotations

import logging
import sys

from slides2scene import startup
from slides2scene.cli import run as run_cli


def main() -> None:
    """Application entry point: initialize, then hand over to the CLI.

    Call like:
    ```
    python -m slides2scene --input-pptx talk.pptx
    slides2scene --demo
    ```
    """
    # The trace log has to be decided before argparse runs, so peek at argv.
    log: logging.Logger = startup.initialize_application(
        debug_mode="--debug" in sys.argv
    )

    try:
        run_cli()
    except Exception:
        log.exception("Unhandled exception - program crashed.")
        raise


if __name__ == "__main__":
    main()
