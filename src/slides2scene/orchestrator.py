"""Run one presentation through the render pipeline and write its outputs."""

import logging
from pathlib import Path

from slides2scene.internals.define_config import UserConfig
from slides2scene.internals.manifest import RunManifest
from slides2scene.internals.run_context import (
    get_pipeline_run_id,
    get_session_id,
    start_pipeline_run,
)
from slides2scene.io import load_presentation_document, save_outputs
from slides2scene.pipelines.selector import render_presentation

log = logging.getLogger("slides2scene")


# region run_pipeline
def run_pipeline(cfg: UserConfig) -> list[Path]:
    """
    Validate the config, render the input presentation and save the enabled outputs.

    Returns:
        list[Path]: The files written.
    """
    cfg.pre_run_check()

    pipeline_id = start_pipeline_run()
    log.info(f"Initializing pipeline run. [pipeline:{pipeline_id}]")

    run_manifest = RunManifest(cfg, run_id=pipeline_id)
    run_manifest.start()

    log_pipeline_info(cfg)

    try:
        input_path = cfg.get_input_pptx_file()
        if input_path is None:
            raise ValueError("No input pptx file specified.")

        document = load_presentation_document(input_path)
        result = render_presentation(document)
        log.info(
            f"Rendered {document.name} with the {result.stage.value} stage. [pipeline:{pipeline_id}]"
        )

        output_paths = save_outputs(result, cfg)
        run_manifest.complete(result, output_paths)
        return output_paths

    except Exception as e:
        run_manifest.fail(e)
        raise  # The CLI still needs to see it


# endregion


# region log_pipeline_info
def log_pipeline_info(cfg: UserConfig) -> None:
    """Print this pipeline run's run ID, session ID, and general config info to the log."""
    log.info("=== Pipeline Run Started ===")
    log.info(f"Run ID: {get_pipeline_run_id()}")
    log.info(f"Session ID: {get_session_id()}")
    log.info(f"Input: {cfg.input_pptx}")
    log.info(f"Configuration: {cfg}")


# endregion
