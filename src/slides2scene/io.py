# io.py
"""File I/O: reading the input presentation and writing the scene JSON / HTML preview."""

import logging
from datetime import datetime
from pathlib import Path

from slides2scene.internals import constants
from slides2scene.internals.define_config import UserConfig
from slides2scene.internals.run_context import get_pipeline_run_id
from slides2scene.models import PresentationDocument, RenderResult
from slides2scene.render.html import render_html
from slides2scene.render.scene_json import to_json

log = logging.getLogger("slides2scene")

# A deck this long is almost certainly a mistake, or a very long afternoon.
MAX_REASONABLE_SLIDE_COUNT = 1000


# region Path Helpers
def validate_path(user_path: str | Path) -> Path:
    """Ensure filepath exists and is a file."""
    path = Path(user_path)
    pipeline_id = get_pipeline_run_id()
    if not path.exists():
        log.error(f"File not found: {user_path} [pipeline:{pipeline_id}]")
        raise FileNotFoundError(f"File not found: {user_path}")
    if not path.is_file():
        log.error(
            f"Path is not a file (might be a directory): {user_path} [pipeline:{pipeline_id}]"
        )
        raise ValueError(f"Path is not a file: {user_path}")
    return path


def validate_pptx_path(user_path: str | Path) -> Path:
    """Validates the filepath exists and is actually a pptx file."""
    path = validate_path(user_path)

    pipeline_id = get_pipeline_run_id()

    if path.suffix.lower() == ".ppt":
        log.error(f"Unsupported .ppt file: {path} [pipeline:{pipeline_id}]")
        raise ValueError(
            "This tool only supports .pptx files right now. Please convert your .ppt file to .pptx format first."
        )
    if path.suffix.lower() != ".pptx":
        log.error(
            f"Wrong file extension: expected .pptx, got {path.suffix} [pipeline:{pipeline_id}]"
        )
        raise ValueError(f"Expected a .pptx file, but got: {path.suffix}")
    return path


def _build_timestamped_output_filename(base_filename: str) -> str:
    """Apply a per-run timestamp to an output's base filename."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    name, ext = base_filename.rsplit(".", 1)
    return f"{name}_{timestamp}.{ext}"


# endregion


# region Disk I/O - Read
def load_presentation_document(pptx_path: Path | str) -> PresentationDocument:
    """
    Read a .pptx file from disk into a PresentationDocument.

    The bytes are not inspected here; a package that turns out to be broken is the render
    pipeline's business, not a load error.
    """
    pipeline_id = get_pipeline_run_id()
    path = validate_pptx_path(pptx_path)

    try:
        content = path.read_bytes()
    except PermissionError as e:
        log.error(f"Permission denied reading {path} [pipeline:{pipeline_id}]: {e}")
        raise PermissionError(f"Could not read {path}: permission denied") from e
    except OSError as e:
        log.error(f"Could not read {path} [pipeline:{pipeline_id}]: {e}")
        raise OSError(f"Could not read {path}: {e}") from e

    document = PresentationDocument(name=path.name, content=content)
    log.info(
        f"Loaded {document.name} ({document.size} bytes). [pipeline:{pipeline_id}]"
    )
    return document


# endregion


# region Disk I/O - Write
def save_outputs(result: RenderResult, cfg: UserConfig) -> list[Path]:
    """
    Write the enabled outputs (scene JSON and/or HTML preview) to the output folder.

    Returns:
        list[Path]: The files written, JSON first.
    """
    pipeline_id = get_pipeline_run_id()

    save_folder = cfg.get_output_folder()
    save_folder.mkdir(parents=True, exist_ok=True)

    _validate_content_size(result)

    outputs: list[tuple[str, str]] = []
    if cfg.write_json:
        outputs.append((constants.OUTPUT_JSON_FILENAME, to_json(result)))
    if cfg.write_html:
        outputs.append(
            (
                constants.OUTPUT_HTML_FILENAME,
                render_html(result, initial_zoom=cfg.initial_zoom),
            )
        )

    written: list[Path] = []
    for base_filename, text in outputs:
        output_filepath = save_folder / _build_timestamped_output_filename(base_filename)
        try:
            output_filepath.write_text(text, encoding="utf-8")
            log.info(f"Successfully saved to {output_filepath}. [pipeline:{pipeline_id}]")
        except PermissionError as e:
            log.error(f"Save failed due to permission error [pipeline:{pipeline_id}]: {e}")
            raise PermissionError(
                "Save failed: File may be open in another program"
            ) from e
        except OSError as e:
            log.error(f"Save failed in [pipeline:{pipeline_id}]: {e}")
            raise OSError(f"Save failed (disk space or IO issue): {e}") from e
        written.append(output_filepath)

    return written


def _validate_content_size(result: RenderResult) -> None:
    """Report if the output we're about to save is excessively large."""
    if len(result.slides) > MAX_REASONABLE_SLIDE_COUNT:
        log.warning(
            f"This is about to save a scene with over {MAX_REASONABLE_SLIDE_COUNT} slides ... that seems a bit long!"
        )


# endregion
