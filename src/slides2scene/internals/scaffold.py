"""User directory structure creation and initialization.
Auto-creates ~/Documents/slides2scene/ with a README, a sample config and a sample deck.

On first run, this creates:
- ~/Documents/slides2scene/
  ├── README.md           (explains what each folder is for)
  ├── input/              (sample_slides.pptx; optional staging for presentations)
  ├── output/             (scene JSON and HTML previews land here)
  ├── logs/               (slides2scene.log lives here)
  ├── configs/            (sample_config.toml)
  └── manifests/          (one JSON record per pipeline run)

Safe to call repeatedly - won't overwrite existing user files.
"""

import logging
from pathlib import Path

import pptx
from pptx.util import Inches, Pt

from slides2scene.internals.define_config import UserConfig
from slides2scene.internals.paths import (
    user_base_dir,
    user_configs_dir,
    user_input_dir,
    user_log_dir_path,
    user_manifests_dir,
    user_output_dir,
)

log = logging.getLogger("slides2scene")

SAMPLE_DECK_NAME = "sample_slides.pptx"
SAMPLE_CONFIG_NAME = "sample_config.toml"

README_TEXT = """# slides2scene

This folder was created automatically.

- `input/`: put presentations here if you like. `sample_slides.pptx` is a small demo deck.
- `output/`: scene graph JSON files and HTML previews are written here by default.
- `logs/`: `slides2scene.log` (and `trace_slides2scene.log` in debug mode).
- `configs/`: TOML config files. Start from `sample_config.toml` and pass it with `--config`.
- `manifests/`: one JSON record per run: what was rendered, which stage was used, what failed.
"""


def ensure_user_scaffold() -> None:
    """
    Create the folder structure and sample files on first run.

    Safe to call every time - won't overwrite existing user files.
    """
    base = user_base_dir()

    input_dir = user_input_dir()
    user_output_dir()
    user_log_dir_path()
    user_manifests_dir()
    configs_dir = user_configs_dir()

    readme_path = base / "README.md"
    if not readme_path.exists():
        readme_path.write_text(README_TEXT, encoding="utf-8")
        log.info(f"Created new README at {readme_path}")

    sample_deck = input_dir / SAMPLE_DECK_NAME
    if not sample_deck.exists():
        _create_sample_deck(sample_deck)
        log.info(f"Created sample deck at {sample_deck}")
    else:
        log.debug(f"Sample deck already exists (not overwriting): {sample_deck}")

    sample_config = configs_dir / SAMPLE_CONFIG_NAME
    if not sample_config.exists():
        UserConfig(input_pptx=sample_deck).save_toml(sample_config)

    log.debug(f"User scaffold ready at {base}")


def _create_sample_deck(path: Path) -> None:
    """Write a two-slide demo presentation: a title slide and a multi-paragraph text box."""
    prs = pptx.Presentation()

    title_slide = prs.slides.add_slide(prs.slide_layouts[0])
    title_slide.shapes.title.text = "slides2scene sample"
    title_slide.placeholders[1].text = "Layout reconstruction demo"

    body_slide = prs.slides.add_slide(prs.slide_layouts[6])  # Blank
    box = body_slide.shapes.add_textbox(Inches(1), Inches(1), Inches(6), Inches(2))
    frame = box.text_frame
    frame.text = "Every paragraph becomes its own positioned block."
    second = frame.add_paragraph()
    run = second.add_run()
    run.text = "Bold, 24pt run"
    run.font.bold = True
    run.font.size = Pt(24)

    prs.save(str(path))
