"""Shared fixtures"""

# tests/conftest.py
import io
from pathlib import Path

import pptx
import pytest
from pptx.util import Inches, Pt

from slides2scene.internals.define_config import UserConfig
from tests import helpers


@pytest.fixture(autouse=True)
def isolated_user_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ~/Documents at a temp folder so no test touches the real user scaffold."""
    documents = tmp_path / "Documents"
    documents.mkdir()
    monkeypatch.setattr(
        "slides2scene.internals.paths.user_documents_dir", lambda: str(documents)
    )
    return documents


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Temporary directory for test output files"""
    output = tmp_path / "output"
    output.mkdir()
    return output


@pytest.fixture
def clean_debug_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Ensure debug env var is not set before test.
    Used by the config, startup and CLI tests."""
    monkeypatch.delenv("SLIDES2SCENE_DEBUG", raising=False)
    return monkeypatch


@pytest.fixture
def path_to_sample_pptx(tmp_path: Path) -> Path:
    """A real deck written by python-pptx: a title slide, then a text box plus a picture."""
    prs = pptx.Presentation()

    title_slide = prs.slides.add_slide(prs.slide_layouts[0])
    title_slide.shapes.title.text = "Quarterly Review"
    title_slide.placeholders[1].text = "Numbers and pictures"

    body_slide = prs.slides.add_slide(prs.slide_layouts[6])  # Blank
    box = body_slide.shapes.add_textbox(Inches(1), Inches(1), Inches(4), Inches(2))
    frame = box.text_frame
    frame.text = "Revenue went up"
    second = frame.add_paragraph()
    run = second.add_run()
    run.text = "Costs went down"
    run.font.bold = True
    run.font.size = Pt(20)
    body_slide.shapes.add_picture(
        io.BytesIO(helpers.PNG_1X1), Inches(5), Inches(1), Inches(2), Inches(2)
    )

    path = tmp_path / "sample.pptx"
    prs.save(str(path))
    return path


@pytest.fixture
def sample_cfg(path_to_sample_pptx: Path, temp_output_dir: Path) -> UserConfig:
    """Sample config object pointing at the python-pptx deck"""
    return UserConfig(
        input_pptx=path_to_sample_pptx,
        output_folder=temp_output_dir,
    )


@pytest.fixture
def sample_config_toml(tmp_path: Path, path_to_sample_pptx: Path) -> Path:
    """Path to a config toml with a couple of non-default values"""
    path = tmp_path / "test_config.toml"
    path.write_text(
        f'input_pptx = "{path_to_sample_pptx.as_posix()}"\n'
        "write_html = false\n"
        "initial_zoom = 80\n",
        encoding="utf-8",
    )
    return path
