"""Tests to ensure the slides2scene directory structure gets created properly under the users' Documents."""

from pathlib import Path

import pptx

from slides2scene.internals import scaffold
from slides2scene.internals.define_config import UserConfig


# region test ensure_user_scaffold
def test_ensure_user_scaffold_happy_path(isolated_user_dirs: Path) -> None:
    """isolated_user_dirs points ~/Documents at a temp folder for every test."""
    scaffold.ensure_user_scaffold()

    base = isolated_user_dirs / "slides2scene"
    assert (base / "README.md").is_file()
    for folder in ("input", "output", "logs", "configs", "manifests"):
        assert (base / folder).is_dir()
    assert (base / "input" / scaffold.SAMPLE_DECK_NAME).is_file()
    assert (base / "configs" / scaffold.SAMPLE_CONFIG_NAME).is_file()


def test_sample_deck_is_a_real_presentation(isolated_user_dirs: Path) -> None:
    scaffold.ensure_user_scaffold()

    deck = pptx.Presentation(
        str(isolated_user_dirs / "slides2scene" / "input" / scaffold.SAMPLE_DECK_NAME)
    )
    assert len(deck.slides) == 2


def test_sample_config_points_at_sample_deck(isolated_user_dirs: Path) -> None:
    scaffold.ensure_user_scaffold()

    cfg = UserConfig.from_toml(
        isolated_user_dirs / "slides2scene" / "configs" / scaffold.SAMPLE_CONFIG_NAME
    )
    assert cfg.input_pptx is not None
    assert cfg.input_pptx.name == scaffold.SAMPLE_DECK_NAME


def test_ensure_user_scaffold_does_not_overwrite(isolated_user_dirs: Path) -> None:
    """Calling ensure_user_scaffold() again must keep the user's edits."""
    scaffold.ensure_user_scaffold()

    readme = isolated_user_dirs / "slides2scene" / "README.md"
    readme.write_text("my notes", encoding="utf-8")

    scaffold.ensure_user_scaffold()

    assert readme.read_text(encoding="utf-8") == "my notes"


# endregion
