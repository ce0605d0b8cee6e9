"""Cross-platform path resolution for user directories.

Uses platformdirs to find OS-appropriate locations for:
- Logs (where slides2scene.log lives)
- Output (default save location for scene JSON and HTML previews)
- Input (optional staging area for presentations)
- Configs and run manifests
"""

import os
from pathlib import Path

from platformdirs import user_documents_dir

PACKAGE_NAME = "slides2scene"


# region user_base_dir
def user_base_dir() -> Path:
    """
    Base directory for all slides2scene user files.

    Returns:
        Path to ~/Documents/slides2scene/ (or OS equivalent)

    Examples:
        Windows: C:/Users/YourName/Documents/slides2scene/
        macOS: /Users/YourName/Documents/slides2scene/
        Linux: /home/yourname/Documents/slides2scene/
    """
    base = Path(user_documents_dir()) / PACKAGE_NAME
    base.mkdir(parents=True, exist_ok=True)
    return base


# endregion


# region user subfolders
def _user_subdir(name: str) -> Path:
    folder = user_base_dir() / name
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def user_log_dir_path() -> Path:
    """~/Documents/slides2scene/logs/"""
    return _user_subdir("logs")


def user_output_dir() -> Path:
    """Default output folder: ~/Documents/slides2scene/output/"""
    return _user_subdir("output")


def user_input_dir() -> Path:
    """Optional staging folder for presentations: ~/Documents/slides2scene/input/"""
    return _user_subdir("input")


def user_configs_dir() -> Path:
    """Saved TOML configs: ~/Documents/slides2scene/configs/"""
    return _user_subdir("configs")


def user_manifests_dir() -> Path:
    """Per-run JSON manifests: ~/Documents/slides2scene/manifests/"""
    return _user_subdir("manifests")


# endregion


# region resolve_path
def resolve_path(raw: str | Path) -> Path:
    """
    Expand ~ and ${VARS}; resolve to absolute path.

    Relative paths resolve relative to current working directory.
    """
    expanded = os.path.expandvars(str(raw))
    return Path(expanded).expanduser().resolve()


# endregion
