# internals/define_config.py
"""User configuration dataclass and validation."""

# region imports
from __future__ import annotations

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    # Python 3.10
    import tomli as tomllib  # type: ignore[no-redef]

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import tomli_w  # For writing (no stdlib equivalent yet)

from slides2scene.internals import constants
from slides2scene.internals.paths import resolve_path, user_input_dir, user_output_dir

# endregion

log = logging.getLogger("slides2scene")


# region class UserConfig
@dataclass
class UserConfig:
    """All user-configurable settings for slides2scene."""

    # region class fields

    # region Input/Output
    input_pptx: Optional[Path] = None  # Presentation to reconstruct
    output_folder: Optional[Path] = None  # Where the scene JSON / HTML preview go
    # endregion

    # region Output options
    write_json: bool = True  # Write the scene graph as JSON
    write_html: bool = True  # Write a standalone HTML preview
    initial_zoom: int = constants.ZOOM_DEFAULT  # Zoom percent of slide canvases in the preview
    debug_mode: bool = False  # Extra trace log; the SLIDES2SCENE_DEBUG env var also turns it on
    # endregion

    # endregion

    # region post_init
    def __post_init__(self) -> None:
        """Convert string inputs of path fields into Path objects."""
        if self.input_pptx is not None:
            self.input_pptx = Path(self.input_pptx)
        if self.output_folder is not None:
            self.output_folder = Path(self.output_folder)

    # endregion

    # region class methods (populate a new instance)

    # region with_defaults
    @classmethod
    def with_defaults(cls) -> UserConfig:
        """
        Config pointing at the sample deck in the user input folder, for a quick CLI demo.

        Returns:
            UserConfig: Every other field keeps its dataclass default.
        """
        cfg = cls()
        cfg.input_pptx = user_input_dir() / "sample_slides.pptx"
        return cfg

    # endregion

    # region from_toml
    @classmethod
    def from_toml(cls, path: Path) -> UserConfig:
        """
        Load configuration from a TOML file.

        The TOML file should have flat key-value pairs matching the UserConfig field names.

        Example TOML:
            input_pptx = "~/talks/q3-review.pptx"
            write_html = true
            initial_zoom = 80

        Args:
            path: Path to the .toml config file

        Returns:
            UserConfig: Populated configuration object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If TOML is invalid
        """
        path = Path(path)
        if not path.exists():
            error_msg = f"Config file not found: {path}"
            log.error(error_msg)
            raise FileNotFoundError(error_msg)
        if path.is_dir():
            error_msg = f"This is a directory (folder), not a toml file: {path}"
            log.error(error_msg)
            raise ValueError(error_msg)

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML syntax in {path}. Check for missing or mismatched quote marks."
            log.error(error_msg)
            raise ValueError(error_msg) from e
        except PermissionError as e:
            error_msg = f"We hit a permission error when trying to access {path}"
            log.error(error_msg)
            raise ValueError(error_msg) from e

        # An empty file is allowed; every field keeps its default.
        if not data:
            log.warning(
                f"Config toml file loaded as empty, so no UserConfig fields were set from: {path}."
            )

        valid_fields = {f.name for f in fields(cls)}
        unexpected = set(data.keys()) - valid_fields

        if unexpected:
            log.warning(
                f"Ignoring unexpected fields in TOML config: {', '.join(sorted(unexpected))}. "
                f"Check for typos. Valid fields: {', '.join(sorted(valid_fields))}"
            )
            data = {k: v for k, v in data.items() if k in valid_fields}

        return cls(**data)

    # endregion

    # endregion

    # region get real Path objects from stored cfg values
    def get_input_pptx_file(self) -> Path | None:
        """Input presentation path, expanded and absolute, or None if not specified."""
        if self.input_pptx:
            return resolve_path(self.input_pptx)
        return None

    def get_output_folder(self) -> Path:
        """Output folder, with fallback to ~/Documents/slides2scene/output/."""
        if self.output_folder:
            return resolve_path(self.output_folder)
        return user_output_dir()

    # endregion

    # region save_toml
    def save_toml(self, path: Path) -> None:
        """
        Save configuration to a TOML file.

        Args:
            path: Where to save the .toml file
        """
        path = Path(path)

        if path.exists() and path.is_dir():
            error_msg = f"Cannot save config: path is a directory, not a file: {path}."
            log.error(error_msg)
            raise ValueError(error_msg)

        path.parent.mkdir(parents=True, exist_ok=True)

        # TOML has no null; unset fields are simply left out.
        data: dict[str, Any] = {
            k: v for k, v in self.config_to_dict().items() if v is not None
        }
        log.debug(f"Data to be written to toml file is: \n{data}")

        try:
            log.info(f"Attempting to save to {path}")
            with open(path, "wb") as f:
                tomli_w.dump(data, f)
            log.info(f"Saved toml config file at {path}")
        except PermissionError as e:
            error_msg = f"Permission denied writing to: {path}"
            log.error(error_msg)
            raise PermissionError(error_msg) from e
        except OSError as e:
            error_msg = f"Failed to write config file to {path}"
            log.error(error_msg)
            raise OSError(error_msg) from e

    # endregion

    # region config_to_dict
    def config_to_dict(self) -> dict[str, Any]:
        """Convert config to a TOML-serializable dict.
        Paths are written with forward slashes to avoid TOML escape sequence issues.
        """
        return {
            "input_pptx": self.input_pptx.as_posix() if self.input_pptx else None,
            "output_folder": (
                self.output_folder.as_posix() if self.output_folder else None
            ),
            "write_json": self.write_json,
            "write_html": self.write_html,
            "initial_zoom": self.initial_zoom,
            "debug_mode": self.debug_mode,
        }

    # endregion

    # region instance validation methods
    def pre_run_check(self) -> None:
        """
        Validate everything needed for a pipeline run.
        Combines intrinsic and external validation in one place.
        """
        self.validate()
        self.validate_pipeline_requirements()

    def validate(self) -> None:
        """
        Validate intrinsic config values (no filesystem access).

        Catches wrong types (e.g. a quoted "true" in TOML), a missing input,
        and a zoom outside the navigator's range.
        """
        if not self.input_pptx:
            log.error("No input file specified")
            raise ValueError("No input file provided: input_pptx must be set.")

        bool_fields = ["write_json", "write_html", "debug_mode"]
        for field_name in bool_fields:
            val = getattr(self, field_name)
            if not isinstance(val, bool):
                log.error(f"{field_name} must be a boolean, got {type(val).__name__}")
                raise ValueError(
                    f"{field_name} must be a boolean, got {type(val).__name__}"
                )

        if not self.write_json and not self.write_html:
            log.error("Both write_json and write_html are off")
            raise ValueError(
                "Nothing to write: enable at least one of write_json or write_html."
            )

        # bool is an int subclass; True is not a zoom level.
        if isinstance(self.initial_zoom, bool) or not isinstance(self.initial_zoom, int):
            log.error(
                f"initial_zoom must be an integer, got {type(self.initial_zoom).__name__}"
            )
            raise ValueError(
                f"initial_zoom must be an integer, got {type(self.initial_zoom).__name__}"
            )
        if not constants.ZOOM_MIN <= self.initial_zoom <= constants.ZOOM_MAX:
            error_msg = f"initial_zoom must be between {constants.ZOOM_MIN} and {constants.ZOOM_MAX}, got {self.initial_zoom}"
            log.error(error_msg)
            raise ValueError(error_msg)

    def validate_pipeline_requirements(self) -> None:
        """
        Validate external state right before a run: the input exists and is a file, and the
        output path is usable as a folder.
        """
        input_path = self.get_input_pptx_file()
        if input_path is None:
            log.error("No input pptx file specified.")
            raise ValueError(
                "No input pptx file specified. Please set input_pptx before running the pipeline."
            )

        if not input_path.exists():
            error_msg = f"Input pptx file not found: {input_path}"
            log.error(error_msg)
            raise FileNotFoundError(error_msg)

        if not input_path.is_file():
            error_msg = f"Input pptx is not a file: {input_path}"
            log.error(error_msg)
            raise ValueError(error_msg)

        output_folder = self.get_output_folder()
        if output_folder.exists() and not output_folder.is_dir():
            error_msg = f"Output path exists but is not a directory: {output_folder}"
            log.error(error_msg)
            raise ValueError(error_msg)

    # endregion


# endregion


# region environment overrides
_BOOL_WORDS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def parse_bool(value: str) -> bool:
    """Read an environment-style boolean such as "1", "Yes" or "off"."""
    try:
        return _BOOL_WORDS[value.strip().lower()]
    except KeyError:
        raise ValueError(f"{value!r} is not a boolean (try 1/0, true/false, yes/no, on/off)") from None


def debug_mode_from_env() -> bool:
    """
    Debug mode requested through SLIDES2SCENE_DEBUG.

    An unreadable value is reported and ignored rather than stopping startup.
    """
    raw = os.environ.get(constants.DEBUG_ENV_VAR)
    if raw is None:
        return constants.DEBUG_MODE_DEFAULT

    try:
        return parse_bool(raw)
    except ValueError as e:
        log.warning(f"Ignoring {constants.DEBUG_ENV_VAR}: {e}. Using default.")
        return constants.DEBUG_MODE_DEFAULT


# endregion
