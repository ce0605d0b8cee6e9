"""CLI Interface Logic (argparse etc)"""

import argparse
import logging
from dataclasses import fields
from pathlib import Path

from slides2scene.internals import constants
from slides2scene.internals.define_config import UserConfig
from slides2scene.orchestrator import run_pipeline

log = logging.getLogger("slides2scene")

# CLI-only switches that have no UserConfig counterpart.
CLI_ONLY_ARGS = ["help", "config", "demo", "save_config"]


def run() -> list[Path]:
    """Run CLI interface. Assumes startup.initialize_application() was already called."""
    args = parse_args()

    # Priority: CLI args > config file > defaults
    cfg = build_config_from_args(args)

    if args.save_config:
        cfg.save_toml(Path(args.save_config))

    return run_pipeline(cfg)


def parse_args() -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns argparse.Namespace with all the UserConfig fields as attributes.
    Validates that all config fields have corresponding CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="slides2scene",
        description="Reconstruct the layout of a PowerPoint pptx file as a JSON scene graph and an HTML preview",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # See a demo run with the sample deck
  slides2scene --demo

  # Render a real file with defaults
  slides2scene --input-pptx talk.pptx

  # Use config file
  slides2scene --config path/to/my_settings.toml

  # Override config file settings
  slides2scene --config settings.toml --no-html --initial-zoom 80
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        dest="demo",
        help="Render the sample deck from ~/Documents/slides2scene/input/. Other options still apply.",
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to TOML configuration file. See ~/Documents/slides2scene/configs/sample_config.toml after at least 1 run",
    )
    parser.add_argument(
        "--save-config",
        type=str,
        dest="save_config",
        metavar="PATH",
        help="Also save the effective configuration of this run to a TOML file",
    )

    # Input/Output
    parser.add_argument(
        "--input-pptx",
        type=str,
        dest="input_pptx",
        metavar="PATH",
        help="Input PowerPoint file (.pptx file)",
    )
    parser.add_argument(
        "--output-folder",
        type=str,
        dest="output_folder",
        metavar="PATH",
        help="Output folder for the scene JSON and HTML preview",
    )

    parser.add_argument(
        "--initial-zoom",
        metavar="PERCENT",
        type=int,
        dest="initial_zoom",
        help=f"Zoom of the slide canvases in the HTML preview, {constants.ZOOM_MIN}-{constants.ZOOM_MAX} (default: {constants.ZOOM_DEFAULT})",
    )

    # Boolean flags default to None so "not given" can't be confused with "turned off".
    json_group = parser.add_mutually_exclusive_group()
    json_group.add_argument(
        "--json",
        action="store_true",
        dest="write_json",
        default=None,
        help="Write the scene graph as JSON (default: enabled)",
    )
    json_group.add_argument(
        "--no-json",
        action="store_false",
        dest="write_json",
        default=None,
        help="Do not write the scene graph JSON",
    )

    html_group = parser.add_mutually_exclusive_group()
    html_group.add_argument(
        "--html",
        action="store_true",
        dest="write_html",
        default=None,
        help="Write a standalone HTML preview (default: enabled)",
    )
    html_group.add_argument(
        "--no-html",
        action="store_false",
        dest="write_html",
        default=None,
        help="Do not write the HTML preview",
    )

    debug_group = parser.add_mutually_exclusive_group()
    debug_group.add_argument(
        "--debug",
        action="store_true",
        dest="debug_mode",
        default=None,
        help="Write a trace log with file/function/line for every record (default: disabled)",
    )
    debug_group.add_argument(
        "--no-debug",
        action="store_false",
        dest="debug_mode",
        default=None,
        help="Do not write the trace log",
    )

    _validate_args_match_config(parser)

    return parser.parse_args()


def build_config_from_args(args: argparse.Namespace) -> UserConfig:
    """
    Build UserConfig from parsed arguments with proper priority.

    Priority order (highest to lowest):
    1. CLI arguments (if explicitly provided)
    2. Config file values (if --config provided)
    3. UserConfig defaults (the sample deck when no input is given at all)

    Args:
        args: Parsed command line arguments

    Returns:
        UserConfig instance with all values set
    """
    if args.config:
        config_path = Path(args.config)
        log.info(f"Loading config from {config_path}")
        cfg = UserConfig.from_toml(config_path)
    elif args.demo or args.input_pptx is None:
        log.info("No input given; populating input fields with sample defaults.")
        cfg = UserConfig.with_defaults()
    else:
        cfg = UserConfig()

    # Only explicitly provided args override; every dest defaults to None.
    if args.input_pptx is not None:
        cfg.input_pptx = Path(args.input_pptx)
    if args.output_folder is not None:
        cfg.output_folder = Path(args.output_folder)
    if args.initial_zoom is not None:
        cfg.initial_zoom = args.initial_zoom  # argparse already validated it's an int

    if args.write_json is not None:
        cfg.write_json = args.write_json
    if args.write_html is not None:
        cfg.write_html = args.write_html
    if args.debug_mode is not None:
        cfg.debug_mode = args.debug_mode

    cfg.validate()

    return cfg


def _validate_args_match_config(parser: argparse.ArgumentParser) -> None:
    """
    Ensure all UserConfig fields have corresponding CLI arguments.

    This catches cases where someone adds a field to UserConfig
    but forgets to add the corresponding CLI argument (or vice versa).

    Raises:
        RuntimeError: If there's a mismatch between config fields and CLI args
    """
    config_fields = {f.name for f in fields(UserConfig)}

    arg_names = {
        action.dest for action in parser._actions if action.dest not in CLI_ONLY_ARGS
    }

    missing_in_args = config_fields - arg_names
    extra_in_args = arg_names - config_fields

    if missing_in_args:
        log.error(
            "UserConfig fields must have corresponding arg added to cli.parse_args() to ensure parity between interfaces."
        )
        raise RuntimeError(
            f"CLI arguments missing for UserConfig fields: {missing_in_args}\n"
            "These config fields need corresponding arguments added to parse_args()"
        )

    if extra_in_args:
        log.error(
            "Unexpected CLI args that do not match UserConfig fields. New args must either get a "
            "matching UserConfig field, or be added to CLI_ONLY_ARGS if they are truly CLI-specific."
        )
        raise RuntimeError(
            f"CLI arguments don't match UserConfig fields: {extra_in_args}\n"
            "Either remove these CLI args or add corresponding fields to UserConfig"
        )


def main() -> None:
    """Development entry point - run CLI directly with `python -m slides2scene.cli`"""
    from slides2scene import startup

    log = startup.initialize_application()
    try:
        run()
    except Exception:
        log.exception("Fatal error in CLI")
        raise


if __name__ == "__main__":
    main()
