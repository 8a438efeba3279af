#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main CLI entry point for the Image Finder tool.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import CONFIG_FILE_NAME, COLLISION_POLICIES
from .errors import StructuralError
from .processing.pipeline import ImagePipeline
from .prompt import confirm, stderr_input, stderr_print
from .reporting import emit_json, enable_json_logging, report_stats, setup_logging
from .settings import load_settings, write_default_settings


def create_parser():
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="image-finder",
        description="Find images above a minimum resolution and collect them in one directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Write a config file, edit it when prompted, then run
  %(prog)s run

  # Run non-interactively from an existing config
  %(prog)s run --config my_config.json --yes

  # Override config values on the command line
  %(prog)s run --yes --directory ~/Pictures --min-width 1920 --min-height 1080 --preference wide

  # Only write the default config file
  %(prog)s init-config --out my_config.json
        """
    )

    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose (DEBUG) output")
    parser.add_argument("--json", action="store_true",
                        help="Output the run summary as JSON instead of log lines")
    parser.add_argument("--log-file",
                        help="Also write log output to this file")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")
    _add_run_parser(subparsers)
    _add_init_config_parser(subparsers)
    return parser


def _add_run_parser(subparsers):
    """Add run command parser."""
    run_parser = subparsers.add_parser("run", help="Search directories and collect matching images")
    run_parser.add_argument("--config",
                            help=f"Existing JSON config to use (default: ./{CONFIG_FILE_NAME} if present, "
                                 "otherwise a temporary one written there and deleted afterwards)")
    run_parser.add_argument("--yes", "-y", action="store_true",
                            help="Skip the confirmation prompt")
    run_parser.add_argument("--min-width", type=int, help="Minimum image width in pixels")
    run_parser.add_argument("--min-height", type=int, help="Minimum image height in pixels")
    run_parser.add_argument("--preference", help="Aspect preference: wide, tall or none")
    run_parser.add_argument("--destination", dest="copy_destination",
                            help="Directory accepted images are copied into")
    run_parser.add_argument("--directory", dest="directories", action="append",
                            help="Directory to search (repeatable)")
    run_parser.add_argument("--workers", type=int, help="Number of worker threads")
    run_parser.add_argument("--format", dest="output_format",
                            help="Output format: copies or names")
    run_parser.add_argument("--collision-policy", choices=sorted(COLLISION_POLICIES),
                            help="How same-named files from different folders are stored")
    run_parser.add_argument("--no-progress", action="store_true",
                            help="Disable the progress bar")


def _add_init_config_parser(subparsers):
    """Add init-config command parser."""
    init_parser = subparsers.add_parser("init-config", help="Write the default config file")
    init_parser.add_argument("--out", default=CONFIG_FILE_NAME,
                             help=f"Output path (default: {CONFIG_FILE_NAME})")


def cmd_run(args) -> int:
    """
    Run the pipeline.

    Without --config, a default config file is written, offered for editing
    and deleted afterwards. An existing file of that name (e.g. one made by
    init-config) is used as is and never overwritten or deleted.
    """
    config_path = Path(args.config) if args.config else Path(CONFIG_FILE_NAME)
    transient = args.config is None and not config_path.exists()
    if args.config is None and not transient:
        logging.info("Using existing config %s; it will be kept.", config_path)

    try:
        if transient:
            logging.info("Creating default configuration.")
            write_default_settings(config_path)
            logging.info("Wrote config to %s", config_path)

            if not args.yes:
                logging.info("Waiting for user input.")
                if args.json:
                    proceed = confirm(config_path, input_fn=stderr_input, output_fn=stderr_print)
                else:
                    proceed = confirm(config_path)
                if not proceed:
                    logging.info("Operation canceled.")
                    if args.json:
                        emit_json("run", "canceled")
                    return 0

        logging.info("Reading config from %s", config_path)
        settings = load_settings(config_path).with_overrides(
            min_width=args.min_width,
            min_height=args.min_height,
            preference=args.preference,
            copy_destination=args.copy_destination,
            directories=args.directories,
            workers=args.workers,
            output_format=args.output_format,
            collision_policy=args.collision_policy,
        )
        config = settings.resolve()
        logging.info("Running with config data: %s", config)

        show_progress = not (args.no_progress or args.json)
        stats = ImagePipeline(config, show_progress=show_progress).run()
    finally:
        if transient and config_path.exists():
            logging.warning("Deleting config file %s", config_path)
            config_path.unlink()

    report_stats(stats, as_json=args.json)
    return 0


def cmd_init_config(args) -> int:
    path = write_default_settings(Path(args.out))
    if args.json:
        emit_json("init-config", "success", data={"path": str(path)})
    else:
        logging.info("Wrote default config to %s", path)
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.json:
        enable_json_logging(args.log_file)
    else:
        setup_logging(args.verbose, args.log_file)

    logging.debug("Parsed arguments: %s", args)

    try:
        if args.command == "run":
            return cmd_run(args)
        elif args.command == "init-config":
            return cmd_init_config(args)
    except StructuralError as e:
        if args.json:
            emit_json(args.command, "error", message=str(e))
        else:
            logging.error("An error occurred when running the program: %s", e)
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation interrupted by user.")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
