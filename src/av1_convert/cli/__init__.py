# SPDX-FileCopyrightText: 2025-present linuxdaemon <linuxdaemon.irc@gmail.com>
#
# SPDX-License-Identifier: MIT
from pathlib import Path

import click

from av1_convert._version import __version__
from av1_convert.av1_convert import run
from av1_convert.config import DEFAULT_CONFIG_FILE, load_config
from av1_convert.errors import ConfigReadError, ScanError
from av1_convert.logging_utils import setup_logging


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="av1-convert")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="JSON file with BasePath, OutputPath and FfmpegPath.",
)
@click.option(
    "--date-dirs",
    is_flag=True,
    help=(
        "Only scan yyyymmdd-named directories directly under BasePath "
        "and write each output next to its input."
    ),
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors.")
def av1_convert(
    config_file: Path,
    date_dirs: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    logger = setup_logging(verbose=verbose, quiet=quiet)
    logger.info("Starting av1-convert %s", __version__)

    try:
        config = load_config(config_file, require_output=not date_dirs)
    except ConfigReadError as e:
        msg = f"Failed to load configuration: {e}"
        raise click.ClickException(msg) from e

    logger.info(
        "Configuration loaded: BasePath=%r, OutputPath=%r, FfmpegPath=%r",
        str(config.base_path),
        str(config.output_path) if config.output_path else None,
        config.encoder_path,
    )

    try:
        run(config, date_dirs=date_dirs)
    except ScanError as e:
        msg = f"Failed to search for video files: {e}"
        raise click.ClickException(msg) from e

    logger.info("Exiting")
