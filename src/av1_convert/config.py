import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from av1_convert.errors import (
    ConfigParseError,
    ConfigReadError,
    DirectoryCreateError,
    ExecutableNotFoundError,
    MissingFieldError,
    PathNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_FFMPEG = "ffmpeg"


@dataclass(frozen=True)
class Config:
    base_path: Path
    encoder_path: str = DEFAULT_FFMPEG
    output_path: Path | None = None


def _read_json(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Error reading config file {str(path)!r}: {e}"
        raise ConfigReadError(msg) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Error parsing JSON in config file {str(path)!r}: {e}"
        raise ConfigParseError(msg) from e

    if not isinstance(data, dict):
        msg = f"Config file {str(path)!r} must contain a JSON object, got {type(data).__name__}"
        raise ConfigParseError(msg)

    for key in ("BasePath", "OutputPath", "FfmpegPath"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            msg = f"{key!r} must be a string, got {type(value).__name__}"
            raise ConfigParseError(msg)

    return data


def check_encoder(encoder_path: str) -> None:
    """Make sure the encoder can be found on PATH or as a literal file."""
    if shutil.which(encoder_path) is not None:
        return

    path = Path(encoder_path)
    try:
        path.stat()
    except FileNotFoundError as e:
        msg = (
            f"FfmpegPath {encoder_path!r} could not be found, "
            "check PATH or set the full path to the executable"
        )
        raise ExecutableNotFoundError(msg) from e
    except OSError as e:
        msg = f"Error checking FfmpegPath {encoder_path!r}: {e}"
        raise ExecutableNotFoundError(msg) from e

    logger.warning(
        "FfmpegPath %r exists but could not be confirmed executable, "
        "check PATH or file permissions",
        encoder_path,
    )


def load_config(
    config_file: str | Path = DEFAULT_CONFIG_FILE,
    *,
    require_output: bool = False,
) -> Config:
    """Load and validate the JSON configuration file.

    ``require_output`` selects the variant where converted files are written
    to a fixed ``OutputPath`` directory, which is then required and created
    when missing. Every failure raises a subclass of ``ConfigReadError``.
    """
    config_file = Path(config_file)
    logger.debug("Loading configuration from %s", config_file)
    data = _read_json(config_file)

    base_path = data.get("BasePath") or ""
    output_path = data.get("OutputPath") or ""
    encoder_path = data.get("FfmpegPath") or ""

    if not base_path:
        raise MissingFieldError("BasePath")

    if require_output and not output_path:
        raise MissingFieldError("OutputPath")

    if not encoder_path:
        logger.warning(
            "'FfmpegPath' is not set in the config file, "
            "using default %r (searched on PATH)",
            DEFAULT_FFMPEG,
        )
        encoder_path = DEFAULT_FFMPEG

    base = Path(base_path)
    if not base.exists():
        msg = f"BasePath {base_path!r} does not exist"
        raise PathNotFoundError(msg)

    if not base.is_dir():
        msg = f"BasePath {base_path!r} is not a directory"
        raise PathNotFoundError(msg)

    output: Path | None = None
    if require_output:
        output = Path(output_path)
        if output.exists() and not output.is_dir():
            msg = f"OutputPath {output_path!r} exists but is not a directory"
            raise DirectoryCreateError(msg)

        try:
            output.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Failed to create OutputPath {output_path!r}: {e}"
            raise DirectoryCreateError(msg) from e

    check_encoder(encoder_path)

    return Config(
        base_path=base,
        encoder_path=encoder_path,
        output_path=output,
    )
