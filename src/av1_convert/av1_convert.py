import enum
import logging
import os
import re
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from av1_convert.config import Config
from av1_convert.errors import Av1ConvertError, EncodeError, ProbeError, ScanError

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = frozenset(
    {
        ".mp4",
        ".avi",
        ".mkv",
        ".mov",
        ".wmv",
        ".flv",
        ".webm",
    }
)

DATE_DIR_PATTERN = re.compile(r"\d{8}", re.ASCII)

OUTPUT_SUFFIX = "_av1.mkv"

EXE_SUFFIX = ".exe" if os.name == "nt" else ""


class Outcome(enum.Enum):
    CONVERTED = "converted"
    SKIPPED = "skipped"


@dataclass
class RunSummary:
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.succeeded + self.failed + self.skipped

    def __str__(self) -> str:
        return (
            f"succeeded={self.succeeded}, "
            f"failed={self.failed}, "
            f"skipped={self.skipped}"
        )


def match_file(file: Path) -> bool:
    return file.suffix.lower() in VIDEO_EXTENSIONS


def _log_walk_error(err: OSError) -> None:
    logger.warning("Error accessing %r: %s", err.filename, err)


def walk_paths(root: Path) -> Iterable[Path]:
    """Yield every non-directory entry below ``root``, depth first.

    Entries are visited in name order within each directory. Errors on
    individual entries are logged and the walk carries on.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath, name)


def find_video_files(root: Path) -> list[Path]:
    video_files = []
    for path in walk_paths(root.resolve()):
        if match_file(path):
            logger.debug("Found video file: %s", path)
            video_files.append(path)

    return video_files


def is_date_dir(name: str) -> bool:
    """Whether ``name`` looks like ``yyyymmdd``. The date itself is not validated."""
    return DATE_DIR_PATTERN.fullmatch(name) is not None


def find_date_dirs(root: Path) -> list[Path]:
    try:
        entries = sorted(root.resolve().iterdir())
    except OSError as e:
        msg = f"Failed to read base path {str(root)!r}: {e}"
        raise ScanError(msg) from e

    date_dirs = []
    for entry in entries:
        if entry.is_dir() and not entry.is_symlink() and is_date_dir(entry.name):
            logger.debug("Found date directory: %s", entry)
            date_dirs.append(entry)

    return date_dirs


def find_dated_video_files(root: Path) -> list[Path]:
    logger.info("Searching for yyyymmdd directories in %s", root)
    date_dirs = find_date_dirs(root)
    if not date_dirs:
        logger.info("No yyyymmdd directories found in %s", root)
        return []

    video_files: list[Path] = []
    for date_dir in date_dirs:
        logger.info("Searching for video files in %s", date_dir)
        video_files.extend(find_video_files(date_dir))

    logger.info(
        "Found %d video files in %d date directories",
        len(video_files),
        len(date_dirs),
    )
    return video_files


def ffprobe_path_for(encoder_path: str) -> str:
    """Find the ffprobe that sits next to ``encoder_path``, or fall back to PATH."""
    ffprobe = Path(encoder_path).parent / f"ffprobe{EXE_SUFFIX}"

    if not ffprobe.exists():
        logger.warning(
            "ffprobe not found at %s, looking it up on PATH instead", ffprobe
        )
        return "ffprobe"

    return str(ffprobe)


def get_video_codec(video_path: Path, encoder_path: str) -> str:
    cmd: list[str | Path] = [
        ffprobe_path_for(encoder_path),
        "-v",
        "error",
        "-select_streams",
        "v:0",
        "-show_entries",
        "stream=codec_name",
        "-of",
        "default=noprint_wrappers=1:nokey=1",
        video_path,
    ]

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise ProbeError(video_path, cmd, None, str(e)) from e

    if result.returncode != 0:
        raise ProbeError(video_path, cmd, result.returncode, result.stdout or "")

    codec = (result.stdout or "").strip()
    logger.debug("Codec of %s: %s", video_path, codec)
    return codec


def is_av1(codec: str) -> bool:
    return "av1" in codec.lower()


def output_path_for(in_path: Path, output_dir: Path | None = None) -> Path:
    if output_dir is None:
        output_dir = in_path.parent

    return output_dir / f"{in_path.stem}{OUTPUT_SUFFIX}"


def convert_video(
    file: Path,
    encoder_path: str,
    output_dir: Path | None = None,
) -> Path:
    """Run ffmpeg to encode ``file`` with the QSV AV1 encoder.

    The output is written to ``output_dir``, or next to the input when no
    directory is given, and overwritten if it already exists. ffmpeg's own
    output goes straight to our stdout/stderr. A failed run may leave a
    partial output file behind.
    """
    out_path = output_path_for(file, output_dir)
    cmd: list[str | Path] = [
        encoder_path,
        "-i",
        file,
        "-c:v",
        "av1_qsv",
        "-c:a",
        "copy",
        "-y",
        out_path,
    ]

    logger.info("Converting %s -> %s (using %s)", file, out_path, encoder_path)
    logger.debug("Running: %s", subprocess.list2cmdline([str(c) for c in cmd]))

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        raise EncodeError(file, cmd, e.returncode, e.stderr) from e
    except OSError as e:
        raise EncodeError(file, cmd, None, reason=str(e)) from e

    logger.info("Finished converting %s", out_path)
    return out_path


def handle_file(file: Path, config: Config) -> Outcome:
    try:
        codec = get_video_codec(file, config.encoder_path)
    except ProbeError as e:
        logger.warning("Could not check codec of %s, converting anyway: %s", file, e)
    else:
        if is_av1(codec):
            logger.info("Skipping %s, already AV1 (%s)", file, codec)
            return Outcome.SKIPPED

    convert_video(file, config.encoder_path, config.output_path)
    return Outcome.CONVERTED


def process_files(files: Iterable[Path], config: Config) -> RunSummary:
    summary = RunSummary()
    for file in files:
        try:
            outcome = handle_file(file, config)
        except Av1ConvertError as e:
            logger.error("Failed to convert %s: %s", file, e)
            summary.failed += 1
            continue

        if outcome is Outcome.SKIPPED:
            summary.skipped += 1
        else:
            summary.succeeded += 1

    logger.info("All done, %d files. %s", summary.total, summary)
    return summary


def run(config: Config, *, date_dirs: bool = False) -> RunSummary:
    if date_dirs:
        files = find_dated_video_files(config.base_path)
    else:
        logger.info("Searching for video files in %s", config.base_path)
        files = find_video_files(config.base_path)
        logger.info("Found %d video files", len(files))

    if not files:
        summary = RunSummary()
        logger.info("No video files to convert. %s", summary)
        return summary

    return process_files(files, config)
