from pathlib import Path


class Av1ConvertError(Exception):
    pass


class ConfigReadError(Av1ConvertError):
    """Configuration could not be loaded; always fatal."""


class ConfigParseError(ConfigReadError):
    pass


class MissingFieldError(ConfigReadError):
    def __init__(self, field: str) -> None:
        super().__init__(f"{field!r} is not set in the configuration file")
        self.field = field


class PathNotFoundError(ConfigReadError):
    pass


class DirectoryCreateError(ConfigReadError):
    pass


class ExecutableNotFoundError(ConfigReadError):
    pass


class ScanError(Av1ConvertError):
    pass


class ProbeError(Av1ConvertError):
    def __init__(
        self,
        file: Path,
        cmd: list[str | Path],
        returncode: int | None,
        output: str,
    ) -> None:
        msg = f"Failed to get video codec for {str(file)!r}"
        if returncode is not None:
            msg += f" (exit code {returncode})"
        if output:
            msg += f": {output.strip()}"
        super().__init__(msg)
        self.file = file
        self.cmd = cmd
        self.returncode = returncode
        self.output = output


class EncodeError(Av1ConvertError):
    def __init__(
        self,
        file: Path,
        cmd: list[str | Path],
        returncode: int | None,
        stderr: str | None = None,
        reason: str | None = None,
    ) -> None:
        msg = f"ffmpeg failed for {str(file)!r}"
        if returncode is not None:
            msg += f", exit code {returncode}"
        if reason:
            msg += f": {reason}"
        if stderr:
            msg += f", error output: {stderr.strip()}"
        super().__init__(msg)
        self.file = file
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
