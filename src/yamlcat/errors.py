from __future__ import annotations

from pathlib import Path


class YamlCatError(Exception):
    """Base class for every failure that aborts a concatenation run."""


class SourceReadError(YamlCatError):
    """An input file could not be opened, read or decoded."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"cannot read {path}: {_describe(cause)}")


class DocumentParseError(YamlCatError):
    """A document inside an input file is not valid YAML."""

    def __init__(self, path: Path, index: int, cause: BaseException) -> None:
        self.path = path
        self.index = index
        self.cause = cause
        super().__init__(f"invalid YAML in {path} (document {index}): {cause}")


class SinkWriteError(YamlCatError):
    """The output sink rejected a write."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"cannot write output: {_describe(cause)}")


def _describe(cause: BaseException) -> str:
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    return str(cause) or type(cause).__name__
