"""Concatenate YAML files into a single multi-document stream."""

from importlib import metadata

from yamlcat.concat import YamlConcatenator, concatenate
from yamlcat.errors import DocumentParseError, SinkWriteError, SourceReadError, YamlCatError
from yamlcat.types import ConcatStats, FileSummary, Strategy, TaggedValue

__all__ = [
    "ConcatStats",
    "DocumentParseError",
    "FileSummary",
    "SinkWriteError",
    "SourceReadError",
    "Strategy",
    "TaggedValue",
    "YamlCatError",
    "YamlConcatenator",
    "concatenate",
    "__version__",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("yamlcat")
        except metadata.PackageNotFoundError:  # pragma: no cover - package not installed yet
            return "0.0.0"
    raise AttributeError(name)
