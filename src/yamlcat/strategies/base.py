from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol

from yamlcat.output import SinkWriter
from yamlcat.types import FileSummary


class DocumentStrategy(Protocol):
    """Interface for carrying the documents of one opened input file to the sink."""

    def emit(self, path: Path, stream: BinaryIO, writer: SinkWriter) -> FileSummary:
        """Write every non-empty document of `stream`, each behind exactly one separator."""
