from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Any, Iterable, Union

from yamlcat.errors import SourceReadError
from yamlcat.output import SinkWriter
from yamlcat.strategies import DocumentStrategy, ReserializeStrategy, build_strategy
from yamlcat.types import ConcatStats, FileSummary, Strategy

logger = logging.getLogger(__name__)

PathArg = Union[str, "os.PathLike[str]"]


class YamlConcatenator:
    """
    Concatenate YAML files into one multi-document stream.

    Files are handled strictly one at a time and in the order given. Each file is opened only
    while its own documents are being written, and the first unreadable file or malformed
    document aborts the run. Whatever already reached the sink stays there.
    """

    def __init__(
        self,
        strategy: DocumentStrategy | None = None,
        *,
        encoding: str = "utf-8",
    ) -> None:
        self.strategy = strategy or ReserializeStrategy()
        self.encoding = encoding

    def run(self, paths: Iterable[PathArg], sink: IO[Any]) -> ConcatStats:
        stats = ConcatStats()
        writer = SinkWriter(sink, encoding=self.encoding)
        logger.info("Starting concatenation", extra={"strategy": type(self.strategy).__name__})

        for raw_path in paths:
            summary = self._concatenate_file(Path(raw_path), writer)
            stats.add(summary)
            if summary.skipped:
                logger.debug("Source contributed no documents", extra={"path": str(summary.path)})

        logger.info(
            "Concatenation finished",
            extra={**stats.__dict__, "written": writer.written},
        )
        return stats

    def _concatenate_file(self, path: Path, writer: SinkWriter) -> FileSummary:
        try:
            with path.open("rb") as stream:
                return self.strategy.emit(path, stream, writer)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError(path, exc) from exc


def concatenate(
    paths: Iterable[PathArg],
    sink: IO[Any],
    strategy: Strategy | str = Strategy.RESERIALIZE,
    *,
    encoding: str = "utf-8",
    sort_keys: bool = False,
) -> None:
    """Write every non-empty document of every file in `paths` to `sink`, each behind one `---`."""

    YamlConcatenator(build_strategy(strategy, sort_keys=sort_keys), encoding=encoding).run(paths, sink)
