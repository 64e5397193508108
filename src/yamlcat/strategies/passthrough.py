from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import BinaryIO

from yamlcat.output import SinkWriter
from yamlcat.strategies.base import DocumentStrategy
from yamlcat.types import FileSummary

logger = logging.getLogger(__name__)

_BLANK = "blank"
_SEPARATOR = "separator"
_CONTENT = "content"


class PassthroughStrategy(DocumentStrategy):
    """
    Copy the original bytes of each file, adding a leading separator only where one is missing.

    Boundaries are found by looking at whole lines: a line is a separator when it is exactly
    ``---`` once surrounding whitespace is stripped. A ``---`` line inside a block scalar is
    therefore mistaken for a separator, and interior documents that are null (``~``, comments
    only) are copied as they are.
    """

    def emit(self, path: Path, stream: BinaryIO, writer: SinkWriter) -> FileSummary:
        summary = FileSummary(path=path)
        if not self._copy_lead(stream, writer):
            logger.debug("Skipping empty source", extra={"path": str(path)})
            return summary
        summary.documents = 1 + self._copy_body(stream, writer)
        writer.end_line()
        return summary

    @staticmethod
    def _copy_lead(stream: BinaryIO, writer: SinkWriter) -> bool:
        """
        Consume the blank/separator prelude up to the first content line and write it out
        behind exactly one separator.

        Returns False, having written nothing, when the file holds no content at all.
        """

        prelude: list[bytes] = []
        for number, line in enumerate(iter(stream.readline, b"")):
            if number == 0:
                # A byte-order mark may only open the stream, never a later document.
                line = line.removeprefix(codecs.BOM_UTF8)
            if _classify(line) != _CONTENT:
                prelude.append(line)
                continue

            separators = [idx for idx, held in enumerate(prelude) if _classify(held) == _SEPARATOR]
            if separators:
                prelude = prelude[separators[-1]:]
            else:
                writer.write_separator()
            for held in prelude:
                writer.write_bytes(held)
            writer.write_bytes(line)
            return True
        return False

    @staticmethod
    def _copy_body(stream: BinaryIO, writer: SinkWriter) -> int:
        """Copy the rest of the file verbatim, holding back separator lines until content follows."""

        extra_documents = 0
        pending: list[bytes] = []
        for line in iter(stream.readline, b""):
            if _classify(line) != _CONTENT:
                pending.append(line)
                continue
            extra_documents += sum(1 for held in pending if _classify(held) == _SEPARATOR)
            for held in pending:
                writer.write_bytes(held)
            pending.clear()
            writer.write_bytes(line)

        # Blank lines before a trailing separator still belong to the last document.
        for held in pending:
            if _classify(held) == _SEPARATOR:
                break
            writer.write_bytes(held)
        return extra_documents


def _classify(line: bytes) -> str:
    stripped = line.strip()
    if not stripped:
        return _BLANK
    if stripped == b"---":
        return _SEPARATOR
    return _CONTENT
