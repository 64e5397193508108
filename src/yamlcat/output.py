from __future__ import annotations

import io
from typing import IO, Any

from yamlcat.errors import SinkWriteError

SEPARATOR = "---\n"


class SinkWriter:
    """
    Append-only view over the caller's sink.

    Binary sinks receive raw input bytes as-is and text encoded with `encoding`; text sinks
    (``io.TextIOBase``) receive text as-is and raw bytes decoded with `encoding`. The writer never
    closes or flushes the sink, the caller owns it.
    """

    def __init__(self, sink: IO[Any], encoding: str = "utf-8") -> None:
        self._sink = sink
        self._text = isinstance(sink, io.TextIOBase)
        self.encoding = encoding
        # bytes for binary sinks, characters for text sinks
        self.written = 0
        self.at_line_start = True

    def write_bytes(self, data: bytes) -> None:
        if not data:
            return
        self._write(data.decode(self.encoding) if self._text else data)
        self.at_line_start = data.endswith(b"\n")

    def write_text(self, text: str) -> None:
        if not text:
            return
        if self._text:
            self._write(text)
        else:
            try:
                payload = text.encode(self.encoding)
            except UnicodeEncodeError as exc:
                raise SinkWriteError(exc) from exc
            self._write(payload)
        self.at_line_start = text.endswith("\n")

    def write_separator(self) -> None:
        self.write_text(SEPARATOR)

    def end_line(self) -> None:
        """Terminate a partial final line so the next separator starts on its own line."""

        if not self.at_line_start:
            self.write_text("\n")

    def _write(self, payload: str | bytes) -> None:
        try:
            self._sink.write(payload)
        except OSError as exc:
            raise SinkWriteError(exc) from exc
        self.written += len(payload)
