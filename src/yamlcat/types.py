from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class Strategy(str, Enum):
    """How documents are carried from an input file to the sink."""

    RESERIALIZE = "reserialize"
    PASSTHROUGH = "passthrough"


@dataclass(slots=True)
class FileSummary:
    path: Path
    documents: int = 0
    dropped: int = 0

    @property
    def skipped(self) -> bool:
        return self.documents == 0


@dataclass
class ConcatStats:
    """Run counters returned to the CLI and tests."""

    files: int = 0
    skipped_files: int = 0
    documents: int = 0
    dropped_documents: int = 0

    def add(self, summary: FileSummary) -> None:
        self.files += 1
        self.documents += summary.documents
        self.dropped_documents += summary.dropped
        if summary.skipped:
            self.skipped_files += 1


@dataclass(frozen=True)
class TaggedValue:
    """A value carrying an application tag such as ``!Ref``, kept as-is through reserialization."""

    tag: str
    value: Any
