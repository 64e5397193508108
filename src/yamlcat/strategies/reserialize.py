from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, BinaryIO

import yaml

from yamlcat.errors import DocumentParseError
from yamlcat.output import SinkWriter
from yamlcat.strategies.base import DocumentStrategy
from yamlcat.types import FileSummary, TaggedValue

logger = logging.getLogger(__name__)


class TagPreservingLoader(yaml.SafeLoader):
    """Safe loader that wraps application (``!``-prefixed) tags instead of rejecting them."""


class TagPreservingDumper(yaml.SafeDumper):
    pass


def _construct_tagged(loader: TagPreservingLoader, suffix: str, node: yaml.Node) -> TaggedValue:
    if isinstance(node, yaml.ScalarNode):
        value: Any = loader.construct_scalar(node)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)
    return TaggedValue(tag=f"!{suffix}", value=value)


def _represent_tagged(dumper: TagPreservingDumper, data: TaggedValue) -> yaml.Node:
    if isinstance(data.value, dict):
        return dumper.represent_mapping(data.tag, data.value)
    if isinstance(data.value, list):
        return dumper.represent_sequence(data.tag, data.value)
    return dumper.represent_scalar(data.tag, data.value)


TagPreservingLoader.add_multi_constructor("!", _construct_tagged)
TagPreservingDumper.add_representer(TaggedValue, _represent_tagged)


class ReserializeStrategy(DocumentStrategy):
    """
    Parse each document into plain Python values and dump it back canonically.

    Null documents (including empty ones between two separators) are dropped. Comments and
    original formatting are not preserved; application tags are.
    """

    def __init__(self, *, sort_keys: bool = False) -> None:
        self.sort_keys = sort_keys

    def emit(self, path: Path, stream: BinaryIO, writer: SinkWriter) -> FileSummary:
        summary = FileSummary(path=path)
        text = io.TextIOWrapper(stream, encoding=writer.encoding)
        try:
            for index, value in enumerate(yaml.load_all(text, Loader=TagPreservingLoader)):
                if value is None:
                    summary.dropped += 1
                    logger.debug("Dropping null document", extra={"path": str(path), "index": index})
                    continue
                writer.write_separator()
                writer.write_text(self.dump(value))
                summary.documents += 1
        except yaml.YAMLError as exc:
            raise DocumentParseError(path, summary.documents + summary.dropped, exc) from exc
        finally:
            # Hand the binary handle back so its owner closes it.
            text.detach()
        return summary

    def dump(self, value: Any) -> str:
        return yaml.dump(
            value,
            Dumper=TagPreservingDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=self.sort_keys,
        )
