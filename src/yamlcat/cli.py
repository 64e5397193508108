from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from yamlcat.concat import YamlConcatenator
from yamlcat.config import Settings
from yamlcat.errors import YamlCatError
from yamlcat.strategies import build_strategy
from yamlcat.types import Strategy

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool, level_name: str) -> None:
    level = logging.DEBUG if verbose else logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level {level_name!r}", param_hint="YAMLCAT_LOG_LEVEL")
    # basicConfig attaches to stderr; stdout carries nothing but the YAML stream.
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def main(
    files: Optional[List[Path]] = typer.Argument(
        None,
        help="YAML files to concatenate, in output order. The same file may be given twice.",
        show_default=False,
    ),
    strategy: Optional[Strategy] = typer.Option(
        None,
        "--strategy",
        "-s",
        case_sensitive=False,
        help="reserialize: parse and dump each document. passthrough: copy original bytes.",
    ),
    sort_keys: Optional[bool] = typer.Option(
        None,
        "--sort-keys/--no-sort-keys",
        help="Sort mapping keys when reserializing documents",
    ),
    encoding: Optional[str] = typer.Option(None, help="Text encoding of inputs and output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-file decisions to stderr"),
) -> None:
    """Concatenate multiple YAML files into a single YAML stream and write it to stdout."""

    settings = Settings()
    configure_logging(verbose, settings.log_level)

    effective_strategy = strategy or settings.strategy
    effective_sort_keys = sort_keys if sort_keys is not None else settings.sort_keys
    concatenator = YamlConcatenator(
        build_strategy(effective_strategy, sort_keys=effective_sort_keys),
        encoding=encoding or settings.encoding,
    )

    sink = typer.get_binary_stream("stdout")
    try:
        stats = concatenator.run(files or [], sink)
    except YamlCatError as exc:
        logger.debug("Concatenation aborted", exc_info=True)
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        sink.flush()

    logger.info(
        "Wrote %d documents from %d files (%d skipped)",
        stats.documents,
        stats.files,
        stats.skipped_files,
    )


if __name__ == "__main__":
    app()
