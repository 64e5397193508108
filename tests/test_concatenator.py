from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from yamlcat import (
    SinkWriteError,
    SourceReadError,
    Strategy,
    YamlCatError,
    YamlConcatenator,
    concatenate,
)
from yamlcat.strategies import PassthroughStrategy, ReserializeStrategy, build_strategy

FIXTURES = Path(__file__).resolve().parent.parent / "data" / "fixtures"


class _BrokenSink(io.RawIOBase):
    def writable(self) -> bool:
        return True

    def write(self, _data) -> int:
        raise BrokenPipeError(32, "Broken pipe")


def test_build_strategy_accepts_names_and_members():
    assert isinstance(build_strategy("passthrough"), PassthroughStrategy)
    assert isinstance(build_strategy(Strategy.RESERIALIZE), ReserializeStrategy)
    assert build_strategy("reserialize", sort_keys=True).sort_keys is True
    with pytest.raises(ValueError):
        build_strategy("json")


def test_default_strategy_is_reserialize():
    assert isinstance(YamlConcatenator().strategy, ReserializeStrategy)


@pytest.mark.parametrize("strategy", list(Strategy))
def test_run_reports_stats(strategy):
    paths = [
        FIXTURES / "regular.yaml",
        FIXTURES / "empty.yaml",
        FIXTURES / "mixed-null.yaml",
        FIXTURES / "empty-2-sep.yaml",
    ]
    stats = YamlConcatenator(build_strategy(strategy)).run(paths, io.BytesIO())

    assert stats.files == 4
    assert stats.skipped_files == 2
    if strategy is Strategy.RESERIALIZE:
        assert stats.documents == 3
        assert stats.dropped_documents == 4
    else:
        assert stats.documents == 5
        assert stats.dropped_documents == 0


@pytest.mark.parametrize("strategy", list(Strategy))
def test_missing_file_aborts_after_earlier_output(tmp_path, strategy):
    regular = tmp_path / "a.yaml"
    regular.write_text("a: 1\n")
    missing = tmp_path / "missing.yaml"
    never_read = tmp_path / "b.yaml"
    never_read.write_text("b: 2\n")
    sink = io.BytesIO()

    with pytest.raises(SourceReadError) as excinfo:
        concatenate([regular, missing, never_read], sink, strategy)

    assert excinfo.value.path == missing
    assert isinstance(excinfo.value.cause, FileNotFoundError)
    assert str(missing) in str(excinfo.value)
    assert sink.getvalue() == b"---\na: 1\n"


def test_directory_is_a_read_error(tmp_path):
    with pytest.raises(SourceReadError):
        concatenate([tmp_path], io.BytesIO())


def test_errors_share_a_base_class(tmp_path):
    with pytest.raises(YamlCatError):
        concatenate([tmp_path / "missing.yaml"], io.BytesIO())


def test_sink_failures_are_not_reported_as_read_errors():
    with pytest.raises(SinkWriteError) as excinfo:
        concatenate([FIXTURES / "regular.yaml"], _BrokenSink())
    assert isinstance(excinfo.value.cause, BrokenPipeError)


@pytest.mark.parametrize("strategy", list(Strategy))
def test_text_sink(tmp_path, strategy):
    source = tmp_path / "unicode.yaml"
    source.write_text("greeting: héllo\n", encoding="utf-8")
    sink = io.StringIO()

    concatenate([source], sink, strategy)

    assert sink.getvalue() == "---\ngreeting: héllo\n"


def test_undecodable_bytes_for_text_sink(tmp_path):
    source = tmp_path / "latin1.yaml"
    source.write_bytes("greeting: héllo\n".encode("latin-1"))

    with pytest.raises(SourceReadError):
        concatenate([source], io.StringIO(), Strategy.PASSTHROUGH)


def test_accepts_string_paths_and_generators():
    paths = (str(FIXTURES / name) for name in ("regular-start-sep.yaml", "regular-end-sep.yaml"))
    sink = io.BytesIO()
    concatenate(paths, sink)
    assert sink.getvalue() == b"---\nname: gamma\nlabels:\n  tier: backend\n---\nname: delta\nreplicas: 1\n"


def test_each_file_is_closed_before_the_next_is_opened(monkeypatch):
    open_handles: list[io.BufferedReader] = []
    real_open = Path.open

    def tracking_open(self, *args, **kwargs):
        assert all(handle.closed for handle in open_handles)
        handle = real_open(self, *args, **kwargs)
        open_handles.append(handle)
        return handle

    monkeypatch.setattr(Path, "open", tracking_open)
    concatenate([FIXTURES / "regular.yaml"] * 3, io.BytesIO(), Strategy.PASSTHROUGH)

    assert len(open_handles) == 3
    assert all(handle.closed for handle in open_handles)


def test_dropped_documents_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="yamlcat"):
        concatenate([FIXTURES / "empty-1-sep.yaml"], io.BytesIO())

    messages = [record.getMessage() for record in caplog.records]
    assert "Dropping null document" in messages
    assert "Source contributed no documents" in messages
    assert "Concatenation finished" in messages


def test_separators_use_configured_encoding(tmp_path):
    source = tmp_path / "utf16.yaml"
    source.write_bytes("a: 1\n".encode("utf-16-le"))
    sink = io.BytesIO()

    concatenate([source], sink, Strategy.RESERIALIZE, encoding="utf-16-le")

    assert sink.getvalue() == "---\na: 1\n".encode("utf-16-le")
