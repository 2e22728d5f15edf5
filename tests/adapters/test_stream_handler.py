from __future__ import annotations

import os
from io import StringIO
from pathlib import Path
from typing import Any

import pytest

from lib_log_chain.adapters.stream import STDERR, STDOUT, StreamHandler
from lib_log_chain.application.logger import Logger
from lib_log_chain.domain.errors import IOException, InvalidArgumentTypeError
from lib_log_chain.domain.levels import Level
from lib_log_chain.domain.sizes import DEFAULT_CHUNK_SIZE, MIN_CHUNK_SIZE

LINE = "Sep 23 12:00:05  ook ERROR  Ook!\n"


def test_memory_handle_receives_default_entry(memory_stream: StringIO, clock: Any) -> None:
    StreamHandler(memory_stream, clock=clock)(Level.ERROR, "ook", "Ook!")
    assert memory_stream.getvalue() == LINE


def test_caller_handle_is_available_immediately(memory_stream: StringIO) -> None:
    handler = StreamHandler(memory_stream)
    assert handler.get_stream() is memory_stream
    assert handler.owns_stream is False
    assert handler.uri is None


def test_absolute_path_is_opened_lazily(tmp_path: Path, clock: Any) -> None:
    target = tmp_path / "ook.log"
    handler = StreamHandler(str(target), clock=clock)
    assert handler.get_stream() is None
    assert handler.get_uri() == str(target)
    assert not target.exists()
    handler(Level.ERROR, "ook", "Ook!")
    assert handler.get_stream() is not None
    handler.close()
    assert target.read_text(encoding="utf-8") == LINE


def test_file_uri_with_three_slashes_is_absolute(tmp_path: Path, clock: Any) -> None:
    target = tmp_path / "ook.log"
    handler = StreamHandler(f"file://{target}", clock=clock)
    assert handler.uri == str(target)
    assert handler.uri_scheme == "file"
    handler(Level.ERROR, "ook", "Ook!")
    handler.close()
    assert target.read_text(encoding="utf-8") == LINE


@pytest.mark.parametrize("designator", ["ook/ook.log", "file:ook/ook.log", "file://ook/ook.log", "./ook/../ook/ook.log"])
def test_relative_designators_resolve_against_cwd(designator: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    handler = StreamHandler(designator)
    assert handler.uri == f"{os.getcwd()}/ook/ook.log"


def test_missing_parent_directories_are_created_on_first_write(tmp_path: Path, clock: Any) -> None:
    target = tmp_path / "ook" / "eek" / "ook.log"
    handler = StreamHandler(str(target), clock=clock)
    assert not target.parent.exists()
    handler(Level.ERROR, "ook", "Ook!")
    handler.close()
    assert target.read_text(encoding="utf-8") == LINE


def test_files_are_appended_not_truncated(tmp_path: Path, clock: Any) -> None:
    target = tmp_path / "ook.log"
    target.write_text("existing\n", encoding="utf-8")
    with StreamHandler(str(target), clock=clock) as handler:
        handler(Level.ERROR, "ook", "Ook!")
    assert target.read_text(encoding="utf-8") == "existing\n" + LINE


def test_standard_streams_resolve_at_write_time(capsys: pytest.CaptureFixture[str], clock: Any) -> None:
    StreamHandler(STDOUT, clock=clock)(Level.ERROR, "ook", "Ook!")
    StreamHandler(STDERR, clock=clock)(Level.ERROR, "ook", "Eek!")
    captured = capsys.readouterr()
    assert captured.out == LINE
    assert captured.err == LINE.replace("Ook!", "Eek!")


def test_standard_streams_are_never_closed(capsys: pytest.CaptureFixture[str], clock: Any) -> None:
    handler = StreamHandler(STDOUT, clock=clock)
    handler(Level.ERROR, "ook", "Ook!")
    handler.close()
    handler(Level.ERROR, "ook", "Ook!")
    assert capsys.readouterr().out == LINE * 2


def test_default_destination_is_stdout() -> None:
    assert StreamHandler().uri == STDOUT


def test_multiline_entries_get_a_blank_separator(memory_stream: StringIO, clock: Any) -> None:
    StreamHandler(memory_stream, clock=clock)(Level.ERROR, "ook", "Ook!\nEek!")
    assert memory_stream.getvalue() == "Sep 23 12:00:05  ook ERROR  Ook!\nEek!\n\n"


@pytest.mark.parametrize(
    "entry_format, expected",
    [
        ("%ook%", "\n"),
        ("%channel% %channel% %channel% %channel% %level% %level_name%", "ook ook ook ook 3 ERROR\n"),
        ("%datetime% %message%", "Sep 23 12:00:05 Ook!\n"),
    ],
)
def test_entry_format_templates(entry_format: str, expected: str, memory_stream: StringIO, clock: Any) -> None:
    StreamHandler(memory_stream, options={"entry_format": entry_format}, clock=clock)(Level.ERROR, "ook", "Ook!")
    assert memory_stream.getvalue() == expected


def test_entry_transform_replaces_template(memory_stream: StringIO, clock: Any) -> None:
    def transform(time: str, level: int, level_name: str, channel: str, message: str, context: Any) -> str:
        return f"{time}|{level}|{level_name}|{channel}|{message}|{sorted(context)}"

    handler = StreamHandler(memory_stream, options={"entry_transform": transform, "entry_format": "%ook%"}, clock=clock)
    Logger("ook", handler).error("Ook!", {"user": "eek"})
    assert memory_stream.getvalue() == "Sep 23 12:00:05|3|ERROR|ook|Ook!|['user']\n"


def test_entry_transform_must_return_string(memory_stream: StringIO, clock: Any) -> None:
    handler = StreamHandler(memory_stream, options={"entry_transform": lambda *args: 42}, clock=clock)
    with pytest.raises(TypeError, match="Return value of entry_transform option callable must be a str, int given"):
        handler(Level.ERROR, "ook", "Ook!")
    assert memory_stream.getvalue() == ""


@pytest.mark.parametrize(
    "name, value, expects",
    [
        ("entry_transform", "ook", "callable"),
        ("entry_format", 42, "str"),
        ("bubbles", "yes", "bool"),
    ],
)
def test_option_shapes_are_validated(name: str, value: Any, expects: str) -> None:
    with pytest.raises(TypeError, match=f"Value of {name} option must be {expects}"):
        StreamHandler(StringIO(), options={name: value})


@pytest.mark.parametrize("stream, given", [(42, "int"), (None, "None"), (b"ook.log", "bytes")])
def test_stream_must_be_handle_or_string(stream: Any, given: str) -> None:
    with pytest.raises(InvalidArgumentTypeError, match=f'Argument "stream" must be of type TextIO\\|str, {given} given'):
        StreamHandler(stream)


def test_unsupported_scheme_fails_on_first_write() -> None:
    handler = StreamHandler("ftp://example.invalid/ook.log")
    assert handler.uri_scheme == "ftp"
    with pytest.raises(IOException, match="unsupported stream scheme") as excinfo:
        handler(Level.ERROR, "ook", "Ook!")
    assert excinfo.value.path == "ftp://example.invalid/ook.log"


def test_unopenable_path_raises_io_exception(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    handler = StreamHandler(str(blocker / "ook.log"))
    with pytest.raises(IOException) as excinfo:
        handler(Level.ERROR, "ook", "Ook!")
    assert excinfo.value.path == str(blocker / "ook.log")


def test_filtered_records_never_open_the_file(tmp_path: Path) -> None:
    target = tmp_path / "ook.log"
    handler = StreamHandler(str(target), levels=[Level.EMERGENCY])
    handler(Level.ERROR, "ook", "Ook!")
    assert handler.get_stream() is None
    assert not target.exists()


def test_close_leaves_caller_handle_open(memory_stream: StringIO) -> None:
    handler = StreamHandler(memory_stream)
    handler.close()
    assert not memory_stream.closed


def test_close_releases_owned_handle_and_is_idempotent(tmp_path: Path, clock: Any) -> None:
    handler = StreamHandler(str(tmp_path / "ook.log"), clock=clock)
    handler(Level.ERROR, "ook", "Ook!")
    opened = handler.get_stream()
    assert opened is not None
    handler.close()
    handler.close()
    assert opened.closed
    assert handler.get_stream() is None


def test_owned_file_reopens_after_close(tmp_path: Path, clock: Any) -> None:
    target = tmp_path / "ook.log"
    handler = StreamHandler(str(target), clock=clock)
    handler(Level.ERROR, "ook", "Ook!")
    handler.close()
    handler(Level.ERROR, "ook", "Ook!")
    handler.close()
    assert target.read_text(encoding="utf-8") == LINE * 2


def test_set_stream_closes_previous_owned_handle(tmp_path: Path, memory_stream: StringIO, clock: Any) -> None:
    handler = StreamHandler(str(tmp_path / "ook.log"), clock=clock)
    handler(Level.ERROR, "ook", "Ook!")
    opened = handler.get_stream()
    handler.set_stream(memory_stream)
    assert opened is not None and opened.closed
    assert handler.get_stream() is memory_stream
    handler(Level.ERROR, "ook", "Ook!")
    assert memory_stream.getvalue() == LINE


def test_named_handle_reports_its_path(tmp_path: Path) -> None:
    target = tmp_path / "ook.log"
    with target.open("a", encoding="utf-8") as handle:
        handler = StreamHandler(handle)
        assert handler.uri == str(target)
        assert handler.owns_stream is False


@pytest.mark.parametrize(
    "memory_limit, expected",
    [
        (None, DEFAULT_CHUNK_SIZE),
        ("-1", DEFAULT_CHUNK_SIZE),
        ("50M", (50 * 1024 * 1024) // 10),
        ("128K", MIN_CHUNK_SIZE),
        ("16G", DEFAULT_CHUNK_SIZE),
    ],
)
def test_chunk_size_follows_memory_limit(memory_limit: str | None, expected: int) -> None:
    assert StreamHandler(StringIO(), memory_limit=memory_limit).chunk_size == expected


def test_closed_caller_handle_raises_io_exception_on_write(clock: Any) -> None:
    buffer = StringIO()
    handler = StreamHandler(buffer, clock=clock)
    buffer.close()
    with pytest.raises(IOException, match="Unable to write to stream"):
        handler(Level.ERROR, "ook", "Ook!")


def test_write_failure_on_named_handle_carries_its_path(tmp_path: Path, clock: Any) -> None:
    target = tmp_path / "ook.log"
    handle = target.open("a", encoding="utf-8")
    handler = StreamHandler(handle, clock=clock)
    handle.close()
    with pytest.raises(IOException) as excinfo:
        handler(Level.ERROR, "ook", "Ook!")
    assert excinfo.value.path == str(target)


def test_lone_surrogates_are_escaped_in_files(tmp_path: Path, clock: Any) -> None:
    target = tmp_path / "ook.log"
    with StreamHandler(str(target), clock=clock) as handler:
        handler(Level.ERROR, "ook", "bad \ud800")
    assert target.read_text(encoding="utf-8") == "Sep 23 12:00:05  ook ERROR  bad \\ud800\n"
