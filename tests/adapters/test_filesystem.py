from __future__ import annotations

from pathlib import Path

import pytest

from lib_log_chain.adapters.filesystem import LocalFilesystem


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ook.log", "ook.log"),
        ("./ook/./eek.log", "ook/eek.log"),
        ("ook//eek.log", "ook/eek.log"),
        ("ook/../eek.log", "eek.log"),
        ("../../ook.log", "../../ook.log"),
        ("/var/../../ook.log", "/ook.log"),
        ("file://ook/../eek.log", "file://eek.log"),
        ("file:///var/log/./ook.log", "file:///var/log/ook.log"),
        ("sys://stdout", "sys://stdout"),
        ("ook\\eek.log", "ook/eek.log"),
    ],
)
def test_canonicalize(raw: str, expected: str) -> None:
    assert LocalFilesystem().canonicalize(raw) == expected


def test_ensure_directory_exists_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "ook" / "eek"
    LocalFilesystem().ensure_directory_exists(str(target))
    LocalFilesystem().ensure_directory_exists(str(target))
    assert target.is_dir()


def test_open_append_uses_utf8_and_appends(tmp_path: Path) -> None:
    target = tmp_path / "ook.log"
    target.write_text("Ook!\n", encoding="utf-8")
    with LocalFilesystem().open_append(str(target), buffering=1024) as handle:
        handle.write("Eek! é\n")
    assert target.read_text(encoding="utf-8") == "Ook!\nEek! é\n"


def test_open_append_escapes_unencodable_characters(tmp_path: Path) -> None:
    target = tmp_path / "ook.log"
    with LocalFilesystem().open_append(str(target), buffering=1024) as handle:
        handle.write("Ook! \udcff\n")
    assert target.read_text(encoding="utf-8") == "Ook! \\udcff\n"
