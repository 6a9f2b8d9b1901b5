"""Test plain-text loading and atomic saving."""

import os

import pytest

from bufed.fileio import read_lines, write_lines


def test_read_missing_file_is_empty(tmp_path):
    assert read_lines(str(tmp_path / "new.txt")) == []


def test_read_lines(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one\ntwo\n\nfour\n", encoding="utf-8")
    assert read_lines(str(path)) == ["one", "two", "", "four"]


def test_read_without_trailing_newline(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"one\r\ntwo")
    assert read_lines(str(path)) == ["one", "two"]


def test_read_lone_carriage_return_ends_line(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"ab\rcd\n")
    assert read_lines(str(path)) == ["ab", "cd"]


def test_read_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    assert read_lines(str(path)) == []


def test_read_other_errors_propagate(tmp_path):
    """Only a missing file is forgiven."""
    with pytest.raises(OSError):
        read_lines(str(tmp_path))


def test_write_terminates_every_line(tmp_path):
    path = tmp_path / "out.txt"
    write_lines(str(path), ["a", "", "b"])
    assert path.read_bytes() == b"a\n\nb\n"


def test_write_empty_buffer(tmp_path):
    path = tmp_path / "out.txt"
    write_lines(str(path), [])
    assert path.read_bytes() == b""


def test_write_overwrites_and_leaves_no_temp_files(tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("old content\n", encoding="utf-8")
    write_lines(str(path), ["new"])
    assert path.read_text(encoding="utf-8") == "new\n"
    assert os.listdir(tmp_path) == ["out.txt"]


def test_write_failure_raises(tmp_path):
    with pytest.raises(OSError):
        write_lines(str(tmp_path / "missing" / "out.txt"), ["a"])


def test_round_trip(tmp_path):
    path = str(tmp_path / "doc.txt")
    lines = ["first", "  indented", "", "last"]
    write_lines(path, lines)
    assert read_lines(path) == lines
