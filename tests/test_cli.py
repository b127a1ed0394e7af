"""Tests for the CLI module."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from Lockless.cli import _format_size, app

runner = CliRunner()


def test_cli_lines(tmp_path: Path) -> None:
    """Test printing every line of a file."""
    file_path = tmp_path / "data.txt"
    file_path.write_text("alpha\nbeta [not markup]\ngamma", encoding="utf-8")

    result = runner.invoke(app, ["lines", str(file_path)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["alpha", "beta [not markup]", "gamma"]


def test_cli_lines_head_and_number(tmp_path: Path) -> None:
    """Test stopping early and numbering lines."""
    file_path = tmp_path / "data.txt"
    file_path.write_text("one\ntwo\nthree\n", encoding="utf-8")

    result = runner.invoke(app, ["lines", str(file_path), "--head", "2", "--number"])

    assert result.exit_code == 0
    output = result.stdout.splitlines()
    assert len(output) == 2
    assert output[0].split() == ["1", "one"]
    assert output[1].split() == ["2", "two"]


def test_cli_lines_encoding(tmp_path: Path) -> None:
    file_path = tmp_path / "latin1.txt"
    file_path.write_bytes("café\n".encode("latin-1"))

    result = runner.invoke(app, ["lines", str(file_path), "--encoding", "latin-1"])

    assert result.exit_code == 0
    assert "café" in result.stdout


def test_cli_lines_missing_file(tmp_path: Path) -> None:
    """Test that a missing file is an error exit."""
    result = runner.invoke(app, ["lines", str(tmp_path / "missing.txt")])

    # Exit code 2 = error
    assert result.exit_code == 2
    assert "cannot open" in result.output.lower()


def test_cli_lines_unknown_encoding(tmp_path: Path) -> None:
    file_path = tmp_path / "data.txt"
    file_path.write_text("x\n", encoding="utf-8")

    result = runner.invoke(app, ["lines", str(file_path), "--encoding", "no-such-codec"])

    assert result.exit_code == 2
    assert "unknown encoding" in result.output.lower()


def test_cli_size(tmp_path: Path) -> None:
    """Test the recursive size command."""
    (tmp_path / "ten.bin").write_bytes(b"x" * 10)
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "five.bin").write_bytes(b"y" * 5)

    result = runner.invoke(app, ["size", str(tmp_path)])

    assert result.exit_code == 0
    assert result.stdout.strip() == "15"


def test_cli_size_human(tmp_path: Path) -> None:
    (tmp_path / "big.bin").write_bytes(b"x" * 2048)

    result = runner.invoke(app, ["size", str(tmp_path), "--human"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "2.0 KB"


def test_cli_size_missing_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["size", str(tmp_path / "nope")])

    assert result.exit_code == 2
    assert "not a directory" in result.output.lower()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX dot-file convention")
def test_cli_hidden(tmp_path: Path) -> None:
    """Test hidden/visible exit codes."""
    hidden_file = tmp_path / ".hidden"
    hidden_file.write_text("x", encoding="utf-8")
    visible_file = tmp_path / "visible"
    visible_file.write_text("x", encoding="utf-8")

    hidden_result = runner.invoke(app, ["hidden", str(hidden_file)])
    visible_result = runner.invoke(app, ["hidden", str(visible_file)])

    assert hidden_result.exit_code == 0
    assert "hidden" in hidden_result.stdout
    assert visible_result.exit_code == 1
    assert "visible" in visible_result.stdout


def test_cli_hidden_missing_path(tmp_path: Path) -> None:
    result = runner.invoke(app, ["hidden", str(tmp_path / "missing")])

    assert result.exit_code == 2


def test_cli_rename(tmp_path: Path) -> None:
    """Test renaming through the CLI."""
    source = tmp_path / "old.txt"
    source.write_text("data", encoding="utf-8")

    result = runner.invoke(app, ["rename", str(source), "new.txt"])

    assert result.exit_code == 0
    assert not source.exists()
    assert (tmp_path / "new.txt").read_text(encoding="utf-8") == "data"


def test_cli_rename_invalid_name(tmp_path: Path) -> None:
    source = tmp_path / "old.txt"
    source.write_text("data", encoding="utf-8")

    result = runner.invoke(app, ["rename", str(source), "bad/name"])

    assert result.exit_code == 2
    assert "invalid file name" in result.output.lower()
    assert source.exists()


def test_cli_rename_missing_source(tmp_path: Path) -> None:
    result = runner.invoke(app, ["rename", str(tmp_path / "ghost.txt"), "new.txt"])

    assert result.exit_code == 2
    assert "unable to rename" in result.output.lower()


def test_cli_verbose_flag(tmp_path: Path) -> None:
    file_path = tmp_path / "data.txt"
    file_path.write_text("x\n", encoding="utf-8")

    result = runner.invoke(app, ["--verbose", "lines", str(file_path)])

    assert result.exit_code == 0
    assert "x" in result.stdout


def test_cli_version() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "version" in result.stdout.lower()


@pytest.mark.parametrize(
    "num_bytes, expected",
    [(0, "0 B"), (512, "512 B"), (1536, "1.5 KB"), (5 * 1024 ** 3, "5.0 GB")],
)
def test_format_size(num_bytes: int, expected: str) -> None:
    assert _format_size(num_bytes) == expected


def test_cli_lines_head_zero(tmp_path: Path) -> None:
    """Test that --head 0 prints nothing."""
    file_path = tmp_path / "data.txt"
    file_path.write_text("one\ntwo\n", encoding="utf-8")

    result = runner.invoke(app, ["lines", str(file_path), "--head", "0"])

    assert result.exit_code == 0
    assert result.stdout == ""


def test_cli_lines_negative_head_rejected(tmp_path: Path) -> None:
    file_path = tmp_path / "data.txt"
    file_path.write_text("one\n", encoding="utf-8")

    result = runner.invoke(app, ["lines", str(file_path), "--head", "-1"])

    # Click usage error
    assert result.exit_code == 2
    assert "one" not in result.stdout


def test_cli_verbose_does_not_leak_logging(tmp_path: Path) -> None:
    """Test that --verbose logging is undone when the command finishes."""
    file_path = tmp_path / "data.txt"
    file_path.write_text("x\n", encoding="utf-8")
    package_logger = logging.getLogger("Lockless")
    level_before = package_logger.level
    handlers_before = list(package_logger.handlers)

    result = runner.invoke(app, ["--verbose", "lines", str(file_path)])

    assert result.exit_code == 0
    assert package_logger.level == level_before
    assert package_logger.handlers == handlers_before
