"""Tests for the shared external-process helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from benchgen.errors import ConfigurationError, ToolNotFound
from benchgen.process import check_tool, expand_args, find_executable, run_tool, tool_command


class TestToolCommand:
    def test_python_scripts_use_current_interpreter(self) -> None:
        assert tool_command(Path("gen.py")) == [sys.executable, "gen.py"]

    def test_binaries_run_directly(self) -> None:
        assert tool_command(Path("/opt/bebopc")) == ["/opt/bebopc"]


class TestExpandArgs:
    def test_fills_placeholders(self) -> None:
        assert expand_args(["--files", "{input}"], input=Path("a.bop")) == ["--files", "a.bop"]

    def test_unknown_placeholder(self) -> None:
        with pytest.raises(ConfigurationError):
            expand_args(["{nope}"], input="x")


class TestFindExecutable:
    def test_explicit_path_must_exist(self, tmp_path: Path) -> None:
        with pytest.raises(ToolNotFound):
            find_executable(str(tmp_path / "protoc"))

    def test_explicit_path(self, fake_protoc: Path) -> None:
        assert find_executable(str(fake_protoc)) == fake_protoc

    def test_unknown_name(self) -> None:
        with pytest.raises(ToolNotFound) as info:
            find_executable("benchgen-definitely-missing-tool")
        assert "PATH" in str(info.value)


class TestRunTool:
    def test_captures_output_and_status(self, tmp_path: Path) -> None:
        tool = tmp_path / "echo.py"
        tool.write_text("import sys\nprint('out', sys.argv[1])\nprint('err', file=sys.stderr)\nsys.exit(3)\n")
        result = run_tool(check_tool(tool), ["arg"])
        assert result.returncode == 3
        assert not result.ok
        assert result.stdout.strip() == "out arg"
        assert result.stderr.strip() == "err"

    def test_undecodable_output_is_replaced(self, tmp_path: Path) -> None:
        tool = tmp_path / "bytes.py"
        tool.write_text(
            "import sys\n"
            "sys.stdout.buffer.write(b'ok \\xe9\\n')\n"
            "sys.stderr.buffer.write(b'bad \\xff\\n')\n"
            "sys.exit(2)\n"
        )
        result = run_tool(tool, [])
        assert result.returncode == 2
        assert result.stdout.startswith("ok ")
        assert result.stderr.startswith("bad ")
        assert "�" in result.stderr

    def test_timeout_marks_result(self, sleeper: Path) -> None:
        result = run_tool(sleeper, [], timeout=0.5)
        assert result.timed_out
        assert result.returncode is None
        assert not result.ok
