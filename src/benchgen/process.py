"""Blocking external-process invocation shared by both invokers."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError, ToolNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    args: list[str]
    returncode: int | None
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out


def check_tool(tool: Path) -> Path:
    """Confirm *tool* exists and can be run; raise ToolNotFound otherwise.

    ``.py`` tools are launched with the current interpreter, so only existence
    is required for them.
    """
    if not tool.is_file():
        raise ToolNotFound(tool)
    if tool.suffix != ".py" and not os.access(tool, os.X_OK):
        raise ToolNotFound(tool, "not executable")
    return tool


def find_executable(name: str) -> Path:
    """Resolve a generator executable: explicit paths must exist, bare names go through PATH."""
    candidate = Path(name)
    if len(candidate.parts) > 1 or candidate.is_absolute():
        return check_tool(candidate)
    found = shutil.which(name)
    if found is None:
        raise ToolNotFound(name, "not found on PATH")
    return Path(found)


def expand_args(templates: list[str], **values: object) -> list[str]:
    """Fill ``{placeholder}`` fields in each argument template."""
    try:
        return [t.format(**values) for t in templates]
    except (KeyError, IndexError) as exc:
        raise ConfigurationError(f"Unknown placeholder {exc} in arguments {templates}") from exc


def tool_command(tool: Path) -> list[str]:
    return [sys.executable, str(tool)] if tool.suffix == ".py" else [str(tool)]


def run_tool(tool: Path, args: list[str], timeout: float | None = None) -> ProcessResult:
    """Run *tool* with *args*, blocking until it exits, and capture its output."""
    cmd = tool_command(tool) + args
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        logger.warning("%s timed out after %ss", tool, timeout)
        return ProcessResult(
            args=cmd,
            returncode=None,
            stdout=_as_text(exc.stdout),
            stderr=_as_text(exc.stderr),
            timed_out=True,
        )
    except (FileNotFoundError, PermissionError) as exc:
        raise ToolNotFound(tool, str(exc)) from exc
    return ProcessResult(args=cmd, returncode=result.returncode, stdout=result.stdout, stderr=result.stderr)


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    return value
