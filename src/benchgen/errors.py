"""Error taxonomy for code-generation builds.

Every failure raised by the resolver, the invokers, or the orchestrator is a
``BuildError`` subclass so callers (the CLI, a host build script) can catch one
type and still report the original diagnostic text unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class BuildError(Exception):
    """Base class for all benchgen failures."""


class ConfigurationError(BuildError):
    """Malformed invocation or configuration (e.g. empty input set, unknown platform)."""


class ToolNotFound(BuildError):
    """The resolved executable is missing or not runnable."""

    def __init__(self, tool: Path | str, reason: str = "does not exist") -> None:
        self.tool = str(tool)
        self.reason = reason
        super().__init__(f"Tool not found: {self.tool} ({reason})")


class GenerationIOError(BuildError):
    """Filesystem failure on a source or output directory."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = str(path)
        super().__init__(f"{message}: {self.path}")


def _format_diagnostics(stdout: str, stderr: str) -> str:
    parts = []
    if stderr.strip():
        parts.append(f"--- stderr ---\n{stderr.rstrip()}")
    if stdout.strip():
        parts.append(f"--- stdout ---\n{stdout.rstrip()}")
    return "\n".join(parts)


class CompilationFailed(BuildError):
    """The batch schema compiler rejected a schema."""

    def __init__(
        self,
        schema: Path | str,
        tool: Path | str,
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        self.schema = str(schema)
        self.tool = str(tool)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if reason is None:
            reason = f"exited with status {returncode}"
        msg = f"Compilation of {self.schema} failed: {self.tool} {reason}"
        diag = _format_diagnostics(stdout, stderr)
        super().__init__(f"{msg}\n{diag}" if diag else msg)

    @property
    def diagnostics(self) -> str:
        return _format_diagnostics(self.stdout, self.stderr)


class CodegenFailed(BuildError):
    """The second-format generator reported failure."""

    def __init__(
        self,
        inputs: Sequence[Path | str],
        tool: Path | str,
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        self.inputs = [str(p) for p in inputs]
        self.tool = str(tool)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if reason is None:
            reason = f"exited with status {returncode}"
        msg = f"Codegen for {', '.join(self.inputs)} failed: {self.tool} {reason}"
        diag = _format_diagnostics(stdout, stderr)
        super().__init__(f"{msg}\n{diag}" if diag else msg)

    @property
    def diagnostics(self) -> str:
        return _format_diagnostics(self.stdout, self.stderr)
