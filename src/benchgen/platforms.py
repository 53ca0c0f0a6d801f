"""Host platform detection and schema-compiler path lookup."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from .errors import ConfigurationError


class PlatformTarget(str, Enum):
    WINDOWS = "windows"
    UNIX = "unix"


# os.name → platform family
_OS_NAME_TARGETS: dict[str, PlatformTarget] = {
    "nt": PlatformTarget.WINDOWS,
    "posix": PlatformTarget.UNIX,
}

# Relative to the project root (the directory holding the schemas/ folder).
DEFAULT_COMPILER_PATHS: dict[PlatformTarget, str] = {
    PlatformTarget.WINDOWS: "../../../bin/compiler/Windows-Debug/bebopc.exe",
    PlatformTarget.UNIX: "../../../bin/compiler/Linux-Debug/bebopc",
}


def detect_platform(os_name: str | None = None) -> PlatformTarget:
    """Return the platform family for *os_name* (defaults to ``os.name``)."""
    name = os.name if os_name is None else os_name
    try:
        return _OS_NAME_TARGETS[name]
    except KeyError:
        supported = ", ".join(sorted(_OS_NAME_TARGETS))
        raise ConfigurationError(f"Unsupported platform '{name}' (supported: {supported})") from None


def check_tool_table(table: Mapping[PlatformTarget, str]) -> None:
    """Raise ConfigurationError unless every platform maps to a non-empty path."""
    missing = [p.value for p in PlatformTarget if not str(table.get(p) or "").strip()]
    if missing:
        raise ConfigurationError(f"Compiler path table has no entry for: {', '.join(missing)}")


def resolve_tool_path(
    platform: PlatformTarget,
    table: Mapping[PlatformTarget, str] = DEFAULT_COMPILER_PATHS,
) -> Path:
    """Pure lookup of the compiler path for *platform*.

    No filesystem access happens here; a missing executable is reported by the
    invoker that tries to run it.
    """
    value = table.get(platform)
    if not value:
        raise ConfigurationError(f"No compiler path configured for platform '{platform.value}'")
    return Path(value)
