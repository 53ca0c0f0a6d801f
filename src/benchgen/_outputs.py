"""Generated-output directory preparation shared by both invokers."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from .errors import ConfigurationError, GenerationIOError
from .models.config import StaleFilePolicy

logger = logging.getLogger(__name__)


def check_clean_target(out_dir: Path, policy: StaleFilePolicy, protected: Iterable[Path]) -> None:
    """Refuse the CLEAN policy when *out_dir* is, or contains, a protected input path."""
    if policy is not StaleFilePolicy.CLEAN:
        return
    target = out_dir.resolve()
    for path in protected:
        resolved = path.resolve()
        if target == resolved or target in resolved.parents:
            raise ConfigurationError(
                f"Refusing to clean output directory {out_dir}: it contains input path {path}"
            )


def prepare_output_dir(out_dir: Path, policy: StaleFilePolicy = StaleFilePolicy.OVERWRITE) -> Path:
    """Create *out_dir* if needed, emptying it first under the CLEAN policy."""
    if out_dir.exists() and not out_dir.is_dir():
        raise GenerationIOError(out_dir, "Output path exists and is not a directory")
    try:
        if policy is StaleFilePolicy.CLEAN and out_dir.is_dir():
            for entry in out_dir.iterdir():
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
            logger.debug("Cleaned output directory %s", out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GenerationIOError(out_dir, f"Cannot prepare output directory ({exc.strerror or exc})") from exc
    if not os.access(out_dir, os.W_OK):
        raise GenerationIOError(out_dir, "Output directory is not writable")
    return out_dir


def render_output_name(template: str, source: Path) -> str:
    """Expand an ``output_name`` template (``{stem}``, ``{name}``) for *source*."""
    try:
        return template.format(stem=source.stem, name=source.name)
    except (KeyError, IndexError) as exc:
        raise ConfigurationError(f"Invalid output_name template '{template}': unknown placeholder {exc}") from exc
