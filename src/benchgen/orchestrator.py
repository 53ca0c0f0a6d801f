"""Build entry point: resolve the compiler, batch-compile, then run the second generator.

Stages advance ``NOT_STARTED → RESOLVING → GENERATING_BATCH → GENERATING_SINGLE →
DONE``. Any failure moves the orchestrator to ``FAILED`` and the original
exception is re-raised as-is; there is no retry and no rollback of files
already written.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .batch import compile_schema_dir
from .codegen import run_codegen
from .models.config import BuildConfig
from .platforms import PlatformTarget, check_tool_table, detect_platform, resolve_tool_path
from .process import check_tool

logger = logging.getLogger(__name__)


class BuildStage(str, Enum):
    NOT_STARTED = "not_started"
    RESOLVING = "resolving"
    GENERATING_BATCH = "generating_batch"
    GENERATING_SINGLE = "generating_single"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BuildReport:
    stage: BuildStage = BuildStage.NOT_STARTED
    platform: PlatformTarget | None = None
    tool: Path | None = None
    batch_outputs: list[Path] = field(default_factory=list)
    codegen_outputs: list[Path] = field(default_factory=list)
    failed_stage: BuildStage | None = None

    @property
    def succeeded(self) -> bool:
        return self.stage is BuildStage.DONE


class Orchestrator:
    """Runs one build from a BuildConfig whose paths are already anchored."""

    def __init__(self, config: BuildConfig, *, os_name: str | None = None) -> None:
        self.config = config
        self._os_name = os_name
        self.report = BuildReport()

    @property
    def stage(self) -> BuildStage:
        return self.report.stage

    def _enter(self, stage: BuildStage) -> None:
        logger.debug("Build stage: %s -> %s", self.report.stage.value, stage.value)
        self.report.stage = stage

    def resolve(self) -> Path:
        check_tool_table(self.config.compiler_paths)
        platform = detect_platform(self._os_name)
        tool = check_tool(resolve_tool_path(platform, self.config.compiler_paths))
        self.report.platform = platform
        self.report.tool = tool
        logger.info("Resolved %s schema compiler: %s", platform.value, tool)
        return tool

    def _batch(self, tool: Path) -> list[Path]:
        batch = self.config.batch
        return compile_schema_dir(tool, batch.source_dir, batch.out_dir, batch)

    def _single(self) -> list[Path]:
        return run_codegen(self.config.codegen_request(), self.config.codegen.generator)

    def _generate_sequential(self, tool: Path) -> None:
        self._enter(BuildStage.GENERATING_BATCH)
        self.report.batch_outputs = self._batch(tool)
        self._enter(BuildStage.GENERATING_SINGLE)
        self.report.codegen_outputs = self._single()

    def _generate_parallel(self, tool: Path) -> None:
        # Both pipelines run to completion; the batch failure wins if both fail.
        self._enter(BuildStage.GENERATING_BATCH)
        with ThreadPoolExecutor(max_workers=2) as pool:
            batch_future = pool.submit(self._batch, tool)
            single_future = pool.submit(self._single)
            self.report.batch_outputs = batch_future.result()
            self._enter(BuildStage.GENERATING_SINGLE)
            self.report.codegen_outputs = single_future.result()

    def run(self) -> BuildReport:
        if self.report.stage is not BuildStage.NOT_STARTED:
            raise RuntimeError(f"Orchestrator already ran (stage={self.report.stage.value})")
        try:
            self._enter(BuildStage.RESOLVING)
            tool = self.resolve()
            if self.config.parallel:
                self._generate_parallel(tool)
            else:
                self._generate_sequential(tool)
        except Exception:
            self.report.failed_stage = self.report.stage
            self._enter(BuildStage.FAILED)
            logger.error("Build failed during %s", self.report.failed_stage.value)
            raise
        self._enter(BuildStage.DONE)
        return self.report


def build(config: BuildConfig, root: Path | None = None, *, os_name: str | None = None) -> BuildReport:
    """Anchor *config* at *root* (if given) and run a full build."""
    if root is not None:
        config = config.resolved(root)
    return Orchestrator(config, os_name=os_name).run()
