"""Generated-source preparation for the serialization benchmarks."""

from benchgen.batch import compile_schema_dir
from benchgen.codegen import Codegen, run_codegen
from benchgen.config_loader import load_config
from benchgen.errors import (
    BuildError,
    CodegenFailed,
    CompilationFailed,
    ConfigurationError,
    GenerationIOError,
    ToolNotFound,
)
from benchgen.models.config import BuildConfig, CodegenRequest
from benchgen.orchestrator import BuildReport, BuildStage, Orchestrator, build
from benchgen.platforms import PlatformTarget, detect_platform, resolve_tool_path

__all__ = [
    "BuildConfig",
    "BuildError",
    "BuildReport",
    "BuildStage",
    "Codegen",
    "CodegenFailed",
    "CodegenRequest",
    "CompilationFailed",
    "ConfigurationError",
    "GenerationIOError",
    "Orchestrator",
    "PlatformTarget",
    "ToolNotFound",
    "build",
    "compile_schema_dir",
    "detect_platform",
    "load_config",
    "resolve_tool_path",
    "run_codegen",
]
