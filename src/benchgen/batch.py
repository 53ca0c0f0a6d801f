"""Directory-scoped batch invocation of the schema compiler.

Every ``*.bop`` file (suffix configurable) in the source directory is compiled
into the output directory. The artifact name is derived from the schema's own
file name via ``output_name`` (``"{stem}.rs"`` by default), so rerunning with an
unchanged schema set overwrites the same files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ._outputs import check_clean_target, prepare_output_dir, render_output_name
from .errors import CompilationFailed, GenerationIOError
from .models.config import BatchCompileConfig
from .process import ProcessResult, check_tool, expand_args, run_tool

logger = logging.getLogger(__name__)


def discover_schema_files(source_dir: Path, suffix: str = ".bop") -> list[Path]:
    """Return schema files directly inside *source_dir*, sorted by name."""
    if not source_dir.is_dir():
        raise GenerationIOError(source_dir, "Schema source directory does not exist")
    try:
        entries = sorted(source_dir.iterdir())
    except OSError as exc:
        raise GenerationIOError(source_dir, f"Cannot read schema source directory ({exc.strerror or exc})") from exc
    return [p for p in entries if p.is_file() and p.suffix == suffix]


def _failure_reason(result: ProcessResult, timeout: float | None) -> str | None:
    if result.timed_out:
        return f"timed out after {timeout}s"
    return None


def compile_schema(tool: Path, schema: Path, output: Path, config: BatchCompileConfig) -> Path:
    """Compile one schema file to *output*; raise CompilationFailed on any failure."""
    args = expand_args(
        config.file_args,
        input=schema,
        output=output,
        input_dir=schema.parent,
        output_dir=output.parent,
    )
    result = run_tool(tool, args, timeout=config.timeout)
    if not result.ok:
        logger.warning("Compiler rejected %s (exit %s)", schema.name, result.returncode)
        raise CompilationFailed(
            schema,
            tool,
            result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            reason=_failure_reason(result, config.timeout),
        )
    if not output.is_file():
        raise CompilationFailed(
            schema,
            tool,
            result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            reason=f"exited successfully but did not write {output}",
        )
    return output


def compile_schema_dir(
    tool: Path,
    source_dir: Path,
    out_dir: Path,
    config: BatchCompileConfig | None = None,
) -> list[Path]:
    """Compile every schema in *source_dir* into *out_dir*, stopping at the first failure.

    Returns the generated artifact paths in schema order. An empty source
    directory is a no-op and spawns no process.
    """
    config = config or BatchCompileConfig()
    check_tool(tool)
    schemas = discover_schema_files(source_dir, config.schema_suffix)
    check_clean_target(out_dir, config.stale_files, [source_dir])
    prepare_output_dir(out_dir, config.stale_files)

    if not schemas:
        logger.info("No %s schemas in %s; nothing to compile", config.schema_suffix, source_dir)
        return []

    outputs = [out_dir / render_output_name(config.output_name, s) for s in schemas]

    if config.mode == "per_directory":
        args = expand_args(config.dir_args, input_dir=source_dir, output_dir=out_dir)
        result = run_tool(tool, args, timeout=config.timeout)
        if not result.ok:
            logger.warning("Compiler rejected schema directory %s (exit %s)", source_dir, result.returncode)
            raise CompilationFailed(
                source_dir,
                tool,
                result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
                reason=_failure_reason(result, config.timeout),
            )
        missing = [o for o in outputs if not o.is_file()]
        if missing:
            raise CompilationFailed(
                source_dir,
                tool,
                result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
                reason=f"exited successfully but did not write {', '.join(str(m) for m in missing)}",
            )
        logger.info("Compiled %d schema(s) from %s in one invocation", len(schemas), source_dir)
        return outputs

    for schema, output in zip(schemas, outputs):
        compile_schema(tool, schema, output, config)
        logger.info("Compiled %s -> %s", schema.name, output)
    return outputs
