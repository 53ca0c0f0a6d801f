"""Single-invocation code generation for explicitly named schema files."""

from __future__ import annotations

import logging
from pathlib import Path

from ._outputs import check_clean_target, prepare_output_dir, render_output_name
from .errors import CodegenFailed, ConfigurationError
from .models.config import CodegenRequest, GeneratorConfig
from .process import expand_args, find_executable, run_tool

logger = logging.getLogger(__name__)


def build_generator_args(request: CodegenRequest, generator: GeneratorConfig) -> list[str]:
    """Construct the generator argument list: output flag, include flags, then inputs."""
    args = expand_args([generator.out_arg], out_dir=request.out_dir)
    for include in request.includes:
        args += expand_args([generator.include_arg], include=include)
    args += [str(p) for p in request.inputs]
    return args


def _validate_request(request: CodegenRequest) -> None:
    if not request.inputs:
        raise ConfigurationError("Codegen request has no input files")
    missing = [str(p) for p in request.inputs if not p.is_file()]
    if missing:
        raise ConfigurationError(f"Codegen input file(s) not found: {', '.join(missing)}")


def run_codegen(request: CodegenRequest, generator: GeneratorConfig | None = None) -> list[Path]:
    """Run the generator once for all inputs in *request*.

    Returns one artifact path per input. Inputs are validated before anything
    is spawned or written.
    """
    generator = generator or GeneratorConfig()
    _validate_request(request)
    tool = find_executable(generator.executable)
    check_clean_target(request.out_dir, generator.stale_files, [*request.inputs, *request.includes])
    prepare_output_dir(request.out_dir, generator.stale_files)

    args = build_generator_args(request, generator)
    result = run_tool(tool, args, timeout=generator.timeout)
    if not result.ok:
        logger.warning("Generator %s failed (exit %s)", tool, result.returncode)
        reason = f"timed out after {generator.timeout}s" if result.timed_out else None
        raise CodegenFailed(
            request.inputs,
            tool,
            result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            reason=reason,
        )

    outputs = [request.out_dir / render_output_name(generator.output_name, p) for p in request.inputs]
    missing = [o for o in outputs if not o.is_file()]
    if missing:
        raise CodegenFailed(
            request.inputs,
            tool,
            result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            reason=f"exited successfully but did not write {', '.join(str(m) for m in missing)}",
        )
    logger.info("Generated %d file(s) in %s", len(outputs), request.out_dir)
    return outputs


class Codegen:
    """Fluent builder around ``run_codegen``.

    Example::

        Codegen().out_dir("src/protos").inputs(["schemas/jazz.proto"]).include("schemas").run()
    """

    def __init__(self, generator: GeneratorConfig | None = None) -> None:
        self._generator = generator or GeneratorConfig()
        self._out_dir: Path | None = None
        self._inputs: list[Path] = []
        self._includes: list[Path] = []

    def out_dir(self, path: str | Path) -> "Codegen":
        self._out_dir = Path(path)
        return self

    def input(self, path: str | Path) -> "Codegen":
        self._inputs.append(Path(path))
        return self

    def inputs(self, paths: list[str] | list[Path]) -> "Codegen":
        self._inputs.extend(Path(p) for p in paths)
        return self

    def include(self, path: str | Path) -> "Codegen":
        self._includes.append(Path(path))
        return self

    def includes(self, paths: list[str] | list[Path]) -> "Codegen":
        self._includes.extend(Path(p) for p in paths)
        return self

    def request(self) -> CodegenRequest:
        if self._out_dir is None:
            raise ConfigurationError("Codegen output directory is not set")
        return CodegenRequest(out_dir=self._out_dir, inputs=list(self._inputs), includes=list(self._includes))

    def run(self) -> list[Path]:
        return run_codegen(self.request(), self._generator)
