import logging
from pathlib import Path

import click

from .batch import compile_schema_dir
from .codegen import run_codegen
from .config_loader import dump_config, load_config
from .errors import BuildError
from .models.config import BuildConfig, CodegenRequest
from .orchestrator import Orchestrator
from .platforms import detect_platform, resolve_tool_path
from .process import check_tool

logger = logging.getLogger("benchgen")


def _load(config_file: str | None, root: str | None) -> BuildConfig:
    try:
        return load_config(config_file, root)
    except BuildError as exc:
        _fail(exc)


def _fail(exc: BuildError) -> None:
    click.echo(f"ERROR: {exc}", err=True)
    raise SystemExit(1)


_config_option = click.option(
    "--config", "-c", "config_file", type=click.Path(exists=True, dir_okay=False),
    help="Path to benchgen.yaml (default: <root>/benchgen.yaml, then built-in defaults).",
)
_root_option = click.option(
    "--root", "-r", type=click.Path(exists=True, file_okay=False),
    help="Project root that relative default paths resolve against (default: CWD).",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug-level logging.")
def main(verbose: bool) -> None:
    """benchgen: prepare generated sources for the serialization benchmarks."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


# ---------------------------------------------------------------------------
# build command
# ---------------------------------------------------------------------------

@main.command()
@_config_option
@_root_option
@click.option("--parallel/--sequential", default=None, help="Run both generators concurrently (overrides config).")
def build(config_file: str | None, root: str | None, parallel: bool | None) -> None:
    """Resolve the schema compiler, batch-compile schemas, then run the second generator."""
    config = _load(config_file, root)
    if parallel is not None:
        config = config.model_copy(update={"parallel": parallel})

    orchestrator = Orchestrator(config)
    try:
        report = orchestrator.run()
    except BuildError as exc:
        _fail(exc)

    click.echo(f"Compiler: {report.tool} ({report.platform.value})")
    click.echo(f"Batch:    {len(report.batch_outputs)} file(s) in {config.batch.out_dir}")
    click.echo(f"Codegen:  {len(report.codegen_outputs)} file(s) in {config.codegen.out_dir}")
    click.echo("Done!")


# ---------------------------------------------------------------------------
# tool-path command
# ---------------------------------------------------------------------------

@main.command("tool-path")
@_config_option
@_root_option
@click.option("--check/--no-check", default=True, show_default=True, help="Verify the executable exists.")
def tool_path(config_file: str | None, root: str | None, check: bool) -> None:
    """Print the schema-compiler path selected for this host."""
    config = _load(config_file, root)
    try:
        tool = resolve_tool_path(detect_platform(), config.compiler_paths)
        if check:
            check_tool(tool)
    except BuildError as exc:
        _fail(exc)
    click.echo(str(tool))


# ---------------------------------------------------------------------------
# batch command
# ---------------------------------------------------------------------------

@main.command()
@_config_option
@_root_option
@click.option("--tool", type=click.Path(path_type=Path), help="Compiler executable (default: platform lookup).")
@click.option("--source-dir", "-s", type=click.Path(path_type=Path), help="Schema directory (overrides config).")
@click.option("--output-dir", "-o", type=click.Path(path_type=Path), help="Generated-source directory (overrides config).")
def batch(
    config_file: str | None,
    root: str | None,
    tool: Path | None,
    source_dir: Path | None,
    output_dir: Path | None,
) -> None:
    """Compile every schema in a directory with the schema compiler."""
    config = _load(config_file, root)
    try:
        if tool is None:
            tool = resolve_tool_path(detect_platform(), config.compiler_paths)
        outputs = compile_schema_dir(
            tool,
            source_dir or config.batch.source_dir,
            output_dir or config.batch.out_dir,
            config.batch,
        )
    except BuildError as exc:
        _fail(exc)
    for path in outputs:
        click.echo(f"Generated: {path}")
    click.echo(f"Done! {len(outputs)} schema(s) compiled.")


# ---------------------------------------------------------------------------
# codegen command
# ---------------------------------------------------------------------------

@main.command()
@_config_option
@_root_option
@click.option("--input", "-i", "inputs", multiple=True, type=click.Path(path_type=Path), help="Schema file (repeatable; overrides config).")
@click.option("--include", "-I", "includes", multiple=True, type=click.Path(path_type=Path), help="Include directory (repeatable; overrides config).")
@click.option("--output-dir", "-o", type=click.Path(path_type=Path), help="Generated-source directory (overrides config).")
@click.option("--generator", "executable", help="Generator executable (overrides config).")
def codegen(
    config_file: str | None,
    root: str | None,
    inputs: tuple[Path, ...],
    includes: tuple[Path, ...],
    output_dir: Path | None,
    executable: str | None,
) -> None:
    """Run the second-format generator once for the named schema files."""
    config = _load(config_file, root)
    request = CodegenRequest(
        out_dir=output_dir or config.codegen.out_dir,
        inputs=list(inputs) if inputs else list(config.codegen.inputs),
        includes=list(includes) if includes else list(config.codegen.includes),
    )
    generator = config.codegen.generator
    if executable:
        generator = generator.model_copy(update={"executable": executable})
    try:
        outputs = run_codegen(request, generator)
    except BuildError as exc:
        _fail(exc)
    for path in outputs:
        click.echo(f"Generated: {path}")
    click.echo(f"Done! {len(outputs)} file(s) generated.")


# ---------------------------------------------------------------------------
# config command group
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """Inspect the build configuration."""


@config.command("show")
@_config_option
@_root_option
def config_show(config_file: str | None, root: str | None) -> None:
    """Print the effective configuration with paths resolved."""
    click.echo(dump_config(_load(config_file, root)), nl=False)


if __name__ == "__main__":
    main()
