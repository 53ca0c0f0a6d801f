from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from benchgen.platforms import DEFAULT_COMPILER_PATHS, PlatformTarget


class StaleFilePolicy(str, Enum):
    OVERWRITE = "overwrite"  # leave files that no longer match an input
    CLEAN = "clean"  # empty the output directory before generating


class BatchCompileConfig(BaseModel):
    """Command-line convention for the directory-scoped schema compiler."""

    model_config = ConfigDict(extra="forbid")

    source_dir: Path = Path("schemas")
    out_dir: Path = Path("src/bebops")
    schema_suffix: str = ".bop"
    mode: Literal["per_file", "per_directory"] = "per_file"
    file_args: list[str] = Field(default_factory=lambda: ["--files", "{input}", "--rust", "{output}"])
    dir_args: list[str] = Field(default_factory=lambda: ["--dir", "{input_dir}", "--rust", "{output_dir}"])
    output_name: str = "{stem}.rs"
    timeout: Optional[float] = None
    stale_files: StaleFilePolicy = StaleFilePolicy.OVERWRITE

    @field_validator("schema_suffix")
    @classmethod
    def _dotted_suffix(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("schema_suffix must not be empty")
        return v if v.startswith(".") else f".{v}"


class GeneratorConfig(BaseModel):
    """Command-line convention for the second-format generator."""

    model_config = ConfigDict(extra="forbid")

    executable: str = "protoc"
    out_arg: str = "--rust_out={out_dir}"
    include_arg: str = "-I{include}"
    output_name: str = "{stem}.rs"
    timeout: Optional[float] = None
    stale_files: StaleFilePolicy = StaleFilePolicy.OVERWRITE


class CodegenRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    out_dir: Path
    inputs: list[Path] = Field(default_factory=list)
    includes: list[Path] = Field(default_factory=list)


class CodegenTarget(BaseModel):
    """The single-target section of a build config."""

    model_config = ConfigDict(extra="forbid")

    out_dir: Path = Path("src/protos")
    inputs: list[Path] = Field(default_factory=lambda: [Path("schemas/jazz.proto")])
    includes: list[Path] = Field(default_factory=lambda: [Path("schemas")])
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)


class BuildConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    compiler_paths: dict[PlatformTarget, str] = Field(default_factory=lambda: dict(DEFAULT_COMPILER_PATHS))
    batch: BatchCompileConfig = Field(default_factory=BatchCompileConfig)
    codegen: CodegenTarget = Field(default_factory=CodegenTarget)
    parallel: bool = False

    def resolved(self, root: Path) -> "BuildConfig":
        """Return a copy with every relative path anchored at *root*."""

        def anchor(p: Path) -> Path:
            return p if p.is_absolute() else root / p

        paths = {k: str(anchor(Path(v))) for k, v in self.compiler_paths.items()}
        batch = self.batch.model_copy(
            update={"source_dir": anchor(self.batch.source_dir), "out_dir": anchor(self.batch.out_dir)}
        )
        generator = self.codegen.generator
        exe = Path(generator.executable)
        if len(exe.parts) > 1:
            generator = generator.model_copy(update={"executable": str(anchor(exe))})
        codegen = self.codegen.model_copy(
            update={
                "generator": generator,
                "out_dir": anchor(self.codegen.out_dir),
                "inputs": [anchor(p) for p in self.codegen.inputs],
                "includes": [anchor(p) for p in self.codegen.includes],
            }
        )
        return self.model_copy(update={"compiler_paths": paths, "batch": batch, "codegen": codegen})

    def codegen_request(self) -> CodegenRequest:
        return CodegenRequest(
            out_dir=self.codegen.out_dir,
            inputs=list(self.codegen.inputs),
            includes=list(self.codegen.includes),
        )
