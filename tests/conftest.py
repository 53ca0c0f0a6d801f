"""Shared fixtures: fake schema compiler / generator scripts and a project tree."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

# Mimics bebopc: `--files IN --rust OUT` or `--dir IN_DIR --rust OUT_DIR`.
# A schema containing INVALID is rejected with a diagnostic on stderr.
FAKE_BEBOPC = textwrap.dedent(
    '''
    import sys
    from pathlib import Path

    LOG = Path(__file__).with_suffix(".log")

    def compile_one(src, dest):
        with open(LOG, "a") as f:
            f.write(src.name + "\\n")
        text = src.read_text()
        if "INVALID" in text:
            print(f"{src}: error: unexpected token 'INVALID'", file=sys.stderr)
            sys.exit(1)
        dest.write_text(f"// generated from {src.name}\\n" + text)

    args = sys.argv[1:]
    if args[0] == "--files":
        compile_one(Path(args[1]), Path(args[3]))
    elif args[0] == "--dir":
        out_dir = Path(args[3])
        for src in sorted(Path(args[1]).glob("*.bop")):
            compile_one(src, out_dir / (src.stem + ".rs"))
    else:
        print(f"unknown arguments: {args}", file=sys.stderr)
        sys.exit(2)
    '''
)

# Mimics protoc: `--rust_out=DIR -IINC... inputs...`; imports must resolve via -I.
FAKE_PROTOC = textwrap.dedent(
    '''
    import re
    import sys
    from pathlib import Path

    LOG = Path(__file__).with_suffix(".log")
    out_dir = None
    includes = []
    inputs = []
    for arg in sys.argv[1:]:
        if arg.startswith("--rust_out="):
            out_dir = Path(arg.split("=", 1)[1])
        elif arg.startswith("-I"):
            includes.append(Path(arg[2:]))
        else:
            inputs.append(Path(arg))

    with open(LOG, "a") as f:
        f.write(" ".join(sys.argv[1:]) + "\\n")

    for src in inputs:
        for name in re.findall(r'import "([^"]+)";', src.read_text()):
            if not any((inc / name).is_file() for inc in includes):
                print(f"{src.name}: Import \\"{name}\\" was not found.", file=sys.stderr)
                sys.exit(1)
    for src in inputs:
        (out_dir / (src.stem + ".rs")).write_text(f"// generated from {src.name}\\n")
    '''
)

SLEEPER = "import time\ntime.sleep(30)\n"


def _write_tool(directory: Path, name: str, body: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(body)
    return path


@pytest.fixture()
def fake_bebopc(tmp_path: Path) -> Path:
    return _write_tool(tmp_path / "bin", "bebopc.py", FAKE_BEBOPC)


@pytest.fixture()
def fake_protoc(tmp_path: Path) -> Path:
    return _write_tool(tmp_path / "bin", "protoc.py", FAKE_PROTOC)


@pytest.fixture()
def sleeper(tmp_path: Path) -> Path:
    return _write_tool(tmp_path / "bin", "sleeper.py", SLEEPER)


def invocations(tool: Path) -> list[str]:
    """Lines a fake tool appended to its .log file."""
    log = tool.with_suffix(".log")
    return log.read_text().splitlines() if log.exists() else []


@pytest.fixture()
def make_schemas(tmp_path: Path) -> Callable[..., Path]:
    """Return a callable writing ``{filename: text}`` into a fresh schemas directory."""

    def _make(files: dict[str, str], name: str = "schemas") -> Path:
        d = tmp_path / name
        d.mkdir(parents=True, exist_ok=True)
        for filename, text in files.items():
            (d / filename).write_text(text)
        return d

    return _make


@pytest.fixture()
def project(tmp_path: Path, fake_bebopc: Path, fake_protoc: Path) -> Path:
    """A benchmark project: a.bop, b.bop, jazz.proto importing common.proto."""
    root = tmp_path / "project"
    schemas = root / "schemas"
    schemas.mkdir(parents=True)
    (schemas / "a.bop").write_text("struct A { int32 x; }\n")
    (schemas / "b.bop").write_text("struct B { string y; }\n")
    (schemas / "common.proto").write_text('syntax = "proto3";\nmessage Common {}\n')
    (schemas / "jazz.proto").write_text('syntax = "proto3";\nimport "common.proto";\nmessage Song {}\n')
    return root
