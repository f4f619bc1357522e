from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Optional, Sequence
import logging
import shlex

from gem5dev.config import Gem5DevConfig, M5OP_ASM
from gem5dev.errors import UsageError
from gem5dev.guard import require_source_dir
from gem5dev.util.cli import Shell

# Every program links the m5 pseudo-op stubs so it can talk to the simulator
BASE_FLAGS = ["-static", "-Iinclude", M5OP_ASM, "-O3"]


@dataclass(frozen=True)
class Toolchain:
    c: str
    cpp: str


NATIVE = Toolchain(c="gcc", cpp="g++")
CROSS = Toolchain(c="aarch64-linux-gnu-gcc", cpp="aarch64-linux-gnu-g++")


def default_flags(source: str) -> List[str]:
    std = "-std=c++11" if PurePath(source).suffix == ".cpp" else "-std=c11"
    return BASE_FLAGS + [std]


def select_compiler(source: str, toolchain: Toolchain) -> str:
    ext = PurePath(source).suffix
    if ext == ".c":
        return toolchain.c
    if ext == ".cpp":
        return toolchain.cpp
    raise UsageError(f"extension '{ext}' not supported, expected a .c or .cpp file")


def compile_cmd(
    source: str, toolchain: Toolchain, flags: Sequence[str] = (), output: Optional[str] = None
) -> str:
    compiler = select_compiler(source, toolchain)
    output = output if output is not None else str(PurePath(source).with_suffix(""))
    flags = list(flags) if flags else default_flags(source)
    return f"{compiler} {shlex.quote(source)} -o {shlex.quote(output)} {shlex.join(flags)}"


def _compile(
    config: Gem5DevConfig, shell: Shell, args: List[str], toolchain: Toolchain, verb: str
) -> int:
    if not args:
        raise UsageError(f"{verb} requires the name of a .c or .cpp source file")
    source, flags = args[0], args[1:]
    # an unsupported extension fails before anything touches the source tree
    cmd = compile_cmd(source, toolchain, flags)
    require_source_dir(config)
    logging.info(f"compiling {source} ...")
    return shell.run(cmd, cwd=config.source_dir)


def compile_program(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    return _compile(config, shell, args, NATIVE, "compile-program")


def cross_compile_program(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    return _compile(config, shell, args, CROSS, "cross-compile-program")


def compile_hello_world(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    return compile_program(config, shell, ["hello_world.cpp"])


# Matrix multiplication benchmark, blocked for 16x16 tiles
def compile_mm(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    require_source_dir(config)
    logging.info("compiling matrix multiplication program ...")
    cmd = compile_cmd(
        "mm.cpp", NATIVE, default_flags("mm.cpp") + ["-DBLOCK_SIZE=16"], output="mm16"
    )
    return shell.run(cmd, cwd=config.source_dir)
