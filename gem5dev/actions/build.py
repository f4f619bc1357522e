from typing import List
import logging

from gem5dev.config import Gem5DevConfig, SCONS, SIMULATOR
from gem5dev.guard import require_source_dir
from gem5dev.util.cli import Shell


def scons_cmd(n_jobs: int) -> str:
    # inst-constrs-3.cc is a memory hog; if the container runs out of memory, build
    # build/ARM/arch/arm/generated/inst-constrs-3.o alone first
    return f"{SCONS} -j {n_jobs} {SIMULATOR}"


def build(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    require_source_dir(config)
    logging.info("building gem5 ARM binary ...")
    return shell.run(scons_cmd(config.n_jobs), cwd=config.source_dir)
