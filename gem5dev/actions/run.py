from typing import List, Sequence
import logging
import shlex

from gem5dev.config import (
    Gem5DevConfig,
    SIMULATOR,
    SE_SCRIPT,
    FS_SCRIPT,
    HELLO_BINARY,
    FS_MACHINE_TYPE,
    FS_KERNEL,
    FS_BOOT_SCRIPT,
)
from gem5dev.errors import MissingArtifactError, UsageError
from gem5dev.guard import require_simulator, require_source_dir, require_system_dir
from gem5dev.util.cli import Shell


def se_cmd(binary: str, program_args: Sequence[str] = ()) -> str:
    cmd = f"{SIMULATOR} {SE_SCRIPT} -c {shlex.quote(binary)}"
    if program_args:
        # se.py forwards a single --options string to the simulated program, the = form keeps
        # a leading dash from being parsed as one of se.py's own flags
        cmd += f" --options={shlex.quote(' '.join(program_args))}"
    return cmd


def fs_cmd(config: Gem5DevConfig) -> str:
    flags = [
        f"--machine-type={FS_MACHINE_TYPE}",
        f"--kernel={FS_KERNEL}",
        f"--script={FS_BOOT_SCRIPT}",
        f"--disk-image={config.disk_image_path}",
    ]
    return f"{SIMULATOR} {FS_SCRIPT} {' '.join(flags)}"


def run_se(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    require_simulator(config)
    logging.info("running gem5 ARM binary in Syscall Emulation mode ...")
    return shell.run(se_cmd(HELLO_BINARY), cwd=config.source_dir)


def run_fs(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    require_source_dir(config)
    require_system_dir(config)
    require_simulator(config)
    logging.info("running gem5 ARM binary in Full System mode ...")
    # fs.py looks the kernel and disk names up under M5_PATH
    return shell.run(fs_cmd(config), cwd=config.source_dir, env={"M5_PATH": str(config.system_dir)})


def run_program_se(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    if not args:
        raise UsageError("run-program-se requires the name of a binary")
    binary, program_args = args[0], args[1:]
    require_simulator(config)
    if not (config.source_dir / binary).exists():
        raise MissingArtifactError(f"binary {binary} not found.")
    logging.info("running gem5 ARM binary in Syscall Emulation mode ...")
    return shell.run(se_cmd(binary, program_args), cwd=config.source_dir)


def hello_world_se(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    return run_program_se(config, shell, ["hello_world"])
