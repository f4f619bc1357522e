from typing import NoReturn

from gem5dev.config import Gem5DevConfig, SCONS, SIMULATOR
from gem5dev.errors import MissingArtifactError
from gem5dev.guard import check_hostdir_mounted
from gem5dev.util.cli import Shell

LOGIN_SHELL = ["/bin/bash", "-l"]


def build_hint(config: Gem5DevConfig) -> str:
    return f"To build gem5, run: \n  cd {config.source_dir}; {SCONS} -j $(nproc) {SIMULATOR}"


def run_shell(config: Gem5DevConfig, shell: Shell) -> NoReturn:
    """
    Terminal handoff: replaces this process with an interactive login shell in mount_dir.
    Control never comes back to the dispatcher, so any commands after `shell` are dropped.
    """
    check_hostdir_mounted(config)
    if not config.mount_dir.is_dir():
        raise MissingArtifactError(f"mount directory {config.mount_dir} not found.")
    print(build_hint(config), flush=True)
    shell.exec(LOGIN_SHELL, cwd=config.mount_dir)
