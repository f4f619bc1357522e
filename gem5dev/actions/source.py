from pathlib import Path
from typing import List
import logging

from gem5dev.config import Gem5DevConfig, GEM5_REPO_URL
from gem5dev.guard import check_hostdir_mounted
from gem5dev.util.cli import Shell


def is_source_installed(config: Gem5DevConfig) -> bool:
    return (config.source_dir / ".git").exists()


def clone_cmd(config: Gem5DevConfig) -> str:
    return f"git clone {GEM5_REPO_URL} {config.source_dir}"


# Clone the gem5 repository into source_dir, unless a checkout is already there
def install_source(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    check_hostdir_mounted(config)
    if is_source_installed(config):
        logging.info("gem5 source repository is already installed.")
        return 0
    logging.info(f"installing gem5 source repository into {config.source_dir} ...")
    # git creates the checkout and any missing parents itself; mount_dir may not exist yet
    return shell.run(clone_cmd(config), cwd=Path.cwd())


# Pull updates into an existing checkout; a missing checkout is reported, not installed
def update_source(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    check_hostdir_mounted(config)
    if not is_source_installed(config):
        logging.info(f"gem5 source repository not found at {config.source_dir}.")
        return 0
    logging.info(f"updating gem5 source repository at {config.source_dir} ...")
    return shell.run("git pull", cwd=config.source_dir)
