from typing import List
import logging

from gem5dev.config import (
    Gem5DevConfig,
    SYSTEM_IMAGE,
    SYSTEM_RELEASES_URL,
    DISK_RELEASES_URL,
)
from gem5dev.guard import check_hostdir_mounted
from gem5dev.util.cli import Shell

# The archive ships boot_emm.arm64, but ARM/dev/arm/RealView.py requires boot.arm64 to exist
BOOTLOADER = "boot_emm.arm64"
BOOTLOADER_ALIAS = "boot.arm64"


def fetch_system_image_cmd() -> str:
    return f"wget -O - {SYSTEM_RELEASES_URL}/{SYSTEM_IMAGE} | tar xjvf -"


def fetch_disk_image_cmd(disk: str) -> str:
    return f"wget {DISK_RELEASES_URL}/{disk}.bz2"


def unpack_disk_image_cmd(disk: str) -> str:
    return f"lbzip2 -d {disk}.bz2"


def install_system(config: Gem5DevConfig, shell: Shell, args: List[str]) -> int:
    """
    Download the ARM full-system binaries and the disk image into system_dir.
    Each artifact is only fetched when it isn't already present, so this is safe to rerun.
    """
    check_hostdir_mounted(config)
    logging.info(f"installing ARM full-system image into {config.system_dir} ...")
    config.system_dir.mkdir(parents=True, exist_ok=True)

    binaries = config.system_dir / "binaries"
    if not (binaries / BOOTLOADER).is_file():
        logging.info(f"installing ARM full-system image {SYSTEM_IMAGE}")
        rc = shell.run(fetch_system_image_cmd(), cwd=config.system_dir)
        if rc != 0:
            return rc
        binaries.mkdir(exist_ok=True)
        alias = binaries / BOOTLOADER_ALIAS
        if not alias.is_symlink() and not alias.exists():
            alias.symlink_to(BOOTLOADER)
    else:
        logging.info("ARM full-system image is already installed.")

    disks = config.system_dir / "disks"
    disk = config.disk_image
    if not (disks / disk).is_file():
        disks.mkdir(exist_ok=True)
        logging.info(f"installing ARM disk image {disk}")
        if not (disks / f"{disk}.bz2").is_file():
            rc = shell.run(fetch_disk_image_cmd(disk), cwd=disks)
            if rc != 0:
                return rc
        logging.info("unzipping disk image")
        return shell.run(unpack_disk_image_cmd(disk), cwd=disks)
    logging.info("ARM disk image is already installed.")
    return 0
