from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
import os

# The container image substitutes this default during docker build
DEFAULT_MOUNT_DIR = Path("/gem5")
MOUNT_DIR_ENV = "mountdir"

# Watermark baked into the image's ${mountdir}; it is hidden once a host volume is mounted over it
MOUNT_SENTINEL = ".in-docker-container"

GEM5_REPO_URL = "https://gem5.googlesource.com/public/gem5"

# http://www.gem5.org/dist/current/arm/* disappeared on 2020-01-29, the v22-0 dist is used instead
SYSTEM_RELEASES_URL = "http://dist.gem5.org/dist/v22-0/arm"
SYSTEM_IMAGE = "aarch-system-20220707.tar.bz2"
DISK_RELEASES_URL = f"{SYSTEM_RELEASES_URL}/disks"
DISK_IMAGE = "ubuntu-18.04-arm64-docker.img"

# Paths relative to the gem5 source checkout
SIMULATOR = "build/ARM/gem5.opt"
SE_SCRIPT = "configs/example/se.py"
FS_SCRIPT = "configs/example/fs.py"
HELLO_BINARY = "tests/test-progs/hello/bin/arm/linux/hello"
M5OP_ASM = "util/m5/src/abi/arm64/m5op.S"

SCONS = "/usr/bin/env python3 /usr/bin/scons"

# Full system boot settings (the VExpress_GEM5_V1 / armv8_gem5_v1_1cpu.dtb combo is legacy)
FS_MACHINE_TYPE = "VExpress_GEM5_V2"
FS_KERNEL = "vmlinux.arm64"
FS_BOOT_SCRIPT = "tests/compiler-tests.sh"


@dataclass(frozen=True)
class Gem5DevConfig:
    mount_dir: Path
    source_dir: Path = field(init=False)
    system_dir: Path = field(init=False)
    disk_image: str = DISK_IMAGE
    n_jobs: int = 1

    def __post_init__(self) -> None:
        # frozen dataclass, so the derived paths have to bypass __setattr__
        object.__setattr__(self, "source_dir", self.mount_dir / "source")
        object.__setattr__(self, "system_dir", self.mount_dir / "system")

    @property
    def sentinel(self) -> Path:
        return self.mount_dir / MOUNT_SENTINEL

    @property
    def simulator(self) -> Path:
        return self.source_dir / SIMULATOR

    @property
    def disk_image_path(self) -> Path:
        return self.system_dir / "disks" / self.disk_image

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Gem5DevConfig":
        environ = os.environ if environ is None else environ
        mount_dir = environ.get(MOUNT_DIR_ENV) or str(DEFAULT_MOUNT_DIR)
        return cls(mount_dir=Path(mount_dir), n_jobs=max(os.cpu_count() or 1, 1))
