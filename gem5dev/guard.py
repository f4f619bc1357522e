from gem5dev.config import Gem5DevConfig
from gem5dev.errors import HostDirNotMountedError, MissingArtifactError


def check_hostdir_mounted(config: Gem5DevConfig) -> None:
    # The image ships a watermark file in mount_dir which is only visible when no volume is mounted
    if config.sentinel.exists():
        raise HostDirNotMountedError(
            f"No host volume mounted to container's {config.mount_dir} directory.\n"
            "Run:\n"
            f"  docker run -v $GEM5_HOST_WORKDIR:{config.mount_dir} -it gem5-dev [<cmd>]"
        )


def require_source_dir(config: Gem5DevConfig) -> None:
    check_hostdir_mounted(config)
    if not config.source_dir.exists():
        raise MissingArtifactError(f"gem5 source repository not found at {config.source_dir}.")


def require_simulator(config: Gem5DevConfig) -> None:
    require_source_dir(config)
    if not config.simulator.exists():
        raise MissingArtifactError(f"gem5 simulator binary {config.simulator} not found.")


def require_system_dir(config: Gem5DevConfig) -> None:
    if not config.system_dir.exists():
        raise MissingArtifactError(f"gem5 ARM full system image not found at {config.system_dir}.")
