from pathlib import Path
from typing import List, Mapping, NoReturn, Optional, Sequence, Tuple

import pytest

from gem5dev.config import Gem5DevConfig, MOUNT_SENTINEL
from gem5dev.util.cli import Shell


class RecordingShell(Shell):
    """Records command lines instead of running them"""

    def __init__(self, returncode: int = 0) -> None:
        super().__init__()
        self.returncode = returncode
        self.calls: List[Tuple[str, Path, Optional[Mapping[str, str]]]] = []

    def run(self, cmd: str, cwd: Path, env: Optional[Mapping[str, str]] = None) -> int:
        self.calls.append((self.wrap(cmd), cwd, env))
        return self.returncode

    def exec(self, argv: Sequence[str], cwd: Path) -> NoReturn:
        self.calls.append((" ".join(argv), cwd, None))
        raise SystemExit(0)

    @property
    def cmds(self) -> List[str]:
        return [cmd for cmd, _, _ in self.calls]


@pytest.fixture
def config(tmp_path: Path) -> Gem5DevConfig:
    return Gem5DevConfig(mount_dir=tmp_path / "gem5", n_jobs=4)


@pytest.fixture
def mounted(config: Gem5DevConfig) -> Gem5DevConfig:
    config.mount_dir.mkdir()
    return config


@pytest.fixture
def unmounted(config: Gem5DevConfig) -> Gem5DevConfig:
    config.mount_dir.mkdir()
    (config.mount_dir / MOUNT_SENTINEL).touch()
    return config


@pytest.fixture
def source(mounted: Gem5DevConfig) -> Gem5DevConfig:
    (mounted.source_dir / ".git").mkdir(parents=True)
    return mounted


@pytest.fixture
def simulator(source: Gem5DevConfig) -> Gem5DevConfig:
    source.simulator.parent.mkdir(parents=True)
    source.simulator.touch()
    return source


@pytest.fixture
def shell() -> RecordingShell:
    return RecordingShell()
