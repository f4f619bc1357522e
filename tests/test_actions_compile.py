import pytest

from gem5dev.config import Gem5DevConfig
from gem5dev.errors import MissingArtifactError, UsageError
from gem5dev.actions.compile import *

from conftest import RecordingShell


class TestActionsCompile:
    def test_select_compiler(self) -> None:
        assert select_compiler("foo.c", NATIVE) == "gcc"
        assert select_compiler("foo.cpp", NATIVE) == "g++"
        assert select_compiler("foo.c", CROSS) == "aarch64-linux-gnu-gcc"
        assert select_compiler("foo.cpp", CROSS) == "aarch64-linux-gnu-g++"
        with pytest.raises(UsageError, match="not supported"):
            select_compiler("foo.py", NATIVE)
        with pytest.raises(UsageError, match="not supported"):
            select_compiler("foo", NATIVE)

    def test_compile_cmd_default_flags(self) -> None:
        assert compile_cmd("foo.cpp", NATIVE) == (
            "g++ foo.cpp -o foo -static -Iinclude util/m5/src/abi/arm64/m5op.S -O3 -std=c++11"
        )
        assert compile_cmd("bench/foo.c", CROSS) == (
            "aarch64-linux-gnu-gcc bench/foo.c -o bench/foo -static -Iinclude"
            " util/m5/src/abi/arm64/m5op.S -O3 -std=c11"
        )

    def test_compile_cmd_user_flags(self) -> None:
        assert compile_cmd("foo.cpp", NATIVE, ["-O2"]) == "g++ foo.cpp -o foo -O2"
        assert (
            compile_cmd("foo.c", NATIVE, ["-DMSG=hello world"])
            == "gcc foo.c -o foo '-DMSG=hello world'"
        )

    def test_compile_program(self, source: Gem5DevConfig, shell: RecordingShell) -> None:
        assert compile_program(source, shell, ["foo.cpp", "-O2"]) == 0
        assert shell.calls == [("g++ foo.cpp -o foo -O2", source.source_dir, None)]

    def test_cross_compile_program(self, source: Gem5DevConfig, shell: RecordingShell) -> None:
        assert cross_compile_program(source, shell, ["foo.c"]) == 0
        assert shell.cmds == [compile_cmd("foo.c", CROSS)]

    def test_unsupported_extension(self, source: Gem5DevConfig, shell: RecordingShell) -> None:
        with pytest.raises(UsageError, match="extension '.py' not supported"):
            compile_program(source, shell, ["foo.py"])
        assert shell.calls == []

    def test_missing_file_argument(self, source: Gem5DevConfig, shell: RecordingShell) -> None:
        with pytest.raises(UsageError):
            cross_compile_program(source, shell, [])

    def test_missing_source_dir(self, mounted: Gem5DevConfig, shell: RecordingShell) -> None:
        with pytest.raises(MissingArtifactError):
            compile_program(mounted, shell, ["foo.c"])
        assert shell.calls == []

    def test_compile_hello_world(self, source: Gem5DevConfig, shell: RecordingShell) -> None:
        compile_hello_world(source, shell, [])
        assert shell.cmds == [
            "g++ hello_world.cpp -o hello_world -static -Iinclude util/m5/src/abi/arm64/m5op.S"
            " -O3 -std=c++11"
        ]

    def test_compile_mm(self, source: Gem5DevConfig, shell: RecordingShell) -> None:
        compile_mm(source, shell, [])
        assert shell.cmds == [
            "g++ mm.cpp -o mm16 -static -Iinclude util/m5/src/abi/arm64/m5op.S -O3 -std=c++11"
            " -DBLOCK_SIZE=16"
        ]
