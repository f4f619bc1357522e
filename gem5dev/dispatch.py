from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional
import logging
import os

from more_itertools import peekable

from gem5dev.config import Gem5DevConfig, DEFAULT_MOUNT_DIR
from gem5dev.errors import UsageError
from gem5dev.util.cli import Shell, LONG_OPTION_FLAGS
from gem5dev.actions.source import install_source, update_source
from gem5dev.actions.system import install_system
from gem5dev.actions.build import build
from gem5dev.actions.run import run_se, run_fs, run_program_se, hello_world_se
from gem5dev.actions.compile import (
    compile_program,
    cross_compile_program,
    compile_hello_world,
    compile_mm,
)
from gem5dev.actions.shell import run_shell

Handler = Callable[[Gem5DevConfig, Shell, List[str]], int]


class Arity(Enum):
    # No arguments
    Nothing = 0
    # Consumes every following token up to the next command name
    Rest = 1


class Kind(Enum):
    # Runs [handler] and returns its exit status
    Run = 0
    # Prints the usage text for the dispatcher's own command table
    Usage = 1
    # Replaces the process and never returns (see actions/shell.py)
    Handoff = 2


@dataclass(frozen=True)
class Action:
    name: str
    # May reference {mount_dir}, {source_dir} and {system_dir}
    help: str
    handler: Optional[Handler]
    arity: Arity = Arity.Nothing
    usage: str = ""
    aliases: tuple = ()
    kind: Kind = Kind.Run


ACTIONS: List[Action] = [
    Action("help", "prints this help message", None, kind=Kind.Usage),
    Action(
        "install-source",
        "installs the gem5 git source repository into {source_dir}",
        install_source,
    ),
    Action(
        "update-source",
        "updates the gem5 git source repository in {source_dir}",
        update_source,
    ),
    Action(
        "install-system",
        "installs the gem5 ARM system images in {system_dir}",
        install_system,
    ),
    Action("build", "builds gem5 ARM binary", build),
    Action("run-se", "runs gem5 ARM in Syscall Emulation mode", run_se),
    Action("run-fs", "runs gem5 ARM in Full System mode", run_fs),
    Action(
        "compile-hello-world",
        "compiles a simple hello world program for gem5 ARM",
        compile_hello_world,
    ),
    Action("compile-mm", "compiles the blocked matrix multiplication program", compile_mm),
    Action(
        "compile-program",
        "compiles a .c/.cpp program for gem5 ARM",
        compile_program,
        Arity.Rest,
        "<file> [flags...]",
    ),
    Action(
        "cross-compile-program",
        "cross-compiles a .c/.cpp program with the aarch64 toolchain",
        cross_compile_program,
        Arity.Rest,
        "<file> [flags...]",
    ),
    Action(
        "run-program-se",
        "runs a program in gem5 ARM Syscall Emulation mode",
        run_program_se,
        Arity.Rest,
        "<binary> [args...]",
    ),
    Action("hello-world-se", "runs the compiled hello world program in gem5 ARM", hello_world_se),
    Action(
        "shell", "enters into an interactive shell", None, aliases=("bash",), kind=Kind.Handoff
    ),
]


def command_table(actions: Iterable[Action]) -> Dict[str, Action]:
    table: Dict[str, Action] = {}
    for action in actions:
        for name in (action.name,) + tuple(action.aliases):
            assert name not in table, f"duplicate command {name}"
            table[name] = action
    return table


COMMANDS: Dict[str, Action] = command_table(ACTIONS)


def usage(
    commands: Optional[Mapping[str, Action]] = None, config: Optional[Gem5DevConfig] = None
) -> str:
    config = config if config is not None else Gem5DevConfig(mount_dir=DEFAULT_MOUNT_DIR)
    paths = {
        "mount_dir": config.mount_dir,
        "source_dir": config.source_dir,
        "system_dir": config.system_dir,
    }
    actions = list(dict.fromkeys((commands if commands is not None else COMMANDS).values()))
    labels = [
        " | ".join((a.name,) + tuple(a.aliases)) + (f" {a.usage}" if a.usage else "")
        for a in actions
    ]
    width = max(len(label) for label in labels) + 4
    lines = ["Usage: gem5-dev <cmd>...", "Where <cmd> is one of:"]
    for label, action in zip(labels, actions):
        lines.append(f"  {label} {'.' * (width - len(label))} {action.help.format(**paths)}")
    lines.append(
        "Tokens starting with -/+ (and -o/+o <name>) are passed on to the shell's set builtin."
    )
    return "\n".join(lines)


class Dispatcher:
    """Runs command tokens left to right, each starting from the directory we were launched in."""

    def __init__(
        self, config: Gem5DevConfig, shell: Shell, commands: Optional[Mapping[str, Action]] = None
    ) -> None:
        self.config = config
        self.shell = shell
        self.commands = COMMANDS if commands is None else commands
        self.initial_dir = Path.cwd()

    def usage(self) -> str:
        return usage(self.commands, self.config)

    def take_args(self, tokens: peekable) -> List[str]:
        args: List[str] = []
        while tokens and tokens.peek() not in self.commands:
            args.append(next(tokens))
        return args

    def dispatch(self, argv: Iterable[str]) -> int:
        tokens = peekable(argv)
        if not tokens:
            print(self.usage())
            return 0
        for token in tokens:
            action = self.commands.get(token)
            if action is None:
                if token in LONG_OPTION_FLAGS:
                    self.shell.set_option(token, next(tokens, None))
                    continue
                if token.startswith(("-", "+")):
                    self.shell.set_option(token)
                    continue
                raise UsageError(f"unknown command '{token}'")
            if action.kind is Kind.Usage:
                print(self.usage())
                continue
            if action.kind is Kind.Handoff:
                # does not return
                run_shell(self.config, self.shell)
            args = self.take_args(tokens) if action.arity is Arity.Rest else []
            logging.debug(f"dispatching {action.name} {args}")
            assert action.handler is not None
            try:
                rc = action.handler(self.config, self.shell, args)
            finally:
                os.chdir(self.initial_dir)
            if rc != 0:
                return rc
        return 0
