import subprocess
import logging
import os
import sys
from pathlib import Path
from typing import List, Mapping, NoReturn, Optional, Sequence

from gem5dev.errors import UsageError

# Single-letter options accepted by bash's `set` builtin
BASH_SET_OPTIONS = set("abefhkmnptuvxBCEHPT")

# Long names accepted by `set -o <name>` / `set +o <name>`
BASH_SET_LONG_OPTIONS = {
    "allexport",
    "braceexpand",
    "emacs",
    "errexit",
    "errtrace",
    "functrace",
    "hashall",
    "histexpand",
    "history",
    "ignoreeof",
    "interactive-comments",
    "keyword",
    "monitor",
    "noclobber",
    "noexec",
    "noglob",
    "nolog",
    "notify",
    "nounset",
    "onecmd",
    "physical",
    "pipefail",
    "posix",
    "privileged",
    "verbose",
    "vi",
    "xtrace",
}

# Flags that take the following token as an option name
LONG_OPTION_FLAGS = ("-o", "+o")


class Shell:
    """Runs command lines through bash, with any forwarded `set` options applied first."""

    def __init__(self, bash: str = "/bin/bash") -> None:
        self.bash = bash
        self.options: List[str] = []

    def set_option(self, flag: str, name: Optional[str] = None) -> None:
        if flag in LONG_OPTION_FLAGS:
            if name not in BASH_SET_LONG_OPTIONS:
                raise UsageError(
                    f"shell option '{flag}' needs a `set -o` option name, got {name!r}"
                )
            self.options.append(f"{flag} {name}")
            tracing = name == "xtrace"
        elif flag in ("-", "--"):
            # `set -` turns tracing off, `set --` only ends option processing
            self.options.append(flag)
            tracing = flag == "-"
        else:
            if flag[:1] not in ("-", "+") or len(flag) < 2:
                raise UsageError(f"invalid shell option '{flag}'")
            if not all(c in BASH_SET_OPTIONS for c in flag[1:]):
                raise UsageError(f"invalid shell option '{flag}'")
            self.options.append(flag)
            tracing = "x" in flag[1:]
        # -x / +x also toggles our own command tracing
        if tracing:
            traced = flag[0] == "-" and flag != "-"
            logging.getLogger().setLevel(logging.DEBUG if traced else logging.INFO)

    def wrap(self, cmd: str) -> str:
        if not self.options:
            return cmd
        # one `set` per option, so a forwarded `--` cannot swallow the options after it
        return " && ".join([f"set {option}" for option in self.options] + [cmd])

    def run(self, cmd: str, cwd: Path, env: Optional[Mapping[str, str]] = None) -> int:
        logging.info(f'Running "{cmd}"')
        full_env = None if env is None else {**os.environ, **env}
        # stdout/stderr are inherited, the tool talks to the user directly
        result = subprocess.run([self.bash, "-c", self.wrap(cmd)], cwd=cwd, env=full_env)
        if result.returncode != 0:
            logging.debug(f"{cmd} exited with returncode {result.returncode}")
        return result.returncode

    def exec(self, argv: Sequence[str], cwd: Path) -> NoReturn:
        logging.info(f'Handing the terminal over to "{" ".join(argv)}" in {cwd}')
        os.chdir(cwd)
        sys.stdout.flush()
        sys.stderr.flush()
        os.execv(argv[0], list(argv))
