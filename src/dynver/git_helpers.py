"""Git process runner: the exact command lines the engine depends on.

Each command is kept as a single string and split on whitespace before
running, so no shell is involved and ``v[0-9]*`` reaches git unexpanded.
"""

from typing import Protocol

from dynver.utils import log, run_cmd

DESCRIBE_CMD = "git describe --long --tags --abbrev=8 --match v[0-9]* --always --dirty=+{timestamp}"
DISTANCE_CMD = "git rev-list --count HEAD"
# "^1" follows only the first parent, so the lineage stays on the mainline
PARENT_CMD = "git --no-pager log --pretty=%H -n 1 HEAD^1"
PARENT_DESCRIBE_CMD = "git describe --tags --abbrev=0 --always {parent_hash}"


class GitCommandError(RuntimeError):
    """A git command exited non-zero or could not be started.

    ``returncode`` is None when the process never ran (git missing,
    working directory missing).
    """

    def __init__(self, command: str, returncode: int | None, stderr: str = "") -> None:
        detail = stderr.strip() or ("could not start" if returncode is None else f"exit {returncode}")
        super().__init__(f"{command}: {detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class GitRunner(Protocol):
    def __call__(self, command: str, wd: str | None = None) -> str: ...


def describe_command(timestamp: str) -> str:
    return DESCRIBE_CMD.format(timestamp=timestamp)


def parent_describe_command(parent_hash: str) -> str:
    return PARENT_DESCRIBE_CMD.format(parent_hash=parent_hash)


def run_git(command: str, wd: str | None = None) -> str:
    """Run a git command line and return its stdout.

    stderr is captured and only kept for the error. Raises GitCommandError
    on a non-zero exit or when the process cannot be spawned.
    """
    try:
        result = run_cmd(command.split(), cwd=wd)
    except OSError as exc:
        log(f"{command}: {exc}", style="yellow")
        raise GitCommandError(command, None, str(exc)) from exc
    if result.returncode != 0:
        log(f"{command}: exit {result.returncode}", style="yellow")
        raise GitCommandError(command, result.returncode, result.stderr or "")
    return result.stdout
