"""Shared test helpers: a fake git runner keyed by exact command line."""

from datetime import datetime

from dynver.git_helpers import GitCommandError, describe_command

NOW = datetime(2023, 1, 1, 12, 0)
DESCRIBE = describe_command("20230101-1200")


class FakeGit:
    """Answers git command lines from a table; unknown commands fail like git would."""

    def __init__(self, responses: dict[str, str] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, str | None]] = []

    def __call__(self, command: str, wd: str | None = None) -> str:
        self.calls.append((command, wd))
        if command not in self.responses:
            raise GitCommandError(command, 128, "fatal: not a git repository")
        return self.responses[command]

    @property
    def commands(self) -> list[str]:
        return [c for c, _ in self.calls]
