"""Engine facade: derive the current version, stability and previous version.

Every query runs git afresh through the injected runner; nothing is cached
between calls. Git failures become None (or the fallback version), so every
query is total.
"""

from datetime import datetime

from dynver.config import DEFAULT_SEPARATOR, DEFAULT_SONATYPE_SNAPSHOTS, DynVerConfig
from dynver.describe import (
    GitDescribeOutput,
    fallback,
    has_no_tags_of,
    is_dirty_of,
    is_snapshot_of,
    is_version_stable_of,
    previous_version_of,
    sonatype_version_or_fallback,
    timestamp,
    version_or_fallback,
)
from dynver.git_helpers import (
    DISTANCE_CMD,
    PARENT_CMD,
    GitCommandError,
    GitRunner,
    describe_command,
    parent_describe_command,
    run_git,
)
from dynver.grammar import DescribeParseError, parse_describe_output, parse_raw_describe_output
from dynver.utils import log


class DynVer:
    """Version derivation for one working directory and separator."""

    def __init__(
        self,
        wd: str | None = None,
        separator: str = DEFAULT_SEPARATOR,
        sonatype_snapshots: bool = DEFAULT_SONATYPE_SNAPSHOTS,
        runner: GitRunner = run_git,
    ) -> None:
        self.wd = wd
        self.separator = separator
        self.sonatype_snapshots = sonatype_snapshots
        self._runner = runner

    @classmethod
    def from_config(cls, config: DynVerConfig, runner: GitRunner = run_git) -> "DynVer":
        return cls(config.wd, config.separator, config.sonatype_snapshots, runner)

    @property
    def config(self) -> DynVerConfig:
        return DynVerConfig(self.wd, self.separator, self.sonatype_snapshots)

    def __repr__(self) -> str:
        return f"DynVer(wd={self.wd!r}, separator={self.separator!r})"

    # ------------------------------------------------------------------
    # Version strings
    # ------------------------------------------------------------------

    def version(self, now: datetime | None = None) -> str:
        now = now or datetime.now()
        return version_or_fallback(self.git_describe_output(now), now, self.separator)

    def sonatype_version(self, now: datetime | None = None) -> str:
        now = now or datetime.now()
        return sonatype_version_or_fallback(self.git_describe_output(now), now, self.separator)

    def resolved_version(self, now: datetime | None = None) -> str:
        """The sonatype or plain version, per this instance's configuration."""
        if self.sonatype_snapshots:
            return self.sonatype_version(now)
        return self.version(now)

    def make_dynver(self, now: datetime | None = None) -> str | None:
        """The derived version, or None instead of the fallback."""
        output = self.git_describe_output(now or datetime.now())
        return output.version(self.separator) if output is not None else None

    def previous_version(self) -> str | None:
        return previous_version_of(self.previous_stable_tag())

    def timestamp(self, now: datetime) -> str:
        return timestamp(now)

    def fallback(self, now: datetime) -> str:
        return fallback(self.separator, now)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_snapshot(self, now: datetime | None = None) -> bool:
        return is_snapshot_of(self.git_describe_output(now or datetime.now()))

    def is_version_stable(self, now: datetime | None = None) -> bool:
        return is_version_stable_of(self.git_describe_output(now or datetime.now()))

    def is_dirty(self, now: datetime | None = None) -> bool:
        return is_dirty_of(self.git_describe_output(now or datetime.now()))

    def has_no_tags(self, now: datetime | None = None) -> bool:
        return has_no_tags_of(self.git_describe_output(now or datetime.now()))

    # ------------------------------------------------------------------
    # Git queries
    # ------------------------------------------------------------------

    def git_describe_output(
        self, now: datetime | None = None, strict: bool = False
    ) -> GitDescribeOutput | None:
        """Describe the current checkout.

        Returns None when git fails. A grammar mismatch also yields None,
        unless ``strict`` is set, in which case DescribeParseError propagates.
        Without a reachable tag, the distance is replaced by the number of
        commits down to the root; if that count fails the result is None.
        """
        now = now or datetime.now()
        raw = self._exec(describe_command(timestamp(now)))
        if raw is None:
            return None
        try:
            output = parse_raw_describe_output(raw)
        except DescribeParseError as exc:
            log(str(exc), style="red")
            if strict:
                raise
            return None
        if not output.has_no_tags():
            return output
        distance = self.distance_to_root_commit()
        if distance is None:
            return None
        log(f"No tag reachable, using commit count {distance} as distance", style="dim")
        return output.with_distance(distance)

    def distance_to_root_commit(self) -> int | None:
        """Number of commits reachable from HEAD, or None if git fails."""
        out = self._exec(DISTANCE_CMD)
        if out is None:
            return None
        try:
            return int(out.strip())
        except ValueError:
            log(f"{DISTANCE_CMD}: unexpected output {out!r}", style="yellow")
            return None

    def previous_stable_tag(self) -> GitDescribeOutput | None:
        """Describe the first parent of HEAD: the last version seen before this commit.

        None at the root commit, on any git failure, or when the parent's
        describe output is empty or unrecognized.
        """
        parent_hash = self._exec_non_empty(PARENT_CMD)
        if parent_hash is None:
            log("No parent commit for HEAD", style="dim")
            return None
        tag = self._exec_non_empty(parent_describe_command(parent_hash.strip()))
        if tag is None:
            return None
        try:
            return parse_describe_output(tag)
        except DescribeParseError as exc:
            log(str(exc), style="yellow")
            return None

    def _exec(self, command: str) -> str | None:
        try:
            return self._runner(command, self.wd)
        except GitCommandError:
            return None

    def _exec_non_empty(self, command: str) -> str | None:
        out = self._exec(command)
        if out is None or not out.strip():
            return None
        return out
