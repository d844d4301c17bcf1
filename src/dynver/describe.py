"""Structured git describe output and the version strings formatted from it.

A describe result is the aggregate of three small values: the reference
(a ``v<digit>`` tag, a bare commit hash, or ``HEAD``), the commit-distance
suffix, and the dirty suffix. All formatting and classification is pure;
nothing here talks to git.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime

from dynver.config import DEFAULT_SEPARATOR, SNAPSHOT_SUFFIX

_TAG_PREFIX = re.compile(r"v[0-9]")


@dataclass(frozen=True)
class GitRef:
    value: str

    def is_tag(self) -> bool:
        """True when the reference looks like a version tag (``v`` then a digit)."""
        return _TAG_PREFIX.match(self.value) is not None

    def drop_v(self) -> "GitRef":
        if self.value.startswith("v"):
            return GitRef(self.value[1:])
        return self


@dataclass(frozen=True)
class GitCommitSuffix:
    """Commits since the referenced tag plus the abbreviated hash of HEAD.

    Distance and hash are set or cleared together; a non-positive distance
    or an empty hash both mean there is no commit suffix.
    """

    distance: int = 0
    sha: str = ""

    def is_empty(self) -> bool:
        return self.distance <= 0 or not self.sha

    def mk_string(self, prefix: str, infix: str, suffix: str) -> str:
        if not self.sha:
            return ""
        return f"{prefix}{self.distance}{infix}{self.sha}{suffix}"


@dataclass(frozen=True)
class GitDirtySuffix:
    """Marker for uncommitted changes, normally a ``YYYYMMDD-HHMM`` timestamp.

    The empty string means the tree is clean.
    """

    suffix: str = ""

    def mk_string(self, prefix: str, suffix: str) -> str:
        return prefix + self.suffix + suffix if self.suffix else ""

    def as_suffix(self, separator: str) -> str:
        return self.mk_string(separator, "")


@dataclass(frozen=True)
class GitDescribeOutput:
    ref: GitRef
    commit_suffix: GitCommitSuffix = GitCommitSuffix()
    dirty_suffix: GitDirtySuffix = GitDirtySuffix()

    def version(self, separator: str = DEFAULT_SEPARATOR) -> str:
        """Format the describe result as a version string.

        Clean on a tag: the bare tag. Past a tag: tag, separator, distance
        and hash. No tag at all: distance and the raw reference. A dirty
        suffix is appended after the separator in every case.
        """
        ds = self.dirty_suffix.as_suffix(separator)
        if self.is_clean_after_tag():
            return self.ref.drop_v().value + ds
        if self.commit_suffix.sha:
            return (
                self.ref.drop_v().value
                + self.commit_suffix.mk_string(separator, "-", "")
                + ds
            )
        return f"{self.commit_suffix.distance}-{self.ref.value}{ds}"

    def sonatype_version(self, separator: str = DEFAULT_SEPARATOR) -> str:
        """Like ``version`` but with ``-SNAPSHOT`` appended to snapshots."""
        if self.is_snapshot():
            return self.version(separator) + SNAPSHOT_SUFFIX
        return self.version(separator)

    def previous_version(self) -> str:
        return self.ref.drop_v().value

    def is_clean_after_tag(self) -> bool:
        return self.ref.is_tag() and self.commit_suffix.is_empty() and not self.is_dirty()

    def has_no_tags(self) -> bool:
        return not self.ref.is_tag()

    def is_dirty(self) -> bool:
        return bool(self.dirty_suffix.suffix)

    def is_snapshot(self) -> bool:
        return self.has_no_tags() or not self.commit_suffix.is_empty() or self.is_dirty()

    def is_version_stable(self) -> bool:
        # Independent of tags and distance: only local modifications make a
        # version unstable.
        return not self.is_dirty()

    def with_distance(self, distance: int) -> "GitDescribeOutput":
        """Return a copy whose commit distance is replaced, hash untouched."""
        return replace(self, commit_suffix=replace(self.commit_suffix, distance=distance))


# ---------------------------------------------------------------------------
# Timestamps and the fallback version
# ---------------------------------------------------------------------------


def timestamp(now: datetime) -> str:
    """Render an instant as ``YYYYMMDD-HHMM`` in the local timezone.

    Naive datetimes are taken to already be local time.
    """
    if now.tzinfo is not None:
        now = now.astimezone()
    return now.strftime("%Y%m%d-%H%M")


def fallback(separator: str, now: datetime) -> str:
    """Version used when git produced nothing usable."""
    return f"HEAD{separator}{timestamp(now)}"


# ---------------------------------------------------------------------------
# Optional describe output
#
# An absent result (no repository, no git, command failure) is treated as
# the least trustworthy state: always a snapshot, never stable, dirty and
# without tags.
# ---------------------------------------------------------------------------


def version_or_fallback(
    output: GitDescribeOutput | None, now: datetime, separator: str = DEFAULT_SEPARATOR
) -> str:
    if output is None:
        return fallback(separator, now)
    return output.version(separator)


def sonatype_version_or_fallback(
    output: GitDescribeOutput | None, now: datetime, separator: str = DEFAULT_SEPARATOR
) -> str:
    if output is None:
        return fallback(separator, now)
    return output.sonatype_version(separator)


def previous_version_of(output: GitDescribeOutput | None) -> str | None:
    return output.previous_version() if output is not None else None


def is_snapshot_of(output: GitDescribeOutput | None) -> bool:
    return output is None or output.is_snapshot()


def is_version_stable_of(output: GitDescribeOutput | None) -> bool:
    return output is not None and output.is_version_stable()


def is_dirty_of(output: GitDescribeOutput | None) -> bool:
    return output is None or output.is_dirty()


def has_no_tags_of(output: GitDescribeOutput | None) -> bool:
    return output is None or output.has_no_tags()
