"""Integrity checks over a derived version.

These back the ``check`` and ``assert-tag`` commands: comparing a recorded
version against the derived one, and refusing versions not derived from a tag.
"""

from dynver.describe import GitDescribeOutput, has_no_tags_of


class DynVerCheckError(Exception):
    """Base class for failed version integrity checks."""


class VersionMismatchError(DynVerCheckError):
    def __init__(self, version: str, dynver: str) -> None:
        super().__init__(f"Version and dynver mismatch - version: {version}, dynver: {dynver}")
        self.version = version
        self.dynver = dynver


class NoTagsError(DynVerCheckError):
    def __init__(self, version: str) -> None:
        super().__init__(
            "Failed to derive version from git tags. "
            f"Maybe run `git fetch --unshallow`? Version: {version}"
        )
        self.version = version


def check_version(version: str, dynver: str) -> bool:
    return version == dynver


def assert_version(version: str, dynver: str) -> None:
    """Raise VersionMismatchError unless the recorded version equals the derived one."""
    if not check_version(version, dynver):
        raise VersionMismatchError(version, dynver)


def assert_tag_version(output: GitDescribeOutput | None, version: str) -> None:
    """Raise NoTagsError when the describe output has no tag behind it.

    An absent output counts as having no tags. Shallow clones are the usual
    cause, hence the hint in the message.
    """
    if has_no_tags_of(output):
        raise NoTagsError(version)
