"""Grammar for normalized ``git describe`` output.

Pure function: raw text in, structured result out. No I/O.

The raw output of ``git describe --long --tags --abbrev=8 --always
--dirty=+<timestamp>`` is first normalized so the native ``-<N>-g<hash>``
commit suffix reads ``+<N>-<hash>``. The normalized text is then matched
against three alternatives, in priority order, each anchored at both ends:

1. tag form:  ``v1.2.3``, ``v1.2.3+4-0123abcd``, ``v1.2.3+4-0123abcd+20230101-1200``
2. sha form:  ``0123abcd`` or ``0123abcd+20230101-1200`` (no tag reachable)
3. head form: ``HEAD+20230101-1200`` (repository without commits)
"""

import re
from dataclasses import dataclass

from dynver.describe import GitCommitSuffix, GitDescribeOutput, GitDirtySuffix, GitRef

# ---------------------------------------------------------------------------
# Sub-patterns
# ---------------------------------------------------------------------------

OPT_WS = r"\s*"
TAG = r"(v[0-9][^+]*?)"
DISTANCE = r"\+([0-9]+)"
SHA = r"([0-9a-f]{8})"
HEAD = r"HEAD"
COMMIT_SUFFIX = rf"({DISTANCE}-{SHA})"
TSTAMP_SUFFIX = r"(?:\+([0-9]{8}-[0-9]{4}))"

# ---------------------------------------------------------------------------
# Alternatives, tried in this order
# ---------------------------------------------------------------------------

FROM_TAG = re.compile(rf"{OPT_WS}{TAG}{COMMIT_SUFFIX}?{TSTAMP_SUFFIX}?{OPT_WS}")
FROM_SHA = re.compile(rf"{OPT_WS}{SHA}{TSTAMP_SUFFIX}?{OPT_WS}")
FROM_HEAD = re.compile(rf"{OPT_WS}{HEAD}{TSTAMP_SUFFIX}{OPT_WS}")

# git's own "-<distance>-g<sha>" suffix
NATIVE_COMMIT_SUFFIX = re.compile(r"-([0-9]+)-g([0-9a-f]{8})")

FORM_TAG = "tag"
FORM_SHA = "sha"
FORM_HEAD = "head"


class DescribeParseError(ValueError):
    """Describe output matched none of the recognized forms."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Unrecognized git describe output: {text!r}")
        self.text = text


@dataclass(frozen=True)
class DescribeMatch:
    """Which alternative matched, plus the captured pieces.

    ``distance`` and ``sha`` are None when the match carried no commit suffix.
    """

    form: str
    ref: str
    distance: str | None = None
    sha: str | None = None
    dirty: str | None = None


def normalize_describe_output(raw: str) -> str:
    """Rewrite every ``-<N>-g<sha>`` into ``+<N>-<sha>``."""
    return NATIVE_COMMIT_SUFFIX.sub(r"+\1-\2", raw)


def match_describe_output(text: str) -> DescribeMatch | None:
    """Match normalized describe text against the three forms in priority order."""
    m = FROM_TAG.fullmatch(text)
    if m:
        tag, _, distance, sha, dirty = m.groups()
        return DescribeMatch(FORM_TAG, tag, distance, sha, dirty)
    m = FROM_SHA.fullmatch(text)
    if m:
        sha, dirty = m.groups()
        return DescribeMatch(FORM_SHA, sha, "0", "", dirty)
    m = FROM_HEAD.fullmatch(text)
    if m:
        return DescribeMatch(FORM_HEAD, "HEAD", "0", "", m.group(1))
    return None


def build_describe_output(match: DescribeMatch) -> GitDescribeOutput:
    """Turn a match into the aggregate, clearing a half-present commit suffix."""
    if match.distance is None or match.sha is None:
        commit = GitCommitSuffix(0, "")
    else:
        commit = GitCommitSuffix(int(match.distance), match.sha)
    return GitDescribeOutput(GitRef(match.ref), commit, GitDirtySuffix(match.dirty or ""))


def parse_describe_output(text: str) -> GitDescribeOutput:
    """Parse normalized describe text. Raises DescribeParseError on a mismatch."""
    match = match_describe_output(text)
    if match is None:
        raise DescribeParseError(text)
    return build_describe_output(match)


def parse_raw_describe_output(raw: str) -> GitDescribeOutput:
    """Normalize git's native output, then parse it."""
    return parse_describe_output(normalize_describe_output(raw))
