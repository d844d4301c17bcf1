"""Derive a version string for a source tree from its git history."""

from dynver.config import DynVerConfig
from dynver.describe import GitCommitSuffix, GitDescribeOutput, GitDirtySuffix, GitRef
from dynver.engine import DynVer
from dynver.grammar import DescribeParseError, parse_describe_output

__all__ = [
    "DescribeParseError",
    "DynVer",
    "DynVerConfig",
    "GitCommitSuffix",
    "GitDescribeOutput",
    "GitDirtySuffix",
    "GitRef",
    "parse_describe_output",
]
