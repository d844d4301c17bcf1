"""Configuration defaults for version derivation.

The engine has exactly two tunable parameters: the separator placed between
the tag and the commit distance (and between the version and a dirty
timestamp), and whether snapshot versions get a ``-SNAPSHOT`` suffix.
"""

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Named defaults
# ---------------------------------------------------------------------------

DEFAULT_SEPARATOR = "+"
DEFAULT_SONATYPE_SNAPSHOTS = False
SNAPSHOT_SUFFIX = "-SNAPSHOT"

# Environment variables read by the command line
SEPARATOR_ENV_VAR = "DYNVER_SEPARATOR"
SONATYPE_ENV_VAR = "DYNVER_SONATYPE_SNAPSHOTS"


@dataclass(frozen=True)
class DynVerConfig:
    """Fixed configuration for one engine instance.

    ``wd`` is the working directory git runs in; None means the process's
    current directory.
    """

    wd: str | None = None
    separator: str = DEFAULT_SEPARATOR
    sonatype_snapshots: bool = DEFAULT_SONATYPE_SNAPSHOTS
