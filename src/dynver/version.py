"""Version information for the dynver tool itself.

Reports the package version plus the version derived from this file's own
repository, so an editable install shows exactly what code is running.
Git runs against this file's repo, not the caller's cwd.
"""

import os

from dynver.engine import DynVer

PACKAGE_VERSION = "0.1.0"

_REPO_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def get_version() -> str:
    """Return a string like '0.1.0 (0.1.0+3-1a2b3c4d)', or just the package version.

    Only a source checkout of this project is described, never a repository
    that merely encloses an installed copy.
    """
    if not os.path.exists(os.path.join(_REPO_DIR, ".git")):
        return PACKAGE_VERSION
    derived = DynVer(wd=_REPO_DIR).make_dynver()
    if derived is None:
        return PACKAGE_VERSION
    return f"{PACKAGE_VERSION} ({derived})"
