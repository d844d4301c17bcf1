"""Tests for the command-line surface."""

import re

import pytest
from typer.testing import CliRunner

import dynver.cli as cli_mod
from dynver.cli import app
from dynver.git_helpers import DISTANCE_CMD, PARENT_CMD, GitCommandError

runner = CliRunner()

PARENT = "0123456789abcdef0123456789abcdef01234567"
_LONG_DESCRIBE = "git describe --long"


def _install_git(monkeypatch, describe: str | None = None, **responses: str):
    """Route the CLI's git calls to canned output; the describe line carries a live timestamp."""
    calls = []

    def fake(command, wd=None):
        calls.append((command, wd))
        if command.startswith(_LONG_DESCRIBE) and describe is not None:
            return describe
        for prefix, out in responses.items():
            if command.startswith(prefix):
                return out
        raise GitCommandError(command, 128)

    monkeypatch.setattr(cli_mod, "run_git", fake)
    return calls


# --- version ---

def test_version_on_tag(monkeypatch):
    _install_git(monkeypatch, "v1.2.3-0-gdeadbeef\n")
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.strip() == "1.2.3"


def test_version_with_separator_and_sonatype(monkeypatch):
    _install_git(monkeypatch, "v1.2.3-4-gdeadbeef\n")
    result = runner.invoke(app, ["version", "--separator", "-", "--sonatype"])
    assert result.exit_code == 0
    assert result.output.strip() == "1.2.3-4-deadbeef-SNAPSHOT"


def test_version_separator_from_environment(monkeypatch):
    _install_git(monkeypatch, "v1.2.3-4-gdeadbeef\n")
    result = runner.invoke(app, ["version"], env={"DYNVER_SEPARATOR": "_"})
    assert result.output.strip() == "1.2.3_4-deadbeef"


def test_version_passes_directory(monkeypatch):
    calls = _install_git(monkeypatch, "v1.2.3\n")
    runner.invoke(app, ["version", "--dir", "/some/repo"])
    assert calls[0][1] == "/some/repo"


def test_version_outside_repository_falls_back(monkeypatch):
    _install_git(monkeypatch)
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert re.fullmatch(r"HEAD\+\d{8}-\d{4}", result.output.strip())


# --- info ---

def test_info_lists_classifications(monkeypatch):
    _install_git(
        monkeypatch,
        "v1.2.3-4-gdeadbeef\n",
        **{
            PARENT_CMD: PARENT + "\n",
            "git describe --tags --abbrev=0": "v1.2.3\n",
            DISTANCE_CMD: "10\n",
        },
    )
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "1.2.3+4-deadbeef-SNAPSHOT" in result.output
    assert "previous version" in result.output
    assert "10" in result.output


# --- previous / distance ---

def test_previous(monkeypatch):
    _install_git(monkeypatch, **{PARENT_CMD: PARENT + "\n", "git describe --tags --abbrev=0": "v0.9.0\n"})
    result = runner.invoke(app, ["previous"])
    assert result.exit_code == 0
    assert result.output.strip() == "0.9.0"


def test_previous_missing_exits_non_zero(monkeypatch):
    _install_git(monkeypatch)
    result = runner.invoke(app, ["previous"])
    assert result.exit_code == 1


def test_distance(monkeypatch):
    _install_git(monkeypatch, **{DISTANCE_CMD: "7\n"})
    result = runner.invoke(app, ["distance"])
    assert result.exit_code == 0
    assert result.output.strip() == "7"


def test_distance_outside_repository(monkeypatch):
    _install_git(monkeypatch)
    assert runner.invoke(app, ["distance"]).exit_code == 1


# --- check / assert-tag ---

def test_check_matching_version(monkeypatch):
    _install_git(monkeypatch, "v1.2.3\n")
    assert runner.invoke(app, ["check", "1.2.3"]).exit_code == 0


def test_check_mismatch(monkeypatch):
    _install_git(monkeypatch, "v1.2.3-4-gdeadbeef\n")
    result = runner.invoke(app, ["check", "1.2.3"])
    assert result.exit_code == 1
    assert "Version and dynver mismatch" in result.output


def test_assert_tag_passes_on_tag(monkeypatch):
    _install_git(monkeypatch, "v1.2.3-4-gdeadbeef\n")
    assert runner.invoke(app, ["assert-tag"]).exit_code == 0


@pytest.mark.parametrize("describe", ["deadbeef\n", None])
def test_assert_tag_fails_without_tags(monkeypatch, describe):
    _install_git(monkeypatch, describe, **{DISTANCE_CMD: "3\n"})
    result = runner.invoke(app, ["assert-tag"])
    assert result.exit_code == 1
    assert "git fetch --unshallow" in result.output


# --- global options ---

def test_version_flag(monkeypatch):
    monkeypatch.setattr(cli_mod, "get_version", lambda: "0.1.0")
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == "0.1.0"


def test_get_version_starts_with_package_version():
    from dynver.version import PACKAGE_VERSION, get_version

    assert get_version().startswith(PACKAGE_VERSION)


def test_get_version_ignores_enclosing_repository(tmp_path, monkeypatch):
    import dynver.version as version_mod

    monkeypatch.setattr(version_mod, "_REPO_DIR", str(tmp_path))
    monkeypatch.setattr(version_mod, "DynVer", lambda wd: pytest.fail("git should not run"))
    assert version_mod.get_version() == version_mod.PACKAGE_VERSION


def test_get_version_describes_own_checkout(tmp_path, monkeypatch):
    import dynver.version as version_mod

    (tmp_path / ".git").mkdir()

    class StubDynVer:
        def __init__(self, wd):
            assert wd == str(tmp_path)

        def make_dynver(self):
            return "0.1.0+3-1a2b3c4d"

    monkeypatch.setattr(version_mod, "_REPO_DIR", str(tmp_path))
    monkeypatch.setattr(version_mod, "DynVer", StubDynVer)
    assert version_mod.get_version() == f"{version_mod.PACKAGE_VERSION} (0.1.0+3-1a2b3c4d)"
