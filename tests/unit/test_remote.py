# tests/unit/test_remote.py: Unit tests for fetching remote projects.

import subprocess
import pytest
from pathlib import Path

from qst.remote import fetch_from_git, split_github_url
from qst.util.errors import RemoteError


@pytest.mark.parametrize("spec, url, directory", [
    ("github.com/heyLu/qst", "https://github.com/heyLu/qst", Path("qst")),
    ("git://github.com/heyLu/qst", "https://github.com/heyLu/qst", Path("qst")),
    ("https://github.com/heyLu/qst.git", "https://github.com/heyLu/qst", Path("qst")),
    ("github.com/owner/repo/examples/hello.go", "https://github.com/owner/repo", Path("repo/examples/hello.go")),
])
def test_split_github_url(spec, url, directory):
    assert split_github_url(spec) == (url, directory)

@pytest.mark.parametrize("spec", ["gitlab.com/a/b", "github.com/owner", "github.com//repo", "qst"])
def test_split_github_url_rejects(spec):
    with pytest.raises(RemoteError):
        split_github_url(spec)

def test_fetch_runs_git_clone(mocker):
    """Tests that fetch_from_git clones and returns the local directory."""
    mock_run = mocker.patch("qst.remote.subprocess.run")

    directory = fetch_from_git("github.com/owner/repo/src")

    mock_run.assert_called_once_with(["git", "clone", "https://github.com/owner/repo"], check=True)
    assert directory == Path("repo/src")

def test_fetch_clone_failure(mocker):
    """Tests that a failing clone becomes a RemoteError."""
    mocker.patch("qst.remote.subprocess.run", side_effect=subprocess.CalledProcessError(128, ["git"]))
    with pytest.raises(RemoteError, match="exit status 128"):
        fetch_from_git("github.com/owner/repo")

def test_fetch_without_git(mocker):
    mocker.patch("qst.remote.subprocess.run", side_effect=FileNotFoundError("git"))
    with pytest.raises(RemoteError, match="not found"):
        fetch_from_git("github.com/owner/repo")
