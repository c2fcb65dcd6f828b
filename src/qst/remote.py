# src/qst/remote.py: Fetch a remote project before running it.
# Only GitHub repositories are supported. The repository is cloned into the
# current directory with the system 'git', whose progress output goes straight
# to the terminal.

import subprocess
from pathlib import Path
from typing import Tuple

from .util.errors import RemoteError
from .util.log import get_logger

logger = get_logger(__name__)

_PREFIXES = ("git://", "https://", "http://")

def split_github_url(repo: str) -> Tuple[str, Path]:
    """
    Splits ``github.com/owner/repo[/sub/dir]`` into a clone URL and the local
    directory to run in.

    Raises:
        RemoteError: If ``repo`` is not a GitHub repository reference.
    """
    rest = repo
    for prefix in _PREFIXES:
        if rest.startswith(prefix):
            rest = rest[len(prefix):]
            break
    if not rest.startswith("github.com/"):
        raise RemoteError("Only GitHub repositories are supported for now, sorry.")

    parts = rest[len("github.com/"):].split("/", 2)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise RemoteError(f"Invalid repo: {repo}")

    owner, name = parts[0], parts[1].removesuffix(".git")
    directory = Path(name)
    if len(parts) == 3 and parts[2]:
        directory = directory / parts[2]
    return f"https://github.com/{owner}/{name}", directory

def fetch_from_git(repo: str) -> Path:
    """
    Clones the repository referenced by ``repo`` and returns the path to run.

    Raises:
        RemoteError: If git is missing or the clone fails.
    """
    url, directory = split_github_url(repo)
    logger.info(f"Cloning {url}")
    try:
        subprocess.run(["git", "clone", url], check=True)
    except FileNotFoundError:
        raise RemoteError("The 'git' command was not found. Is it installed and in your PATH?")
    except subprocess.CalledProcessError as e:
        raise RemoteError(f"git clone {url} failed with exit status {e.returncode}.")
    return directory
