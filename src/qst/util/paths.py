# src/qst/util/paths.py: Path helpers.
# Resolves the per-user configuration directory and answers the small
# filesystem questions the project detector and the CLI need to ask.

import os
from pathlib import Path
import platformdirs

def get_config_home() -> Path:
    """Get the user configuration directory for the application."""
    return Path(platformdirs.user_config_dir("qst"))

def expand_path(path: str | Path) -> Path:
    """Expand environment variables and user home directory in a path."""
    return Path(os.path.expandvars(os.path.expanduser(str(path)))).resolve()

def is_executable(path: Path) -> bool:
    """True for regular files with at least one execute bit set."""
    return path.is_file() and os.access(path, os.X_OK)

def working_dir(path: Path) -> Path:
    """The directory a command for ``path`` should run in."""
    return path if path.is_dir() else path.parent
