# src/qst/resolve.py: Turn a path and optional overrides into a shell command.
# The result is a complete command line with every placeholder substituted;
# the supervisor hands it to 'sh -c' as-is and never looks inside it.

from pathlib import Path
from typing import Optional

from . import detect
from .util.errors import UnknownTypeError, UnsupportedStepError
from .util.log import get_logger

logger = get_logger(__name__)

PLACEHOLDER = "{file}"

def resolve_command(
    path: Path,
    command: Optional[str] = None,
    project_type: Optional[str] = None,
    step: str = "run",
) -> str:
    """
    Resolves the command to run for ``path``.

    Args:
        path: The watched file or directory.
        command: An explicit command template; skips detection entirely.
        project_type: A project type id; skips detection but still selects
            the command by ``step``.
        step: Which command of the project type to use.

    Raises:
        NoMatchError: If detection finds no project type.
        UnknownTypeError: If ``project_type`` is not a known id.
        UnsupportedStepError: If the project type has no command for ``step``.
    """
    path = Path(path).absolute()

    if command and command.strip():
        template = command
    else:
        if project_type and project_type.strip():
            project = detect.get_by_id(project_type.strip())
            if project is None:
                raise UnknownTypeError(f"Unknown type: '{project_type}'.")
        else:
            project = detect.detect(path)
            logger.info(f"Detected a {project.id} project")

        template = project.commands.get(step)
        if template is None:
            raise UnsupportedStepError(f"{project.id} doesn't support '{step}'.")

    return template.replace(PLACEHOLDER, str(path))
