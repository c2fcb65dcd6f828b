# src/qst/util/errors.py: Typed exceptions and exit codes.
# Every error that can end the program carries the exit code the CLI should
# use for it. Errors local to a single launch of the managed command never
# reach this hierarchy; the supervisor logs them and keeps going.

class QstError(Exception):
    """Base exception for the application."""
    exit_code = 1

class ConfigError(QstError):
    """Settings file or command-line configuration errors."""
    exit_code = 1

class ResolveError(ConfigError):
    """The command to run could not be determined."""

class NoMatchError(ResolveError):
    """No project type matches the given path."""

class UnknownTypeError(ResolveError):
    """An explicitly requested project type does not exist."""

class UnsupportedStepError(ResolveError):
    """The project type has no command for the requested step."""

class SupervisorError(QstError):
    """Misuse of the process supervisor."""

class AlreadyStartedError(SupervisorError):
    """start() was called while the managed loop is running."""

class SupervisorStoppedError(SupervisorError):
    """start() was called after stop()."""

class WatchTargetGoneError(QstError):
    """The watched path disappeared."""
    exit_code = 3

class RemoteError(QstError):
    """Fetching a remote project failed."""
    exit_code = 4
