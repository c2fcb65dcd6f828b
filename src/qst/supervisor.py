# src/qst/supervisor.py: The process supervisor.
# Runs one shell command at a time in its own process group, waits for it on a
# background thread and relaunches it when a restart was requested or
# auto-restart is on. Restart and stop requests arrive from other threads and
# are serialized with the loop's relaunch decision by a single lock.

import os
import signal
import subprocess
import threading
from enum import Enum
from typing import Optional

from .config import SupervisorConfig
from .util.errors import AlreadyStartedError, SupervisorStoppedError
from .util.log import get_logger

logger = get_logger(__name__)

class State(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    RESTART_PENDING = "restart_pending"
    STOPPED = "stopped"


class Supervisor:
    """
    Owns a single run slot for a shell command.

    Invariants:
        At most one child is alive at any time. A relaunch only happens after
        the loop has waited for the previous child.
        Once stopped, nothing is launched again.
    """

    def __init__(self, config: SupervisorConfig):
        self._config = config
        self._lock = threading.Lock()
        self._stopping = threading.Event()
        self._state = State.IDLE
        self._auto_restart = config.auto_restart
        self._process: Optional[subprocess.Popen] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def command(self) -> str:
        return self._config.command

    @property
    def state(self) -> State:
        with self._lock:
            return self._state

    @property
    def auto_restart(self) -> bool:
        with self._lock:
            return self._auto_restart

    @auto_restart.setter
    def auto_restart(self, value: bool) -> None:
        with self._lock:
            if self._state is not State.STOPPED:
                self._auto_restart = value

    @property
    def pid(self) -> Optional[int]:
        """Pid of the live child, if any."""
        with self._lock:
            return self._process.pid if self._alive() else None

    # --- Public operations ---

    def start(self) -> None:
        """
        Starts the managed loop on a background thread.

        Raises:
            AlreadyStartedError: If the loop is already running.
            SupervisorStoppedError: If stop() has been called.
        """
        with self._lock:
            self._start_locked()

    def restart(self) -> Optional[OSError]:
        """
        Kills the current child so the loop relaunches it, or starts the loop
        if it is idle. Does nothing once stopped.

        Returns the error if the process group could not be signalled.
        """
        with self._lock:
            if self._state is State.STOPPED:
                logger.debug("Ignoring restart request, supervisor is stopped")
                return None
            if self._state is State.IDLE:
                self._start_locked()
                return None
            self._state = State.RESTART_PENDING
            return self._kill_locked()

    def stop(self) -> Optional[OSError]:
        """Disables auto-restart, kills the current child and ends the loop for good."""
        with self._lock:
            self._auto_restart = False
            self._state = State.STOPPED
            self._stopping.set()
            return self._kill_locked()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Waits for the loop thread to end. Returns False on timeout."""
        with self._lock:
            thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    # --- Internals (call with the lock held) ---

    def _alive(self) -> bool:
        return self._process is not None and self._process.returncode is None

    def _start_locked(self) -> None:
        if self._state is State.STOPPED:
            raise SupervisorStoppedError("Supervisor has been stopped.")
        if self._state is not State.IDLE:
            raise AlreadyStartedError("Already started, use restart().")
        self._state = State.RUNNING
        self._thread = threading.Thread(target=self._run_loop, name="qst-supervisor", daemon=True)
        self._thread.start()

    def _kill_locked(self) -> Optional[OSError]:
        if not self._alive():
            return None
        try:
            pgid = os.getpgid(self._process.pid)
            os.killpg(pgid, signal.SIGTERM)
        except OSError as e:
            logger.warning(f"Failed to signal process group of pid {self._process.pid}: {e}")
            return e
        return None

    def _launch_locked(self) -> Optional[subprocess.Popen]:
        logger.info("Starting command")
        try:
            return subprocess.Popen(
                ["sh", "-c", self._config.command],
                start_new_session=True,
            )
        except OSError as e:
            logger.error(f"Failed to launch command: {e}")
            return None

    # --- Loop (runs on the supervisor thread) ---

    def _run_loop(self) -> None:
        while True:
            with self._lock:
                if self._state is State.STOPPED:
                    return
                self._state = State.RUNNING
                process = self._process = self._launch_locked()

            if process is not None:
                try:
                    returncode = process.wait()
                    logger.info(f"Finished: exit status {returncode}")
                except OSError as e:
                    logger.error(f"Failed while waiting for command: {e}")

            # Throttles restart storms; cut short only by stop().
            self._stopping.wait(self._config.delay)

            with self._lock:
                if self._state is State.STOPPED:
                    return
                if self._state is State.RESTART_PENDING or self._auto_restart:
                    continue
                self._state = State.IDLE
                self._thread = None
                return
