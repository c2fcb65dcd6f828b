# src/qst/watcher.py: Polling change watcher.
# Stats the watched path once per tick and asks the supervisor to restart
# whenever its modification time moves forward. A watched path that vanishes
# is fatal: nothing meaningful can be run for it anymore.

import threading
import time
from pathlib import Path
from typing import Optional

from .supervisor import Supervisor
from .util.errors import WatchTargetGoneError
from .util.log import get_logger

logger = get_logger(__name__)

POLL_INTERVAL = 1.0

class ChangeWatcher:
    def __init__(self, target: Path, supervisor: Supervisor, interval: float = POLL_INTERVAL):
        self.target = Path(target)
        self.supervisor = supervisor
        self.interval = interval
        # Edits made before we started watching don't count.
        self.last_mtime = time.time()

    def poll(self) -> bool:
        """
        Runs a single tick. Returns True if a restart was requested.

        Raises:
            WatchTargetGoneError: If the watched path no longer exists.
        """
        try:
            mtime = self.target.stat().st_mtime
        except (FileNotFoundError, NotADirectoryError):
            raise WatchTargetGoneError(f"'{self.target}' disappeared, exiting.")

        changed = mtime > self.last_mtime
        if changed:
            logger.info(f"'{self.target}' changed, trying to restart")
            self.supervisor.restart()
        self.last_mtime = mtime
        return changed

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Starts the supervisor, then polls until ``stop_event`` is set.

        Without a stop event this only returns by raising WatchTargetGoneError.
        """
        stop_event = stop_event or threading.Event()
        self.supervisor.start()
        logger.info(f"Watching '{self.target}' (interval={self.interval}s)")
        while not stop_event.is_set():
            self.poll()
            stop_event.wait(self.interval)
