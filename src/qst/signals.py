# src/qst/signals.py: One-shot termination gateway.
# The main thread parks in wait() until the first termination signal arrives,
# or until another thread reports a fatal error, and then hands back the cause
# so the caller can stop the supervisor and exit with the right status.

import queue
import signal
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from .util.errors import QstError
from .util.log import get_logger

logger = get_logger(__name__)

# SIGKILL cannot be caught, so it is not in the list.
TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)

@dataclass(frozen=True)
class Shutdown:
    signum: Optional[int] = None
    error: Optional[QstError] = None

    @property
    def exit_code(self) -> int:
        return self.error.exit_code if self.error else 0

    def describe(self) -> str:
        if self.error is not None:
            return str(self.error)
        return signal.Signals(self.signum).name


class SignalGateway:
    def __init__(self, signals: Sequence[int] = TERMINATION_SIGNALS):
        self.signals = tuple(signals)
        # SimpleQueue.put is reentrant, so the signal handler may call it.
        self._events: "queue.SimpleQueue[Shutdown]" = queue.SimpleQueue()
        self._previous: Dict[int, object] = {}

    def install(self) -> None:
        """Registers the handlers. Must be called from the main thread."""
        for signum in self.signals:
            self._previous[signum] = signal.signal(signum, self._handle)

    def restore(self) -> None:
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()

    def _handle(self, signum, frame) -> None:
        self._events.put(Shutdown(signum=signum))

    def report_fatal(self, error: QstError) -> None:
        """Ends wait() with a fatal cause. Safe to call from any thread."""
        self._events.put(Shutdown(error=error))

    def wait(self, timeout: Optional[float] = None) -> Optional[Shutdown]:
        """Blocks until the first shutdown cause arrives. Returns None on timeout."""
        try:
            event = self._events.get(timeout=timeout)
        except queue.Empty:
            return None
        if event.error is not None:
            logger.error(f"Fatal: {event.error}")
        else:
            logger.info(f"Got signal: {event.describe()}, exiting...")
        return event
