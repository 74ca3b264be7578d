"""Frame scheduling for the input monitor

The monitor never owns a thread. It asks for the next frame at the end of
the current one, the way a browser animation-frame loop works. The host
decides what a frame is: `LoopScheduler` runs frames at a fixed rate in the
calling thread.
"""
import abc
import logging
import threading
import time

LOG = logging.getLogger("padnav.scheduler")


class FrameScheduler(abc.ABC):
    @abc.abstractmethod
    def request_frame(self, callback):
        """Queue ``callback(timestamp_ms)`` for the next frame."""
        raise NotImplementedError


class LoopScheduler(FrameScheduler):
    """Runs queued frame callbacks at ``hz`` until stopped.

    ``pre_frame`` callables run at the start of every frame, before the
    queued callbacks. The pygame source uses this to pump its event queue.
    """

    def __init__(self, hz: int = 60, pre_frame=None):
        self.hz = hz
        self._pending = []
        self._pre_frame = list(pre_frame or [])
        self._stop = threading.Event()

    def request_frame(self, callback):
        self._pending.append(callback)

    def add_pre_frame(self, fn):
        self._pre_frame.append(fn)

    def run_frame(self, timestamp: float):
        for fn in self._pre_frame:
            try:
                fn()
            except Exception:
                LOG.exception("pre-frame hook failed")
        # callbacks queued while running belong to the next frame
        pending, self._pending = self._pending, []
        for cb in pending:
            try:
                cb(timestamp)
            except Exception:
                LOG.exception("frame callback failed")

    def run(self):
        period = 1.0 / float(self.hz)
        self._stop.clear()
        while not self._stop.is_set():
            self.run_frame(time.monotonic() * 1000.0)
            self._stop.wait(period)

    def stop(self):
        self._stop.set()
