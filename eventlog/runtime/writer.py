from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional


SENTINEL = object()

Job = Callable[[], None]

logger = logging.getLogger(__name__)


class BackgroundWriter:
    """
    Runs submitted jobs in FIFO order on one daemon thread.

    Submission never blocks: a full queue or a closed writer rejects the job.
    Job failures are logged and dropped. Jobs still queued when the process
    exits are lost.
    """

    def __init__(self, maxsize: int = 200, *, name: str = "eventlog-writer"):
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._name = name
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        with self._lock:
            if self._closed or (self._thread and self._thread.is_alive()):
                return
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()

    def submit(self, job: Job) -> bool:
        if self._closed:
            return False
        self.start()
        try:
            self._queue.put_nowait(job)
            return True
        except queue.Full:
            logger.warning("Background writer queue is full; dropping job")
            return False

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait until every submitted job has run. Returns False on timeout."""
        if timeout is None:
            self._queue.join()
            return True
        done = threading.Event()

        def _wait() -> None:
            self._queue.join()
            done.set()

        threading.Thread(target=_wait, daemon=True).start()
        return done.wait(timeout)

    def close(self, timeout: float = 1.0) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
        if thread is None:
            return
        self._queue.put(SENTINEL)
        thread.join(timeout=timeout)

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is SENTINEL:
                    return
                item()
            except Exception:
                logger.exception("Background write failed")
            finally:
                self._queue.task_done()


__all__ = ["BackgroundWriter", "SENTINEL"]
