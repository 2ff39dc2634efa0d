"""Delivery of background results back onto the consumer's thread."""

import queue
from typing import Any, Callable, Optional

# A "resume on" target: schedules fn(*args) on the consumer's thread of control.
# ``MainThreadQueue.post`` and ``asyncio.AbstractEventLoop.call_soon_threadsafe``
# both fit.
ResumeOn = Callable[..., Any]


class MainThreadQueue:
    """
    Queue of callbacks drained by the consumer thread.

    Worker threads ``post`` callbacks; the thread that owns the session calls
    ``run_pending`` (for example from its event loop or a timer) and the
    callbacks run there.

    Usage:
        dispatcher = MainThreadQueue()
        session = LocalizationSession(resume_on=dispatcher.post)
        session.load(folder, on_loaded)
        ...
        dispatcher.run_pending(timeout=5)
    """

    def __init__(self):
        self._queue: "queue.Queue[tuple]" = queue.Queue()

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)``. Safe to call from any thread."""
        self._queue.put((callback, args))

    def run_pending(self, timeout: Optional[float] = None) -> int:
        """
        Run every queued callback on the calling thread.

        Args:
            timeout: If given and the queue is empty, wait up to this many
                seconds for the first callback

        Returns:
            Number of callbacks run
        """
        count = 0
        block = timeout is not None

        while True:
            try:
                callback, args = self._queue.get(block=block, timeout=timeout)
            except queue.Empty:
                return count
            block = False

            callback(*args)
            count += 1

    def __len__(self) -> int:
        return self._queue.qsize()
