"""Single-producer / single-consumer result streams backed by a queue.

The producer runs in its own thread and pushes relative paths; the consumer
iterates the stream once. When the producer finishes (normally or with an
error) it closes the stream, after which :meth:`ResultStream.wait` returns
the producer's terminal error, if any.
"""

from __future__ import annotations

import queue
import threading
from typing import Callable, Iterator, Optional

_CLOSED = object()


class StreamConsumedError(RuntimeError):
    """Raised when a result stream is iterated a second time."""


class ResultStream:
    """Iterable of relative path strings produced by one walk."""

    def __init__(self, name: str, maxsize: int = 0) -> None:
        self.name = name
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=maxsize)
        self._error: Optional[BaseException] = None
        self._consumed = False
        self._thread: Optional[threading.Thread] = None

    # ---- producer side ----

    def emit(self, rel_path: str) -> None:
        self._queue.put(rel_path)

    def start(self, producer: Callable[["ResultStream"], None]) -> None:
        """Run *producer* in a worker thread; close the stream when it returns."""

        def _run() -> None:
            try:
                producer(self)
            except Exception as exc:
                self._error = exc
            finally:
                self._queue.put(_CLOSED)

        self._thread = threading.Thread(target=_run, name=f"driveignore-{self.name}", daemon=True)
        self._thread.start()

    # ---- consumer side ----

    def __iter__(self) -> Iterator[str]:
        if self._consumed:
            raise StreamConsumedError(f"{self.name} stream was already consumed")
        self._consumed = True
        return self._drain()

    def _drain(self) -> Iterator[str]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]

    def wait(self) -> Optional[BaseException]:
        """Block until the producer is done and return its error (or None)."""
        if self._thread is not None:
            self._thread.join()
        return self._error
