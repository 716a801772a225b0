"""A fixed pool of worker threads, each draining its own task queue."""

from __future__ import annotations

import concurrent.futures
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable


@dataclass
class _Queue:
    lock: threading.Lock = field(default_factory=threading.Lock)
    tasks: list[Callable[[], None]] = field(default_factory=list)
    work_to_do: bool = False

    def __post_init__(self) -> None:
        self.condition = threading.Condition(self.lock)


class ThreadPool:
    """Worker threads fed round-robin; tasks return futures."""

    def __init__(self, thread_count: int | None = None) -> None:
        if thread_count is None:
            thread_count = os.cpu_count() or 1
        if thread_count < 1:
            raise ValueError("thread pool needs at least one worker")
        self._exit = False
        self._next_queue = 0
        self._submit_lock = threading.Lock()
        self._queues = [_Queue() for _ in range(thread_count)]
        self._workers = [
            threading.Thread(target=self._work, args=(queue,), daemon=True)
            for queue in self._queues
        ]
        for worker in self._workers:
            worker.start()

    @property
    def worker_count(self) -> int:
        return len(self._workers)

    def _work(self, queue: _Queue) -> None:
        while not self._exit:
            with queue.condition:
                queue.condition.wait_for(lambda: queue.work_to_do)
                tasks, queue.tasks = queue.tasks, []
                queue.work_to_do = False
            for task in tasks:
                task()

    def add_task(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> concurrent.futures.Future:
        """Queue ``func(*args, **kwargs)`` and return a future for its result."""
        future: concurrent.futures.Future = concurrent.futures.Future()

        def unit() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except BaseException as exc:  # delivered through the future
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._submit_lock:
            if self._exit:
                raise RuntimeError("cannot add tasks to a pool that has shut down")
            queue = self._queues[self._next_queue]
            self._next_queue = (self._next_queue + 1) % len(self._workers)
            with queue.condition:
                queue.tasks.append(unit)
                queue.work_to_do = True
                queue.condition.notify()
        return future

    @staticmethod
    def wait_for_work_to_finish(handles: Iterable[concurrent.futures.Future]) -> None:
        """Block until every future in ``handles`` is done."""
        concurrent.futures.wait(list(handles))

    def shutdown(self) -> None:
        """Stop the workers after they finish what is queued, and join them."""
        with self._submit_lock:
            if self._exit:
                return
            self._exit = True
        for queue in self._queues:
            with queue.condition:
                queue.work_to_do = True
                queue.condition.notify()
        for worker in self._workers:
            worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()