import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from twelvefactor._internal.core.errors import SchedulerError
from twelvefactor._internal.core.models.apps import App, Process, Task
from twelvefactor._internal.core.schedulers.base.scheduler import (
    Scheduler,
    SchedulerWithProcessRestartSupport,
    SchedulerWithRestartSupport,
)
from twelvefactor._internal.core.schedulers.features import supports
from twelvefactor._internal.utils.logging import get_logger

logger = get_logger(__name__)


class AppLocker(ABC):
    @abstractmethod
    @contextmanager
    def lock_ctx(self, app_id: str) -> Iterator[None]:
        """
        Holds a lock on the app for the duration of the context.
        """
        yield


class InMemoryAppLocker(AppLocker):
    """
    Serializes operations on the same app within the process.
    Locks are created on first use and kept for the lifetime of the locker.
    """

    def __init__(self):
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_lock = threading.Lock()

    def get_lock(self, app_id: str) -> threading.Lock:
        with self._locks_lock:
            return self._locks.setdefault(app_id, threading.Lock())

    @contextmanager
    def lock_ctx(self, app_id: str) -> Iterator[None]:
        lock = self.get_lock(app_id)
        if not lock.acquire(blocking=False):
            logger.debug("Waiting for lock on app %s", app_id)
            lock.acquire()
        try:
            yield
        finally:
            lock.release()


class LockingScheduler(
    SchedulerWithRestartSupport,
    SchedulerWithProcessRestartSupport,
    Scheduler,
):
    """
    Wraps a scheduler so that runs, removals, scaling and restarts of the same app
    never overlap. Reads (`tasks`) and `stop_task` are not locked.
    Restarts raise `SchedulerError` if the wrapped scheduler does not support them.
    """

    def __init__(self, scheduler: Scheduler, locker: Optional[AppLocker] = None):
        self.scheduler = scheduler
        self.locker = locker or InMemoryAppLocker()

    def run(self, app: App, processes: Optional[List[Process]] = None) -> None:
        with self.locker.lock_ctx(app.id):
            self.scheduler.run(app, processes)

    def remove(self, app_id: str) -> None:
        with self.locker.lock_ctx(app_id):
            self.scheduler.remove(app_id)

    def scale_process(self, app_id: str, process_name: str, desired: int) -> None:
        with self.locker.lock_ctx(app_id):
            self.scheduler.scale_process(app_id, process_name, desired)

    def restart(self, app_id: str) -> None:
        if not supports(self.scheduler, SchedulerWithRestartSupport):
            raise SchedulerError(f"{type(self.scheduler).__name__} does not support restarts")
        with self.locker.lock_ctx(app_id):
            self.scheduler.restart(app_id)

    def restart_process(self, app_id: str, process_name: str) -> None:
        if not supports(self.scheduler, SchedulerWithProcessRestartSupport):
            raise SchedulerError(
                f"{type(self.scheduler).__name__} does not support process restarts"
            )
        with self.locker.lock_ctx(app_id):
            self.scheduler.restart_process(app_id, process_name)

    def tasks(self, app_id: str) -> List[Task]:
        return self.scheduler.tasks(app_id)

    def stop_task(self, task_id: str) -> None:
        self.scheduler.stop_task(task_id)
