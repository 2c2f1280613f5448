import enum
from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional

from twelvefactor._internal.core.models.apps import App, Process, Task


class SchedulerType(str, enum.Enum):
    """
    Attributes:
        ECS (SchedulerType): Amazon Elastic Container Service
        DOCKER (SchedulerType): The local Docker daemon
    """

    ECS = "ecs"
    DOCKER = "docker"


class Scheduler(ABC):
    """
    A base class for all schedulers. It covers running, scaling and removing apps.
    If a scheduler supports additional features, it must also subclass `SchedulerWith*` classes.
    """

    TYPE: ClassVar[SchedulerType]

    @abstractmethod
    def run(self, app: App, processes: Optional[List[Process]] = None) -> None:
        """
        Creates or updates the backend resources for the app's processes and runs them.
        """
        pass

    @abstractmethod
    def remove(self, app_id: str) -> None:
        """
        Removes the app and all of its backend resources.
        """
        pass

    @abstractmethod
    def scale_process(self, app_id: str, process_name: str, desired: int) -> None:
        """
        Sets the desired number of instances of the process.
        Raises `ProcessNotFoundError` if the app has no such process on the backend.
        """
        pass

    @abstractmethod
    def tasks(self, app_id: str) -> List[Task]:
        """
        Returns the running and pending tasks of the app.
        """
        pass

    @abstractmethod
    def stop_task(self, task_id: str) -> None:
        """
        Requests the task to stop. Does not wait for it to stop.
        """
        pass


class SchedulerWithProcessRunSupport(ABC):
    """
    Must be subclassed to support one-off processes, e.g. a console or a database migration.
    """

    @abstractmethod
    def run_process(self, app: App, process: Process) -> Optional[int]:
        """
        Runs a one-off process of the app.
        If `process.stdout` is set, the process is attached: its output is written
        to `process.stdout` and the exit code is returned once it exits.
        Otherwise the process is detached and `None` is returned right after it starts.
        """
        pass


class SchedulerWithRestartSupport(ABC):
    """
    Must be subclassed to support restarting all processes of an app.
    """

    @abstractmethod
    def restart(self, app_id: str) -> None:
        pass


class SchedulerWithProcessRestartSupport(ABC):
    """
    Must be subclassed to support restarting a single process of an app.
    """

    @abstractmethod
    def restart_process(self, app_id: str, process_name: str) -> None:
        """
        Raises `ProcessNotFoundError` if the app has no such process on the backend.
        """
        pass
