from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from twelvefactor._internal.core.models.apps import Task


class TwelveFactorError(Exception):
    pass


class ConfigurationError(TwelveFactorError):
    pass


class InvalidResourceNameError(TwelveFactorError):
    pass


class SchedulerError(TwelveFactorError):
    pass


class SchedulerAuthError(SchedulerError):
    pass


class ProcessNotFoundError(SchedulerError):
    """
    Raised when operating on a process that has no matching backend resource.
    """

    def __init__(self, process: str):
        self.process = process
        super().__init__(f"{process} process not found")


class TasksError(SchedulerError):
    """
    Raised when listing the tasks of one of the app's processes fails.
    `tasks` holds the tasks collected from the processes listed before the failure.
    The underlying backend error is chained as `__cause__`.
    """

    def __init__(self, msg: str, tasks: Optional[List["Task"]] = None):
        super().__init__(msg)
        self.tasks = tasks or []
