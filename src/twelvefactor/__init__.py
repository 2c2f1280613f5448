from twelvefactor._internal.core.errors import (
    ConfigurationError,
    ProcessNotFoundError,
    SchedulerError,
    TasksError,
    TwelveFactorError,
)
from twelvefactor._internal.core.models.apps import App, Process, Task, merge_env
from twelvefactor._internal.core.schedulers.base.scheduler import (
    Scheduler,
    SchedulerType,
    SchedulerWithProcessRestartSupport,
    SchedulerWithProcessRunSupport,
    SchedulerWithRestartSupport,
)
from twelvefactor._internal.core.services.configs import load_app
from twelvefactor._internal.core.services.locking import InMemoryAppLocker, LockingScheduler
from twelvefactor._internal.core.services.naming import DEFAULT_DELIMITER, NameCodec
from twelvefactor._internal.utils.logging import configure_logging
from twelvefactor.version import __version__

__all__ = [
    "App",
    "ConfigurationError",
    "DEFAULT_DELIMITER",
    "InMemoryAppLocker",
    "LockingScheduler",
    "NameCodec",
    "Process",
    "ProcessNotFoundError",
    "Scheduler",
    "SchedulerError",
    "SchedulerType",
    "SchedulerWithProcessRestartSupport",
    "SchedulerWithProcessRunSupport",
    "SchedulerWithRestartSupport",
    "Task",
    "TasksError",
    "TwelveFactorError",
    "__version__",
    "configure_logging",
    "load_app",
    "merge_env",
]
