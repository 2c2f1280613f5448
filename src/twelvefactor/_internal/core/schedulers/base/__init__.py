from twelvefactor._internal.core.schedulers.base.scheduler import (
    Scheduler,
    SchedulerType,
    SchedulerWithProcessRestartSupport,
    SchedulerWithProcessRunSupport,
    SchedulerWithRestartSupport,
)
from twelvefactor._internal.core.schedulers.base.stack import StackBuilder

__all__ = [
    "Scheduler",
    "SchedulerType",
    "SchedulerWithProcessRestartSupport",
    "SchedulerWithProcessRunSupport",
    "SchedulerWithRestartSupport",
    "StackBuilder",
]
