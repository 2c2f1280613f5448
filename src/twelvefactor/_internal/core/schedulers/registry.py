from typing import List, Type

from twelvefactor._internal.core.errors import SchedulerError
from twelvefactor._internal.core.schedulers.base.scheduler import Scheduler, SchedulerType

_SCHEDULER_CLASSES: List[Type[Scheduler]] = []


try:
    from twelvefactor._internal.core.schedulers.ecs.scheduler import ECSScheduler

    _SCHEDULER_CLASSES.append(ECSScheduler)
except ImportError:
    pass

try:
    from twelvefactor._internal.core.schedulers.docker.scheduler import DockerScheduler

    _SCHEDULER_CLASSES.append(DockerScheduler)
except ImportError:
    pass


def list_available_scheduler_classes() -> List[Type[Scheduler]]:
    """
    Returns scheduler classes whose dependencies are installed.
    """
    return _SCHEDULER_CLASSES.copy()


def list_available_scheduler_types() -> List[SchedulerType]:
    return [c.TYPE for c in _SCHEDULER_CLASSES]


def get_scheduler_class(scheduler_type: SchedulerType) -> Type[Scheduler]:
    for scheduler_class in _SCHEDULER_CLASSES:
        if scheduler_class.TYPE == scheduler_type:
            return scheduler_class
    raise SchedulerError(
        f"Scheduler {scheduler_type.value} is not available."
        f" Is twelvefactor[{scheduler_type.value}] installed?"
    )
