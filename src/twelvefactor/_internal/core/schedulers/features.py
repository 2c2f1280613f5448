from typing import List, Type

from twelvefactor._internal.core.schedulers.base.scheduler import (
    Scheduler,
    SchedulerType,
    SchedulerWithProcessRestartSupport,
    SchedulerWithProcessRunSupport,
    SchedulerWithRestartSupport,
)
from twelvefactor._internal.core.schedulers.registry import list_available_scheduler_classes


def supports(scheduler: Scheduler, feature_class: type) -> bool:
    """
    Returns `True` if `scheduler` implements the optional `SchedulerWith*` feature.
    """
    return isinstance(scheduler, feature_class)


def _get_schedulers_with_feature(
    scheduler_classes: List[Type[Scheduler]],
    feature_class: type,
) -> List[SchedulerType]:
    scheduler_types = []
    for scheduler_class in scheduler_classes:
        if issubclass(scheduler_class, feature_class):
            scheduler_types.append(scheduler_class.TYPE)
    return scheduler_types


_scheduler_classes = list_available_scheduler_classes()


# The following lists do not include unavailable schedulers (i.e. schedulers missing deps).
SCHEDULERS_WITH_PROCESS_RUN_SUPPORT = _get_schedulers_with_feature(
    scheduler_classes=_scheduler_classes,
    feature_class=SchedulerWithProcessRunSupport,
)
SCHEDULERS_WITH_RESTART_SUPPORT = _get_schedulers_with_feature(
    scheduler_classes=_scheduler_classes,
    feature_class=SchedulerWithRestartSupport,
)
SCHEDULERS_WITH_PROCESS_RESTART_SUPPORT = _get_schedulers_with_feature(
    scheduler_classes=_scheduler_classes,
    feature_class=SchedulerWithProcessRestartSupport,
)
