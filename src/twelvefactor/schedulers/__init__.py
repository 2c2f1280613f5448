from twelvefactor._internal.core.schedulers.features import (
    SCHEDULERS_WITH_PROCESS_RESTART_SUPPORT,
    SCHEDULERS_WITH_PROCESS_RUN_SUPPORT,
    SCHEDULERS_WITH_RESTART_SUPPORT,
    supports,
)
from twelvefactor._internal.core.schedulers.registry import (
    get_scheduler_class,
    list_available_scheduler_types,
)

__all__ = [
    "SCHEDULERS_WITH_PROCESS_RESTART_SUPPORT",
    "SCHEDULERS_WITH_PROCESS_RUN_SUPPORT",
    "SCHEDULERS_WITH_RESTART_SUPPORT",
    "get_scheduler_class",
    "list_available_scheduler_types",
    "supports",
]
