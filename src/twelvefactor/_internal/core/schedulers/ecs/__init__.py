from twelvefactor._internal.core.schedulers.ecs.models import (
    ECSAccessKeyCreds,
    ECSConfig,
    ECSDefaultCreds,
)
from twelvefactor._internal.core.schedulers.ecs.scheduler import ECSScheduler
from twelvefactor._internal.core.schedulers.ecs.stack import ECSStackBuilder

__all__ = [
    "ECSAccessKeyCreds",
    "ECSConfig",
    "ECSDefaultCreds",
    "ECSScheduler",
    "ECSStackBuilder",
]
