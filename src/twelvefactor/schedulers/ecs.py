from twelvefactor._internal.core.schedulers.ecs import (
    ECSAccessKeyCreds,
    ECSConfig,
    ECSDefaultCreds,
    ECSScheduler,
    ECSStackBuilder,
)

__all__ = [
    "ECSAccessKeyCreds",
    "ECSConfig",
    "ECSDefaultCreds",
    "ECSScheduler",
    "ECSStackBuilder",
]
