from unittest.mock import Mock

import pytest

from twelvefactor._internal.core.errors import SchedulerError
from twelvefactor._internal.core.schedulers import registry
from twelvefactor._internal.core.schedulers.base.scheduler import (
    SchedulerType,
    SchedulerWithProcessRunSupport,
    SchedulerWithRestartSupport,
)
from twelvefactor._internal.core.schedulers.docker.scheduler import DockerScheduler
from twelvefactor._internal.core.schedulers.ecs.models import ECSConfig
from twelvefactor._internal.core.schedulers.ecs.scheduler import ECSScheduler
from twelvefactor._internal.core.schedulers.features import (
    SCHEDULERS_WITH_PROCESS_RESTART_SUPPORT,
    SCHEDULERS_WITH_PROCESS_RUN_SUPPORT,
    SCHEDULERS_WITH_RESTART_SUPPORT,
    supports,
)


class TestFeatures:
    def test_lists_schedulers_by_feature(self):
        assert SCHEDULERS_WITH_PROCESS_RUN_SUPPORT == [SchedulerType.DOCKER]
        assert SCHEDULERS_WITH_RESTART_SUPPORT == [SchedulerType.ECS, SchedulerType.DOCKER]
        assert SCHEDULERS_WITH_PROCESS_RESTART_SUPPORT == [
            SchedulerType.ECS,
            SchedulerType.DOCKER,
        ]

    def test_supports(self):
        ecs = ECSScheduler(ECSConfig(), ecs_client=Mock(), stack_builder=Mock())
        docker = DockerScheduler(client=Mock())
        assert not supports(ecs, SchedulerWithProcessRunSupport)
        assert supports(docker, SchedulerWithProcessRunSupport)
        assert supports(ecs, SchedulerWithRestartSupport)


class TestRegistry:
    def test_get_scheduler_class(self):
        assert registry.get_scheduler_class(SchedulerType.ECS) is ECSScheduler
        assert registry.get_scheduler_class(SchedulerType.DOCKER) is DockerScheduler

    def test_get_unavailable_scheduler_class(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(registry, "_SCHEDULER_CLASSES", [ECSScheduler])
        assert registry.list_available_scheduler_types() == [SchedulerType.ECS]
        with pytest.raises(SchedulerError, match=r"twelvefactor\[docker\] installed"):
            registry.get_scheduler_class(SchedulerType.DOCKER)
