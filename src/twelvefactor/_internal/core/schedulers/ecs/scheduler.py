from typing import Any, Dict, List, Optional

from twelvefactor._internal.core.errors import ProcessNotFoundError, TasksError
from twelvefactor._internal.core.models.apps import App, Process, Task
from twelvefactor._internal.core.schedulers.base.scheduler import (
    Scheduler,
    SchedulerType,
    SchedulerWithProcessRestartSupport,
    SchedulerWithRestartSupport,
)
from twelvefactor._internal.core.schedulers.base.stack import StackBuilder
from twelvefactor._internal.core.schedulers.ecs import auth
from twelvefactor._internal.core.schedulers.ecs.models import ECSConfig
from twelvefactor._internal.core.schedulers.ecs.stack import ECSStackBuilder
from twelvefactor._internal.core.services.naming import resource_id
from twelvefactor._internal.utils.common import get_current_datetime
from twelvefactor._internal.utils.logging import get_logger

logger = get_logger(__name__)

# DescribeTasks accepts at most 100 tasks per call
DESCRIBE_TASKS_BATCH_SIZE = 100


class ECSScheduler(
    SchedulerWithRestartSupport,
    SchedulerWithProcessRestartSupport,
    Scheduler,
):
    TYPE = SchedulerType.ECS

    def __init__(
        self,
        config: Optional[ECSConfig] = None,
        ecs_client: Optional[Any] = None,
        stack_builder: Optional[StackBuilder] = None,
        validate_creds: bool = False,
    ):
        if config is None:
            config = ECSConfig.from_settings()
        self.config = config
        if ecs_client is None:
            if validate_creds:
                session = auth.authenticate(config.creds, config.region)
            else:
                session = auth.get_session(config.creds, config.region)
            ecs_client = session.client("ecs")
        self.ecs_client = ecs_client
        if stack_builder is None:
            stack_builder = ECSStackBuilder(
                ecs_client=ecs_client,
                cluster=config.cluster,
                delimiter=config.delimiter,
                service_role=config.service_role,
                force_remove=config.force_remove,
            )
        self.stack_builder = stack_builder

    @property
    def cluster(self) -> Optional[str]:
        return self.config.cluster

    def run(self, app: App, processes: Optional[List[Process]] = None) -> None:
        self.stack_builder.build(app, processes)

    def remove(self, app_id: str) -> None:
        self.stack_builder.remove(app_id)

    def scale_process(self, app_id: str, process_name: str, desired: int) -> None:
        service = self._get_service(app_id, process_name)
        logger.info("Scaling service %s to %s", service, desired)
        self.ecs_client.update_service(
            **self._with_cluster(dict(service=service, desiredCount=desired))
        )

    def restart(self, app_id: str) -> None:
        for service in self.stack_builder.services(app_id).values():
            self._force_new_deployment(service)

    def restart_process(self, app_id: str, process_name: str) -> None:
        self._force_new_deployment(self._get_service(app_id, process_name))

    def tasks(self, app_id: str) -> List[Task]:
        """
        Returns the RUNNING and PENDING tasks of the app's ECS services.
        If listing the tasks of a service fails, raises `TasksError` with the tasks
        of the services listed so far.
        """
        services = self.stack_builder.services(app_id)
        tasks: List[Task] = []
        for service in services.values():
            try:
                service_tasks = self.service_tasks(service)
            except Exception as e:
                raise TasksError(f"Failed to get tasks of service {service}", tasks=tasks) from e
            tasks.extend(service_tasks)
        return tasks

    def service_tasks(self, service: str) -> List[Task]:
        task_arns: List[str] = []
        paginator = self.ecs_client.get_paginator("list_tasks")
        for page in paginator.paginate(**self._with_cluster(dict(serviceName=service))):
            task_arns.extend(page.get("taskArns") or [])
        if len(task_arns) == 0:
            return []
        tasks = []
        for i in range(0, len(task_arns), DESCRIBE_TASKS_BATCH_SIZE):
            resp = self.ecs_client.describe_tasks(
                **self._with_cluster(dict(tasks=task_arns[i : i + DESCRIBE_TASKS_BATCH_SIZE]))
            )
            now = get_current_datetime()
            for task in resp["tasks"]:
                tasks.append(
                    Task(
                        id=resource_id(task["taskArn"]),
                        state=task["lastStatus"],
                        time=now,
                    )
                )
        return tasks

    def stop_task(self, task_id: str) -> None:
        logger.info("Stopping task %s", task_id)
        self.ecs_client.stop_task(**self._with_cluster(dict(task=task_id)))

    def _get_service(self, app_id: str, process_name: str) -> str:
        services = self.stack_builder.services(app_id)
        if process_name not in services:
            raise ProcessNotFoundError(process_name)
        return services[process_name]

    def _force_new_deployment(self, service: str):
        logger.info("Restarting service %s", service)
        self.ecs_client.update_service(
            **self._with_cluster(dict(service=service, forceNewDeployment=True))
        )

    def _with_cluster(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.cluster:
            params["cluster"] = self.cluster
        return params
