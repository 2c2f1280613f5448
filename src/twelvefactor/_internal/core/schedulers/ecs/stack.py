from typing import Any, Dict, List, Optional

from twelvefactor._internal.core.errors import InvalidResourceNameError
from twelvefactor._internal.core.models.apps import App, Process
from twelvefactor._internal.core.schedulers.base.stack import StackBuilder
from twelvefactor._internal.core.services.naming import NameCodec, resource_id
from twelvefactor._internal.utils.common import bytes_to_mib
from twelvefactor._internal.utils.logging import get_logger

logger = get_logger(__name__)


class ECSStackBuilder(StackBuilder):
    """
    Provisions one ECS service per process by calling the ECS API directly.
    Services are named `<app id><delimiter><process name>` within the cluster.
    """

    def __init__(
        self,
        ecs_client: Any,
        cluster: Optional[str] = None,
        delimiter: Optional[str] = None,
        service_role: Optional[str] = None,
        force_remove: bool = False,
    ):
        self.ecs_client = ecs_client
        self.cluster = cluster
        self.service_role = service_role
        self.force_remove = force_remove
        self.codec = NameCodec(delimiter)

    def build(self, app: App, processes: Optional[List[Process]] = None) -> None:
        if processes is None:
            processes = app.processes
        for process in processes:
            self.create_service(app, process)

    def create_service(self, app: App, process: Process) -> None:
        name = self.codec.encode(app.id, process.name)
        task_definition = self.register_task_definition(app, process)
        params: Dict[str, Any] = dict(
            serviceName=name,
            taskDefinition=task_definition,
            desiredCount=process.desired_count,
        )
        if self.service_role:
            params["role"] = self.service_role
        self.ecs_client.create_service(**self._with_cluster(params))
        logger.debug(
            "Created service %s with task definition %s and desired count %s",
            name,
            task_definition,
            process.desired_count,
        )

    def register_task_definition(self, app: App, process: Process) -> str:
        """
        Registers a new task definition revision for the process and returns
        its `family:revision` reference. A new revision is registered on every call.
        """
        family = self.codec.encode(app.id, process.name)
        container_definition: Dict[str, Any] = {
            "name": process.name,
            "image": app.image,
            "cpu": process.cpu_shares,
            "essential": True,
            "environment": [
                {"name": k, "value": v} for k, v in app.process_env(process).items()
            ],
        }
        memory = bytes_to_mib(process.memory)
        # ECS rejects a zero memory limit
        if memory > 0:
            container_definition["memory"] = memory
        if process.command:
            container_definition["command"] = list(process.command)
        resp = self.ecs_client.register_task_definition(
            family=family,
            containerDefinitions=[container_definition],
        )
        task_definition = resp["taskDefinition"]
        return f"{task_definition['family']}:{task_definition['revision']}"

    def remove(self, app_id: str) -> None:
        services = self.services(app_id)
        for process, service in services.items():
            self.ecs_client.delete_service(
                **self._with_cluster(dict(service=service, force=self.force_remove))
            )
            logger.debug("Deleted service %s of process %s", service, process)

    def services(self, app_id: str) -> Dict[str, str]:
        services = {}
        paginator = self.ecs_client.get_paginator("list_services")
        for page in paginator.paginate(**self._with_cluster({})):
            for service_arn in page.get("serviceArns") or []:
                if not service_arn:
                    continue
                try:
                    name = _service_name(service_arn)
                except InvalidResourceNameError:
                    logger.debug("Skipping service %s. Invalid ARN.", service_arn)
                    continue
                service_app_id, process, ok = self.codec.decode(name)
                if not ok:
                    logger.debug("Skipping service %s. Not a twelvefactor service.", name)
                    continue
                if service_app_id == app_id:
                    services[process] = name
        return services

    def _with_cluster(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.cluster:
            params["cluster"] = self.cluster
        return params


def _service_name(service: str) -> str:
    # ListServices returns ARNs, but accept plain names as well
    if service.startswith("arn:"):
        return resource_id(service)
    return service
