from typing import Any, Dict, List, Optional

import docker
from docker.models.containers import Container

from twelvefactor._internal.core.errors import ProcessNotFoundError, SchedulerError
from twelvefactor._internal.core.models.apps import App, Process, Task
from twelvefactor._internal.core.schedulers.base.scheduler import (
    Scheduler,
    SchedulerType,
    SchedulerWithProcessRestartSupport,
    SchedulerWithProcessRunSupport,
    SchedulerWithRestartSupport,
)
from twelvefactor._internal.core.services.naming import NameCodec
from twelvefactor._internal.utils.common import get_current_datetime
from twelvefactor._internal.utils.logging import get_logger

logger = get_logger(__name__)

LABEL_APP = "twelvefactor.app"
LABEL_PROCESS = "twelvefactor.process"
LABEL_INDEX = "twelvefactor.index"
LABEL_ONE_OFF = "twelvefactor.one-off"


class DockerScheduler(
    SchedulerWithProcessRunSupport,
    SchedulerWithRestartSupport,
    SchedulerWithProcessRestartSupport,
    Scheduler,
):
    """
    Runs each instance of a process as a container on a Docker daemon.

    Containers are labeled with the app id, the process name and the instance index,
    and named `<app id><delimiter><process name>.<index>`. The daemon is the only
    state: scaling reads the process configuration back from its existing containers.
    A process scaled to zero keeps its first container stopped so that it can be
    scaled up again.
    """

    TYPE = SchedulerType.DOCKER

    def __init__(
        self,
        client: Optional[docker.DockerClient] = None,
        delimiter: Optional[str] = None,
    ):
        if client is None:
            client = docker.from_env()
        self.client = client
        self.codec = NameCodec(delimiter)

    def run(self, app: App, processes: Optional[List[Process]] = None) -> None:
        if processes is None:
            processes = app.processes
        for process in processes:
            for container in self._containers(app.id, process.name):
                container.remove(force=True)
            template = self._container_config(app, process)
            # one container is kept even for zero instances to remember the configuration
            for index in range(max(process.desired_count, 1)):
                container = self._create_container(template, index)
                if index < process.desired_count:
                    container.start()
            logger.debug(
                "Started %s containers of process %s of app %s",
                process.desired_count,
                process.name,
                app.id,
            )

    def remove(self, app_id: str) -> None:
        for container in self._containers(app_id):
            container.remove(force=True)
            logger.debug("Removed container %s", container.name)

    def scale_process(self, app_id: str, process_name: str, desired: int) -> None:
        containers = self._process_containers(app_id, process_name)
        logger.info("Scaling process %s of app %s to %s", process_name, app_id, desired)
        template = _config_from_container(next(iter(containers.values())))
        for index in range(max(desired, 1)):
            container = containers.get(index)
            if container is None:
                container = self._create_container(template, index)
            if index < desired and container.status != "running":
                container.start()
        for index, container in containers.items():
            if index >= desired:
                if index == 0:
                    container.stop()
                else:
                    container.remove(force=True)

    def restart(self, app_id: str) -> None:
        for container in self._containers(app_id, running=True):
            container.restart()

    def restart_process(self, app_id: str, process_name: str) -> None:
        for container in self._process_containers(app_id, process_name).values():
            if container.status == "running":
                container.restart()

    def tasks(self, app_id: str) -> List[Task]:
        tasks = []
        for container in self._containers(app_id, running=True):
            tasks.append(
                Task(id=container.short_id, state=container.status, time=get_current_datetime())
            )
        return tasks

    def stop_task(self, task_id: str) -> None:
        logger.info("Stopping container %s", task_id)
        self.client.containers.get(task_id).stop()

    def run_process(self, app: App, process: Process) -> Optional[int]:
        if process.stdin is not None:
            raise SchedulerError("Attaching stdin is not supported by the docker scheduler")
        config = self._container_config(app, process)
        config["labels"][LABEL_ONE_OFF] = "true"
        del config["name"]
        if not process.attached:
            container = self.client.containers.run(detach=True, auto_remove=True, **config)
            logger.debug("Started detached container %s", container.short_id)
            return None
        container = self.client.containers.run(detach=True, **config)
        try:
            for chunk in container.logs(stream=True, follow=True):
                process.stdout.write(chunk.decode(errors="replace"))
            result = container.wait()
        finally:
            container.remove(force=True)
        return result["StatusCode"]

    def _containers(
        self,
        app_id: str,
        process_name: Optional[str] = None,
        running: bool = False,
    ) -> List[Container]:
        labels = [f"{LABEL_APP}={app_id}"]
        if process_name is not None:
            labels.append(f"{LABEL_PROCESS}={process_name}")
        containers = self.client.containers.list(all=not running, filters={"label": labels})
        return [c for c in containers if LABEL_ONE_OFF not in c.labels]

    def _process_containers(self, app_id: str, process_name: str) -> Dict[int, Container]:
        containers = {}
        for container in self._containers(app_id, process_name):
            containers[int(container.labels.get(LABEL_INDEX, 0))] = container
        if len(containers) == 0:
            raise ProcessNotFoundError(process_name)
        return dict(sorted(containers.items()))

    def _container_config(self, app: App, process: Process) -> Dict[str, Any]:
        labels = dict(process.labels)
        labels[LABEL_APP] = app.id
        labels[LABEL_PROCESS] = process.name
        return {
            "image": app.image,
            "command": list(process.command) or None,
            "name": self.codec.encode(app.id, process.name),
            "environment": app.process_env(process),
            "labels": labels,
            "cpu_shares": process.cpu_shares or None,
            "mem_limit": process.memory or None,
        }

    def _create_container(self, config: Dict[str, Any], index: int) -> Container:
        config = dict(config, labels=dict(config["labels"]))
        config["labels"][LABEL_INDEX] = str(index)
        config["name"] = f"{config['name']}.{index}"
        return self.client.containers.create(**config)


def _config_from_container(container: Container) -> Dict[str, Any]:
    container_config = container.attrs["Config"]
    host_config = container.attrs.get("HostConfig") or {}
    labels = dict(container_config.get("Labels") or {})
    labels.pop(LABEL_INDEX, None)
    name = container.name.rsplit(".", 1)[0]
    return {
        "image": container_config["Image"],
        "command": container_config.get("Cmd"),
        "name": name,
        "environment": container_config.get("Env") or [],
        "labels": labels,
        "cpu_shares": host_config.get("CpuShares") or None,
        "mem_limit": host_config.get("Memory") or None,
    }
