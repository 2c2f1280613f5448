import io
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest

from twelvefactor._internal.core.errors import ProcessNotFoundError, SchedulerError
from twelvefactor._internal.core.models.apps import App, Process
from twelvefactor._internal.core.schedulers.docker.scheduler import (
    LABEL_APP,
    LABEL_INDEX,
    LABEL_ONE_OFF,
    LABEL_PROCESS,
    DockerScheduler,
)


def get_container_mock(
    app_id: str,
    process_name: str,
    index: int,
    status: str = "running",
    extra_labels: Optional[Dict[str, str]] = None,
) -> Mock:
    labels = {LABEL_APP: app_id, LABEL_PROCESS: process_name, LABEL_INDEX: str(index)}
    labels.update(extra_labels or {})
    container = Mock()
    container.name = f"{app_id}--{process_name}.{index}"
    container.short_id = f"{process_name}{index}"
    container.status = status
    container.labels = labels
    container.attrs = {
        "Config": {
            "Image": "remind101/acme-inc",
            "Cmd": ["acme-inc", process_name],
            "Env": ["RAILS_ENV=production"],
            "Labels": dict(labels),
        },
        "HostConfig": {"CpuShares": 256, "Memory": 0},
    }
    return container


def get_docker_client_mock(containers: List[Mock]) -> Mock:
    client = Mock()
    client.created_containers = []

    def list_containers(**kwargs):
        include_stopped = kwargs.get("all", False)
        filters = kwargs.get("filters") or {}
        expected = dict(label.split("=", 1) for label in filters.get("label", []))
        result = []
        for container in containers:
            if not include_stopped and container.status != "running":
                continue
            if all(container.labels.get(k) == v for k, v in expected.items()):
                result.append(container)
        return result

    def create_container(**config):
        container = Mock()
        container.name = config["name"]
        container.status = "created"
        client.created_containers.append(container)
        return container

    client.containers.list.side_effect = list_containers
    client.containers.create.side_effect = create_container
    return client


class TestDockerScheduler:
    def test_run_creates_and_starts_containers(self):
        client = get_docker_client_mock([])
        scheduler = DockerScheduler(client=client)
        app = App(
            id="acme",
            image="remind101/acme-inc",
            env={"RAILS_ENV": "production"},
            processes=[
                Process(
                    name="web",
                    command=["acme-inc", "web"],
                    env={"PORT": "80"},
                    desired_count=2,
                    memory=1024,
                )
            ],
        )
        scheduler.run(app)
        assert client.containers.create.call_count == 2
        first_config = client.containers.create.call_args_list[0].kwargs
        assert first_config == {
            "image": "remind101/acme-inc",
            "command": ["acme-inc", "web"],
            "name": "acme--web.0",
            "environment": {"RAILS_ENV": "production", "PORT": "80"},
            "labels": {LABEL_APP: "acme", LABEL_PROCESS: "web", LABEL_INDEX: "0"},
            "cpu_shares": None,
            "mem_limit": 1024,
        }
        assert client.containers.create.call_args_list[1].kwargs["name"] == "acme--web.1"
        for container in client.created_containers:
            container.start.assert_called_once()

    def test_run_replaces_existing_containers(self):
        existing = get_container_mock("acme", "web", 0)
        other = get_container_mock("other", "web", 0)
        client = get_docker_client_mock([existing, other])
        scheduler = DockerScheduler(client=client)
        scheduler.run(App(id="acme", processes=[Process(name="web", desired_count=1)]))
        existing.remove.assert_called_once_with(force=True)
        other.remove.assert_not_called()

    def test_run_keeps_stopped_container_for_zero_instances(self):
        client = get_docker_client_mock([])
        scheduler = DockerScheduler(client=client)
        scheduler.run(App(id="acme", processes=[Process(name="web", desired_count=0)]))
        [container] = client.created_containers
        assert container.name == "acme--web.0"
        container.start.assert_not_called()

    def test_scale_up(self):
        web0 = get_container_mock("acme", "web", 0)
        client = get_docker_client_mock([web0])
        scheduler = DockerScheduler(client=client)
        scheduler.scale_process("acme", "web", 3)
        assert [c.kwargs["name"] for c in client.containers.create.call_args_list] == [
            "acme--web.1",
            "acme--web.2",
        ]
        config = client.containers.create.call_args_list[0].kwargs
        assert config["image"] == "remind101/acme-inc"
        assert config["command"] == ["acme-inc", "web"]
        assert config["labels"][LABEL_INDEX] == "1"
        assert config["cpu_shares"] == 256
        assert config["mem_limit"] is None
        web0.start.assert_not_called()

    def test_scale_down_to_zero_keeps_first_container(self):
        web0 = get_container_mock("acme", "web", 0)
        web1 = get_container_mock("acme", "web", 1)
        client = get_docker_client_mock([web0, web1])
        scheduler = DockerScheduler(client=client)
        scheduler.scale_process("acme", "web", 0)
        web0.stop.assert_called_once()
        web0.remove.assert_not_called()
        web1.remove.assert_called_once_with(force=True)

    def test_scale_up_from_zero_starts_stopped_container(self):
        web0 = get_container_mock("acme", "web", 0, status="exited")
        client = get_docker_client_mock([web0])
        scheduler = DockerScheduler(client=client)
        scheduler.scale_process("acme", "web", 1)
        web0.start.assert_called_once()
        client.containers.create.assert_not_called()

    def test_scale_process_not_found(self):
        client = get_docker_client_mock([get_container_mock("acme", "web", 0)])
        scheduler = DockerScheduler(client=client)
        with pytest.raises(ProcessNotFoundError, match="worker process not found"):
            scheduler.scale_process("acme", "worker", 1)
        client.containers.create.assert_not_called()

    def test_remove(self):
        web0 = get_container_mock("acme", "web", 0)
        worker0 = get_container_mock("acme", "worker", 0, status="exited")
        other = get_container_mock("other", "web", 0)
        client = get_docker_client_mock([web0, worker0, other])
        DockerScheduler(client=client).remove("acme")
        web0.remove.assert_called_once_with(force=True)
        worker0.remove.assert_called_once_with(force=True)
        other.remove.assert_not_called()

    def test_tasks_lists_running_containers(self):
        client = get_docker_client_mock(
            [
                get_container_mock("acme", "web", 0),
                get_container_mock("acme", "worker", 0, status="exited"),
                get_container_mock("acme", "console", 0, extra_labels={LABEL_ONE_OFF: "true"}),
            ]
        )
        tasks = DockerScheduler(client=client).tasks("acme")
        assert [(t.id, t.state) for t in tasks] == [("web0", "running")]

    def test_tasks_of_app_without_containers(self):
        assert DockerScheduler(client=get_docker_client_mock([])).tasks("acme") == []

    def test_stop_task(self):
        client = get_docker_client_mock([])
        DockerScheduler(client=client).stop_task("web0")
        client.containers.get.assert_called_once_with("web0")
        client.containers.get.return_value.stop.assert_called_once()

    def test_restart_process(self):
        web0 = get_container_mock("acme", "web", 0)
        web1 = get_container_mock("acme", "web", 1, status="exited")
        client = get_docker_client_mock([web0, web1])
        DockerScheduler(client=client).restart_process("acme", "web")
        web0.restart.assert_called_once()
        web1.restart.assert_not_called()

    def test_run_process_attached(self):
        client = get_docker_client_mock([])
        container = client.containers.run.return_value
        container.logs.return_value = [b"hello\n", b"world\n"]
        container.wait.return_value = {"StatusCode": 3}
        stdout = io.StringIO()
        app = App(id="acme", image="remind101/acme-inc")
        exit_code = DockerScheduler(client=client).run_process(
            app, Process(name="console", command="rails console", stdout=stdout)
        )
        assert exit_code == 3
        assert stdout.getvalue() == "hello\nworld\n"
        kwargs = client.containers.run.call_args.kwargs
        assert kwargs["detach"] is True
        assert kwargs["command"] == ["rails", "console"]
        assert kwargs["labels"][LABEL_ONE_OFF] == "true"
        assert "name" not in kwargs
        container.remove.assert_called_once_with(force=True)

    def test_run_process_detached(self):
        client = get_docker_client_mock([])
        app = App(id="acme", image="remind101/acme-inc")
        exit_code = DockerScheduler(client=client).run_process(
            app, Process(name="migrate", command="rake db:migrate")
        )
        assert exit_code is None
        kwargs = client.containers.run.call_args.kwargs
        assert kwargs["detach"] is True
        assert kwargs["auto_remove"] is True

    def test_run_process_with_stdin_not_supported(self):
        client = get_docker_client_mock([])
        app = App(id="acme", image="remind101/acme-inc")
        with pytest.raises(SchedulerError):
            DockerScheduler(client=client).run_process(
                app, Process(name="console", stdin=io.StringIO(), stdout=io.StringIO())
            )
        client.containers.run.assert_not_called()
