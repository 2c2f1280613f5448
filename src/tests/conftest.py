import pytest


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "docker: mark test as requiring a Docker daemon to run only with --rundocker"
    )
    config.addinivalue_line(
        "markers", "ecs: mark test as creating real ECS resources to run only with --runecs"
    )


def pytest_addoption(parser):
    parser.addoption(
        "--rundocker", action="store_true", default=False, help="Run tests against Docker"
    )
    parser.addoption("--runecs", action="store_true", default=False, help="Run tests against ECS")


def pytest_collection_modifyitems(config, items):
    skip_docker = pytest.mark.skip(reason="need --rundocker option to run")
    skip_ecs = pytest.mark.skip(reason="need --runecs option to run")
    for item in items:
        if not config.getoption("--rundocker") and item.get_closest_marker("docker"):
            item.add_marker(skip_docker)
        if not config.getoption("--runecs") and item.get_closest_marker("ecs"):
            item.add_marker(skip_ecs)
