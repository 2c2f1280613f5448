import re
import sys
from pathlib import Path

from setuptools import find_packages, setup

project_dir = Path(__file__).parent


def get_version():
    text = (project_dir / "src" / "twelvefactor" / "version.py").read_text()
    match = re.compile(r"__version__\s*=\s*\"?([^\n\"]+)\"?.*").match(text)
    if match:
        if match.group(1) != "None":
            return match.group(1)
        else:
            return None
    else:
        sys.exit("Can't parse version.py")


def get_long_description():
    return open(project_dir / "README.md").read()


BASE_DEPS = [
    "pyyaml",
    "typing-extensions>=4.0.0",
    "rich",
    "pydantic>=1.10.10,<2.0.0",
    "pydantic-duality>=1.2.4",
    "orjson",
    "python-json-logger>=3.1.0",
]

ECS_DEPS = [
    "boto3",
    "botocore",
]

DOCKER_DEPS = [
    "docker>=6.0.0",
]

TEST_DEPS = [
    "pytest",
]

ALL_DEPS = ECS_DEPS + DOCKER_DEPS

setup(
    name="twelvefactor",
    version=get_version(),
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["tests", "tests.*"]),
    include_package_data=True,
    scripts=[],
    description="Run twelve-factor applications on pluggable container schedulers",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    install_requires=BASE_DEPS,
    extras_require={
        "all": ALL_DEPS,
        "ecs": ECS_DEPS,
        "docker": DOCKER_DEPS,
        "test": ALL_DEPS + TEST_DEPS,
    },
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Programming Language :: Python :: 3",
    ],
)
