import shlex
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import Field, validator
from typing_extensions import Annotated

from twelvefactor._internal.core.models.common import CoreModel


def merge_env(*envs: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Merges environment mappings into a new dict. Later mappings override earlier ones.
    """
    merged: Dict[str, str] = {}
    for env in envs:
        if env:
            merged.update(env)
    return merged


class Process(CoreModel):
    """
    An individual process of an app, e.g. `web` or `worker`.

    Attributes:
        name (str): The process name, unique within the app
        command (List[str]): The command to run. A string is split shell-style
        env (Dict[str, str]): Environment variables merged over the app's environment
        labels (Dict[str, str]): Free form labels to attach to the process
        stdout (Any): Where to send stdout of an attached process. `None` means detached
        stdin (Any): Where to read stdin of an attached process from. `None` means not attached
        desired_count (int): The desired number of instances to run
        memory (int): The amount of memory to allocate, in bytes
        cpu_shares (int): The number of CPU shares to allocate
    """

    name: Annotated[
        str, Field(description="The process name, unique within the app", min_length=1)
    ]
    command: Annotated[List[str], Field(description="The command to run")] = []
    env: Annotated[
        Dict[str, str],
        Field(description="The environment variables merged over the app's environment"),
    ] = {}
    labels: Annotated[Dict[str, str], Field(description="Free form labels")] = {}
    stdout: Annotated[
        Optional[Any], Field(description="The stream to attach stdout to", exclude=True)
    ] = None
    stdin: Annotated[
        Optional[Any], Field(description="The stream to attach stdin to", exclude=True)
    ] = None
    desired_count: Annotated[
        int, Field(description="The desired number of instances to run", ge=0)
    ] = 0
    memory: Annotated[int, Field(description="The memory limit in bytes", ge=0)] = 0
    cpu_shares: Annotated[int, Field(description="The number of CPU shares", ge=0)] = 0

    class Config(CoreModel.Config):
        frozen = True

    @validator("command", pre=True)
    def split_command(cls, v: Union[str, List[str], None]) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return shlex.split(v)
        return v

    @property
    def attached(self) -> bool:
        return self.stdout is not None


class App(CoreModel):
    """
    A twelve-factor application: a collection of processes sharing an image
    and a common environment.

    Attributes:
        id (str): The unique identifier of the app. Namespaces the app's backend resources
        name (str): The app name
        version (Optional[str]): The app version
        image (str): The container image shared by all processes
        env (Dict[str, str]): The environment shared by all processes
        processes (List[Process]): The processes of the app
    """

    id: Annotated[str, Field(description="The unique identifier of the app", min_length=1)]
    name: Annotated[str, Field(description="The app name")] = ""
    version: Annotated[Optional[str], Field(description="The app version")] = None
    image: Annotated[str, Field(description="The container image")] = ""
    env: Annotated[Dict[str, str], Field(description="The shared environment variables")] = {}
    processes: Annotated[List[Process], Field(description="The processes of the app")] = []

    class Config(CoreModel.Config):
        frozen = True

    @validator("processes")
    def validate_unique_process_names(cls, v: List[Process]) -> List[Process]:
        seen = set()
        for process in v:
            if process.name in seen:
                raise ValueError(f"Duplicate process name: {process.name}")
            seen.add(process.name)
        return v

    def process_env(self, process: Process) -> Dict[str, str]:
        return merge_env(self.env, process.env)

    def get_process(self, name: str) -> Optional[Process]:
        for process in self.processes:
            if process.name == name:
                return process
        return None


class Task(CoreModel):
    """
    A running or pending instance of a process, as observed on the backend.

    Attributes:
        id (str): The backend identifier of the instance
        state (str): The backend status, e.g. `RUNNING`, `PENDING` or `STOPPED`
        time (datetime): When the state was observed
    """

    id: str
    state: str
    time: datetime
