from twelvefactor._internal.core.schedulers.docker.scheduler import DockerScheduler

__all__ = ["DockerScheduler"]
