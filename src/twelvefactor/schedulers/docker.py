from twelvefactor._internal.core.schedulers.docker import DockerScheduler

__all__ = ["DockerScheduler"]
