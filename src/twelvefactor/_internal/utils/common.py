from datetime import datetime, timezone

KiB = 1024
MiB = 1024 * KiB
GiB = 1024 * MiB


def get_current_datetime() -> datetime:
    return datetime.now(tz=timezone.utc)


def bytes_to_mib(size: int) -> int:
    """
    Converts bytes to whole mebibytes, truncating any remainder.
    """
    return size // MiB
