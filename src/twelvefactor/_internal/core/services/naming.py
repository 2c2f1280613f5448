from typing import Optional, Tuple

from twelvefactor._internal.core.errors import InvalidResourceNameError

DEFAULT_DELIMITER = "--"


class NameCodec:
    """
    Maps `(app_id, process_name)` pairs onto flat backend resource names and back.

    The name is `app_id + delimiter + process_name`. Decoding splits on the first
    occurrence of the delimiter, so an app id that itself contains the delimiter
    does not round-trip: `encode("a--b", "web")` decodes to `("a", "b--web")`.
    """

    def __init__(self, delimiter: Optional[str] = None):
        self.delimiter = delimiter or DEFAULT_DELIMITER

    def encode(self, app_id: str, process_name: str) -> str:
        return self.delimiter.join([app_id, process_name])

    def decode(self, name: Optional[str]) -> Tuple[str, str, bool]:
        """
        Returns `(app_id, process_name, ok)`. `ok` is `False` for names that
        were not produced by `encode()`.
        """
        if not name:
            return "", "", False
        parts = name.split(self.delimiter, 1)
        if len(parts) != 2:
            return "", "", False
        return parts[0], parts[1], True

    def __repr__(self) -> str:
        return f"NameCodec(delimiter={self.delimiter!r})"


def resource_id(arn: str) -> str:
    """
    Returns the resource id of an ARN, e.g.
    `arn:aws:ecs:us-east-1:012345678910:service/acme--web` -> `acme--web`.
    Long-format ARNs that include the cluster name (`service/cluster/acme--web`)
    yield the last path segment.
    """
    parts = arn.split(":", 5)
    if len(parts) != 6 or parts[0] != "arn":
        raise InvalidResourceNameError(f"Invalid ARN: {arn}")
    resource = parts[5]
    if "/" in resource:
        return resource.rsplit("/", 1)[1]
    if ":" in resource:
        return resource.rsplit(":", 1)[1]
    raise InvalidResourceNameError(f"ARN has no resource id: {arn}")
