from typing import Literal, Optional, Union

from pydantic import Field
from typing_extensions import Annotated

from twelvefactor._internal import settings
from twelvefactor._internal.core.models.common import CoreModel


class ECSAccessKeyCreds(CoreModel):
    type: Annotated[Literal["access_key"], Field(description="The type of credentials")] = (
        "access_key"
    )
    access_key: Annotated[str, Field(description="The access key")]
    secret_key: Annotated[str, Field(description="The secret key")]


class ECSDefaultCreds(CoreModel):
    type: Annotated[Literal["default"], Field(description="The type of credentials")] = "default"


AnyECSCreds = Union[ECSAccessKeyCreds, ECSDefaultCreds]


class ECSConfig(CoreModel):
    cluster: Annotated[
        Optional[str],
        Field(description="The ECS cluster to operate within. Omit to use the `default` cluster"),
    ] = None
    region: Annotated[
        Optional[str],
        Field(description="The AWS region. Omit to use the region boto3 resolves"),
    ] = None
    delimiter: Annotated[
        Optional[str],
        Field(
            description=(
                "The delimiter between the app id and the process name in ECS service names."
                " Defaults to `--`"
            )
        ),
    ] = None
    service_role: Annotated[
        Optional[str],
        Field(description="The IAM role attached to ECS services that have load balancers"),
    ] = None
    force_remove: Annotated[
        bool,
        Field(description="Delete services without scaling them down to zero first"),
    ] = False
    creds: AnyECSCreds = Field(
        ECSDefaultCreds(), description="The credentials", discriminator="type"
    )

    @classmethod
    def from_settings(cls) -> "ECSConfig":
        return cls(
            cluster=settings.ECS_CLUSTER,
            region=settings.ECS_REGION,
            delimiter=settings.DELIMITER,
            service_role=settings.ECS_SERVICE_ROLE,
            force_remove=settings.ECS_FORCE_REMOVE,
        )
