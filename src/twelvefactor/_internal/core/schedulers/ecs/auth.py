from typing import Optional

import boto3.session
import botocore.exceptions
from boto3.session import Session

from twelvefactor._internal.core.errors import SchedulerAuthError
from twelvefactor._internal.core.schedulers.ecs.models import AnyECSCreds, ECSAccessKeyCreds


def authenticate(creds: AnyECSCreds, region: Optional[str] = None) -> Session:
    session = get_session(creds=creds, region=region)
    validate_credentials(session)
    return session


def get_session(creds: AnyECSCreds, region: Optional[str] = None) -> Session:
    if isinstance(creds, ECSAccessKeyCreds):
        return boto3.session.Session(
            region_name=region,
            aws_access_key_id=creds.access_key,
            aws_secret_access_key=creds.secret_key,
        )
    return boto3.session.Session(region_name=region)


def validate_credentials(session: Session):
    sts = session.client("sts")
    try:
        sts.get_caller_identity()
    except (botocore.exceptions.ClientError, botocore.exceptions.NoCredentialsError) as e:
        raise SchedulerAuthError("Invalid AWS credentials") from e
