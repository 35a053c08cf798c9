"""Run configuration and the boto3 session built from it."""

import os
from dataclasses import dataclass
from typing import Optional

import boto3
import botocore.session


@dataclass
class Config:
    """Settings collected from the command line."""

    region: Optional[str] = None
    profile: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    token: Optional[str] = None
    credentials_file: Optional[str] = None

    def has_static_credentials(self) -> bool:
        return bool(self.access_key and self.secret_key)


def create_session(config: Config) -> boto3.Session:
    """
    Create a boto3 session honouring the credential chain.

    Explicit keys win; otherwise botocore's own chain applies (environment
    variables, then the shared credentials file and profile, then instance
    metadata). A custom shared credentials file path replaces the default one.
    """
    botocore_session = botocore.session.Session()
    if config.credentials_file:
        botocore_session.set_config_variable(
            'credentials_file', os.path.expanduser(config.credentials_file)
        )

    if config.has_static_credentials():
        return boto3.Session(
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            aws_session_token=config.token,
            region_name=config.region,
            botocore_session=botocore_session,
        )

    return boto3.Session(
        profile_name=config.profile,
        region_name=config.region,
        botocore_session=botocore_session,
    )
