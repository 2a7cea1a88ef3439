"""Credential and region resolution.

Credentials are picked once per action in a fixed order: an assumed role
when both role ARN and session name are set, otherwise a static key pair
when both keys are set, otherwise the ambient boto3 provider chain
(environment, instance profile, shared config).
"""

from dataclasses import dataclass
from typing import Optional, Union

import boto3

from ..config import SecondaryIPConfig
from ..core.base import DEFAULT_REGION
from ..core.logging import get_logger

logger = get_logger("credentials")


@dataclass(frozen=True)
class AmbientChain:
    """Defer to boto3's default credential provider chain."""


@dataclass(frozen=True)
class StaticKeys:
    access_key: str
    secret_key: str
    session_token: Optional[str] = None

    def __repr__(self) -> str:
        return f"StaticKeys(access_key={self.access_key!r}, secret_key='***')"


@dataclass(frozen=True)
class AssumedRole:
    role_arn: str
    session_name: str
    base: Union[AmbientChain, StaticKeys] = AmbientChain()


Credentials = Union[AmbientChain, StaticKeys, AssumedRole]


def select_credentials(
    access_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    session_token: Optional[str] = None,
    role_arn: Optional[str] = None,
    session_name: Optional[str] = None,
) -> Credentials:
    """Pick exactly one credential variant from optional string inputs."""
    base: Union[AmbientChain, StaticKeys] = AmbientChain()
    if access_key and secret_key:
        base = StaticKeys(access_key, secret_key, session_token or None)

    if role_arn and session_name:
        logger.debug("Assuming role %s", role_arn)
        return AssumedRole(role_arn, session_name, base)
    if isinstance(base, StaticKeys):
        logger.debug("Using resource-defined credentials")
    else:
        logger.debug("Using local credential chain")
    return base


def credentials_from_config(config: SecondaryIPConfig) -> Credentials:
    return select_credentials(
        access_key=config.aws_access_key,
        secret_key=config.aws_secret_access_key,
        session_token=config.aws_session_token,
        role_arn=config.aws_assume_role_arn,
        session_name=config.aws_role_session_name,
    )


def region_from_availability_zone(az: Optional[str]) -> Optional[str]:
    """'us-west-2a' -> 'us-west-2'"""
    if not az:
        return None
    az = az.strip()
    if len(az) < 2 or not az[-1].isalpha():
        return None
    return az[:-1]


def resolve_region(
    explicit: Optional[str] = None, availability_zone: Optional[str] = None
) -> str:
    """Explicit region, else the instance placement's region, else us-east-1."""
    if explicit:
        return explicit
    derived = region_from_availability_zone(availability_zone)
    if derived:
        logger.debug("Using region %s from instance placement", derived)
        return derived
    logger.debug(
        "Falling back to region %s as placement data and configured region "
        "are not present",
        DEFAULT_REGION,
    )
    return DEFAULT_REGION


def _session_for(
    credentials: Union[AmbientChain, StaticKeys], region: str
) -> boto3.Session:
    if isinstance(credentials, StaticKeys):
        return boto3.Session(
            aws_access_key_id=credentials.access_key,
            aws_secret_access_key=credentials.secret_key,
            aws_session_token=credentials.session_token,
            region_name=region,
        )
    return boto3.Session(region_name=region)


def build_session(credentials: Credentials, region: str) -> boto3.Session:
    """Build a boto3 session for ``credentials`` in ``region``.

    For an assumed role the base credentials are exchanged through STS
    AssumeRole; any STS error propagates unchanged.
    """
    if not isinstance(credentials, AssumedRole):
        return _session_for(credentials, region)

    sts = _session_for(credentials.base, region).client("sts", region_name=region)
    resp = sts.assume_role(
        RoleArn=credentials.role_arn, RoleSessionName=credentials.session_name
    )
    temp = resp["Credentials"]
    logger.debug(
        "Assumed role %s (expires %s)", credentials.role_arn, temp.get("Expiration")
    )
    return boto3.Session(
        aws_access_key_id=temp["AccessKeyId"],
        aws_secret_access_key=temp["SecretAccessKey"],
        aws_session_token=temp["SessionToken"],
        region_name=region,
    )


class CredentialResolver:
    """Resolves one authenticated session per action and reuses it."""

    def __init__(self, credentials: Credentials, region: str):
        self.credentials = credentials
        self.region = region
        self._session: Optional[boto3.Session] = None

    @classmethod
    def from_config(
        cls, config: SecondaryIPConfig, availability_zone: Optional[str] = None
    ) -> "CredentialResolver":
        return cls(
            credentials_from_config(config),
            resolve_region(config.region, availability_zone),
        )

    def session(self) -> boto3.Session:
        if self._session is None:
            logger.debug(
                "Initializing session (region=%s, credentials=%s)",
                self.region,
                type(self.credentials).__name__,
            )
            self._session = build_session(self.credentials, self.region)
        return self._session

    def client(self, service: str = "ec2"):
        return self.session().client(service, region_name=self.region)
