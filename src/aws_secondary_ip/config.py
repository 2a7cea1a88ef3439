"""Action configuration.

Each assign/unassign invocation is driven by one validated
``SecondaryIPConfig``. Values may come from a YAML file, with command-line
flags layered on top.
"""

from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .core.exceptions import ConfigurationError
from .models.base import validate_ipv4

DEFAULT_TIMEOUT = 3 * 60  # seconds; 0 or None waits forever
POLL_INTERVAL = 3


class SecondaryIPConfig(BaseModel):
    """Inputs to a single secondary IP action."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(default="default", description="Logical action name")
    aws_access_key: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_session_token: Optional[str] = None
    aws_assume_role_arn: Optional[str] = None
    aws_role_session_name: Optional[str] = None
    region: Optional[str] = None
    interface: Optional[str] = Field(None, description="OS interface, e.g. eth0")
    ip: Optional[str] = Field(None, description="Desired secondary IP")
    timeout: Optional[float] = Field(default=DEFAULT_TIMEOUT, ge=0)

    @field_validator(
        "aws_access_key",
        "aws_secret_access_key",
        "aws_session_token",
        "aws_assume_role_arn",
        "aws_role_session_name",
        "region",
        "interface",
        "ip",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("ip")
    @classmethod
    def validate_ip(cls, v: Optional[str]) -> Optional[str]:
        return validate_ipv4(v) if v is not None else v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or "." in v:
            raise ValueError(f"Invalid action name: {v!r}")
        return v

    @model_validator(mode="after")
    def check_credentials(self) -> "SecondaryIPConfig":
        if bool(self.aws_access_key) != bool(self.aws_secret_access_key):
            raise ValueError(
                "aws_access_key and aws_secret_access_key must be given together"
            )
        if bool(self.aws_assume_role_arn) != bool(self.aws_role_session_name):
            raise ValueError(
                "aws_assume_role_arn and aws_role_session_name must be given together"
            )
        if self.aws_session_token and not self.aws_access_key:
            raise ValueError("aws_session_token requires an access key pair")
        return self

    @property
    def wait_forever(self) -> bool:
        return not self.timeout


def build_config(**values: Any) -> SecondaryIPConfig:
    """Validate ``values`` into a config, raising ConfigurationError."""
    try:
        return SecondaryIPConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e


def load_config(
    path: Optional[Union[str, Path]] = None, **overrides: Any
) -> SecondaryIPConfig:
    """Load a YAML config file and apply non-None overrides on top."""
    values: dict[str, Any] = {}
    if path:
        try:
            raw = yaml.safe_load(Path(path).read_text())
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config {path}: {e}") from e
        if raw is not None and not isinstance(raw, dict):
            raise ConfigurationError(f"Config {path} must be a mapping")
        values.update(raw or {})
    values.update({k: v for k, v in overrides.items() if v is not None})
    return build_config(**values)
