"""Base Pydantic models for AWS resources."""

from ipaddress import IPv4Address
from typing import Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


def validate_ipv4(v: str) -> str:
    """Return ``v`` unchanged if it is a dotted-quad IPv4 address."""
    try:
        IPv4Address(v)
    except ValueError:
        raise ValueError(f"Invalid IPv4 address: {v}") from None
    return v


class AWSResource(BaseModel):
    """Base model for all AWS resources."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="AWS resource ID")
    name: Optional[str] = Field(None, description="Resource name from tags")
    region: str = Field(default="", description="AWS region")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v or len(v) < 3:
            raise ValueError(f"Invalid resource ID: {v}")
        return v

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)
