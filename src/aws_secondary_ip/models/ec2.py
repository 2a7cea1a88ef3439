"""ENI and EBS snapshot Pydantic models."""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator
from .base import AWSResource, validate_ipv4


class NetworkInterfaceModel(AWSResource):
    """Elastic Network Interface with its private IPv4 inventory."""

    vpc_id: Optional[str] = Field(None, description="VPC ID")
    subnet_id: Optional[str] = Field(None, description="Subnet ID")
    mac_address: Optional[str] = Field(None)
    status: Optional[str] = Field(None)
    instance_id: Optional[str] = Field(None, description="Attached EC2 instance")
    primary_ip: Optional[str] = Field(None, description="Primary private IP")
    private_ips: list[str] = Field(
        default_factory=list, description="All private IPv4s, primary first"
    )

    @field_validator("id")
    @classmethod
    def validate_eni_id(cls, v: str) -> str:
        if not v.startswith("eni-"):
            raise ValueError(f"ENI ID must start with 'eni-': {v}")
        return v

    @field_validator("private_ips")
    @classmethod
    def validate_private_ips(cls, v: list[str]) -> list[str]:
        return [validate_ipv4(ip) for ip in v]

    @property
    def secondary_ips(self) -> list[str]:
        return [ip for ip in self.private_ips if ip != self.primary_ip]

    @classmethod
    def from_api(cls, eni: dict, region: str = "") -> "NetworkInterfaceModel":
        """Build from a DescribeNetworkInterfaces entry."""
        addresses = sorted(
            eni.get("PrivateIpAddresses", []), key=lambda a: not a.get("Primary")
        )
        name = next(
            (t["Value"] for t in eni.get("TagSet", []) if t["Key"] == "Name"), None
        )
        return cls(
            id=eni["NetworkInterfaceId"],
            name=name,
            region=region,
            vpc_id=eni.get("VpcId"),
            subnet_id=eni.get("SubnetId"),
            mac_address=eni.get("MacAddress"),
            status=eni.get("Status"),
            instance_id=eni.get("Attachment", {}).get("InstanceId"),
            primary_ip=eni.get("PrivateIpAddress"),
            private_ips=[a["PrivateIpAddress"] for a in addresses],
        )


class SnapshotModel(AWSResource):
    """EBS snapshot."""

    volume_id: Optional[str] = Field(None)
    start_time: datetime = Field(..., description="Snapshot start time")
    status: str = Field(..., description="pending, completed, error, ...")

    @field_validator("id")
    @classmethod
    def validate_snapshot_id(cls, v: str) -> str:
        if not v.startswith("snap-"):
            raise ValueError(f"Snapshot ID must start with 'snap-': {v}")
        return v

    @property
    def completed(self) -> bool:
        return self.status == "completed"

    @classmethod
    def from_api(cls, snap: dict, region: str = "") -> "SnapshotModel":
        return cls(
            id=snap["SnapshotId"],
            region=region,
            volume_id=snap.get("VolumeId"),
            start_time=snap["StartTime"],
            status=snap["State"],
        )
