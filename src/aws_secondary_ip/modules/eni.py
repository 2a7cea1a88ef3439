"""Elastic Network Interface (ENI) module"""

from typing import Optional

import boto3
from rich.table import Table
from rich.text import Text

from ..core import BaseClient, BaseDisplay
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..models import NetworkInterfaceModel

logger = get_logger("eni")


class ENIClient(BaseClient):
    """EC2 calls used to inspect and mutate an ENI's private IPs.

    API errors are not caught here; they abort the calling action.
    """

    def __init__(
        self,
        profile: Optional[str] = None,
        session: Optional[boto3.Session] = None,
        region_name: Optional[str] = None,
    ):
        super().__init__(profile, session, region_name)

    @property
    def ec2(self):
        return self.client("ec2")

    def describe_network_interfaces(self, eni_ids: list[str]) -> list[dict]:
        resp = self.ec2.describe_network_interfaces(NetworkInterfaceIds=eni_ids)
        return resp.get("NetworkInterfaces", [])

    def get_network_interface(self, eni_id: str) -> NetworkInterfaceModel:
        eni = next(
            (
                ni
                for ni in self.describe_network_interfaces([eni_id])
                if ni["NetworkInterfaceId"] == eni_id
            ),
            None,
        )
        if eni is None:
            raise NotFoundError(f"Network interface {eni_id} not found")
        return NetworkInterfaceModel.from_api(eni, region=self.region_name)

    def assign_private_ip(self, eni_id: str, ip: Optional[str] = None) -> dict:
        """Assign ``ip`` to the ENI, or let EC2 pick one when ``ip`` is None."""
        if ip:
            logger.info("Assigning %s to %s", ip, eni_id)
            return self.ec2.assign_private_ip_addresses(
                NetworkInterfaceId=eni_id, PrivateIpAddresses=[ip]
            )
        logger.info("Assigning an EC2-allocated secondary IP to %s", eni_id)
        return self.ec2.assign_private_ip_addresses(
            NetworkInterfaceId=eni_id, SecondaryPrivateIpAddressCount=1
        )

    def unassign_private_ip(self, eni_id: str, ip: str) -> dict:
        logger.info("Unassigning %s from %s", ip, eni_id)
        return self.ec2.unassign_private_ip_addresses(
            NetworkInterfaceId=eni_id, PrivateIpAddresses=[ip]
        )


class ENIDisplay(BaseDisplay):
    def show_interface(
        self, eni: NetworkInterfaceModel, highlight: Optional[str] = None
    ):
        table = Table(
            title=f"Interface {eni.id}", show_header=True, header_style="bold"
        )
        table.add_column("#", style="dim", justify="right")
        table.add_column("Private IP", style="yellow")
        table.add_column("Role", style="cyan")

        for i, ip in enumerate(eni.private_ips, 1):
            role = "primary" if ip == eni.primary_ip else "secondary"
            style = "bold green" if ip == highlight else ""
            table.add_row(str(i), Text(ip, style=style), role)

        self.console.print(table)
        self.console.print(
            f"[dim]MAC: {eni.mac_address or '-'}  Subnet: {eni.subnet_id or '-'}  "
            f"Instance: {eni.instance_id or '-'}[/]"
        )
