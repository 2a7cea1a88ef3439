"""System inventory: local network interfaces and the default route."""

import socket
from pathlib import Path
from typing import Optional

import psutil

from .exceptions import InterfaceNotFoundError
from .logging import get_logger

PROC_ROUTE = Path("/proc/net/route")
RTF_GATEWAY = 0x2

logger = get_logger("inventory")


def _family_name(family) -> str:
    if family == psutil.AF_LINK:
        return "lladdr"
    if family == socket.AF_INET:
        return "inet"
    if family == socket.AF_INET6:
        return "inet6"
    return str(family)


class SystemInventory:
    """Snapshot of the host's network facts, gathered once per instance."""

    def __init__(self, route_table: Optional[Path] = None):
        self.route_table = route_table or PROC_ROUTE
        self._interfaces: Optional[dict[str, list[dict]]] = None
        self._default_interface: Optional[str] = None

    def interfaces(self) -> dict[str, list[dict]]:
        """Map interface name -> [{"family": ..., "address": ...}, ...]"""
        if self._interfaces is None:
            self._interfaces = {
                name: [
                    {"family": _family_name(a.family), "address": a.address}
                    for a in addrs
                ]
                for name, addrs in psutil.net_if_addrs().items()
            }
        return self._interfaces

    def default_interface(self) -> str:
        """Name of the interface carrying the default route."""
        if self._default_interface is None:
            self._default_interface = self._read_default_route()
        return self._default_interface

    def _read_default_route(self) -> str:
        try:
            lines = self.route_table.read_text().splitlines()
        except OSError as e:
            raise InterfaceNotFoundError("default", f"unknown: {e}") from e

        for line in lines[1:]:
            fields = line.split()
            if len(fields) < 4:
                continue
            try:
                flags = int(fields[3], 16)
            except ValueError:
                continue
            iface, destination = fields[0], fields[1]
            if destination == "00000000" and flags & RTF_GATEWAY:
                logger.debug("Default interface is %s", iface)
                return iface
        raise InterfaceNotFoundError("default", "not present in routing table")
