"""Instance metadata reader.

Resolves an OS interface to its MAC address, ENI ID and private IPv4
addresses. Reads go straight to the link-local metadata endpoint, never
through a proxy, and are not retried here: a timeout or non-200 response
fails the enclosing action.
"""

from typing import Optional

import requests

from ..core.exceptions import InterfaceNotFoundError, MetadataUnavailable
from ..core.inventory import SystemInventory
from ..core.logging import get_logger

IMDS_BASE = "http://169.254.169.254"
IMDS_TIMEOUT = (1.0, 2.0)  # connect, read
IMDS_TOKEN_TTL = 21600
NO_PROXY = {"http": None, "https": None}

logger = get_logger("metadata")


class MetadataReader:
    def __init__(
        self,
        inventory: Optional[SystemInventory] = None,
        http: Optional[requests.Session] = None,
        base_url: str = IMDS_BASE,
        timeout: tuple[float, float] = IMDS_TIMEOUT,
    ):
        self.inventory = inventory or SystemInventory()
        self.http = http or requests.Session()
        # Ignore HTTP(S)_PROXY and friends from the environment
        self.http.trust_env = False
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token: Optional[str] = None
        self._token_checked = False

    def _imds_token(self) -> Optional[str]:
        """IMDSv2 session token, or None to fall back to IMDSv1."""
        if not self._token_checked:
            self._token_checked = True
            try:
                r = self.http.put(
                    f"{self.base_url}/latest/api/token",
                    headers={"X-aws-ec2-metadata-token-ttl-seconds": str(IMDS_TOKEN_TTL)},
                    timeout=self.timeout,
                    proxies=NO_PROXY,
                )
                if r.status_code == 200:
                    self._token = r.text
                else:
                    logger.debug("IMDSv2 token refused (%s), using IMDSv1", r.status_code)
            except requests.RequestException as e:
                logger.debug("IMDSv2 token request failed, using IMDSv1: %s", e)
        return self._token

    def get(self, path: str) -> str:
        """GET ``/latest/meta-data/<path>`` and return the body."""
        url = f"{self.base_url}/latest/meta-data/{path.lstrip('/')}"
        headers = {}
        token = self._imds_token()
        if token:
            headers["X-aws-ec2-metadata-token"] = token
        try:
            r = self.http.get(
                url, headers=headers, timeout=self.timeout, proxies=NO_PROXY
            )
        except requests.RequestException as e:
            raise MetadataUnavailable(f"Metadata request to {url} failed: {e}") from e
        if r.status_code != 200:
            raise MetadataUnavailable(
                f"Metadata request to {url} returned HTTP {r.status_code}"
            )
        return r.text

    def mac_address(self, interface: str) -> str:
        """Link-layer address of ``interface``, lower-cased."""
        addresses = self.inventory.interfaces().get(interface)
        if addresses is None:
            raise InterfaceNotFoundError(interface)
        mac = next(
            (a["address"] for a in addresses if a["family"] == "lladdr"), None
        )
        if not mac:
            raise InterfaceNotFoundError(interface, "has no link-layer address")
        return mac.lower()

    def private_ips(self, interface: str) -> set[str]:
        mac = self.mac_address(interface)
        body = self.get(f"network/interfaces/macs/{mac}/local-ipv4s")
        ips = {line.strip() for line in body.splitlines() if line.strip()}
        logger.debug(
            "%s assigned local ipv4s addresses is/are %s",
            interface,
            ",".join(sorted(ips)),
        )
        return ips

    def eni_id(self, interface: str) -> str:
        mac = self.mac_address(interface)
        eni = self.get(f"network/interfaces/macs/{mac}/interface-id").strip()
        if not eni:
            raise MetadataUnavailable(f"No interface-id published for {interface}")
        logger.debug("%s eni id is %s", interface, eni)
        return eni

    def default_interface_name(self) -> str:
        name = self.inventory.default_interface()
        logger.debug("Default interface is %s", name)
        return name

    def instance_id(self) -> str:
        return self.get("instance-id").strip()

    def availability_zone(self) -> Optional[str]:
        """Placement AZ, or None when not running on EC2."""
        try:
            return self.get("placement/availability-zone").strip() or None
        except MetadataUnavailable as e:
            logger.debug("No placement metadata: %s", e)
            return None
