"""Data types shared by the matcher, reconciler and cloud adapter"""

import ipaddress
from dataclasses import dataclass
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

FAMILY_IPV4 = "ipv4"
FAMILY_IPV6 = "ipv6"


@dataclass(frozen=True)
class LocalAddress:
    """An address owned by this node, optionally written with a prefix length"""

    address: IPAddress
    prefixlen: Optional[int] = None

    @classmethod
    def parse(cls, value: str) -> "LocalAddress":
        """
        Parse an address such as ``1.2.3.4``, ``2600::1`` or ``2600::1/64``

        Raises:
            ValueError: If the value is not a valid address or prefix
        """
        value = value.strip()
        if "/" in value:
            interface = ipaddress.ip_interface(value)
            return cls(address=interface.ip, prefixlen=interface.network.prefixlen)
        return cls(address=ipaddress.ip_address(value))

    @property
    def is_prefix(self) -> bool:
        return self.prefixlen is not None

    @property
    def version(self) -> int:
        return self.address.version

    def __str__(self) -> str:
        if self.is_prefix:
            return f"{self.address}/{self.prefixlen}"
        return str(self.address)


@dataclass(frozen=True)
class ServerIdentity:
    """This node as known to the Hetzner Cloud API"""

    id: int
    name: str


@dataclass(frozen=True)
class RemoteFloatingIP:
    """Read-only snapshot of a floating IP returned by the API"""

    id: int
    name: str
    family: str
    address: Optional[ipaddress.IPv4Address] = None
    network: Optional[ipaddress.IPv6Network] = None
    assignee_id: Optional[int] = None

    @classmethod
    def from_hcloud(cls, floating_ip) -> "RemoteFloatingIP":
        """Build a snapshot from an hcloud ``FloatingIP``

        IPv4 floating IPs carry a single address, IPv6 ones a /64 network.
        Values the API returns in an unexpected shape are stored as None.
        """
        family = floating_ip.type
        address = None
        network = None
        if family == FAMILY_IPV4:
            address = _parse_or_none(ipaddress.IPv4Address, floating_ip.ip)
        elif family == FAMILY_IPV6:
            network = _parse_or_none(
                lambda value: ipaddress.IPv6Network(value, strict=False),
                floating_ip.ip,
            )

        server = floating_ip.server
        return cls(
            id=floating_ip.id,
            name=floating_ip.name,
            family=family,
            address=address,
            network=network,
            assignee_id=server.id if server is not None else None,
        )

    @property
    def ip(self) -> str:
        """Address or network as displayed in logs"""
        value = self.address if self.family == FAMILY_IPV4 else self.network
        return str(value) if value is not None else "unknown"


def _parse_or_none(parser, value):
    if not value:
        return None
    try:
        return parser(value)
    except ValueError:
        return None


class OutcomeStatus:
    ALREADY_CORRECT = "already-correct"
    REASSIGNED = "reassigned"
    FAILED = "failed"
    WOULD_REASSIGN = "would-reassign"


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Result of reconciling a single matched floating IP"""

    floating_ip: RemoteFloatingIP
    status: str
    reason: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == OutcomeStatus.FAILED
