"""Match floating IPs from the API against the addresses owned by this node"""

from typing import Iterable

from .models import FAMILY_IPV4, FAMILY_IPV6, LocalAddress, RemoteFloatingIP


def matches(floating_ip: RemoteFloatingIP, local_addresses: Iterable[LocalAddress]) -> bool:
    """
    Check whether a floating IP belongs to one of the local addresses

    IPv4 floating IPs match a bare local address by equality. IPv6 floating
    IPs carry a network and match when a local IPv6 address lies inside it.
    Addresses of one family are never compared with the other.

    Args:
        floating_ip: Floating IP snapshot from the API
        local_addresses: Configured addresses of this node

    Returns:
        True on the first matching local address, False otherwise
    """
    for local in local_addresses:
        if floating_ip.family == FAMILY_IPV4:
            if (
                floating_ip.address is not None
                and local.version == 4
                and not local.is_prefix
                and local.address == floating_ip.address
            ):
                return True
        elif floating_ip.family == FAMILY_IPV6:
            if (
                floating_ip.network is not None
                and local.version == 6
                and local.address in floating_ip.network
            ):
                return True
    return False
