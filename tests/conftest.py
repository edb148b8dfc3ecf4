"""Shared fixtures"""

import ipaddress
import logging

import pytest

from hcloud_keepalived_notify.models import (
    FAMILY_IPV4,
    FAMILY_IPV6,
    LocalAddress,
    RemoteFloatingIP,
    ServerIdentity,
)


@pytest.fixture(autouse=True)
def reset_package_loggers():
    """setup_logger keeps handlers across calls, drop them between tests"""
    yield
    for name in ("hcloud_keepalived_notify", "hcloud_keepalived_notify.notify"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


@pytest.fixture
def server():
    return ServerIdentity(id=12345, name="lb-1")


@pytest.fixture
def local_addresses():
    return (LocalAddress.parse("1.2.3.4"), LocalAddress.parse("2600::1"))


@pytest.fixture
def ipv4_fip():
    """Factory for IPv4 floating IP snapshots"""
    def make(fip_id, ip, assignee_id=None, name=None):
        return RemoteFloatingIP(
            id=fip_id,
            name=name or f"fip-{fip_id}",
            family=FAMILY_IPV4,
            address=ipaddress.IPv4Address(ip),
            assignee_id=assignee_id,
        )
    return make


@pytest.fixture
def ipv6_fip():
    """Factory for IPv6 floating IP snapshots"""
    def make(fip_id, network, assignee_id=None, name=None):
        return RemoteFloatingIP(
            id=fip_id,
            name=name or f"fip-{fip_id}",
            family=FAMILY_IPV6,
            network=ipaddress.IPv6Network(network) if network else None,
            assignee_id=assignee_id,
        )
    return make
