"""Hetzner Cloud API access used by the reconciler"""

import logging
from typing import List, Optional
from hcloud import Client
from hcloud.floating_ips.domain import FloatingIP
from hcloud.servers.domain import Server

from . import __version__
from .exceptions import HetznerAPIError, IdentityNotFoundError, RemoteUnavailableError
from .models import RemoteFloatingIP, ServerIdentity

APPLICATION_NAME = "hcloud-keepalived-notify"


class HetznerCloud:
    """Thin wrapper around the hcloud client

    Exposes exactly the three calls the hook needs and converts SDK objects
    and exceptions into the package's own types.
    """

    def __init__(
        self,
        api_token: str,
        wait_for_assignment: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the API wrapper

        Args:
            api_token: Hetzner Cloud API token
            wait_for_assignment: Block until each assign action has finished
            logger: Optional logger instance
        """
        self.client = Client(
            token=api_token,
            application_name=APPLICATION_NAME,
            application_version=__version__,
        )
        self.wait_for_assignment = wait_for_assignment
        self.logger = logger or logging.getLogger(__name__)

    def get_server_by_name(self, name: str) -> ServerIdentity:
        """
        Find this node in the API

        Raises:
            IdentityNotFoundError: If the lookup fails or no server has that name
        """
        try:
            server = self.client.servers.get_by_name(name)
        except Exception as e:
            raise IdentityNotFoundError(f"unable to find myself in the api: {e}")
        if server is None:
            raise IdentityNotFoundError(
                f"unable to find myself in the api: no server named '{name}'"
            )
        return ServerIdentity(id=server.id, name=server.name)

    def list_floating_ips(self) -> List[RemoteFloatingIP]:
        """
        List all floating IPs of the project in API order

        Raises:
            RemoteUnavailableError: If the API request fails
        """
        try:
            floating_ips = self.client.floating_ips.get_all()
        except Exception as e:
            raise RemoteUnavailableError(f"unable to list floating IPs in the api: {e}")
        return [RemoteFloatingIP.from_hcloud(fip) for fip in floating_ips]

    def assign_floating_ip(self, floating_ip: RemoteFloatingIP, server: ServerIdentity):
        """
        Assign a floating IP to a server

        Unless wait_for_assignment is set, this returns as soon as the API
        accepted the request; the change may still be propagating.

        Returns:
            The hcloud action for the assignment

        Raises:
            HetznerAPIError: If the request or the awaited action fails
        """
        try:
            action = self.client.floating_ips.assign(
                FloatingIP(id=floating_ip.id), Server(id=server.id)
            )
        except Exception as e:
            raise HetznerAPIError(str(e))

        if self.wait_for_assignment:
            self.logger.debug(
                f"Waiting for action {action.id} assigning floating IP {floating_ip.ip}"
            )
            try:
                action.wait_until_finished()
            except Exception as e:
                raise HetznerAPIError(f"action {action.id} did not finish: {e}")
        return action
