"""Floating IP reconciliation for a node becoming MASTER"""

import logging
from typing import List, Optional, Sequence

from .exceptions import AssignmentError
from .matcher import matches
from .models import (
    LocalAddress,
    OutcomeStatus,
    ReconciliationOutcome,
    RemoteFloatingIP,
    ServerIdentity,
)


class Reconciler:
    """Moves the floating IPs owned by this node onto it"""

    def __init__(
        self,
        cloud,
        node_name: str,
        local_addresses: Sequence[LocalAddress],
        logger: Optional[logging.Logger] = None,
        dry_run: bool = False,
    ):
        """
        Initialize reconciler

        Args:
            cloud: Object providing get_server_by_name, list_floating_ips
                and assign_floating_ip (see HetznerCloud)
            node_name: Name of this server in the API
            local_addresses: Addresses owned by this node
            logger: Optional logger instance
            dry_run: If True, only report which floating IPs would move
        """
        self.cloud = cloud
        self.node_name = node_name
        self.local_addresses = tuple(local_addresses)
        self.logger = logger or logging.getLogger(__name__)
        self.dry_run = dry_run

    def reconcile(self) -> List[ReconciliationOutcome]:
        """
        Run one reconciliation pass

        Returns:
            One outcome per matching floating IP, in API order

        Raises:
            IdentityNotFoundError: If this node is not found (nothing is touched)
            RemoteUnavailableError: If floating IPs cannot be listed
            AssignmentError: If any assignment failed; all others were attempted
        """
        server = self.cloud.get_server_by_name(self.node_name)
        self.logger.info(f"Found myself in the api id={server.id} name={server.name}")

        floating_ips = self.cloud.list_floating_ips()
        self.logger.info(f"Found {len(floating_ips)} floating IP(s) in the api")

        outcomes: List[ReconciliationOutcome] = []
        failures: List[str] = []
        for fip in floating_ips:
            if not matches(fip, self.local_addresses):
                self.logger.debug(
                    f"Floating IP name={fip.name} id={fip.id} ({fip.ip}) is not ours"
                )
                continue

            outcome = self._reconcile_one(fip, server)
            if outcome.failed:
                failures.append(
                    f"unable to assign floating IP name={fip.name} id={fip.id} "
                    f"to myself id={server.id}: {outcome.reason}"
                )
            outcomes.append(outcome)

        if not outcomes:
            self.logger.warning("No floating IPs matched the configured addresses")

        if failures:
            raise AssignmentError(failures, outcomes)
        return outcomes

    def _reconcile_one(
        self, fip: RemoteFloatingIP, server: ServerIdentity
    ) -> ReconciliationOutcome:
        if fip.assignee_id is not None and fip.assignee_id == server.id:
            self.logger.info(
                f"Floating IP name={fip.name} id={fip.id} already points to me"
            )
            return ReconciliationOutcome(fip, OutcomeStatus.ALREADY_CORRECT)

        if self.dry_run:
            self.logger.info(
                f"[DRY RUN] Would assign floating IP {fip.ip} (name={fip.name} "
                f"id={fip.id}) to server {server.id}"
            )
            return ReconciliationOutcome(fip, OutcomeStatus.WOULD_REASSIGN)

        self.logger.info(
            f"Assigning floating IP {fip.ip} (name={fip.name} id={fip.id}) "
            f"to server {server.id}"
        )
        try:
            self.cloud.assign_floating_ip(fip, server)
        except Exception as e:
            self.logger.error(f"Failed to assign floating IP {fip.ip}: {e}")
            return ReconciliationOutcome(fip, OutcomeStatus.FAILED, str(e))

        self.logger.info(
            f"Floating IP name={fip.name} id={fip.id} assigned to id={server.id}"
        )
        return ReconciliationOutcome(fip, OutcomeStatus.REASSIGNED)
