"""keepalived notify hook: state file handling and failover"""

import logging
from typing import List, Optional

from .cloud import HetznerCloud
from .config import Config
from .logger import setup_logger
from .models import ReconciliationOutcome
from .reconciler import Reconciler
from .state import MASTER, record_state


class KeepalivedNotifier:
    """Handles one keepalived state transition"""

    def __init__(
        self,
        config: Config,
        cloud: Optional[HetznerCloud] = None,
        logger: Optional[logging.Logger] = None,
        dry_run: bool = False,
    ):
        """
        Initialize notifier

        Args:
            config: Configuration object
            cloud: Optional API wrapper (for testing)
            logger: Optional logger instance (for testing)
            dry_run: If True, only simulate actions without making changes
        """
        self.config = config
        self.logger = logger or setup_logger(
            __name__, log_level=config.log_level, log_file=config.log_file
        )
        self.cloud = cloud or HetznerCloud(
            config.api_token,
            wait_for_assignment=config.wait_for_assignment,
            logger=self.logger,
        )
        self.dry_run = dry_run
        if self.dry_run:
            self.logger.info("DRY RUN MODE - No changes will be made")

    def reconciler(self, dry_run: bool = False) -> Reconciler:
        return Reconciler(
            self.cloud,
            self.config.node_name,
            self.config.local_addresses,
            logger=self.logger,
            dry_run=self.dry_run or dry_run,
        )

    def plan(self) -> List[ReconciliationOutcome]:
        """Compute what a MASTER transition would do, without changing anything"""
        return self.reconciler(dry_run=True).reconcile()

    def notify(self, state: str) -> List[ReconciliationOutcome]:
        """
        Record the new state and, on MASTER, take over the floating IPs

        The health check file is written before reconciliation and again
        afterwards, also when reconciliation fails.

        Args:
            state: State token passed by keepalived

        Returns:
            Reconciliation outcomes (empty unless state is MASTER)

        Raises:
            StateWriteError: If the health check file cannot be written
            NotifyError: Reconciliation errors, re-raised after the second state write
        """
        path = self.config.health_check_path
        record_state(path, state, logger=self.logger)

        outcomes: List[ReconciliationOutcome] = []
        if state == MASTER:
            self.logger.info("=" * 60)
            self.logger.info("Starting VRRP failover process")
            self.logger.info("=" * 60)
            try:
                outcomes = self.reconciler().reconcile()
            except Exception:
                self.logger.error("Failover completed with errors")
                record_state(path, state, logger=self.logger)
                raise
            self.logger.info("Failover completed successfully")

        record_state(path, state, logger=self.logger)
        return outcomes
