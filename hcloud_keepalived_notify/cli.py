"""Command-line interface for the keepalived notify hook"""

import sys
import argparse
from typing import List, Mapping, Optional

from . import __version__
from .config import Config
from .exceptions import ConfigError, NotifyError
from .logger import setup_logger
from .models import OutcomeStatus, ReconciliationOutcome
from .notify import KeepalivedNotifier

LOGGER_NAME = "hcloud_keepalived_notify"


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser"""
    parser = argparse.ArgumentParser(
        prog='hcloud-keepalived-notify',
        description='keepalived notify hook moving Hetzner Cloud floating IPs to the MASTER',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration is read from NOTIFY_* environment variables:
  NOTIFY_HCLOUD_TOKEN, NOTIFY_NODE_NAME, NOTIFY_FLOATING_IPS (required)
  NOTIFY_LOG_PATH, NOTIFY_HEALTH_CHECK_PATH, NOTIFY_LOG_LEVEL,
  NOTIFY_WAIT_FOR_ASSIGNMENT, NOTIFY_CONFIG_PATH (optional)

Examples:
  # keepalived.conf
  notify /usr/local/bin/%(prog)s

  # Called by keepalived on transition
  %(prog)s INSTANCE VI_1 MASTER 100

  # Show which floating IPs would be moved to this node
  %(prog)s --dry-run
        """
    )

    parser.add_argument(
        'args',
        nargs='*',
        metavar='ARG',
        help='Arguments passed by keepalived: TYPE NAME STATE [PRIORITY]'
    )

    parser.add_argument(
        '-c', '--config',
        default=None,
        help='Optional YAML configuration file (environment variables take precedence)'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show planned floating IP assignments without making changes'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def dry_run_validate(notifier: KeepalivedNotifier) -> int:
    """
    Show configuration and the floating IPs a MASTER transition would move

    Args:
        notifier: KeepalivedNotifier instance

    Returns:
        Exit code (0 for success)
    """
    config = notifier.config
    print("=" * 60)
    print("DRY RUN - Configuration Validation")
    print("=" * 60)
    print(f"Node name: {config.node_name}")
    print(f"Health check path: {config.health_check_path}")
    print(f"Log level: {config.log_level}")
    print(f"Configured addresses: {', '.join(str(a) for a in config.local_addresses)}")

    outcomes = notifier.plan()
    print(f"\nFound {len(outcomes)} floating IP(s) matching configured addresses:")

    needs_assignment = _print_outcomes(outcomes)

    print("\n" + "=" * 60)
    print("Summary:")
    print("=" * 60)
    if needs_assignment:
        print(f"⚠ {len(needs_assignment)} floating IP(s) need to be assigned")
        print("They will be moved when keepalived reports MASTER")
    else:
        print("✓ All floating IPs already correctly assigned")

    return 0


def _print_outcomes(outcomes: List[ReconciliationOutcome]) -> List[str]:
    needs_assignment = []
    if not outcomes:
        print("  (none)")
    for outcome in outcomes:
        fip = outcome.floating_ip
        if outcome.status == OutcomeStatus.ALREADY_CORRECT:
            status = "✓ assigned to this server"
        elif fip.assignee_id is not None:
            status = f"assigned to server {fip.assignee_id} → needs reassignment"
            needs_assignment.append(fip.ip)
        else:
            status = "unassigned → needs assignment"
            needs_assignment.append(fip.ip)
        print(f"  - {fip.ip} (name: {fip.name}, ID: {fip.id}) - {status}")
    return needs_assignment


def main(argv: Optional[list] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """
    Main entry point for CLI

    Args:
        argv: Optional command line arguments (for testing)
        environ: Optional environment mapping (for testing)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.dry_run and len(args.args) < 3:
        print(
            f"Error: Not enough args given, expected TYPE NAME STATE, got {args.args}",
            file=sys.stderr,
        )
        return 1

    try:
        config = Config.from_env(environ, config_path=args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    logger = setup_logger(LOGGER_NAME, log_level=config.log_level, log_file=config.log_file)
    logger.info(f"Called with args: {args.args}")
    logger.info(
        "Configured floating IPs: "
        + ", ".join(str(address) for address in config.local_addresses)
    )

    try:
        notifier = KeepalivedNotifier(config, logger=logger, dry_run=args.dry_run)
        if args.dry_run:
            return dry_run_validate(notifier)

        notifier.notify(args.args[2])
        return 0

    except NotifyError as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
