"""
Hetzner Cloud keepalived notify hook

Moves Hetzner Cloud floating IPs to the node keepalived promotes to
MASTER and records the VRRP state in a health check file.
"""

__version__ = "1.0.0"
__author__ = "Your Name"

from .config import Config
from .exceptions import (
    AssignmentError,
    ConfigError,
    HetznerAPIError,
    IdentityNotFoundError,
    NotifyError,
    RemoteUnavailableError,
    StateWriteError,
)
from .matcher import matches
from .notify import KeepalivedNotifier
from .reconciler import Reconciler
from .state import record_state

__all__ = [
    "KeepalivedNotifier",
    "Reconciler",
    "Config",
    "matches",
    "record_state",
    "NotifyError",
    "ConfigError",
    "HetznerAPIError",
    "IdentityNotFoundError",
    "RemoteUnavailableError",
    "AssignmentError",
    "StateWriteError",
]
