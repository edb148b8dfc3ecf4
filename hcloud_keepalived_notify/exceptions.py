"""Custom exceptions for the keepalived notify hook"""

from typing import List, Optional


class NotifyError(Exception):
    """Base exception for keepalived notify hook errors"""
    pass


class ConfigError(NotifyError):
    """Exception raised for configuration errors

    Carries every problem found while loading the configuration, so an
    operator sees all of them in one run.
    """

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__(self._format())

    def _format(self) -> str:
        if len(self.errors) == 1:
            return self.errors[0]
        lines = "\n".join(f"\t* {error}" for error in self.errors)
        return f"{len(self.errors)} configuration errors occurred:\n{lines}"


class HetznerAPIError(NotifyError):
    """Exception raised for Hetzner Cloud API errors"""
    pass


class IdentityNotFoundError(HetznerAPIError):
    """Exception raised when this node cannot be found in the API"""
    pass


class RemoteUnavailableError(HetznerAPIError):
    """Exception raised when floating IPs cannot be listed"""
    pass


class AssignmentError(NotifyError):
    """Exception raised when one or more floating IP assignments failed

    Attributes:
        failures: Human readable description of every failed assignment
        outcomes: All reconciliation outcomes, including successful ones
    """

    def __init__(self, failures: List[str], outcomes: Optional[list] = None):
        self.failures = list(failures)
        self.outcomes = list(outcomes or [])
        lines = "\n".join(f"\t* {failure}" for failure in self.failures)
        super().__init__(
            f"{len(self.failures)} floating IP assignment(s) failed:\n{lines}"
        )


class StateWriteError(NotifyError):
    """Exception raised when the health check file cannot be written"""
    pass
