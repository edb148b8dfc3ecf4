"""Configuration management for the keepalived notify hook"""

import os
import yaml
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple
from .exceptions import ConfigError
from .models import LocalAddress


class Config:
    """Configuration for the keepalived notify hook

    Values come from an optional YAML file and the ``NOTIFY_*`` environment
    variables, the environment taking precedence. The object is validated
    once on construction and only exposes read-only properties.
    """

    DEFAULT_LOG_LEVEL = "INFO"
    DEFAULT_LOG_PATH = "/var/run/keepalived.notify.log"
    DEFAULT_HEALTH_CHECK_PATH = "/var/run/keepalived.state"
    CONFIG_PATH_ENV = "NOTIFY_CONFIG_PATH"
    REQUIRED_FIELDS = ["hcloud_token", "node_name", "floating_ips"]
    STRING_FIELDS = ["hcloud_token", "node_name", "log_file", "health_check_path", "log_level"]
    VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    ENV_VARS = {
        "hcloud_token": "NOTIFY_HCLOUD_TOKEN",
        "node_name": "NOTIFY_NODE_NAME",
        "floating_ips": "NOTIFY_FLOATING_IPS",
        "log_file": "NOTIFY_LOG_PATH",
        "health_check_path": "NOTIFY_HEALTH_CHECK_PATH",
        "log_level": "NOTIFY_LOG_LEVEL",
        "wait_for_assignment": "NOTIFY_WAIT_FOR_ASSIGNMENT",
    }

    TRUE_VALUES = ("1", "true", "yes", "on")
    FALSE_VALUES = ("0", "false", "no", "off", "")

    def __init__(self, values: Mapping, errors: Optional[List[str]] = None):
        """
        Initialize configuration from already merged raw values

        Args:
            values: Mapping of configuration keys (see ENV_VARS) to raw values
            errors: Errors already found while collecting the values

        Raises:
            ConfigError: Listing every missing or invalid value
        """
        self._config = dict(values)
        errors = list(errors or [])
        invalid = self._normalize_strings(errors)
        self._validate_required(errors, skip=invalid)
        self._local_addresses = self._parse_floating_ips(errors)
        self._wait_for_assignment = self._parse_bool("wait_for_assignment", errors)
        self._validate_optional(errors)
        if errors:
            raise ConfigError(errors)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        config_path: Optional[str] = None,
    ) -> "Config":
        """
        Build configuration from the environment and an optional YAML file

        Args:
            environ: Environment mapping (defaults to os.environ)
            config_path: Optional YAML file, overrides NOTIFY_CONFIG_PATH

        Raises:
            ConfigError: Listing file problems together with invalid values
        """
        environ = os.environ if environ is None else environ
        config_path = config_path or environ.get(cls.CONFIG_PATH_ENV)

        values: Dict = {}
        errors: List[str] = []
        if config_path:
            try:
                values.update(cls._load_file(config_path))
            except ConfigError as e:
                errors.extend(e.errors)

        for field, variable in cls.ENV_VARS.items():
            if variable in environ:
                values[field] = environ[variable]

        return cls(values, errors)

    @staticmethod
    def _load_file(config_path: str) -> Dict:
        """Load configuration from YAML file"""
        config_file = Path(config_path)

        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        try:
            with open(config_file, 'r') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to read config file: {e}")

        if config is None:
            raise ConfigError("Config file is empty")
        if not isinstance(config, dict):
            raise ConfigError("Config file must contain a mapping")

        return config

    def _normalize_strings(self, errors: List[str]) -> set:
        """Convert numeric YAML scalars to strings, reject other types"""
        invalid = set()
        for field in self.STRING_FIELDS:
            value = self._config.get(field)
            if value is None or isinstance(value, str):
                continue
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                self._config[field] = str(value)
            else:
                errors.append(f"{field} must be a string, got {value!r}")
                del self._config[field]
                invalid.add(field)
        return invalid

    def _validate_required(self, errors: List[str], skip=()):
        for field in self.REQUIRED_FIELDS:
            if field in skip:
                continue
            if not self._config.get(field):
                errors.append(
                    f"required environment variable missing: {self.ENV_VARS[field]}"
                )

    def _parse_floating_ips(self, errors: List[str]) -> Tuple[LocalAddress, ...]:
        raw = self._config.get("floating_ips")
        if not raw:
            return ()

        if isinstance(raw, str):
            entries = raw.split(",")
        elif isinstance(raw, (list, tuple)):
            entries = [str(entry) for entry in raw]
        else:
            errors.append(f"invalid floating IP list: {raw!r}")
            return ()

        addresses = []
        for entry in entries:
            try:
                addresses.append(LocalAddress.parse(entry))
            except ValueError:
                errors.append(f"invalid IP address: {entry.strip()!r}")
        return tuple(addresses)

    def _parse_bool(self, field: str, errors: List[str]) -> bool:
        value = self._config.get(field, False)
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in self.TRUE_VALUES:
            return True
        if text not in self.FALSE_VALUES:
            errors.append(
                f"invalid boolean for {self.ENV_VARS[field]}: {value!r}"
            )
        return False

    def _validate_optional(self, errors: List[str]):
        log_level = str(self._config.get('log_level') or self.DEFAULT_LOG_LEVEL)
        if log_level.upper() not in self.VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log_level '{log_level}'. "
                f"Must be one of: {', '.join(self.VALID_LOG_LEVELS)}"
            )

        if self._config.get("health_check_path", None) == "":
            errors.append(
                f"{self.ENV_VARS['health_check_path']} must not be empty"
            )

    @property
    def api_token(self) -> str:
        """Get Hetzner Cloud API token"""
        return self._config['hcloud_token']

    @property
    def node_name(self) -> str:
        """Get the name of this server in Hetzner Cloud"""
        return self._config['node_name']

    @property
    def local_addresses(self) -> Tuple[LocalAddress, ...]:
        """Get addresses owned by this node"""
        return self._local_addresses

    @property
    def health_check_path(self) -> str:
        """Get health check file path"""
        return self._config.get('health_check_path') or self.DEFAULT_HEALTH_CHECK_PATH

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path, None when file logging is disabled"""
        return self._config.get('log_file', self.DEFAULT_LOG_PATH) or None

    @property
    def log_level(self) -> str:
        """Get log level"""
        return str(self._config.get('log_level') or self.DEFAULT_LOG_LEVEL).upper()

    @property
    def wait_for_assignment(self) -> bool:
        """Whether to wait for assignment actions to finish"""
        return self._wait_for_assignment

    def to_dict(self) -> Dict:
        """Export configuration as dictionary (excluding sensitive data)"""
        return {
            'node_name': self.node_name,
            'floating_ips': [str(address) for address in self.local_addresses],
            'health_check_path': self.health_check_path,
            'log_file': self.log_file,
            'log_level': self.log_level,
            'wait_for_assignment': self.wait_for_assignment,
            'has_api_token': bool(self.api_token),
        }
