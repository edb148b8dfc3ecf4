"""Tests for configuration module"""

import ipaddress

import pytest

from hcloud_keepalived_notify.config import Config
from hcloud_keepalived_notify.exceptions import ConfigError


@pytest.fixture
def environ():
    return {
        "NOTIFY_HCLOUD_TOKEN": "test_token_123",
        "NOTIFY_NODE_NAME": "lb-1",
        "NOTIFY_FLOATING_IPS": "1.2.3.4,2600::1",
    }


class TestConfig:
    """Test suite for Config class"""

    def test_load_from_environment(self, environ):
        """Test loading required values from the environment"""
        config = Config.from_env(environ)

        assert config.api_token == "test_token_123"
        assert config.node_name == "lb-1"
        assert [a.address for a in config.local_addresses] == [
            ipaddress.ip_address("1.2.3.4"),
            ipaddress.ip_address("2600::1"),
        ]

    def test_defaults(self, environ):
        """Test defaults of optional values"""
        config = Config.from_env(environ)

        assert config.health_check_path == "/var/run/keepalived.state"
        assert config.log_file == "/var/run/keepalived.notify.log"
        assert config.log_level == "INFO"
        assert config.wait_for_assignment is False

    def test_optional_values(self, environ):
        """Test overriding optional values"""
        environ.update({
            "NOTIFY_HEALTH_CHECK_PATH": "/tmp/state",
            "NOTIFY_LOG_PATH": "/tmp/notify.log",
            "NOTIFY_LOG_LEVEL": "debug",
            "NOTIFY_WAIT_FOR_ASSIGNMENT": "yes",
        })
        config = Config.from_env(environ)

        assert config.health_check_path == "/tmp/state"
        assert config.log_file == "/tmp/notify.log"
        assert config.log_level == "DEBUG"
        assert config.wait_for_assignment is True

    def test_empty_log_path_disables_file_logging(self, environ):
        """Test that an empty log path disables the file sink"""
        environ["NOTIFY_LOG_PATH"] = ""

        assert Config.from_env(environ).log_file is None

    def test_prefix_entries(self, environ):
        """Test that prefixes are accepted and whitespace is ignored"""
        environ["NOTIFY_FLOATING_IPS"] = " 1.2.3.4 , 2a01:4f8::1/64"
        config = Config.from_env(environ)

        v4, v6 = config.local_addresses
        assert not v4.is_prefix
        assert v6.is_prefix
        assert v6.address == ipaddress.ip_address("2a01:4f8::1")
        assert v6.prefixlen == 64

    def test_all_missing_required_values_reported(self):
        """Test that every missing required variable is reported at once"""
        with pytest.raises(ConfigError) as excinfo:
            Config.from_env({})

        errors = excinfo.value.errors
        assert len(errors) == 3
        message = str(excinfo.value)
        assert "NOTIFY_HCLOUD_TOKEN" in message
        assert "NOTIFY_NODE_NAME" in message
        assert "NOTIFY_FLOATING_IPS" in message

    def test_empty_value_is_missing(self, environ):
        """Test that an empty required variable counts as missing"""
        environ["NOTIFY_NODE_NAME"] = ""

        with pytest.raises(ConfigError, match="NOTIFY_NODE_NAME"):
            Config.from_env(environ)

    def test_invalid_addresses_reported_with_other_errors(self, environ):
        """Test that every invalid address is collected with other errors"""
        del environ["NOTIFY_HCLOUD_TOKEN"]
        environ["NOTIFY_FLOATING_IPS"] = "1.2.3.4,not-an-ip,1.2.3.999"

        with pytest.raises(ConfigError) as excinfo:
            Config.from_env(environ)

        errors = excinfo.value.errors
        assert len(errors) == 3
        assert any("NOTIFY_HCLOUD_TOKEN" in e for e in errors)
        assert any("'not-an-ip'" in e for e in errors)
        assert any("'1.2.3.999'" in e for e in errors)

    def test_invalid_log_level(self, environ):
        """Test that invalid log level raises error"""
        environ["NOTIFY_LOG_LEVEL"] = "INVALID"

        with pytest.raises(ConfigError, match="Invalid log_level"):
            Config.from_env(environ)

    def test_invalid_boolean(self, environ):
        """Test that an invalid wait flag raises error"""
        environ["NOTIFY_WAIT_FOR_ASSIGNMENT"] = "maybe"

        with pytest.raises(ConfigError, match="NOTIFY_WAIT_FOR_ASSIGNMENT"):
            Config.from_env(environ)

    def test_empty_health_check_path(self, environ):
        """Test that the health check path cannot be set to empty"""
        environ["NOTIFY_HEALTH_CHECK_PATH"] = ""

        with pytest.raises(ConfigError, match="NOTIFY_HEALTH_CHECK_PATH"):
            Config.from_env(environ)

    def test_to_dict(self, environ):
        """Test configuration export to dictionary"""
        config_dict = Config.from_env(environ).to_dict()

        assert config_dict['has_api_token'] is True
        assert config_dict['node_name'] == "lb-1"
        assert config_dict['floating_ips'] == ["1.2.3.4", "2600::1"]
        # Ensure API token is not exposed
        assert 'test_token_123' not in str(config_dict)


class TestConfigFile:
    """Test suite for the optional YAML configuration file"""

    def test_load_yaml_file(self, tmp_path):
        """Test loading a complete configuration file"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("""
hcloud_token: file_token
node_name: lb-2
floating_ips:
  - 1.2.3.4
  - 2600::1
health_check_path: /tmp/state
log_level: WARNING
wait_for_assignment: true
        """)

        config = Config.from_env({}, config_path=str(config_file))

        assert config.api_token == "file_token"
        assert config.node_name == "lb-2"
        assert [str(a) for a in config.local_addresses] == ["1.2.3.4", "2600::1"]
        assert config.health_check_path == "/tmp/state"
        assert config.log_level == "WARNING"
        assert config.wait_for_assignment is True

    def test_environment_overrides_file(self, tmp_path, environ):
        """Test that environment variables take precedence"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("node_name: from-file\nfloating_ips: 5.6.7.8")

        config = Config.from_env(environ, config_path=str(config_file))

        assert config.node_name == "lb-1"
        assert [str(a) for a in config.local_addresses] == ["1.2.3.4", "2600::1"]

    def test_config_path_from_environment(self, tmp_path, environ):
        """Test that NOTIFY_CONFIG_PATH names the file"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("health_check_path: /tmp/from-file")
        environ["NOTIFY_CONFIG_PATH"] = str(config_file)

        assert Config.from_env(environ).health_check_path == "/tmp/from-file"

    def test_file_not_found(self, environ):
        """Test that non-existent file raises error"""
        with pytest.raises(ConfigError, match="Config file not found"):
            Config.from_env(environ, config_path="/nonexistent/path/config.yaml")

    def test_invalid_yaml(self, tmp_path, environ):
        """Test that invalid YAML raises error"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("invalid: yaml: content: [")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            Config.from_env(environ, config_path=str(config_file))

    def test_empty_config(self, tmp_path, environ):
        """Test that empty config file raises error"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with pytest.raises(ConfigError, match="Config file is empty"):
            Config.from_env(environ, config_path=str(config_file))

    def test_non_mapping_config(self, tmp_path, environ):
        """Test that a list document raises error"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- 1.2.3.4\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            Config.from_env(environ, config_path=str(config_file))

    def test_file_error_reported_with_missing_values(self, tmp_path):
        """Test that a missing file does not hide missing required variables"""
        missing = tmp_path / "nope.yaml"

        with pytest.raises(ConfigError) as excinfo:
            Config.from_env({"NOTIFY_CONFIG_PATH": str(missing)})

        errors = excinfo.value.errors
        assert len(errors) == 4
        assert errors[0] == f"Config file not found: {missing}"
        message = str(excinfo.value)
        assert "NOTIFY_HCLOUD_TOKEN" in message
        assert "NOTIFY_NODE_NAME" in message
        assert "NOTIFY_FLOATING_IPS" in message

    def test_numeric_values_become_strings(self, tmp_path, environ):
        """Test that numeric YAML scalars are read as strings"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("health_check_path: 1\nnode_name: 42\n")
        del environ["NOTIFY_NODE_NAME"]

        config = Config.from_env(environ, config_path=str(config_file))

        assert config.health_check_path == "1"
        assert config.node_name == "42"

    def test_non_scalar_values_rejected(self, tmp_path, environ):
        """Test that lists and mappings are rejected for string settings"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "health_check_path: [a, b]\nhcloud_token: {key: value}\n"
        )
        del environ["NOTIFY_HCLOUD_TOKEN"]

        with pytest.raises(ConfigError) as excinfo:
            Config.from_env(environ, config_path=str(config_file))

        errors = excinfo.value.errors
        assert len(errors) == 2
        assert any(e.startswith("health_check_path must be a string") for e in errors)
        assert any(e.startswith("hcloud_token must be a string") for e in errors)
