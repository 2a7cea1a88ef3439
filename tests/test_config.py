"""Tests for action configuration"""

import pytest
from pydantic import ValidationError

from aws_secondary_ip.config import (
    DEFAULT_TIMEOUT,
    SecondaryIPConfig,
    build_config,
    load_config,
)
from aws_secondary_ip.core import ConfigurationError


class TestSecondaryIPConfig:
    def test_defaults(self):
        cfg = SecondaryIPConfig()
        assert cfg.name == "default"
        assert cfg.timeout == DEFAULT_TIMEOUT == 180
        assert cfg.ip is None
        assert cfg.wait_forever is False

    def test_blank_strings_are_unset(self):
        cfg = SecondaryIPConfig(ip="", region=" ", aws_access_key="", interface="")
        assert cfg.ip is None
        assert cfg.region is None
        assert cfg.interface is None

    def test_zero_timeout_waits_forever(self):
        assert SecondaryIPConfig(timeout=0).wait_forever is True
        assert SecondaryIPConfig(timeout=None).wait_forever is True

    def test_negative_timeout(self):
        with pytest.raises(ValidationError):
            SecondaryIPConfig(timeout=-1)

    @pytest.mark.parametrize("ip", ["10.0.0.256", "fe80::1", "10.0.0", "host"])
    def test_invalid_ip(self, ip):
        with pytest.raises(ValidationError, match="Invalid IPv4"):
            SecondaryIPConfig(ip=ip)

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            SecondaryIPConfig(iface="eth0")

    def test_frozen(self):
        cfg = SecondaryIPConfig()
        with pytest.raises(ValidationError):
            cfg.ip = "10.0.0.9"

    def test_dotted_name_rejected(self):
        with pytest.raises(ValidationError):
            SecondaryIPConfig(name="web.1")


class TestCredentialValidation:
    def test_key_without_secret(self):
        with pytest.raises(ConfigurationError, match="must be given together"):
            build_config(aws_access_key="AKIAEXAMPLE")

    def test_secret_without_key(self):
        with pytest.raises(ConfigurationError):
            build_config(aws_secret_access_key="secret")

    def test_role_without_session_name(self):
        with pytest.raises(ConfigurationError, match="aws_role_session_name"):
            build_config(aws_assume_role_arn="arn:aws:iam::123456789012:role/x")

    def test_token_without_keys(self):
        with pytest.raises(ConfigurationError, match="session_token"):
            build_config(aws_session_token="tok")

    def test_complete_sets(self):
        cfg = build_config(
            aws_access_key="AKIAEXAMPLE",
            aws_secret_access_key="secret",
            aws_assume_role_arn="arn:aws:iam::123456789012:role/x",
            aws_role_session_name="run",
        )
        assert cfg.aws_role_session_name == "run"


class TestLoadConfig:
    def test_no_file(self):
        assert load_config(ip="10.0.0.9").ip == "10.0.0.9"

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "secondary_ip.yaml"
        path.write_text("name: web\ninterface: eth1\ntimeout: 60\nregion: eu-west-1\n")
        cfg = load_config(path)
        assert cfg.name == "web"
        assert cfg.interface == "eth1"
        assert cfg.timeout == 60

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "secondary_ip.yaml"
        path.write_text("name: web\nip: 10.0.0.9\n")
        cfg = load_config(path, ip="10.0.0.20", region=None)
        assert cfg.ip == "10.0.0.20"
        assert cfg.name == "web"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == SecondaryIPConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read config"):
            load_config(tmp_path / "absent.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("ip: not-an-ip\n")
        with pytest.raises(ConfigurationError, match="Invalid IPv4"):
            load_config(path)
