"""Tests for the typer CLI"""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from aws_secondary_ip.cli import app
from aws_secondary_ip.core import FileRunStateStore, ReconciliationTimeout, secondary_ip_key
from aws_secondary_ip.models import NetworkInterfaceModel
from aws_secondary_ip.secondary_ip import ReconcileResult

runner = CliRunner()


@pytest.fixture
def resource():
    with patch("aws_secondary_ip.cli.SecondaryIPResource") as cls:
        yield cls


def assigned(changed=True):
    return ReconcileResult(
        operation="assign",
        eni_id="eni-0abc1234",
        ip="10.0.0.9",
        changed=changed,
        before={"10.0.0.5"},
        after={"10.0.0.5", "10.0.0.9"},
    )


class TestAssign:
    def test_json_output(self, resource, tmp_path):
        resource.return_value.assign.return_value = assigned()
        result = runner.invoke(
            app,
            ["--format", "json", "--state-file", str(tmp_path / "s.json"),
             "assign", "--ip", "10.0.0.9", "--name", "web"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ip"] == "10.0.0.9"
        assert data["changed"] is True

        cfg = resource.call_args.args[0]
        assert cfg.ip == "10.0.0.9"
        assert cfg.name == "web"

    def test_table_output(self, resource):
        resource.return_value.assign.return_value = assigned(changed=False)
        result = runner.invoke(app, ["assign"])
        assert result.exit_code == 0, result.output
        assert "eni-0abc1234" in result.output
        assert "ok" in result.output

    def test_config_file_and_flags(self, resource, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("name: db\ntimeout: 30\ninterface: eth1\n")
        resource.return_value.assign.return_value = assigned()
        result = runner.invoke(app, ["assign", "--config", str(path), "--timeout", "60"])
        assert result.exit_code == 0, result.output

        cfg = resource.call_args.args[0]
        assert (cfg.name, cfg.interface, cfg.timeout) == ("db", "eth1", 60)

    def test_incomplete_credentials(self, resource):
        result = runner.invoke(app, ["assign", "--access-key", "AKIAEXAMPLE"])
        assert result.exit_code == 1
        assert "ConfigurationError" in result.output
        resource.assert_not_called()

    def test_timeout_exits_nonzero(self, resource):
        resource.return_value.assign.side_effect = ReconciliationTimeout("assignment", 180, 181)
        result = runner.invoke(app, ["assign"])
        assert result.exit_code == 1
        assert "Timed out waiting for assignment after 180 seconds" in result.output


class TestUnassign:
    def test_unassign(self, resource):
        resource.return_value.unassign.return_value = ReconcileResult(
            operation="unassign",
            eni_id="eni-0abc1234",
            ip=None,
            requested_ip="10.0.0.9",
            changed=True,
            after={"10.0.0.5"},
        )
        result = runner.invoke(app, ["--format", "yaml", "unassign", "--name", "web"])
        assert result.exit_code == 0, result.output
        assert "requested_ip: 10.0.0.9" in result.output


class TestShow:
    def test_show(self, resource):
        resource.return_value.describe.return_value = NetworkInterfaceModel(
            id="eni-0abc1234",
            primary_ip="10.0.0.5",
            private_ips=["10.0.0.5", "10.0.0.9"],
        )
        resource.return_value.store.get.return_value = "10.0.0.9"
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 0, result.output
        assert "10.0.0.9" in result.output


class TestSnapshot:
    def test_prints_snapshot_id(self, resource):
        resource.return_value.find_snapshot_id.return_value = "snap-0123"
        result = runner.invoke(app, ["snapshot", "vol-1", "--most-recent"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "snap-0123"
        resource.return_value.find_snapshot_id.assert_called_once_with("vol-1", True)


class TestGlobalOptions:
    def test_invalid_format(self):
        result = runner.invoke(app, ["--format", "xml", "show-state"])
        assert result.exit_code == 2

    def test_show_state(self, tmp_path):
        state = tmp_path / "state.json"
        FileRunStateStore(state).set(secondary_ip_key("web"), "10.0.0.9")
        result = runner.invoke(app, ["--state-file", str(state), "show-state", "web"])
        assert result.exit_code == 0, result.output
        assert "10.0.0.9" in result.output


class TestShowName:
    def test_highlights_recorded_ip_for_name(self, resource):
        resource.return_value.describe.return_value = NetworkInterfaceModel(
            id="eni-0abc1234", primary_ip="10.0.0.5", private_ips=["10.0.0.5"]
        )
        resource.return_value.store.get.return_value = None
        result = runner.invoke(app, ["show", "--name", "web"])
        assert result.exit_code == 0, result.output

        assert resource.call_args.args[0].name == "web"
        resource.return_value.store.get.assert_called_once_with(secondary_ip_key("web"))


class TestShowStateErrors:
    def test_corrupt_state_file(self, tmp_path):
        state = tmp_path / "state.json"
        state.write_text("[1, 2, 3]")
        result = runner.invoke(app, ["--state-file", str(state), "show-state"])
        assert result.exit_code == 1
        assert "SecondaryIPError" in result.output
        assert "Traceback" not in result.output
