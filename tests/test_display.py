"""Tests for display modules"""

import json

import yaml

from aws_secondary_ip.core import BaseDisplay


class TestRender:
    def test_table_is_left_to_caller(self, mock_console):
        display = BaseDisplay(mock_console)
        assert display.render({"ip": "10.0.0.9"}, "table") is False
        assert mock_console._output.getvalue() == ""

    def test_json(self, mock_console):
        assert BaseDisplay(mock_console).render({"ip": "10.0.0.9"}, "json")
        assert json.loads(mock_console._output.getvalue()) == {"ip": "10.0.0.9"}

    def test_yaml(self, mock_console):
        assert BaseDisplay(mock_console).render({"ip": "10.0.0.9", "changed": True}, "yaml")
        data = yaml.safe_load(mock_console._output.getvalue())
        assert data == {"ip": "10.0.0.9", "changed": True}

    def test_unknown_format_falls_back(self, mock_console):
        assert BaseDisplay(mock_console).render({}, "xml") is False
        assert "Unknown format" in mock_console._output.getvalue()


class TestOutcome:
    def test_panel(self, mock_console):
        BaseDisplay(mock_console).print_outcome(
            "assign secondary ip", {"ENI": "eni-0abc1234", "IP": None}, changed=True
        )
        output = mock_console._output.getvalue()
        assert "assign secondary ip" in output
        assert "eni-0abc1234" in output
        assert "changed" in output
