"""Shared pytest fixtures"""

from io import StringIO
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from aws_secondary_ip.core import MemoryRunStateStore


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real account"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def mock_console():
    """Create a mock console that captures output"""
    output = StringIO()
    console = Console(file=output, force_terminal=False, width=120)
    console._output = output
    return console


@pytest.fixture
def mock_boto_session():
    """Mock boto3 session"""
    with patch("boto3.Session") as mock:
        session = MagicMock()
        mock.return_value = session
        yield session


@pytest.fixture
def store():
    return MemoryRunStateStore()


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


class FakeInterface:
    """An ENI whose address list changes only after ``lag`` polls.

    Plays both roles the engine needs: the EC2 mutator and the metadata
    observation of the interface's private IPs.
    """

    def __init__(self, ips, allocate="10.0.0.9", lag=0):
        self.ips = set(ips)
        self.allocate = allocate
        self.lag = lag
        self.calls: list[tuple] = []
        self.polls = 0
        self._pending = None
        self._countdown = 0

    def assign_private_ip(self, eni_id, ip=None):
        self.calls.append(("assign", eni_id, ip))
        new = set(self.ips) | {ip or self.allocate}
        self._schedule(new)

    def unassign_private_ip(self, eni_id, ip):
        self.calls.append(("unassign", eni_id, ip))
        self._schedule(set(self.ips) - {ip})

    def _schedule(self, new):
        if self.lag:
            self._pending, self._countdown = new, self.lag
        else:
            self.ips = new

    def observe(self) -> set:
        self.polls += 1
        if self._pending is not None:
            if self._countdown == 0:
                self.ips, self._pending = self._pending, None
            else:
                self._countdown -= 1
        return set(self.ips)


@pytest.fixture
def fake_interface():
    return FakeInterface({"10.0.0.5"})


class FakeInventory:
    def __init__(self, interfaces=None, default="eth0"):
        self._interfaces = interfaces if interfaces is not None else {
            "eth0": [
                {"family": "inet", "address": "10.0.0.5"},
                {"family": "lladdr", "address": "0A:1B:2C:3D:4E:5F"},
            ],
            "lo": [{"family": "inet", "address": "127.0.0.1"}],
        }
        self._default = default

    def interfaces(self):
        return self._interfaces

    def default_interface(self):
        return self._default


@pytest.fixture
def inventory():
    return FakeInventory()


@pytest.fixture
def make_interface():
    return FakeInterface
