"""Run-state store for action outcomes.

Outcomes are keyed by dotted paths such as ``aws.secondary_ip.<name>.ip``,
mirroring the nested attribute layout a convergence run persists between
invocations.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Protocol

from .exceptions import SecondaryIPError
from .logging import get_logger

STATE_DIR = Path.home() / ".cache" / "aws-secondary-ip"
STATE_FILE = STATE_DIR / "state.json"

logger = get_logger("store")


def secondary_ip_key(name: str) -> str:
    """Run-state key holding the recorded IP for the named action."""
    return f"aws.secondary_ip.{name}.ip"


class RunStateStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


def _lookup(data: dict, key: str) -> Optional[Any]:
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def _assign(data: dict, key: str, value: Any) -> None:
    *parents, leaf = key.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


class MemoryRunStateStore:
    """In-process store; nothing survives the interpreter."""

    def __init__(self, data: Optional[dict] = None):
        self.data: dict = data if data is not None else {}

    def get(self, key: str) -> Optional[Any]:
        return _lookup(self.data, key)

    def set(self, key: str, value: Any) -> None:
        _assign(self.data, key, value)


class FileRunStateStore:
    """JSON-file backed store shared by successive runs."""

    def __init__(self, path: Optional[Path] = None):
        self.state_file = Path(path) if path else STATE_FILE

    def _ensure_dir(self):
        self.state_file.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> dict:
        if not self.state_file.exists():
            return {}
        try:
            raw = json.loads(self.state_file.read_text() or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise SecondaryIPError(f"Cannot read run-state {self.state_file}: {e}") from e
        if not isinstance(raw, dict):
            raise SecondaryIPError(f"Run-state file {self.state_file} is not a JSON object")
        return raw

    def get(self, key: str) -> Optional[Any]:
        return _lookup(self.load(), key)

    def set(self, key: str, value: Any) -> None:
        data = self.load()
        _assign(data, key, value)
        self._ensure_dir()
        fd, tmp = tempfile.mkstemp(
            dir=self.state_file.parent, prefix=".state-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.state_file)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        logger.debug("Recorded %s=%s in %s", key, value, self.state_file)

    def clear(self) -> None:
        """Remove the state file"""
        if self.state_file.exists():
            self.state_file.unlink()
