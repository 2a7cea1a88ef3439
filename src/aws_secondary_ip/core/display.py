"""Base display utilities"""

import json
from typing import Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

OUTPUT_FORMATS = ("table", "json", "yaml")


class BaseDisplay:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, data: dict, fmt: str = "table") -> bool:
        """Print ``data`` as json/yaml. Returns False when the caller should draw a table."""
        if fmt == "table":
            return False
        if fmt == "json":
            self.console.print_json(json.dumps(data, default=str))
            return True
        if fmt == "yaml":
            self.console.print(yaml.safe_dump(data, sort_keys=False))
            return True
        self.console.print(f"[yellow]Unknown format: {fmt}. Defaulting to table.[/]")
        return False

    def status_text(self, changed: bool) -> Text:
        return Text("changed", style="yellow") if changed else Text("ok", style="green")

    def print_outcome(self, title: str, fields: dict, changed: bool):
        lines = "\n".join(
            f"[bold]{k}:[/] {v if v is not None else '-'}" for k, v in fields.items()
        )
        self.console.print(
            Panel(lines, title=title, subtitle=self.status_text(changed))
        )
