"""Terminal telemetry: rich console output mirrored to the stdlib logger."""

import logging

from rich.console import Console


class ProjectTelemetry:
    """
    TelemetryPort implementation. Console is for the user, the logger for the record.

    Progress goes to stderr so stdout carries only the report.
    """

    def __init__(self, name: str, color: str = "cyan", welcome: str = "") -> None:
        self.name = name
        self.color = color
        self.welcome = welcome
        self.console = Console(stderr=True, highlight=False)
        self.logger = logging.getLogger(f"stratify_remediator.{name.lower()}")

    def handshake(self) -> None:
        self.console.print(f"[bold {self.color}]{self.name}[/bold {self.color}] {self.welcome}")
        self.logger.info("%s session started", self.name)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]>[/{self.color}] {message}")
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]error:[/bold red] {message}")
        self.logger.error(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]warning:[/yellow] {message}")
        self.logger.warning(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)
