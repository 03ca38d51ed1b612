"""Exception hierarchy for scanning and remediation faults."""

from typing import Optional


class RemediationError(Exception):
    """Base class for all errors raised by the remediator."""


class JavaSyntaxError(RemediationError):
    """Raised when Java source cannot be lexed or indexed."""

    def __init__(self, message: str, line: int, column: int, filename: Optional[str] = None) -> None:
        self.line = line
        self.column = column
        self.filename = filename
        where = f"{filename}:" if filename else ""
        super().__init__(f"{where}{line}:{column}: {message}")


class BackupError(RemediationError):
    """Raised when a snapshot cannot be taken or a strategy cannot be resolved."""


class ConfigurationError(RemediationError):
    """Raised when a configuration file exists but cannot be parsed."""
