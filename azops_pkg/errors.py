"""Common error types for azops."""

from __future__ import annotations


class CliError(Exception):
    """User-facing command error."""


class ArgumentNullError(CliError, ValueError):
    """A required argument was not supplied."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Value cannot be null. Parameter name: {name}")


class CommandError(Exception):
    """Subprocess command error."""

    def __init__(self, cmd: list[str], returncode: int, stdout: str, stderr: str):
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        message = stderr.strip() or stdout.strip() or f"Command failed with exit code {returncode}"
        super().__init__(message)

    @property
    def details(self) -> str:
        return self.stderr.strip() or self.stdout.strip() or str(self)
