"""Error reporting for cargo commands."""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """For programmatically processing failures."""

    INVALID_COMMAND = enum.auto()
    """Spawning the cargo subcommand failed."""
    COMMAND_FAILED = enum.auto()
    """The cargo subcommand returned an error."""
    INVALID_OUTPUT = enum.auto()
    """Parsing the cargo subcommand's output failed."""

    def __str__(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorKind.INVALID_OUTPUT: "Spawning the cargo subommand failed.",
    ErrorKind.COMMAND_FAILED: "The cargo subcommand returned an error.",
    ErrorKind.INVALID_COMMAND: "Parsing the cargo subcommand's output failed.",
}


class CargoError(Exception):
    """Cargo command failure information."""

    def __init__(
        self,
        kind: ErrorKind,
        context: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(kind, context, cause)
        self.kind = kind
        self.context = context
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        lines = [f"Cargo command failed: {self.kind}"]
        if self.context is not None:
            lines.append(self.context)
        if self.cause is not None:
            lines.append(f"Cause: {self.cause}")
        return "".join(f"{line}\n" for line in lines)