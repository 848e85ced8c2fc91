"""Emulation of ``cargo run``: locating a freshly built binary."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .error import CargoError, ErrorKind
from .formats import Artifact, log_message
from .formats import Message as FormatMessage
from .msg import Message


@dataclass(frozen=True)
class CargoRun:
    """A built binary, ready to be launched without cargo's overhead."""

    path: Path

    @classmethod
    def from_messages(
        cls, msgs: Iterable[Message], is_bin: bool, is_example: bool
    ) -> CargoRun:
        """Find the single binary announced by the build messages."""
        try:
            if is_bin and is_example:
                raise CargoError(
                    ErrorKind.COMMAND_FAILED,
                    context="Ambiguous which binary is intended, multiple selected",
                )
            kind = "example" if is_example else "bin"
            bins = list(_binary_paths(msgs, kind))
        finally:
            close = getattr(msgs, "close", None)
            if close is not None:
                close()
        if not bins:
            raise CargoError(ErrorKind.COMMAND_FAILED, context="No binaries in crate")
        if len(bins) != 1:
            listed = [str(path) for path in bins]
            raise CargoError(
                ErrorKind.COMMAND_FAILED,
                context=f"Ambiguous which binary is intended: {listed!r}",
            )
        return cls(bins[0])

    def command(self) -> list[str]:
        """The command line that runs the build artifact."""
        return [str(self.path)]


def _extract_bin(msg: FormatMessage, desired_kind: str) -> Path | None:
    if not isinstance(msg, Artifact):
        return None
    if (
        msg.profile.test
        or msg.target.crate_types != ["bin"]
        or msg.target.kind != [desired_kind]
    ):
        return None
    if not msg.filenames:
        raise CargoError(ErrorKind.INVALID_OUTPUT, context="files must exist")
    return msg.filenames[0]


def _binary_paths(msgs: Iterable[Message], kind: str) -> Iterator[Path]:
    for raw in msgs:
        msg = raw.decode()
        log_message(msg)
        path = _extract_bin(msg, kind)
        if path is not None:
            yield path