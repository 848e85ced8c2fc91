"""Emulation of ``cargo test``: locating built test binaries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .error import CargoError, ErrorKind
from .formats import Artifact, log_message
from .formats import Message as FormatMessage
from .msg import CommandMessages, Message


@dataclass(frozen=True)
class CargoTest:
    """A built test binary."""

    __test__ = False

    path: Path
    kind: str
    name: str

    @classmethod
    def with_messages(cls, msgs: Iterable[Message]) -> Iterator[CargoTest]:
        """Lazily yield every test binary announced by the build messages."""
        return _test_binaries(cls, msgs)

    def command(self) -> list[str]:
        """The command line that runs the test binary with JSON output."""
        return [str(self.path), "-Z", "unstable-options", "--format=json"]

    def exec(self) -> CommandMessages:
        """Run the test binary, returning its test events."""
        return CommandMessages(self.command())


def _extract_test(cls: type[CargoTest], msg: FormatMessage) -> CargoTest | None:
    if not isinstance(msg, Artifact) or not msg.profile.test:
        return None
    if not msg.filenames:
        raise CargoError(ErrorKind.INVALID_OUTPUT, context="files must exist")
    if not msg.target.kind:
        raise CargoError(ErrorKind.INVALID_OUTPUT, context="kind must exist")
    return cls(path=msg.filenames[0], kind=msg.target.kind[0], name=msg.target.name)


def _test_binaries(cls: type[CargoTest], msgs: Iterable[Message]) -> Iterator[CargoTest]:
    try:
        for raw in msgs:
            msg = raw.decode()
            log_message(msg)
            test = _extract_test(cls, msg)
            if test is not None:
                yield test
    finally:
        close = getattr(msgs, "close", None)
        if close is not None:
            close()