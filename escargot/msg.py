"""Running a cargo sub-command and iterating over its JSON messages."""

from __future__ import annotations

import json
import os
import subprocess
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import IO, Any, TypeVar

from .error import CargoError, ErrorKind
from .formats import Message as FormatMessage
from .formats import decode_message

T = TypeVar("T")


@dataclass(frozen=True)
class Message:
    """An individual line of output from a cargo sub-command."""

    text: str

    def __str__(self) -> str:
        return self.text

    def decode(self) -> FormatMessage:
        """Deserialize the message as a cargo build message."""
        return decode_message(self.text)

    def decode_custom(self, parser: Callable[[Any], T]) -> T:
        """Deserialize the message as JSON and hand it to ``parser``."""
        try:
            return parser(json.loads(self.text))
        except (ValueError, TypeError, KeyError) as exc:
            raise CargoError(ErrorKind.INVALID_OUTPUT, cause=exc) from exc


class CommandMessages:
    """Runs a command and iterates over the lines it prints to stdout."""

    def __init__(
        self,
        args: Iterable[str | os.PathLike],
        env: Mapping[str, str | os.PathLike] | None = None,
    ) -> None:
        argv = [os.fspath(arg) for arg in args]
        environ = None
        if env:
            environ = dict(os.environ)
            environ.update({key: os.fspath(value) for key, value in env.items()})
        try:
            self._child = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=environ,
            )
        except (OSError, ValueError) as exc:
            raise CargoError(ErrorKind.INVALID_COMMAND, cause=exc) from exc
        self._done = False
        self._closed = False
        self._stderr_chunks: list[bytes] = []
        self._stderr_thread = threading.Thread(
            target=self._drain, args=(self._child.stderr,), daemon=True
        )
        self._stderr_thread.start()

    def _drain(self, stream: IO[bytes]) -> None:
        for chunk in iter(lambda: stream.read(8192), b""):
            self._stderr_chunks.append(chunk)

    def __iter__(self) -> CommandMessages:
        return self

    def __next__(self) -> Message:
        if self._closed:
            raise StopIteration
        try:
            line = self._child.stdout.readline()
        except (OSError, ValueError) as exc:
            raise CargoError(ErrorKind.INVALID_OUTPUT, cause=exc) from exc
        if line:
            try:
                return Message(line.decode("utf-8"))
            except UnicodeDecodeError as exc:
                raise CargoError(ErrorKind.INVALID_OUTPUT, cause=exc) from exc

        returncode = self._child.wait()
        if returncode != 0 and not self._done:
            self._done = True
            self._stderr_thread.join()
            data = b"".join(self._stderr_chunks)
            raise CargoError(
                ErrorKind.COMMAND_FAILED,
                context=data.decode("utf-8", errors="replace"),
            )
        self._done = True
        raise StopIteration

    def close(self) -> None:
        """Release the pipes and wait for the command to exit."""
        if self._closed:
            return
        self._closed = True
        self._child.stdout.close()
        if not self._done:
            self._child.wait()
            self._done = True
        self._stderr_thread.join()
        self._child.stderr.close()

    def __enter__(self) -> CommandMessages:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()