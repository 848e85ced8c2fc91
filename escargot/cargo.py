"""The top-level cargo command."""

from __future__ import annotations

import functools
import os
import platform
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .build import CargoBuild

_ARCHITECTURES = {
    "amd64": "x86_64",
    "x86_64": "x86_64",
    "x64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
    "i386": "i686",
    "i686": "i686",
    "x86": "i686",
    "armv7l": "armv7",
}


def cargo_bin() -> str:
    """The cargo executable: ``$CARGO`` when set, otherwise ``cargo``."""
    return os.environ.get("CARGO", "cargo")


def _host_triple(machine: str, system: str) -> str:
    arch = _ARCHITECTURES.get(machine.lower(), machine.lower())
    if system.startswith("linux"):
        abi = "gnueabihf" if arch == "armv7" else "gnu"
        return f"{arch}-unknown-linux-{abi}"
    if system == "darwin":
        return f"{arch}-apple-darwin"
    if system in ("win32", "cygwin"):
        return f"{arch}-pc-windows-msvc"
    for bsd in ("freebsd", "netbsd", "openbsd"):
        if system.startswith(bsd):
            return f"{arch}-unknown-{bsd}"
    return f"{arch}-unknown-{system}"


@functools.lru_cache(maxsize=None)
def current_target() -> str:
    """The target triplet of the machine running this process."""
    return _host_triple(platform.machine(), sys.platform)


class Cargo:
    """Top-level command."""

    def __init__(self) -> None:
        self._args: list[str] = [cargo_bin()]

    @property
    def args(self) -> tuple[str, ...]:
        """The command line assembled so far."""
        return tuple(self._args)

    def __repr__(self) -> str:
        return f"Cargo(args={self._args!r})"

    def arg(self, arg: str | os.PathLike) -> Cargo:
        """Pass an argument that has no dedicated method.

        Passing a sub-command or ``--`` can throw off the API.
        """
        self._args.append(os.fspath(arg))
        return self

    def build(self) -> CargoBuild:
        """Run the ``build`` subcommand."""
        return self.build_with("build")

    def build_with(self, name: str | os.PathLike) -> CargoBuild:
        """Run a custom ``build`` subcommand."""
        from .build import CargoBuild

        return CargoBuild([*self._args, os.fspath(name), "--message-format=json"])