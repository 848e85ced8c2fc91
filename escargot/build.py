"""The ``build`` subcommand."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping

from .cargo import Cargo, current_target
from .msg import CommandMessages
from .run import CargoRun
from .testrun import CargoTest


class CargoBuild:
    """Builder for a ``cargo build`` invocation."""

    def __init__(
        self,
        args: Iterable[str | os.PathLike] | None = None,
        env: Mapping[str, str | os.PathLike] | None = None,
    ) -> None:
        if args is None:
            args = Cargo().build().args
        self._args: list[str] = [os.fspath(arg) for arg in args]
        self._env: dict[str, str] = {
            key: os.fspath(value) for key, value in (env or {}).items()
        }
        self._bin = False
        self._example = False

    @property
    def args(self) -> tuple[str, ...]:
        """The command line assembled so far."""
        return tuple(self._args)

    @property
    def environ(self) -> dict[str, str]:
        """Environment variables added for the command."""
        return dict(self._env)

    def __repr__(self) -> str:
        return f"CargoBuild(args={self._args!r}, env={self._env!r})"

    def package(self, name: str | os.PathLike) -> CargoBuild:
        """Build the ``name`` package of a workspace."""
        return self.arg("--package").arg(name)

    def bin(self, name: str | os.PathLike) -> CargoBuild:
        """Build only the ``name`` binary."""
        self._bin = True
        return self.arg("--bin").arg(name)

    def example(self, name: str | os.PathLike) -> CargoBuild:
        """Build only the ``name`` example."""
        self._example = True
        return self.arg("--example").arg(name)

    def tests(self) -> CargoBuild:
        """Build all tests."""
        return self.arg("--tests")

    def test(self, name: str | os.PathLike) -> CargoBuild:
        """Build only the ``name`` test."""
        return self.arg("--test").arg(name)

    def manifest_path(self, path: str | os.PathLike) -> CargoBuild:
        """Path to Cargo.toml."""
        return self.arg("--manifest-path").arg(path)

    def release(self) -> CargoBuild:
        """Build artifacts in release mode, with optimizations."""
        return self.arg("--release")

    def env(self, key: str, val: str | os.PathLike) -> CargoBuild:
        """Insert or update an environment variable for the command."""
        self._env[key] = os.fspath(val)
        return self

    def current_release(self) -> CargoBuild:
        """Build in release mode if this process runs optimized."""
        if __debug__:
            return self
        return self.release()

    def target(self, triplet: str) -> CargoBuild:
        """Build for the target triplet."""
        return self.arg("--target").arg(triplet)

    def current_target(self) -> CargoBuild:
        """Build for the current process' triplet."""
        return self.target(current_target())

    def target_dir(self, dir: str | os.PathLike) -> CargoBuild:
        """Directory for all generated artifacts."""
        return self.arg("--target-dir").arg(dir)

    def all_features(self) -> CargoBuild:
        """Activate all available features."""
        return self.arg("--all-features")

    def no_default_features(self) -> CargoBuild:
        """Do not activate the ``default`` feature."""
        return self.arg("--no-default-features")

    def features(self, features: str) -> CargoBuild:
        """Space-separated list of features to activate."""
        return self.arg("--features").arg(features)

    def arg(self, arg: str | os.PathLike) -> CargoBuild:
        """Pass an argument that has no dedicated method.

        Passing ``--`` can throw off the API.
        """
        self._args.append(os.fspath(arg))
        return self

    def exec(self) -> CommandMessages:
        """Build the configured target, returning compiler messages."""
        return CommandMessages(self._args, self._env)

    def run(self) -> CargoRun:
        """Build, then return a handle for running the built binary."""
        return CargoRun.from_messages(self.exec(), self._bin, self._example)

    def run_tests(self) -> Iterator[CargoTest]:
        """Build, then lazily yield a handle for each built test binary."""
        return CargoTest.with_messages(self.exec())