"""Messages that cargo prints with ``--message-format=json``."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from .diagnostic import (
    Diagnostic,
    DiagnosticLevel,
    _field,
    _items,
    _object,
    _path,
    _paths,
)
from .error import CargoError, ErrorKind

_log = logging.getLogger(__name__)


@dataclass
class BuildFinished:
    """Build completed; no further output should be parsed."""

    success: bool

    @classmethod
    def from_dict(cls, data: Any) -> BuildFinished:
        data = _object(data, "build-finished")
        return cls(success=_field(data, "success", bool))


@dataclass(frozen=True, order=True)
class WorkspaceMember:
    """A workspace member, as the raw package id given by cargo."""

    raw: str

    def __str__(self) -> str:
        return self.raw


def _member(data: Mapping) -> WorkspaceMember:
    return WorkspaceMember(_field(data, "package_id", str))


@dataclass
class Target:
    """A single target (lib, bin, example, ...) provided by a crate."""

    name: str
    kind: list[str]
    src_path: Path
    crate_types: list[str] = field(default_factory=list)
    doctest: bool | None = None
    test: bool = False
    required_features: list[str] = field(default_factory=list)
    edition: str = "2015"

    @classmethod
    def from_dict(cls, data: Any) -> Target:
        data = _object(data, "target")
        return cls(
            name=_field(data, "name", str),
            kind=_items(data, "kind", str),
            src_path=_path(data, "src_path"),
            crate_types=_items(data, "crate_types", str, default=True),
            doctest=_field(data, "doctest", bool, optional=True),
            test=_field(data, "test", bool, default=False),
            required_features=_items(data, "required-features", str, default=True),
            edition=_field(data, "edition", str, default="2015"),
        )


@dataclass
class ArtifactProfile:
    """Profile settings used to determine compiler flags for a target."""

    opt_level: str
    debuginfo: int | None
    debug_assertions: bool
    overflow_checks: bool
    test: bool

    @classmethod
    def from_dict(cls, data: Any) -> ArtifactProfile:
        data = _object(data, "profile")
        return cls(
            opt_level=_field(data, "opt_level", str),
            debuginfo=_field(data, "debuginfo", int, optional=True),
            debug_assertions=_field(data, "debug_assertions", bool),
            overflow_checks=_field(data, "overflow_checks", bool),
            test=_field(data, "test", bool),
        )


@dataclass
class Artifact:
    """A compiler-generated file."""

    package_id: WorkspaceMember
    target: Target
    profile: ArtifactProfile
    features: list[str]
    filenames: list[Path]
    fresh: bool
    executable: Path | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Artifact:
        data = _object(data, "compiler-artifact")
        return cls(
            package_id=_member(data),
            target=Target.from_dict(_field(data, "target", Mapping)),
            profile=ArtifactProfile.from_dict(_field(data, "profile", Mapping)),
            features=_items(data, "features", str),
            filenames=_paths(data, "filenames"),
            fresh=_field(data, "fresh", bool),
            executable=_path(data, "executable", optional=True),
        )


@dataclass
class FromCompiler:
    """Message left by the compiler."""

    package_id: WorkspaceMember
    target: Target
    message: Diagnostic

    @classmethod
    def from_dict(cls, data: Any) -> FromCompiler:
        data = _object(data, "compiler-message")
        return cls(
            package_id=_member(data),
            target=Target.from_dict(_field(data, "target", Mapping)),
            message=Diagnostic.from_dict(_field(data, "message", Mapping)),
        )


@dataclass
class BuildScript:
    """Output of a build script execution."""

    package_id: WorkspaceMember
    linked_libs: list[str]
    linked_paths: list[Path]
    cfgs: list[Path]
    env: list[tuple[str, str]]
    out_dir: Path | None = None

    @classmethod
    def from_dict(cls, data: Any) -> BuildScript:
        data = _object(data, "build-script-executed")
        env = []
        for pair in _items(data, "env", list):
            if len(pair) != 2 or not all(isinstance(item, str) for item in pair):
                raise ValueError(f"invalid value for field `env`: {pair!r}")
            env.append((pair[0], pair[1]))
        return cls(
            package_id=_member(data),
            linked_libs=_items(data, "linked_libs", str),
            linked_paths=_paths(data, "linked_paths"),
            cfgs=_paths(data, "cfgs"),
            env=env,
            out_dir=_path(data, "out_dir", optional=True),
        )


@dataclass
class UnknownMessage:
    """A message whose reason is not recognised."""

    reason: str


Message = Union[BuildFinished, Artifact, FromCompiler, BuildScript, UnknownMessage]

_PARSERS = {
    "build-finished": BuildFinished.from_dict,
    "compiler-artifact": Artifact.from_dict,
    "compiler-message": FromCompiler.from_dict,
    "build-script-executed": BuildScript.from_dict,
}


def parse_message(data: Any) -> Message:
    """Build a message from decoded JSON, dispatching on its ``reason``."""
    data = _object(data, "message")
    reason = _field(data, "reason", str)
    parser = _PARSERS.get(reason)
    if parser is None:
        return UnknownMessage(reason)
    return parser(data)


def decode_message(text: str | bytes) -> Message:
    """Decode one line of cargo's JSON output."""
    try:
        return parse_message(json.loads(text))
    except ValueError as exc:
        raise CargoError(ErrorKind.INVALID_OUTPUT, cause=exc) from exc


def log_message(msg: Message) -> None:
    """Report a message through the package logger."""
    match msg:
        case BuildFinished(success=success):
            _log.debug("Build Finished: %s", success)
        case Artifact(package_id=package_id):
            _log.debug("Building %s", package_id)
        case FromCompiler(message=diagnostic):
            content = (
                diagnostic.rendered
                if diagnostic.rendered is not None
                else diagnostic.message
            )
            level = diagnostic.level
            if level in (DiagnosticLevel.ICE, DiagnosticLevel.ERROR):
                _log.error("%s", content)
            elif level is DiagnosticLevel.WARNING:
                _log.warning("%s", content)
            elif level in (DiagnosticLevel.NOTE, DiagnosticLevel.HELP):
                _log.info("%s", content)
            else:
                _log.warning("Unknown message: %r", msg)
        case BuildScript(package_id=package_id):
            _log.debug("Ran script from %s", package_id)
        case _:
            _log.warning("Unknown message: %r", msg)