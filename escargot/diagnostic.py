"""Compiler diagnostics as reported in cargo's JSON messages."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_MISSING = object()


def _object(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ValueError(
            f"invalid type: expected {what} object, got {type(data).__name__}"
        )
    return data


def _check(value: Any, kind: type, key: str) -> Any:
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(
            f"invalid value for field `{key}`: expected {kind.__name__}, "
            f"got {value!r}"
        )
    return value


def _field(
    data: Mapping, key: str, kind: type, *, optional: bool = False, default: Any = _MISSING
) -> Any:
    if key not in data:
        if default is not _MISSING:
            return default
        if optional:
            return None
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if value is None and optional:
        return None
    return _check(value, kind, key)


def _items(data: Mapping, key: str, kind: type, *, default: bool = False) -> list:
    if key not in data:
        if default:
            return []
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, list):
        raise ValueError(f"invalid value for field `{key}`: expected a list")
    return [_check(item, kind, key) for item in value]


def _path(data: Mapping, key: str, *, optional: bool = False) -> Path | None:
    value = _field(data, key, str, optional=optional)
    return None if value is None else Path(value)


def _paths(data: Mapping, key: str, *, default: bool = False) -> list[Path]:
    return [Path(item) for item in _items(data, key, str, default=default)]


class Applicability(enum.Enum):
    """Whether a suggestion can be safely applied."""

    MACHINE_APPLICABLE = "MachineApplicable"
    HAS_PLACEHOLDERS = "HasPlaceholders"
    MAYBE_INCORRECT = "MaybeIncorrect"
    UNSPECIFIED = "Unspecified"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> Applicability:
        """Map a wire value to a member; unrecognised names become UNKNOWN."""
        if not isinstance(value, str):
            raise ValueError(f"invalid applicability: {value!r}")
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class DiagnosticLevel(enum.Enum):
    """The diagnostic level."""

    ICE = "error: internal compiler error"
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> DiagnosticLevel:
        """Map a wire value to a member; unrecognised names become UNKNOWN."""
        if not isinstance(value, str):
            raise ValueError(f"invalid diagnostic level: {value!r}")
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class DiagnosticCode:
    """The error code associated to a diagnostic."""

    code: str
    explanation: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> DiagnosticCode:
        data = _object(data, "diagnostic code")
        return cls(
            code=_field(data, "code", str),
            explanation=_field(data, "explanation", str, optional=True),
        )


@dataclass
class DiagnosticSpanLine:
    """A line of code associated with a diagnostic."""

    text: str
    highlight_start: int
    highlight_end: int

    @classmethod
    def from_dict(cls, data: Any) -> DiagnosticSpanLine:
        data = _object(data, "span line")
        return cls(
            text=_field(data, "text", str),
            highlight_start=_field(data, "highlight_start", int),
            highlight_end=_field(data, "highlight_end", int),
        )


@dataclass
class DiagnosticSpan:
    """A section of the source code associated with a diagnostic."""

    file_name: Path
    byte_start: int
    byte_end: int
    line_start: int
    line_end: int
    column_start: int
    column_end: int
    is_primary: bool
    text: list[DiagnosticSpanLine] = field(default_factory=list)
    label: str | None = None
    suggested_replacement: str | None = None
    suggestion_applicability: Applicability | None = None
    expansion: DiagnosticSpanMacroExpansion | None = None

    @classmethod
    def from_dict(cls, data: Any) -> DiagnosticSpan:
        data = _object(data, "diagnostic span")
        applicability = _field(data, "suggestion_applicability", str, optional=True)
        expansion = _field(data, "expansion", Mapping, optional=True)
        return cls(
            file_name=_path(data, "file_name"),
            byte_start=_field(data, "byte_start", int),
            byte_end=_field(data, "byte_end", int),
            line_start=_field(data, "line_start", int),
            line_end=_field(data, "line_end", int),
            column_start=_field(data, "column_start", int),
            column_end=_field(data, "column_end", int),
            is_primary=_field(data, "is_primary", bool),
            text=[
                DiagnosticSpanLine.from_dict(line)
                for line in _items(data, "text", Mapping)
            ],
            label=_field(data, "label", str, optional=True),
            suggested_replacement=_field(
                data, "suggested_replacement", str, optional=True
            ),
            suggestion_applicability=(
                None if applicability is None else Applicability.parse(applicability)
            ),
            expansion=(
                None
                if expansion is None
                else DiagnosticSpanMacroExpansion.from_dict(expansion)
            ),
        )


@dataclass
class DiagnosticSpanMacroExpansion:
    """Macro expansion information associated with a diagnostic."""

    span: DiagnosticSpan
    macro_decl_name: str
    def_site_span: DiagnosticSpan | None = None

    @classmethod
    def from_dict(cls, data: Any) -> DiagnosticSpanMacroExpansion:
        data = _object(data, "macro expansion")
        def_site = _field(data, "def_site_span", Mapping, optional=True)
        return cls(
            span=DiagnosticSpan.from_dict(_field(data, "span", Mapping)),
            macro_decl_name=_field(data, "macro_decl_name", str),
            def_site_span=None if def_site is None else DiagnosticSpan.from_dict(def_site),
        )


@dataclass
class Diagnostic:
    """A diagnostic message generated by the compiler."""

    message: str
    level: DiagnosticLevel
    code: DiagnosticCode | None = None
    spans: list[DiagnosticSpan] = field(default_factory=list)
    children: list[Diagnostic] = field(default_factory=list)
    rendered: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Diagnostic:
        data = _object(data, "diagnostic")
        code = _field(data, "code", Mapping, optional=True)
        return cls(
            message=_field(data, "message", str),
            level=DiagnosticLevel.parse(_field(data, "level", str)),
            code=None if code is None else DiagnosticCode.from_dict(code),
            spans=[DiagnosticSpan.from_dict(s) for s in _items(data, "spans", Mapping)],
            children=[cls.from_dict(c) for c in _items(data, "children", Mapping)],
            rendered=_field(data, "rendered", str, optional=True),
        )