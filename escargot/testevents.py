"""Events emitted by the test runner in its JSON output format."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from .diagnostic import _field, _object
from .error import CargoError, ErrorKind


@dataclass
class SuiteStarted:
    """Suite-started event."""

    test_count: int

    @classmethod
    def from_dict(cls, data: Any) -> SuiteStarted:
        data = _object(data, "suite started")
        return cls(test_count=_field(data, "test_count", int))


@dataclass
class _SuiteCounts:
    passed: int
    failed: int
    allowed_fail: int
    ignored: int
    measured: int
    filtered_out: int

    @classmethod
    def from_dict(cls, data: Any):
        data = _object(data, "suite result")
        return cls(
            passed=_field(data, "passed", int),
            failed=_field(data, "failed", int),
            allowed_fail=_field(data, "allowed_fail", int),
            ignored=_field(data, "ignored", int),
            measured=_field(data, "measured", int),
            filtered_out=_field(data, "filtered_out", int),
        )


@dataclass
class SuiteOk(_SuiteCounts):
    """Suite finished successfully."""


@dataclass
class SuiteFailed(_SuiteCounts):
    """Suite finished with failures."""


@dataclass
class _NamedCase:
    __test__ = False

    name: str

    @classmethod
    def from_dict(cls, data: Any):
        data = _object(data, "test event")
        return cls(name=_field(data, "name", str))


@dataclass
class TestStarted(_NamedCase):
    """Case-started event."""


@dataclass
class TestOk(_NamedCase):
    """Case finished successfully."""


@dataclass
class TestIgnored(_NamedCase):
    """Case was ignored."""


@dataclass
class TestAllowedFailure(_NamedCase):
    """Case failed but was allowed to."""


@dataclass
class TestTimeout(_NamedCase):
    """Case timed out."""


@dataclass
class TestFailed:
    """Case finished with a failure."""

    __test__ = False

    name: str
    stdout: str | None = None
    message: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> TestFailed:
        data = _object(data, "test failed")
        return cls(
            name=_field(data, "name", str),
            stdout=_field(data, "stdout", str, optional=True),
            message=_field(data, "message", str, optional=True),
        )


@dataclass
class Bench:
    """Benchmark event."""

    name: str
    median: int
    deviation: int
    mib_per_second: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Bench:
        data = _object(data, "bench")
        return cls(
            name=_field(data, "name", str),
            median=_field(data, "median", int),
            deviation=_field(data, "deviation", int),
            mib_per_second=_field(data, "mib_per_second", int, optional=True),
        )


@dataclass
class UnknownEvent:
    """An event whose type or sub-event is not recognised."""

    type: str
    event: str | None = None


Event = Union[
    SuiteStarted,
    SuiteOk,
    SuiteFailed,
    TestStarted,
    TestOk,
    TestFailed,
    TestIgnored,
    TestAllowedFailure,
    TestTimeout,
    Bench,
    UnknownEvent,
]

_SUITE_EVENTS = {
    "started": SuiteStarted.from_dict,
    "ok": SuiteOk.from_dict,
    "failed": SuiteFailed.from_dict,
}

_TEST_EVENTS = {
    "started": TestStarted.from_dict,
    "ok": TestOk.from_dict,
    "failed": TestFailed.from_dict,
    "ignored": TestIgnored.from_dict,
    "allowed_failure": TestAllowedFailure.from_dict,
    "timeout": TestTimeout.from_dict,
}

_GROUPS = {"suite": _SUITE_EVENTS, "test": _TEST_EVENTS}


def parse_event(data: Any) -> Event:
    """Build an event from decoded JSON, dispatching on ``type`` and ``event``."""
    data = _object(data, "event")
    kind = _field(data, "type", str)
    if kind == "bench":
        return Bench.from_dict(data)
    group = _GROUPS.get(kind)
    if group is None:
        return UnknownEvent(kind)
    event = _field(data, "event", str)
    parser = group.get(event)
    if parser is None:
        return UnknownEvent(kind, event)
    return parser(data)


def decode_event(text: str | bytes) -> Event:
    """Decode one line of the test runner's JSON output."""
    try:
        return parse_event(json.loads(text))
    except ValueError as exc:
        raise CargoError(ErrorKind.INVALID_OUTPUT, cause=exc) from exc