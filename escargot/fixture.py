"""A small program that echoes environment variables and exits with a chosen code.

``stdout`` and ``stderr`` are printed to the matching streams, and ``exit``
gives the exit code.
"""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Sequence

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _parse_i32(text: str) -> int:
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _INTEGER.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _I32_MAX:
        raise ValueError("number too large to fit in target type")
    if value < _I32_MIN:
        raise ValueError("number too small to fit in target type")
    return value


def _run() -> int:
    text = os.environ.get("stdout")
    if text is not None:
        print(text)
    text = os.environ.get("stderr")
    if text is not None:
        print(text, file=sys.stderr)
    code = os.environ.get("exit")
    return 0 if code is None else _parse_i32(code)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the fixture and return its exit code."""
    try:
        return _run()
    except ValueError as exc:
        sys.stderr.write(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())