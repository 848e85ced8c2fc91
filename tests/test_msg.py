import sys

import pytest

from escargot.error import CargoError, ErrorKind
from escargot.formats import BuildFinished, UnknownMessage
from escargot.msg import CommandMessages, Message
from escargot.testevents import SuiteStarted, parse_event


def python(script):
    return [sys.executable, "-c", script]


EMIT = (
    "import json\n"
    "print(json.dumps({'reason': 'build-finished', 'success': True}))\n"
    "print(json.dumps({'reason': 'something-new'}))\n"
)


def test_iterates_and_decodes_lines():
    with CommandMessages(python(EMIT)) as msgs:
        decoded = [m.decode() for m in msgs]
    assert decoded == [BuildFinished(success=True), UnknownMessage("something-new")]


def test_iteration_ends_after_success():
    msgs = CommandMessages(python("print('{}')"))
    assert [m.text.strip() for m in msgs] == ["{}"]
    with pytest.raises(StopIteration):
        next(msgs)
    msgs.close()


def test_failure_reports_stderr():
    script = (
        "import sys\n"
        "print('{}')\n"
        "sys.stdout.flush()\n"
        "sys.stderr.write('boom')\n"
        "sys.exit(2)\n"
    )
    msgs = CommandMessages(python(script))
    first = next(msgs)
    assert first.text.strip() == "{}"
    with pytest.raises(CargoError) as info:
        next(msgs)
    assert info.value.kind is ErrorKind.COMMAND_FAILED
    assert info.value.context == "boom"
    with pytest.raises(StopIteration):
        next(msgs)
    msgs.close()


def test_large_stderr_does_not_block():
    script = "import sys\nsys.stderr.write('e' * 200000)\nsys.exit(1)\n"
    msgs = CommandMessages(python(script))
    with pytest.raises(CargoError) as info:
        next(msgs)
    remaining = list(msgs)
    msgs.close()
    error = info.value
    assert remaining == []
    assert error.kind is ErrorKind.COMMAND_FAILED
    assert len(error.context) == 200000
    assert error.context == "e" * 200000


def test_env_is_passed():
    script = "import os\nprint(os.environ['ESCARGOT_PROBE'])\n"
    with CommandMessages(python(script), env={"ESCARGOT_PROBE": "hello"}) as msgs:
        lines = [m.text.rstrip() for m in msgs]
    assert lines == ["hello"]


def test_invalid_command():
    with pytest.raises(CargoError) as info:
        CommandMessages(["/nonexistent-escargot-dir/not-a-program"])
    assert info.value.kind is ErrorKind.INVALID_COMMAND
    assert isinstance(info.value.cause, OSError)


def test_closed_iterator_is_exhausted():
    with CommandMessages(python(EMIT)) as msgs:
        next(msgs)
    assert list(msgs) == []


def test_message_decode_invalid_json():
    with pytest.raises(CargoError) as info:
        Message("not json").decode()
    assert info.value.kind is ErrorKind.INVALID_OUTPUT


def test_message_decode_custom():
    msg = Message('{ "type": "suite", "event": "started", "test_count": 10 }\n')
    assert msg.decode_custom(parse_event) == SuiteStarted(test_count=10)


def test_message_decode_custom_parser_error():
    with pytest.raises(CargoError) as info:
        Message("[1, 2]").decode_custom(lambda data: data["missing"])
    assert info.value.kind is ErrorKind.INVALID_OUTPUT


def test_message_equality():
    assert Message("a") == Message("a")
    assert str(Message("a")) == "a"