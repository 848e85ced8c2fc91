import pytest

from escargot.fixture import main


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("stdout", "stderr", "exit"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env, capsys):
    assert main() == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_stdout_echoed(clean_env, capsys):
    clean_env.setenv("stdout", "hello")
    assert main() == 0
    assert capsys.readouterr().out == "hello\n"


def test_stderr_echoed(clean_env, capsys):
    clean_env.setenv("stderr", "oops")
    assert main() == 0
    captured = capsys.readouterr()
    assert captured.err == "oops\n"
    assert captured.out == ""


@pytest.mark.parametrize(
    "value, expected",
    [("7", 7), ("-3", -3), ("+5", 5), ("0", 0), ("2147483647", 2147483647)],
)
def test_exit_code(clean_env, value, expected):
    clean_env.setenv("exit", value)
    assert main() == expected


@pytest.mark.parametrize("value", ["abc", "", " 1", "1_0", "+", "2147483648", "-2147483649"])
def test_bad_exit_code(clean_env, capsys, value):
    clean_env.setenv("exit", value)
    assert main() == 1
    err = capsys.readouterr().err
    assert err
    assert not err.endswith("\n")


def test_bad_exit_message(clean_env, capsys):
    clean_env.setenv("exit", "abc")
    assert main() == 1
    assert capsys.readouterr().err == "invalid digit found in string"


def test_output_before_bad_exit(clean_env, capsys):
    clean_env.setenv("stdout", "x")
    clean_env.setenv("exit", "bad")
    assert main() == 1
    assert capsys.readouterr().out == "x\n"