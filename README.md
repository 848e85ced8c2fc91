# escargot

A small Python API around `cargo`. It starts `cargo build` with
`--message-format=json`, streams the lines cargo prints, decodes them into
Python objects and finds the binaries the build produced. The binaries can
then be started directly, without the overhead and extra output of
`cargo run` or `cargo test`.

The `cargo` executable is taken from the `CARGO` environment variable when it
is set, and `cargo` (looked up on `PATH`) otherwise; see
`escargot.cargo.cargo_bin()`.

## Installing

```
pip install .
pip install ".[test]"   # with the test dependencies
```

The package has no dependencies outside the standard library.

## Building and reading messages

```python
from escargot.cargo import Cargo

build = (
    Cargo()
    .build()
    .manifest_path("path/to/Cargo.toml")
    .current_release()
    .current_target()
    .target_dir("/tmp/escargot-target")
)

with build.exec() as messages:
    for message in messages:
        print(message.decode())
```

`Cargo().build()` (or `CargoBuild()` from `escargot.build`, which does the
same) returns a `CargoBuild`. Its methods add cargo options and return the
builder, so calls can be chained:

- `package(name)`, `bin(name)`, `example(name)`, `tests()`, `test(name)`
- `manifest_path(path)`, `target_dir(dir)`
- `release()`, and `current_release()`, which adds `--release` only when
  Python runs with optimizations (`python -O`)
- `target(triplet)`, and `current_target()`, which uses the triplet guessed by
  `escargot.cargo.current_target()` from the machine and platform
- `all_features()`, `no_default_features()`, `features(features)`
- `env(key, val)` to set an environment variable for the cargo process
- `arg(arg)` for any option without a dedicated method

The assembled command line is available as `build.args`, and the extra
environment as `build.environ`. `Cargo.build_with(name)` starts from a
different build-like subcommand.

`exec()` starts cargo and returns a `CommandMessages` iterator (also a context
manager; `close()` releases it). Each item is an `escargot.msg.Message` holding
one line of cargo's standard output as `text`.

`Message.decode()` turns the line into one of the types in
`escargot.formats`: `Artifact`, `FromCompiler`, `BuildScript`,
`BuildFinished`, or `UnknownMessage` for a `reason` it does not know.
Compiler messages carry an `escargot.diagnostic.Diagnostic` with its spans,
code, children and `DiagnosticLevel`. `Message.decode_custom(parser)` parses
the JSON and hands it to a callable of your own.

`escargot.formats.decode_message(text)` and `parse_message(data)` decode a
line or an already-parsed object directly. `log_message(msg)` reports a
message through the `escargot.formats` logger: errors at `ERROR`, warnings at
`WARNING`, notes and help at `INFO`, and build progress at `DEBUG`.

## Running a built binary

```python
import subprocess

from escargot.cargo import Cargo

run = (
    Cargo()
    .build()
    .bin("bin")
    .manifest_path("path/to/Cargo.toml")
    .run()
)
print(run.path)
subprocess.run(run.command(), check=True)
```

`run()` builds the selected target and returns a `CargoRun` for the one
binary it produced: a non-test artifact whose crate type is `bin` and whose
kind is `bin`, or `example` when `example(name)` was used. `command()` returns
the command line (a list of strings) that starts it. Selecting both a `bin`
and an `example`, or a build that yields no binary or several, raises
`CargoError`.

## Running test binaries

```python
from escargot.cargo import Cargo
from escargot.testevents import decode_event

build = Cargo().build().tests().manifest_path("path/to/Cargo.toml")
for test in build.run_tests():
    print(test.kind, test.name, test.path)
    with test.exec() as lines:
        for line in lines:
            print(decode_event(line.text))
```

`run_tests()` lazily yields a `CargoTest` for every test artifact of the
build, with its `path`, `kind` (such as `bin`, `lib` or `test`) and `name`.
`command()` is the binary's command line with
`-Z unstable-options --format=json`, and `exec()` starts it and returns a
`CommandMessages`.

`decode_event(text)` and `parse_event(data)` in `escargot.testevents` turn
the test runner's JSON lines into `SuiteStarted`, `SuiteOk`, `SuiteFailed`,
`TestStarted`, `TestOk`, `TestFailed`, `TestIgnored`, `TestAllowedFailure`,
`TestTimeout` and `Bench`, or `UnknownEvent` for anything else.

## Errors

Failures raise `CargoError` from `escargot.error`. Its `kind` is an
`ErrorKind`:

- `INVALID_COMMAND`: the command could not be started,
- `COMMAND_FAILED`: the command exited with an error (its standard error
  becomes the `context`), or no single binary could be picked,
- `INVALID_OUTPUT`: the output could not be read or decoded.

The underlying exception, if any, is kept in `cause`.

## Fixture program

The package installs a tiny program that is handy for testing process
handling:

```
escargot-fixture
```

It prints the `stdout` environment variable to standard output and the
`stderr` variable to standard error, then exits with the code given in `exit`
(0 when unset). An `exit` value that is not a 32-bit integer makes it print
the reason to standard error and exit with 1.

## What it does not do

escargot has no command-line front end of its own for cargo; it is used from
Python code. It does not compile anything itself: every build and test run
goes through the `cargo` executable and the binaries it produces.