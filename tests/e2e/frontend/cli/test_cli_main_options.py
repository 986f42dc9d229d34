"""End-to-end tests for the logging options of the top-level `twotrack` group.

Verbosity flags, per-logger overrides, debug formatting and the flight
recorder are observed through the test-only `log-demo` command.
"""

import re
from pathlib import Path

import pytest

from twotrack.entrypoints.cli.main import twotrack

# pylint: disable=unused-argument


def assert_in_output(pattern: str, output: str) -> None:
    """Fail unless `pattern` matches somewhere in `output`."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    """Fail if `pattern` matches anywhere in `output`."""
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


@pytest.mark.parametrize(
    ("flags", "shown", "hidden"),
    [
        ([], "demo warning line", "demo info line"),
        (["-v"], "demo info line", "demo debug line"),
        (["-vv"], "demo debug line", None),
        (["-q"], "demo error line", "demo warning line"),
        (["-qq"], "demo critical line", "demo error line"),
    ],
    ids=["default", "v", "vv", "q", "qq"],
)
def test_verbosity_flags(registered_log_demo, runner, fs, flags, shown, hidden):
    """Each -v lowers and each -q raises the WARNING console threshold by one level."""
    result = runner.invoke(twotrack, [*flags, "log-demo"])
    assert result.exit_code == 0
    assert_in_output(shown, result.output)
    if hidden is not None:
        assert_not_in_output(hidden, result.output)


@pytest.mark.parametrize(
    ("env", "cli_args"),
    [
        ({}, ["-vv", "-L", "some.thirdparty=INFO"]),
        ({"TWOTRACK_LOGGER_LEVEL": "some.thirdparty=INFO"}, ["-vv"]),
    ],
    ids=["cli-flag", "env-var"],
)
def test_logger_level_override(registered_log_demo, runner, fs, env, cli_args):
    """A per-logger level hides that logger's DEBUG lines but keeps its INFO lines."""
    result = runner.invoke(twotrack, [*cli_args, "log-demo"], env=env)
    assert result.exit_code == 0
    assert_not_in_output("third-party debug line", result.output)
    assert_in_output("third-party info line", result.output)


def test_bad_logger_level_is_a_usage_error(registered_log_demo, runner, fs):
    """An unknown level name is rejected before any command runs."""
    result = runner.invoke(twotrack, ["-L", "twotrack=LOUD", "log-demo"])
    assert result.exit_code == 2
    assert "Invalid log level" in result.output


def test_debug_mode_shows_source_paths(registered_log_demo, runner, fs):
    """--debug adds file and line information to console records."""
    result = runner.invoke(twotrack, ["--debug", "log-demo"])
    assert result.exit_code == 0
    assert_in_output(r"conftest\.py:\d+\b", result.output)


def test_debug_mode_is_off_by_default(registered_log_demo, runner, fs):
    """Console records carry no source paths unless --debug is given."""
    result = runner.invoke(twotrack, ["log-demo"])
    assert result.exit_code == 0
    assert_not_in_output(r"conftest\.py:\d+\b", result.output)


def test_flight_recorder_flushes_on_warning(registered_log_demo, runner, fs):
    """Buffered DEBUG records reach the file once a WARNING is logged."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        twotrack, ["--log-path", log_path, "-L", "some.thirdparty=INFO", "log-demo"]
    )
    assert result.exit_code == 0
    content = _read(log_path)
    assert_in_output("demo debug line", content)
    assert_not_in_output("third-party debug line", content)
    assert_in_output("third-party info line", content)
    assert_in_output("demo critical line", content)
    assert_not_in_output("demo trailing debug line", content)


@pytest.mark.parametrize(
    ("env", "cli_args"),
    [({}, ["--force-flush"]), ({"TWOTRACK_FORCE_FLUSH_FLIGHT_RECORDER": "true"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_force_flush(registered_log_demo, runner, fs, env, cli_args):
    """Force-flush writes whatever is still buffered when the program exits."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        twotrack, ["--log-path", log_path, *cli_args, "log-demo"], env=env
    )
    assert result.exit_code == 0
    assert_in_output("demo trailing debug line", _read(log_path))


@pytest.mark.parametrize(
    ("env", "cli_args"),
    [({}, ["--no-flight-recorder"]), ({"TWOTRACK_FLIGHT_RECORDER": "0"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_can_be_disabled(
    registered_log_demo, runner, fs, env, cli_args
):
    """Without the flight recorder no log file is created."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        twotrack, ["--log-path", log_path, *cli_args, "log-demo"], env=env
    )
    assert result.exit_code == 0
    assert not Path(log_path).exists()


def test_flight_recorder_truncates_between_runs(registered_log_demo, runner, fs):
    """Each run replaces the previous flight-recorder file."""
    log_path = "flight_recorder.log"
    line_counts = []
    for _ in range(2):
        result = runner.invoke(twotrack, ["--log-path", log_path, "log-demo"])
        assert result.exit_code == 0
        line_counts.append(len(_read(log_path).splitlines()))
    assert line_counts[0] == line_counts[1]


def test_startup_summary(registered_log_demo, runner, fs):
    """The flight recorder holds the startup summary and diagnostics."""
    log_path = "startup.log"
    result = runner.invoke(
        twotrack,
        ["--log-path", log_path, "--force-flush", "log-demo"],
        env={"TWOTRACK_LOGGER_LEVEL": "some.thirdparty=INFO"},
    )
    assert result.exit_code == 0
    content = _read(log_path)
    assert_in_output(r"twotrack \d+\.\d+\.\d+: console=WARNING", content)
    assert_in_output(r"flight-recorder=ON", content)
    assert_in_output(r"Runtime: Python \d+\.\d+\.\d+ on .* \(pid \d+\)", content)
    assert_in_output(r"Libraries: click=\S+, click-extra=\S+, rich=\S+", content)
    assert_in_output(
        r"Environment: \{.*'TWOTRACK_LOGGER_LEVEL': 'some\.thirdparty=INFO'", content
    )
    assert_in_output(
        r"Flight recorder: path=startup\.log, capacity=2000, flush_on_close=True",
        content,
    )
    assert_in_output(
        r"Per-logger overrides: {'asyncio': 'WARNING', 'some.thirdparty': 'INFO'}",
        content,
    )
