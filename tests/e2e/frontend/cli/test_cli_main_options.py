"""End-to-end tests for the top-level `enrolflow` group options.

Exercise verbosity flags, logger-level overrides, debug formatting and the
flight recorder by invoking the test-only `log-demo` command.
"""

import pytest

from enrolflow.entrypoints.cli.main import enrolflow

from .conftest import assert_in_output, assert_not_in_output

# pylint: disable=unused-argument


@pytest.mark.parametrize(
    ("cli_args", "shown", "hidden"),
    [
        ([], "WARNING", "INFO"),
        (["-v"], "INFO", "DEBUG"),
        (["-q"], "ERROR", "WARNING"),
        (["-qq"], "CRITICAL", "ERROR"),
    ],
    ids=["default", "verbose", "quiet", "very-quiet"],
)
def test_verbosity(registered_log_demo, runner, fs, cli_args, shown, hidden):
    """-v/-q move the console threshold one level per repetition."""
    result = runner.invoke(enrolflow, ["--no-flight-recorder", *cli_args, "log-demo"])
    assert result.exit_code == 0
    assert_in_output(shown, result.output)
    assert_not_in_output(hidden, result.output)


def test_vv_shows_debug(registered_log_demo, runner, fs):
    """-vv enables DEBUG console output."""
    result = runner.invoke(enrolflow, ["--no-flight-recorder", "-vv", "log-demo"])
    assert result.exit_code == 0
    assert_in_output("DEBUG", result.output)


@pytest.mark.parametrize(
    ("env", "cli_args"),
    [
        ({}, ["-vv", "-L", "some.thirdparty=INFO"]),
        ({"ENROLFLOW_LOGGER_LEVELS": "some.thirdparty=INFO"}, ["-vv"]),
    ],
    ids=["cli-flag", "env-var"],
)
def test_logger_level_silences_debug(registered_log_demo, runner, fs, env, cli_args):
    """Per-logger levels silence third-party DEBUG and keep INFO+."""
    result = runner.invoke(
        enrolflow, ["--no-flight-recorder", *cli_args, "log-demo"], env=env
    )
    assert result.exit_code == 0
    assert_not_in_output("debug-level third-party test message", result.output)
    assert_in_output("info-level third-party test message", result.output)


def test_bad_logger_level_is_a_usage_error(runner, fs):
    """Malformed -L values are rejected by Click."""
    result = runner.invoke(enrolflow, ["-L", "enrolflow=LOUD", "where"])
    assert result.exit_code == 2
    assert_in_output("Invalid log level", result.output)


def test_debug_mode_shows_paths(registered_log_demo, runner, fs):
    """--debug adds source file and line to console records."""
    result = runner.invoke(enrolflow, ["--no-flight-recorder", "--debug", "log-demo"])
    assert result.exit_code == 0
    assert_in_output(r"conftest\.py:\d+\b", result.output)


def test_debug_mode_is_off_by_default(registered_log_demo, runner, fs):
    """Source paths are not shown by default."""
    result = runner.invoke(enrolflow, ["--no-flight-recorder", "log-demo"])
    assert result.exit_code == 0
    assert_not_in_output(r"conftest\.py:\d+\b", result.output)


def test_flight_recorder_flush_on_warning(registered_log_demo, runner, fs):
    """Buffered DEBUG records reach the log file when a WARNING occurs."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        enrolflow, ["--log-path", log_path, "-L", "some.thirdparty=INFO", "log-demo"]
    )
    assert result.exit_code == 0
    with open(log_path, "r", encoding="utf-8") as f:
        content = f.read()
    assert_in_output("This is a debug-level test message.", content)
    assert_not_in_output("This is a debug-level third-party test message.", content)
    assert_in_output("This is an info-level third-party test message.", content)
    assert_in_output("This is a critical-level test message.", content)
    # records after the last flush stay in memory
    assert_not_in_output("This is a final debug-level test message.", content)


@pytest.mark.parametrize(
    ("env", "cli_args"),
    [({}, ["--force-flush"]), ({"ENROLFLOW_FORCE_FLUSH_FLIGHT_RECORDER": "1"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_force_flush(registered_log_demo, runner, fs, env, cli_args):
    """With force-flush the final DEBUG records are written on exit."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        enrolflow, ["--log-path", log_path, *cli_args, "log-demo"], env=env
    )
    assert result.exit_code == 0
    with open(log_path, "r", encoding="utf-8") as f:
        content = f.read()
    assert_in_output("This is a final debug-level test message.", content)


def test_log_path_from_env(registered_log_demo, runner, fs):
    """ENROLFLOW_LOG_PATH sets the flight recorder file."""
    result = runner.invoke(
        enrolflow, ["log-demo"], env={"ENROLFLOW_LOG_PATH": "from_env.log"}
    )
    assert result.exit_code == 0
    with open("from_env.log", "r", encoding="utf-8") as f:
        assert_in_output("This is a warning-level test message.", f.read())


def test_startup_diagnostics(registered_log_demo, runner, fs):
    """Startup info and diagnostics are recorded in the flight recorder."""
    log_path = "startup.log"
    result = runner.invoke(
        enrolflow, ["--log-path", log_path, "--force-flush", "log-demo"]
    )
    assert result.exit_code == 0
    with open(log_path, "r", encoding="utf-8") as f:
        content = f.read()
    assert_in_output(r"ENROLFLOW \d+\.\d+\.\d+: console=WARNING, flight-recorder=ON", content)
    assert_in_output(r"Runtime: Python \d+\.\d+\.\d+ on ", content)
    assert_in_output(r"Libraries: click \S+, click-extra \S+, rich \S+", content)
    assert_in_output(
        r"Flight recorder: startup\.log \(capacity 2000, flush on exit: yes\)", content
    )
    assert_in_output(r"Logger levels: click_extra=WARNING$", content)


def test_startup_lists_logger_overrides(registered_log_demo, runner, fs):
    """-L overrides are listed next to the library defaults."""
    log_path = "startup.log"
    result = runner.invoke(
        enrolflow,
        ["--log-path", log_path, "--force-flush", "-L", "some.thirdparty=INFO", "log-demo"],
    )
    assert result.exit_code == 0
    with open(log_path, "r", encoding="utf-8") as f:
        content = f.read()
    assert_in_output(
        r"Logger levels: click_extra=WARNING, some\.thirdparty=INFO$", content
    )


def test_debug_console_reports_debug_level(registered_log_demo, runner, fs):
    """--debug lowers the console threshold reported at startup."""
    log_path = "startup.log"
    result = runner.invoke(
        enrolflow, ["--log-path", log_path, "--force-flush", "--debug", "log-demo"]
    )
    assert result.exit_code == 0
    with open(log_path, "r", encoding="utf-8") as f:
        assert_in_output(r"console=DEBUG, flight-recorder=ON", f.read())
