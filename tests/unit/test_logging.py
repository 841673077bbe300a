"""Tests for commandfile logging utilities."""

from __future__ import annotations

import json

import pytest
import structlog

from commandfile.logging import (
    command_context,
    configure_logging,
    get_logger,
    level_for_verbosity,
)


class TestLevelForVerbosity:
    """Tests for mapping -v counts to level names."""

    @pytest.mark.parametrize(
        ("verbose", "expected"), [(0, "ERROR"), (1, "INFO"), (2, "DEBUG"), (5, "DEBUG")]
    )
    def test_mapping(self, verbose: int, expected: str) -> None:
        assert level_for_verbosity(verbose, default="ERROR") == expected

    def test_default_is_warning(self) -> None:
        assert level_for_verbosity(0) == "WARNING"


class TestCommandContext:
    """Tests for command_context."""

    def test_binds_command_and_method(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO", json_output=True)
        log = get_logger("test")
        with command_context("my-command", "myCommand"):
            log.info("inside")
        log.info("outside")

        inside, outside = (json.loads(line) for line in capsys.readouterr().err.splitlines())
        assert inside["command"] == "my-command"
        assert inside["method"] == "myCommand"
        assert "command" not in outside

    def test_unbinds_on_error(self) -> None:
        with pytest.raises(RuntimeError), command_context("x", "x"):
            raise RuntimeError("boom")
        assert structlog.contextvars.get_contextvars() == {}


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="DEBUG", json_output=True)
        get_logger("test").info("command_created", command="deploy")

        record = json.loads(capsys.readouterr().err.strip())
        assert record["event"] == "command_created"
        assert record["command"] == "deploy"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="DEBUG")
        get_logger("test").warning("something_odd", detail="x")

        err = capsys.readouterr().err
        assert "something_odd" in err
        assert "detail" in err

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING", json_output=True)
        log = get_logger("test")
        log.debug("hidden")
        log.info("hidden")
        log.error("shown")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["shown"]

    def test_unknown_level_falls_back_to_warning(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(level="CHATTY", json_output=True)
        log = get_logger("test")
        log.info("hidden")
        log.warning("shown")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["shown"]

    def test_logger_is_not_cached(self) -> None:
        configure_logging()
        assert structlog.get_config()["cache_logger_on_first_use"] is False

    @pytest.mark.parametrize(
        ("kwargs", "expected"),
        [
            ({}, "WARNING"),
            ({"level": "error"}, "ERROR"),
            ({"level": "ERROR", "verbose": 1}, "INFO"),
            ({"verbose": 2}, "DEBUG"),
            ({"level": "CHATTY"}, "WARNING"),
        ],
    )
    def test_returns_effective_level(self, kwargs: dict[str, object], expected: str) -> None:
        assert configure_logging(**kwargs) == expected  # type: ignore[arg-type]

    def test_verbose_overrides_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="ERROR", json_output=True, verbose=2)
        get_logger("test").debug("shown")
        assert json.loads(capsys.readouterr().err)["event"] == "shown"

    def test_json_exception_is_rendered(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)
        try:
            raise ValueError("bad value")
        except ValueError:
            get_logger("test").exception("command_failed")

        record = json.loads(capsys.readouterr().err)
        assert record["level"] == "error"
        assert "ValueError: bad value" in record["exception"]
