"""Tests for prattle.cli -- encode and kinds commands."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Any, Iterator

import pytest
import yaml
from click.testing import CliRunner

import prattle.cli as cli_module
from prattle.cli import cli
from prattle.config.schema import PrattleConfig


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestEncode:
    """Tests for ``prattle encode``."""

    def test_acknowledge(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["encode", "ACK", "--sender", "alice"])
        assert result.exit_code == 0
        assert result.output == "ACK 5 alice 2 --\n"

    def test_no_acknowledge(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["encode", "NAK"])
        assert result.exit_code == 0
        assert result.output == "NAK 2 -- 2 --\n"

    def test_broadcast(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["encode", "BCT", "--sender", "alice", "--text", "hi all"]
        )
        assert result.exit_code == 0
        assert result.output == "BCT 5 alice 6 hi all\n"

    def test_group_with_receiver(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["encode", "GRM", "--sender", "alice", "--receiver", "team1", "--text", "hi"],
        )
        assert result.exit_code == 0
        assert result.output == "GRM 5 alice 5 team1 2 hi\n"

    def test_unknown_tag_fails(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["encode", "ZZZ", "--sender", "alice"])
        assert result.exit_code == 2
        assert "Unknown unaddressed message tag" in result.output

    def test_addressed_tag_without_receiver_fails(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["encode", "INDV", "--sender", "alice"])
        assert result.exit_code == 2

    def test_receiver_with_unaddressed_tag_fails(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["encode", "BCT", "--sender", "alice", "--receiver", "bob"]
        )
        assert result.exit_code == 2
        assert "Unknown addressed message tag" in result.output

    def test_framed_uses_config_terminator(self, runner: CliRunner) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False
        ) as f:
            yaml.dump({"wire": {"line_terminator": "\r\n"}}, f)
            path = f.name

        try:
            result = runner.invoke(
                cli, ["--config", path, "encode", "BYE", "--sender", "alice", "--framed"]
            )
            assert result.exit_code == 0
            assert result.stdout_bytes == b"BYE 5 alice 2 --\r\n"
        finally:
            os.unlink(path)

    def test_encoding_override(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["encode", "BCT", "--sender", "zoë", "--text", "hi", "--framed",
             "--encoding", "latin-1"],
        )
        assert result.exit_code == 0
        assert result.stdout_bytes == "BCT 3 zoë 2 hi\n".encode("latin-1")

    def test_escaped_line_terminator_override(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["encode", "NAK", "--framed", "--line-terminator", "\\r\\n"],
        )
        assert result.exit_code == 0
        assert result.stdout_bytes == b"NAK 2 -- 2 --\r\n"

    def test_override_beats_config_file(self, runner: CliRunner) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False
        ) as f:
            yaml.dump({"wire": {"line_terminator": "\r\n"}}, f)
            path = f.name

        try:
            result = runner.invoke(
                cli,
                ["--config", path, "encode", "NAK", "--framed", "--line-terminator", "|"],
            )
            assert result.exit_code == 0
            assert result.stdout_bytes == b"NAK 2 -- 2 --|"
        finally:
            os.unlink(path)

    def test_unknown_encoding_fails(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["encode", "NAK", "--framed", "--encoding", "no-such-codec"]
        )
        assert result.exit_code == 2
        assert "Invalid wire settings" in result.output



class TestKinds:
    """Tests for ``prattle kinds``."""

    def test_lists_every_tag(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["kinds"])
        assert result.exit_code == 0
        for tag in ("HLO", "ACK", "NAK", "BYE", "GRM", "INDV", "BCT"):
            assert tag in result.output

    def test_shows_rules(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["kinds"])
        row = next(r for r in result.output.splitlines() if "NO_ACKNOWLEDGE" in r)
        assert row.split()[2:] == ["absent", "absent", "absent"]


class TestLogging:
    """Tests for logging setup in the ``prattle`` group."""

    @pytest.fixture(autouse=True)
    def restore_level(self) -> Iterator[None]:
        pkg_logger = logging.getLogger("prattle")
        saved = pkg_logger.level
        yield
        pkg_logger.setLevel(saved)

    def test_logging_configured_before_config_load(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[str] = []
        real_load = cli_module.load_config

        def fake_basic_config(**kwargs: Any) -> None:
            calls.append("basicConfig")

        def fake_load(path: str | None = None) -> PrattleConfig:
            calls.append("load_config")
            return real_load(path)

        monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
        monkeypatch.setattr(cli_module, "load_config", fake_load)

        result = runner.invoke(cli, ["--config", "/does/not/exist.yaml", "kinds"])
        assert result.exit_code == 0
        assert calls == ["basicConfig", "load_config"]

    def test_missing_config_warning_is_logged(
        self, runner: CliRunner, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="prattle"):
            runner.invoke(cli, ["--config", "/does/not/exist.yaml", "kinds"])
        assert any("Config file not found" in r.getMessage() for r in caplog.records)

    def test_config_log_level_applied(self, runner: CliRunner) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False
        ) as f:
            yaml.dump({"log_level": "debug"}, f)
            path = f.name

        try:
            result = runner.invoke(cli, ["--config", path, "kinds"])
            assert result.exit_code == 0
            assert logging.getLogger("prattle").level == logging.DEBUG
        finally:
            os.unlink(path)

    def test_command_line_level_wins(self, runner: CliRunner) -> None:
        logging.getLogger("prattle").setLevel(logging.NOTSET)
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False
        ) as f:
            yaml.dump({"log_level": "DEBUG"}, f)
            path = f.name

        try:
            result = runner.invoke(
                cli, ["--config", path, "--log-level", "WARNING", "kinds"]
            )
            assert result.exit_code == 0
            assert logging.getLogger("prattle").level == logging.NOTSET
        finally:
            os.unlink(path)
