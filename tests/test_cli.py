from __future__ import annotations

import importlib

import pytest
from typer.testing import CliRunner

from sysup.detect import Platform
from sysup.errors import UnsupportedDistributionError, UnsupportedPlatformError
from sysup.executor import CommandInvocation
from sysup.steps import UpdatePlan, UpdateStep

cli_module = importlib.import_module("sysup.cli")


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SYSUP_COLOR", "never")
    monkeypatch.setenv("SYSUP_LOG_LEVEL", "ERROR")


def _fake_plan(commands: list[str]):
    def _build_plan(platform: Platform, *, color=None, skip_simulation=False) -> UpdatePlan:
        steps = tuple(
            UpdateStep(CommandInvocation(command, "[STEP] ", color), banner=f"S{index}")
            for index, command in enumerate(commands)
        )
        return UpdatePlan(platform=platform, label="Test", steps=steps, success_message="[SUCCESS] done")

    return _build_plan


def test_successful_run_exits_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "detect_platform", lambda: Platform.UBUNTU)
    monkeypatch.setattr(cli_module, "build_plan", _fake_plan(["echo one", "echo two"]))

    result = CliRunner().invoke(cli_module.app, [])

    assert result.exit_code == 0
    assert "[INFO] Detected system: Test" in result.output
    assert "[STEP] one" in result.output
    assert "[STEP] two" in result.output
    assert "[SUCCESS] done" in result.output


def test_failing_step_exits_one_and_skips_the_rest(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "detect_platform", lambda: Platform.DEBIAN)
    monkeypatch.setattr(cli_module, "build_plan", _fake_plan(["exit 100", "echo never-run"]))

    result = CliRunner().invoke(cli_module.app, [])

    assert result.exit_code == 1
    assert "never-run" not in result.output
    assert "[SUCCESS]" not in result.output


def test_extra_ignore_prefixes_reach_the_executor(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYSUP_EXTRA_IGNORE_PREFIXES", "Fetched")
    monkeypatch.setattr(cli_module, "detect_platform", lambda: Platform.UBUNTU)
    monkeypatch.setattr(cli_module, "build_plan", _fake_plan(["printf 'Fetched 10 kB in 1s\\nkept\\n'"]))

    result = CliRunner().invoke(cli_module.app, [])

    assert result.exit_code == 0
    assert "Fetched" not in result.output
    assert "[STEP] kept" in result.output


def test_unsupported_distribution_exits_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise() -> Platform:
        raise UnsupportedDistributionError("fedora")

    monkeypatch.setattr(cli_module, "detect_platform", _raise)

    result = CliRunner().invoke(cli_module.app, [])

    assert result.exit_code == 1
    assert "Unsupported Linux distribution: only Ubuntu or Debian are supported." in result.output


def test_unsupported_system_exits_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise() -> Platform:
        raise UnsupportedPlatformError("unsupported operating system: darwin")

    monkeypatch.setattr(cli_module, "detect_platform", _raise)

    result = CliRunner().invoke(cli_module.app, [])

    assert result.exit_code == 1
    assert "Unsupported or undetected operating system." in result.output


@pytest.mark.parametrize(("name", "value"), [("SYSUP_COLOR", "sometimes"), ("SYSUP_LOG_LEVEL", "verbose")])
def test_invalid_settings_exit_one_without_traceback(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    monkeypatch.setattr(cli_module, "detect_platform", lambda: pytest.fail("platform detection must not run"))

    result = CliRunner().invoke(cli_module.app, [])

    assert result.exit_code == 1
    assert f"[ERROR] Invalid setting {name}:" in result.output
    assert "Traceback" not in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
