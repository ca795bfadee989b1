"""Tests for settings loading, the subprocess runner and error types."""

import subprocess
from pathlib import Path

import pytest

import ingot.runner as runner
from ingot import config as cfg
from ingot.exceptions import AppError, InvalidPackageError

_KEYS = ("INGOT_FHIR_EXECUTABLE", "INGOT_LICENSE_SOURCE", "INGOT_LOG_LEVEL", "INGOT_LOG_DIR")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # setenv first so teardown removes anything load_dotenv adds
    for key in _KEYS:
        monkeypatch.setenv(key, "x")
        monkeypatch.delenv(key)


def test_load_settings_defaults(tmp_path: Path):
    settings = cfg.load_settings(tmp_path / ".env")
    assert settings == cfg.IngotSettings()
    assert settings.license_source == Path("license") / "firelyserver-license.json"


def test_load_settings_from_env_file(tmp_path: Path):
    env = tmp_path / ".env"
    env.write_text(
        "INGOT_FHIR_EXECUTABLE=/opt/fhir\nINGOT_LOG_LEVEL=debug\n", encoding="utf-8"
    )
    settings = cfg.load_settings(env)
    assert settings.fhir_executable == "/opt/fhir"
    assert settings.log_level == "DEBUG"


def test_load_settings_environment_wins_over_file(tmp_path: Path, monkeypatch):
    env = tmp_path / ".env"
    env.write_text("INGOT_LICENSE_SOURCE=from-file\n", encoding="utf-8")
    monkeypatch.setenv("INGOT_LICENSE_SOURCE", "from-env")
    assert cfg.load_settings(env).license_source == Path("from-env")


def test_run_command_waits_and_returns_code(monkeypatch, tmp_path: Path):
    seen = {}

    class FakeProc:
        def __init__(self, args, cwd):
            seen["args"], seen["cwd"] = args, cwd

        def wait(self):
            return 7

    monkeypatch.setattr(subprocess, "Popen", FakeProc)
    assert runner.run_command(["fhir", "install", "a", "1", "--here"], tmp_path) == 7
    assert seen == {"args": ["fhir", "install", "a", "1", "--here"], "cwd": tmp_path}


def test_app_error_to_dict():
    err = InvalidPackageError("bad", context={"token": "x"})
    assert isinstance(err, AppError)
    assert str(err) == "INVALID_PACKAGE_TOKEN: bad"
    assert err.to_dict() == {
        "error_code": "INVALID_PACKAGE_TOKEN",
        "message": "bad",
        "context": {"token": "x"},
    }
