"""Tests for the license, settings and launch-script output steps."""

import json
from pathlib import Path

import pytest

from ingot.app_settings import AppSettings, write_app_settings
from ingot.launch_script import render_launch_script, write_launch_script
from ingot.license import write_fixed_license, write_license

EXPECTED_SCRIPT = (
    "docker run -d -p 4080:4080 --name firely.server `\n"
    "-v ${PWD}/firelyserver-license.json:/app/firelyserver-license.json `\n"
    "-v ${PWD}/appsettings.instance.json:/app/appsettings.instance.json `\n"
    "-v ${PWD}/vonk-import.R4:/app/vonk-import.R4 `\n"
    "firely/server\n"
)


def test_render_launch_script_defaults():
    assert render_launch_script("firely.server", 4080) == EXPECTED_SCRIPT


def test_render_launch_script_binds_name_and_port():
    first = render_launch_script("test.server", 9090).splitlines()[0]
    assert first == "docker run -d -p 9090:4080 --name test.server `"


def test_write_launch_script_skips_existing(tmp_path: Path):
    dest = tmp_path / "docker_run.ps1"
    assert write_launch_script(dest, "a", 1) is True
    assert write_launch_script(dest, "b", 2) is False
    assert "--name a `" in dest.read_text(encoding="utf-8")


def test_app_settings_shape():
    data = json.loads(AppSettings().to_json())
    assert data == {
        "License": {"LicenseFile": "firelyserver-license.json"},
        "Repository": "SQLite",
        "Administration": {"Repository": "SQLite"},
        "AdministrationImportOptions": {
            "ImportDirectory": "./vonk-import.R4",
            "ImportedDirectory": "./vonk-imported",
        },
    }


def test_app_settings_is_indented():
    assert AppSettings().to_json().startswith('{\n  "License": {\n    "LicenseFile"')


def test_write_app_settings_skips_existing(tmp_path: Path):
    dest = tmp_path / "appsettings.instance.json"
    dest.write_text("{}", encoding="utf-8")
    assert write_app_settings(dest) is False
    assert dest.read_text(encoding="utf-8") == "{}"


def test_write_app_settings_writes(tmp_path: Path):
    dest = tmp_path / "appsettings.instance.json"
    assert write_app_settings(dest) is True
    assert json.loads(dest.read_text(encoding="utf-8"))["Repository"] == "SQLite"


def test_write_license_copies_bytes(tmp_path: Path):
    src = tmp_path / "my.license"
    src.write_bytes(b"\x00license\xffbytes")
    dest = tmp_path / "firelyserver-license.json"
    dest.write_bytes(b"old")
    assert write_license(src, dest) is True
    assert dest.read_bytes() == src.read_bytes()


def test_write_license_skips_missing_or_none(tmp_path: Path):
    dest = tmp_path / "firelyserver-license.json"
    assert write_license(None, dest) is False
    assert write_license(tmp_path / "nope", dest) is False
    assert not dest.exists()


def test_write_fixed_license_requires_source(tmp_path: Path):
    dest = tmp_path / "firelyserver-license.json"
    with pytest.raises(FileNotFoundError):
        write_fixed_license(tmp_path / "nope", dest)
    with pytest.raises(FileNotFoundError):
        write_fixed_license(None, dest)
