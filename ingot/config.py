"""Global configuration constants for the setup utility.

Defines the filenames, directory names and defaults shared by the setup
steps, plus ``load_settings`` which resolves the environment-driven values
(optionally from a ``.env`` file in the working directory).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Output artefacts, relative to the working directory
IMPORT_DIR_NAME: str = "vonk-import.R4"
DEPENDENCIES_DIR_NAME: str = "dependencies"
LICENSE_FILENAME: str = "firelyserver-license.json"
APP_SETTINGS_FILENAME: str = "appsettings.instance.json"
DOCKER_SCRIPT_FILENAME: str = "docker_run.ps1"

# Package layout produced by the package manager
PACKAGE_SUBDIR_NAME: str = "package"
EXAMPLES_SUBDIR_NAME: str = "examples"
CORE_PACKAGE_PREFIX: str = "hl7.fhir.r4.core#"
PACKAGE_TOKEN_SEPARATOR: str = "@"

# Container defaults
DEFAULT_CONTAINER_NAME: str = "firely.server"
DEFAULT_HOST_PORT: int = 4080
CONTAINER_PORT: int = 4080
CONTAINER_APP_DIR: str = "/app"
DOCKER_IMAGE: str = "firely/server"

# External package manager
DEFAULT_FHIR_EXECUTABLE: str = "fhir"

# License source used by the positional launcher
DEFAULT_LICENSE_SOURCE: Path = Path("license") / LICENSE_FILENAME

# Logging
LOG_DIR: Path = Path("logs")
LOG_FILENAME: str = "ingot.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL: str = "INFO"


@dataclass(frozen=True)
class IngotSettings:
    """Environment-driven settings resolved once at CLI start."""

    fhir_executable: str = DEFAULT_FHIR_EXECUTABLE
    license_source: Path = DEFAULT_LICENSE_SOURCE
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Path = LOG_DIR


def load_settings(env_file: Path | None = None) -> IngotSettings:
    r"""Resolve settings from the process environment and an optional ``.env``.

    Parameters
    ----------
    env_file : Path | None, optional
        Explicit ``.env`` path. Defaults to ``.env`` in the current working
        directory. Values already present in the environment win over the
        file.

    Returns
    -------
    IngotSettings
        The resolved settings.

    Examples
    --------
    >>> import os
    >>> os.environ["INGOT_FHIR_EXECUTABLE"] = "/opt/fhir/fhir"
    >>> load_settings().fhir_executable
    '/opt/fhir/fhir'
    """
    env_path = env_file if env_file is not None else Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)
    return IngotSettings(
        fhir_executable=os.getenv("INGOT_FHIR_EXECUTABLE", DEFAULT_FHIR_EXECUTABLE),
        license_source=Path(
            os.getenv("INGOT_LICENSE_SOURCE", str(DEFAULT_LICENSE_SOURCE))
        ),
        log_level=os.getenv("INGOT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        log_dir=Path(os.getenv("INGOT_LOG_DIR", str(LOG_DIR))),
    )
