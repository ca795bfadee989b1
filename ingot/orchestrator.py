"""Setup orchestrator for a Firely Server deployment bundle.

Runs the six setup steps in strict order against a working directory:

1. reset the import directory,
2. parse and install each requested package,
3. prune the installed packages,
4. write the license file,
5. write default application settings (only if absent),
6. write the docker launch script (only if absent).

The first failure aborts the run. Nothing is rolled back; the import
directory may be left partially populated.

Typical usage::

    from ingot.orchestrator import SetupOptions, setup_container
    setup_container(SetupOptions(packages=["hl7.fhir.us.core@3.1.0"]))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ingot import config as _config
from ingot.app_settings import write_app_settings
from ingot.fs_utils import safe_rmtree
from ingot.launch_script import write_launch_script
from ingot.license import write_license
from ingot.packages import (
    PackageReference,
    cleanup_packages,
    install_package,
    parse_package_token,
)
from ingot.runner import CommandRunner, run_command

logger = logging.getLogger(__name__)

LicenseWriter = Callable[[Path | None, Path], bool]


@dataclass(frozen=True)
class SetupOptions:
    """Explicit options the orchestrator is parameterized by."""

    packages: Sequence[str] = ()
    name: str = _config.DEFAULT_CONTAINER_NAME
    port: int = _config.DEFAULT_HOST_PORT
    license: Path | None = None


@dataclass
class SetupResult:
    """What a successful run installed, removed and wrote."""

    installed: list[PackageReference] = field(default_factory=list)
    install_return_codes: dict[str, int] = field(default_factory=dict)
    removed_package_roots: list[str] = field(default_factory=list)
    removed_examples: list[str] = field(default_factory=list)
    license_written: bool = False
    settings_written: bool = False
    script_written: bool = False


def reset_import_directory(import_dir: Path, root: Path) -> None:
    """Delete ``import_dir`` recursively if present, then recreate it empty."""
    if import_dir.exists():
        safe_rmtree(import_dir, root)
    import_dir.mkdir()
    logger.info(f"Created empty import directory {import_dir}")


def install_packages(
    tokens: Sequence[str],
    import_dir: Path,
    *,
    run: CommandRunner = run_command,
    executable: str = _config.DEFAULT_FHIR_EXECUTABLE,
) -> list[tuple[PackageReference, int]]:
    r"""Parse and install each token in order.

    Returns each reference with the package manager's return code.

    Parsing is interleaved with installing: packages before a malformed
    token are installed, the malformed token aborts, and nothing after it
    is attempted.

    Raises
    ------
    InvalidPackageError
        On the first malformed token.
    """
    installed: list[tuple[PackageReference, int]] = []
    for token in tokens:
        reference = parse_package_token(token)
        return_code = install_package(
            reference, import_dir, run=run, executable=executable
        )
        installed.append((reference, return_code))
    return installed


def setup_container(
    options: SetupOptions,
    *,
    workdir: Path | None = None,
    run: CommandRunner = run_command,
    executable: str = _config.DEFAULT_FHIR_EXECUTABLE,
    license_writer: LicenseWriter = write_license,
) -> SetupResult:
    r"""Provision the deployment bundle in ``workdir``.

    Parameters
    ----------
    options : SetupOptions
        Packages, container name, host port and optional license source.
    workdir : Path | None, optional
        Directory all outputs are written to. Defaults to the current
        working directory.
    run : CommandRunner, optional
        Runner used to invoke the package manager.
    executable : str, optional
        Package manager executable.
    license_writer : LicenseWriter, optional
        License step implementation. The positional launcher passes a
        writer that copies from a fixed source without an existence check.

    Returns
    -------
    SetupResult
        Summary of the run.

    Raises
    ------
    InvalidPackageError
        If a package token is malformed.
    MissingDependenciesError
        If no ``dependencies`` directory exists after installation.
    OSError
        On any filesystem or process failure.
    """
    root = Path.cwd() if workdir is None else Path(workdir)
    import_dir = root / _config.IMPORT_DIR_NAME
    result = SetupResult()

    reset_import_directory(import_dir, root)

    for reference, return_code in install_packages(
        options.packages, import_dir, run=run, executable=executable
    ):
        result.installed.append(reference)
        result.install_return_codes[str(reference)] = return_code

    report = cleanup_packages(import_dir, root)
    result.removed_package_roots = report.removed_package_roots
    result.removed_examples = report.removed_examples

    result.license_written = license_writer(
        options.license, root / _config.LICENSE_FILENAME
    )
    result.settings_written = write_app_settings(
        root / _config.APP_SETTINGS_FILENAME
    )
    result.script_written = write_launch_script(
        root / _config.DOCKER_SCRIPT_FILENAME, options.name, options.port
    )

    logger.info(f"Setup complete in {root}")
    return result


__all__ = [
    "SetupOptions",
    "SetupResult",
    "install_packages",
    "reset_import_directory",
    "setup_container",
]
