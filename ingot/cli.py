"""Command-line entrypoints and logging setup.

Two launchers share one orchestrator:

- ``ingot``: ``--packages``, ``--name``, ``--port`` and ``--license`` flags.
  The license is copied only when supplied and present.
- ``ingot-packages``: bare ``name@version`` positional arguments with the
  default container name and port. The license is always copied from a
  fixed source path (``INGOT_LICENSE_SOURCE``), which must exist.

Both return ``0`` on success, ``1`` when an application error aborts the
run and ``2`` on a filesystem or process error.

Examples
--------
>>> # In shell
>>> ingot --packages hl7.fhir.us.core@3.1.0 --name test.server --port 9090
>>> ingot-packages hl7.fhir.us.core@3.1.0 de.basisprofil.r4@1.4.0
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from ingot import config as _config
from ingot.console import (
    ui_error,
    ui_info,
    ui_rule,
    ui_success,
    ui_summary,
    ui_warning,
)
from ingot.exceptions import AppError
from ingot.license import write_fixed_license, write_license
from ingot.orchestrator import LicenseWriter, SetupOptions, SetupResult, setup_container
from ingot.runner import run_command

logger = logging.getLogger(__name__)


def configure_logging(
    level: str = _config.DEFAULT_LOG_LEVEL,
    enable_file: bool = True,
    log_dir: Path = _config.LOG_DIR,
) -> None:
    r"""Configure root logging for a CLI run.

    Installs a console handler and, unless disabled, a file handler in
    ``log_dir``. Existing root handlers are removed first so the function
    is safe to call repeatedly.

    Parameters
    ----------
    level : str, optional
        Logging level name. Unknown names fall back to INFO.
    enable_file : bool, optional
        Whether to add the file handler.
    log_dir : Path, optional
        Directory for the log file.

    Notes
    -----
    A file handler that cannot be created (read-only directory, for
    example) is skipped with a warning on the console handler.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    if enable_file:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(log_dir / _config.LOG_FILENAME, mode="a")
            )
        except OSError as exc:
            file_error = exc
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=_config.LOG_FORMAT,
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning(f"File logging disabled: {file_error}")


def _file_logging_enabled() -> bool:
    return not (
        os.environ.get("DISABLE_FILE_LOGS") or os.environ.get("PYTEST_CURRENT_TEST")
    )


def parse_cli_args(
    argv: list[str] | None = None,
    settings: _config.IngotSettings | None = None,
) -> argparse.Namespace:
    r"""Parse arguments for the flag-based launcher.

    Examples
    --------
    >>> ns = parse_cli_args(["--packages", "a@1", "b@2", "--packages", "c@3"])
    >>> ns.packages
    ['a@1', 'b@2', 'c@3']
    >>> ns.name, ns.port, ns.license
    ('firely.server', 4080, None)
    """
    settings = settings or _config.IngotSettings()
    parser = argparse.ArgumentParser(
        prog="ingot",
        description="Ingot - a tool for setting up Firely Server containers",
    )
    parser.add_argument(
        "--packages",
        nargs="+",
        action="extend",
        default=[],
        metavar="NAME@VERSION",
        help="List of packages containing conformance resources.",
    )
    parser.add_argument(
        "-n",
        "--name",
        default=_config.DEFAULT_CONTAINER_NAME,
        help="Docker container name.",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=_config.DEFAULT_HOST_PORT,
        help="Firely Server host port.",
    )
    parser.add_argument(
        "-l", "--license", type=Path, default=None, help="Firely Server license file."
    )
    parser.add_argument("--workdir", type=Path, default=None)
    parser.add_argument("--log-level", default=settings.log_level)
    return parser.parse_args(argv)


def parse_positional_args(
    argv: list[str] | None = None,
    settings: _config.IngotSettings | None = None,
) -> argparse.Namespace:
    """Parse arguments for the positional launcher."""
    settings = settings or _config.IngotSettings()
    parser = argparse.ArgumentParser(
        prog="ingot-packages",
        description="Set up a Firely Server container from a list of packages",
    )
    parser.add_argument("packages", nargs="*", metavar="NAME@VERSION")
    parser.add_argument("--log-level", default=settings.log_level)
    return parser.parse_args(argv)


def _report(result: SetupResult) -> None:
    def _written(flag: bool) -> str:
        return "written" if flag else "skipped"

    rows: list[tuple[str, str]] = []
    for ref in result.installed:
        return_code = result.install_return_codes.get(str(ref), 0)
        if return_code != 0:
            ui_warning(f"Package manager returned {return_code} for {ref}")
            rows.append((f"install {ref}", f"exit {return_code}"))
        else:
            rows.append((f"install {ref}", "done"))
    rows += [(f"remove {name}", "removed") for name in result.removed_package_roots]
    rows += [(f"{name}/examples", "removed") for name in result.removed_examples]
    rows += [
        (_config.LICENSE_FILENAME, _written(result.license_written)),
        (_config.APP_SETTINGS_FILENAME, _written(result.settings_written)),
        (_config.DOCKER_SCRIPT_FILENAME, _written(result.script_written)),
    ]
    ui_summary(rows)


def run_setup(
    options: SetupOptions,
    settings: _config.IngotSettings,
    *,
    workdir: Path | None = None,
    license_writer: LicenseWriter | None = None,
) -> int:
    r"""Run the orchestrator and translate failures into an exit code.

    Returns
    -------
    int
        ``0`` on success, ``1`` for an ``AppError``, ``2`` for an ``OSError``.
    """
    ui_rule("Ingot")
    ui_info(f"Setting up container '{options.name}' on port {options.port}")
    try:
        result = setup_container(
            options,
            workdir=workdir,
            run=run_command,
            executable=settings.fhir_executable,
            license_writer=license_writer or write_license,
        )
    except AppError as exc:
        logger.error(f"Setup aborted: {exc}", extra={"error": exc.to_dict()})
        ui_error(str(exc))
        return 1
    except OSError as exc:
        logger.error(f"Setup aborted by I/O error: {exc}")
        ui_error(str(exc))
        return 2
    _report(result)
    ui_success("Setup complete")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the flag-based launcher and return its exit code."""
    settings = _config.load_settings()
    args = parse_cli_args(argv, settings)
    configure_logging(args.log_level, _file_logging_enabled(), settings.log_dir)
    options = SetupOptions(
        packages=list(args.packages),
        name=args.name,
        port=args.port,
        license=args.license,
    )
    return run_setup(options, settings, workdir=args.workdir)


def positional_main(argv: list[str] | None = None) -> int:
    """Run the positional launcher and return its exit code."""
    settings = _config.load_settings()
    args = parse_positional_args(argv, settings)
    configure_logging(args.log_level, _file_logging_enabled(), settings.log_dir)
    options = SetupOptions(
        packages=list(args.packages), license=settings.license_source
    )
    return run_setup(options, settings, license_writer=write_fixed_license)


def entry_point() -> None:
    sys.exit(main())


def positional_entry_point() -> None:
    sys.exit(positional_main())


__all__ = [
    "configure_logging",
    "entry_point",
    "main",
    "parse_cli_args",
    "parse_positional_args",
    "positional_entry_point",
    "positional_main",
    "run_setup",
]
