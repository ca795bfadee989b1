"""Conformance package references, installation and pruning.

Packages are named on the command line as ``name@version`` tokens, fetched
by the external ``fhir`` package manager into
``<import dir>/dependencies/<name>#<version>``, and then pruned: the R4 core
package is removed entirely (the server ships it built in) and every other
package loses its ``package/examples`` directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ingot import config as _config
from ingot.exceptions import InvalidPackageError, MissingDependenciesError
from ingot.fs_utils import safe_rmtree
from ingot.runner import CommandRunner, run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageReference:
    """A package name and version, as given by a ``name@version`` token."""

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}{_config.PACKAGE_TOKEN_SEPARATOR}{self.version}"

    @property
    def directory_name(self) -> str:
        """Name of the package root directory the package manager creates."""
        return f"{self.name}#{self.version}"


@dataclass
class CleanupReport:
    """Package roots and examples directories removed by ``cleanup_packages``."""

    removed_package_roots: list[str] = field(default_factory=list)
    removed_examples: list[str] = field(default_factory=list)


def parse_package_token(token: str) -> PackageReference:
    r"""Parse a ``name@version`` token into a ``PackageReference``.

    Parameters
    ----------
    token : str
        The raw token as supplied on the command line.

    Returns
    -------
    PackageReference
        The parsed name and version.

    Raises
    ------
    InvalidPackageError
        If the token does not split into exactly two non-empty parts.

    Examples
    --------
    >>> parse_package_token("hl7.fhir.us.core@3.1.0")
    PackageReference(name='hl7.fhir.us.core', version='3.1.0')
    >>> parse_package_token("bad-token")  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    InvalidPackageError: INVALID_PACKAGE_TOKEN: ...
    """
    parts = token.split(_config.PACKAGE_TOKEN_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise InvalidPackageError(
            f"Package '{token}' is not of the form name@version",
            context={"token": token},
        )
    return PackageReference(name=parts[0], version=parts[1])


def install_package(
    reference: PackageReference,
    import_dir: Path,
    *,
    run: CommandRunner = run_command,
    executable: str = _config.DEFAULT_FHIR_EXECUTABLE,
) -> int:
    r"""Install one package into ``import_dir`` using the package manager.

    Runs ``fhir install <name> <version> --here`` with ``import_dir`` as the
    working directory and waits for it to finish.

    Parameters
    ----------
    reference : PackageReference
        Package to install.
    import_dir : Path
        Directory the package manager runs in.
    run : CommandRunner, optional
        Command runner; defaults to a real subprocess.
    executable : str, optional
        Package manager executable name or path.

    Returns
    -------
    int
        The package manager's return code.

    Notes
    -----
    The return code does not affect control flow. A failed install shows up
    later as a missing ``dependencies`` directory in ``cleanup_packages``.
    """
    logger.info(f"Installing package {reference}")
    return_code = run(
        [executable, "install", reference.name, reference.version, "--here"],
        import_dir,
    )
    if return_code != 0:
        logger.warning(
            f"Package manager returned {return_code} while installing {reference}"
        )
    return return_code


def cleanup_packages(import_dir: Path, root: Path) -> CleanupReport:
    r"""Prune the installed packages under ``import_dir``.

    Parameters
    ----------
    import_dir : Path
        The import directory holding ``dependencies``.
    root : Path
        Working directory bounding every removal.

    Returns
    -------
    CleanupReport
        Names of removed package roots and of packages whose examples were
        removed.

    Raises
    ------
    MissingDependenciesError
        If ``dependencies`` does not exist directly under ``import_dir``.
    """
    dependencies_dir = import_dir / _config.DEPENDENCIES_DIR_NAME
    if not dependencies_dir.is_dir():
        raise MissingDependenciesError(
            f"No '{_config.DEPENDENCIES_DIR_NAME}' directory under '{import_dir}'",
            context={"import_dir": str(import_dir)},
        )

    report = CleanupReport()
    for package_root in sorted(p for p in dependencies_dir.iterdir() if p.is_dir()):
        if package_root.name.startswith(_config.CORE_PACKAGE_PREFIX):
            safe_rmtree(package_root, root)
            report.removed_package_roots.append(package_root.name)
            continue

        examples_dir = (
            package_root / _config.PACKAGE_SUBDIR_NAME / _config.EXAMPLES_SUBDIR_NAME
        )
        if examples_dir.is_dir():
            safe_rmtree(examples_dir, root)
            report.removed_examples.append(package_root.name)

    logger.info(
        f"Cleanup removed {len(report.removed_package_roots)} package(s) and "
        f"{len(report.removed_examples)} examples directory(ies)"
    )
    return report


__all__ = [
    "CleanupReport",
    "PackageReference",
    "cleanup_packages",
    "install_package",
    "parse_package_token",
]
