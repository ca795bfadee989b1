"""Filesystem utilities to validate and safely remove generated paths.

Every recursive deletion performed by the setup steps goes through
``safe_rmtree`` so that only paths strictly inside the working directory
can ever be removed.

Functions
---------
- ``create_safe_path``: Validate and stamp a path as safe for removal.
- ``safe_rmtree``: Remove a validated directory tree.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import NewType

logger = logging.getLogger(__name__)

# NewType used as a static "seal" to indicate the path is validated for removal.
_ValidatedPath = NewType("_ValidatedPath", Path)


def create_safe_path(path_to_validate: Path, root: Path) -> _ValidatedPath:
    r"""Validate and stamp a Path as safe for destructive operations.

    Parameters
    ----------
    path_to_validate : Path
        The directory path to be validated for safe removal.
    root : Path
        The working directory that bounds every removal.

    Returns
    -------
    _ValidatedPath
        The resolved path, stamped for use by removal helpers.

    Raises
    ------
    PermissionError
        If the path is the root itself or lies outside of it.

    Examples
    --------
    >>> from pathlib import Path
    >>> create_safe_path(Path("/work/vonk-import.R4"), Path("/work")).name
    'vonk-import.R4'
    >>> create_safe_path(Path("/work"), Path("/work"))  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    PermissionError: SECURITY STOP: Attempt to delete the working directory was blocked.
    """
    root_path = Path(root).resolve()
    target_path = Path(path_to_validate).resolve()

    if target_path == root_path:
        raise PermissionError(
            "SECURITY STOP: Attempt to delete the working directory was blocked."
        )
    if not target_path.is_relative_to(root_path):
        raise PermissionError(
            f"SECURITY STOP: Path '{target_path}' is outside '{root_path}'."
        )
    return _ValidatedPath(target_path)


def safe_rmtree(path: _ValidatedPath | Path, root: Path) -> None:
    r"""Remove a directory tree after validating it against ``root``.

    Parameters
    ----------
    path : Path or _ValidatedPath
        The target directory.
    root : Path
        The working directory that bounds the removal.

    Raises
    ------
    PermissionError
        If the supplied path fails validation by ``create_safe_path``.
    OSError
        If the removal itself fails.

    Notes
    -----
    Logs at WARNING before and INFO after removal. A missing path is a
    no-op.
    """
    validated = create_safe_path(Path(path), root)
    if validated.exists():
        logger.warning(f"Performing safe rmtree on: {validated}")
        shutil.rmtree(validated)
        logger.info(f"Removed directory: {validated}")
    else:
        logger.info(f"Path '{validated}' does not exist; nothing to remove.")


__all__ = ["create_safe_path", "safe_rmtree"]
