"""License file step.

The license is an opaque file copied byte for byte next to the launch
script so it can be mounted into the container.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def write_license(source: Path | None, destination: Path) -> bool:
    """Copy ``source`` to ``destination`` when a source is given and exists.

    Returns True when the license was copied. A missing or absent source is
    skipped silently.
    """
    if source is None or not source.exists():
        logger.info("No license file supplied; skipping license step")
        return False
    shutil.copyfile(source, destination)
    logger.info(f"Copied license {source} to {destination}")
    return True


def write_fixed_license(source: Path | None, destination: Path) -> bool:
    """Copy the license from a fixed location without checking it first.

    Raises
    ------
    FileNotFoundError
        If ``source`` is not set or does not exist.
    """
    if source is None:
        raise FileNotFoundError("No license source configured")
    shutil.copyfile(source, destination)
    logger.info(f"Copied license {source} to {destination}")
    return True


__all__ = ["write_fixed_license", "write_license"]
