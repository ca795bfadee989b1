"""Default application settings for the server instance.

The settings file is written once: an existing file is user-owned and is
never overwritten.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from ingot import config as _config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LicenseSettings:
    LicenseFile: str = _config.LICENSE_FILENAME


@dataclass(frozen=True)
class AdministrationSettings:
    Repository: str = "SQLite"


@dataclass(frozen=True)
class AdministrationImportOptions:
    ImportDirectory: str = f"./{_config.IMPORT_DIR_NAME}"
    ImportedDirectory: str = "./vonk-imported"


@dataclass(frozen=True)
class AppSettings:
    r"""Fixed-shape default settings record.

    Field names follow the server's own configuration keys, so they are
    serialized verbatim.

    Examples
    --------
    >>> AppSettings().to_dict()["License"]
    {'LicenseFile': 'firelyserver-license.json'}
    """

    License: LicenseSettings = field(default_factory=LicenseSettings)
    Repository: str = "SQLite"
    Administration: AdministrationSettings = field(
        default_factory=AdministrationSettings
    )
    AdministrationImportOptions: AdministrationImportOptions = field(
        default_factory=AdministrationImportOptions
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as nested plain dictionaries."""
        return asdict(self)

    def to_json(self) -> str:
        """Return the settings as indented JSON."""
        return json.dumps(self.to_dict(), indent=2)


def write_app_settings(destination: Path) -> bool:
    r"""Write default settings to ``destination`` unless it already exists.

    Parameters
    ----------
    destination : Path
        Output settings file.

    Returns
    -------
    bool
        True if the file was written, False if an existing file was kept.
    """
    if destination.exists():
        logger.info(f"{destination} already exists; keeping it")
        return False
    destination.write_text(AppSettings().to_json(), encoding="utf-8")
    logger.info(f"Wrote default settings to {destination}")
    return True


__all__ = [
    "AdministrationImportOptions",
    "AdministrationSettings",
    "AppSettings",
    "LicenseSettings",
    "write_app_settings",
]
