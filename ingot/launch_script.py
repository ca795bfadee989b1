"""Docker launch script rendering.

The script mounts the license, the settings file and the import directory
from the current directory into the container's application directory.
Lines end with a PowerShell backtick continuation.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ingot import config as _config

logger = logging.getLogger(__name__)


def _volume(host_name: str) -> str:
    return f"-v ${{PWD}}/{host_name}:{_config.CONTAINER_APP_DIR}/{host_name}"


def render_launch_script(name: str, port: int) -> str:
    r"""Render the docker launch script for container ``name`` on host ``port``.

    Parameters
    ----------
    name : str
        Docker container name.
    port : int
        Host port mapped to the server's port.

    Returns
    -------
    str
        Script text, every line newline-terminated.

    Examples
    --------
    >>> print(render_launch_script("firely.server", 4080), end="")
    docker run -d -p 4080:4080 --name firely.server `
    -v ${PWD}/firelyserver-license.json:/app/firelyserver-license.json `
    -v ${PWD}/appsettings.instance.json:/app/appsettings.instance.json `
    -v ${PWD}/vonk-import.R4:/app/vonk-import.R4 `
    firely/server
    """
    lines = [
        f"docker run -d -p {port}:{_config.CONTAINER_PORT} --name {name} `",
        f"{_volume(_config.LICENSE_FILENAME)} `",
        f"{_volume(_config.APP_SETTINGS_FILENAME)} `",
        f"{_volume(_config.IMPORT_DIR_NAME)} `",
        _config.DOCKER_IMAGE,
    ]
    return "".join(f"{line}\n" for line in lines)


def write_launch_script(destination: Path, name: str, port: int) -> bool:
    """Write the launch script unless ``destination`` already exists.

    Returns True if the script was written.
    """
    if destination.exists():
        logger.info(f"{destination} already exists; keeping it")
        return False
    destination.write_text(render_launch_script(name, port), encoding="utf-8")
    logger.info(f"Wrote launch script to {destination}")
    return True


__all__ = ["render_launch_script", "write_launch_script"]
