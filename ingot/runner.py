"""Synchronous external command runner.

The setup steps never call ``subprocess`` directly; they receive a
``CommandRunner`` so tests can substitute a fake package manager that
populates a directory structure without touching the network.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Callable that runs a command in ``cwd``, waits, and returns its exit code."""

    def __call__(self, args: Sequence[str], cwd: Path) -> int: ...


def run_command(args: Sequence[str], cwd: Path) -> int:
    r"""Run ``args`` as a subprocess in ``cwd`` and wait for it to exit.

    Output is inherited from the current process so the package manager's
    progress is visible to the user. There is no timeout.

    Parameters
    ----------
    args : Sequence[str]
        Executable followed by its arguments.
    cwd : Path
        Working directory for the subprocess.

    Returns
    -------
    int
        The subprocess return code.

    Raises
    ------
    FileNotFoundError
        If the executable cannot be found.

    Examples
    --------
    >>> from pathlib import Path
    >>> run_command(["true"], Path("."))  # doctest: +SKIP
    0
    """
    logger.debug(f"Running {' '.join(args)} in {cwd}")
    proc = subprocess.Popen(list(args), cwd=cwd)
    return_code = proc.wait()
    logger.debug(f"{args[0]} exited with return code {return_code}")
    return return_code


__all__ = ["CommandRunner", "run_command"]
