"""Minimal runner for the container setup utility.

Its single responsibility is to delegate to ``ingot.cli`` so the tool can
be run from a source checkout without installing it.

Usage:
    python setup_container.py [--packages NAME@VERSION ...] [--name NAME]
                              [--port PORT] [--license FILE]
                              [--workdir DIR] [--log-level LEVEL]

"""

from __future__ import annotations


def entry_point(argv: list[str] | None = None) -> int:
    """Run the flag-based launcher and return its exit code."""
    # Lazy import so importing this file has no side effects
    from ingot.cli import main

    return main(argv)


if __name__ == "__main__":
    raise SystemExit(entry_point())
