"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides a fake package manager that builds package directories.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from ingot.packages import PackageReference  # noqa: E402


class FakePackageManager:
    """Stand-in for ``fhir install <name> <version> --here``.

    Each install creates ``dependencies/<name>#<version>/package`` under the
    working directory, with an ``examples`` subdirectory unless the package
    name is listed in ``without_examples``.
    """

    def __init__(self, return_code: int = 0, without_examples=(), create=True):
        self.calls = []
        self.return_code = return_code
        self.without_examples = set(without_examples)
        self.create = create

    def __call__(self, args, cwd):
        self.calls.append((list(args), Path(cwd)))
        if self.create:
            _, _, name, version, _ = args
            reference = PackageReference(name, version)
            package_dir = (
                Path(cwd) / "dependencies" / reference.directory_name / "package"
            )
            package_dir.mkdir(parents=True, exist_ok=True)
            (package_dir / "StructureDefinition-x.json").write_text("{}", encoding="utf-8")
            if name not in self.without_examples:
                examples = package_dir / "examples"
                examples.mkdir(exist_ok=True)
                (examples / "Patient-example.json").write_text("{}", encoding="utf-8")
        return self.return_code


@pytest.fixture
def fake_fhir():
    """Return a fresh fake package manager."""
    return FakePackageManager()
