"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import underbar...' works without
installing the package, and resets the shared random generator between tests
so no test depends on draws made by another.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


@pytest.fixture(autouse=True)
def fresh_default_rng(monkeypatch):
    """Start every test with an unset shared generator."""
    from underbar.utils import rng

    monkeypatch.setattr(rng, "_default_rng", None)
    yield
