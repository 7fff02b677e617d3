"""Shared fixtures for the langwire test suite."""

from __future__ import annotations

import sys

from pathlib import Path

import pytest

from langwire.backends.registry import BackendRegistry
from langwire.types import Buffer
from langwire.workspace import Workspace

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def registry() -> BackendRegistry:
    """Private copy of the built-in backends, safe to extend in a test."""

    return BackendRegistry.get_registry().copy()


@pytest.fixture()
def workspace(registry: BackendRegistry) -> Workspace:
    return Workspace.in_memory(registry=registry)


@pytest.fixture()
def py_buffer() -> Buffer:
    return Buffer(name="main.py", mode="python-mode")
