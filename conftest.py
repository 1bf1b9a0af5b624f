"""Project-wide pytest fixtures for the binding registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from modules.bindings.registry import BindingRegistry
from modules.bindings.store import ProfileStore
from tests.bindings.helpers import RecordingBus


@pytest.fixture
def bindings_root(tmp_path: Path) -> Path:
    return tmp_path / "bindings"


@pytest.fixture
def store(bindings_root: Path) -> ProfileStore:
    return ProfileStore(bindings_root)


@pytest.fixture
def bus() -> RecordingBus:
    return RecordingBus()


@pytest.fixture
def registry(store: ProfileStore, bus: RecordingBus) -> BindingRegistry:
    return BindingRegistry(store, event_bus=bus)
