"""Shared fixtures for impl_index tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from impl_index.bridge.registry import RegistryBridge, reset_bridge
from impl_index.tracing.jsonl_tracer import JSONLTraceCollector
from impl_index.viewer.index import ImplementorIndex
from impl_index.viewer.page import InMemoryPageStore

FIXTURE_ROOT = Path(__file__).parent / "fixtures" / "implementors"


class RecordingCollector:
    """Collector that remembers every contribution it was handed."""

    def __init__(self) -> None:
        self.calls: list[dict] = []

    def __call__(self, contribution: dict) -> None:
        self.calls.append(contribution)


@pytest.fixture
def fixture_root() -> Path:
    return FIXTURE_ROOT


@pytest.fixture
def bridge():
    return RegistryBridge()


@pytest.fixture
def collector():
    return RecordingCollector()


@pytest.fixture
def index():
    return ImplementorIndex()


@pytest.fixture
def page_store():
    return InMemoryPageStore()


@pytest.fixture
def trace_collector(tmp_path):
    return JSONLTraceCollector(trace_dir=str(tmp_path / "traces"))


@pytest.fixture(autouse=True)
def _fresh_default_bridge():
    reset_bridge()
    yield
    reset_bridge()
