"""Shared test fixtures for Quick Open."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from quick_open.services.command_registry import CommandRegistry
from quick_open.services.config import ConfigManager, FinderSettings
from quick_open.services.events import EventBus
from quick_open.services.mode_registry import ModeRegistry
from quick_open.services.orchestrator import SearchOrchestrator


class ManualHandle:
    """Timer handle that records cancellation."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler that only fires when the test says so."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire_all(self) -> int:
        """Fire every live handle once. Returns how many fired."""
        fired = 0
        for handle in list(self.live):
            handle.cancelled = True
            handle.callback()
            fired += 1
        return fired


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Create files (and parent dirs) under root."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def bus():
    """Fresh event bus for each test."""
    EventBus.reset()
    yield EventBus.get()
    EventBus.reset()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small source tree with the usual clutter."""
    root = tmp_path / "project"
    write_tree(root, {
        "src/main.rs": "fn main() {\n    println!(\"hi\");\n}\n",
        "src/lib.rs": "pub mod util;\n",
        "README.md": "# Project\n",
        "node_modules/pkg/index.js": "module.exports = 1;\n",
        ".git/config": "[core]\n",
        "build/out.txt": "artifact\n",
        "image.png": "not really a png\n",
    })
    return root


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """Create a ConfigManager with temp directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return ConfigManager(config_dir=config_dir)


@pytest.fixture
def make_orchestrator(bus: EventBus, scheduler: ManualScheduler):
    """Factory for orchestrators wired to the manual scheduler and fresh bus."""

    def _make(
        catalog: dict[str, str] | None = None,
        settings: FinderSettings | None = None,
    ) -> SearchOrchestrator:
        commands = CommandRegistry.from_catalog(catalog) if catalog is not None else None
        return SearchOrchestrator(
            registry=ModeRegistry(commands=commands),
            settings=settings,
            scheduler=scheduler,
            bus=bus,
        )

    return _make
