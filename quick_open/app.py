"""Quick Open: fuzzy finder for files, file contents, open buffers and commands.

Main Textual application. Opens the finder in the requested mode, and on
selection prints the result (path, path:line or command id) and exits.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from quick_open.models.search import SearchMode, Selection
from quick_open.screens.finder import FinderScreen, TextualScheduler
from quick_open.services.config import ConfigManager
from quick_open.services.debounce import Scheduler
from quick_open.services.events import EventBus
from quick_open.services.mode_registry import ModeRegistry
from quick_open.services.orchestrator import SearchOrchestrator
from quick_open.styles import BASE_CSS


@dataclass
class Services:
    """Application service container for dependency injection."""

    config: ConfigManager
    bus: EventBus
    registry: ModeRegistry
    orchestrator: SearchOrchestrator

    @classmethod
    def create(
        cls,
        scheduler: Scheduler | None = None,
        open_files: list[Path] | None = None,
        config: ConfigManager | None = None,
    ) -> "Services":
        """Wire up all services with proper dependencies.

        Args:
            scheduler: Where debounced searches run
            open_files: Buffers available to buffer mode
            config: Config manager (default location if not provided)

        Returns:
            Services container with all dependencies injected
        """
        config = config or ConfigManager()
        bus = EventBus.get()
        registry = ModeRegistry(open_files=open_files or [])
        orchestrator = SearchOrchestrator(
            registry=registry,
            settings=config.settings,
            scheduler=scheduler,
            bus=bus,
        )
        return cls(config=config, bus=bus, registry=registry, orchestrator=orchestrator)


class QuickOpenApp(App):
    """Standalone host for the finder."""

    TITLE = "Quick Open"
    CSS = BASE_CSS + """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        root: Path | None = None,
        mode: SearchMode = SearchMode.FILE,
        open_files: list[Path] | None = None,
        services: Services | None = None,
        **kwargs,
    ):
        """Initialize the app.

        Args:
            root: Directory for file and content modes (defaults to cwd)
            mode: Mode the finder opens in
            open_files: Buffers for buffer mode
            services: Service container (created if not provided)
            **kwargs: Additional Textual app arguments
        """
        super().__init__(**kwargs)
        self.search_root = root or Path.cwd()
        self.initial_mode = mode
        self.buffer_paths = open_files or []
        self.services = services or Services.create(
            scheduler=TextualScheduler(self),
            open_files=self.buffer_paths,
        )

    @property
    def orchestrator(self) -> SearchOrchestrator:
        return self.services.orchestrator

    def on_mount(self) -> None:
        """Show the finder in the requested mode."""
        if self.initial_mode == SearchMode.FILE:
            self.orchestrator.show_file_search(self.search_root)
        elif self.initial_mode == SearchMode.CONTENT:
            self.orchestrator.show_content_search(self.search_root)
        elif self.initial_mode == SearchMode.BUFFER:
            self.orchestrator.show_buffer_search(self.buffer_paths)
        else:
            self.orchestrator.show_command_search()

        self.push_screen(FinderScreen(self.orchestrator, self.services.bus), self._on_finder_closed)

    def _on_finder_closed(self, selection: Selection | None) -> None:
        self.exit(selection)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="quick-open", description=__doc__.splitlines()[0])
    parser.add_argument("root", nargs="?", type=Path, default=None, help="directory to search")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in SearchMode],
        default=SearchMode.FILE.value,
        help="what to search",
    )
    parser.add_argument(
        "--open",
        dest="open_files",
        nargs="*",
        type=Path,
        default=[],
        metavar="PATH",
        help="open buffers for buffer mode",
    )
    parser.add_argument("--debug", action="store_true", help="log to quick-open.log")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the finder and print the selection."""
    args = parse_args(argv)
    if args.debug:
        logging.basicConfig(filename="quick-open.log", level=logging.DEBUG)

    app = QuickOpenApp(
        root=args.root,
        mode=SearchMode(args.mode),
        open_files=args.open_files,
    )
    selection = app.run()
    if selection is None:
        return 1

    print(selection.describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
