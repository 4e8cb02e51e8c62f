"""Command registry for command mode.

Centralized editor command definitions: a display label the user searches
and the action id handed back to the host when the command is chosen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from ..models.search import Candidate


class CommandCategory(Enum):
    """Categories for organizing commands."""

    FILE = "file"      # Create, open, save, close
    EDIT = "edit"      # Find, replace, navigation
    VIEW = "view"      # Zoom, folding, panels
    TOOLS = "tools"    # Helper dialogs
    THEME = "theme"    # Color theme switches
    APP = "app"        # Application-level actions


@dataclass
class Command:
    """A command that can be chosen from the finder."""

    id: str                              # Action id reported to the host (e.g., "newFile")
    label: str                           # Display label (e.g., "New File")
    category: CommandCategory = CommandCategory.APP
    keybinding: str | None = None        # Keyboard shortcut (e.g., "ctrl+n")
    description: str | None = None       # Optional longer description
    hidden: bool = False                 # Hide from the finder (for internal commands)


@dataclass
class CommandRegistry:
    """Registry of all available commands, keyed by action id."""

    _commands: dict[str, Command] = field(default_factory=dict)

    def register(self, command: Command) -> None:
        """Register a command, replacing any with the same id."""
        self._commands[command.id] = command

    def register_all(self, commands: list[Command]) -> None:
        """Register multiple commands."""
        for command in commands:
            self.register(command)

    def register_action(
        self,
        label: str,
        action_id: str,
        category: CommandCategory = CommandCategory.APP,
    ) -> Command:
        """Register a host-supplied (display name, action id) pair."""
        command = Command(id=action_id, label=label, category=category)
        self.register(command)
        return command

    def unregister(self, command_id: str) -> bool:
        """Remove a command. Returns False if it wasn't registered."""
        return self._commands.pop(command_id, None) is not None

    def get(self, command_id: str) -> Command | None:
        """Get a command by action id."""
        return self._commands.get(command_id)

    def get_all(self) -> list[Command]:
        """Get all non-hidden commands in case-insensitive label order."""
        visible = [c for c in self._commands.values() if not c.hidden]
        return sorted(visible, key=lambda c: c.label.lower())

    def catalog(self) -> dict[str, str]:
        """Mapping of display label to action id for visible commands."""
        return {c.label: c.id for c in self.get_all()}

    def candidates(self) -> list[Candidate]:
        """Searchable candidates: label is matched, action id is the payload."""
        return [Candidate(text=c.label, payload=c.id, detail=c.keybinding) for c in self.get_all()]

    def __len__(self) -> int:
        return len(self.get_all())

    @classmethod
    def from_catalog(cls, catalog: Mapping[str, str]) -> CommandRegistry:
        """Build a registry from a display name -> action id mapping."""
        registry = cls()
        for label, action_id in catalog.items():
            registry.register_action(label, action_id)
        return registry


def create_default_registry() -> CommandRegistry:
    """Create registry with the built-in editor commands."""
    registry = CommandRegistry()

    # File actions
    registry.register_all([
        Command(
            id="newFile",
            label="New File",
            category=CommandCategory.FILE,
            keybinding="ctrl+n",
            description="Open an empty buffer",
        ),
        Command(
            id="openFile",
            label="Open File",
            category=CommandCategory.FILE,
            keybinding="ctrl+o",
            description="Open a file from disk",
        ),
        Command(
            id="saveFile",
            label="Save File",
            category=CommandCategory.FILE,
            keybinding="ctrl+s",
            description="Save the current buffer",
        ),
        Command(
            id="saveFileAs",
            label="Save As",
            category=CommandCategory.FILE,
            keybinding="ctrl+shift+s",
            description="Save the current buffer under a new name",
        ),
        Command(
            id="closeTab",
            label="Close Tab",
            category=CommandCategory.FILE,
            keybinding="ctrl+w",
            description="Close the current tab",
        ),
    ])

    # Edit actions
    registry.register_all([
        Command(
            id="showFindDialog",
            label="Find",
            category=CommandCategory.EDIT,
            keybinding="ctrl+f",
        ),
        Command(
            id="showReplaceDialog",
            label="Replace",
            category=CommandCategory.EDIT,
            keybinding="ctrl+h",
        ),
        Command(
            id="showGoToLineDialog",
            label="Go to Line",
            category=CommandCategory.EDIT,
            keybinding="ctrl+g",
            description="Jump to a line number in the current buffer",
        ),
    ])

    # View actions
    registry.register_all([
        Command(
            id="toggleViewMode",
            label="Toggle Preview",
            category=CommandCategory.VIEW,
            description="Switch between edit and preview mode",
        ),
        Command(
            id="toggleFileTree",
            label="Toggle File Tree",
            category=CommandCategory.VIEW,
        ),
        Command(
            id="zoomIn",
            label="Zoom In",
            category=CommandCategory.VIEW,
            keybinding="ctrl+plus",
        ),
        Command(
            id="zoomOut",
            label="Zoom Out",
            category=CommandCategory.VIEW,
            keybinding="ctrl+minus",
        ),
        Command(
            id="resetZoom",
            label="Reset Zoom",
            category=CommandCategory.VIEW,
            keybinding="ctrl+0",
        ),
        Command(
            id="foldAll",
            label="Fold All",
            category=CommandCategory.VIEW,
        ),
        Command(
            id="unfoldAll",
            label="Unfold All",
            category=CommandCategory.VIEW,
        ),
        Command(
            id="toggleVimMode",
            label="Toggle VIM Mode",
            category=CommandCategory.VIEW,
            description="Enable or disable modal editing",
        ),
    ])

    # Tool dialogs
    registry.register_all([
        Command(
            id="showRegexHelper",
            label="Regex Helper",
            category=CommandCategory.TOOLS,
        ),
        Command(
            id="showCommandHelper",
            label="Command Helper",
            category=CommandCategory.TOOLS,
        ),
        Command(
            id="showShellChecker",
            label="Shell Checker",
            category=CommandCategory.TOOLS,
            description="Check the current shell script for common mistakes",
        ),
    ])

    # App actions
    registry.register_all([
        Command(
            id="showPreferences",
            label="Preferences",
            category=CommandCategory.APP,
            keybinding="ctrl+comma",
        ),
        Command(
            id="about",
            label="About",
            category=CommandCategory.APP,
        ),
    ])

    # Theme switches
    registry.register_all([
        Command(id="themeDefault", label="Theme: Dark", category=CommandCategory.THEME),
        Command(id="themeLight", label="Theme: Light", category=CommandCategory.THEME),
        Command(id="themeDracula", label="Theme: Dracula", category=CommandCategory.THEME),
        Command(id="themeMonokai", label="Theme: Monokai", category=CommandCategory.THEME),
        Command(id="themeNord", label="Theme: Nord", category=CommandCategory.THEME),
        Command(id="themeOneDark", label="Theme: One Dark", category=CommandCategory.THEME),
        Command(id="themeCyberPunk", label="Theme: CyberPunk", category=CommandCategory.THEME),
        Command(id="themeMatrix", label="Theme: Matrix", category=CommandCategory.THEME),
    ])

    return registry
