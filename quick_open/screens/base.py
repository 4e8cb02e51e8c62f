"""Base screen classes for Quick Open."""

from typing import Generic, TypeVar

from textual.screen import ModalScreen

# Type variable for modal return types
ModalResultType = TypeVar("ModalResultType", covariant=True)


class QuickOpenModalScreen(ModalScreen[ModalResultType], Generic[ModalResultType]):
    """Base modal screen with finder styling.

    Provides:
    - Automatic focus trapping
    - Escape to dismiss

    Subclasses should add the finder-overlay class and compose a
    Vertical#dialog holding a finder-title and a finder-hint.
    """

    BINDINGS = [
        ("escape", "dismiss_modal", "Cancel"),
    ]

    def on_mount(self) -> None:
        """Set up modal on mount - subclasses should call super()."""
        self.trap_focus = True

    def action_dismiss_modal(self) -> None:
        """Dismiss with None result."""
        self.dismiss(None)
