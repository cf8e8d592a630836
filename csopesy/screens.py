"""Named process screens and the manager that attaches to them."""

from __future__ import annotations

from datetime import datetime


class ScreenNotFoundError(LookupError):
    """Raised when a screen with the requested name does not exist."""


class ProcessScreen:
    """A screen bound to one process, remembering when it was created."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.current_line = 0
        self.total_lines = 1000
        self.created = datetime.now()

    def render(self, width: int) -> str:
        """Return the screen's header block for a console ``width`` wide."""
        rule = "=" * width
        stamp = self.created.strftime("%m/%d/%Y, %I:%M:%S %p")
        return (
            f"{rule}\n"
            f"Process Screen: {self.name}\n"
            f"Created: {stamp}\n"
            f"{rule}\n\n"
        )


class ScreenManager:
    """Keeps screens by name and tracks which one is attached."""

    def __init__(self) -> None:
        self.screens: dict[str, ProcessScreen] = {}
        self.active: ProcessScreen | None = None

    def create_screen(self, name: str) -> ProcessScreen:
        """Create a screen unless one of that name exists; return it."""
        if name not in self.screens:
            self.screens[name] = ProcessScreen(name)
        return self.screens[name]

    def attach_screen(self, name: str) -> ProcessScreen:
        """Make the named screen active and return it."""
        try:
            screen = self.screens[name]
        except KeyError:
            raise ScreenNotFoundError(f"Screen '{name}' not found!") from None
        self.active = screen
        return screen

    def detach_screen(self) -> None:
        """Leave the active screen, if any."""
        self.active = None

    def screen_exists(self, name: str) -> bool:
        return name in self.screens

    def screen_active(self) -> bool:
        return self.active is not None