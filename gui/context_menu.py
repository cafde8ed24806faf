# gui/context_menu.py
from typing import Optional

from gui.browser_state import BrowserState, FileItem

SELECT = "select"
RENAME = "rename"
DELETE = "delete"


class ContextMenuController:
    """
    The single shared item popup. Holds at most one bound item; opening for
    another item replaces the binding, closing drops it.
    """

    def __init__(self, state: BrowserState):
        self.state = state
        self.current: Optional[FileItem] = None
        self.pos = (0, 0)

    @property
    def is_open(self) -> bool:
        return self.current is not None

    def open(self, item: FileItem, x: int = 0, y: int = 0) -> None:
        self.current = item
        self.pos = (x, y)

    def close(self) -> None:
        self.current = None

    def select_label(self) -> str:
        if self.current and self.state.is_selected(self.current.name):
            return "Deselect"
        return "Select"

    def entries(self) -> list:
        """(action, label) pairs in menu order."""
        return [(SELECT, self.select_label()), (RENAME, "Rename"), (DELETE, "Delete")]
