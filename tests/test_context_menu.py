# Tests for the item context-menu controller.

from gui.browser_state import BrowserState, FileItem
from gui.context_menu import DELETE, RENAME, SELECT, ContextMenuController


def _item(name="report.pdf"):
    return FileItem(id=name, name=name, type="file")


class TestContextMenu:
    def test_open_binds_item_and_position(self):
        menu = ContextMenuController(BrowserState())
        menu.open(_item(), 10, 20)
        assert menu.is_open
        assert menu.current.name == "report.pdf"
        assert menu.pos == (10, 20)

    def test_reopen_replaces_binding(self):
        menu = ContextMenuController(BrowserState())
        menu.open(_item("a"))
        menu.open(_item("b"))
        assert menu.current.name == "b"

    def test_close_drops_binding(self):
        menu = ContextMenuController(BrowserState())
        menu.open(_item())
        menu.close()
        assert not menu.is_open
        assert menu.current is None

    def test_select_label_follows_selection(self):
        st = BrowserState()
        menu = ContextMenuController(st)
        menu.open(_item())
        assert menu.select_label() == "Select"
        st.toggle_select("report.pdf")
        assert menu.select_label() == "Deselect"

    def test_entries_order(self):
        menu = ContextMenuController(BrowserState())
        menu.open(_item())
        assert [a for a, _ in menu.entries()] == [SELECT, RENAME, DELETE]
