# Tests for dashboard actions: listing, navigation, mutations, menu and logout.

from unittest.mock import MagicMock, patch

import pytest
import requests

from gui import config
from gui.api_client import APIClient, APIError, Unauthorized
from gui.browser_state import ROOT, FileItem
from gui.context_menu import DELETE, RENAME, SELECT
from gui.dashboard_controller import DashboardController

LISTING = [
    {"id": "Docs", "name": "Docs", "type": "folder", "modified": "2024-01-01"},
    {"id": "report.pdf", "name": "report.pdf", "type": "file", "size": "1.5 KB", "modified": "2024-01-03"},
]


class Hooks:
    def __init__(self, confirm=True, prompt=None):
        self.confirm_answer = confirm
        self.prompt_answer = prompt
        self.confirmed = []
        self.prompted = []
        self.unauthorized = 0
        self.logged_out = 0

    def confirm(self, message):
        self.confirmed.append(message)
        return self.confirm_answer

    def prompt(self, label, default=""):
        self.prompted.append((label, default))
        return self.prompt_answer

    def on_unauthorized(self):
        self.unauthorized += 1

    def on_logged_out(self):
        self.logged_out += 1


@pytest.fixture
def hooks():
    return Hooks()


@pytest.fixture
def api():
    api = MagicMock(spec=APIClient)
    api.list_files.return_value = LISTING
    return api


def make_controller(api, store, ui, hooks):
    return DashboardController(
        api, store,
        notify=ui.notify, confirm=hooks.confirm, prompt=hooks.prompt, schedule=ui.schedule,
        on_unauthorized=hooks.on_unauthorized, on_logged_out=hooks.on_logged_out,
    )


class TestListing:
    def test_load_files_fills_state_and_notifies(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        seen = []
        ctl.add_listener(lambda: seen.append(len(ctl.state.items)))
        assert ctl.load_files() is True
        api.list_files.assert_called_once_with("")
        assert [i.name for i in ctl.state.items] == ["Docs", "report.pdf"]
        assert ctl.state.sidebar_folders() == ["Docs"]
        assert seen[-1] == 2

    def test_open_folder_navigates(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        ctl.load_files()
        api.list_files.return_value = []
        assert ctl.open_item(ctl.state.items[0]) is True
        assert ctl.state.current_path == "Docs"
        api.list_files.assert_called_with("Docs")

    def test_open_file_does_nothing(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        ctl.load_files()
        assert ctl.open_item(ctl.state.items[1]) is False
        assert ctl.state.at_root

    def test_go_home(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        ctl.navigate("Docs")
        ctl.go_home()
        assert ctl.state.current_path == ROOT
        api.list_files.assert_called_with("")

    def test_listing_error_toasts(self, api, store, ui, hooks):
        api.list_files.side_effect = APIError("Docs: not found", 404)
        ctl = make_controller(api, store, ui, hooks)
        assert ctl.load_files() is False
        assert ui.toasts[-1] == ("Error", "Docs: not found", True)

    def test_transport_error_uses_fallback(self, api, store, ui, hooks):
        api.list_files.side_effect = requests.ConnectionError("down")
        ctl = make_controller(api, store, ui, hooks)
        ctl.load_files()
        assert ui.toasts[-1] == ("Error", "Error loading files", True)

    def test_401_returns_to_login(self, api, store, ui, hooks):
        api.list_files.side_effect = Unauthorized()
        ctl = make_controller(api, store, ui, hooks)
        assert ctl.load_files() is False
        assert hooks.unauthorized == 1
        assert ui.toasts == []

    def test_search_filters_without_refetch(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        ctl.load_files()
        ctl.search("rep")
        assert [i.name for i in ctl.state.visible_items()] == ["report.pdf"]
        assert api.list_files.call_count == 1


class TestMutations:
    def test_create_folder(self, api, store, ui):
        hooks = Hooks(prompt="Music")
        ctl = make_controller(api, store, ui, hooks)
        assert ctl.create_folder() is True
        api.create_folder.assert_called_once_with("", "Music")
        assert ui.toasts[-1] == ("Folder Created", 'Folder "Music" created', False)
        assert api.list_files.called

    def test_create_folder_cancelled(self, api, store, ui):
        ctl = make_controller(api, store, ui, Hooks(prompt=None))
        assert ctl.create_folder() is False
        api.create_folder.assert_not_called()

    def test_rename_unchanged_is_noop(self, api, store, ui):
        hooks = Hooks(prompt="report.pdf")
        ctl = make_controller(api, store, ui, hooks)
        item = FileItem(id="report.pdf", name="report.pdf", type="file")
        assert ctl.rename(item) is False
        assert hooks.prompted == [("New name:", "report.pdf")]
        api.rename_item.assert_not_called()

    def test_rename(self, api, store, ui):
        ctl = make_controller(api, store, ui, Hooks(prompt="final.pdf"))
        item = FileItem(id="report.pdf", name="report.pdf", type="file")
        assert ctl.rename(item) is True
        api.rename_item.assert_called_once_with("", "report.pdf", "final.pdf")
        assert ui.toasts[-1] == ("Renamed", "Renamed to final.pdf", False)

    def test_delete_nothing_selected(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        assert ctl.delete_selected() is False
        assert ui.toasts[-1] == ("No Selection", "Please select files to delete", True)
        assert hooks.confirmed == []

    def test_delete_declined(self, api, store, ui):
        hooks = Hooks(confirm=False)
        ctl = make_controller(api, store, ui, hooks)
        ctl.toggle_select("report.pdf")
        assert ctl.delete_selected() is False
        assert hooks.confirmed == ["Are you sure you want to delete 1 item(s)?"]
        api.delete_items.assert_not_called()

    def test_delete_selected(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        ctl.load_files()
        ctl.toggle_select("report.pdf")
        api.list_files.return_value = LISTING[:1]
        assert ctl.delete_selected() is True
        api.delete_items.assert_called_once_with("", ["report.pdf"])
        assert ui.toasts[-1] == ("Deleted", "Deleted 1 item(s)", False)
        assert ctl.state.selected == set()

    def test_upload(self, api, store, ui, hooks):
        api.upload_files.return_value = 2
        ctl = make_controller(api, store, ui, hooks)
        assert ctl.upload(["/tmp/a", "/tmp/b"]) is True
        assert ui.toasts[-1] == ("Upload Successful", "2 file(s) uploaded", False)

    def test_upload_nothing(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        assert ctl.upload([]) is False
        api.upload_files.assert_not_called()


class TestDownload:
    def test_requires_selection(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        assert ctl.download_selected("/tmp") == 0
        assert ui.toasts[-1][0] == "No Selection"

    def test_downloads_each_selected(self, api, store, ui, hooks, tmp_path):
        ctl = make_controller(api, store, ui, hooks)
        ctl.toggle_select("a.txt"); ctl.toggle_select("b.txt")
        api.download_file.side_effect = [str(tmp_path / "a.txt"), APIError("b.txt: not found", 404)]
        assert ctl.download_selected(str(tmp_path)) == 1
        assert ("Error", "b.txt: b.txt: not found", True) in ui.toasts

    def test_stops_on_401(self, api, store, ui, hooks, tmp_path):
        ctl = make_controller(api, store, ui, hooks)
        ctl.toggle_select("a.txt"); ctl.toggle_select("b.txt")
        api.download_file.side_effect = Unauthorized()
        assert ctl.download_selected(str(tmp_path)) == 0
        assert api.download_file.call_count == 1
        assert hooks.unauthorized == 1


class TestContextMenuActions:
    def test_select_toggles_and_closes(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        ctl.load_files()
        ctl.menu.open(ctl.state.items[1])
        assert ctl.menu_action(SELECT) is True
        assert ctl.state.is_selected("report.pdf")
        assert not ctl.menu.is_open

    def test_rename_uses_bound_item(self, api, store, ui):
        ctl = make_controller(api, store, ui, Hooks(prompt="x.pdf"))
        ctl.load_files()
        ctl.menu.open(ctl.state.items[1])
        ctl.menu_action(RENAME)
        api.rename_item.assert_called_once_with("", "report.pdf", "x.pdf")
        assert not ctl.menu.is_open

    def test_action_without_binding(self, api, store, ui, hooks):
        ctl = make_controller(api, store, ui, hooks)
        assert ctl.menu_action(DELETE) is False
        api.delete_items.assert_not_called()

    @patch("gui.api_client.requests.request")
    def test_delete_sends_single_name(self, mock_request, store, ui, hooks, respond):
        mock_request.return_value = respond(200, {"success": True, "items": LISTING})
        ctl = make_controller(APIClient("http://srv", "tok"), store, ui, hooks)
        ctl.load_files()
        ctl.menu.open(ctl.state.items[1])
        assert ctl.menu_action(DELETE) is True

        delete_calls = [c for c in mock_request.call_args_list if c.args[0] == "DELETE"]
        assert len(delete_calls) == 1
        assert delete_calls[0].args[1] == "http://srv/api/files"
        assert delete_calls[0].kwargs["json"] == {"path": "", "names": ["report.pdf"]}
        assert hooks.confirmed == ["Are you sure you want to delete 1 item(s)?"]

    @patch("gui.api_client.requests.request")
    def test_server_401_reaches_login_hook(self, mock_request, store, ui, hooks, respond):
        mock_request.return_value = respond(401, {"error": "Not authenticated"})
        ctl = make_controller(APIClient("http://srv", "stale"), store, ui, hooks)
        assert ctl.load_files() is False
        assert hooks.unauthorized == 1


class TestLogout:
    def test_clears_session_and_schedules_redirect(self, api, store, ui, hooks):
        store.save("tok", "bob")
        ctl = make_controller(api, store, ui, hooks)
        ctl.logout()
        api.logout.assert_called_once_with()
        assert store.load() is None
        assert ui.toasts[-1] == ("Logged Out", "You have been successfully logged out", False)
        assert ui.scheduled[0][0] == config.LOGOUT_REDIRECT_MS
        assert hooks.logged_out == 0
        ui.run_scheduled()
        assert hooks.logged_out == 1

    def test_server_unreachable_still_logs_out(self, api, store, ui, hooks):
        store.save("tok", "bob")
        api.logout.side_effect = requests.ConnectionError("down")
        ctl = make_controller(api, store, ui, hooks)
        ctl.logout()
        assert store.load() is None
