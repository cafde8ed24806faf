# Tests for the file-browser view-model.

from gui.browser_state import HOME_LABEL, ROOT, BrowserState, FileItem


def _listing():
    return [
        {"id": "Docs", "name": "Docs", "type": "folder", "modified": "2024-01-01"},
        {"id": "Photos", "name": "Photos", "type": "folder", "modified": "2024-01-02"},
        {"id": "report.pdf", "name": "report.pdf", "type": "file", "size": "1.5 KB", "modified": "2024-01-03"},
        {"id": "notes.txt", "name": "notes.txt", "type": "file", "size": "12 B", "modified": "2024-01-04"},
    ]


class TestFileItem:
    def test_from_dict_defaults_id_to_name(self):
        item = FileItem.from_dict({"name": "a.txt", "type": "file"})
        assert item.id == "a.txt"
        assert not item.is_folder

    def test_unknown_type_is_a_file(self):
        assert FileItem.from_dict({"name": "x", "type": "symlink"}).type == "file"

    def test_meta_prefers_size(self):
        assert FileItem.from_dict(_listing()[2]).meta == "1.5 KB"
        assert FileItem.from_dict(_listing()[0]).meta == "2024-01-01"


class TestNavigation:
    def test_starts_at_root(self):
        st = BrowserState()
        assert st.current_path == ROOT
        assert st.path_param == ""
        assert st.breadcrumb() == [HOME_LABEL]

    def test_navigate_clears_selection(self):
        st = BrowserState()
        st.load_listing(_listing())
        st.toggle_select("report.pdf")
        st.navigate("Docs")
        assert st.current_path == "Docs"
        assert st.path_param == "Docs"
        assert st.selected == set()
        assert st.breadcrumb() == [HOME_LABEL, "Docs"]

    def test_navigate_none_goes_home(self):
        st = BrowserState(current_path="Docs")
        st.navigate(None)
        assert st.at_root

    def test_only_root_folders_open(self):
        st = BrowserState()
        st.load_listing(_listing())
        docs, report = st.items[0], st.items[2]
        assert st.can_open(docs)
        assert not st.can_open(report)
        st.navigate("Docs")
        assert not st.can_open(docs)


class TestSelection:
    def test_toggle_is_an_involution(self):
        st = BrowserState()
        assert st.toggle_select("a") is True
        assert st.toggle_select("a") is False
        assert st.selected == set()

    def test_counts_drive_actions(self):
        st = BrowserState()
        assert not st.actions_enabled
        st.toggle_select("a"); st.toggle_select("b")
        assert st.selection_count == 2
        assert st.actions_enabled

    def test_listing_prunes_stale_selection(self):
        st = BrowserState(selected={"report.pdf", "gone.bin"})
        st.load_listing(_listing())
        assert st.selected == {"report.pdf"}


class TestListing:
    def test_root_listing_replaces_sidebar_folders(self):
        st = BrowserState(known_folders={"Old"})
        st.load_listing(_listing())
        assert st.sidebar_folders() == ["Docs", "Photos"]

    def test_folder_listing_adds_current_folder(self):
        st = BrowserState()
        st.load_listing(_listing())
        st.navigate("Music")
        st.load_listing([])
        assert st.sidebar_folders() == ["Docs", "Music", "Photos"]

    def test_search_is_case_insensitive_substring(self):
        st = BrowserState()
        st.load_listing(_listing())
        st.set_search("REP")
        assert [i.name for i in st.visible_items()] == ["report.pdf"]
        st.set_search("")
        assert len(st.visible_items()) == 4

    def test_search_with_no_match_is_empty(self):
        st = BrowserState()
        st.load_listing(_listing())
        st.set_search("zzz")
        assert st.visible_items() == []

    def test_search_is_idempotent(self):
        st = BrowserState()
        st.load_listing(_listing())
        before = list(st.items)
        st.set_search("rep")
        first = st.visible_items()
        st.set_search("rep")
        assert st.visible_items() == first
        assert st.visible_items() == first
        assert st.items == before
