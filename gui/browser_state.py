"""
File-browser view-model.

Owns everything the dashboard renders: the current folder, the listing,
the selection and the search filter. It holds no Qt objects.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

ROOT = "root"
HOME_LABEL = "Home"


@dataclass(frozen=True)
class FileItem:
    id: str
    name: str
    type: str
    size: str = ""
    modified: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> "FileItem":
        name = str(d.get("name", ""))
        return cls(
            id=str(d.get("id") or name),
            name=name,
            type="folder" if d.get("type") == "folder" else "file",
            size=str(d.get("size") or ""),
            modified=str(d.get("modified") or ""),
        )

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"

    @property
    def meta(self) -> str:
        """Secondary label: size for files, modified date otherwise."""
        return self.size or self.modified


@dataclass
class BrowserState:
    current_path: str = ROOT
    selected: Set[str] = field(default_factory=set)
    known_folders: Set[str] = field(default_factory=set)
    search_query: str = ""
    items: List[FileItem] = field(default_factory=list)

    # ---------- derived ----------
    @property
    def at_root(self) -> bool:
        return self.current_path == ROOT

    @property
    def path_param(self) -> str:
        """Value sent as `path` to the server: '' for root."""
        return "" if self.at_root else self.current_path

    @property
    def selection_count(self) -> int:
        return len(self.selected)

    @property
    def actions_enabled(self) -> bool:
        return self.selection_count > 0

    def is_selected(self, name: str) -> bool:
        return name in self.selected

    def visible_items(self) -> List[FileItem]:
        q = self.search_query.lower()
        if not q:
            return list(self.items)
        return [i for i in self.items if q in i.name.lower()]

    def breadcrumb(self) -> List[str]:
        return [HOME_LABEL] if self.at_root else [HOME_LABEL, self.current_path]

    def sidebar_folders(self) -> List[str]:
        return sorted(self.known_folders)

    def can_open(self, item: FileItem) -> bool:
        # Single-level namespace: only root folders are navigable.
        return item.is_folder and self.at_root

    # ---------- transitions ----------
    def navigate(self, folder: Optional[str] = ROOT) -> None:
        self.current_path = folder or ROOT
        self.selected.clear()
        self.items = []

    def set_search(self, query: str) -> None:
        self.search_query = query or ""

    def toggle_select(self, name: str) -> bool:
        """Returns True when `name` is now selected."""
        if name in self.selected:
            self.selected.discard(name)
            return False
        self.selected.add(name)
        return True

    def discard_selected(self, names: Iterable[str]) -> None:
        for n in names:
            self.selected.discard(n)

    def load_listing(self, raw_items: Iterable[dict | FileItem]) -> None:
        self.items = [i if isinstance(i, FileItem) else FileItem.from_dict(i) for i in raw_items]
        present = {i.name for i in self.items}
        self.selected &= present
        if self.at_root:
            self.known_folders = {i.name for i in self.items if i.is_folder}
        else:
            self.known_folders.add(self.current_path)
