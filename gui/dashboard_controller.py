# gui/dashboard_controller.py
"""
Dashboard actions over the BrowserState view-model.

Every action is one API call followed by a toast and (on success) a reload
of the current listing. The Qt view supplies the UI hooks (notify, confirm,
prompt, schedule) and re-renders from `state` whenever `on_changed` fires.
"""
from typing import Callable, Iterable, List, Optional

import requests

from gui import config
from gui.api_client import APIClient, APIError, Unauthorized
from gui.browser_state import ROOT, BrowserState, FileItem
from gui.context_menu import DELETE, RENAME, SELECT, ContextMenuController
from gui.logutil import get_logger
from gui.session_store import SessionStore

log = get_logger("dashboard")


class DashboardController:
	def __init__(self, api: APIClient, store: SessionStore, *,
				 notify: Callable[..., None],
				 confirm: Callable[[str], bool],
				 prompt: Callable[..., Optional[str]],
				 schedule: Callable[[int, Callable[[], None]], None],
				 on_unauthorized: Callable[[], None],
				 on_logged_out: Callable[[], None],
				 state: Optional[BrowserState] = None):
		self.api = api
		self.store = store
		self.state = state or BrowserState()
		self.menu = ContextMenuController(self.state)
		self.notify = notify
		self.confirm = confirm
		self.prompt = prompt
		self.schedule = schedule
		self.on_unauthorized = on_unauthorized
		self.on_logged_out = on_logged_out
		self._listeners: List[Callable[[], None]] = []

	# ---------- change notification ----------
	def add_listener(self, fn: Callable[[], None]):
		self._listeners.append(fn)

	def changed(self):
		for fn in list(self._listeners):
			fn()

	# ---------- shared call pattern ----------
	def _call(self, op: str, fn: Callable[[], object], fallback: str) -> Optional[object]:
		"""
		Run one API call. Returns its result, or None after reporting the
		failure (401 -> on_unauthorized, otherwise a destructive toast).
		"""
		try:
			return fn()
		except Unauthorized:
			log.info("%s: 401, returning to login", op)
			self.on_unauthorized()
		except APIError as e:
			log.warning("%s failed status=%s msg=%s", op, e.status, e.message)
			self.notify("Error", e.message or fallback, destructive=True)
		except (requests.RequestException, OSError, ValueError) as e:
			log.exception("%s transport error: %r", op, e)
			self.notify("Error", fallback, destructive=True)
		return None

	# ---------- listing / navigation ----------
	def load_files(self) -> bool:
		items = self._call("list", lambda: self.api.list_files(self.state.path_param), "Error loading files")
		if items is None:
			return False
		self.state.load_listing(items)
		self.changed()
		return True

	def navigate(self, folder: Optional[str] = ROOT) -> bool:
		log.debug("navigate -> %s", folder or ROOT)
		self.state.navigate(folder)
		self.changed()
		return self.load_files()

	def go_home(self) -> bool:
		return self.navigate(ROOT)

	def open_item(self, item: FileItem) -> bool:
		if not self.state.can_open(item):
			return False
		return self.navigate(item.name)

	def search(self, query: str):
		self.state.set_search(query)
		self.changed()

	# ---------- selection ----------
	def toggle_select(self, name: str) -> bool:
		now = self.state.toggle_select(name)
		self.changed()
		return now

	# ---------- mutations ----------
	def create_folder(self) -> bool:
		folder_name = self.prompt("Folder name:")
		if not folder_name:
			return False
		ok = self._call("mkdir", lambda: self.api.create_folder(self.state.path_param, folder_name),
						"Error creating folder")
		if ok is None:
			return False
		self.notify("Folder Created", f'Folder "{folder_name}" created')
		self.load_files()
		return True

	def rename(self, item: FileItem) -> bool:
		new_name = self.prompt("New name:", item.name)
		if not new_name or new_name == item.name:
			return False
		ok = self._call("rename", lambda: self.api.rename_item(self.state.path_param, item.name, new_name),
						"Error renaming")
		if ok is None:
			return False
		self.notify("Renamed", f"Renamed to {new_name}")
		self.load_files()
		return True

	def delete(self, names: Iterable[str]) -> bool:
		names = list(names)
		if not names:
			self.notify("No Selection", "Please select files to delete", destructive=True)
			return False
		if not self.confirm(f"Are you sure you want to delete {len(names)} item(s)?"):
			return False
		ok = self._call("delete", lambda: self.api.delete_items(self.state.path_param, names), "Error deleting")
		if ok is None:
			return False
		self.notify("Deleted", f"Deleted {len(names)} item(s)")
		self.state.discard_selected(names)
		self.changed()
		self.load_files()
		return True

	def delete_selected(self) -> bool:
		return self.delete(sorted(self.state.selected))

	def upload(self, local_paths: Iterable[str]) -> bool:
		local_paths = list(local_paths)
		if not local_paths:
			return False
		uploaded = self._call("upload", lambda: self.api.upload_files(self.state.path_param, local_paths),
							  "Error uploading files")
		if uploaded is None:
			return False
		self.notify("Upload Successful", f"{uploaded} file(s) uploaded")
		self.load_files()
		return True

	def download_selected(self, dest_dir: Optional[str]) -> int:
		if not self.state.selected:
			self.notify("No Selection", "Please select files to download", destructive=True)
			return 0
		if not dest_dir:
			return 0
		names = sorted(self.state.selected)
		self.notify("Download", f"Downloading {len(names)} item(s)")
		done = 0
		for name in names:
			try:
				self.api.download_file(self.state.path_param, name, dest_dir)
			except Unauthorized:
				self.on_unauthorized()
				break
			except APIError as e:
				self.notify("Error", f"{name}: {e.message}", destructive=True)
				continue
			except (requests.RequestException, OSError) as e:
				log.warning("download %s failed: %r", name, e)
				self.notify("Error", f"{name}: Error downloading", destructive=True)
				continue
			done += 1
		log.info("download finished %d/%d -> %s", done, len(names), dest_dir)
		return done

	# ---------- context menu ----------
	def menu_action(self, action: str) -> bool:
		"""Run a popup action against the bound item, then close the popup."""
		item = self.menu.current
		try:
			if item is None:
				return False
			if action == SELECT:
				self.toggle_select(item.name)
				return True
			if action == RENAME:
				return self.rename(item)
			if action == DELETE:
				return self.delete([item.name])
			return False
		finally:
			self.menu.close()

	# ---------- session ----------
	def logout(self):
		try:
			self.api.logout()
		except requests.RequestException as e:
			log.warning("logout error (ignored): %r", e)
		self.store.clear()
		self.notify("Logged Out", "You have been successfully logged out")
		self.schedule(config.LOGOUT_REDIRECT_MS, self.on_logged_out)
