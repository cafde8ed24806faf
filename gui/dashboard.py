# gui/dashboard.py
from PyQt5.QtCore import Qt, QSize, QTimer, pyqtSignal
from PyQt5.QtGui import QBrush, QColor
from PyQt5.QtWidgets import (
	QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel, QLineEdit, QFrame, QListWidget,
	QListWidgetItem, QListView, QMenu, QMessageBox, QInputDialog, QFileDialog, QToolButton,
	QStackedLayout, QStyle, QAbstractItemView
)

from gui.api_client import APIClient
from gui.browser_state import ROOT, FileItem
from gui.dashboard_controller import DashboardController
from gui.session_store import SessionStore
from gui.style import SELECTED, repolish
from gui.toast import ToastHost


class Dashboard(QWidget):
	"""
	File browser page:
	  ┌──────────┬──────────────────────────────────────┐
	  │ Sidebar  │  Header (user • Logout)               │
	  │  Home    ├──────────────────────────────────────┤
	  │  folder  │  Toolbar (search • new • upload • …)  │
	  │  folder  │  Breadcrumb                           │
	  │          │  Grid / empty state                   │
	  └──────────┴──────────────────────────────────────┘
	"""
	unauthorized = pyqtSignal()
	loggedOut = pyqtSignal()

	def __init__(self, api: APIClient, store: SessionStore, username: str = "", parent=None):
		super().__init__(parent)
		self.api = api
		self.store = store

		# ---------- Sidebar ----------
		self.sidebar = QFrame(); self.sidebar.setObjectName("Sidebar"); self.sidebar.setFixedWidth(200)
		self.sidebar.setAttribute(Qt.WA_StyledBackground, True)
		side = QVBoxLayout(self.sidebar); side.setContentsMargins(10, 12, 10, 12); side.setSpacing(4)
		brand = QLabel("CloudFiles"); brand.setStyleSheet("font-size:16px; font-weight:700; background:transparent;")
		side.addWidget(brand); side.addSpacing(8)
		self.btn_home = self._sidebar_button("Home")
		self.btn_home.clicked.connect(lambda: self.controller.go_home())
		side.addWidget(self.btn_home)
		self._folder_box = QVBoxLayout(); self._folder_box.setSpacing(2)
		side.addLayout(self._folder_box)
		side.addStretch(1)

		# ---------- Header ----------
		self.user_label = QLabel(username)
		self.user_label.setStyleSheet("font-weight:600;")
		self.btn_logout = QPushButton("Logout")
		self.btn_logout.clicked.connect(lambda: self.controller.logout())
		header = QHBoxLayout(); header.setSpacing(8)
		header.addStretch(1); header.addWidget(self.user_label); header.addWidget(self.btn_logout)

		# ---------- Toolbar ----------
		self.search = QLineEdit(); self.search.setPlaceholderText("Search files…"); self.search.setClearButtonEnabled(True)
		self.search.textChanged.connect(lambda t: self.controller.search(t))
		self.btn_new = QPushButton("New Folder")
		self.btn_upload = QPushButton("Upload"); self.btn_upload.setObjectName("primary")
		self.btn_download = QPushButton("Download")
		self.btn_delete = QPushButton("Delete"); self.btn_delete.setObjectName("destructive")
		self.btn_new.clicked.connect(lambda: self.controller.create_folder())
		self.btn_upload.clicked.connect(self._upload)
		self.btn_download.clicked.connect(self._download)
		self.btn_delete.clicked.connect(lambda: self.controller.delete_selected())
		for b in (self.btn_new, self.btn_upload, self.btn_download, self.btn_delete, self.btn_logout, self.btn_home):
			b.setCursor(Qt.PointingHandCursor)

		toolbar = QHBoxLayout(); toolbar.setSpacing(8)
		toolbar.addWidget(self.search, 1)
		for b in (self.btn_new, self.btn_upload, self.btn_download, self.btn_delete):
			toolbar.addWidget(b)

		# ---------- Breadcrumb ----------
		self._crumbs = QHBoxLayout(); self._crumbs.setSpacing(2)
		crumb_row = QWidget(); crumb_row.setLayout(self._crumbs)

		# ---------- Grid / empty state ----------
		self.grid = QListWidget(); self.grid.setObjectName("FileGrid")
		self.grid.setViewMode(QListView.IconMode)
		self.grid.setResizeMode(QListView.Adjust)
		self.grid.setMovement(QListView.Static)
		self.grid.setWrapping(True)
		self.grid.setSpacing(10)
		self.grid.setIconSize(QSize(48, 48))
		self.grid.setGridSize(QSize(132, 112))
		self.grid.setWordWrap(True)
		# Selection lives in BrowserState; Qt's own selection is unused.
		self.grid.setSelectionMode(QAbstractItemView.NoSelection)
		self.grid.setContextMenuPolicy(Qt.CustomContextMenu)
		self.grid.customContextMenuRequested.connect(self._on_context_menu)
		self.grid.itemClicked.connect(self._on_item_clicked)
		self.grid.itemDoubleClicked.connect(self._on_item_double_clicked)

		self.empty = QLabel("No files found"); self.empty.setObjectName("EmptyState"); self.empty.setAlignment(Qt.AlignCenter)
		self._stack = QStackedLayout()
		self._stack.addWidget(self.grid); self._stack.addWidget(self.empty)

		# ---------- Layout ----------
		main = QVBoxLayout(); main.setContentsMargins(16, 12, 16, 16); main.setSpacing(10)
		main.addLayout(header); main.addLayout(toolbar); main.addWidget(crumb_row); main.addLayout(self._stack, 1)

		root = QHBoxLayout(self); root.setContentsMargins(0, 0, 0, 0); root.setSpacing(0)
		root.addWidget(self.sidebar); root.addLayout(main, 1)

		self.toasts = ToastHost(self)
		self.controller = DashboardController(
			api, store,
			notify=self.toasts.show_toast,
			confirm=self._confirm,
			prompt=self._prompt,
			schedule=QTimer.singleShot,
			on_unauthorized=self.unauthorized.emit,
			on_logged_out=self.loggedOut.emit,
		)
		self.controller.add_listener(self.render)
		self.render()

	# ---------- UI hooks ----------
	def _confirm(self, message: str) -> bool:
		return QMessageBox.question(self, "Confirm", message, QMessageBox.Yes | QMessageBox.No, QMessageBox.No) == QMessageBox.Yes

	def _prompt(self, label: str, default: str = ""):
		text, ok = QInputDialog.getText(self, "CloudFiles", label, QLineEdit.Normal, default)
		return text.strip() if ok else None

	def _sidebar_button(self, text: str) -> QPushButton:
		b = QPushButton(text); b.setProperty("sidebar", True); b.setCursor(Qt.PointingHandCursor)
		return b

	# ---------- rendering ----------
	def render(self):
		st = self.controller.state
		self._render_sidebar(st)
		self._render_breadcrumb(st)
		self._render_grid(st)
		n = st.selection_count
		self.btn_download.setText(f"Download ({n})" if n else "Download")
		self.btn_delete.setText(f"Delete ({n})" if n else "Delete")
		self.btn_download.setEnabled(st.actions_enabled)
		self.btn_delete.setEnabled(st.actions_enabled)

	def _render_sidebar(self, st):
		while self._folder_box.count():
			w = self._folder_box.takeAt(0).widget()
			if w is not None:
				w.deleteLater()
		self.btn_home.setProperty("active", st.at_root); repolish(self.btn_home)
		for name in st.sidebar_folders():
			b = self._sidebar_button(name)
			b.setIcon(self.style().standardIcon(QStyle.SP_DirIcon))
			b.setProperty("active", st.current_path == name)
			b.clicked.connect(lambda _=False, n=name: self.controller.navigate(n))
			self._folder_box.addWidget(b)

	def _render_breadcrumb(self, st):
		while self._crumbs.count():
			w = self._crumbs.takeAt(0).widget()
			if w is not None:
				w.deleteLater()
		parts = st.breadcrumb()
		for i, label in enumerate(parts):
			if i:
				sep = QLabel("/"); sep.setObjectName("CrumbSep"); self._crumbs.addWidget(sep)
			b = QToolButton(); b.setText(label); b.setProperty("crumb", True); b.setCursor(Qt.PointingHandCursor)
			target = ROOT if i == 0 else label
			b.clicked.connect(lambda _=False, t=target: self.controller.navigate(t))
			self._crumbs.addWidget(b)
		self._crumbs.addStretch(1)

	def _render_grid(self, st):
		self.grid.clear()
		items = st.visible_items()
		folder_icon = self.style().standardIcon(QStyle.SP_DirIcon)
		file_icon = self.style().standardIcon(QStyle.SP_FileIcon)
		for it in items:
			text = f"{it.name}\n{it.meta}" if it.meta else it.name
			w = QListWidgetItem(folder_icon if it.is_folder else file_icon, text)
			w.setData(Qt.UserRole, it)
			w.setToolTip(it.name)
			w.setTextAlignment(Qt.AlignHCenter | Qt.AlignTop)
			if st.is_selected(it.name):
				w.setBackground(QBrush(QColor(SELECTED)))
			self.grid.addItem(w)
		self._stack.setCurrentWidget(self.grid if items else self.empty)

	# ---------- input ----------
	def _item_at(self, w: QListWidgetItem) -> FileItem:
		return w.data(Qt.UserRole)

	def _on_item_clicked(self, w: QListWidgetItem):
		item = self._item_at(w)
		if item is not None:
			self.controller.toggle_select(item.name)

	def _on_item_double_clicked(self, w: QListWidgetItem):
		item = self._item_at(w)
		if item is not None:
			self.controller.open_item(item)

	def _on_context_menu(self, pos):
		w = self.grid.itemAt(pos)
		if w is None:
			return
		item = self._item_at(w)
		gpos = self.grid.viewport().mapToGlobal(pos)
		self.controller.menu.open(item, gpos.x(), gpos.y())

		m = QMenu(self)
		actions = {}
		for action, label in self.controller.menu.entries():
			actions[m.addAction(label)] = action
		chosen = m.exec_(gpos)
		if chosen is None:
			self.controller.menu.close()
			return
		self.controller.menu_action(actions[chosen])

	def _upload(self):
		files, _ = QFileDialog.getOpenFileNames(self, "Upload File(s)")
		if files:
			self.controller.upload(files)

	def _download(self):
		if not self.controller.state.selected:
			self.controller.download_selected(None)
			return
		dest_dir = QFileDialog.getExistingDirectory(self, "Download To…")
		if dest_dir:
			self.controller.download_selected(dest_dir)
