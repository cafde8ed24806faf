# gui/login_dialog.py
from PyQt5.QtCore import Qt, QTimer, QSize
from PyQt5.QtWidgets import (
	QDialog, QLabel, QLineEdit, QPushButton, QHBoxLayout, QVBoxLayout,
	QFrame, QToolButton
)
import re

from gui.api_client import APIClient
from gui.forms import LoginController
from gui.register_dialog import RegisterDialog
from gui.session_store import SessionStore
from gui.style import add_drop_shadow
from gui.toast import ToastHost

def _normalize_base_url(s: str) -> str:
	s = (s or "").strip()
	s = re.sub(r"^[a-zA-Z]://", "", s)
	if not re.match(r"^https?://", s, re.I):
		s = "http://" + s
	return s.rstrip("/")

class LoginDialog(QDialog):
	def __init__(self, store: SessionStore, parent=None):
		super().__init__(parent)
		self.setWindowTitle("CloudFiles — Login")
		self.setModal(True)
		self.setMinimumWidth(520)

		self.store = store
		self.api_client: APIClient | None = None

		self._apply_style()

		# ---------- Card ----------
		card = QFrame(self); card.setObjectName("card"); card.setFrameShape(QFrame.NoFrame)

		title = QLabel("CLOUDFILES"); subtitle = QLabel("Sign in to your storage")
		title.setObjectName("title"); subtitle.setObjectName("subtitle")
		title.setAlignment(Qt.AlignCenter); subtitle.setAlignment(Qt.AlignCenter)

		# Fields
		self.url_edit  = QLineEdit(store.base_url)
		self.url_edit.setPlaceholderText("Server URL (e.g., http://127.0.0.1:8080)")
		self.user_edit = QLineEdit(); self.user_edit.setPlaceholderText("Username")
		self.pass_edit = QLineEdit(); self.pass_edit.setPlaceholderText("Password"); self.pass_edit.setEchoMode(QLineEdit.Password)
		for le in (self.url_edit, self.user_edit, self.pass_edit):
			le.setFrame(False)

		# Eye button
		self._eye = QToolButton(self.pass_edit); self._eye.setCursor(Qt.PointingHandCursor); self._eye.setCheckable(True)
		self._eye.setIcon(self.style().standardIcon(self.style().SP_DialogYesButton))
		self._eye.setIconSize(QSize(16, 16)); self._eye.setStyleSheet("QToolButton { border: 0; padding: 0 6px; }")
		self._eye.setFixedSize(18, 18); QTimer.singleShot(0, self._position_eye_button); self._eye.toggled.connect(self._toggle_password)

		# Buttons
		self.btn_login = QPushButton("Login"); self.btn_login.setDefault(True)
		self.btn_login.setObjectName("primary")
		self.btn_register = QPushButton("Don't have an account? Register"); self.btn_register.setObjectName("link")
		self.btn_register.setCursor(Qt.PointingHandCursor)
		self.status = QLabel(""); self.status.setObjectName("status"); self.status.setAlignment(Qt.AlignCenter)

		# Layouts
		form = QVBoxLayout(card); form.setContentsMargins(28, 28, 28, 28); form.setSpacing(12)
		form.addWidget(title); form.addWidget(subtitle); form.addSpacing(8)
		form.addWidget(QLabel("Server URL")); form.addWidget(self.url_edit)
		form.addWidget(QLabel("Username"));   form.addWidget(self.user_edit)
		form.addWidget(QLabel("Password"));   form.addWidget(self.pass_edit)
		form.addWidget(self.status)
		form.addWidget(self.btn_login)
		form.addWidget(self.btn_register, alignment=Qt.AlignHCenter)

		root = QVBoxLayout(self); root.setContentsMargins(18, 18, 18, 18)
		root.addStretch(1); root.addWidget(card, alignment=Qt.AlignHCenter); root.addStretch(1)

		self.toasts = ToastHost(self)
		self.controller = LoginController(
			store, self._on_logged_in,
			notify=self.toasts.show_toast,
			schedule=QTimer.singleShot,
			on_busy=self._set_busy,
		)

		# Wire up
		self.btn_login.clicked.connect(self._login)
		self.btn_register.clicked.connect(self._open_register)
		self.pass_edit.returnPressed.connect(self._login)
		self.user_edit.returnPressed.connect(self._login)
		self.url_edit.returnPressed.connect(self._login)

		add_drop_shadow(card, blur=32, dy=10, alpha=90)
		add_drop_shadow(self.btn_login, blur=20, dy=4, alpha=110)

	# keep eye in place on resize
	def resizeEvent(self, e):
		super().resizeEvent(e); self._position_eye_button()

	def _position_eye_button(self):
		m = 6; r = self.pass_edit.rect()
		x = r.right() - self._eye.width() - m; y = r.center().y() - self._eye.height() // 2
		self._eye.move(x, y); self.pass_edit.setStyleSheet("QLineEdit { padding-right: 28px; }")

	def _toggle_password(self, on: bool):
		self.pass_edit.setEchoMode(QLineEdit.Normal if on else QLineEdit.Password)

	# -------------------- Login --------------------
	def _set_busy(self, busy: bool):
		# Stays disabled after success until the redirect fires.
		for w in (self.btn_login, self.btn_register, self.url_edit, self.user_edit, self.pass_edit):
			w.setEnabled(not busy)
		self.btn_login.setText("Logging in…" if busy else "Login")
		self.status.setText("Authenticating…" if busy else "")

	def _login(self):
		if self.controller.busy:
			return
		self.controller.submit(_normalize_base_url(self.url_edit.text()), self.user_edit.text(), self.pass_edit.text())

	def _on_logged_in(self, client: APIClient):
		self.api_client = client
		self.accept()

	# -------------------- Register --------------------
	def _open_register(self):
		dlg = RegisterDialog(_normalize_base_url(self.url_edit.text()), self)
		if dlg.exec_() == RegisterDialog.Accepted and dlg.username:
			self.user_edit.setText(dlg.username)
			self.pass_edit.setFocus()

	# -------------------- Style --------------------
	def _apply_style(self):
		self.setStyleSheet("""
			QDialog { background: #0b0f14; }
			#card { background: #12161c; border: 1px solid #1e2430; border-radius: 14px; }
			QLabel#title { color: #e8f0ff; font-size: 18px; font-weight: 700; margin-top: 4px; }
			QLabel#subtitle { color: #98a2b3; font-size: 12px; margin-bottom: 4px; }
			QLabel { color: #cbd5e1; }
			QLabel#status { color: #9fb5cc; min-height: 16px; }
		""")
