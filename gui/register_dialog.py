# gui/register_dialog.py
from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtWidgets import QDialog, QFrame, QLabel, QLineEdit, QPushButton, QVBoxLayout

from gui.forms import RegisterController, confirm_validity
from gui.style import add_drop_shadow, repolish
from gui.toast import ToastHost

class RegisterDialog(QDialog):
	"""Account creation form; closes (Accepted) after the success toast has been shown."""

	def __init__(self, base_url: str, parent=None):
		super().__init__(parent)
		self.setWindowTitle("CloudFiles — Create account")
		self.setModal(True)
		self.setMinimumWidth(480)
		self.base_url = base_url
		self.username = ""

		card = QFrame(self); card.setObjectName("card")
		title = QLabel("Create an account"); title.setObjectName("title"); title.setAlignment(Qt.AlignCenter)

		self.user_edit = QLineEdit(); self.user_edit.setPlaceholderText("Username (letters, numbers, _)")
		self.pass_edit = QLineEdit(); self.pass_edit.setPlaceholderText("Password"); self.pass_edit.setEchoMode(QLineEdit.Password)
		self.confirm_edit = QLineEdit(); self.confirm_edit.setPlaceholderText("Confirm password"); self.confirm_edit.setEchoMode(QLineEdit.Password)
		for le in (self.user_edit, self.pass_edit, self.confirm_edit):
			le.setFrame(False)
		self.mismatch = QLabel(""); self.mismatch.setObjectName("error")

		self.btn_create = QPushButton("Create account"); self.btn_create.setObjectName("primary"); self.btn_create.setDefault(True)
		self.btn_back = QPushButton("Back to login"); self.btn_back.setObjectName("link")

		form = QVBoxLayout(card); form.setContentsMargins(28, 28, 28, 28); form.setSpacing(10)
		form.addWidget(title); form.addSpacing(6)
		form.addWidget(QLabel("Username")); form.addWidget(self.user_edit)
		form.addWidget(QLabel("Password")); form.addWidget(self.pass_edit)
		form.addWidget(QLabel("Confirm password")); form.addWidget(self.confirm_edit)
		form.addWidget(self.mismatch)
		form.addWidget(self.btn_create)
		form.addWidget(self.btn_back, alignment=Qt.AlignHCenter)

		root = QVBoxLayout(self); root.setContentsMargins(18, 18, 18, 18)
		root.addStretch(1); root.addWidget(card, alignment=Qt.AlignHCenter); root.addStretch(1)
		add_drop_shadow(card, blur=32, dy=10, alpha=90)

		self.toasts = ToastHost(self)
		self.controller = RegisterController(
			self.accept,
			notify=self.toasts.show_toast,
			schedule=QTimer.singleShot,
			on_busy=self._set_busy,
		)

		self.pass_edit.textChanged.connect(self._check_confirm)
		self.confirm_edit.textChanged.connect(self._check_confirm)
		self.confirm_edit.returnPressed.connect(self._create)
		self.btn_create.clicked.connect(self._create)
		self.btn_back.clicked.connect(self.reject)

		self.setStyleSheet("""
			QDialog { background: #0b0f14; }
			#card { background: #12161c; border: 1px solid #1e2430; border-radius: 14px; }
			QLabel#title { color: #e8f0ff; font-size: 17px; font-weight: 700; }
			QLabel { color: #cbd5e1; }
			QLabel#error { color: #ff6b6b; min-height: 16px; }
		""")

	def _check_confirm(self, *_):
		msg = confirm_validity(self.pass_edit.text(), self.confirm_edit.text())
		self.mismatch.setText(msg)
		self.confirm_edit.setProperty("invalid", bool(msg))
		repolish(self.confirm_edit)

	def _set_busy(self, busy: bool):
		for w in (self.btn_create, self.btn_back, self.user_edit, self.pass_edit, self.confirm_edit):
			w.setEnabled(not busy)
		self.btn_create.setText("Creating account…" if busy else "Create account")

	def _create(self):
		if self.controller.busy:
			return
		self.username = self.user_edit.text().strip()
		self.controller.submit(self.base_url, self.user_edit.text(), self.pass_edit.text(), self.confirm_edit.text())
