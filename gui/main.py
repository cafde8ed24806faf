# gui/main.py

#Normal Imports
import sys, os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
	sys.path.insert(0, PROJECT_ROOT)

#PyQt5 Imports
from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt, QTimer

from gui import config
from gui.api_client import APIClient
from gui.login_dialog import LoginDialog
from gui.logutil import get_logger
from gui.main_window import MainWindow
from gui.session_store import SessionStore
from gui.style import apply_app_style

log = get_logger("app")

class App:
	"""
	Switches between the login dialog and the dashboard window.
	A stored session skips the login; 401 and logout come back to it.
	"""
	def __init__(self, store: SessionStore):
		self.store = store
		self.window: MainWindow | None = None

	def start(self) -> bool:
		session = self.store.load()
		if session is None:
			return self.show_login()
		log.info("resuming session user=%s", session.username)
		self.show_dashboard(APIClient(self.store.base_url, session.token), session.username)
		return True

	def show_login(self) -> bool:
		old, self.window = self.window, None
		if old is not None:
			old.hide()
		dlg = LoginDialog(self.store)
		accepted = dlg.exec_() == LoginDialog.Accepted and dlg.api_client is not None
		if old is not None:
			old.deleteLater()
		if not accepted:
			QApplication.quit()
			return False
		session = self.store.load()
		self.show_dashboard(dlg.api_client, session.username if session else "")
		return True

	def show_dashboard(self, api: APIClient, username: str):
		self.window = MainWindow(api, self.store, username)
		dash = self.window.dashboard
		dash.unauthorized.connect(self._back_to_login)
		dash.loggedOut.connect(self._back_to_login)
		self.window.show()
		dash.controller.go_home()

	def _back_to_login(self):
		if self.window is None or not self.window.isVisible():
			return
		self.window.hide()
		# Leave the signal handler before opening a nested modal loop.
		QTimer.singleShot(0, self.show_login)

def main():
	QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)
	QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)

	app = QApplication(sys.argv)
	app.setApplicationName(config.SETTINGS_APP)
	app.setOrganizationName(config.SETTINGS_ORG)
	apply_app_style(app)
	app.setQuitOnLastWindowClosed(False)

	shell = App(SessionStore())
	if not shell.start():
		return 0
	return app.exec_()

if __name__ == "__main__":
	sys.exit(main())
