# gui/main_window.py
from PyQt5.QtWidgets import QMainWindow, QApplication

from gui.api_client import APIClient
from gui.dashboard import Dashboard
from gui.session_store import SessionStore

class MainWindow(QMainWindow):
	def __init__(self, api: APIClient, store: SessionStore, username: str):
		super().__init__()
		self.api = api
		self.setWindowTitle(f"CloudFiles — {username}")
		self.resize(1100, 720)
		self.setWindowIcon(QApplication.windowIcon())

		self.dashboard = Dashboard(api, store, username)
		self.setCentralWidget(self.dashboard)

	def closeEvent(self, e):
		# Quit-on-last-window is off while the login dialog swaps in and out.
		super().closeEvent(e)
		QApplication.quit()
