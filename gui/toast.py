# gui/toast.py
from PyQt5.QtCore import Qt, QTimer, QPropertyAnimation, QEasingCurve, QEvent, QObject
from PyQt5.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget, QGraphicsOpacityEffect

from gui import config

class Toast(QFrame):
	def __init__(self, title: str, description: str, destructive: bool = False, parent=None):
		super().__init__(parent)
		self.setObjectName("ToastDestructive" if destructive else "Toast")
		self.setAttribute(Qt.WA_StyledBackground, True)
		self.setFixedWidth(320)

		t = QLabel(title, self); t.setObjectName("ToastTitle")
		d = QLabel(description, self); d.setObjectName("ToastBody"); d.setWordWrap(True)
		lay = QVBoxLayout(self); lay.setContentsMargins(14, 10, 14, 10); lay.setSpacing(2)
		lay.addWidget(t); lay.addWidget(d)

		self._fx = QGraphicsOpacityEffect(self); self._fx.setOpacity(1.0)
		self.setGraphicsEffect(self._fx)
		self._anim = None

	def start(self, duration_ms: int = config.TOAST_DURATION_MS):
		QTimer.singleShot(duration_ms, self._fade_out)

	def _fade_out(self):
		self._anim = QPropertyAnimation(self._fx, b"opacity", self)
		self._anim.setDuration(config.TOAST_FADE_MS)
		self._anim.setStartValue(1.0); self._anim.setEndValue(0.0)
		self._anim.setEasingCurve(QEasingCurve.OutCubic)
		self._anim.finished.connect(self.deleteLater)
		self._anim.start()

class ToastHost(QWidget):
	"""Bottom-right stack of transient toasts laid over `parent`."""
	MARGIN = 16

	def __init__(self, parent: QWidget):
		super().__init__(parent)
		self.setAttribute(Qt.WA_TransparentForMouseEvents, True)
		self._lay = QVBoxLayout(self); self._lay.setContentsMargins(0, 0, 0, 0); self._lay.setSpacing(8)
		self._lay.addStretch(1)
		parent.installEventFilter(self)
		self._reposition()

	def eventFilter(self, obj: QObject, ev: QEvent):
		if obj is self.parent() and ev.type() == QEvent.Resize:
			self._reposition()
		return False

	def _reposition(self):
		p = self.parentWidget()
		if p is None:
			return
		w = 320
		self.setGeometry(p.width() - w - self.MARGIN, self.MARGIN, w, max(0, p.height() - 2 * self.MARGIN))
		self.raise_()

	def show_toast(self, title: str, description: str, destructive: bool = False):
		toast = Toast(title, description, destructive, self)
		self._lay.addWidget(toast)
		self._reposition(); self.show()
		toast.start()
		return toast
