# gui/logutil.py
import logging, logging.handlers, os, tempfile

_LOGGER_NAME = "gui"  # package logger all client modules inherit from

def _make_handler() -> logging.Handler:
	try_paths = []
	try:
		try_paths.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), "gui_client.log"))
	except NameError:
		pass
	try_paths.append(os.path.join(os.getcwd(), "gui_client.log"))
	try_paths.append(os.path.join(tempfile.gettempdir(), "gui_client.log"))
	for p in try_paths:
		try:
			return logging.handlers.RotatingFileHandler(p, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
		except OSError:
			continue
	return logging.StreamHandler()

def get_logger(name: str | None = None) -> logging.Logger:
	"""Return the shared 'gui' logger (configured once) or a child of it."""
	base = logging.getLogger(_LOGGER_NAME)
	if not base.handlers:
		h = _make_handler()
		h.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
		base.addHandler(h)
		base.setLevel(os.getenv("CLOUDFILES_LOG_LEVEL", "DEBUG"))
		base.propagate = False
	return base if not name else logging.getLogger(f"{_LOGGER_NAME}.{name}")

def redact(token: str | None, show: int = 4) -> str:
	if not token:
		return ""
	return token[:show] + "…" if len(token) > show else "*" * len(token)
