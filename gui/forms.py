# gui/forms.py
"""Login / registration validation and submit controllers (no Qt imports)."""
import re
from typing import Callable, Optional, Tuple

import requests

from gui import config
from gui.api_client import APIClient, APIError
from gui.logutil import get_logger
from gui.session_store import SessionStore

log = get_logger("forms")

USERNAME_RE = re.compile(r"[A-Za-z0-9_]+")
MIN_USERNAME_LEN = 3
MIN_PASSWORD_LEN = 3
RESERVED_USERNAME = "admin"
MISMATCH_MESSAGE = "Passwords do not match"

LOGIN_401_MESSAGE = "Invalid username or password. If you don't have an account, please register."
LOGIN_GENERIC_MESSAGE = "Invalid credentials. Please check your username and password."
REGISTER_GENERIC_MESSAGE = "Failed to create account. Please try again."
REGISTER_400_MESSAGE = "Invalid username or password. Please check your input."


class ValidationError(Exception):
	def __init__(self, title: str, message: str):
		super().__init__(message)
		self.title = title
		self.message = message


def validate_login(username: str, password: str) -> Tuple[str, str]:
	username = (username or "").strip()
	password = (password or "").strip()
	if not username or not password:
		raise ValidationError("Validation Error", "Please fill in all fields")
	return username, password


def validate_registration(username: str, password: str, confirm: str) -> Tuple[str, str]:
	username = (username or "").strip()
	password = (password or "").strip()
	confirm = (confirm or "").strip()
	if not username or not password or not confirm:
		raise ValidationError("Validation Error", "Please fill in all fields")
	if not USERNAME_RE.fullmatch(username):
		raise ValidationError("Invalid Username", "Username can only contain letters, numbers, and underscores")
	if len(username) < MIN_USERNAME_LEN:
		raise ValidationError("Invalid Username", f"Username must be at least {MIN_USERNAME_LEN} characters long")
	if username.lower() == RESERVED_USERNAME:
		raise ValidationError("Invalid Username", f'The username "{RESERVED_USERNAME}" is reserved')
	if len(password) < MIN_PASSWORD_LEN:
		raise ValidationError("Invalid Password", f"Password must be at least {MIN_PASSWORD_LEN} characters long")
	if password != confirm:
		raise ValidationError("Password Mismatch", MISMATCH_MESSAGE)
	return username, password


def confirm_validity(password: str, confirm: str) -> str:
	"""Live message for the confirmation field; '' means valid (or not yet comparable)."""
	if password and confirm and password != confirm:
		return MISMATCH_MESSAGE
	return ""


Notify = Callable[..., None]
Schedule = Callable[[int, Callable[[], None]], None]


class _FormController:
	def __init__(self, notify: Notify, schedule: Schedule,
				 on_busy: Optional[Callable[[bool], None]] = None,
				 client_factory: Callable[[str], APIClient] = APIClient):
		self.notify = notify
		self.schedule = schedule
		self.on_busy = on_busy or (lambda busy: None)
		self.client_factory = client_factory
		self.busy = False

	def _set_busy(self, busy: bool):
		self.busy = busy
		self.on_busy(busy)


class LoginController(_FormController):
	def __init__(self, store: SessionStore, on_success: Callable[[APIClient], None], **kw):
		super().__init__(**kw)
		self.store = store
		self.on_success = on_success

	def submit(self, base_url: str, username: str, password: str) -> bool:
		try:
			username, password = validate_login(username, password)
		except ValidationError as e:
			self.notify(e.title, e.message, destructive=True)
			return False

		self._set_busy(True)
		client = self.client_factory(base_url)
		try:
			token = client.login(username, password)
		except APIError as e:
			log.info("login rejected user=%s status=%s", username, e.status)
			msg = LOGIN_401_MESSAGE if e.status == 401 else LOGIN_GENERIC_MESSAGE
			self.notify("Login Failed", msg, destructive=True)
			self._set_busy(False)
			return False
		except requests.RequestException as e:
			log.warning("login transport error: %r", e)
			self.notify("Login Failed", "Invalid credentials. Please try again.", destructive=True)
			self._set_busy(False)
			return False

		self.store.save(token, username)
		self.store.base_url = client.base_url
		self.notify("Login Successful", "Welcome back!")
		self.schedule(config.LOGIN_REDIRECT_MS, lambda: self.on_success(client))
		return True


class RegisterController(_FormController):
	def __init__(self, on_success: Callable[[], None], **kw):
		super().__init__(**kw)
		self.on_success = on_success

	def submit(self, base_url: str, username: str, password: str, confirm: str) -> bool:
		try:
			username, password = validate_registration(username, password, confirm)
		except ValidationError as e:
			self.notify(e.title, e.message, destructive=True)
			return False

		self._set_busy(True)
		try:
			self.client_factory(base_url).register(username, password)
		except APIError as e:
			if e.message:
				msg = e.message
			elif e.status == 400:
				msg = REGISTER_400_MESSAGE
			else:
				msg = REGISTER_GENERIC_MESSAGE
			self.notify("Registration Failed", msg, destructive=True)
			self._set_busy(False)
			return False
		except (requests.RequestException, ValueError) as e:
			log.warning("register transport error: %r", e)
			self.notify("Registration Failed", REGISTER_GENERIC_MESSAGE, destructive=True)
			self._set_busy(False)
			return False

		log.info("account created user=%s", username)
		self.notify("Account Created", "Your account has been created successfully!")
		self.schedule(config.REGISTER_REDIRECT_MS, self.on_success)
		return True
