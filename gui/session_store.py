# gui/session_store.py
from dataclasses import dataclass
from typing import Optional

from PyQt5.QtCore import QSettings

from gui import config

KEY_TOKEN = "authToken"
KEY_USERNAME = "username"
KEY_BASE_URL = "base_url"


@dataclass(frozen=True)
class Session:
    token: str
    username: str


class SessionStore:
    """Persisted login state; a session exists only when both token and username are stored."""

    def __init__(self, settings: Optional[QSettings] = None):
        self.settings = settings if settings is not None else QSettings(config.SETTINGS_ORG, config.SETTINGS_APP)

    def _get(self, key: str) -> str:
        return self.settings.value(key, "", type=str) or ""

    def load(self) -> Optional[Session]:
        token, username = self._get(KEY_TOKEN), self._get(KEY_USERNAME)
        if not token or not username:
            return None
        return Session(token, username)

    def save(self, token: str, username: str):
        self.settings.setValue(KEY_TOKEN, token)
        self.settings.setValue(KEY_USERNAME, username)
        self.settings.sync()

    def clear(self):
        self.settings.remove(KEY_TOKEN)
        self.settings.remove(KEY_USERNAME)
        self.settings.sync()

    @property
    def base_url(self) -> str:
        return self._get(KEY_BASE_URL) or config.DEFAULT_SERVER_URL

    @base_url.setter
    def base_url(self, url: str):
        self.settings.setValue(KEY_BASE_URL, url)
        self.settings.sync()
