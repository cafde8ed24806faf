import logging
logger = logging.getLogger(__name__)

import os, uuid, sqlite3, threading
import re
import time
from datetime import datetime, timezone
from passlib.context import CryptContext

from .exceptions import InvalidUserError, UserExistsError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

USERNAME_RE = re.compile(r"[A-Za-z0-9_]+")
ADMIN_USERNAME = "admin"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id            TEXT   PRIMARY KEY,
    username      TEXT   UNIQUE COLLATE NOCASE,
    password_hash TEXT   NOT NULL,
    created_at    TEXT   NOT NULL
)
"""


class AuthManager:
    """
    SQLite-backed user store with an in-memory read cache, plus the
    revocation list for logged-out tokens.

    One instance per server; connections are opened per thread because
    FastAPI runs sync endpoints in a threadpool.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.write_lock = threading.Lock()
        self.cache_lock = threading.Lock()
        self._thread_local = threading.local()
        self.users_cache: dict[str, dict] = {}
        # jti -> exp (epoch seconds)
        self._revoked: dict[str, float] = {}
        self._revoked_lock = threading.Lock()

    # ---------- connection / cache ----------
    def _get_conn(self) -> sqlite3.Connection:
        """Get or open a thread-local SQLite3 connection."""
        conn = getattr(self._thread_local, "conn", None)
        if conn is None:
            conn = sqlite3.connect(self.db_path, timeout=5, check_same_thread=False)
            # WAL mode allows readers & writers to run in parallel
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute(_SCHEMA)
            conn.commit()
            conn.row_factory = sqlite3.Row
            self._thread_local.conn = conn
        return conn

    def reload_cache(self):
        """Rebuild the in-memory cache from disk. Called at startup and after writes."""
        rows = self._get_conn().execute(
            "SELECT id,username,password_hash,created_at FROM users"
        ).fetchall()
        with self.cache_lock:
            self.users_cache.clear()
            for r in rows:
                self.users_cache[r["username"].lower()] = {
                    "id":            r["id"],
                    "username":      r["username"],
                    "password_hash": r["password_hash"],
                    "created_at":    r["created_at"],
                }

    def connect(self) -> bool:
        os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
        self._get_conn()
        self.reload_cache()
        logger.debug("auth db ready at %s (%d users)", self.db_path, len(self.users_cache))
        return True

    # ---------- users ----------
    def _insert(self, username: str, password: str) -> str:
        conn = self._get_conn()
        uid = str(uuid.uuid4())
        pw_h = pwd_context.hash(password)
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self.write_lock:
                conn.execute(
                    "INSERT INTO users(id,username,password_hash,created_at) VALUES (?,?,?,?)",
                    (uid, username, pw_h, now),
                )
                conn.commit()
        except sqlite3.IntegrityError:
            raise UserExistsError(username)
        finally:
            self.reload_cache()
        return uid

    def ensure_admin(self) -> bool:
        """Create the default admin/admin account when it is missing."""
        if self.user_exists(ADMIN_USERNAME):
            return False
        try:
            self._insert(ADMIN_USERNAME, ADMIN_USERNAME)
        except UserExistsError:
            return False
        logger.info("default admin account created")
        return True

    def create_user(self, username: str, password: str) -> str:
        if not username or not password:
            raise InvalidUserError("username and password are required")
        if username == ADMIN_USERNAME:
            raise InvalidUserError("cannot create a user with the name 'admin'")
        if not USERNAME_RE.fullmatch(username):
            raise InvalidUserError("username contains invalid characters")

        with self.cache_lock:
            if username.lower() in self.users_cache:
                raise UserExistsError(username)
        return self._insert(username, password)

    def user_exists(self, username: str) -> bool:
        with self.cache_lock:
            return (username or "").lower() in self.users_cache

    def verify_credentials(self, username: str, password: str) -> dict | None:
        if not username or not password:
            return None
        with self.cache_lock:
            entry = self.users_cache.get(username.lower())
        if entry and pwd_context.verify(password, entry["password_hash"]):
            return {"id": entry["id"], "username": entry["username"]}
        return None

    # ---------- token revocation ----------
    def revoke(self, jti: str, expires_at: float):
        with self._revoked_lock:
            self._revoked[jti] = float(expires_at)
        self.purge_expired()

    def is_revoked(self, jti: str) -> bool:
        with self._revoked_lock:
            return jti in self._revoked

    def purge_expired(self, now: float | None = None) -> int:
        now = time.time() if now is None else now
        with self._revoked_lock:
            stale = [j for j, exp in self._revoked.items() if exp <= now]
            for j in stale:
                del self._revoked[j]
        return len(stale)
