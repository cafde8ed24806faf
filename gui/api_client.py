# gui/api_client.py
import requests
import tempfile
import os

from contextlib import ExitStack

from typing import Iterable, Optional

from gui.logutil import get_logger, redact

log = get_logger("api")


class APIError(Exception):
    """Non-success response; `message` is the server's `error` field or a fallback."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class Unauthorized(APIError):
    """HTTP 401 on an authenticated call: the session is no longer valid."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, 401)


def _error_field(r: requests.Response) -> Optional[str]:
    try:
        data = r.json()
    except ValueError:
        return None
    return data.get("error") if isinstance(data, dict) else None


class APIClient:
    def __init__(self, base_url: str, token: Optional[str] = None):
        self.base_url = base_url.rstrip("/")
        self.token = token

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    @property
    def auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    # ---------- gateway ----------
    def request(self, method: str, endpoint: str, **options) -> requests.Response:
        """
        Perform `method endpoint` with the bearer token and a JSON content type
        merged under the caller's headers. Returns the raw response; no retry,
        no timeout.
        """
        headers = {**self.auth_headers, "Content-Type": "application/json", **(options.pop("headers", None) or {})}
        log.debug("%s %s", method, endpoint)
        return requests.request(method, self.url(endpoint), headers=headers, **options)

    def _check(self, r: requests.Response, fallback: str) -> dict:
        if r.status_code == 401:
            raise Unauthorized()
        if not r.ok:
            raise APIError(_error_field(r) or fallback, r.status_code)
        try:
            return r.json()
        except ValueError:
            return {}

    # ---------- auth ----------
    def login(self, username: str, password: str) -> str:
        r = requests.post(self.url("/api/login"), json={"username": username, "password": password})
        try:
            data = r.json()
        except ValueError:
            data = {}
        if not r.ok or not data.get("success") or not data.get("token"):
            raise APIError(data.get("message") or "Login failed", r.status_code)
        self.token = data["token"]
        log.info("login ok user=%s token=%s", username, redact(self.token))
        return self.token

    def register(self, username: str, password: str) -> dict:
        r = requests.post(self.url("/api/register"), json={"username": username, "password": password})
        if not r.ok:
            raise APIError(_error_field(r) or "", r.status_code)
        return r.json()

    def logout(self):
        r = self.request("POST", "/api/logout")
        self.token = None
        return r

    # ---------- files ----------
    def list_files(self, path: str) -> list:
        r = self.request("GET", "/api/files", params={"path": path})
        data = self._check(r, "Error loading files")
        if not data.get("success"):
            return []
        return data.get("items") or []

    def create_folder(self, path: str, folder_name: str) -> dict:
        r = self.request("POST", "/api/files/folder", json={"path": path, "folderName": folder_name})
        return self._check(r, "Error creating folder")

    def rename_item(self, path: str, old_name: str, new_name: str) -> dict:
        r = self.request("POST", "/api/files/rename", json={"path": path, "oldName": old_name, "newName": new_name})
        return self._check(r, "Error renaming")

    def delete_items(self, path: str, names: Iterable[str]) -> dict:
        r = self.request("DELETE", "/api/files", json={"path": path, "names": list(names)})
        return self._check(r, "Error deleting")

    def upload_files(self, path: str, local_paths: Iterable[str]) -> int:
        """Multipart upload; only the Authorization header is sent so requests sets the boundary."""
        with ExitStack() as stack:
            files = []
            for p in local_paths:
                fp = stack.enter_context(open(p, "rb"))
                files.append(("files", (os.path.basename(p), fp, "application/octet-stream")))
            r = requests.post(self.url("/api/files/upload"), headers=self.auth_headers,
                              params={"path": path}, files=files)
        data = self._check(r, "Error uploading files")
        if not data.get("success"):
            raise APIError(data.get("error") or "Error uploading files", r.status_code)
        return int(data.get("uploaded") or 0)

    def download_file(self, path: str, name: str, dest_dir: str) -> str:
        """
        Stream one file to dest_dir with the bearer header (no token in the URL).
        Bytes land in a .part file that only replaces the target once complete.
        """
        local_path = os.path.join(dest_dir, os.path.basename(name))
        with requests.get(self.url("/api/files/download"), headers=self.auth_headers,
                          params={"path": path, "name": name}, stream=True) as r:
            self._check_stream(r)
            fd, part_path = tempfile.mkstemp(prefix=".", suffix=".part", dir=dest_dir)
            try:
                with os.fdopen(fd, "wb") as f:
                    for chunk in r.iter_content(chunk_size=8192):
                        if chunk:
                            f.write(chunk)
            except BaseException:
                os.unlink(part_path)
                raise
        if os.path.exists(local_path):
            log.info("download overwrites existing file %s", local_path)
        os.replace(part_path, local_path)
        return local_path

    def _check_stream(self, r: requests.Response):
        if r.status_code == 401:
            raise Unauthorized()
        if not r.ok:
            raise APIError(_error_field(r) or "Error downloading", r.status_code)
