import logging
logger = logging.getLogger(__name__)

import os, shutil
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from .exceptions import InvalidNameError, InvalidPathError, ItemNotFoundError

_ROOT_ALIASES = ("", "root", "/")
_SIZE_UNITS = ["KB", "MB", "GB", "TB"]


def format_size(n: int) -> str:
    """1024-based size label: '512 B', '1.5 KB', '2.0 MB'."""
    unit = 1024
    if n < unit:
        return f"{n} B"
    div, exp = unit, 0
    q = n // unit
    while q >= unit and exp < len(_SIZE_UNITS) - 1:
        div *= unit
        exp += 1
        q //= unit
    return f"{n / div:.1f} {_SIZE_UNITS[exp]}"


def _check_name(name: str, what: str = "name") -> None:
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        raise InvalidNameError(f"invalid {what}")


class FileManager:
    """Per-user file trees rooted at <base_dir>/<username>."""

    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)

    def user_dir(self, username: str) -> Path:
        return self.base_dir / username

    def ensure_user_dir(self, username: str) -> Path:
        d = self.user_dir(username)
        d.mkdir(parents=True, exist_ok=True)
        return d

    def _confined(self, username: str, target: Path) -> Path:
        root = self.user_dir(username).resolve()
        resolved = target.resolve()
        if resolved != root and root not in resolved.parents:
            raise InvalidPathError(str(target))
        return resolved

    def resolve(self, username: str, path: str | None) -> Path:
        """Map a client path ('' / 'root' / '/' or a folder) to a confined directory."""
        if (path or "") in _ROOT_ALIASES:
            return self.user_dir(username).resolve()
        return self._confined(username, self.user_dir(username) / path)

    def _item(self, entry: Path) -> dict:
        st = entry.stat()
        item = {
            "id": entry.name,
            "name": entry.name,
            "modified": datetime.fromtimestamp(st.st_mtime).strftime("%Y-%m-%d"),
        }
        if entry.is_dir():
            item["type"] = "folder"
        else:
            item["type"] = "file"
            item["size"] = format_size(st.st_size)
        return item

    # ---------- operations ----------
    def list_files(self, username: str, path: str | None) -> list[dict]:
        folder = self.resolve(username, path)
        if not folder.exists():
            raise ItemNotFoundError(path or "root")
        if not folder.is_dir():
            raise InvalidPathError("not a directory")

        items = []
        for entry in folder.iterdir():
            try:
                items.append(self._item(entry))
            except OSError:
                continue
        # folders first, then case-insensitive by name
        items.sort(key=lambda i: (i["type"] != "folder", i["name"].lower()))
        return items

    def create_folder(self, username: str, path: str | None, folder_name: str) -> Path:
        parent = self.resolve(username, path)
        _check_name(folder_name, "folder name")
        target = self._confined(username, parent / folder_name)
        target.mkdir(parents=True, exist_ok=True)
        logger.debug("mkdir user=%s path=%s", username, target)
        return target

    def delete_items(self, username: str, path: str | None, names: list[str]) -> int:
        """Delete names under path; escaping or missing names are skipped."""
        parent = self.resolve(username, path)
        removed = 0
        for name in names:
            try:
                target = self._confined(username, parent / name)
            except InvalidPathError:
                logger.warning("delete skipped (outside user dir) user=%s name=%s", username, name)
                continue
            if target == self.user_dir(username).resolve():
                continue
            if target.is_dir():
                shutil.rmtree(target, ignore_errors=True)
            elif target.exists():
                target.unlink()
            else:
                continue
            removed += 1
        return removed

    def rename_item(self, username: str, path: str | None, old_name: str, new_name: str) -> Path:
        parent = self.resolve(username, path)
        _check_name(new_name)
        src = self._confined(username, parent / old_name)
        dst = self._confined(username, parent / new_name)
        if not src.exists():
            raise ItemNotFoundError(old_name)
        os.rename(src, dst)
        return dst

    def save_upload(self, username: str, path: str | None, filename: str, stream: BinaryIO) -> bool:
        """Copy one uploaded stream into place. Returns False instead of raising."""
        try:
            parent = self.resolve(username, path)
            dst = self._confined(username, parent / os.path.basename(filename or ""))
            if dst == parent:
                return False
            with open(dst, "wb") as fh:
                shutil.copyfileobj(stream, fh)
            return True
        except (OSError, InvalidPathError) as e:
            logger.warning("upload failed user=%s file=%s err=%r", username, filename, e)
            return False

    def download_path(self, username: str, path: str | None, name: str) -> Path:
        if not name:
            raise InvalidNameError("file name not specified")
        parent = self.resolve(username, path)
        target = self._confined(username, parent / name)
        if not target.exists():
            raise ItemNotFoundError(name)
        if target.is_dir():
            raise InvalidNameError("Cannot download a folder")
        return target
