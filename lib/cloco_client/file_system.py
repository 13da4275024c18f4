from __future__ import annotations

import os
import sys
from pathlib import Path

from .logging_ import get_logger

log = get_logger(__name__)


def read_file(path: str | os.PathLike[str]) -> str:
    log.debug("reading %s from disk", path)
    return Path(path).read_text(encoding="utf-8")


def write_file(path: str | os.PathLike[str], data: str, *, mode: int | None = None) -> None:
    """Write text to disk.

    With ``mode`` the file is opened with those permissions and narrowed to
    them before any data is written, including when it already exists.
    """
    log.debug("writing %s to disk", path)
    if mode is None:
        Path(path).write_text(data, encoding="utf-8")
        return
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        os.chmod(path, mode)
        f.write(data)


def ensure_directory(path: str | os.PathLike[str]) -> None:
    target = Path(path)
    if not target.exists():
        log.debug("creating local folder %s", target)
    target.mkdir(parents=True, exist_ok=True)


def get_user_home() -> str:
    if sys.platform == "win32":
        home = os.environ.get("USERPROFILE")
    else:
        home = os.environ.get("HOME")
    if home:
        return home
    log.debug("home directory not set in environment, falling back to Path.home()")
    return str(Path.home())
