from __future__ import annotations

import re

UNDEFINED = "-"

# Drive letters (C:/) are single-letter schemes; schemes may nest (jar:file:/x.jar!/a).
_ABSOLUTE = re.compile(r"^(/|([a-zA-Z][a-zA-Z0-9+.\-]*:)+/)")
_DRIVE = re.compile(r"^[a-zA-Z]:$")


def to_unix_path(path: str) -> str:
    return path.replace("\\", "/")


def is_absolute(path: str) -> bool:
    """Platform independent check: leading slash, drive letter or URI scheme."""
    return bool(_ABSOLUTE.match(to_unix_path(path)))


def resolve_file_name(file_name: str | None, directory: str | None = None) -> str:
    """
    Convert a tool-reported file name to the canonical form stored in an issue.

    Handles three cases:
    1. Absolute path (/x, C:\\x, file:/x)  → slashes normalized, nothing else
    2. Relative path with a directory     → directory + "/" + path
    3. Relative path, no directory        → returned as-is (slashes normalized)
    """
    if file_name is None or not file_name.strip():
        return UNDEFINED

    path = to_unix_path(file_name)
    if is_absolute(path) or not directory or not directory.strip():
        return path

    base = to_unix_path(directory)
    if len(base) > 1:
        base = base.rstrip("/")
    if base.endswith("/"):
        return base + path
    return f"{base}/{path}"


def base_name(path: str) -> str:
    """Last segment of the path; the whole path when it has no slash."""
    return path.rsplit("/", 1)[-1]


def folder(path: str) -> str:
    """Name of the immediate parent directory, or ``-`` when there is none."""
    if "/" not in path:
        return UNDEFINED
    parent = path.rsplit("/", 1)[0]
    name = parent.rsplit("/", 1)[-1]
    if not name or name == "." or _DRIVE.match(name):
        return UNDEFINED
    return name
