from __future__ import annotations

from pathlib import PurePath, PurePosixPath, PureWindowsPath


def _pure(path: str) -> PurePath:
    # Names may come from either platform; a backslash means a Windows path.
    return PureWindowsPath(path) if "\\" in path else PurePosixPath(path)


def parent_directory(path: str) -> str:
    """Return the directory part of ``path`` as written, or ``"."`` for a bare name.

    Only the text is inspected; nothing is resolved against the filesystem.
    """
    p = _pure(path)
    parent = str(p.parent)
    if parent in ("", "."):
        return "."
    return parent


def filename_part(path: str) -> str:
    return _pure(path).name


def same_directory(path: str, directory: str) -> bool:
    """True if ``path`` sits directly in ``directory`` (compared lexically)."""
    return parent_directory(path) == str(_pure(directory))
