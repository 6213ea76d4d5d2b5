#!/usr/bin/env python3
"""
folders.py
--------------------
Titles for folder-like groupings derived from their paths.

Paths are relative to a root and use "/" as separator. Date-shaped paths
become month (and, for imports, day) titles; everything else is titled
after its last segment:

    originals  ""                    -> "Originals"
    originals  "2020/05"             -> "May 2020"
    originals  "/2020/05/01/"        -> "May 2020"
    import     "/2020/05/23"         -> "May 23, 2020"
    originals  "2020/05/23 Birthday" -> "23 Birthday"
    originals  "holidays/beach trip" -> "Beach Trip"

The last example pair shows the literal rule for dated descriptions: only
the surrounding separators are normalized, a leading day number stays.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import calendar
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

# --- Local imports ---
from mediameta.utils import txt

ROOT_ORIGINALS = "originals"
ROOT_IMPORT = "import"
ROOT_SIDECAR = "sidecar"
ROOT_PATH = "/"
PATH_SEPARATOR = "/"

ROOT_TITLES = {
    ROOT_ORIGINALS: "Originals",
    ROOT_IMPORT: "Import",
    ROOT_SIDECAR: "Sidecar",
}

_DATE_PATH_RE = re.compile(r"^(\d{4})/(\d{2})(?:/(\d{2}))?$")


def normalize_path(path: Optional[str]) -> str:
    """Strip surrounding whitespace and separators; the root marker becomes ""."""
    if not path:
        return ""

    path = path.strip()
    if path == ROOT_PATH:
        return ""

    return path.strip(PATH_SEPARATOR)


def root_title(root: str) -> str:
    return ROOT_TITLES.get(root, txt.title(root.replace("_", " ")))


def _is_date(match: "re.Match[str]") -> bool:
    try:
        date(int(match.group(1)), int(match.group(2)), int(match.group(3) or 1))
    except ValueError:
        return False
    return True


def _month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def _day_title(year: int, month: int, day: int) -> str:
    return f"{calendar.month_name[month]} {day}, {year}"


@dataclass
class Folder:
    """
    A folder path with its derived title.

    Attributes:
        root: Root the path is relative to (originals, import, ...)
        path: Normalized path without surrounding separators
        title: Display title
        year, month, day: Date parts for date-shaped paths, 0 otherwise
    """

    root: str
    path: str
    title: str
    year: int = 0
    month: int = 0
    day: int = 0

    @classmethod
    def new(cls, root: str, path: Optional[str]) -> "Folder":
        """
        Build a folder and derive its title.

        Args:
            root: Root name
            path: Path relative to the root, may carry separators at either end

        Returns:
            Folder with normalized path, title and date parts
        """
        path = normalize_path(path)

        if not path:
            return cls(root=root, path="", title=root_title(root))

        match = _DATE_PATH_RE.match(path)
        if match and _is_date(match):
            year, month = int(match.group(1)), int(match.group(2))
            day = int(match.group(3)) if match.group(3) else 0

            if day and root == ROOT_IMPORT:
                title = _day_title(year, month, day)
            else:
                title = _month_title(year, month)

            return cls(root=root, path=path, title=title, year=year, month=month, day=day)

        # Invalid dates like 2020/13 are plain names
        segment = path.rsplit(PATH_SEPARATOR, 1)[-1]
        return cls(root=root, path=path, title=txt.title(segment))

    def is_root(self) -> bool:
        return self.path == ""


def folder_title(root: str, path: Optional[str]) -> str:
    """Title for ``path`` below ``root``."""
    return Folder.new(root, path).title
