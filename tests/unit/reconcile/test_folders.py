"""
test_folders.py
---------------
Unit tests for folder titles derived from paths.
"""
import pytest

from mediameta.reconcile.folders import (
    ROOT_IMPORT,
    ROOT_ORIGINALS,
    ROOT_PATH,
    ROOT_SIDECAR,
    Folder,
    folder_title,
    normalize_path,
)


class TestNormalizePath:
    """Test normalize_path()."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/2020/05/01/", "2020/05/01"),
            ("2020/05", "2020/05"),
            (ROOT_PATH, ""),
            ("", ""),
            (None, ""),
            ("  /holidays/  ", "holidays"),
        ],
    )
    def test_strips_surrounding_separators(self, path, expected):
        assert normalize_path(path) == expected


class TestFolderTitle:
    """Test folder_title() and Folder.new()."""

    def test_month_path(self):
        """YYYY/MM becomes the month title."""
        assert folder_title(ROOT_ORIGINALS, "2020/05") == "May 2020"

    def test_day_path_below_general_root(self):
        """Day paths outside imports get the month title."""
        folder = Folder.new(ROOT_ORIGINALS, "/2020/05/01/")

        assert folder.path == "2020/05/01"
        assert folder.title == "May 2020"
        assert (folder.year, folder.month, folder.day) == (2020, 5, 1)

    def test_day_path_below_import_root(self):
        """Import day paths get the full date."""
        assert folder_title(ROOT_IMPORT, "/2020/05/23") == "May 23, 2020"

    def test_import_day_is_not_padded(self):
        assert folder_title(ROOT_IMPORT, "2020/05/01") == "May 1, 2020"

    def test_import_month_path(self):
        assert folder_title(ROOT_IMPORT, "2020/05") == "May 2020"

    def test_dated_description_keeps_day_number(self):
        """The last segment is used as is, including its day number."""
        folder = Folder.new(ROOT_ORIGINALS, "/2020/05/23 Birthday")

        assert folder.path == "2020/05/23 Birthday"
        assert folder.title == "23 Birthday"
        assert folder.year == 0

    @pytest.mark.parametrize("path", ["", ROOT_PATH, None])
    def test_root_title(self, path):
        """The root itself is titled after the root."""
        folder = Folder.new(ROOT_ORIGINALS, path)

        assert folder.title == "Originals"
        assert folder.is_root()

    @pytest.mark.parametrize(
        "root,expected",
        [(ROOT_IMPORT, "Import"), (ROOT_SIDECAR, "Sidecar"), ("shared_albums", "Shared Albums")],
    )
    def test_other_root_titles(self, root, expected):
        assert folder_title(root, "") == expected

    def test_plain_path_uses_last_segment(self):
        assert folder_title(ROOT_ORIGINALS, "holidays/beach trip") == "Beach Trip"

    def test_invalid_month_is_a_plain_name(self):
        """Paths that only look like dates are titled after their last segment."""
        folder = Folder.new(ROOT_ORIGINALS, "2020/13")

        assert folder.title == "13"
        assert folder.month == 0
