"""Tests for enumkit._version module."""

import enumkit
from enumkit._version import get_version


class TestVersion:
    """Version is read from the distribution or the project table."""

    def test_matches_project_version(self) -> None:
        assert get_version() == "0.3.0"
        assert enumkit.__version__ == get_version()
