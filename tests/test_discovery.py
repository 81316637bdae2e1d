"""Tests for barabara.routing.discovery — controller file discovery."""

from pathlib import Path

import pytest

from barabara.routing.discovery import find_controllers

MOCKS = Path(__file__).parent.absolute() / "mocks"


class TestFindControllers:
    def test_finds_all_controllers(self) -> None:
        found = find_controllers(MOCKS)
        assert sorted(found) == sorted(
            [
                MOCKS / "index.py",
                MOCKS / "test.py",
                MOCKS / "subPath" / "subTest.py",
            ]
        )

    def test_returns_absolute_paths(self) -> None:
        assert all(path.is_absolute() for path in find_controllers(MOCKS))

    def test_skips_hidden_entries(self) -> None:
        names = {path.name for path in find_controllers(MOCKS)}
        parents = {path.parent.name for path in find_controllers(MOCKS)}
        assert ".hidden.py" not in names
        assert ".hiddenDir" not in parents

    def test_skips_private_entries(self, tmp_path: Path) -> None:
        (tmp_path / "__init__.py").write_text("")
        (tmp_path / "_helpers.py").write_text("")
        (tmp_path / "__pycache__").mkdir()
        (tmp_path / "__pycache__" / "users.py").write_text("")
        (tmp_path / "users.py").write_text("")

        assert find_controllers(tmp_path) == [tmp_path / "users.py"]

    def test_ignores_other_extensions(self, tmp_path: Path) -> None:
        (tmp_path / "users.py").write_text("")
        (tmp_path / "notes.txt").write_text("")
        (tmp_path / "users.pyc").write_text("")

        assert find_controllers(tmp_path) == [tmp_path / "users.py"]

    def test_directories_before_files_at_each_level(self, tmp_path: Path) -> None:
        (tmp_path / "alpha.py").write_text("")
        (tmp_path / "zeta").mkdir()
        (tmp_path / "zeta" / "inner.py").write_text("")
        (tmp_path / "zeta" / "deep").mkdir()
        (tmp_path / "zeta" / "deep" / "leaf.py").write_text("")

        assert find_controllers(tmp_path) == [
            tmp_path / "zeta" / "deep" / "leaf.py",
            tmp_path / "zeta" / "inner.py",
            tmp_path / "alpha.py",
        ]

    def test_custom_extensions(self, tmp_path: Path) -> None:
        (tmp_path / "users.py").write_text("")
        (tmp_path / "orders.pyw").write_text("")

        assert find_controllers(tmp_path, extensions=(".pyw",)) == [tmp_path / "orders.pyw"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert find_controllers(tmp_path) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Controllers directory not found"):
            find_controllers(tmp_path / "nope")

    def test_file_instead_of_directory(self, tmp_path: Path) -> None:
        file = tmp_path / "users.py"
        file.write_text("")
        with pytest.raises(FileNotFoundError):
            find_controllers(file)
