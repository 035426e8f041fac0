"""Tests for FolderValidator."""
import logging

import pytest

from pumproom.exceptions import DuplicateFoldersError, UnknownFailure
from pumproom.services.folder_validator import FolderValidator


class TestFolderValidator:
    def test_unique_folders_pass(self, tmp_path, caplog):
        caplog.set_level(logging.INFO)
        (tmp_path / "dir1").mkdir()
        (tmp_path / "dir2").mkdir()
        (tmp_path / "file.txt").write_text("x")

        FolderValidator().validate(tmp_path)

        assert "🔍 Validating unique folder names..." in caplog.messages
        assert "✅ No folder duplicates found" in caplog.messages

    def test_empty_directory(self, tmp_path, caplog):
        caplog.set_level(logging.INFO)

        FolderValidator().validate(tmp_path)

        assert "ℹ️ No folders found to validate" in caplog.messages

    def test_files_only(self, tmp_path, caplog):
        caplog.set_level(logging.INFO)
        (tmp_path / "file1.txt").write_text("1")
        (tmp_path / "file2.txt").write_text("2")

        FolderValidator().validate(tmp_path)

        assert "ℹ️ No folders found to validate" in caplog.messages

    def test_case_insensitive_duplicates(self, case_sensitive_dir):
        for name in ("Folder1", "folder1", "folder2"):
            (case_sensitive_dir / name).mkdir()

        with pytest.raises(DuplicateFoldersError, match="❌ Folder duplicates found:") as exc_info:
            FolderValidator().validate(case_sensitive_dir)

        assert set(exc_info.value.duplicates) == {"folder1"}
        assert sorted(exc_info.value.duplicates["folder1"]) == ["Folder1", "folder1"]

    def test_all_collisions_reported(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            FolderValidator,
            "list_folders",
            staticmethod(lambda root: ["Tasks", "tasks", "TASKS", "Docs", "docs", "unique"]),
        )

        with pytest.raises(DuplicateFoldersError) as exc_info:
            FolderValidator().validate(tmp_path)

        message = str(exc_info.value)
        assert "tasks (variants: Tasks, tasks, TASKS)" in message
        assert "docs (variants: Docs, docs)" in message
        assert "unique" not in message
        assert len(message.splitlines()) == 3

    def test_build_index(self):
        index = FolderValidator.build_index(["A", "a", "b"])
        assert index == {"a": ["A", "a"], "b": ["b"]}
        assert FolderValidator.find_duplicates(index) == {"a": ["A", "a"]}

    def test_os_error_propagates_unchanged(self, tmp_path):
        missing = tmp_path / "missing"

        with pytest.raises(FileNotFoundError):
            FolderValidator().validate(missing)

    def test_unknown_error_normalized(self, monkeypatch, tmp_path):
        def broken(root):
            raise TypeError("Not an OSError")

        monkeypatch.setattr(FolderValidator, "list_folders", staticmethod(broken))

        with pytest.raises(UnknownFailure, match="Unknown error during folder validation"):
            FolderValidator().validate(tmp_path)
