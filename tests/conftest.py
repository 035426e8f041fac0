"""Shared fixtures for pumproom tests."""
from pathlib import Path

import pytest


@pytest.fixture
def api_response():
    """Ingestion response in the current/cached shape."""
    return {
        "repo_updated": True,
        "pushed_at": "2025-07-30T21:26:10.875969",
        "tasks_current": 33,
        "tasks_updated": 33,
        "tasks_created": 0,
        "tasks_deleted": 1,
        "tasks_cached": 33,
        "tasks_synchronized_with_cms": 2,
    }


@pytest.fixture
def repo_tree(tmp_path) -> Path:
    """
    A small content repository:

        repo/
          .inzhenerka.yml
          README.md
          .git/HEAD
          .github/workflows/publish.yml
          node_modules/pkg/index.js
          task1/task.md
          task1/src/main.py
          task2/task.md
    """
    root = tmp_path / "repo"
    files = {
        ".inzhenerka.yml": "tasks:\n  - task1\n  - task2\n",
        "README.md": "# Tasks\n",
        ".git/HEAD": "ref: refs/heads/main\n",
        ".github/workflows/publish.yml": "on: push\n",
        "node_modules/pkg/index.js": "module.exports = {}\n",
        "task1/task.md": "# Task 1\n",
        "task1/src/main.py": "print('hello')\n",
        "task2/task.md": "# Task 2\n",
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def _is_case_sensitive(directory: Path) -> bool:
    marker = directory / "CaseMarker"
    marker.mkdir()
    try:
        return not (directory / "casemarker").exists()
    finally:
        marker.rmdir()


@pytest.fixture
def case_sensitive_dir(tmp_path) -> Path:
    """Empty directory on a case-sensitive file system (skips otherwise)."""
    root = tmp_path / "cs"
    root.mkdir()
    if not _is_case_sensitive(root):
        pytest.skip("file system is case-insensitive")
    return root
