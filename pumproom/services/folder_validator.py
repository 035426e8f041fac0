"""
Folder Validator - Single Responsibility: reject case-insensitive folder collisions.

Top-level folders of a content repository map to task groups on the server,
which compares names case-insensitively.
"""
import logging
import os
from pathlib import Path
from typing import Dict, List

from ..exceptions import DuplicateFoldersError, PublishError, UnknownFailure

logger = logging.getLogger(__name__)


class FolderValidator:
    """Validates immediate subdirectory names of a repository root."""

    UNKNOWN_ERROR = "Unknown error during folder validation"

    @staticmethod
    def list_folders(root_dir: Path) -> List[str]:
        """Names of the immediate subdirectories of ``root_dir``, in listing order."""
        with os.scandir(root_dir) as entries:
            return [entry.name for entry in entries if entry.is_dir()]

    @staticmethod
    def build_index(folders: List[str]) -> Dict[str, List[str]]:
        """Group original-case names by their lower-cased form."""
        index: Dict[str, List[str]] = {}
        for name in folders:
            index.setdefault(name.lower(), []).append(name)
        return index

    @staticmethod
    def find_duplicates(index: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return {key: names for key, names in index.items() if len(names) > 1}

    def validate(self, root_dir: Path) -> None:
        """
        Fail if two folders under ``root_dir`` differ only by case.

        Args:
            root_dir: Repository root

        Raises:
            DuplicateFoldersError: listing every colliding group
            OSError: directory could not be read
            UnknownFailure: any other error type
        """
        logger.info("🔍 Validating unique folder names...")
        try:
            folders = self.list_folders(Path(root_dir))

            if not folders:
                logger.info("ℹ️ No folders found to validate")
                return

            duplicates = self.find_duplicates(self.build_index(folders))
            if duplicates:
                raise DuplicateFoldersError(duplicates)

            logger.info("✅ No folder duplicates found")
        except (OSError, PublishError):
            raise
        except Exception as exc:
            raise UnknownFailure(self.UNKNOWN_ERROR) from exc
