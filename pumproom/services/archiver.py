"""
Archive Builder - Single Responsibility: pack a filtered source tree into one ZIP.
"""
import logging
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from ..models import ArchiveEntry, IgnoreList

logger = logging.getLogger(__name__)


class ArchiveBuilder:
    """
    Collects files depth-first and writes them to a ZIP archive.

    Ignore checks run on the full path before descending, so an ignored
    directory is never visited. Symbolic links are followed as-is.
    """

    def __init__(self, ignore: Optional[IgnoreList] = None):
        self._ignore = ignore or IgnoreList()

    def collect(self, source_dir: Path, exclude: Optional[Path] = None) -> List[ArchiveEntry]:
        """
        Walk ``source_dir`` and return the files to archive.

        Args:
            source_dir: Root of the tree
            exclude: A path never collected (the archive being written)

        Returns:
            Entries in depth-first pre-order, siblings sorted by name
        """
        entries: List[ArchiveEntry] = []
        excluded = Path(exclude).resolve() if exclude else None

        def walk(current: Path, relative: Path) -> None:
            for item in sorted(current.iterdir(), key=lambda p: p.name):
                item_relative = relative / item.name

                if self._ignore.matches(item):
                    logger.debug("Ignoring: %s", item)
                    continue

                if item.is_dir():
                    walk(item, item_relative)
                    continue

                if excluded is not None and item.resolve() == excluded:
                    continue

                logger.debug("Adding file: %s as %s", item, item_relative.as_posix())
                entries.append(ArchiveEntry(source=item, relative=item_relative))

        walk(Path(source_dir), Path())
        return entries

    @staticmethod
    def write(entries: List[ArchiveEntry], output_path: Path) -> Path:
        """Write all entries to ``output_path`` in one pass."""
        output_path = Path(output_path)
        with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry in entries:
                zf.write(entry.source, entry.arcname)
        return output_path

    def build(self, source_dir: Path, output_path: Path) -> Path:
        """Create the archive of ``source_dir`` at ``output_path``."""
        logger.info("Creating ZIP archive...")
        entries = self.collect(source_dir, exclude=output_path)
        self.write(entries, output_path)
        logger.info("ZIP archive created at: %s (%d files)", output_path, len(entries))
        return Path(output_path)


@contextmanager
def temporary_archive(path: Path) -> Iterator[Path]:
    """Yield ``path`` and remove whatever is there on exit, success or failure."""
    path = Path(path)
    try:
        yield path
    finally:
        if path.exists():
            path.unlink()
            logger.debug("Removed temporary archive %s", path)
