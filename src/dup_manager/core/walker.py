"""Directory walker that discovers regular files eligible for duplicate checks."""

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from dup_manager.core.models import FileRecord
from dup_manager.core.quarantine import QuarantineManager
from dup_manager.utils.config import Config

logger = logging.getLogger(__name__)

# Not exported by the stat module
FILE_ATTRIBUTE_RECALL_ON_DATA_ACCESS = 0x00400000


class DirectoryWalker:
    """Recursively enumerates files under the selected roots, pruning excluded trees."""

    def __init__(self, config: Config, quarantine: QuarantineManager):
        """
        Initialize the directory walker.

        Args:
            config: Configuration instance
            quarantine: Quarantine manager used to prepare each root's volume
        """
        self.config = config
        self.quarantine = quarantine
        self.excluded_names = set(config.get_excluded_names())
        self.system_dirs = set(config.get_system_directories())
        self.shortcut_extensions = {
            ext.lower() for ext in config.get("scan.shortcut_extensions", [])
        }

    def walk(self, roots: Iterable[Path]) -> Iterator[FileRecord]:
        """
        Yield every eligible regular file under the given roots.

        The quarantine folder of every root's volume is created (or found)
        before the first file is produced.

        Args:
            roots: Directories to scan, in order

        Yields:
            FileRecord for each regular file that passes the exclusion rules
        """
        roots = [Path(os.path.abspath(root)) for root in roots]

        for root in roots:
            self.quarantine.ensure_quarantine_dir(root)

        for root in roots:
            if not root.is_dir():
                logger.warning(f"Root directory not found, skipping: {root}")
                continue

            reason = self._root_exclusion_reason(root)
            if reason:
                logger.warning(f"Root lies in a {reason} directory, skipping: {root}")
                continue

            logger.info(f"Scanning directory: {root}")
            yield from self._walk_root(root)

    def _root_exclusion_reason(self, root: Path) -> Optional[str]:
        """
        Check a root and its ancestors against the name and system rules.

        Args:
            root: Absolute root directory

        Returns:
            Short reason if the root is inside an excluded tree, else None
        """
        for candidate in (root, *root.parents):
            if self.is_system_directory(candidate):
                return "system"
            if candidate.name in self.excluded_names:
                return "quarantine/trash"
        return None

    def _walk_root(self, root: Path) -> Iterator[FileRecord]:
        root_gone = False

        def check_root() -> bool:
            nonlocal root_gone
            if not root_gone and not root.exists():
                root_gone = True
                logger.warning(f"Root directory no longer exists, skipping: {root}")
            return root_gone

        def on_error(error: OSError) -> None:
            if check_root():
                return
            if isinstance(error, PermissionError):
                logger.warning(f"Permission denied accessing directory: {error.filename}")
            elif isinstance(error, FileNotFoundError):
                logger.warning(f"Directory vanished during scan: {error.filename}")
            else:
                logger.warning(f"Cannot list directory {error.filename}: {error}")

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            if check_root():
                return

            current = Path(dirpath)

            kept: List[str] = []
            for name in sorted(dirnames):
                path = current / name
                st = self._lstat(path)
                if st is None or stat.S_ISLNK(st.st_mode):
                    continue
                reason = self._exclusion_reason(path, st)
                if reason:
                    logger.debug(f"Skipping {reason} directory: {path}")
                    continue
                kept.append(name)
            dirnames[:] = kept

            for name in sorted(filenames):
                path = current / name
                st = self._lstat(path)
                if st is None or not stat.S_ISREG(st.st_mode):
                    continue
                reason = self._exclusion_reason(path, st)
                if reason:
                    logger.debug(f"Skipping {reason} file: {path}")
                    continue
                yield FileRecord(path=path, size=st.st_size)

    def _lstat(self, path: Path) -> Optional[os.stat_result]:
        try:
            return os.stat(path, follow_symlinks=False)
        except OSError as e:
            logger.debug(f"Cannot stat {path}: {e}")
            return None

    def _exclusion_reason(self, path: Path, st: os.stat_result) -> Optional[str]:
        """
        Check an entry against the exclusion rules, in order.

        Args:
            path: Entry path
            st: The entry's lstat result

        Returns:
            Short reason if the entry is excluded, else None
        """
        if self.is_system_directory(path):
            logger.info(f"System directory skipped: {path}")
            return "system"
        if path.name in self.excluded_names:
            return "quarantine/trash"
        if self.is_hidden(path, st):
            return "hidden"
        if self.is_online_placeholder(st):
            return "online-only"
        if self.is_shortcut(path):
            return "shortcut"
        return None

    def is_system_directory(self, path: Path) -> bool:
        return os.path.normcase(str(path)) in self.system_dirs

    @staticmethod
    def is_hidden(path: Path, st: os.stat_result) -> bool:
        """
        Check for dotfiles and the platform hidden attribute.

        Args:
            path: Entry path
            st: The entry's lstat result

        Returns:
            True if the entry is hidden
        """
        if path.name.startswith("."):
            return True
        # Windows
        if getattr(st, "st_file_attributes", 0) & stat.FILE_ATTRIBUTE_HIDDEN:
            return True
        # BSD / macOS
        return bool(getattr(st, "st_flags", 0) & stat.UF_HIDDEN)

    @staticmethod
    def is_online_placeholder(st: os.stat_result) -> bool:
        """True for cloud files whose content is not stored locally."""
        attrs = getattr(st, "st_file_attributes", 0)
        return bool(
            attrs & (FILE_ATTRIBUTE_RECALL_ON_DATA_ACCESS | stat.FILE_ATTRIBUTE_OFFLINE)
        )

    def is_shortcut(self, path: Path) -> bool:
        return path.suffix.lower() in self.shortcut_extensions
