"""Per-volume quarantine folders with an append-only audit log."""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from dup_manager.core.models import ManifestEntry, RelocationResult
from dup_manager.utils.config import Config

logger = logging.getLogger(__name__)


def volume_root(path: Path) -> Path:
    """
    Find the root of the volume holding a path.

    Args:
        path: Any path on the volume

    Returns:
        The nearest ancestor (or the path itself) that is a mount point
    """
    current = Path(os.path.abspath(path))
    while not os.path.ismount(current):
        parent = current.parent
        if parent == current:
            break
        current = parent
    return current


class QuarantineManager:
    """Relocates files into the quarantine folder at the root of their volume."""

    def __init__(
        self,
        config: Config,
        volume_root_resolver: Optional[Callable[[Path], Path]] = None,
    ):
        """
        Initialize the quarantine manager.

        Args:
            config: Configuration instance
            volume_root_resolver: Maps a path to its volume root
                (default: nearest mount point)
        """
        self.config = config
        self.folder_name = config.get_quarantine_folder_name()
        self.manifest_name = config.get_manifest_name()
        self.resolve_volume_root = volume_root_resolver or volume_root

    def quarantine_root(self, path: Path) -> Path:
        """Get the quarantine folder for the volume holding ``path``."""
        return self.resolve_volume_root(path) / self.folder_name

    def ensure_quarantine_dir(self, path: Path) -> Optional[Path]:
        """
        Create the quarantine folder for a path's volume if it is missing.

        Args:
            path: Any path on the volume

        Returns:
            The quarantine folder, or None if it could not be created
        """
        folder = self.quarantine_root(path)
        try:
            if folder.is_dir():
                logger.info(f"Quarantine folder already exists: {folder}")
                return folder
            folder.mkdir(exist_ok=True)
            logger.info(f"Quarantine folder created: {folder}")
            return folder
        except OSError as e:
            logger.error(f"Failed to create quarantine folder {folder}: {e}")
            return None

    def destination_for(self, source: Path) -> Path:
        """
        Compute where a file goes inside its volume's quarantine folder.

        The source's path relative to its volume root is kept, so the
        original directory structure is mirrored under the quarantine folder.
        If that name is taken, a numeric suffix is added to the stem.

        Args:
            source: Absolute path of the file to quarantine

        Returns:
            Destination path

        Raises:
            ValueError: If the source does not lie under its volume root
        """
        root = self.resolve_volume_root(source)
        destination = root / self.folder_name / Path(source).relative_to(root)

        counter = 1
        candidate = destination
        while candidate.exists():
            candidate = destination.with_name(
                f"{destination.stem}_{counter}{destination.suffix}"
            )
            counter += 1
        return candidate

    def relocate(self, source: Path) -> RelocationResult:
        """
        Move one file into quarantine and record it in the audit log.

        Args:
            source: File to move

        Returns:
            RelocationResult; failures are reported in ``error`` rather
            than raised
        """
        source = Path(os.path.abspath(source))
        result = RelocationResult(source=source)

        if not source.is_file():
            result.error = f"Source file does not exist: {source}"
            logger.warning(result.error)
            return result

        try:
            destination = self.destination_for(source)
        except ValueError as e:
            result.error = f"Cannot place {source} in quarantine: {e}"
            logger.error(result.error)
            return result

        parent = destination.parent
        if not parent.is_dir():
            try:
                parent.mkdir(parents=True, exist_ok=True)
                logger.debug(f"Destination folder created: {parent}")
            except OSError as e:
                result.error = f"Could not create destination folder {parent}: {e}"
                logger.error(result.error)
                return result

        try:
            source.rename(destination)
        except OSError as e:
            result.error = f"Failed to move {source}: {e}"
            logger.error(result.error)
            return result

        result.destination = destination
        logger.info(f"File moved from {source} to {destination}")

        result.manifest_written = self.append_manifest_entry(
            ManifestEntry(source=source, destination=destination),
            self.quarantine_root(source),
        )
        return result

    def quarantine_files(self, sources: Iterable[Path]) -> List[RelocationResult]:
        """
        Relocate several files; a failure on one does not stop the others.

        Args:
            sources: Files to move

        Returns:
            One RelocationResult per source, in order
        """
        results = [self.relocate(Path(source)) for source in sources]
        moved = sum(1 for r in results if r.relocated)
        logger.info(f"Quarantined {moved}/{len(results)} files")
        return results

    def append_manifest_entry(self, entry: ManifestEntry, folder: Path) -> bool:
        """
        Append one record to the audit log of a quarantine folder.

        The log is opened and closed for every entry.

        Args:
            entry: Source/destination pair
            folder: Quarantine folder holding the log

        Returns:
            True if the record was written
        """
        manifest = folder / self.manifest_name
        try:
            with open(manifest, "a", encoding="utf-8") as f:
                f.write(entry.format())
        except OSError as e:
            logger.error(f"Unable to write audit entry to {manifest}: {e}")
            return False

        logger.debug(f"Paths appended to: {manifest}")
        return True
