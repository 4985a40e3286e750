"""Duplicate detection pipeline: walk, group by size, group by digest."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from dup_manager.core.grouping import SizeGrouper
from dup_manager.core.hasher import HashGrouper
from dup_manager.core.models import HashProgress, ScanResult
from dup_manager.core.quarantine import QuarantineManager
from dup_manager.core.walker import DirectoryWalker
from dup_manager.utils.config import Config

logger = logging.getLogger(__name__)


class DuplicateFinder:
    """Runs the scan stages strictly one after another."""

    def __init__(
        self,
        config: Config,
        quarantine: QuarantineManager,
        show_progress: bool = True,
    ):
        """
        Initialize the duplicate finder.

        Args:
            config: Configuration instance
            quarantine: Quarantine manager (the walker prepares quarantine
                folders and excludes them from the scan)
            show_progress: Show progress bars while scanning and hashing
        """
        self.config = config
        self.show_progress = show_progress
        self.walker = DirectoryWalker(config, quarantine)
        self.size_grouper = SizeGrouper()
        self.hash_grouper = HashGrouper(config)

    def find_duplicates(self, roots: Iterable[Path]) -> ScanResult:
        """
        Find files with identical content under the given roots.

        Args:
            roots: Directories to scan

        Returns:
            ScanResult with duplicate groups in ascending digest order
        """
        with logging_redirect_tqdm(loggers=[logging.getLogger("dup_manager")]):
            records = self.walker.walk(roots)
            if self.show_progress:
                records = tqdm(records, desc="Scanning", unit="file")
            try:
                size_stage = self.size_grouper.group(records)
            finally:
                if self.show_progress:
                    records.close()

            bar: Optional[tqdm] = None
            if self.show_progress:
                bar = tqdm(total=size_stage.candidates, desc="Hashing", unit="file")

            def on_progress(progress: HashProgress) -> None:
                bar.update(progress.hashed - bar.n)

            try:
                hash_stage = self.hash_grouper.group(
                    size_stage.groups, on_progress=on_progress if bar else None
                )
            finally:
                if bar is not None:
                    bar.close()

        return ScanResult(
            files_scanned=size_stage.files_seen,
            candidates=size_stage.candidates,
            groups=hash_stage.groups,
            failures=hash_stage.failures,
        )
