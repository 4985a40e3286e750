"""Core functionality for duplicate detection and quarantine."""

from dup_manager.core.detector import DuplicateFinder
from dup_manager.core.grouping import SizeGrouper, group_and_filter
from dup_manager.core.hasher import HashGrouper, compute_digest
from dup_manager.core.quarantine import QuarantineManager, volume_root
from dup_manager.core.walker import DirectoryWalker

__all__ = [
    "DirectoryWalker",
    "DuplicateFinder",
    "HashGrouper",
    "QuarantineManager",
    "SizeGrouper",
    "compute_digest",
    "group_and_filter",
    "volume_root",
]
