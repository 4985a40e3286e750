"""
Dup Manager - Find duplicate files and move unwanted copies into quarantine.

Files are grouped by size, then by SHA-256 digest. Copies picked by the
operator are moved into a quarantine folder at the root of their volume,
never deleted, and every move is recorded in an audit log.
"""

__version__ = "0.1.0"
__author__ = "Dup Manager Contributors"

from dup_manager.core.detector import DuplicateFinder
from dup_manager.core.quarantine import QuarantineManager
from dup_manager.core.walker import DirectoryWalker

__all__ = ["DirectoryWalker", "DuplicateFinder", "QuarantineManager", "__version__"]
