"""Value types passed between the pipeline stages."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(frozen=True)
class FileRecord:
    """A regular file discovered by the walker."""

    path: Path  # absolute, normalized
    size: int


@dataclass
class SizeStageResult:
    """Size buckets with at least two members, keyed by byte size."""

    groups: Dict[int, List[Path]]
    files_seen: int

    @property
    def candidates(self) -> int:
        """Number of files that need hashing."""
        return sum(len(paths) for paths in self.groups.values())


class FailureKind(Enum):
    """Why a file could not be digested."""

    NOT_FOUND = "not found"
    PERMISSION_DENIED = "permission denied"
    IO_ERROR = "I/O error"


@dataclass(frozen=True)
class DigestResult:
    """Outcome of hashing one file: either a digest or a failure."""

    path: Path
    digest: Optional[str] = None
    failure: Optional[FailureKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class HashProgress:
    """Files hashed so far out of the known same-size candidates."""

    hashed: int
    total: int


@dataclass
class DuplicateGroup:
    """Files with identical size and content digest."""

    digest: str
    size: int
    paths: List[Path]

    @property
    def wasted_bytes(self) -> int:
        """Space taken by all copies beyond the first."""
        return self.size * (len(self.paths) - 1)


@dataclass
class HashStageResult:
    groups: List[DuplicateGroup]
    failures: List[str] = field(default_factory=list)
    hashed: int = 0
    total: int = 0


@dataclass
class ScanResult:
    """Combined outcome of walking, size grouping and hash grouping."""

    files_scanned: int
    candidates: int
    groups: List[DuplicateGroup]
    failures: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ManifestEntry:
    """One audit record: where a quarantined file came from and went to."""

    source: Path
    destination: Path

    def format(self) -> str:
        return f"Source: {self.source}\nDestination: {self.destination}\n\n"


@dataclass
class RelocationResult:
    """Outcome of moving one file into quarantine."""

    source: Path
    destination: Optional[Path] = None
    error: Optional[str] = None
    manifest_written: bool = False

    @property
    def relocated(self) -> bool:
        return self.error is None and self.destination is not None
