"""Streaming SHA-256 digests and the hash grouping stage."""

import hashlib
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from dup_manager.core.grouping import group_and_filter
from dup_manager.core.models import (
    DigestResult,
    DuplicateGroup,
    FailureKind,
    HashProgress,
    HashStageResult,
)
from dup_manager.utils.config import Config

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[HashProgress], None]


def compute_digest(path: Path, chunk_size: int = 64 * 1024) -> str:
    """
    Compute the SHA-256 digest of a file, reading it in fixed-size chunks.

    Args:
        path: File to digest
        chunk_size: Bytes read per update

    Returns:
        Lowercase hex digest

    Raises:
        OSError: If the file cannot be opened or read
    """
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _classify(error: OSError) -> FailureKind:
    if isinstance(error, FileNotFoundError):
        return FailureKind.NOT_FOUND
    if isinstance(error, PermissionError):
        return FailureKind.PERMISSION_DENIED
    return FailureKind.IO_ERROR


class HashGrouper:
    """Confirms duplicates inside each size bucket by content digest."""

    def __init__(self, config: Config):
        """
        Initialize the hash grouper.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.chunk_size = config.get_chunk_size()

    def digest_file(self, path: Path) -> DigestResult:
        """
        Digest one file without raising on I/O problems.

        Args:
            path: File to digest

        Returns:
            DigestResult carrying either the digest or the failure
        """
        try:
            return DigestResult(path=path, digest=compute_digest(path, self.chunk_size))
        except OSError as e:
            kind = _classify(e)
            reason = e.strerror or str(e)
            return DigestResult(
                path=path,
                failure=kind,
                message=f"Could not read file: {path} ({reason})",
            )

    def group(
        self,
        size_groups: Dict[int, List[Path]],
        on_progress: Optional[ProgressCallback] = None,
    ) -> HashStageResult:
        """
        Digest every candidate and group by digest within each size bucket.

        Args:
            size_groups: Size buckets from the size grouper
            on_progress: Called with a HashProgress after each file hashed

        Returns:
            HashStageResult with duplicate groups in ascending digest order
            and the distinct failure messages
        """
        total = sum(len(paths) for paths in size_groups.values())
        hashed = 0
        failures: Dict[str, None] = {}
        groups: List[DuplicateGroup] = []

        logger.info(f"Hashing {total} candidate files")

        for size in sorted(size_groups):
            digested: List[DigestResult] = []
            for path in size_groups[size]:
                result = self.digest_file(path)
                if not result.ok:
                    failures.setdefault(result.message, None)
                    logger.debug(f"Dropped from size group {size}: {path}")
                    continue
                digested.append(result)
                hashed += 1
                if on_progress is not None:
                    on_progress(HashProgress(hashed=hashed, total=total))

            by_digest = group_and_filter(digested, key=lambda r: r.digest)
            for digest, members in by_digest.items():
                groups.append(
                    DuplicateGroup(
                        digest=digest,
                        size=size,
                        paths=[member.path for member in members],
                    )
                )

        groups.sort(key=lambda g: (g.digest, g.size))

        for message in failures:
            logger.error(message)

        logger.info(f"Found {len(groups)} duplicate groups")
        return HashStageResult(
            groups=groups, failures=list(failures), hashed=hashed, total=total
        )
