"""Group-by-key primitive and the size grouping stage."""

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

from dup_manager.core.models import FileRecord, SizeStageResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")


def group_and_filter(
    items: Iterable[T],
    key: Callable[[T], K],
    identity: Optional[Callable[[T], Hashable]] = None,
    min_size: int = 2,
) -> Dict[K, List[T]]:
    """
    Group items by a computed key and keep only the larger groups.

    Args:
        items: Items to group (consumed once)
        key: Function computing the grouping key of an item
        identity: Optional function; an item whose identity was already
            added to the same bucket is ignored
        min_size: Minimum number of members for a bucket to be kept

    Returns:
        Mapping of key to members in first-seen order, only for buckets
        with at least ``min_size`` members
    """
    buckets: Dict[K, List[T]] = {}
    seen: Dict[K, set] = {}

    for item in items:
        k = key(item)
        if identity is not None:
            ident = identity(item)
            bucket_seen = seen.setdefault(k, set())
            if ident in bucket_seen:
                continue
            bucket_seen.add(ident)
        buckets.setdefault(k, []).append(item)

    return {k: members for k, members in buckets.items() if len(members) >= min_size}


def path_identity(path: Any) -> str:
    """Comparison key used to spot the same file visited twice (case-insensitive)."""
    return str(path).casefold()


class SizeGrouper:
    """Partitions walker output by exact byte size."""

    def group(self, records: Iterable[FileRecord]) -> SizeStageResult:
        """
        Consume all records and bucket their paths by size.

        Args:
            records: FileRecord sequence from the walker

        Returns:
            SizeStageResult with only the buckets holding two or more paths,
            ordered by ascending size; ``files_seen`` counts distinct paths,
            so a file reached through overlapping roots is counted once
        """
        distinct = set()

        def counted(source: Iterable[FileRecord]) -> Iterable[FileRecord]:
            for record in source:
                distinct.add(path_identity(record.path))
                yield record

        buckets = group_and_filter(
            counted(records),
            key=lambda r: r.size,
            identity=lambda r: path_identity(r.path),
        )

        groups = {
            size: [record.path for record in buckets[size]]
            for size in sorted(buckets)
        }
        files_seen = len(distinct)
        result = SizeStageResult(groups=groups, files_seen=files_seen)

        logger.info(
            f"{result.candidates} of {files_seen} files share a size with another file"
        )
        return result
