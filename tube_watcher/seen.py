"""
In-memory tracking of entry IDs that were already announced.
"""

import logging
from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


class SeenSet:
    """
    Set of entry IDs already notified or suppressed at startup.

    IDs are kept in insertion order. Adding never removes anything. With
    ``max_size`` set, :meth:`prune` drops the oldest IDs that are no longer
    in the feed, so an entry still visible in the feed is never forgotten.
    """

    def __init__(self, max_size: int | None = None):
        """
        Parameters
        ----------
        max_size : int | None
            Number of IDs to retain beyond those still in the feed.
            None means unbounded.
        """
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        # dict preserves insertion order for eviction
        self._ids: dict[str, None] = {}

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def add(self, entry_id: str) -> bool:
        """
        Record an entry ID.

        Returns
        -------
        bool
            True if the ID was not present before.
        """
        if entry_id in self._ids:
            return False
        self._ids[entry_id] = None
        return True

    def seed(self, entry_ids: Iterable[str]) -> int:
        """
        Record many entry IDs at once, oldest first.

        Returns
        -------
        int
            Number of IDs that were newly added.
        """
        added = 0
        for entry_id in entry_ids:
            if self.add(entry_id):
                added += 1
        return added

    def prune(self, current_ids: Iterable[str]) -> int:
        """
        Evict the oldest IDs absent from the current feed until within bound.

        Parameters
        ----------
        current_ids : Iterable[str]
            IDs present in the most recent fetch. These are never evicted.

        Returns
        -------
        int
            Number of IDs evicted.
        """
        if self.max_size is None or len(self._ids) <= self.max_size:
            return 0

        keep = set(current_ids)
        excess = len(self._ids) - self.max_size
        stale = [entry_id for entry_id in self._ids if entry_id not in keep][:excess]
        for entry_id in stale:
            del self._ids[entry_id]
            logger.debug("Evicted seen entry: %s", entry_id)
        return len(stale)
