from __future__ import annotations

"""
Key Frequency Aggregation.

CountedCollection keeps one AggregateEntry per distinct key in first-seen
order, next to a list holding each entry's key hash at the same index. A
hash-to-indices table turns the duplicate check into an average O(1)
lookup; a hash hit is always confirmed by comparing the keys, so colliding
keys never merge.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from countext.domain.models import AggregateEntry

MIN_PADDING = 5


class CountedCollection:
    """Insertion-ordered key counter with a parallel hash index."""

    def __init__(self) -> None:
        self._items: List[AggregateEntry] = []
        self._hashes: List[int] = []
        self._slots: Dict[int, List[int]] = {}
        self._padding = MIN_PADDING

    def increase(self, key: str) -> AggregateEntry:
        """
        Count one observation of `key`.

        Returns:
            AggregateEntry: The entry holding the updated count.
        """
        if len(key) > self._padding:
            self._padding = len(key)

        key_hash = hash(key)
        idx = self._find(key, key_hash)
        if idx is not None:
            item = self._items[idx]
            item.count += 1
            return item

        item = AggregateEntry(key=key, count=1, key_hash=key_hash)
        self._slots.setdefault(key_hash, []).append(len(self._items))
        self._hashes.append(key_hash)
        self._items.append(item)
        return item

    def _find(self, key: str, key_hash: int) -> Optional[int]:
        for idx in self._slots.get(key_hash, ()):
            if self._items[idx].key == key:
                return idx
        return None

    @property
    def padding(self) -> int:
        """Longest key length observed so far, never below MIN_PADDING."""
        return self._padding

    @property
    def total(self) -> int:
        return sum(item.count for item in self._items)

    @property
    def hashes(self) -> List[int]:
        return list(self._hashes)

    def count_of(self, key: str) -> int:
        idx = self._find(key, hash(key))
        return 0 if idx is None else self._items[idx].count

    def entries(self) -> List[Tuple[str, int]]:
        """(key, count) pairs in first-seen order."""
        return [(item.key, item.count) for item in self._items]

    def sorted_entries(self) -> List[Tuple[str, int]]:
        """(key, count) pairs by ascending count; ties keep first-seen order."""
        return sorted(self.entries(), key=lambda pair: pair[1])

    def report_entries(self, sort: bool = True) -> List[Tuple[str, int]]:
        return self.sorted_entries() if sort else self.entries()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[AggregateEntry]:
        return iter(self._items)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key, hash(key)) is not None
