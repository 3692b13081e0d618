"""
Mutable min-priority frontier over grid nodes.

Entries are never re-keyed after insertion. A node whose priority changes is
inserted again, so several entries for the same node may be live at once;
the search engine discards the stale ones when they surface.
"""

import heapq
import itertools
from collections import Counter
from typing import List, Optional, Tuple

from .exceptions import EmptyFrontierError
from .node import Node


class PriorityFrontier:
    """
    Binary-heap priority queue keyed by node priority.

    Ties between equal priorities are served in insertion order, which keeps
    expansion order reproducible across runs with identical input.

    Attributes:
        count (int): Number of live entries (duplicates included)
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, Node]] = []
        self._counter = itertools.count()
        self._live = Counter()

    def insert(self, node: Node, priority: Optional[float] = None) -> None:
        """
        Add an entry for node.

        Args:
            node: Node to enqueue
            priority: Ordering key; defaults to node.priority at insertion time
        """
        key = node.priority if priority is None else priority
        heapq.heappush(self._heap, (key, next(self._counter), node))
        self._live[node] += 1

    def extract_min(self) -> Node:
        """
        Remove and return the node of the lowest-priority entry.

        Raises:
            EmptyFrontierError: If no entries remain
        """
        if not self._heap:
            raise EmptyFrontierError("extract_min() on an empty frontier")

        _, _, node = heapq.heappop(self._heap)
        self._live[node] -= 1
        if self._live[node] <= 0:
            del self._live[node]
        return node

    def peek(self) -> Node:
        """Return the node that extract_min() would return, without removing it."""
        if not self._heap:
            raise EmptyFrontierError("peek() on an empty frontier")
        return self._heap[0][2]

    def contains(self, node: Node) -> bool:
        return node in self._live

    @property
    def count(self) -> int:
        return len(self._heap)

    def to_list(self) -> List[Node]:
        """All live entries in extraction order, duplicates included."""
        return [node for _, _, node in sorted(self._heap, key=lambda entry: entry[:2])]

    def clear(self) -> None:
        self._heap.clear()
        self._live.clear()
        self._counter = itertools.count()

    def __contains__(self, node: Node) -> bool:
        return self.contains(node)

    def __len__(self) -> int:
        return self.count

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"PriorityFrontier(count={self.count})"
