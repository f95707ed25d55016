"""
Undo History
Bounded stack of annotation snapshots taken before each edit
"""
import logging
from typing import Iterable, List, Optional, Tuple

from .annotation import Annotation, snapshot

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50


class HistoryManager:
    """
    Manages undo history

    Only the newest entry is ever read back. A full stack forgets its
    oldest entry instead of refusing the push. There is no redo: once a
    state is undone it cannot be recovered.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._snapshots: List[Tuple[Annotation, ...]] = []

    def push(self, annotations: Iterable[Annotation]):
        """Store a snapshot of the given annotations"""
        self._snapshots.append(snapshot(annotations))

        if len(self._snapshots) > self.capacity:
            self._snapshots.pop(0)
            logger.debug("History full, dropped oldest snapshot")

    def pop(self) -> Optional[Tuple[Annotation, ...]]:
        """Remove and return the newest snapshot, None when empty"""
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def can_undo(self) -> bool:
        return bool(self._snapshots)

    def clear(self):
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)
