"""
HistoryManager - Manages undo/redo stacks of scene snapshots.

Each entry is a complete serialized scene (JSON string). The manager never
looks inside a snapshot; the scene controller decides what to store and
how to restore it.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50


class HistoryManager:
    """
    Bounded undo and redo stacks of scene snapshots.

    Pushing a new snapshot clears the redo stack. Navigating with undo()
    and redo() swaps snapshots between the stacks and never creates new
    entries of its own.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize the history manager.

        Args:
            max_depth: Maximum number of snapshots kept per stack (default 50)
        """
        self.max_depth = max_depth
        self._undo_stack: list[str] = []
        self._redo_stack: list[str] = []

    def push(self, snapshot: str) -> None:
        """
        Record the state before a mutation.

        The oldest snapshot is dropped once the stack exceeds max_depth,
        and the redo stack is cleared since a new action invalidates it.
        """
        self._undo_stack.append(snapshot)
        if len(self._undo_stack) > self.max_depth:
            self._undo_stack.pop(0)
        self._redo_stack.clear()

    def undo(self, current: str) -> Optional[str]:
        """
        Step back one snapshot.

        Args:
            current: Serialized live scene, kept on the redo stack

        Returns:
            The snapshot to restore, or None if there is nothing to undo
        """
        if not self._undo_stack:
            return None
        self._push_bounded(self._redo_stack, current)
        logger.debug("Undo (%d left)", len(self._undo_stack) - 1)
        return self._undo_stack.pop()

    def redo(self, current: str) -> Optional[str]:
        """
        Step forward one snapshot.

        Args:
            current: Serialized live scene, kept on the undo stack

        Returns:
            The snapshot to restore, or None if there is nothing to redo
        """
        if not self._redo_stack:
            return None
        self._push_bounded(self._undo_stack, current)
        logger.debug("Redo (%d left)", len(self._redo_stack) - 1)
        return self._redo_stack.pop()

    def _push_bounded(self, stack: list[str], snapshot: str) -> None:
        stack.append(snapshot)
        if len(stack) > self.max_depth:
            stack.pop(0)

    def can_undo(self) -> bool:
        """Return whether there are snapshots to undo."""
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        """Return whether there are snapshots to redo."""
        return len(self._redo_stack) > 0

    def clear(self) -> None:
        """Clear both undo and redo stacks."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    def get_undo_count(self) -> int:
        """Return the number of snapshots in the undo stack."""
        return len(self._undo_stack)

    def get_redo_count(self) -> int:
        """Return the number of snapshots in the redo stack."""
        return len(self._redo_stack)
