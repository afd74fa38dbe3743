from typing import Any, Dict, List, Optional

from .memento import Snapshot


class History:
    """Linear undo/redo history of calculator snapshots.

    Pushing while the cursor is behind the tail drops every later snapshot;
    there is no branching.
    """

    def __init__(self):
        self._snapshots: List[Snapshot] = []
        self._current_index = -1

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def current_index(self) -> int:
        return self._current_index

    def push(self, snapshot: Snapshot) -> None:
        del self._snapshots[self._current_index + 1:]
        self._snapshots.append(snapshot)
        self._current_index = len(self._snapshots) - 1

    def undo(self) -> Optional[Snapshot]:
        if not self.can_undo():
            return None
        self._current_index -= 1
        return self._snapshots[self._current_index]

    def redo(self) -> Optional[Snapshot]:
        if not self.can_redo():
            return None
        self._current_index += 1
        return self._snapshots[self._current_index]

    def can_undo(self) -> bool:
        return self._current_index > 0

    def can_redo(self) -> bool:
        return self._current_index < len(self._snapshots) - 1

    def current(self) -> Optional[Snapshot]:
        if 0 <= self._current_index < len(self._snapshots):
            return self._snapshots[self._current_index]
        return None

    def clear(self) -> None:
        self._snapshots = []
        self._current_index = -1

    def get_history(self) -> List[Dict[str, Any]]:
        return [
            {**snapshot.to_dict(), "is_current": index == self._current_index}
            for index, snapshot in enumerate(self._snapshots)
        ]

    def get_info(self) -> Dict[str, Any]:
        return {
            "total_states": len(self._snapshots),
            "current_index": self._current_index,
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
        }
