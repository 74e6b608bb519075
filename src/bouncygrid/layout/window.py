"""Tracks which items are currently bound to a spring attachment."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from bouncygrid.core.geometry import ItemDescriptor, ItemId


@dataclass(frozen=True)
class WindowDiff:
    to_remove: FrozenSet[ItemId]
    to_add: Tuple[ItemDescriptor, ...]

    @property
    def is_empty(self) -> bool:
        return not self.to_remove and not self.to_add


class WindowTracker:
    """
    Owns the visible set: ItemId -> opaque attachment handle.

    The handle is whatever the spring engine returned when the attachment
    was created; the tracker never looks inside it.
    """

    def __init__(self) -> None:
        self._bound: Dict[ItemId, Any] = {}

    @property
    def visible(self) -> FrozenSet[ItemId]:
        return frozenset(self._bound)

    def __len__(self) -> int:
        return len(self._bound)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._bound

    def handle(self, item_id: ItemId) -> Optional[Any]:
        return self._bound.get(item_id)

    def bound(self) -> List[Tuple[ItemId, Any]]:
        return sorted(self._bound.items(), key=lambda pair: pair[0])

    def reconcile(self, descriptors: Iterable[ItemDescriptor]) -> WindowDiff:
        """
        Diff the items found in the query region against the visible set.

        Args:
            descriptors: Natural descriptors of every item in the region

        Returns:
            Ids to detach and descriptors to attach. Nothing is mutated until
            ``commit`` is called.
        """
        current: Dict[ItemId, ItemDescriptor] = {}
        for descriptor in descriptors:
            current.setdefault(descriptor.id, descriptor)

        to_remove = frozenset(item_id for item_id in self._bound if item_id not in current)
        to_add = tuple(
            current[item_id] for item_id in sorted(current) if item_id not in self._bound
        )
        return WindowDiff(to_remove=to_remove, to_add=to_add)

    def commit(self, diff: WindowDiff, created: Mapping[ItemId, Any]) -> None:
        expected = {descriptor.id for descriptor in diff.to_add}
        if set(created) != expected:
            raise ValueError(
                f"created handles {sorted(created)} do not match additions {sorted(expected)}"
            )
        for item_id in diff.to_remove:
            self._bound.pop(item_id, None)
        self._bound.update(created)

    def clear(self) -> Dict[ItemId, Any]:
        released, self._bound = self._bound, {}
        return released
