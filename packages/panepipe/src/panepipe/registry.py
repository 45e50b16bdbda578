"""Pane registry - latest known pane topology.

PUBLIC API:
  - PaneRegistry: Ordered pane records with O(1) id lookup
"""

import logging

from .types import PaneID, PaneRecord, Snapshot

__all__ = ["PaneRegistry"]

logger = logging.getLogger(__name__)


class PaneRegistry:
    """Ordered view of the terminal panes in the latest snapshot.

    The registry is rebuilt wholesale by replace_snapshot() and never patched.
    Panes are ordered by ascending tab index, then by delivery order within a
    tab. Plugin-hosted panes are dropped.

    When a snapshot repeats an id, every entry stays listable but id lookup
    resolves to the last one.
    """

    def __init__(self):
        self._panes: list[PaneRecord] = []
        self._index_by_id: dict[PaneID, int] = {}

    def replace_snapshot(self, tabs: Snapshot) -> None:
        """Replace all state with the panes of a full topology snapshot.

        Args:
            tabs: Mapping of tab index to that tab's raw pane entries.
        """
        self._panes.clear()
        self._index_by_id.clear()

        for _tab_idx, entries in sorted(tabs.items()):
            for entry in entries:
                if entry.is_plugin:
                    continue
                if entry.id in self._index_by_id:
                    logger.warning(f"Duplicate pane id {entry.id} in snapshot, lookup uses last entry")
                self._index_by_id[entry.id] = len(self._panes)
                self._panes.append(PaneRecord.from_entry(entry))

        logger.debug(f"Snapshot applied: {len(tabs)} tabs, {len(self._panes)} panes")

    def get_by_id(self, pane_id: PaneID) -> PaneRecord | None:
        idx = self._index_by_id.get(pane_id)
        return self._panes[idx] if idx is not None else None

    def get_by_title(self, title: str) -> PaneRecord | None:
        """First pane whose title equals title."""
        return next((p for p in self._panes if p.title == title), None)

    def get_by_prefix(self, prefix: str) -> list[PaneRecord]:
        """All panes whose title starts with prefix, in snapshot order."""
        return [p for p in self._panes if p.title.startswith(prefix)]

    def __len__(self) -> int:
        return len(self._panes)

    def list(self) -> list[PaneRecord]:
        """All tracked panes in snapshot order."""
        return [*self._panes]
