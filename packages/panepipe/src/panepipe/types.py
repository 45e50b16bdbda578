"""Type definitions for panepipe - pane topology and wire shapes.

A snapshot maps tab index to the panes of that tab. Only terminal panes are
tracked; plugin-hosted panes never reach the registry.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TypedDict

type PaneID = int  # e.g., 42 - numeric terminal pane id
type TabIndex = int


@dataclass(frozen=True)
class PaneEntry:
    """Raw pane entry as delivered by a topology source."""

    id: PaneID
    title: str
    is_focused: bool = False
    is_floating: bool = False
    is_plugin: bool = False


type Snapshot = Mapping[TabIndex, Sequence[PaneEntry]]


class PaneDTO(TypedDict):
    """Pane shape returned to controllers."""

    id: PaneID
    title: str
    is_focused: bool
    is_floating: bool


@dataclass(frozen=True)
class PaneRecord:
    """One tracked terminal pane."""

    id: PaneID
    title: str
    is_focused: bool
    is_floating: bool

    @classmethod
    def from_entry(cls, entry: PaneEntry) -> "PaneRecord":
        return cls(
            id=entry.id,
            title=entry.title,
            is_focused=entry.is_focused,
            is_floating=entry.is_floating,
        )

    def to_dto(self) -> PaneDTO:
        return PaneDTO(
            id=self.id,
            title=self.title,
            is_focused=self.is_focused,
            is_floating=self.is_floating,
        )


# Display types for ls() command
class PaneRow(TypedDict):
    """Row data for pane listing."""

    ID: int
    Title: str
    Focused: str
    Floating: str
