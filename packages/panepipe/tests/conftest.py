"""Shared fixtures for panepipe tests."""

import pytest

from panepipe.registry import PaneRegistry
from panepipe.types import PaneEntry


def make_pane(pane_id: int, title: str, is_plugin: bool = False, is_focused: bool = False) -> PaneEntry:
    return PaneEntry(id=pane_id, title=title, is_focused=is_focused, is_plugin=is_plugin)


class RecordingWriter:
    """write_chars stand-in that records every call."""

    def __init__(self, fail: bool = False):
        self.calls: list[tuple[int, str]] = []
        self.fail = fail

    def __call__(self, pane_id: int, chars: str) -> None:
        if self.fail:
            raise OSError("pane is gone")
        self.calls.append((pane_id, chars))


@pytest.fixture
def registry() -> PaneRegistry:
    """Registry with proj__cc_1 (focused) and proj__cc_2 in tab 0."""
    reg = PaneRegistry()
    reg.replace_snapshot(
        {
            0: [
                make_pane(1, "proj__cc_1", is_focused=True),
                make_pane(2, "proj__cc_2"),
            ]
        }
    )
    return reg


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def failing_writer() -> RecordingWriter:
    return RecordingWriter(fail=True)
