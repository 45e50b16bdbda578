"""tmux-backed topology source and character writer.

Windows play the role of tabs. tmux has neither floating nor plugin panes, so
both flags are always False for entries produced here.

PUBLIC API:
  - run_tmux: Run tmux command and return result
  - list_topology: Snapshot of a session's panes grouped by window
  - write_chars: Write literal characters into a pane
  - parse_pane_id: Convert "%42" to 42
"""

import subprocess
from collections import defaultdict

from .errors import TmuxError
from .types import PaneEntry, PaneID, Snapshot, TabIndex

__all__ = ["run_tmux", "list_topology", "write_chars", "parse_pane_id"]

_PANE_FORMAT = "#{window_index}\t#{pane_id}\t#{pane_active}\t#{window_active}\t#{pane_title}"


def run_tmux(args: list[str]) -> tuple[int, str, str]:
    """Run tmux command, return (returncode, stdout, stderr)."""
    cmd = ["tmux"] + args
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise TmuxError("tmux is not installed") from e
    except (OSError, UnicodeDecodeError) as e:
        raise TmuxError(f"tmux command failed: {e}") from e
    return result.returncode, result.stdout, result.stderr


def parse_pane_id(raw: str) -> PaneID:
    """Convert a tmux pane id like "%42" to 42.

    Raises:
        TmuxError: If raw is not a tmux pane id.
    """
    if not (raw.startswith("%") and raw[1:].isdigit()):
        raise TmuxError(f"Invalid tmux pane id: {raw!r}")
    return int(raw[1:])


def _parse_pane_line(line: str) -> tuple[TabIndex, PaneEntry]:
    window, pane_id, pane_active, window_active, title = line.split("\t", 4)
    entry = PaneEntry(
        id=parse_pane_id(pane_id),
        title=title,
        is_focused=pane_active == "1" and window_active == "1",
    )
    return int(window), entry


def list_topology(session: str | None = None) -> Snapshot:
    """Snapshot all panes of a session, keyed by window index.

    Args:
        session: Session name. Defaults to the current session.

    Returns:
        Mapping of window index to panes in tmux order.

    Raises:
        TmuxError: If tmux fails or prints unexpected output.
    """
    args = ["list-panes", "-s", "-F", _PANE_FORMAT]
    if session:
        args[2:2] = ["-t", session]

    code, stdout, stderr = run_tmux(args)
    if code != 0:
        raise TmuxError(f"Failed to list panes: {stderr.strip()}")

    tabs: dict[TabIndex, list[PaneEntry]] = defaultdict(list)
    for line in stdout.splitlines():
        if not line.strip():
            continue
        try:
            window, entry = _parse_pane_line(line)
        except ValueError as e:
            raise TmuxError(f"Unexpected list-panes output: {line!r}") from e
        tabs[window].append(entry)
    return dict(tabs)


def write_chars(pane_id: PaneID, chars: str) -> None:
    """Write chars literally into a pane.

    Raises:
        TmuxError: If tmux rejects the write.
    """
    code, _, stderr = run_tmux(["send-keys", "-t", f"%{pane_id}", "-l", "--", chars])
    if code != 0:
        raise TmuxError(f"Failed to send keys to %{pane_id}: {stderr.strip()}")
