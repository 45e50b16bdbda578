"""PanePipe daemon server.

Controllers connect to a unix socket and exchange newline-delimited JSON:
one request per line, one response line back. Everything runs on a single
event loop, so topology refreshes and requests never interleave.

PUBLIC API:
  - PanePipeDaemon: Main daemon class with async socket server
"""

import asyncio
import logging
import signal
from asyncio import StreamReader, StreamWriter
from collections.abc import Callable
from pathlib import Path

from ..agent import PaneAgent
from ..config import ConfigManager, get_config_manager
from ..errors import TmuxError, TransportParseError
from ..executor import ActionExecutor, CharsExecutor
from ..ipc import Response, encode_response
from ..tmux import list_topology, write_chars
from ..types import Snapshot

__all__ = ["PanePipeDaemon"]

logger = logging.getLogger(__name__)

type TopologySource = Callable[[], Snapshot]

MAX_LINE = 1024 * 1024  # bytes per request line


class PanePipeDaemon:
    """Main daemon process owning the pane agent."""

    def __init__(
        self,
        config: ConfigManager | None = None,
        topology: TopologySource | None = None,
        executor: ActionExecutor | None = None,
        max_line: int = MAX_LINE,
    ):
        config = config or get_config_manager()
        self.socket_path: Path = config.socket_path
        self.poll_interval = config.poll_interval
        self.max_line = max_line
        session = config.session

        self.topology = topology or (lambda: list_topology(session))
        self.agent = PaneAgent(executor=executor or CharsExecutor(write_chars))

        self._running = False
        self._server: asyncio.Server | None = None
        self._refresh_task: asyncio.Task | None = None

    def refresh(self) -> bool:
        """Pull one snapshot from the topology source into the agent.

        Returns:
            True if the snapshot was applied, False if the source failed.
        """
        try:
            snapshot = self.topology()
        except TmuxError as e:
            logger.warning(f"Topology refresh failed, keeping previous snapshot: {e}")
            return False
        except Exception as e:
            logger.error(f"Topology source crashed, keeping previous snapshot: {e}", exc_info=True)
            return False

        self.agent.on_pane_update(snapshot)
        return True

    async def start(self):
        """Start daemon and listen on the agent socket."""
        self._running = True
        self.refresh()

        # Clean up old socket
        self.socket_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        if self.socket_path.exists():
            self.socket_path.unlink()

        self._server = await asyncio.start_unix_server(
            self._handle_rpc, path=str(self.socket_path), limit=self.max_line
        )
        self.socket_path.chmod(0o600)
        logger.info(f"RPC server listening on {self.socket_path}")

        self._refresh_task = asyncio.create_task(self._refresh_loop())

        # Setup signal handlers
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, lambda: asyncio.create_task(self.stop()))

        logger.info(f"Daemon started: {self.agent.status_line()}")

    async def stop(self):
        """Gracefully stop the daemon."""
        if not self._running:
            return

        self._running = False
        logger.info("Stopping daemon...")

        try:
            if self._refresh_task:
                self._refresh_task.cancel()
                try:
                    await self._refresh_task
                except asyncio.CancelledError:
                    pass
                except Exception as e:
                    logger.error(f"Refresh task ended with error: {e}")

            if self._server:
                self._server.close()
                await self._server.wait_closed()
        finally:
            if self.socket_path.exists():
                self.socket_path.unlink()

        logger.info("Daemon stopped")

    async def run(self):
        """Start and run until stopped."""
        await self.start()
        while self._running:
            await asyncio.sleep(1)

    async def _refresh_loop(self):
        while self._running:
            await asyncio.sleep(self.poll_interval)
            self.refresh()

    async def _read_request(self, reader: StreamReader) -> bytes | None:
        """Read the next request line, None at EOF.

        Raises:
            TransportParseError: If the line exceeds max_line. The whole line
                is discarded so the connection stays usable.
        """
        try:
            return await reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as e:
            return e.partial or None
        except asyncio.LimitOverrunError as e:
            consumed = e.consumed

        # Drop the oversized line, separator included
        while True:
            try:
                await reader.readexactly(consumed)
                await reader.readuntil(b"\n")
                break
            except asyncio.LimitOverrunError as e:
                consumed = e.consumed
            except asyncio.IncompleteReadError:
                break
        raise TransportParseError(f"request line exceeds {self.max_line} bytes")

    async def _send(self, writer: StreamWriter, response: Response):
        writer.write(encode_response(response).encode() + b"\n")
        await writer.drain()

    async def _handle_rpc(self, reader: StreamReader, writer: StreamWriter):
        """Handle incoming RPC connection."""
        try:
            while True:
                try:
                    data = await self._read_request(reader)
                except TransportParseError as e:
                    logger.warning(f"Rejecting request: {e.detail}")
                    await self._send(writer, Response.fail("", e.message))
                    continue

                if data is None:
                    break
                if not data.strip():
                    continue

                await self._send(writer, self.agent.handle(data))
        except (ConnectionResetError, BrokenPipeError) as e:
            logger.warning(f"Controller connection dropped: {e}")
        except Exception as e:
            logger.error(f"Controller connection failed: {e}", exc_info=True)
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionResetError, BrokenPipeError):
                pass
