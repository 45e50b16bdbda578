"""Tests for the daemon transport and the socket client."""

import asyncio
import json
import socketserver
import threading

import pytest

from panepipe.agent import PaneAgent
from panepipe.client import PaneClient, generate_request_id
from panepipe.config import ConfigManager
from panepipe.daemon import PanePipeDaemon
from panepipe.errors import PaneClientError, TmuxError
from panepipe.executor import CharsExecutor
from panepipe.types import PaneEntry

SNAPSHOT = {0: [PaneEntry(id=1, title="proj__cc_1", is_focused=True), PaneEntry(id=2, title="proj__cc_2")]}


@pytest.fixture
def config(tmp_path):
    path = tmp_path / "panepipe.toml"
    path.write_text(f'[daemon]\nsocket = "{tmp_path / "agent.sock"}"\npoll_interval = 60\n')
    return ConfigManager(path)


class TestDaemon:
    def test_round_trip(self, config, writer):
        async def scenario():
            daemon = PanePipeDaemon(config=config, topology=lambda: SNAPSHOT, executor=CharsExecutor(writer))
            await daemon.start()
            try:
                reader, w = await asyncio.open_unix_connection(str(config.socket_path))
                w.write(b'{"id":"a","action":"list_panes"}\n\nnot json\n')
                w.write(b'{"id":"b","action":"send_keys","params":{"pane_id":2,"text":"ls","enter":true}}\n')
                await w.drain()
                lines = [json.loads(await reader.readline()) for _ in range(3)]
                w.close()
                await w.wait_closed()
            finally:
                await daemon.stop()
            return lines

        listed, malformed, sent = asyncio.run(scenario())

        assert listed["id"] == "a"
        assert [p["id"] for p in listed["data"]["panes"]] == [1, 2]
        assert malformed["id"] == ""
        assert "Failed to parse request" in malformed["error"]
        assert sent == {
            "id": "b",
            "success": True,
            "data": {"action": "send_keys", "pane_id": 2, "text": "ls", "enter": True},
        }
        assert writer.calls == [(2, "ls"), (2, "\n")]
        assert not config.socket_path.exists()

    def test_refresh_failure_keeps_snapshot(self, config, writer):
        snapshots = iter([SNAPSHOT])

        def topology():
            try:
                return next(snapshots)
            except StopIteration:
                raise TmuxError("no server running") from None

        daemon = PanePipeDaemon(config=config, topology=topology, executor=CharsExecutor(writer))

        assert daemon.refresh() is True
        assert daemon.refresh() is False
        assert len(daemon.agent.registry) == 2

    def test_oversized_line_rejected_and_connection_kept(self, config, writer):
        async def scenario():
            daemon = PanePipeDaemon(
                config=config, topology=lambda: SNAPSHOT, executor=CharsExecutor(writer), max_line=1024
            )
            await daemon.start()
            try:
                reader, w = await asyncio.open_unix_connection(str(config.socket_path))
                big = json.dumps({"id": "big", "action": "send_keys", "params": {"pane_id": 1, "text": "x" * 5000}})
                w.write(big.encode() + b"\n")
                w.write(b'{"id":"after","action":"list_panes"}\n')
                await w.drain()
                lines = [json.loads(await reader.readline()) for _ in range(2)]
                w.close()
                await w.wait_closed()
            finally:
                await daemon.stop()
            return lines

        rejected, after = asyncio.run(scenario())

        assert rejected == {
            "id": "",
            "success": False,
            "error": "Failed to parse request: request line exceeds 1024 bytes",
        }
        assert after["id"] == "after"
        assert after["success"] is True
        assert writer.calls == []

    def test_refresh_survives_unexpected_source_error(self, tmp_path, writer):
        path = tmp_path / "panepipe.toml"
        path.write_text(f'[daemon]\nsocket = "{tmp_path / "agent.sock"}"\npoll_interval = 0.01\n')
        config = ConfigManager(path)
        calls = []

        def topology():
            calls.append(1)
            if len(calls) == 1:
                return SNAPSHOT
            if len(calls) == 2:
                raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
            return {0: [PaneEntry(id=5, title="fresh")]}

        async def scenario():
            daemon = PanePipeDaemon(config=config, topology=topology, executor=CharsExecutor(writer))
            await daemon.start()
            try:
                for _ in range(200):
                    if len(calls) >= 3:
                        break
                    await asyncio.sleep(0.01)
            finally:
                await daemon.stop()
            return daemon

        daemon = asyncio.run(scenario())

        assert len(calls) >= 3
        assert [p.id for p in daemon.agent.registry.list()] == [5]
        assert not config.socket_path.exists()

    def test_stop_cleans_up_after_refresh_task_died(self, config, writer):
        def boom():
            raise RuntimeError("refresh exploded")

        async def scenario():
            daemon = PanePipeDaemon(config=config, topology=lambda: SNAPSHOT, executor=CharsExecutor(writer))
            daemon.poll_interval = 0.01
            await daemon.start()
            daemon.refresh = boom
            await asyncio.sleep(0.05)
            assert daemon._refresh_task.done()
            await daemon.stop()

        asyncio.run(scenario())

        assert not config.socket_path.exists()


class _AgentHandler(socketserver.StreamRequestHandler):
    def handle(self):
        line = self.rfile.readline()
        self.wfile.write(self.server.agent.handle_payload(line).encode() + b"\n")


@pytest.fixture
def agent_socket(tmp_path, writer):
    path = tmp_path / "client.sock"
    server = socketserver.UnixStreamServer(str(path), _AgentHandler)
    server.agent = PaneAgent(executor=CharsExecutor(writer))
    server.agent.on_pane_update(SNAPSHOT)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield path
    server.shutdown()
    server.server_close()


class TestPaneClient:
    def test_list_panes(self, agent_socket):
        panes = PaneClient(agent_socket).list_panes()
        assert [p["title"] for p in panes] == ["proj__cc_1", "proj__cc_2"]

    def test_get_pane_info(self, agent_socket):
        assert PaneClient(agent_socket).get_pane_info(2)["title"] == "proj__cc_2"

    def test_get_pane_info_missing(self, agent_socket):
        with pytest.raises(PaneClientError, match="pane not found: 99"):
            PaneClient(agent_socket).get_pane_info(99)

    def test_send_keys_and_interrupt(self, agent_socket, writer):
        client = PaneClient(agent_socket)
        client.send_keys(1, "hello", enter=True)
        client.send_interrupt(1)

        assert writer.calls == [(1, "hello"), (1, "\n"), (1, "\x03")]

    def test_request_echoes_id(self, agent_socket):
        resp = PaneClient(agent_socket).request("bogus")
        assert not resp.success
        assert resp.error == "unknown action: bogus"
        assert resp.id

    def test_daemon_not_running(self, tmp_path):
        with pytest.raises(PaneClientError, match="Cannot connect to agent"):
            PaneClient(tmp_path / "missing.sock").list_panes()


class TestRequestIds:
    def test_unique_and_counted(self):
        first, second = generate_request_id(), generate_request_id()

        assert first != second
        assert int(second.split("-")[1]) == int(first.split("-")[1]) + 1
