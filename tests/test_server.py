"""Tests for hellobase.internet: Port values and the listening Server."""

from __future__ import annotations

import dataclasses
import json
import socket

import pytest
from pydantic import ValidationError

from hellobase import config
from hellobase.errors import IOFailureError
from hellobase.internet import Port, Server


def _read_entries(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestPort:
    def test_number_and_str(self):
        port = Port(number=6346)
        assert port.number == 6346
        assert str(port) == "6346"

    @pytest.mark.parametrize("number", [-1, 65536, 100000])
    def test_out_of_range(self, number):
        with pytest.raises(ValidationError):
            Port(number=number)

    def test_of_coerces_int_and_passes_port_through(self):
        port = Port(number=80)
        assert Port.of(80) == port
        assert Port.of(port) is port

    def test_frozen(self):
        port = Port(number=80)
        with pytest.raises(ValidationError):
            port.number = 81  # type: ignore[misc]


class TestServer:
    def test_binds_and_reports_address(self):
        server = Server(0)
        try:
            assert server.port == Port(number=0)
            assert server.address[1] > 0
            assert not server.closed
        finally:
            server.close()

    def test_accepts_connections_on_raw_socket(self):
        with Server(0) as server:
            port = server.address[1]
            client = socket.create_connection(("127.0.0.1", port), timeout=5)
            try:
                server.channel.settimeout(5)
                conn, _ = server.channel.accept()
                conn.close()
            finally:
                client.close()

    def test_port_in_use_until_first_closes(self):
        first = Server(0)
        port = first.address[1]
        with pytest.raises(IOFailureError):
            Server(port)
        first.close()
        second = Server(port)
        try:
            assert second.address[1] == port
        finally:
            second.close()

    def test_bind_failure_is_os_error(self):
        first = Server(0)
        try:
            with pytest.raises(OSError) as info:
                Server(first.address[1])
            assert isinstance(info.value.__cause__, OSError)
        finally:
            first.close()

    @pytest.mark.parametrize("bad", [-1, 65536, "80", 1.5])
    def test_invalid_port(self, bad):
        with pytest.raises(IOFailureError, match="invalid port"):
            Server(bad)  # type: ignore[arg-type]

    def test_close_twice_never_raises(self):
        server = Server(0)
        server.close()
        assert server.closed
        server.close()
        assert server.closed
        assert server.channel.fileno() == -1

    def test_close_swallows_errors(self, log_dir):
        server = Server(0)
        port = server.address[1]
        real = server.channel

        class Exploding:
            def close(self):
                real.close()
                raise OSError("boom")

        server.channel = Exploding()  # type: ignore[assignment]
        server.close()
        assert server.closed
        assert real.fileno() == -1

        entries = _read_entries(log_dir / f"server_port-{port}.jsonl")
        messages = [e["message"] for e in entries]
        assert messages == ["listening", "close failed"]
        assert entries[-1]["level"] == "warning"
        assert entries[-1]["error"] == "boom"

    def test_logs_lifecycle(self, log_dir):
        server = Server(0)
        port = server.address[1]
        server.close()
        entries = _read_entries(log_dir / f"server_port-{port}.jsonl")
        assert [e["message"] for e in entries] == ["listening", "closed"]
        assert all(e["component"] == "server" for e in entries)

    def test_repr(self):
        server = Server(0)
        assert repr(server) == "Server(port=0, listening)"
        server.close()
        assert repr(server) == "Server(port=0, closed)"

    def test_log_named_after_bound_port(self, log_dir):
        """Two servers on OS-picked ports keep separate event logs."""
        first = Server(0)
        second = Server(0)
        ports = [first.address[1], second.address[1]]
        first.close()
        second.close()

        for port in ports:
            entries = _read_entries(log_dir / f"server_port-{port}.jsonl")
            assert entries[0]["session_id"] == f"port-{port}"
            assert entries[0]["bound"] == port
            assert [e["message"] for e in entries] == ["listening", "closed"]
        assert not (log_dir / "server_port-0.jsonl").exists()

    def test_unopenable_log_is_io_failure(self, log_dir):
        """A file sitting where the log folder goes fails the Server, not the caller's process."""
        log_dir.parent.mkdir(parents=True, exist_ok=True)
        log_dir.write_text("not a folder")
        with pytest.raises(IOFailureError, match="cannot open server log") as info:
            Server(0)
        assert isinstance(info.value.__cause__, OSError)

    @pytest.mark.skipif(not socket.has_dualstack_ipv6(), reason="no dual-stack IPv6 here")
    def test_dual_stack_takes_ipv4(self):
        with Server(0) as server:
            assert server.channel.family == socket.AF_INET6
            port = server.address[1]
            server.channel.settimeout(5)
            client = socket.create_connection(("127.0.0.1", port), timeout=5)
            try:
                conn, _ = server.channel.accept()
                conn.close()
            finally:
                client.close()

    def test_ipv4_only_when_host_given(self, monkeypatch):
        monkeypatch.setattr(
            config, "settings", dataclasses.replace(config.settings, listen_host="127.0.0.1")
        )
        with Server(0) as server:
            assert server.channel.family == socket.AF_INET
            assert server.address[0] == "127.0.0.1"
