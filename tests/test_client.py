import logging
import socket

import pytest

from tpsockets.client import (
    build_packet,
    create_connection,
    init_logger,
    is_blank,
    main,
    read_console,
    send_message,
    send_packet,
)
from tpsockets.config import Config
from tpsockets.protocol import OpCode, decode_message, decode_values, message_packet
from tpsockets.server import receive_operation, receive_packet, start_server, wait_client


def _recv_all(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        assert chunk
        data += chunk
    return data


@pytest.mark.parametrize(
    "text, expected",
    [(None, True), ("", True), ("   \t\n", True), ("hola", False), ("  x ", False)],
)
def test_is_blank(text, expected):
    assert is_blank(text) is expected


def _quiet_logger(name):
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    return logger


def test_read_console_stops_on_blank():
    lines = iter(["uno", "dos", "  ", "tres"])
    result = read_console(_quiet_logger("t1"), lambda prompt: next(lines))
    assert result == ["uno", "dos"]
    assert next(lines) == "tres"


def test_read_console_stops_on_eof():
    def reader(prompt):
        raise EOFError

    assert read_console(_quiet_logger("t2"), reader) == []


def test_init_logger_writes_file(tmp_path):
    log_file = tmp_path / "client.log"
    config = Config(
        {
            "LOG_PATH_FILE_NAME": str(log_file),
            "LOG_IN_CONSOLE": "0",
            "LOG_PROCESS_NAME": "procesoPrueba",
        }
    )
    logger = init_logger(config)
    logger.info("mensaje visible")
    for handler in logger.handlers:
        handler.flush()
    assert logger.name == "procesoPrueba"
    assert len(logger.handlers) == 1
    assert "mensaje visible" in log_file.read_text(encoding="utf-8")


def test_build_packet_holds_lines():
    packet = build_packet(["a", "bc"])
    assert packet.op_code == OpCode.PACKET
    assert [decode_message(v) for v in decode_values(packet.payload)] == ["a", "bc"]


def test_send_message_frames():
    left, right = socket.socketpair()
    with left, right:
        send_message("hola", left)
        expected = message_packet("hola").serialize()
        assert _recv_all(right, len(expected)) == expected


def test_send_packet_frames():
    packet = build_packet(["x", "y"])
    left, right = socket.socketpair()
    with left, right:
        send_packet(packet, left)
        expected = packet.serialize()
        assert _recv_all(right, len(expected)) == expected


def test_create_connection_reaches_server():
    with start_server("127.0.0.1", 0) as server:
        port = server.getsockname()[1]
        with create_connection("127.0.0.1", str(port)) as conn:
            with wait_client(server) as peer:
                conn.sendall(b"ping")
                assert _recv_all(peer, 4) == b"ping"


def test_main_without_address_fails(tmp_path):
    config_file = tmp_path / "cliente.config"
    config_file.write_text(
        f"LOG_PATH_FILE_NAME={tmp_path / 'c.log'}\nLOG_IN_CONSOLE=0\n", encoding="utf-8"
    )
    assert main(["--config", str(config_file)]) == 1


def test_main_sends_console_lines(tmp_path, monkeypatch):
    with start_server("127.0.0.1", 0) as server:
        port = server.getsockname()[1]
        config_file = tmp_path / "cliente.config"
        config_file.write_text(
            f"IP=127.0.0.1\nPUERTO={port}\n"
            f"LOG_PATH_FILE_NAME={tmp_path / 'c.log'}\nLOG_IN_CONSOLE=0\n",
            encoding="utf-8",
        )
        lines = iter(["primera", "", "uno", "dos", ""])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        assert main(["--config", str(config_file)]) == 0
        with wait_client(server) as peer:
            assert receive_operation(peer) == OpCode.PACKET
            assert receive_packet(peer) == ["uno", "dos"]