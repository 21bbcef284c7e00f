"""Client: reads a configuration, logs console lines and sends them to the server."""
from __future__ import annotations

import argparse
import logging
import socket
import sys
from collections.abc import Callable, Iterable

from tpsockets.config import Config
from tpsockets.protocol import Packet, message_packet

DEFAULT_CONFIG_PATH = "./../client/cliente.config"
DEFAULT_LOG_PATH = "./../client/logs/bocajrs.log"
DEFAULT_PROCESS_NAME = "someProcessName"

_FORMAT = "[%(levelname)s] %(asctime)s %(name)s/(%(process)d:%(thread)d): %(message)s"


def is_blank(text: str | None) -> bool:
    """Tell whether a line is missing, empty or only whitespace."""
    return text is None or not text.strip()


def init_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """Load the client configuration."""
    return Config.load(path)


def init_logger(config: Config | None = None) -> logging.Logger:
    """Create the client logger from the LOG_* settings of a configuration."""
    config = config if config is not None else Config()
    log_path = config.get_string("LOG_PATH_FILE_NAME") or DEFAULT_LOG_PATH
    in_console = bool(config.get_int("LOG_IN_CONSOLE")) if config.has("LOG_IN_CONSOLE") else True
    process_name = config.get_string("LOG_PROCESS_NAME") or DEFAULT_PROCESS_NAME

    logger = logging.getLogger(process_name)
    _close_logger(logger)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    formatter = logging.Formatter(_FORMAT, "%H:%M:%S")
    handlers: list[logging.Handler] = [logging.FileHandler(log_path, encoding="utf-8")]
    if in_console:
        handlers.append(logging.StreamHandler(sys.stdout))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def _close_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def read_console(
    logger: logging.Logger, input_func: Callable[[str], str] | None = None
) -> list[str]:
    """Log lines read from the console until a blank one; return the others."""
    read = input if input_func is None else input_func
    lines: list[str] = []
    while True:
        try:
            line: str | None = read("> ")
        except EOFError:
            line = None
        logger.info("%s", "" if line is None else line)
        if is_blank(line):
            logger.info("se recibió una cadena nula o vacía, finalizando")
            return lines
        lines.append(line)


def create_connection(ip: str, port: str | int) -> socket.socket:
    """Open a TCP connection over IPv4 to the server."""
    last_error: OSError | None = None
    for family, socktype, proto, _, address in socket.getaddrinfo(
        ip, port, socket.AF_INET, socket.SOCK_STREAM
    ):
        sock = socket.socket(family, socktype, proto)
        try:
            sock.connect(address)
        except OSError as error:
            sock.close()
            last_error = error
            continue
        return sock
    raise last_error or OSError(f"no address found for {ip}:{port}")


def send_message(message: str, sock: socket.socket) -> None:
    """Send a text message frame."""
    sock.sendall(message_packet(message).serialize())


def send_packet(packet: Packet, sock: socket.socket) -> None:
    """Send a packet frame."""
    sock.sendall(packet.serialize())


def build_packet(lines: Iterable[str]) -> Packet:
    """Build a packet holding each line as one value."""
    packet = Packet()
    for line in lines:
        packet.add(line)
    return packet


def main(argv: list[str] | None = None) -> int:
    """Run the client."""
    parser = argparse.ArgumentParser(prog="tpsockets-client")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    args = parser.parse_args(argv)

    config = init_config(args.config)
    logger = init_logger(config)
    try:
        logger.info("Logger inicializado.")
        logger.info("configuracion de entorno inicializada.")

        ip = config.get_string("IP")
        port = config.get_string("PUERTO")
        if ip is None or port is None:
            logger.error(
                "no se pudo recuperar algunas de las variables de entorno: ip, puerto, ..."
            )
            return 1

        logger.info("logeando valor de la ip: ")
        logger.info("%s", ip)
        logger.info("logeando valor del puerto: ")
        logger.info("%s", port)

        read_console(logger)

        with create_connection(ip, port) as connection:
            send_packet(build_packet(read_console(logger)), connection)
        return 0
    finally:
        _close_logger(logger)


if __name__ == "__main__":
    sys.exit(main())