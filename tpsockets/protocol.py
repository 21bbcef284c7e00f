"""Wire format shared by the client and the server.

Every frame is an operation code and a payload size, both 32-bit
little-endian signed integers, followed by the payload. A packet payload
is a run of values, each one prefixed by its own 32-bit length.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

INT_CODEC = struct.Struct("<i")
_HEADER = struct.Struct("<ii")


class OpCode(IntEnum):
    """Operation carried by a frame."""

    MESSAGE = 0
    PACKET = 1


def _as_bytes(value: str | bytes | bytearray) -> bytes:
    """Text goes on the wire NUL-terminated; raw bytes go as they are."""
    if isinstance(value, str):
        return value.encode("utf-8") + b"\0"
    return bytes(value)


@dataclass
class Packet:
    """A frame under construction: an operation code and its payload."""

    op_code: OpCode = OpCode.PACKET
    payload: bytearray = field(default_factory=bytearray)

    def add(self, value: str | bytes | bytearray) -> None:
        """Append one length-prefixed value to the payload."""
        data = _as_bytes(value)
        self.payload += INT_CODEC.pack(len(data)) + data

    def serialize(self) -> bytes:
        """Return the frame as it is sent over the socket."""
        return _HEADER.pack(int(self.op_code), len(self.payload)) + bytes(self.payload)


def message_packet(message: str | bytes) -> Packet:
    """Build a MESSAGE frame whose payload is the message itself."""
    return Packet(OpCode.MESSAGE, bytearray(_as_bytes(message)))


def decode_values(payload: bytes | bytearray) -> list[bytes]:
    """Split a packet payload into its length-prefixed values."""
    data = bytes(payload)
    values: list[bytes] = []
    offset = 0
    while offset < len(data):
        if offset + INT_CODEC.size > len(data):
            raise ValueError("truncated length prefix in packet payload")
        (size,) = INT_CODEC.unpack_from(data, offset)
        offset += INT_CODEC.size
        if size < 0:
            raise ValueError(f"negative value length {size} in packet payload")
        end = offset + size
        if end > len(data):
            raise ValueError("value runs past the end of the packet payload")
        values.append(data[offset:end])
        offset = end
    return values


def decode_message(payload: bytes | bytearray) -> str:
    """Read a payload as text, up to its first NUL byte."""
    return bytes(payload).split(b"\0", 1)[0].decode("utf-8", errors="replace")