"""A TCP client and server that exchange length-prefixed messages and value packets."""

__version__ = "0.1.0"
__all__ = ["protocol", "config", "client", "server"]