"""A small UDP chat toolkit: message framing, a UDP socket, client tracking, an echo server and a client."""

__version__ = "0.1.0"
__all__ = ["__version__"]