"""Wire format for chat frames sent over UDP.

* Maximum frame size: 4096 bytes
* Byte 0: user-name length (0-255)
* Bytes 1 .. 1 + length: user name (UTF-8)
* Remaining bytes: message body (UTF-8)
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_BUFFER_SIZE = 4096
MAX_USERNAME_LENGTH = 255


class ProtocolError(Exception):
    """Base class for every error raised while encoding or decoding a frame."""


class UsernameTooLongError(ProtocolError):
    """The encoded user name does not fit in the one-byte length field."""

    def __init__(self, length: int) -> None:
        super().__init__(f"username too long: {length} bytes (max {MAX_USERNAME_LENGTH})")
        self.length = length


class BufferTooLargeError(ProtocolError):
    """The frame is larger than MAX_BUFFER_SIZE."""

    def __init__(self, size: int) -> None:
        super().__init__(f"frame exceeds maximum size of {MAX_BUFFER_SIZE} bytes: {size}")
        self.size = size


class TruncatedError(ProtocolError):
    """The frame is shorter than its header says it must be."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"frame truncated: expected {expected} bytes, have {actual}")
        self.expected = expected
        self.actual = actual


class UsernameUtf8Error(ProtocolError):
    """The user-name bytes are not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError) -> None:
        super().__init__(f"invalid UTF-8 in username: {cause}")
        self.cause = cause


class BodyUtf8Error(ProtocolError):
    """The body bytes are not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError) -> None:
        super().__init__(f"invalid UTF-8 in body: {cause}")
        self.cause = cause


@dataclass(frozen=True)
class MessageProtocol:
    """A chat message: who sent it and what it says."""

    user_name: str
    body: str

    def serialize(self) -> bytes:
        """Encode the message into a wire frame."""
        name_bytes = self.user_name.encode("utf-8")
        if len(name_bytes) > MAX_USERNAME_LENGTH:
            raise UsernameTooLongError(len(name_bytes))

        frame = bytes([len(name_bytes)]) + name_bytes + self.body.encode("utf-8")
        if len(frame) > MAX_BUFFER_SIZE:
            raise BufferTooLargeError(len(frame))
        return frame

    @classmethod
    def deserialize(cls, buf: bytes) -> MessageProtocol:
        """Decode a wire frame into a message."""
        buf = bytes(buf)
        if len(buf) > MAX_BUFFER_SIZE:
            raise BufferTooLargeError(len(buf))
        if not buf:
            raise TruncatedError(expected=1, actual=0)

        name_len = buf[0]
        expected_min = 1 + name_len
        if len(buf) < expected_min:
            raise TruncatedError(expected=expected_min, actual=len(buf))

        try:
            user_name = buf[1:expected_min].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UsernameUtf8Error(exc) from exc
        try:
            body = buf[expected_min:].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BodyUtf8Error(exc) from exc
        return cls(user_name=user_name, body=body)

    def __str__(self) -> str:
        return f"<{self.user_name}>: {self.body}"