import pytest

from udpchat.protocol import (
    MAX_BUFFER_SIZE,
    BodyUtf8Error,
    BufferTooLargeError,
    MessageProtocol,
    ProtocolError,
    TruncatedError,
    UsernameTooLongError,
    UsernameUtf8Error,
)


def test_roundtrip_ok():
    original = MessageProtocol(user_name="bob", body="こんにちは、世界！🌏")
    frame = original.serialize()
    decoded = MessageProtocol.deserialize(frame)
    assert decoded == original


def test_username_too_long_error():
    msg = MessageProtocol(user_name="x" * 256, body="")
    with pytest.raises(UsernameTooLongError) as info:
        msg.serialize()
    assert info.value.length == 256


def test_buffer_too_large_error():
    msg = MessageProtocol(user_name="u", body="a" * MAX_BUFFER_SIZE)
    with pytest.raises(BufferTooLargeError) as info:
        msg.serialize()
    assert info.value.size == 1 + 1 + MAX_BUFFER_SIZE


def test_truncated_buffer_error():
    frame = bytes([5]) + b"abc"
    with pytest.raises(TruncatedError) as info:
        MessageProtocol.deserialize(frame)
    assert info.value.expected == 6
    assert info.value.actual == 4


def test_empty_buffer_is_truncated():
    with pytest.raises(TruncatedError) as info:
        MessageProtocol.deserialize(b"")
    assert (info.value.expected, info.value.actual) == (1, 0)


def test_wire_layout():
    frame = MessageProtocol(user_name="bob", body="hi").serialize()
    assert frame == b"\x03bobhi"


def test_empty_username_and_body():
    frame = MessageProtocol(user_name="", body="").serialize()
    assert frame == b"\x00"
    assert MessageProtocol.deserialize(frame) == MessageProtocol(user_name="", body="")


def test_username_at_limit_roundtrips():
    msg = MessageProtocol(user_name="y" * 255, body="ok")
    assert MessageProtocol.deserialize(msg.serialize()) == msg


def test_frame_at_exact_limit_serializes():
    msg = MessageProtocol(user_name="u", body="a" * (MAX_BUFFER_SIZE - 2))
    frame = msg.serialize()
    assert len(frame) == MAX_BUFFER_SIZE
    assert MessageProtocol.deserialize(frame) == msg


def test_deserialize_rejects_oversized_frame():
    with pytest.raises(BufferTooLargeError) as info:
        MessageProtocol.deserialize(b"\x00" + b"a" * MAX_BUFFER_SIZE)
    assert info.value.size == MAX_BUFFER_SIZE + 1


def test_invalid_utf8_username():
    with pytest.raises(UsernameUtf8Error):
        MessageProtocol.deserialize(b"\x02\xff\xfebody")


def test_invalid_utf8_body():
    with pytest.raises(BodyUtf8Error):
        MessageProtocol.deserialize(b"\x01a\xff")


def test_errors_share_base_class():
    with pytest.raises(ProtocolError):
        MessageProtocol.deserialize(b"")


def test_display_format():
    assert str(MessageProtocol(user_name="bob", body="hello")) == "<bob>: hello"


def test_username_length_counts_bytes_not_characters():
    msg = MessageProtocol(user_name="あ" * 86, body="")
    with pytest.raises(UsernameTooLongError) as info:
        msg.serialize()
    assert info.value.length == len("あ".encode("utf-8")) * 86