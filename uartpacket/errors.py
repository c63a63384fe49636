"""Exception types for uartpacket.

Contains:
- PacketError: Base class for every codec failure
- EncodeError: Payload rejected by the encoder
- EmptyInputError: Checksum requested over no bytes
- DecodeError: Scan failure, tagged with a DecodeErrorKind
- IncompleteFrameError / CorruptFrameError: the two decode failure classes

IncompleteFrameError means the buffer ran out; the caller may wait for more
bytes. CorruptFrameError means a header matched but the frame behind it is
invalid; the caller should resume scanning after that header.
"""

from enum import IntEnum


class PacketError(Exception):
    """Base class for all uartpacket errors."""

    pass


class EncodeError(PacketError, ValueError):
    """Raised when a payload cannot be framed."""

    pass


class EmptyPayloadError(EncodeError):
    """Raised when encoding a zero-length payload."""

    pass


class PayloadTooLargeError(EncodeError):
    """Raised when a payload exceeds the 7-bit length field."""

    pass


class EmptyInputError(PacketError, ValueError):
    """Raised when a checksum is computed over no bytes."""

    pass


class DecodeErrorKind(IntEnum):
    """Reason a scan failed."""

    OFFSET_OUT_OF_RANGE = 1
    BUFFER_TOO_SHORT = 2
    HEADER_NOT_FOUND = 3
    TRUNCATED_LENGTH_OR_MARKER = 4
    MISSING_LENGTH_FLAG = 5
    EMPTY_PAYLOAD = 6
    MISSING_MARKER = 7
    TRUNCATED_PAYLOAD = 8
    CHECKSUM_MISMATCH = 9
    MISSING_FOOTER = 10


class DecodeError(PacketError):
    """Raised when no valid frame can be read from a buffer.

    Attributes:
        kind: Which check failed.
        position: Buffer index of the matched header, or None if no header
            was reached.
    """

    kind: DecodeErrorKind

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class IncompleteFrameError(DecodeError):
    """Raised when the buffer ends before a frame could be read."""

    pass


class CorruptFrameError(DecodeError):
    """Raised when a matched header is followed by an invalid frame."""

    pass


class OffsetOutOfRangeError(IncompleteFrameError):
    kind = DecodeErrorKind.OFFSET_OUT_OF_RANGE


class BufferTooShortError(IncompleteFrameError):
    kind = DecodeErrorKind.BUFFER_TOO_SHORT


class HeaderNotFoundError(IncompleteFrameError):
    kind = DecodeErrorKind.HEADER_NOT_FOUND


class TruncatedLengthOrMarkerError(IncompleteFrameError):
    kind = DecodeErrorKind.TRUNCATED_LENGTH_OR_MARKER


class TruncatedPayloadError(IncompleteFrameError):
    kind = DecodeErrorKind.TRUNCATED_PAYLOAD


class MissingLengthFlagError(CorruptFrameError):
    kind = DecodeErrorKind.MISSING_LENGTH_FLAG


class EmptyPayloadDecodeError(CorruptFrameError):
    kind = DecodeErrorKind.EMPTY_PAYLOAD


class MissingMarkerError(CorruptFrameError):
    kind = DecodeErrorKind.MISSING_MARKER


class ChecksumMismatchError(CorruptFrameError):
    kind = DecodeErrorKind.CHECKSUM_MISMATCH


class MissingFooterError(CorruptFrameError):
    kind = DecodeErrorKind.MISSING_FOOTER
