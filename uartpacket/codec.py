"""Packet encoding and scanning for serial links.

Frames use a header-synced, length-prefixed layout with an XOR checksum:
  [A5 5A][len_hi len_lo][A0][payload][checksum][04]

The length is big-endian with the MSB of the high byte forced to 1. The
checksum is the XOR of all payload bytes, so XOR-ing the payload with the
checksum byte gives 0 on an intact frame.

The header lets a scanner recover a frame from a buffer that also holds
unrelated bytes (e.g., when reading a line mid-transmission).
"""

import logging
from dataclasses import dataclass

from uartpacket.checksum import xor_checksum
from uartpacket.errors import (
    BufferTooShortError,
    ChecksumMismatchError,
    EmptyPayloadDecodeError,
    EmptyPayloadError,
    HeaderNotFoundError,
    MissingFooterError,
    MissingLengthFlagError,
    MissingMarkerError,
    OffsetOutOfRangeError,
    PayloadTooLargeError,
    TruncatedLengthOrMarkerError,
    TruncatedPayloadError,
)
from uartpacket.protocol import (
    FOOTER,
    FRAME_OVERHEAD,
    HEADER,
    HEADER_SIZE,
    LENGTH_FLAG,
    LENGTH_HIGH_MASK,
    MARKER,
    MAX_PAYLOAD_SIZE,
    MIN_SCAN_REMAINDER,
    TRACE,
    hexdump,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """A payload recovered from a buffer.

    Attributes:
        payload: The frame's payload bytes.
        header_index: Buffer index of the first header byte.
        end_index: Buffer index of the footer byte (inclusive).
    """

    payload: bytes
    header_index: int
    end_index: int

    @property
    def next_offset(self) -> int:
        """Offset to resume scanning after this frame."""
        return self.end_index + 1

    @property
    def frame_length(self) -> int:
        """Number of buffer bytes the frame occupies."""
        return self.end_index - self.header_index + 1


def encode(payload: bytes) -> bytes:
    """Wrap a payload in header, length, marker, checksum and footer.

    Raises:
        EmptyPayloadError: If payload is empty.
        PayloadTooLargeError: If payload is longer than MAX_PAYLOAD_SIZE.
    """
    size = len(payload)
    if size == 0:
        raise EmptyPayloadError("Payload is empty")
    if size > MAX_PAYLOAD_SIZE:
        raise PayloadTooLargeError(
            f"Payload is {size} bytes, max {MAX_PAYLOAD_SIZE}"
        )

    frame = bytearray(HEADER)
    frame.append(LENGTH_FLAG | (size >> 8))
    frame.append(size & 0xFF)
    frame.append(MARKER)
    frame += payload
    frame.append(xor_checksum(payload))
    frame.append(FOOTER)

    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, f"Encoded {size}-byte payload: {hexdump(bytes(frame))}")
    return bytes(frame)


def scan(buffer: bytes, offset: int = 0) -> ScanResult:
    """Find and validate the first frame at or after offset.

    Bytes before the header are skipped. Once a header is found the frame
    behind it must be valid; the scan does not move on to a later header.

    Raises:
        IncompleteFrameError: If the buffer ends before a frame is complete
            (OffsetOutOfRangeError, BufferTooShortError, HeaderNotFoundError,
            TruncatedLengthOrMarkerError, TruncatedPayloadError).
        CorruptFrameError: If the frame after the header is invalid
            (MissingLengthFlagError, EmptyPayloadDecodeError,
            MissingMarkerError, ChecksumMismatchError, MissingFooterError).
    """
    buffer_len = len(buffer)
    if offset < 0 or offset >= buffer_len:
        raise OffsetOutOfRangeError(
            f"Offset {offset} out of range for {buffer_len}-byte buffer"
        )
    if buffer_len - offset <= MIN_SCAN_REMAINDER:
        raise BufferTooShortError(
            f"Only {buffer_len - offset} bytes after offset {offset}, "
            f"need more than {MIN_SCAN_REMAINDER}"
        )

    buffer = bytes(buffer)
    head = buffer.find(HEADER, offset)
    if head < 0:
        raise HeaderNotFoundError(f"No header in buffer[{offset}:{buffer_len}]")
    if head > offset:
        logger.debug(f"Resynced after skipping {head - offset} bytes")

    # Length (2) and marker (1)
    i = head + HEADER_SIZE
    if buffer_len - i < 3:
        raise TruncatedLengthOrMarkerError(
            f"Buffer ends {buffer_len - i} bytes after header at {head}", head
        )

    length_hi = buffer[i]
    if not length_hi & LENGTH_FLAG:
        raise MissingLengthFlagError(
            f"Length byte 0x{length_hi:02X} at {i} lacks the 0x80 flag", head
        )
    size = (length_hi & LENGTH_HIGH_MASK) << 8 | buffer[i + 1]
    if size == 0:
        raise EmptyPayloadDecodeError(f"Zero payload length at {i}", head)

    i += 2
    if buffer[i] != MARKER:
        raise MissingMarkerError(
            f"Expected marker 0x{MARKER:02X} at {i}, got 0x{buffer[i]:02X}", head
        )

    # Marker + payload + checksum + footer
    if buffer_len - i < size + 3:
        raise TruncatedPayloadError(
            f"Frame at {head} needs {size + FRAME_OVERHEAD} bytes, "
            f"buffer holds {buffer_len - head}",
            head,
        )

    i += 1
    payload = buffer[i : i + size]
    i += size

    checksum = buffer[i]
    expected = xor_checksum(payload)
    if expected ^ checksum:
        raise ChecksumMismatchError(
            f"Checksum 0x{checksum:02X} at {i} does not match 0x{expected:02X}",
            head,
        )

    i += 1
    if buffer[i] != FOOTER:
        raise MissingFooterError(
            f"Expected footer 0x{FOOTER:02X} at {i}, got 0x{buffer[i]:02X}", head
        )

    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, f"Scanned frame [{head}..{i}]: {hexdump(payload)}")
    return ScanResult(payload=payload, header_index=head, end_index=i)
