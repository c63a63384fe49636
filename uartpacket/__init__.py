"""Serial-link packet framing codec.

This package contains:
- protocol: Wire format constants, TRACE level, hexdump helper
- checksum: XOR checksum shared by encoder and scanner
- codec: encode() and scan() for single frames
- resync: scan_resync() and iter_packets() that skip corrupt headers
- stats: survey() and ScanStats for whole-buffer summaries
- errors: Exception hierarchy (encode, incomplete, corrupt)
"""

from uartpacket.checksum import xor_checksum
from uartpacket.codec import ScanResult, encode, scan
from uartpacket.errors import (
    BufferTooShortError,
    ChecksumMismatchError,
    CorruptFrameError,
    DecodeError,
    DecodeErrorKind,
    EmptyInputError,
    EmptyPayloadDecodeError,
    EmptyPayloadError,
    EncodeError,
    HeaderNotFoundError,
    IncompleteFrameError,
    MissingFooterError,
    MissingLengthFlagError,
    MissingMarkerError,
    OffsetOutOfRangeError,
    PacketError,
    PayloadTooLargeError,
    TruncatedLengthOrMarkerError,
    TruncatedPayloadError,
)
from uartpacket.protocol import FOOTER, FRAME_OVERHEAD, HEADER, MARKER, MAX_PAYLOAD_SIZE
from uartpacket.resync import iter_packets, scan_resync
from uartpacket.stats import ScanStats, survey

__all__ = [
    # Protocol
    "HEADER",
    "MARKER",
    "FOOTER",
    "FRAME_OVERHEAD",
    "MAX_PAYLOAD_SIZE",
    # Codec
    "ScanResult",
    "encode",
    "scan",
    "xor_checksum",
    # Resync
    "iter_packets",
    "scan_resync",
    # Stats
    "ScanStats",
    "survey",
    # Exceptions
    "BufferTooShortError",
    "ChecksumMismatchError",
    "CorruptFrameError",
    "DecodeError",
    "DecodeErrorKind",
    "EmptyInputError",
    "EmptyPayloadDecodeError",
    "EmptyPayloadError",
    "EncodeError",
    "HeaderNotFoundError",
    "IncompleteFrameError",
    "MissingFooterError",
    "MissingLengthFlagError",
    "MissingMarkerError",
    "OffsetOutOfRangeError",
    "PacketError",
    "PayloadTooLargeError",
    "TruncatedLengthOrMarkerError",
    "TruncatedPayloadError",
]
