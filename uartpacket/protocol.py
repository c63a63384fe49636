"""Protocol definitions for uartpacket.

Contains:
- Wire format constants (header, marker, footer, field sizes)
- Payload size limits
- Logging configuration (TRACE level, hex dump limit)
"""

import logging
import os

# TRACE logging level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Max bytes hex-dumped per frame at TRACE level (configurable via envvar)
LOG_HEXDUMP_BYTES = int(os.environ.get("UARTPACKET_LOG_BYTES", "32"))

# Frame layout: [A5 5A][len_hi len_lo][A0][payload...][checksum][04]
HEADER = b"\xa5\x5a"
MARKER = 0xA0
FOOTER = 0x04

HEADER_SIZE = len(HEADER)
LENGTH_SIZE = 2
MARKER_SIZE = 1
CHECKSUM_SIZE = 1
FOOTER_SIZE = 1

# Bytes a frame adds around its payload
FRAME_OVERHEAD = HEADER_SIZE + LENGTH_SIZE + MARKER_SIZE + CHECKSUM_SIZE + FOOTER_SIZE

# MSB of the length high byte, always set on the wire
LENGTH_FLAG = 0x80
LENGTH_HIGH_MASK = 0x7F

MIN_PAYLOAD_SIZE = 1
MAX_PAYLOAD_SIZE = 0x7F

# Buffers with this many bytes or fewer past the offset are rejected before
# searching. One short of the smallest frame (8 bytes); kept for compatibility.
MIN_SCAN_REMAINDER = 7


def hexdump(data: bytes, limit: int = LOG_HEXDUMP_BYTES) -> str:
    """Format bytes as space-separated hex for log messages, truncated to limit."""
    if len(data) <= limit:
        return data.hex(" ")
    return f"{data[:limit].hex(' ')} ... (+{len(data) - limit} bytes)"
