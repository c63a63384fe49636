"""Resynchronizing scans over a single buffer.

scan() stops at the first header it finds, even if the frame behind it is
corrupt. These helpers apply the usual receiver policy on top of it: skip
past a corrupt header and keep looking, and stop once the buffer runs out.
"""

import logging
from collections.abc import Iterator

from uartpacket.codec import ScanResult, scan
from uartpacket.errors import CorruptFrameError, IncompleteFrameError
from uartpacket.protocol import TRACE

logger = logging.getLogger(__name__)


def scan_resync(buffer: bytes, offset: int = 0) -> ScanResult:
    """Return the first valid frame at or after offset, skipping corrupt ones.

    Raises:
        IncompleteFrameError: If the buffer runs out before a valid frame.
    """
    buffer = bytes(buffer)
    while True:
        try:
            return scan(buffer, offset)
        except CorruptFrameError as e:
            assert e.position is not None
            logger.debug(f"Rejected header at {e.position} ({e.kind.name}): {e}")
            offset = e.position + 1


def iter_packets(buffer: bytes, offset: int = 0) -> Iterator[ScanResult]:
    """Yield every valid frame in buffer, in order.

    Iteration ends at the first IncompleteFrameError; the last yielded
    result's next_offset tells the caller how much of the buffer was used.
    """
    buffer = bytes(buffer)
    while True:
        try:
            result = scan_resync(buffer, offset)
        except IncompleteFrameError as e:
            logger.log(TRACE, f"Stopped at offset {offset}: {e}")
            return
        yield result
        offset = result.next_offset
