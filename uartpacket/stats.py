"""Buffer survey statistics for uartpacket.

Contains:
- ScanStats: Counts of packets, noise and failures found in one buffer
- survey: Walk a buffer with resync and collect ScanStats
"""

import logging
from dataclasses import dataclass

from uartpacket.codec import scan
from uartpacket.errors import (
    BufferTooShortError,
    ChecksumMismatchError,
    CorruptFrameError,
    IncompleteFrameError,
    OffsetOutOfRangeError,
    TruncatedLengthOrMarkerError,
    TruncatedPayloadError,
)
from uartpacket.protocol import HEADER

logger = logging.getLogger(__name__)


@dataclass
class ScanStats:
    """Result of surveying a buffer.

    Attributes:
        packets: Number of valid frames found.
        payload_bytes: Total payload bytes across valid frames.
        noise_bytes: Bytes belonging to no valid frame, up to where scanning stopped.
        checksum_errors: Headers rejected for a checksum mismatch.
        syntax_errors: Headers rejected for a bad flag, length, marker or footer.
        truncated_tail: True if the buffer ends inside a frame.
        consumed: Offset where scanning stopped.
    """

    packets: int = 0
    payload_bytes: int = 0
    noise_bytes: int = 0
    checksum_errors: int = 0
    syntax_errors: int = 0
    truncated_tail: bool = False
    consumed: int = 0

    @property
    def corrupt_headers(self) -> int:
        """Headers that matched but led to an invalid frame."""
        return self.checksum_errors + self.syntax_errors

    @property
    def checksum_pass_rate(self) -> float:
        """Return checksum pass rate as percentage (0-100)."""
        checked = self.packets + self.checksum_errors
        if checked == 0:
            return 0.0
        return (self.packets / checked) * 100

    def success(self) -> bool:
        """Return True if at least one packet was found and none failed checksum."""
        return self.packets > 0 and self.checksum_errors == 0

    def summary(self) -> list[str]:
        """Return the report as a list of lines."""
        lines = [
            f"Packets:         {self.packets} ({self.payload_bytes} payload bytes)",
            f"Noise bytes:     {self.noise_bytes}",
            f"Checksum errors: {self.checksum_errors}",
            f"Syntax errors:   {self.syntax_errors}",
        ]
        if self.packets or self.checksum_errors:
            lines.append(f"Checksum pass:   {self.checksum_pass_rate:.1f}%")
        if self.truncated_tail:
            lines.append(f"Truncated frame at offset {self.consumed}")
        return lines

    def print(self) -> None:
        """Print the report to stdout."""
        for line in self.summary():
            print(line)


def survey(buffer: bytes, offset: int = 0) -> ScanStats:
    """Scan every frame in buffer and count what was found.

    Raises:
        OffsetOutOfRangeError: If offset is negative.
    """
    if offset < 0:
        raise OffsetOutOfRangeError(f"Negative offset {offset}")
    buffer = bytes(buffer)
    stats = ScanStats()
    pos = offset

    while True:
        try:
            result = scan(buffer, pos)
        except CorruptFrameError as e:
            assert e.position is not None
            if isinstance(e, ChecksumMismatchError):
                stats.checksum_errors += 1
            else:
                stats.syntax_errors += 1
            stats.noise_bytes += e.position + 1 - pos
            pos = e.position + 1
            continue
        except IncompleteFrameError as e:
            stop = len(buffer) if pos < len(buffer) else pos
            if isinstance(e, (TruncatedLengthOrMarkerError, TruncatedPayloadError)):
                assert e.position is not None
                stop = e.position
                stats.truncated_tail = True
            elif isinstance(e, BufferTooShortError) and HEADER in buffer[pos:]:
                stop = buffer.find(HEADER, pos)
                stats.truncated_tail = True
            elif pos < len(buffer) and buffer[-1] == HEADER[0]:
                # Lone first header byte at the end may start a frame
                stop = len(buffer) - 1
                stats.truncated_tail = True
            stats.noise_bytes += stop - pos
            stats.consumed = stop
            break

        stats.packets += 1
        stats.payload_bytes += len(result.payload)
        stats.noise_bytes += result.header_index - pos
        pos = result.next_offset

    logger.debug(
        f"Surveyed {len(buffer)} bytes: {stats.packets} packets, "
        f"{stats.corrupt_headers} corrupt headers, {stats.noise_bytes} noise bytes"
    )
    return stats
