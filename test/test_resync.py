"""Unit tests for resynchronizing scans and buffer surveys."""

import pytest

from uartpacket.codec import encode, scan
from uartpacket.errors import (
    HeaderNotFoundError,
    MissingMarkerError,
    OffsetOutOfRangeError,
    TruncatedPayloadError,
)
from uartpacket.resync import iter_packets, scan_resync
from uartpacket.stats import ScanStats, survey


def _with_bad_marker(payload: bytes) -> bytes:
    frame = bytearray(encode(payload))
    frame[4] = 0x00
    return bytes(frame)


def _with_bad_checksum(payload: bytes) -> bytes:
    frame = bytearray(encode(payload))
    frame[-2] ^= 0xFF
    return bytes(frame)


@pytest.mark.unit
class TestScanResync:
    """Tests for scan_resync()."""

    def test_valid_frame_unchanged(self) -> None:
        buffer = b"\x00\x01" + encode(b"abc")
        assert scan_resync(buffer) == scan(buffer)

    def test_skips_corrupt_header(self) -> None:
        bad = _with_bad_marker(b"abcd")
        buffer = bad + encode(b"good")
        with pytest.raises(MissingMarkerError):
            scan(buffer)
        result = scan_resync(buffer)
        assert result.payload == b"good"
        assert result.header_index == len(bad)

    def test_skips_several_corrupt_headers(self) -> None:
        buffer = _with_bad_checksum(b"one") + _with_bad_marker(b"two") + encode(b"three")
        assert scan_resync(buffer).payload == b"three"

    def test_incomplete_propagates(self) -> None:
        buffer = _with_bad_marker(b"abcd") + encode(b"cut")[:-2]
        with pytest.raises(TruncatedPayloadError):
            scan_resync(buffer)

    def test_no_header(self) -> None:
        with pytest.raises(HeaderNotFoundError):
            scan_resync(bytes(16))


@pytest.mark.unit
class TestIterPackets:
    """Tests for iter_packets()."""

    def test_back_to_back(self) -> None:
        payloads = [b"a", b"bb", b"ccc"]
        buffer = b"".join(encode(p) for p in payloads)
        assert [r.payload for r in iter_packets(buffer)] == payloads

    def test_noise_and_corruption(self) -> None:
        buffer = (
            b"\x10\x20"
            + encode(b"first")
            + _with_bad_checksum(b"lost")
            + b"\x30"
            + encode(b"second")
            + encode(b"third")[:5]
        )
        results = list(iter_packets(buffer))
        assert [r.payload for r in results] == [b"first", b"second"]
        assert results[0].header_index == 2
        assert results[1].next_offset == len(buffer) - 5

    def test_positions_point_into_buffer(self, random_payload) -> None:
        payloads = [random_payload() for _ in range(5)]
        buffer = b"\x00".join(encode(p) for p in payloads)
        for result in iter_packets(buffer):
            assert buffer[result.header_index : result.header_index + 2] == b"\xa5\x5a"
            assert buffer[result.end_index] == 0x04

    def test_start_offset(self) -> None:
        buffer = encode(b"skip") + encode(b"keep")
        assert [r.payload for r in iter_packets(buffer, len(encode(b"skip")))] == [b"keep"]

    def test_accepts_bytearray(self) -> None:
        payloads = [b"a", b"bb", b"ccc"]
        buffer = bytearray(b"\x00".join(encode(p) for p in payloads))
        assert [r.payload for r in iter_packets(buffer)] == payloads
        assert scan_resync(bytearray(_with_bad_marker(b"x") + encode(b"y"))).payload == b"y"

    def test_empty_buffer(self) -> None:
        assert list(iter_packets(b"")) == []

    def test_noise_only(self) -> None:
        assert list(iter_packets(b"\xa5\x00" * 10)) == []


@pytest.mark.unit
class TestSurvey:
    """Tests for survey() and ScanStats."""

    def test_mixed_buffer(self) -> None:
        buffer = (
            b"\x00\x11\x22"
            + encode(b"\x01\x23\xab\xcd")
            + _with_bad_checksum(b"xy")
            + encode(b"\x7f")
            + encode(b"abc")[:6]
        )
        stats = survey(buffer)
        assert stats.packets == 2
        assert stats.payload_bytes == 5
        assert stats.noise_bytes == 12
        assert stats.checksum_errors == 1
        assert stats.syntax_errors == 0
        assert stats.corrupt_headers == 1
        assert stats.truncated_tail is True
        assert stats.consumed == 31
        assert not stats.success()

    def test_clean_buffer(self) -> None:
        buffer = encode(b"one") + encode(b"two")
        stats = survey(buffer)
        assert stats.packets == 2
        assert stats.noise_bytes == 0
        assert stats.truncated_tail is False
        assert stats.consumed == len(buffer)
        assert stats.checksum_pass_rate == pytest.approx(100.0)
        assert stats.success()

    def test_syntax_errors_counted(self) -> None:
        buffer = _with_bad_marker(b"abcd") + encode(b"ok")
        stats = survey(buffer)
        assert stats.syntax_errors == 1
        assert stats.checksum_errors == 0
        assert stats.noise_bytes == len(_with_bad_marker(b"abcd"))
        assert stats.success()

    def test_truncated_after_header(self) -> None:
        buffer = b"\x00" * 6 + encode(b"abcdef")[:9]
        stats = survey(buffer)
        assert stats.packets == 0
        assert stats.truncated_tail is True
        assert stats.noise_bytes == 6
        assert stats.consumed == 6

    def test_noise_only(self) -> None:
        stats = survey(bytes(20))
        assert stats.noise_bytes == 20
        assert stats.truncated_tail is False
        assert not stats.success()

    def test_trailing_header_byte_after_frame(self) -> None:
        frame = encode(b"one")
        pending = encode(b"abcdefgh")
        buffer = frame + pending[:1]
        stats = survey(buffer)
        assert stats.packets == 1
        assert stats.noise_bytes == 0
        assert stats.truncated_tail is True
        assert stats.consumed == len(frame)
        # More bytes arrive; resuming at consumed keeps the header intact
        resumed = buffer[stats.consumed :] + pending[1:]
        assert scan(resumed).payload == b"abcdefgh"

    def test_trailing_header_byte_after_noise(self) -> None:
        stats = survey(bytes(20) + b"\xa5")
        assert stats.packets == 0
        assert stats.noise_bytes == 20
        assert stats.truncated_tail is True
        assert stats.consumed == 20

    def test_negative_offset(self) -> None:
        with pytest.raises(OffsetOutOfRangeError):
            survey(b"\x00", -1)

    def test_pass_rate(self) -> None:
        stats = ScanStats(packets=3, checksum_errors=1)
        assert stats.checksum_pass_rate == pytest.approx(75.0)
        assert ScanStats().checksum_pass_rate == 0.0

    def test_print(self, capsys: pytest.CaptureFixture[str]) -> None:
        ScanStats(packets=1, payload_bytes=4, noise_bytes=2, truncated_tail=True, consumed=15).print()
        out = capsys.readouterr().out
        assert "Packets:         1 (4 payload bytes)" in out
        assert "Noise bytes:     2" in out
        assert "Checksum pass:   100.0%" in out
        assert "Truncated frame at offset 15" in out
