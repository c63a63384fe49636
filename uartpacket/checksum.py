"""XOR checksum shared by the encoder and the scanner."""

from functools import reduce
from operator import xor

from uartpacket.errors import EmptyInputError


def xor_checksum(data: bytes) -> int:
    """XOR every byte of data together. Returns a value in 0..255.

    Raises:
        EmptyInputError: If data is empty.
    """
    if not data:
        raise EmptyInputError("Checksum over empty input")
    return reduce(xor, data)
