from typing import Tuple

from .errors import TruncatedStream


def pad_bits(bits: str) -> Tuple[str, int]:
    # pad to full bytes; return padded string + pad count (0..7)
    if len(bits) == 0:
        return "", 0
    extra = (8 - (len(bits) % 8)) % 8
    return bits + ("0" * extra), extra


def bits_to_bytes(bits: str) -> bytes:
    arr = bytearray()
    for i in range(0, len(bits), 8):
        byte = bits[i:i+8]
        arr.append(int(byte, 2))
    return bytes(arr)


def bytes_to_bits(bts: bytes) -> str:
    return "".join(f"{x:08b}" for x in bts)


def pack_bits(bits: str) -> Tuple[bytes, int]:
    padded, pad_count = pad_bits(bits)
    return bits_to_bytes(padded), pad_count


def unpack_bits(data: bytes, pad_count: int) -> str:
    bits = bytes_to_bits(data)
    if pad_count > 0:
        if pad_count > len(bits):
            raise TruncatedStream("Padding bigger than stream")
        bits = bits[:-pad_count]
    return bits
