import random

import pytest

from huffcodec.bits import bytes_to_bits, pack_bits, pad_bits, unpack_bits
from huffcodec.container import (
    MAGIC,
    compress_bytes,
    compress_file,
    decompress_bytes,
    decompress_file,
    tree_to_dot,
)
from huffcodec.codec import make_tree
from huffcodec.errors import HuffmanError, InvalidContainer, InvalidHeader, TruncatedStream


def test_pad_bits():
    assert pad_bits("") == ("", 0)
    assert pad_bits("1") == ("10000000", 7)
    assert pad_bits("10101010") == ("10101010", 0)


def test_pack_unpack_bits():
    packed, pad_count = pack_bits("1011")
    assert packed == b"\xb0"
    assert pad_count == 4
    assert unpack_bits(packed, pad_count) == "1011"
    assert bytes_to_bits(b"\x01\x80") == "0000000110000000"


def test_unpack_bits_pad_larger_than_stream():
    with pytest.raises(TruncatedStream):
        unpack_bits(b"", 3)


def test_roundtrip_random_10kb():
    data = bytes(random.getrandbits(8) for _ in range(10 * 1024))
    blob = compress_bytes(data)
    assert blob.startswith(MAGIC)
    assert decompress_bytes(blob) == data


def test_roundtrip_text_shrinks():
    data = b"This is a test" * 100
    blob = compress_bytes(data)
    assert len(blob) < len(data)
    assert decompress_bytes(blob) == data


def test_roundtrip_single_byte_repeated():
    data = b"A" * 10240
    assert decompress_bytes(compress_bytes(data)) == data


def test_empty_input():
    blob = compress_bytes(b"")
    assert decompress_bytes(blob) == b""


def test_magic_mismatch():
    blob = bytearray(compress_bytes(b"Hello World" * 50))
    blob[0] ^= 0xFF
    with pytest.raises(InvalidContainer):
        decompress_bytes(bytes(blob))


def test_too_small():
    with pytest.raises(InvalidContainer):
        decompress_bytes(b"HUF")


def test_bad_pad_count():
    with pytest.raises(InvalidContainer):
        decompress_bytes(MAGIC + b"\x09" + b"\x00\x01")


def test_truncated_blob():
    blob = compress_bytes(b"abc")
    # 50 bits of codec output -> 6 pad bits
    assert blob[len(MAGIC)] == 6
    with pytest.raises(TruncatedStream):
        decompress_bytes(blob[:len(MAGIC) + 1])
    with pytest.raises(InvalidHeader):
        decompress_bytes(blob[:len(MAGIC) + 2])


def test_corrupted_header_is_an_error():
    blob = bytearray(compress_bytes(b"Hello World" * 50))
    # node count 0xFFxx is odd or even but never matches the stream
    blob[len(MAGIC) + 1] ^= 0xFF
    with pytest.raises(HuffmanError):
        decompress_bytes(bytes(blob))


def test_file_roundtrip(tmp_path):
    src = tmp_path / "input.txt"
    packed = tmp_path / "input.txt.huff"
    restored = tmp_path / "restored.txt"
    src.write_bytes(b"abracadabra " * 200)

    nodes, stats = compress_file(str(src), str(packed))
    assert nodes is not None
    assert stats["skipped"] is False
    assert stats["original_bytes"] == 2400
    assert stats["compressed_bytes"] == packed.stat().st_size
    assert stats["unique_symbols"] == 6
    assert stats["space_saved_percent"] > 0
    assert stats["time_total"] >= 0

    stats = decompress_file(str(packed), str(restored))
    assert restored.read_bytes() == src.read_bytes()
    assert stats["restored_size"] == 2400
    assert stats["compressed_size"] == packed.stat().st_size


def test_file_empty(tmp_path):
    src = tmp_path / "empty"
    packed = tmp_path / "empty.huff"
    restored = tmp_path / "empty.out"
    src.write_bytes(b"")
    nodes, stats = compress_file(str(src), str(packed))
    assert nodes == []
    assert stats["compression_ratio"] is None
    decompress_file(str(packed), str(restored))
    assert restored.read_bytes() == b""


def test_file_already_compressed_is_skipped(tmp_path):
    src = tmp_path / "data.huff"
    dst = tmp_path / "data.huff.huff"
    src.write_bytes(compress_bytes(b"payload"))
    nodes, stats = compress_file(str(src), str(dst))
    assert nodes is None
    assert stats["skipped"] is True
    assert "already" in stats["note"]
    assert not dst.exists()


def test_tree_to_dot():
    dot = tree_to_dot(make_tree(b"aabbbcc"))
    assert dot.startswith("digraph G {")
    assert '"root" [label="7\\n"];' in dot
    assert '"root" -> "0"' in dot
    assert dot.rstrip().endswith("}")


def test_tree_to_dot_respects_depth():
    dot = tree_to_dot(make_tree(bytes(range(64))), max_depth=2)
    assert '"001"' not in dot
    assert '"00"' in dot
