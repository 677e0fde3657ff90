import logging
import struct
import time
from typing import Dict, List, Optional, Tuple

from .bits import pack_bits, unpack_bits
from .codec import decode, encode, encode_symbols, make_codes, make_tree, write_header
from .errors import InvalidContainer
from .tree import Node, leaf_count

logger = logging.getLogger(__name__)

MAGIC = b'HUFF'  # file signature

# ----------------------------------
# Convert flat tree to Graphviz format
# ----------------------------------

def tree_to_dot(nodes: List[Node], max_depth=3):
    # node ids are codeword prefixes; the root is the empty prefix
    codes = make_codes(nodes)
    leaves = leaf_count(nodes)
    weights: Dict[str, int] = {}
    labels: Dict[str, str] = {}
    for node in nodes[:leaves]:
        code = codes[node.sym] if leaves > 1 else ""
        labels[code] = repr(node.sym)
        for i in range(len(code) + 1):
            weights[code[:i]] = weights.get(code[:i], 0) + node.weight

    dot = "digraph G {\n"
    dot += "node [shape=circle, style=filled, color=lightblue];\n"
    for prefix in sorted(weights, key=lambda p: (len(p), p)):
        if len(prefix) > max_depth:
            continue
        label = f"{weights[prefix]}\\n{labels.get(prefix, '')}"
        dot += f'"{prefix or "root"}" [label="{label}"];\n'
        if prefix:
            dot += f'"{prefix[:-1] or "root"}" -> "{prefix}" [label="{prefix[-1]}"];\n'
    dot += "}"
    return dot

# ---------------------------
# In-memory container
# ---------------------------

def read_file_bytes(path: str) -> bytes:
    with open(path, 'rb') as f:
        return f.read()

def pack(bits: str) -> bytes:
    packed, pad_count = pack_bits(bits)
    return MAGIC + struct.pack("B", pad_count) + packed

def unpack(blob: bytes) -> Tuple[str, int]:
    if len(blob) < len(MAGIC) + 1:
        raise InvalidContainer("Not a valid .huff (too small)")
    if blob[:len(MAGIC)] != MAGIC:
        raise InvalidContainer("Not a .huff file (magic mismatch)")
    pad_count = blob[len(MAGIC)]
    if pad_count > 7:
        raise InvalidContainer(f"Bad pad count {pad_count}")
    return unpack_bits(blob[len(MAGIC) + 1:], pad_count), pad_count

def compress_bytes(data: bytes) -> bytes:
    return pack(encode(data))

def decompress_bytes(blob: bytes) -> bytes:
    bits, _ = unpack(blob)
    return bytes(decode(bits))

# -------------------------
# Compressor
# -------------------------

def compress_file(src: str, dst: str) -> Tuple[Optional[List[Node]], Dict[str, object]]:
    """
    Returns (nodes, stats). If the input already carries the .huff signature,
    nothing is written and (None, stats) is returned with stats['skipped']=True
    and stats['note'] explaining why.
    """
    t0 = time.perf_counter()
    raw = read_file_bytes(src)
    t_read = time.perf_counter()

    original_bytes = len(raw)

    if raw.startswith(MAGIC):
        logger.info("skipping %s: already a .huff container", src)
        stats = {
            "input": src,
            "output": dst,
            "original_bytes": original_bytes,
            "compressed_bytes": original_bytes,
            "unique_symbols": 0,
            "pad_count": None,
            "compression_ratio": None,
            "space_saved_percent": None,
            "skipped": True,
            "note": "Input file is already in .huff format (double-compression prevented).",
            "time_read": t_read - t0,
            "time_total": time.perf_counter() - t0,
        }
        return None, stats

    nodes = make_tree(raw)
    t_tree = time.perf_counter()

    codes = make_codes(nodes)
    t_codes = time.perf_counter()

    bits = write_header(nodes) + encode_symbols(raw, codes)
    blob = pack(bits)
    t_pack = time.perf_counter()

    with open(dst, 'wb') as out:
        out.write(blob)
    t_write = time.perf_counter()

    compressed_bytes_total = len(blob)
    if original_bytes > 0:
        compression_ratio = compressed_bytes_total / original_bytes
        space_saved_percent = ((original_bytes - compressed_bytes_total) / original_bytes) * 100.0
    else:
        compression_ratio = None
        space_saved_percent = None
    logger.info("compressed %s -> %s: %d -> %d bytes", src, dst, original_bytes, compressed_bytes_total)

    stats = {
        "input": src,
        "output": dst,
        "original_bytes": original_bytes,
        "compressed_bytes": compressed_bytes_total,
        "unique_symbols": leaf_count(nodes),
        "pad_count": blob[len(MAGIC)],
        "compression_ratio": compression_ratio,
        "space_saved_percent": space_saved_percent,
        "skipped": False,
        "note": None,
        "time_read": t_read - t0,
        "time_tree_build": t_tree - t_read,
        "time_codes": t_codes - t_tree,
        "time_pack": t_pack - t_codes,
        "time_write": t_write - t_pack,
        "time_total": t_write - t0,
    }
    return nodes, stats

# -------------------------
# Decompressor
# -------------------------

def decompress_file(src: str, dst: str) -> Dict[str, object]:
    t0 = time.perf_counter()
    raw = read_file_bytes(src)
    t_read = time.perf_counter()

    bits, pad_count = unpack(raw)
    t_unpad = time.perf_counter()

    decoded = bytes(decode(bits))
    t_decode = time.perf_counter()

    with open(dst, 'wb') as f:
        f.write(decoded)
    t_write = time.perf_counter()
    logger.info("decompressed %s -> %s: %d bytes restored", src, dst, len(decoded))

    stats = {
        "input_huff": src,
        "output": dst,
        "compressed_size": len(raw),
        "restored_size": len(decoded),
        "pad_count": pad_count,
        "time_read": t_read - t0,
        "time_unpad": t_unpad - t_read,
        "time_decode": t_decode - t_unpad,
        "time_write": t_write - t_decode,
        "time_total": t_write - t0,
    }
    return stats
