import logging
from typing import Any, Dict, Hashable, List, Sequence, Tuple

from .converters import BYTE, BinaryConverter, CharConverter
from .errors import AlphabetTooLarge, CorruptPayload, InvalidHeader, SingletonAlphabet, TruncatedStream
from .frequency import frequency_table, leaves_from_table
from .tree import Node, Run, build_tree, generate_codes, leaf_count, next_node, weight_less

logger = logging.getLogger(__name__)

HEADER_COUNT_BITS = 16
MAX_NODES = (1 << HEADER_COUNT_BITS) - 1


# ---------------------------
# Encoder
# ---------------------------
def make_tree(symbols: Sequence[Hashable]) -> List[Node]:
    table = frequency_table(symbols)
    if not table:
        return []
    if 2 * len(table) - 1 > MAX_NODES:
        raise AlphabetTooLarge(f"{len(table)} distinct symbols do not fit a {HEADER_COUNT_BITS}-bit node count")
    nodes = build_tree(leaves_from_table(table))
    logger.debug("built tree: %d symbols, %d nodes", len(table), len(nodes))
    return nodes


def make_codes(nodes: List[Node]) -> Dict[Any, str]:
    codes: Dict[Any, str] = {}
    if not nodes:
        return codes

    def collect(pos: int, code: str):
        # single-symbol edge-case -> "0"
        codes[nodes[pos].sym] = code if code != "" else "0"

    generate_codes(nodes, leaf_count(nodes), collect)
    return codes


def write_header(nodes: List[Node], converter: BinaryConverter = BYTE, less=weight_less) -> str:
    """Node count, then one flag per node in merge order: ``1`` + payload for leaves, ``0`` for merges."""
    if len(nodes) > MAX_NODES:
        raise AlphabetTooLarge(f"{len(nodes)} nodes do not fit a {HEADER_COUNT_BITS}-bit node count")
    leaves = leaf_count(nodes)
    out = [format(len(nodes), f"0{HEADER_COUNT_BITS}b")]
    leaf_run = Run(0, leaves)
    merge_run = Run(leaves, len(nodes))
    for _ in range(len(nodes)):
        pos = next_node(nodes, leaf_run, merge_run, less)
        if pos < leaves:
            out.append("1")
            out.append(converter.serialize(nodes[pos].sym))
        else:
            out.append("0")
    return "".join(out)


def encode_symbols(symbols: Sequence[Hashable], codes: Dict[Any, str]) -> str:
    pieces = []
    for sym in symbols:
        pieces.append(codes[sym])
    return "".join(pieces)


def encode(symbols: Sequence[Hashable], converter: BinaryConverter = BYTE) -> str:
    nodes = make_tree(symbols)
    codes = make_codes(nodes)
    header = write_header(nodes, converter)
    payload = encode_symbols(symbols, codes)
    logger.debug("encoded %d symbols: header %d bits, payload %d bits", len(symbols), len(header), len(payload))
    return header + payload


# ---------------------------
# Decoder
# ---------------------------
def read_header(bits: str, converter: BinaryConverter = BYTE) -> Tuple[List[Node], int, int]:
    """Rebuild the flat array from the header.

    Returns ``(nodes, leaves, cursor)``. Each node's weight is its position in
    the header, which is the merge order, so the array can be walked with the
    same comparator the encoder used.
    """
    if len(bits) < HEADER_COUNT_BITS:
        raise InvalidHeader(f"need {HEADER_COUNT_BITS} bits for the node count, got {len(bits)}")
    try:
        count = int(bits[:HEADER_COUNT_BITS], 2)
    except ValueError:
        raise InvalidHeader(f"node count is not a bit string: {bits[:HEADER_COUNT_BITS]!r}") from None
    cursor = HEADER_COUNT_BITS
    if count == 0:
        return [], 0, cursor
    if count % 2 == 0:
        raise InvalidHeader(f"node count {count} is even; a Huffman tree has 2n-1 nodes")

    width = converter.width
    leaves: List[Node] = []
    merges: List[Node] = []
    for position in range(count):
        if cursor >= len(bits):
            raise InvalidHeader(f"stream ends before the flag of node {position} of {count}")
        flag = bits[cursor]
        cursor += 1
        if flag == "1":
            if cursor + width > len(bits):
                raise InvalidHeader(f"stream ends inside the payload of node {position}")
            try:
                sym = converter.deserialize(bits[cursor:cursor + width])
            except ValueError as exc:
                raise InvalidHeader(f"bad payload for node {position}: {exc}") from exc
            cursor += width
            leaves.append(Node(position, sym))
        elif flag == "0":
            # merge j consumes the nodes at merge-order slots 2j and 2j+1
            if position < 2 * (len(merges) + 1):
                raise InvalidHeader(f"merge node at position {position} has too few nodes before it")
            merges.append(Node(position))
        else:
            raise InvalidHeader(f"bad flag {flag!r} at bit {cursor - 1}")

    if len(leaves) != count // 2 + 1:
        raise InvalidHeader(f"{len(leaves)} leaves in a {count}-node header, expected {count // 2 + 1}")
    return leaves + merges, len(leaves), cursor


def read_codes(nodes: List[Node], leaves: int) -> List[Tuple[str, Any]]:
    table: List[Tuple[str, Any]] = []
    generate_codes(nodes, leaves, lambda pos, code: table.append((code, nodes[pos].sym)))
    table.sort(key=lambda entry: len(entry[0]))
    return table


def match_codewords(bits: str, cursor: int, table: List[Tuple[str, Any]]) -> List[Any]:
    """Decode ``bits[cursor:]`` against ``table`` (codewords sorted by length).

    Bits are read only as far as the current candidate's length, and a
    mismatch moves on to the next, longer candidate keeping what was read.
    """
    if any(code == "" for code, _ in table):
        raise SingletonAlphabet("a zero-length codeword cannot be matched against the stream")
    out = []
    end = len(bits)
    while cursor < end:
        acc = ""
        for code, sym in table:
            need = len(code) - len(acc)
            if need > 0:
                if cursor + need > end:
                    raise TruncatedStream(f"stream ends mid-codeword after {acc!r}")
                acc += bits[cursor:cursor + need]
                cursor += need
            if acc == code:
                out.append(sym)
                break
        else:
            raise CorruptPayload(f"bits {acc!r} match no codeword")
    return out


def decode(bits: str, converter: BinaryConverter = BYTE) -> List[Any]:
    nodes, leaves, cursor = read_header(bits, converter)
    if not nodes:
        if cursor != len(bits):
            raise InvalidHeader(f"empty header followed by {len(bits) - cursor} payload bits")
        return []
    if leaves == 1:
        payload = bits[cursor:]
        if payload.strip("0"):
            raise CorruptPayload("one-symbol stream may only contain 0 bits")
        return [nodes[0].sym] * len(payload)
    table = read_codes(nodes, leaves)
    logger.debug("decoding with %d codewords, longest %d bits", len(table), len(table[-1][0]))
    return match_codewords(bits, cursor, table)


# ---------------------------
# Text helpers
# ---------------------------
def encode_text(text: str, width: int = 8) -> str:
    return encode(text, CharConverter(width))


def decode_text(bits: str, width: int = 8) -> str:
    return "".join(decode(bits, CharConverter(width)))
