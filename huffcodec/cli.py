#!/usr/bin/env python3
import argparse
import logging
import sys
from typing import Dict, List, Optional

from .codec import decode_text, encode_text
from .container import compress_file, decompress_file

logger = logging.getLogger(__name__)


def print_stats(stats: Dict[str, object]) -> None:
    for key, value in stats.items():
        if isinstance(value, float):
            print(f"{key}: {value:.4f}")
        else:
            print(f"{key}: {value}")


def run_demo(message: str, width: int) -> int:
    print("--Input Message--")
    print(message)

    print("\n--Compressed Message--")
    compressed = encode_text(message, width)
    print(compressed)

    print("\n--Decompressed Message--")
    result = decode_text(compressed, width)
    print(result)

    print("\n--Compression Results--")
    print(f"Input Size: {len(message) * width} bits")
    print(f"Output Size (including header): {len(compressed)} bits")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="huffcodec", description="Huffman coding over a flat, pointerless tree.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Compress and decompress a message, printing the bit string.")
    demo.add_argument("message")
    demo.add_argument("--width", type=int, default=8, help="Bits per character in the header (default 8).")

    comp = sub.add_parser("compress", help="Compress a file into a .huff container.")
    comp.add_argument("src")
    comp.add_argument("dst")

    decomp = sub.add_parser("decompress", help="Restore a file from a .huff container.")
    decomp.add_argument("src")
    decomp.add_argument("dst")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    logger.debug("running %s", args.command)

    try:
        if args.command == "demo":
            return run_demo(args.message, args.width)
        if args.command == "compress":
            _, stats = compress_file(args.src, args.dst)
            if stats["skipped"]:
                print(stats["note"], file=sys.stderr)
            print_stats(stats)
            return 0
        print_stats(decompress_file(args.src, args.dst))
        return 0
    except ValueError as exc:
        # HuffmanError and out-of-range symbols
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
