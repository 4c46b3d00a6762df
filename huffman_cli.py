"""
Huffman-code a single file and report whether the round trip holds

How to run:
  python huffman_cli.py notes.txt
  python huffman_cli.py image.bin --bytes
  python huffman_cli.py notes.txt --show-limit 0 --verbose
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Union

from errors import HuffmanError
from huffman import HuffmanCoder


def read_input(path: Path, as_bytes: bool, encoding: str) -> Union[str, bytes]:
    if as_bytes:
        return path.read_bytes()
    # newline="" keeps line endings as symbols of the input
    with path.open("r", encoding=encoding, newline="") as f:
        return f.read()


def compression_ratio(bitstring: str, data) -> Optional[float]:
    if len(data) == 0:
        return None
    return len(bitstring) / len(data) / 8


def print_code_table(coder: HuffmanCoder) -> None:
    freqs = coder.frequencies
    codes = coder.codes
    for symbol in sorted(codes, key=lambda s: (len(codes[s]), codes[s])):
        print(f"{symbol!r:>8} {freqs[symbol]:>10} {codes[symbol]}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Huffman encode and decode a file")
    ap.add_argument("path", type=str, help="Input file")
    ap.add_argument("--bytes", action="store_true", help="Treat the file as raw bytes instead of text")
    ap.add_argument("--encoding", type=str, default="utf-8", help="Text encoding of the input file")
    ap.add_argument("--show-limit", type=int, default=100,
                    help="Print input, encoded and decoded strings when the input is shorter than this")
    ap.add_argument("--verbose", action="store_true", help="Print the code table to stderr")
    args = ap.parse_args(argv)

    try:
        data = read_input(Path(args.path), args.bytes, args.encoding)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Please specify a valid, readable file: {e}", file=sys.stderr)
        return 2

    try:
        coder = HuffmanCoder(data)
        encoded = coder.encode(data)
        decoded = coder.decode(encoded)
    except HuffmanError as e:
        print(f"Cannot Huffman-code {args.path}: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        print_code_table(coder)

    if len(data) < args.show_limit:
        print(f"Input string: {data!r}")
        print(f"Encoded string: {encoded}")
        print(f"Decoded string: {decoded!r}")

    ok = decoded == data
    print(f"Decoded equals input: {ok}")
    ratio = compression_ratio(encoded, data)
    if ratio is not None:
        print(f"Compression ratio: {ratio:.4f}")
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
