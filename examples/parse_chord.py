#!/usr/bin/env python3
"""CLI tool to parse chord symbols and export them to JSON.

Usage:
    python examples/parse_chord.py <symbol> [<symbol> ...]

Examples:
    python examples/parse_chord.py AbMaj7#11 "C-Maj7(omit5)"
    python examples/parse_chord.py Cm7/Bb --transpose E --midi --pretty
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from chord_symbols import ChordSymbolError, midi_codes, parse, voicing


def chord_to_output(symbol: str, args: argparse.Namespace) -> dict[str, Any]:
    """Parse one symbol and build its JSON-serializable record."""
    chord = parse(symbol)
    if args.transpose:
        chord = chord.transpose(args.transpose)

    result = chord.to_dict()
    result["harte"] = chord.to_harte()
    if args.midi:
        result["midi_codes"] = midi_codes(chord).tolist()
        result["voicing"] = voicing(chord, lead=args.lead).tolist()
    return result


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Parse chord symbols and export them to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s AbMaj7#11
  %(prog)s "C-Maj7(omit5)" B#9 --pretty
  %(prog)s Cm7/Bb --transpose E --midi --lead 72
        """,
    )
    parser.add_argument(
        "symbols",
        nargs="+",
        help="Chord symbols to parse",
    )
    parser.add_argument(
        "-t", "--transpose",
        default=None,
        help="Transpose every chord to this root (e.g. Eb)",
    )
    parser.add_argument(
        "--midi",
        action="store_true",
        help="Include MIDI codes and a voicing",
    )
    parser.add_argument(
        "--lead",
        type=int,
        default=None,
        help="MIDI code of the voicing's top note",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )

    args = parser.parse_args()

    records = []
    failed = False
    for symbol in args.symbols:
        try:
            records.append(chord_to_output(symbol, args))
        except ChordSymbolError as e:
            print(f"Error: {e.verbose()}", file=sys.stderr)
            failed = True
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            failed = True

    indent = 2 if args.pretty else None
    print(json.dumps(records, indent=indent, ensure_ascii=False))

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
