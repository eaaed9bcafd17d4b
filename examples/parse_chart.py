#!/usr/bin/env python3
"""CLI tool to parse a song chart and export it to JSON.

Usage:
    python examples/parse_chart.py <input_file> [output_file]

Examples:
    python examples/parse_chart.py testdata/amazing_grace.txt
    python examples/parse_chart.py testdata/santo.txt santo.json --placement optimize
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from chord_chart import ChartService, ChartValidationError, InMemoryChartStore
from chord_chart import config
from chord_chart.chart import ChordMark, LineWithChords
from chord_chart.converter import chord_tones, to_harte, to_pychord
from chord_chart.grammar import QUALITY_NAMES
from chord_chart.utils.logging import setup_logging


def chord_to_dict(chord: ChordMark, notations: bool) -> dict[str, Any]:
    """Convert a ChordMark to a JSON-serializable dict."""
    result: dict[str, Any] = {
        "symbol": chord.symbol,
        "root": chord.root_note,
        "quality": chord.quality,
        "quality_name": QUALITY_NAMES[chord.quality],
        "slash": chord.slash_root or None,
        "slot": chord.slot_position,
    }
    if notations:
        tones = chord_tones(chord)
        result["harte"] = to_harte(chord)
        result["pychord"] = to_pychord(chord)
        result["tones"] = list(tones) if tones is not None else None
    return result


def line_to_dict(entry: LineWithChords, notations: bool) -> dict[str, Any]:
    """Convert a stored line and its chords to a JSON-serializable dict."""
    return {
        "position": entry.line.position,
        "structure": entry.line.structure.title,
        "structure_id": entry.line.structure_id,
        "text": entry.line.text,
        "chords": [chord_to_dict(chord, notations) for chord in entry.chords],
    }


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Parse a chord chart and export to JSON",
    )
    parser.add_argument("input", type=Path, help="Input chart file")
    parser.add_argument("output", type=Path, nargs="?", help="Output JSON file (default: stdout)")
    parser.add_argument(
        "--placement",
        choices=config.PLACEMENT_CHOICES,
        default=None,
        help="Chord slot placement strategy (default: %(default)s from config)",
    )
    parser.add_argument("--song-id", type=int, default=1, help="Song id to import into")
    parser.add_argument(
        "--notations",
        action="store_true",
        help="Include Harte/pychord notation and chord tones",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    setup_logging(level="DEBUG" if args.verbose else config.LOG_LEVEL, verbose=args.verbose)

    if not args.input.exists():
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1

    service = ChartService(InMemoryChartStore(), placement=args.placement)

    try:
        service.import_chart_bytes(args.song_id, args.input.read_bytes())
    except ChartValidationError as exc:
        for error in exc.errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    result = {
        "source": str(args.input),
        "song_id": args.song_id,
        "lines": [line_to_dict(entry, args.notations) for entry in service.list_lines(args.song_id)],
    }
    output = json.dumps(result, indent=2, ensure_ascii=False)

    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
