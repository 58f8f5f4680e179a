"""Command line entry point: ``wavetrim split`` and ``wavetrim trim``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from .audio.errors import AudioEditError
from .config import CONFIG
from .session import EditorSession
from .store.settings_store import SettingsStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wavetrim", description="Silence-aware audio splitting and trimming.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings JSON holding split defaults (defaults to $WAVETRIM_HOME/settings.json).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    split = sub.add_parser("split", help="Print the sound segments of an audio file.")
    split.add_argument("input", type=Path)
    split.add_argument("-t", "--threshold", dest="amplitude_threshold", type=float, default=None)
    split.add_argument("-s", "--min-silence", dest="min_silence_seconds", type=float, default=None)
    split.add_argument("-m", "--min-segment", dest="min_segment_seconds", type=float, default=None)
    split.add_argument("-g", "--merge-gap", dest="merge_gap_seconds", type=float, default=None)
    split.add_argument("--json", action="store_true", help="Emit segments as JSON.")

    trim = sub.add_parser("trim", help="Write a time range of an audio file to WAV.")
    trim.add_argument("input", type=Path)
    trim.add_argument("start", type=float, help="Start time in seconds.")
    trim.add_argument("end", type=float, help="End time in seconds.")
    trim.add_argument("-o", "--output", type=Path, required=True)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = SettingsStore(args.settings or CONFIG.settings_path)
    session = EditorSession(options=settings.get().split_options())
    try:
        session.load(args.input)
        if args.command == "split":
            return _run_split(session, args)
        return _run_trim(session, args)
    except AudioEditError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


def _run_split(session: EditorSession, args: argparse.Namespace) -> int:
    options = session.options.with_overrides(
        amplitude_threshold=args.amplitude_threshold,
        min_silence_seconds=args.min_silence_seconds,
        min_segment_seconds=args.min_segment_seconds,
        merge_gap_seconds=args.merge_gap_seconds,
    )
    regions = session.auto_split(options)
    if args.json:
        payload = [
            {"label": region.label, "start": round(region.start_time, 3), "end": round(region.end_time, 3)}
            for region in regions
        ]
        print(json.dumps(payload))
        return 0
    for region in regions:
        print(f"{region.label}\t{region.start_time:.3f}\t{region.end_time:.3f}")
    return 0


def _run_trim(session: EditorSession, args: argparse.Namespace) -> int:
    session.trim(args.start, args.end)
    blob = session.export_wav(args.output)
    print(f"{args.output}\t{session.buffer.duration:.3f}s\t{len(blob)} bytes")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
