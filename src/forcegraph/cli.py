#!/usr/bin/env python3
# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Lay out tabular relationship data as a force-directed graph.

Reads rows (JSON document or JSON Lines), runs the simulation until it
settles and writes either the primitive stream (JSON Lines) or an SVG.

Usage:
    forcegraph rows.json --format svg --output graph.svg
    forcegraph rows.jsonl --config graph.yaml --width 1200 --height 900
    cat rows.json | forcegraph - --max-ticks 200
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_options
from .errors import ConfigError
from .io import read_input, write_error, write_frame
from .render import frame_to_svg
from .view import ForceGraphView

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='forcegraph',
        description='Force-directed layout of (node, group) -> (node, group) rows'
    )
    parser.add_argument('input', help="Input JSON / JSON Lines file, or '-' for stdin")
    parser.add_argument('--config', type=Path, help='YAML file with visualization options')
    parser.add_argument('--width', type=float, default=800, help='Canvas width (default: 800)')
    parser.add_argument('--height', type=float, default=600, help='Canvas height (default: 600)')
    parser.add_argument('--max-ticks', type=int, default=None,
                        help='Stop after this many ticks even if not settled')
    parser.add_argument('--format', choices=['jsonl', 'svg'], default='jsonl',
                        help='Output format: primitive stream (jsonl, default) or svg')
    parser.add_argument('--output', '-o', type=Path, help='Output file (default: stdout)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        if args.input == '-':
            data = read_input(sys.stdin)
        else:
            path = Path(args.input)
            if not path.exists():
                logger.error(f"Input file not found: {path}")
                return 1
            with open(path) as f:
                data = read_input(f)
    except ValueError as e:
        logger.error(f"Unreadable input: {e}")
        return 1

    options = dict(data.config)
    if args.config:
        try:
            options.update(load_options(args.config))
        except ConfigError as e:
            write_error(e.to_dict(), sys.stderr)
            return 1

    logger.info(f"Read {len(data.rows)} rows")
    view = ForceGraphView(args.width, args.height)
    result = view.render(data.rows, data.fields, options)
    if not result.ok:
        write_error(result.error, sys.stderr)
        return 1

    frame = view.settle(args.max_ticks)
    logger.info(f"Laid out {len(result.graph)} nodes in {view.simulation.tick_count} ticks")

    out = open(args.output, 'w') if args.output else sys.stdout
    try:
        if args.format == 'svg':
            out.write(frame_to_svg(frame))
            out.write('\n')
        else:
            write_frame(frame, out)
    finally:
        if out is not sys.stdout:
            out.close()

    if args.output:
        logger.info(f"Wrote {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
