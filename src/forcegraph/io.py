# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# JSON / JSON Lines I/O for rows in and primitives out.

"""
Readers for query rows and writers for the primitive stream.

Input is either one JSON document::

    {"fields": {"dimensions": [...], "measures": [...]},
     "rows": [{"src": {"value": "A"}, ...}, ...],
     "config": {...}}

(or a bare list of rows), or JSON Lines with one row per line. Cells may
be given as ``{"value": x}`` or as the bare value ``x``.

Output is JSON Lines, one primitive per line, each tagged with ``type``.

Usage:
    from forcegraph.io import read_input, write_frame

    data = read_input(sys.stdin)
    write_frame(frame, sys.stdout)
"""

import json
import logging
import sys
from io import StringIO
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, TextIO

from .model import QueryFields, Row
from .render.primitives import Frame

logger = logging.getLogger(__name__)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class GraphInput:
    """Everything needed for one render pass."""
    rows: List[Row] = field(default_factory=list)
    fields: Optional[QueryFields] = None
    config: Dict[str, Any] = field(default_factory=dict)


def normalize_row(row: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Wrap bare cell values as ``{'value': x}``."""
    return {
        name: dict(cell) if isinstance(cell, Mapping) else {'value': cell}
        for name, cell in row.items()
    }


# ============================================================================
# READER FUNCTIONS
# ============================================================================

def read_jsonl(stream: TextIO = sys.stdin) -> Iterator[Dict[str, Any]]:
    """Read raw JSON objects from JSON Lines stream."""
    for number, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            yield json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping malformed line {number}: {e}")


def parse_input(data: Any) -> GraphInput:
    """Build a GraphInput from an already decoded JSON document."""
    if isinstance(data, list):
        return GraphInput(rows=[normalize_row(r) for r in data])
    if not isinstance(data, Mapping):
        raise ValueError(f'expected a JSON object or array, got {type(data).__name__}')

    rows = [normalize_row(r) for r in data.get('rows') or data.get('data') or []]
    fields = data.get('fields')
    return GraphInput(
        rows=rows,
        fields=QueryFields.from_dict(fields) if fields else None,
        config=dict(data.get('config') or {}),
    )


def read_input(stream: TextIO = sys.stdin) -> GraphInput:
    """Read a JSON document, or fall back to JSON Lines rows."""
    text = stream.read()
    try:
        return parse_input(json.loads(text))
    except json.JSONDecodeError:
        pass

    rows = [normalize_row(obj) for obj in read_jsonl(StringIO(text)) if isinstance(obj, Mapping)]
    return GraphInput(rows=rows)


# ============================================================================
# WRITER FUNCTIONS
# ============================================================================

def write_jsonl(obj: Dict[str, Any], stream: TextIO = sys.stdout) -> None:
    """Write a JSON object as a single line."""
    print(json.dumps(obj, ensure_ascii=False), file=stream)


def write_frame(frame: Frame, stream: TextIO = sys.stdout) -> None:
    """Write a frame header followed by its primitives as JSON Lines."""
    for obj in frame.to_dicts():
        write_jsonl(obj, stream)


def write_error(error: Mapping[str, str], stream: TextIO = sys.stdout) -> None:
    """Write a structured error record."""
    write_jsonl({'type': 'error', **error}, stream)
