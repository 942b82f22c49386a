# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Tooltip content and placement.

"""
Tooltip templates, numeric value formats and placement.

Value formats use the spreadsheet notation dashboards expose for
measures, e.g. ``#,##0.00``, ``0.0%``, ``$#,##0`` or ``0.0,,"M"``.
Only the positive section of a multi-section format is used.
"""

import math
from html import escape
from typing import Any, Optional, Tuple

from ..config import GraphConfig
from ..model import FieldInfo, Link, Node
from .state import Pointer, TooltipState

DEFAULT_VALUE_FORMAT = '#,###'

# Placement relative to the pointer
OFFSET_X = 15.0
OFFSET_Y = 15.0
LINE_HEIGHT = 1.4
PADDING = 4.0

_NUMBER_CHARS = '#0,.'


def _split_format(fmt: str) -> Tuple[str, str, str]:
    """Split a format section into (prefix, number pattern, suffix)."""
    prefix, number, suffix = [], [], []
    i = 0
    while i < len(fmt):
        ch = fmt[i]
        target = suffix if number else prefix
        if ch == '"':
            end = fmt.find('"', i + 1)
            end = len(fmt) if end == -1 else end
            target.append(fmt[i + 1:end])
            i = end + 1
        elif ch == '\\' and i + 1 < len(fmt):
            target.append(fmt[i + 1])
            i += 2
        elif ch in '_*':
            # padding directives
            i += 2
        elif ch == '[':
            end = fmt.find(']', i)
            end = len(fmt) if end == -1 else end
            body = fmt[i + 1:end]
            if body.startswith('$'):
                target.append(body[1:].split('-')[0])
            i = end + 1
        elif ch in _NUMBER_CHARS and not suffix and (number or ch != ','):
            number.append(ch)
            i += 1
        else:
            target.append(ch)
            i += 1
    return ''.join(prefix), ''.join(number), ''.join(suffix)


def format_value(value: Any, fmt: Optional[str] = None) -> str:
    """
    Format a measure value with a spreadsheet-style format string.

    Non-numeric values are returned as text; ``None`` becomes ''.
    """
    if value is None:
        return ''
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not math.isfinite(number):
        return str(number)

    fmt = (fmt or DEFAULT_VALUE_FORMAT).split(';')[0]
    prefix, pattern, suffix = _split_format(fmt)
    if not pattern:
        return f'{prefix}{number:g}{suffix}'

    if '%' in prefix or '%' in suffix:
        number *= 100

    # Trailing commas scale by thousands
    stripped = pattern.rstrip(',')
    number /= 1000 ** (len(pattern) - len(stripped))
    pattern = stripped

    integer_part, _, decimal_part = pattern.partition('.')
    max_decimals = sum(1 for c in decimal_part if c in '0#')
    min_decimals = decimal_part.count('0')
    grouping = ',' if ',' in integer_part else ''

    text = f'{abs(number):{grouping}.{max_decimals}f}'
    if max_decimals > min_decimals:
        whole, _, frac = text.partition('.')
        frac = frac.rstrip('0')
        if len(frac) < min_decimals:
            frac = frac.ljust(min_decimals, '0')
        text = f'{whole}.{frac}' if frac else whole

    sign = '-' if number < 0 and float(text.replace(',', '')) != 0 else ''
    return f'{sign}{prefix}{text}{suffix}'


def node_html(node: Node) -> str:
    """Tooltip body for a node: its field label and id, then its group."""
    return (
        f'<b>{escape(node.node_field_label)}</b>: {escape(node.id)}<br>'
        f'<b>{escape(node.group_field_label)}</b>: {escape(node.group)}'
    )


def link_html(link: Link, measure: Optional[FieldInfo], config: GraphConfig) -> str:
    """Tooltip body for a link: its endpoints and its formatted value."""
    fmt = (measure.value_format if measure else None) or config.tooltip_val_format or None
    label = measure.display_label if measure else 'Weight'
    return (
        f'<b>Source</b>: {escape(link.source_id)}<br>'
        f'<b>Target</b>: {escape(link.target_id)}<br>'
        f'<b>{escape(label)}</b>: {escape(format_value(link.value, fmt))}'
    )


def estimate_height(html: str, font_size: float) -> float:
    """Rendered height of a tooltip body, for hosts that cannot measure it."""
    lines = html.count('<br>') + 1
    return lines * font_size * LINE_HEIGHT + 2 * PADDING


def place(
    tooltip: TooltipState,
    pointer: Pointer,
    font_size: float,
    height: Optional[float] = None,
) -> TooltipState:
    """Position a tooltip beside the pointer, lifted by its own height."""
    if height is None:
        height = estimate_height(tooltip.html, font_size)
    return TooltipState(
        visible=tooltip.visible,
        x=pointer.x + OFFSET_X,
        y=max(0.0, pointer.y - height - OFFSET_Y),
        html=tooltip.html,
    )
