# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Static SVG output for a frame.

"""
Render a Frame to an SVG document.

A simple pixel adapter for the primitive stream, used by the command
line tool to snapshot a settled layout.
"""

import re
from html import unescape
from typing import List

from .primitives import Frame, TooltipBox

FONT_FAMILY = '"Open Sans", "Helvetica", sans-serif'
TOOLTIP_FILL = 'rgba(0, 0, 0, 0.75)'
TOOLTIP_TEXT = '#FFFFFF'


def escape_xml(text: str) -> str:
    """Escape special XML characters."""
    return (text
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;'))


def _tooltip_lines(tooltip: TooltipBox) -> List[str]:
    """Plain text lines of the tooltip body."""
    return [unescape(re.sub(r'<[^>]+>', '', part)) for part in tooltip.html.split('<br>')]


def frame_to_svg(frame: Frame) -> str:
    """Render a frame to an SVG string."""
    svg_parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{frame.width:g}" height="{frame.height:g}" '
        f'viewBox="0 0 {frame.width:g} {frame.height:g}" '
        f"style='font-family:{FONT_FAMILY}'>",
        '',
        '  <!-- Links -->',
        '  <g id="links">',
    ]

    for line in frame.lines:
        svg_parts.append(
            f'    <line x1="{line.x1:.2f}" y1="{line.y1:.2f}" '
            f'x2="{line.x2:.2f}" y2="{line.y2:.2f}" '
            f'stroke="{escape_xml(line.stroke)}" stroke-width="{line.stroke_width:g}" '
            f'stroke-opacity="{line.opacity:g}"/>'
        )

    svg_parts.extend([
        '  </g>',
        '',
        '  <!-- Nodes -->',
        '  <g id="nodes">',
    ])

    for circle in frame.circles:
        if not circle.visible:
            continue
        svg_parts.append(
            f'    <circle cx="{circle.cx:.2f}" cy="{circle.cy:.2f}" r="{circle.r:g}" '
            f'fill="{escape_xml(circle.fill)}" stroke="{escape_xml(circle.stroke)}" '
            f'stroke-width="{circle.stroke_width:g}" opacity="{circle.opacity:g}">'
            f'<title>{escape_xml(circle.node_id)}</title></circle>'
        )

    svg_parts.extend([
        '  </g>',
        '',
        '  <!-- Labels -->',
        '  <g id="labels">',
    ])

    for text in frame.texts:
        svg_parts.append(
            f'    <text x="{text.x:.2f}" y="{text.y:.2f}" text-anchor="{text.anchor}" '
            f'font-size="{text.font_size:g}px" font-weight="{text.font_weight}" '
            f'fill="{escape_xml(text.fill)}" opacity="{text.opacity:g}">'
            f'{escape_xml(text.text)}</text>'
        )

    svg_parts.append('  </g>')

    tooltip = frame.tooltip
    if tooltip is not None and tooltip.visible:
        lines = _tooltip_lines(tooltip)
        line_height = tooltip.font_size * 1.4
        box_width = max(len(s) for s in lines) * tooltip.font_size * 0.6 + 8
        box_height = len(lines) * line_height + 8
        svg_parts.extend([
            '',
            '  <!-- Tooltip -->',
            f'  <g id="tooltip" transform="translate({tooltip.x:.2f},{tooltip.y:.2f})">',
            f'    <rect width="{box_width:.1f}" height="{box_height:.1f}" rx="5" fill="{TOOLTIP_FILL}"/>',
        ])
        for i, content in enumerate(lines):
            svg_parts.append(
                f'    <text x="4" y="{4 + (i + 0.8) * line_height:.1f}" '
                f'font-size="{tooltip.font_size:g}px" fill="{TOOLTIP_TEXT}">{escape_xml(content)}</text>'
            )
        svg_parts.append('  </g>')

    svg_parts.append('</svg>')
    return '\n'.join(svg_parts)
