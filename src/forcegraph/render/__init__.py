# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Force graph rendering.

"""
Rendering for force graph visualization.

The RenderAdapter turns simulation snapshots and interaction state into
drawing-API independent primitives (circles, lines, texts, tooltip box).
``frame_to_svg`` is a static adapter from those primitives to SVG.
"""

from .primitives import Circle, Line, Text, TooltipBox, Frame
from .adapter import RenderAdapter, label_text
from .svg import frame_to_svg

__all__ = [
    'Circle',
    'Line',
    'Text',
    'TooltipBox',
    'Frame',
    'RenderAdapter',
    'label_text',
    'frame_to_svg',
]
