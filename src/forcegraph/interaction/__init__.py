# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Pointer interaction for force graphs.

"""
Interaction for force graph visualization.

Provides:
- InteractionState: immutable hover / drag / tooltip state
- InteractionController: handlers returning a new state per event
- Neighbour highlighting and opacity maps
- Tooltip templates and spreadsheet-style value formats
"""

from .state import InteractionState, TooltipState, Pointer, IDLE
from .controller import InteractionController
from .highlight import OpacityMap, neighborhood, opacities, baseline
from .tooltip import format_value, node_html, link_html

__all__ = [
    'InteractionState',
    'TooltipState',
    'Pointer',
    'IDLE',
    'InteractionController',
    'OpacityMap',
    'neighborhood',
    'opacities',
    'baseline',
    'format_value',
    'node_html',
    'link_html',
]
