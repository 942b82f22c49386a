# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Draw primitives emitted per frame.

"""
Drawing-API independent primitives.

A Frame is everything a host canvas needs to redraw the graph for one
tick: node circles, link lines, label texts and the tooltip box.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Circle:
    node_id: str
    cx: float
    cy: float
    r: float
    fill: str
    stroke: str = '#fff'
    stroke_width: float = 1.0
    opacity: float = 1.0
    visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'circle', **asdict(self)}


@dataclass(frozen=True)
class Line:
    link_index: int
    source_id: str
    target_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float
    opacity: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'line', **asdict(self)}


@dataclass(frozen=True)
class Text:
    node_id: str
    x: float
    y: float
    text: str
    font_size: float
    font_weight: str
    fill: str
    opacity: float = 1.0
    anchor: str = 'middle'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'text', **asdict(self)}


@dataclass(frozen=True)
class TooltipBox:
    x: float
    y: float
    html: str
    font_size: float
    visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'tooltip', **asdict(self)}


@dataclass(frozen=True)
class Frame:
    """Primitives for one tick, in paint order (links under nodes)."""
    generation: int
    tick: int
    width: float
    height: float
    lines: List[Line] = field(default_factory=list)
    circles: List[Circle] = field(default_factory=list)
    texts: List[Text] = field(default_factory=list)
    tooltip: Optional[TooltipBox] = None

    def primitives(self) -> List[Any]:
        items: List[Any] = [*self.lines, *self.circles, *self.texts]
        if self.tooltip is not None:
            items.append(self.tooltip)
        return items

    def to_dicts(self) -> List[Dict[str, Any]]:
        header = {
            'type': 'frame',
            'generation': self.generation,
            'tick': self.tick,
            'width': self.width,
            'height': self.height,
        }
        return [header] + [p.to_dict() for p in self.primitives()]
