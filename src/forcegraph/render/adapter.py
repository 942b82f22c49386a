# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Render adapter: simulation snapshot + interaction state -> primitives.

"""
Turn the latest positions and interaction state into a Frame.

This is the only place where numeric edge cases reach visual
attributes, so it guards them: NaN positions render links at the
origin and hide the node, and non-finite link weights are clamped to a
drawable stroke width.
"""

import math
from typing import Optional, Tuple

from ..config import GraphConfig, LabelMode
from ..interaction.highlight import opacities
from ..interaction.state import IDLE, InteractionState
from ..model import Graph, GroupType, Node, SimulationSnapshot
from ..weights import clamp_stroke_width
from .primitives import Circle, Frame, Line, Text, TooltipBox

HOVER_STROKE = '#FFA500'
HOVER_STROKE_WIDTH = 1.5
NODE_STROKE = '#fff'
NODE_STROKE_WIDTH = 1.0
LABEL_GAP = 3.0


def label_text(node: Node, config: GraphConfig) -> str:
    """
    Label for a node under the label-visibility policy.

    An explicit group list (``label_types``) takes precedence over the
    mode unless labels are turned off entirely: ``none`` hides every
    label, even nodes whose group is listed in ``label_types``. Hosts that
    apply the group list whenever labels are truthy differ only in that
    case. ``on_hover`` labels every node; visibility is then controlled
    by label opacity.
    """
    mode = config.labels
    if mode == LabelMode.NONE:
        return ''
    label_filter = config.label_filter
    if label_filter:
        return node.id if node.group in label_filter else ''
    if mode in (LabelMode.ALL, LabelMode.ON_HOVER):
        return node.id
    if mode == LabelMode.SOURCE_GROUP:
        return node.id if node.group_type == GroupType.SOURCE else ''
    if mode == LabelMode.TARGET_GROUP:
        return node.id if node.group_type == GroupType.TARGET else ''
    return ''


def _safe(value: float) -> float:
    return 0.0 if math.isnan(value) else value


class RenderAdapter:
    """Builds frames for one graph on a fixed-size canvas."""

    def __init__(self, graph: Graph, config: GraphConfig, width: float, height: float):
        self.graph = graph
        self.config = config
        self.width = width
        self.height = height
        self._labels = {node.id: label_text(node, config) for node in graph}

    def _position(self, node: Node, snapshot: Optional[SimulationSnapshot]) -> Tuple[float, float]:
        if snapshot is not None and node.id in snapshot.positions:
            return snapshot.positions[node.id]
        return node.x, node.y

    def frame(
        self,
        snapshot: Optional[SimulationSnapshot] = None,
        state: InteractionState = IDLE,
    ) -> Frame:
        """
        Emit the primitives for one tick.

        Args:
            snapshot: Positions to draw; node coordinates are used when
                omitted (e.g. before the first tick).
            state: Interaction state to reflect (hover strokes,
                highlight opacities, tooltip).
        """
        config = self.config
        radius = config.circle_radius
        fade = opacities(self.graph, state, config)
        positions = {node.id: self._position(node, snapshot) for node in self.graph}
        has_measure = self.graph.measure is not None

        lines = []
        for index, link in enumerate(self.graph.links):
            x1, y1 = positions[link.source_id]
            x2, y2 = positions[link.target_id]
            width = clamp_stroke_width(link.weight) if has_measure else link.weight
            lines.append(Line(
                link_index=index,
                source_id=link.source_id,
                target_id=link.target_id,
                x1=_safe(x1), y1=_safe(y1), x2=_safe(x2), y2=_safe(y2),
                stroke=HOVER_STROKE if state.hovered_link == index else config.link_color,
                stroke_width=width,
                opacity=config.link_opacity * fade.links[index],
            ))

        circles = []
        texts = []
        for node in self.graph:
            x, y = positions[node.id]
            visible = not (math.isnan(x) or math.isnan(y))
            hovered = state.hovered_node == node.id
            circles.append(Circle(
                node_id=node.id,
                cx=_safe(x),
                cy=_safe(y),
                r=radius,
                fill=config.color_for(self.graph.group_ordinal(node.group)),
                stroke=HOVER_STROKE if hovered else NODE_STROKE,
                stroke_width=HOVER_STROKE_WIDTH if hovered else NODE_STROKE_WIDTH,
                opacity=fade.nodes[node.id],
                visible=visible,
            ))
            text = self._labels[node.id]
            if text and visible:
                texts.append(Text(
                    node_id=node.id,
                    x=x,
                    y=y - radius - LABEL_GAP,
                    text=text,
                    font_size=config.font_size,
                    font_weight=config.font_weight,
                    fill=config.font_color,
                    opacity=fade.labels[node.id],
                ))

        tooltip = None
        if state.tooltip.visible:
            tooltip = TooltipBox(
                x=state.tooltip.x,
                y=state.tooltip.y,
                html=state.tooltip.html,
                font_size=config.tooltip_font,
            )

        return Frame(
            generation=snapshot.generation if snapshot else 0,
            tick=snapshot.tick if snapshot else 0,
            width=self.width,
            height=self.height,
            lines=lines,
            circles=circles,
            texts=texts,
            tooltip=tooltip,
        )
