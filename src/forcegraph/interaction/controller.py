# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Pointer interaction: hover, tooltip and drag-to-pin.

"""
Interaction controller.

Two orthogonal state machines share one InteractionState value:

    Idle -> Hovering(node | link) -> Idle
    Idle -> Dragging(node)        -> Idle

Dragging suppresses hover: while a drag is in progress, hover and move
events return the state unchanged, so stray pointer moves can neither
highlight neighbours nor reposition the tooltip.

The controller writes only ``fx``/``fy`` of the dragged node (through
the simulation's pin API) and the simulation's alpha target.
"""

import logging
from dataclasses import replace
from typing import Optional

from ..config import GraphConfig
from ..layout.simulation import ForceSimulation
from ..model import Graph
from .highlight import neighborhood
from .state import HIDDEN_TOOLTIP, IDLE, InteractionState, Pointer, TooltipState
from .tooltip import link_html, node_html, place

logger = logging.getLogger(__name__)


class InteractionController:
    """Handlers mapping (state, event) to a new state."""

    def __init__(self, graph: Graph, simulation: ForceSimulation, config: GraphConfig):
        self.graph = graph
        self.simulation = simulation
        self.config = config

    @property
    def highlights(self) -> bool:
        """Whether hovering a node computes a neighbourhood."""
        return self.config.highlight_selection or self.config.labels_on_hover

    def _tooltip(self, html: str, pointer: Pointer, height: Optional[float]) -> TooltipState:
        if not self.config.tooltip:
            return HIDDEN_TOOLTIP
        return place(TooltipState(visible=True, html=html), pointer, self.config.tooltip_font, height)

    # ------------------------------------------------------------------
    # Hover
    # ------------------------------------------------------------------

    def hover_node(self, state: InteractionState, node_id: str, pointer: Pointer,
                   tooltip_height: Optional[float] = None) -> InteractionState:
        if state.dragging:
            return state
        node = self.graph.node(node_id)
        nodes, links = neighborhood(self.graph, node_id) if self.highlights else (frozenset(), frozenset())
        return replace(
            state,
            hovered_id=node_id,
            hovered_kind='node',
            highlight_active=self.highlights,
            highlight_nodes=nodes,
            highlight_links=links,
            tooltip=self._tooltip(node_html(node), pointer, tooltip_height),
        )

    def hover_link(self, state: InteractionState, link_index: int, pointer: Pointer,
                   tooltip_height: Optional[float] = None) -> InteractionState:
        if state.dragging:
            return state
        if not 0 <= link_index < len(self.graph.links):
            raise IndexError(f"no link at index {link_index}")
        link = self.graph.links[link_index]
        html = link_html(link, self.graph.measure, self.config)
        return replace(
            state,
            hovered_id=str(link_index),
            hovered_kind='link',
            highlight_active=False,
            highlight_nodes=frozenset(),
            highlight_links=frozenset(),
            tooltip=self._tooltip(html, pointer, tooltip_height),
        )

    def move(self, state: InteractionState, pointer: Pointer,
             tooltip_height: Optional[float] = None) -> InteractionState:
        """Pointer moved within the hovered element: the tooltip follows."""
        if state.dragging or not state.tooltip.visible:
            return state
        return replace(state, tooltip=place(state.tooltip, pointer, self.config.tooltip_font, tooltip_height))

    def hover_end(self, state: InteractionState) -> InteractionState:
        return replace(
            state,
            hovered_id=None,
            hovered_kind=None,
            highlight_active=False,
            highlight_nodes=frozenset(),
            highlight_links=frozenset(),
            tooltip=HIDDEN_TOOLTIP,
        )

    # ------------------------------------------------------------------
    # Drag
    # ------------------------------------------------------------------

    def drag_start(self, state: InteractionState, node_id: str) -> InteractionState:
        """Pin the node where it is and keep the simulation warm."""
        node = self.graph.node(node_id)
        self.simulation.reheat(self.simulation.config.drag_alpha_target)
        self.simulation.restart()
        self.simulation.pin(node_id, node.x, node.y)
        logger.debug(f"Drag start on {node_id!r}")
        return replace(self.hover_end(state), dragging_node_id=node_id)

    def drag(self, state: InteractionState, x: float, y: float) -> InteractionState:
        if not state.dragging:
            return state
        self.simulation.pin(state.dragging_node_id, x, y)
        return state

    def drag_end(self, state: InteractionState) -> InteractionState:
        """Release the pin and let the layout cool down again."""
        if not state.dragging:
            return state
        self.simulation.reheat(0.0)
        self.simulation.unpin(state.dragging_node_id)
        logger.debug(f"Drag end on {state.dragging_node_id!r}")
        return replace(state, dragging_node_id=None)

    def reset(self) -> InteractionState:
        return IDLE
