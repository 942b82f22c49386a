# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Render-pass orchestration.

"""
One force graph on one host canvas.

Every data or configuration change is a new render pass: the previous
simulation is cancelled through its generation token, all state is
dropped, and the graph is rebuilt from scratch. Shape, data and config
errors are returned to the host as ``{'title', 'message'}`` before any
simulation starts.

The host drives the loop: it calls ``on_frame`` once per animation
frame and forwards pointer events to the handler methods between
frames. Handlers run to completion before the next tick.

Usage:
    view = ForceGraphView(width=800, height=600)
    result = view.render(rows, fields, {'labels': 'on_hover'})
    if not result.ok:
        show_error(result.error)
    while view.running:
        draw(view.on_frame())
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .builder import build_graph, resolve_roles, validate_shape
from .config import GraphConfig, SimulationConfig, resolve_config
from .errors import ForceGraphError
from .interaction import IDLE, InteractionController, InteractionState, Pointer
from .layout import ForceSimulation, GenerationToken
from .model import Graph, QueryFields, Row, SimulationSnapshot
from .render import Frame, RenderAdapter

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    ok: bool
    error: Optional[Dict[str, str]] = None
    graph: Optional[Graph] = None


class ForceGraphView:
    """Owns the current generation's graph, simulation and interaction state."""

    def __init__(self, width: float, height: float, sim_config: Optional[SimulationConfig] = None):
        self.width = width
        self.height = height
        self.sim_config = sim_config
        self.generation = 0

        self.graph: Optional[Graph] = None
        self.config: Optional[GraphConfig] = None
        self.simulation: Optional[ForceSimulation] = None
        self.controller: Optional[InteractionController] = None
        self.adapter: Optional[RenderAdapter] = None
        self.state: InteractionState = IDLE
        self._token: Optional[GenerationToken] = None
        self._snapshot: Optional[SimulationSnapshot] = None
        self._last_input = None

    @property
    def running(self) -> bool:
        return self.simulation is not None and self.simulation.running

    def clear(self) -> None:
        """Stop the current simulation and forget the current graph."""
        if self._token is not None:
            self._token.cancel()
        self._token = None
        self.graph = None
        self.config = None
        self.simulation = None
        self.controller = None
        self.adapter = None
        self.state = IDLE
        self._snapshot = None

    def render(
        self,
        rows: Sequence[Row],
        fields: Optional[QueryFields] = None,
        config: Union[GraphConfig, Mapping[str, Any], None] = None,
    ) -> RenderResult:
        """
        Start a new render pass.

        Args:
            rows: Query rows.
            fields: Query field descriptors; derived from the first
                row's keys when omitted.
            config: Options as a GraphConfig or a raw mapping. A raw
                mapping may also name the endpoint fields with
                ``Node_1``/``Group_1``/``Node_2``/``Group_2``.

        Returns:
            RenderResult; ``ok`` is False and ``error`` is set when the
            pass was rejected, in which case no simulation is running.
        """
        self.clear()
        rows = list(rows)
        self._last_input = (rows, fields, config)
        self.generation += 1

        try:
            resolved = resolve_config(config)
            if fields is None:
                fields = QueryFields.from_rows(rows)
            validate_shape(fields)
            roles = resolve_roles(fields, config if isinstance(config, Mapping) else None)
            graph = build_graph(rows, roles, fields, resolved)
        except ForceGraphError as e:
            logger.info(f"Render pass {self.generation} rejected: {e.title} {e.message}")
            return RenderResult(ok=False, error=e.to_dict())

        self._token = GenerationToken(self.generation)
        self.graph = graph
        self.config = resolved
        self.simulation = ForceSimulation(
            graph,
            self.width,
            self.height,
            radius=resolved.circle_radius,
            link_distance=resolved.link_distance,
            config=self.sim_config,
            token=self._token,
        )
        self.controller = InteractionController(graph, self.simulation, resolved)
        self.adapter = RenderAdapter(graph, resolved, self.width, self.height)
        logger.debug(f"Render pass {self.generation}: {len(graph)} nodes, {len(graph.links)} links")
        return RenderResult(ok=True, graph=graph)

    def resize(self, width: float, height: float) -> Optional[RenderResult]:
        """New viewport size: redraw everything with the last input."""
        self.width = width
        self.height = height
        if self._last_input is None:
            return None
        return self.render(*self._last_input)

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def on_frame(self) -> Optional[Frame]:
        """Advance one tick (if still running) and return the frame to draw."""
        if self.simulation is None:
            return None
        snapshot = self.simulation.step()
        if snapshot is not None:
            self._snapshot = snapshot
        return self.adapter.frame(self._snapshot or self.simulation.snapshot(), self.state)

    def settle(self, max_ticks: Optional[int] = None) -> Optional[Frame]:
        """Run until the layout cools and return the final frame."""
        if self.simulation is None:
            return None
        self._snapshot = self.simulation.settle(max_ticks)
        return self.adapter.frame(self._snapshot, self.state)

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def hover_node(self, node_id: str, x: float, y: float,
                   tooltip_height: Optional[float] = None) -> InteractionState:
        if self.controller is not None:
            self.state = self.controller.hover_node(self.state, node_id, Pointer(x, y), tooltip_height)
        return self.state

    def hover_link(self, link_index: int, x: float, y: float,
                   tooltip_height: Optional[float] = None) -> InteractionState:
        if self.controller is not None:
            self.state = self.controller.hover_link(self.state, link_index, Pointer(x, y), tooltip_height)
        return self.state

    def pointer_move(self, x: float, y: float,
                     tooltip_height: Optional[float] = None) -> InteractionState:
        if self.controller is not None:
            self.state = self.controller.move(self.state, Pointer(x, y), tooltip_height)
        return self.state

    def hover_end(self) -> InteractionState:
        if self.controller is not None:
            self.state = self.controller.hover_end(self.state)
        return self.state

    def drag_start(self, node_id: str) -> InteractionState:
        if self.controller is not None:
            self.state = self.controller.drag_start(self.state, node_id)
        return self.state

    def drag(self, x: float, y: float) -> InteractionState:
        if self.controller is not None:
            self.state = self.controller.drag(self.state, x, y)
        return self.state

    def drag_end(self) -> InteractionState:
        if self.controller is not None:
            self.state = self.controller.drag_end(self.state)
        return self.state
