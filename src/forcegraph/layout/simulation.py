# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Tick-based force simulation.

"""
Force-directed layout as a cooling simulation.

Every tick the simulation "heat" ``alpha`` decays toward
``alpha_target``; repulsion, link springs and centering are added into
the node velocities, velocities are damped, positions integrated and
finally clamped to the canvas. The loop stops once alpha falls below
``alpha_min``. Dragging a node raises ``alpha_target`` so the layout
stays live until the drag ends.

Nodes remain the source of truth between ticks. A tick copies their
coordinates into NumPy arrays, works on the arrays, and writes the
result back.
"""

import logging
import math
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from ..config import SimulationConfig
from ..errors import ConstructionError
from ..model import Graph, SimulationSnapshot
from .forces import (
    centering,
    clamp_to_canvas,
    link_spring,
    link_strengths,
    many_body,
    phyllotaxis,
)

logger = logging.getLogger(__name__)


class GenerationToken:
    """Marks which render pass a simulation belongs to."""

    def __init__(self, generation: int = 0):
        self.generation = generation
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        state = 'active' if self.active else 'cancelled'
        return f'GenerationToken({self.generation}, {state})'


class ForceSimulation:
    """
    Continuous layout of one graph on a ``width`` x ``height`` canvas.

    Args:
        graph: Graph whose node positions this simulation owns.
        width: Canvas width.
        height: Canvas height.
        radius: Node circle radius; nodes are kept this far from the edges.
        link_distance: Rest length of link springs.
        config: Solver constants.
        token: Generation token; once cancelled, the simulation never
            writes to its nodes again.
    """

    def __init__(
        self,
        graph: Graph,
        width: float,
        height: float,
        radius: float = 5,
        link_distance: float = 30,
        config: Optional[SimulationConfig] = None,
        token: Optional[GenerationToken] = None,
    ):
        self.graph = graph
        self.width = float(width)
        self.height = float(height)
        self.radius = float(radius)
        self.link_distance = float(link_distance)
        self.config = config or SimulationConfig()
        self.token = token or GenerationToken()

        self.alpha = self.config.alpha
        self.alpha_target = self.config.alpha_target
        self.tick_count = 0
        self._running = True
        self._rng = np.random.default_rng(self.config.seed)

        self._nodes = list(graph.nodes.values())
        index = {node.id: i for i, node in enumerate(self._nodes)}
        try:
            self._sources = np.array([index[link.source_id] for link in graph.links], dtype=int)
            self._targets = np.array([index[link.target_id] for link in graph.links], dtype=int)
        except KeyError as e:
            raise ConstructionError(f'Link endpoint {e.args[0]!r} is not in the node set') from None
        self._strength, self._bias = link_strengths(self._sources, self._targets, len(self._nodes))

        self._initialize_positions()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running and self.token.active

    def _initialize_positions(self) -> None:
        """Place nodes without a position on a spiral around the centre."""
        start = phyllotaxis(len(self._nodes), (self.width / 2, self.height / 2))
        for i, node in enumerate(self._nodes):
            if node.fx is not None:
                node.x = node.fx
            elif not math.isfinite(node.x):
                node.x = float(start[i, 0])
            if node.fy is not None:
                node.y = node.fy
            elif not math.isfinite(node.y):
                node.y = float(start[i, 1])

    def _gather(self) -> Tuple[np.ndarray, ...]:
        nodes = self._nodes
        x = np.array([n.x for n in nodes], dtype=float)
        y = np.array([n.y for n in nodes], dtype=float)
        vx = np.array([n.vx for n in nodes], dtype=float)
        vy = np.array([n.vy for n in nodes], dtype=float)
        fx = np.array([math.nan if n.fx is None else n.fx for n in nodes], dtype=float)
        fy = np.array([math.nan if n.fy is None else n.fy for n in nodes], dtype=float)
        return x, y, vx, vy, fx, fy

    def _scatter(self, x, y, vx, vy) -> None:
        for i, node in enumerate(self._nodes):
            node.x = float(x[i])
            node.y = float(y[i])
            node.vx = float(vx[i])
            node.vy = float(vy[i])

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            tick=self.tick_count,
            alpha=self.alpha,
            alpha_target=self.alpha_target,
            width=self.width,
            height=self.height,
            generation=self.token.generation,
            positions={n.id: (n.x, n.y) for n in self._nodes},
        )

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def reheat(self, alpha_target: float) -> None:
        self.alpha_target = alpha_target

    def restart(self) -> None:
        if self.token.active:
            self._running = True

    def stop(self) -> None:
        self._running = False

    def pin(self, node_id: str, x: float, y: float) -> None:
        """Fix a node at (x, y); it leaves free-body integration."""
        node = self.graph.node(node_id)
        node.fx = float(x)
        node.fy = float(y)

    def unpin(self, node_id: str) -> None:
        node = self.graph.node(node_id)
        node.fx = None
        node.fy = None

    # ------------------------------------------------------------------
    # Integration
    # ------------------------------------------------------------------

    def tick(self) -> Optional[SimulationSnapshot]:
        """
        Advance the layout by one step, regardless of ``running``.

        Returns:
            The snapshot after the step, or None if the generation
            token has been cancelled.
        """
        if not self.token.active:
            self._running = False
            return None

        cfg = self.config
        self.alpha += (self.alpha_target - self.alpha) * cfg.alpha_decay
        x, y, vx, vy, fx, fy = self._gather()

        if len(x):
            many_body(x, y, vx, vy, self.alpha, cfg.charge_strength,
                      cfg.distance_min, cfg.distance_max, self._rng)
            link_spring(x, y, vx, vy, self._sources, self._targets, self.alpha,
                        self.link_distance, self._strength, self._bias, self._rng)
            centering(x, y, self.width / 2, self.height / 2, cfg.center_strength)

            damping = 1 - cfg.velocity_decay
            for pos, vel, fixed in ((x, vx, fx), (y, vy, fy)):
                pinned = ~np.isnan(fixed)
                free = ~pinned
                vel[free] *= damping
                pos[free] += vel[free]
                pos[pinned] = fixed[pinned]
                vel[pinned] = 0.0

            clamp_to_canvas(x, y, self.width, self.height, self.radius)
            self._scatter(x, y, vx, vy)

        self.tick_count += 1
        return self.snapshot()

    def step(self) -> Optional[SimulationSnapshot]:
        """One frame of the loop: tick if running, then stop once cooled."""
        if not self.running:
            return None
        snapshot = self.tick()
        if snapshot is None:
            logger.debug(f"Simulation {self.token!r} cancelled at tick {self.tick_count}")
            return None
        if self.alpha < self.config.alpha_min:
            self._running = False
            logger.debug(f"Simulation settled after {self.tick_count} ticks")
        return snapshot

    def run(self, max_ticks: Optional[int] = None) -> Iterator[SimulationSnapshot]:
        """Yield snapshots until the layout cools, is cancelled, or ``max_ticks`` is hit."""
        count = 0
        while max_ticks is None or count < max_ticks:
            snapshot = self.step()
            if snapshot is None:
                return
            count += 1
            yield snapshot

    def settle(self, max_ticks: Optional[int] = None) -> SimulationSnapshot:
        """Run to convergence and return the last snapshot."""
        last = None
        for last in self.run(max_ticks):
            pass
        return last or self.snapshot()


def force_directed(
    graph: Graph,
    width: float = 800,
    height: float = 600,
    radius: float = 5,
    link_distance: float = 30,
    config: Optional[SimulationConfig] = None,
    max_ticks: Optional[int] = None,
) -> Dict[str, Tuple[float, float]]:
    """
    Compute a settled force-directed layout.

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    if not graph.nodes:
        return {}
    simulation = ForceSimulation(graph, width, height, radius, link_distance, config)
    return dict(simulation.settle(max_ticks).positions)
