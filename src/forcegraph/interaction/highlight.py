# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Neighbor highlighting on hover.

"""
Focus on hover: emphasise a node, its incident links and its 1-hop
neighbours, dim everything else.

Opacities are derived from the interaction state on demand rather than
stored, so clearing the highlight always returns every element to the
baseline.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from ..config import GraphConfig
from ..model import Graph
from .state import InteractionState

FULL = 1.0
HIDDEN = 0.0


def neighborhood(graph: Graph, node_id: str) -> Tuple[FrozenSet[str], FrozenSet[int]]:
    """
    The hovered node plus its 1-hop neighbours, and the incident links.

    Returns:
        (node ids, link indices)
    """
    links = graph.incident_links(node_id)
    nodes = {node_id}
    for index in links:
        link = graph.links[index]
        nodes.add(link.source_id)
        nodes.add(link.target_id)
    return frozenset(nodes), frozenset(links)


@dataclass(frozen=True)
class OpacityMap:
    nodes: Dict[str, float]
    links: Dict[int, float]
    labels: Dict[str, float]


def baseline(graph: Graph, config: GraphConfig) -> OpacityMap:
    """Opacities with nothing hovered."""
    label = HIDDEN if config.labels_on_hover else FULL
    return OpacityMap(
        nodes={node_id: FULL for node_id in graph.nodes},
        links={index: FULL for index in range(len(graph.links))},
        labels={node_id: label for node_id in graph.nodes},
    )


def opacities(graph: Graph, state: InteractionState, config: GraphConfig) -> OpacityMap:
    """Opacities for every node, link and label under the given state."""
    if not state.highlight_active:
        return baseline(graph, config)

    dim = config.highlight_opacity if config.highlight_selection else FULL
    outside_label = HIDDEN if config.labels_on_hover else dim
    nodes = {
        node_id: FULL if node_id in state.highlight_nodes else dim
        for node_id in graph.nodes
    }
    links = {
        index: FULL if index in state.highlight_links else dim
        for index in range(len(graph.links))
    }
    labels = {
        node_id: FULL if node_id in state.highlight_nodes else outside_label
        for node_id in graph.nodes
    }
    return OpacityMap(nodes=nodes, links=links, labels=labels)
