# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Graph data model: nodes, links, field roles and simulation snapshots.

"""
Data classes shared by the builder, the simulation and the renderer.

Nodes live in an arena keyed by id (``Graph.nodes``). Links store node
ids only; the simulation resolves them to array indices inside a tick,
so there are no node <-> link reference cycles.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Tuple

# A row maps field names to cells such as {'value': 'A'}
Row = Mapping[str, Mapping[str, Any]]


# ============================================================================
# GRAPH ELEMENTS
# ============================================================================

class GroupType(str, Enum):
    """Which side of a row first introduced a node."""
    SOURCE = 'SOURCE'
    TARGET = 'TARGET'


@dataclass
class Node:
    """A graph vertex. Position and velocity are owned by the simulation."""
    id: str
    group: str
    group_type: GroupType
    node_field_label: str = ''
    group_field_label: str = ''
    x: float = math.nan
    y: float = math.nan
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def pinned(self) -> bool:
        return self.fx is not None and self.fy is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            'type': 'node',
            'id': self.id,
            'group': self.group,
            'group_type': self.group_type.value,
            'node_field': self.node_field_label,
            'group_field': self.group_field_label,
            'x': self.x,
            'y': self.y,
        }


@dataclass
class Link:
    """A weighted edge between two node ids."""
    source_id: str
    target_id: str
    weight: float = 1.0
    value: Any = 1

    def touches(self, node_id: str) -> bool:
        return self.source_id == node_id or self.target_id == node_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            'type': 'link',
            'source': self.source_id,
            'target': self.target_id,
            'weight': self.weight,
            'value': self.value,
        }


# ============================================================================
# QUERY FIELDS
# ============================================================================

@dataclass
class FieldInfo:
    """Description of one query field (dimension or measure)."""
    name: str
    label: str = ''
    label_short: str = ''
    value_format: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label_short or self.label or self.name

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'FieldInfo':
        """Create from a host field descriptor."""
        return cls(
            name=d['name'],
            label=d.get('label') or '',
            label_short=d.get('label_short') or '',
            value_format=d.get('value_format') or None,
        )


@dataclass
class QueryFields:
    """The dimensions, measures and pivots of a query response."""
    dimensions: List[FieldInfo] = field(default_factory=list)
    measures: List[FieldInfo] = field(default_factory=list)
    pivots: List[FieldInfo] = field(default_factory=list)

    def find(self, name: Optional[str]) -> Optional[FieldInfo]:
        for info in self.dimensions + self.measures:
            if info.name == name:
                return info
        return None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'QueryFields':
        """Create from ``{'dimensions': [...], 'measures': [...], 'pivots': [...]}``.

        Plain strings are accepted in place of field descriptors.
        """
        def parse(items):
            return [FieldInfo(name=i) if isinstance(i, str) else FieldInfo.from_dict(i)
                    for i in items or []]

        return cls(
            dimensions=parse(d.get('dimensions') or d.get('dimension_like')),
            measures=parse(d.get('measures') or d.get('measure_like')),
            pivots=parse(d.get('pivots')),
        )

    @classmethod
    def from_rows(cls, rows: List[Row]) -> 'QueryFields':
        """Read fields off the first row: four dimensions, then any measures."""
        if not rows:
            return cls()
        names = list(rows[0])
        return cls(
            dimensions=[FieldInfo(name=name) for name in names[:4]],
            measures=[FieldInfo(name=name) for name in names[4:]],
        )


@dataclass(frozen=True)
class FieldRoles:
    """Which row fields play the four endpoint roles, plus the optional weight."""
    source_node: str
    source_group: str
    target_node: str
    target_group: str
    weight: Optional[str] = None

    @classmethod
    def from_fields(cls, fields: QueryFields) -> 'FieldRoles':
        """Default roles: the first four dimensions in order, first measure as weight."""
        names = [d.name for d in fields.dimensions[:4]]
        measure = fields.measures[0].name if fields.measures else None
        return cls(*names, weight=measure)


# ============================================================================
# GRAPH
# ============================================================================

@dataclass
class Graph:
    """Nodes (in first-seen order), links, and groups (in first-seen order)."""
    nodes: Dict[str, Node] = field(default_factory=dict)
    links: List[Link] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)
    measure: Optional[FieldInfo] = None
    skipped_rows: int = 0

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def node(self, node_id: str) -> Node:
        return self.nodes[node_id]

    def group_ordinal(self, group: str) -> int:
        return self.groups.index(group)

    def incident_links(self, node_id: str) -> Set[int]:
        """Indices of links with ``node_id`` on either end."""
        return {i for i, link in enumerate(self.links) if link.touches(node_id)}

    def neighbors(self, node_id: str) -> Set[str]:
        """Node ids exactly one link away from ``node_id``."""
        result = set()
        for link in self.links:
            if link.source_id == node_id:
                result.add(link.target_id)
            elif link.target_id == node_id:
                result.add(link.source_id)
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            'type': 'graph',
            'nodes': [n.to_dict() for n in self.nodes.values()],
            'links': [link.to_dict() for link in self.links],
            'groups': list(self.groups),
        }


@dataclass(frozen=True)
class SimulationSnapshot:
    """Positions and scalars after one tick of one generation."""
    tick: int
    alpha: float
    alpha_target: float
    width: float
    height: float
    generation: int
    positions: Dict[str, Tuple[float, float]]
