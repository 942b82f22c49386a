# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Graph construction from tabular rows.

"""
Build a node/link graph from rows with paired (node, group) dimensions.

Each row contributes a source node, a target node and one link between
them. Nodes and groups are registered the first time they are seen, so
the output order (and therefore group colours) follows the row order.
The graph is rebuilt wholesale on every data or config change.
"""

import logging
import math
from typing import Any, Iterable, Mapping, Optional

from .config import GraphConfig, resolve_config
from .errors import ConstructionError, DataShapeError, NoRenderableData
from .model import FieldInfo, FieldRoles, Graph, GroupType, Link, Node, QueryFields, Row
from .weights import apply_weight

logger = logging.getLogger(__name__)

# Bounds on the query shape: (min, max)
DIMENSION_BOUNDS = (4, 4)
MEASURE_BOUNDS = (0, 1)
PIVOT_BOUNDS = (0, 0)

# Host option keys naming the four endpoint fields
ROLE_KEYS = ('Node_1', 'Group_1', 'Node_2', 'Group_2')


def validate_shape(fields: QueryFields) -> None:
    """Reject queries that cannot be read as (node, group, node, group[, measure])."""
    for kind, items, (low, high) in (
        ('dimensions', fields.dimensions, DIMENSION_BOUNDS),
        ('measures', fields.measures, MEASURE_BOUNDS),
        ('pivots', fields.pivots, PIVOT_BOUNDS),
    ):
        count = len(items)
        if count < low:
            raise DataShapeError(
                f'This chart requires at least {low} {kind}, but the query has {count}.',
                title=f'Not enough {kind}',
            )
        if count > high:
            raise DataShapeError(
                f'This chart accepts at most {high} {kind}, but the query has {count}.',
                title=f'Too many {kind}',
            )


def resolve_roles(fields: QueryFields, options: Optional[Mapping[str, Any]] = None) -> FieldRoles:
    """
    Work out which fields play the endpoint roles.

    The host may name them explicitly with the ``Node_1``/``Group_1``/
    ``Node_2``/``Group_2`` options; anything unset falls back to the
    dimension order.
    """
    defaults = FieldRoles.from_fields(fields)
    options = options or {}
    chosen = [options.get(key) or default for key, default in zip(
        ROLE_KEYS,
        (defaults.source_node, defaults.source_group, defaults.target_node, defaults.target_group),
    )]
    return FieldRoles(*chosen, weight=defaults.weight)


def _cell(row: Row, name: Optional[str]) -> Any:
    if name is None:
        return None
    cell = row.get(name)
    if cell is None:
        return None
    return cell.get('value')


def _measure(value: Any, name: str, index: int) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        raise DataShapeError(
            f"Row {index}: measure {name!r} has non-numeric value {value!r}."
        ) from None


def _label(fields: Optional[QueryFields], name: str) -> str:
    info = fields.find(name) if fields else None
    return info.display_label if info else name


def build_graph(
    rows: Iterable[Row],
    roles: FieldRoles,
    fields: Optional[QueryFields] = None,
    config: Optional[GraphConfig] = None,
) -> Graph:
    """
    Deduplicate rows into nodes, groups and links.

    Args:
        rows: Ordered rows mapping field name to ``{'value': ...}``.
        roles: Which fields are source/target node and group, and the
            optional weight measure.
        fields: Field descriptors, used for tooltip labels and the
            measure's value format. Optional.
        config: Resolved options; only ``edge_weight`` is read here.

    Returns:
        The built Graph.

    Raises:
        NoRenderableData: every row had a null source or target node.
        DataShapeError: a measure value is not numeric.
        ConstructionError: a link endpoint is missing from the node set.
    """
    config = resolve_config(config)
    graph = Graph()
    if roles.weight:
        graph.measure = (fields.find(roles.weight) if fields else None) or FieldInfo(name=roles.weight)

    endpoints = (
        (roles.source_node, roles.source_group, GroupType.SOURCE),
        (roles.target_node, roles.target_group, GroupType.TARGET),
    )

    for index, row in enumerate(rows):
        source = _cell(row, roles.source_node)
        target = _cell(row, roles.target_node)
        if source is None or target is None:
            logger.debug(f"Skipping row {index}: null endpoint")
            graph.skipped_rows += 1
            continue

        for node_field, group_field, group_type in endpoints:
            node_id = str(_cell(row, node_field))
            if node_id in graph.nodes:
                continue
            group_value = _cell(row, group_field)
            group = '' if group_value is None else str(group_value)
            if group not in graph.groups:
                graph.groups.append(group)
            graph.nodes[node_id] = Node(
                id=node_id,
                group=group,
                group_type=group_type,
                node_field_label=_label(fields, node_field),
                group_field_label=_label(fields, group_field),
            )

        if roles.weight:
            value = _cell(row, roles.weight)
            raw = _measure(value, roles.weight, index)
            link = Link(str(source), str(target), weight=apply_weight(config.edge_weight, raw), value=value)
        else:
            link = Link(str(source), str(target))
        graph.links.append(link)

    if not graph.nodes:
        raise NoRenderableData()

    verify_links(graph)
    logger.debug(
        f"Built graph: {len(graph.nodes)} nodes, {len(graph.links)} links, "
        f"{len(graph.groups)} groups, {graph.skipped_rows} rows skipped"
    )
    return graph


def verify_links(graph: Graph) -> None:
    """Raise ConstructionError if any link endpoint is not a known node."""
    for link in graph.links:
        for endpoint in (link.source_id, link.target_id):
            if endpoint not in graph.nodes:
                raise ConstructionError(
                    f'Link {link.source_id!r} -> {link.target_id!r} refers to unknown node {endpoint!r}'
                )
