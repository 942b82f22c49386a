# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Force-directed graph visualization engine.

"""
Force-directed graph layout and interaction for tabular relationship data.

Rows with paired (node, group) dimensions are turned into a node/link
graph, laid out with a NumPy force simulation, and exposed to a host
canvas as a stream of drawing primitives that reflects drag pins,
hover highlighting and tooltips.

Subpackages:
- layout: force simulation and force kernels
- interaction: hover / drag state machine, highlighting, tooltips
- render: primitives, render adapter and SVG output
- config: options and solver constants

The io module provides JSON / JSON Lines readers and writers.
"""

from . import config
from . import layout
from . import interaction
from . import render
from . import io
from .builder import build_graph, validate_shape, resolve_roles
from .errors import (
    ForceGraphError,
    DataShapeError,
    NoRenderableData,
    ConstructionError,
    ConfigError,
    NumericEdgeCase,
)
from .model import Node, Link, Graph, GroupType, FieldInfo, FieldRoles, QueryFields
from .view import ForceGraphView, RenderResult

__version__ = '0.1.0'

__all__ = [
    'config',
    'layout',
    'interaction',
    'render',
    'io',
    'build_graph',
    'validate_shape',
    'resolve_roles',
    'ForceGraphError',
    'DataShapeError',
    'NoRenderableData',
    'ConstructionError',
    'ConfigError',
    'NumericEdgeCase',
    'Node',
    'Link',
    'Graph',
    'GroupType',
    'FieldInfo',
    'FieldRoles',
    'QueryFields',
    'ForceGraphView',
    'RenderResult',
]
