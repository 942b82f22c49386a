# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Error taxonomy for graph construction and rendering.

"""
Errors raised while turning rows into a rendered force graph.

Shape, data and configuration errors are raised before any rendering
side effect and carry a ``title``/``message`` pair that the host can show
to the user as-is. Numeric edge cases (log transforms of non-positive
weights) are not errors: they are reported as ``NumericEdgeCase``
warnings and absorbed by the render-time clamps.
"""

from typing import Dict, Optional


class ForceGraphError(Exception):
    """Base class for errors surfaced to the host as title + message."""

    default_title = 'Force graph error'

    def __init__(self, message: str, title: Optional[str] = None):
        super().__init__(message)
        self.title = title or self.default_title
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        """Structured form handed to the host's error display."""
        return {'title': self.title, 'message': self.message}


class DataShapeError(ForceGraphError):
    """Wrong number of dimensions, measures or pivots in the query."""

    default_title = 'Incompatible data'


class NoRenderableData(ForceGraphError):
    """Every row was dropped, so there is nothing to lay out."""

    default_title = 'No nodes to plot.'

    def __init__(self, message: str = 'Check for null values in either the start or end nodes.',
                 title: Optional[str] = None):
        super().__init__(message, title)


class ConstructionError(ForceGraphError):
    """A link refers to a node id that is not in the node set."""

    default_title = 'Graph construction failed'


class ConfigError(ForceGraphError, ValueError):
    """An option value is outside its recognised range or set."""

    default_title = 'Invalid configuration'

    def __init__(self, option: str, message: str):
        super().__init__(f'{option}: {message}')
        self.option = option


class NumericEdgeCase(RuntimeWarning):
    """A weight transform produced NaN or an infinity."""
