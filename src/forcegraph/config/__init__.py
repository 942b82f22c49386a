# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""forcegraph configuration modules."""

from .options import (
    GraphConfig,
    SimulationConfig,
    LabelMode,
    DEFAULT_COLORS,
    load_config,
    load_options,
)

__all__ = [
    'GraphConfig',
    'SimulationConfig',
    'LabelMode',
    'DEFAULT_COLORS',
    'load_config',
    'load_options',
    'resolve_config',
]


def resolve_config(config=None) -> GraphConfig:
    """
    Convenience function accepting a GraphConfig, a mapping or None.

    Example:
        from forcegraph.config import resolve_config
        config = resolve_config({'labels': 'none'})
    """
    if isinstance(config, GraphConfig):
        return config
    return GraphConfig.from_dict(config)
