# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Force graph layout.

"""
Layout for force graph visualization.

Provides:
- ForceSimulation: tick-based simulation (many-body repulsion,
  link springs, centering, canvas clamping, drag pins)
- force_directed: run a simulation to convergence and return positions
- Force kernels vectorised with NumPy
"""

from .forces import many_body, link_spring, link_strengths, centering, clamp_to_canvas
from .simulation import ForceSimulation, GenerationToken, force_directed

__all__ = [
    'ForceSimulation',
    'GenerationToken',
    'force_directed',
    'many_body',
    'link_spring',
    'link_strengths',
    'centering',
    'clamp_to_canvas',
]
