# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Edge-weight transforms.

"""
Edge-weight transforms applied to the measure value of each link.

The transforms are evaluated with NumPy so that zero or negative inputs
to the log variants yield ``-inf``/``NaN`` instead of raising. Such
results are flagged with a ``NumericEdgeCase`` warning and left for the
render adapter to clamp.
"""

import math
import warnings
from typing import Callable, Dict

import numpy as np

from .errors import ConfigError, NumericEdgeCase

# Stroke widths above this are not useful on any canvas
MAX_STROKE_WIDTH = 100.0

WEIGHT_TRANSFORMS: Dict[str, Callable[[float], float]] = {
    'sqrt': np.sqrt,
    'cbrt': np.cbrt,
    'log2': np.log2,
    'log10': np.log10,
}


def get_transform(name: str) -> Callable[[float], float]:
    """Look up a weight transform by its option name."""
    try:
        return WEIGHT_TRANSFORMS[name]
    except KeyError:
        raise ConfigError(
            'edge_weight',
            f"unknown transform {name!r}, expected one of {sorted(WEIGHT_TRANSFORMS)}"
        ) from None


def apply_weight(name: str, value: float) -> float:
    """
    Transform a raw measure value into a link weight.

    Args:
        name: Transform name (sqrt, cbrt, log2 or log10).
        value: Raw measure value; may be zero, negative or NaN.

    Returns:
        The transformed weight as a Python float. Non-finite results are
        returned unchanged after a NumericEdgeCase warning.
    """
    func = get_transform(name)
    with np.errstate(divide='ignore', invalid='ignore'):
        weight = float(func(np.float64(value)))
    if not math.isfinite(weight):
        warnings.warn(
            f'{name}({value!r}) produced {weight}; the rendered width will be clamped',
            NumericEdgeCase,
            stacklevel=2,
        )
    return weight


def clamp_stroke_width(weight: float) -> float:
    """Map a possibly non-finite weight onto a drawable stroke width."""
    if math.isnan(weight) or weight < 0:
        return 0.0
    return min(weight, MAX_STROKE_WIDTH)
