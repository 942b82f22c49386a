# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Force kernels with NumPy acceleration.

"""
Forces for the tick-based simulation.

Each kernel takes flat position/velocity arrays and updates the
velocities (or, for centering, the positions) in place. Pairwise work
is vectorised with NumPy; the many-body force evaluates every pair
unless a ``distance_max`` cutoff is set, in which case candidate pairs
come from a SciPy k-d tree.

Nodes whose position is not finite take no part in any force.
"""

import math
from typing import Optional, Tuple

import numpy as np
from scipy.spatial import cKDTree

JIGGLE_SCALE = 1e-6


def jiggle(rng: np.random.Generator, size: int) -> np.ndarray:
    """Tiny random offsets used to separate coincident nodes."""
    return (rng.random(size) - 0.5) * JIGGLE_SCALE


def _pairs(
    x: np.ndarray,
    y: np.ndarray,
    finite: np.ndarray,
    distance_max: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Index pairs (i < j) of finite nodes to evaluate."""
    idx = np.flatnonzero(finite)
    if len(idx) < 2:
        empty = np.empty(0, dtype=int)
        return empty, empty

    if math.isinf(distance_max):
        i, j = np.triu_indices(len(idx), k=1)
    else:
        tree = cKDTree(np.column_stack([x[idx], y[idx]]))
        pairs = tree.query_pairs(r=distance_max, output_type='ndarray')
        if len(pairs) == 0:
            empty = np.empty(0, dtype=int)
            return empty, empty
        i, j = pairs[:, 0], pairs[:, 1]
    return idx[i], idx[j]


def many_body(
    x: np.ndarray,
    y: np.ndarray,
    vx: np.ndarray,
    vy: np.ndarray,
    alpha: float,
    strength: float,
    distance_min: float,
    distance_max: float,
    rng: np.random.Generator,
) -> None:
    """
    Inverse-distance repulsion between every pair of nodes.

    For a pair at offset (dx, dy) and squared distance l, each node's
    velocity changes by ``offset * strength * alpha / l`` (a negative
    strength repels). Distances below ``distance_min`` are softened.
    """
    finite = np.isfinite(x) & np.isfinite(y)
    i, j = _pairs(x, y, finite, distance_max)
    if len(i) == 0:
        return

    dx = x[j] - x[i]
    dy = y[j] - y[i]
    l = dx * dx + dy * dy
    if not math.isinf(distance_max):
        keep = l < distance_max * distance_max
        i, j, dx, dy, l = i[keep], j[keep], dx[keep], dy[keep], l[keep]

    zero_x = dx == 0
    if zero_x.any():
        dx[zero_x] = jiggle(rng, int(zero_x.sum()))
    zero_y = dy == 0
    if zero_y.any():
        dy[zero_y] = jiggle(rng, int(zero_y.sum()))
    l = dx * dx + dy * dy

    d_min2 = distance_min * distance_min
    close = l < d_min2
    l[close] = np.sqrt(d_min2 * l[close])

    w = strength * alpha / l
    np.add.at(vx, i, dx * w)
    np.add.at(vy, i, dy * w)
    np.add.at(vx, j, -dx * w)
    np.add.at(vy, j, -dy * w)


def link_strengths(sources: np.ndarray, targets: np.ndarray, n: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-link spring strength and bias from node degrees.

    Strength is ``1 / min(deg(source), deg(target))`` so that hubs are
    not pulled apart by their many links; bias is the share of the
    correction applied to the target, ``deg(s) / (deg(s) + deg(t))``.
    """
    count = np.bincount(np.concatenate([sources, targets]), minlength=n).astype(float)
    cs, ct = count[sources], count[targets]
    strength = 1.0 / np.minimum(cs, ct)
    bias = cs / (cs + ct)
    return strength, bias


def link_spring(
    x: np.ndarray,
    y: np.ndarray,
    vx: np.ndarray,
    vy: np.ndarray,
    sources: np.ndarray,
    targets: np.ndarray,
    alpha: float,
    distance: float,
    strength: np.ndarray,
    bias: np.ndarray,
    rng: np.random.Generator,
) -> None:
    """Pull each link's endpoints toward the rest length ``distance``."""
    if len(sources) == 0:
        return
    ok = (np.isfinite(x[sources]) & np.isfinite(y[sources])
          & np.isfinite(x[targets]) & np.isfinite(y[targets]))
    s, t = sources[ok], targets[ok]
    k, b = strength[ok], bias[ok]
    if len(s) == 0:
        return

    dx = x[t] + vx[t] - x[s] - vx[s]
    dy = y[t] + vy[t] - y[s] - vy[s]
    zero_x = dx == 0
    if zero_x.any():
        dx[zero_x] = jiggle(rng, int(zero_x.sum()))
    zero_y = dy == 0
    if zero_y.any():
        dy[zero_y] = jiggle(rng, int(zero_y.sum()))

    l = np.sqrt(dx * dx + dy * dy)
    l = (l - distance) / l * alpha * k
    dx *= l
    dy *= l

    np.add.at(vx, t, -dx * b)
    np.add.at(vy, t, -dy * b)
    np.add.at(vx, s, dx * (1 - b))
    np.add.at(vy, s, dy * (1 - b))


def centering(
    x: np.ndarray,
    y: np.ndarray,
    center_x: float,
    center_y: float,
    strength: float = 1.0,
) -> None:
    """Translate all nodes so their centroid moves toward the centre."""
    finite = np.isfinite(x) & np.isfinite(y)
    if not finite.any():
        return
    shift_x = (x[finite].mean() - center_x) * strength
    shift_y = (y[finite].mean() - center_y) * strength
    x[finite] -= shift_x
    y[finite] -= shift_y


def clamp_to_canvas(
    x: np.ndarray,
    y: np.ndarray,
    width: float,
    height: float,
    radius: float,
) -> None:
    """Keep node centres at least ``radius`` away from every canvas edge."""
    # np.clip leaves NaN untouched
    np.clip(x, radius, max(radius, width - radius), out=x)
    np.clip(y, radius, max(radius, height - radius), out=y)


def phyllotaxis(n: int, center: Optional[Tuple[float, float]] = None,
                initial_radius: float = 10.0) -> np.ndarray:
    """Spiral starting positions, shape (n, 2)."""
    angle_step = math.pi * (3 - math.sqrt(5))
    index = np.arange(n, dtype=float)
    radius = initial_radius * np.sqrt(0.5 + index)
    angle = index * angle_step
    positions = np.column_stack([radius * np.cos(angle), radius * np.sin(angle)])
    if center is not None:
        positions += np.asarray(center, dtype=float)
    return positions
