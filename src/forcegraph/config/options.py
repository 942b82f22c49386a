# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Visualization options - every recognised option with its default.

Usage:
    from forcegraph.config.options import GraphConfig, load_config

    config = GraphConfig.from_dict({'circle_radius': 8, 'labels': 'on_hover'})
    print(config.link_distance)   # 30, the default

    # Or from a YAML file
    config = load_config('graph.yaml')

Options are resolved and validated once, at the start of a render pass.
Hosts sometimes deliver a partially unset configuration; absent keys and
``None`` values both fall back to the defaults below.
"""

import logging
import math
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from ..errors import ConfigError
from ..weights import WEIGHT_TRANSFORMS

logger = logging.getLogger(__name__)


def _load_yaml():
    """Lazy import yaml to avoid dependency at import time."""
    try:
        import yaml
        return yaml
    except ImportError:
        logger.warning("PyYAML not installed. Install with: pip install pyyaml")
        return None


# d3.schemeCategory10
DEFAULT_COLORS = [
    '#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd',
    '#8c564b', '#e377c2', '#7f7f7f', '#bcbd22', '#17becf',
]

# Option names used by the dashboard host, mapped to ours
LEGACY_KEYS = {
    'linkDistance': 'link_distance',
    'labelTypes': 'label_types',
    'tooltipFont': 'tooltip_font',
    'tooltipValFormat': 'tooltip_val_format',
}


class LabelMode(str, Enum):
    """Which nodes get a text label."""
    NONE = 'none'
    SOURCE_GROUP = 'source_group'
    TARGET_GROUP = 'target_group'
    ALL = 'all'
    ON_HOVER = 'on_hover'


@dataclass
class GraphConfig:
    """Resolved visualization options."""
    color_range: List[str] = field(default_factory=lambda: list(DEFAULT_COLORS))
    circle_radius: float = 5
    link_color: str = '#000000'
    link_opacity: float = 0.6
    link_distance: float = 30
    edge_weight: str = 'sqrt'
    font_color: str = '#000000'
    labels: LabelMode = LabelMode.ALL
    label_types: str = ''
    font_weight: str = 'normal'
    font_size: float = 10
    highlight_selection: bool = True
    highlight_opacity: float = 0.1
    tooltip: bool = True
    tooltip_font: float = 11
    tooltip_val_format: str = ''

    def __post_init__(self):
        if not isinstance(self.labels, LabelMode):
            self.labels = _coerce('labels', self.labels)
        self.validate()

    @property
    def label_filter(self) -> List[str]:
        """Group keys from ``label_types``, stripped, empties dropped."""
        return [part.strip() for part in self.label_types.split(',') if part.strip()]

    @property
    def labels_on_hover(self) -> bool:
        return self.labels == LabelMode.ON_HOVER

    def color_for(self, ordinal: int) -> str:
        """Palette colour for a group ordinal, cycling through the range."""
        return self.color_range[ordinal % len(self.color_range)]

    def validate(self) -> None:
        """Check every option against its range; raise ConfigError on the first failure."""
        for name in _STRING:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(name, f'expected a string, got {value!r}')
        _check_range('circle_radius', self.circle_radius, 1, 40)
        _check_range('link_distance', self.link_distance, 5, 300)
        _check_range('link_opacity', self.link_opacity, 0, 1)
        _check_range('highlight_opacity', self.highlight_opacity, 0, 1)
        if not self.font_size > 0:
            raise ConfigError('font_size', f'must be positive, got {self.font_size!r}')
        if not self.tooltip_font > 0:
            raise ConfigError('tooltip_font', f'must be positive, got {self.tooltip_font!r}')
        if self.edge_weight not in WEIGHT_TRANSFORMS:
            raise ConfigError(
                'edge_weight',
                f'expected one of {sorted(WEIGHT_TRANSFORMS)}, got {self.edge_weight!r}'
            )
        if self.font_weight not in ('normal', 'bold'):
            raise ConfigError('font_weight', f"expected 'normal' or 'bold', got {self.font_weight!r}")
        if not self.color_range or not all(isinstance(c, str) and c for c in self.color_range):
            raise ConfigError('color_range', 'must be a non-empty list of colour strings')
        if not isinstance(self.labels, LabelMode):
            raise ConfigError('labels', f'not a label mode: {self.labels!r}')

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> 'GraphConfig':
        """
        Build a config from a loosely typed mapping.

        Unknown keys are ignored (logged at debug level). Absent keys and
        ``None`` values take their defaults. Numeric options accept
        numeric strings and single-element lists such as ``["10"]``.
        """
        data = dict(data or {})
        for legacy, name in LEGACY_KEYS.items():
            if legacy in data and data.get(name) is None:
                data[name] = data.pop(legacy)

        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.debug(f"Ignoring unknown option {key!r}")
                continue
            if value is None:
                continue
            kwargs[key] = _coerce(key, value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['labels'] = self.labels.value
        return d


@dataclass
class SimulationConfig:
    """Solver constants, with d3-force's defaults."""
    alpha: float = 1.0
    alpha_min: float = 0.001
    alpha_decay: float = 1 - math.pow(0.001, 1 / 300)
    alpha_target: float = 0.0
    velocity_decay: float = 0.4
    drag_alpha_target: float = 0.3
    charge_strength: float = -30.0
    distance_min: float = 1.0
    distance_max: float = math.inf
    center_strength: float = 1.0
    seed: int = 0


_NUMERIC = {'circle_radius', 'link_opacity', 'link_distance', 'font_size',
            'highlight_opacity', 'tooltip_font'}
_BOOLEAN = {'highlight_selection', 'tooltip'}
_STRING = ('link_color', 'edge_weight', 'font_color', 'label_types', 'font_weight',
           'tooltip_val_format')


def _coerce(key: str, value: Any) -> Any:
    if key in _NUMERIC:
        if isinstance(value, (list, tuple)):
            if len(value) != 1:
                raise ConfigError(key, f'expected a single number, got {value!r}')
            value = value[0]
        if isinstance(value, bool):
            raise ConfigError(key, f'expected a number, got {value!r}')
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigError(key, f'expected a number, got {value!r}') from None
    if key in _BOOLEAN:
        if isinstance(value, str):
            return value.strip().lower() in ('true', '1', 'yes', 'on')
        return bool(value)
    if key == 'labels':
        try:
            return LabelMode(value)
        except ValueError:
            raise ConfigError(
                'labels', f'expected one of {[m.value for m in LabelMode]}, got {value!r}'
            ) from None
    if key == 'label_types' and isinstance(value, (list, tuple)):
        return ','.join(str(v) for v in value)
    if key == 'color_range':
        if isinstance(value, str):
            value = [c.strip() for c in value.split(',')]
        if not isinstance(value, (list, tuple)):
            raise ConfigError(key, f'expected a list of colours, got {value!r}')
        return list(value)
    return value


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not (low <= value <= high):
        raise ConfigError(name, f'must be within [{low}, {high}], got {value!r}')


def load_options(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read the options a YAML file sets, without filling in defaults.

    Legacy key spellings are mapped to their current names. The options
    are validated, so a bad file fails here rather than at render time.
    """
    yaml = _load_yaml()
    if yaml is None:
        raise ConfigError('config', 'PyYAML is required to read configuration files')

    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError('config', f'{path} does not contain a mapping')

    options = {LEGACY_KEYS.get(key, key): value for key, value in data.items()}
    GraphConfig.from_dict(options)
    logger.debug(f"Loaded {len(options)} options from {path}")
    return options


def load_config(path: Union[str, Path]) -> GraphConfig:
    """Load a GraphConfig from a YAML file."""
    return GraphConfig.from_dict(load_options(path))
