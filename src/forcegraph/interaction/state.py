# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Interaction state values.

"""
Immutable interaction state.

Handlers never mutate an InteractionState; they return a new one built
with ``dataclasses.replace``. The render adapter reads whichever state
the host last received.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class Pointer:
    """Pointer position in page coordinates."""
    x: float
    y: float


@dataclass(frozen=True)
class TooltipState:
    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    html: str = ''


HIDDEN_TOOLTIP = TooltipState()


@dataclass(frozen=True)
class InteractionState:
    """
    What the pointer is doing to the graph.

    ``hovered_id`` is a node id when ``hovered_kind == 'node'`` and the
    link index (as a string) when ``hovered_kind == 'link'``.
    """
    dragging_node_id: Optional[str] = None
    hovered_id: Optional[str] = None
    hovered_kind: Optional[str] = None
    highlight_active: bool = False
    highlight_nodes: FrozenSet[str] = field(default_factory=frozenset)
    highlight_links: FrozenSet[int] = field(default_factory=frozenset)
    tooltip: TooltipState = HIDDEN_TOOLTIP

    @property
    def dragging(self) -> bool:
        return self.dragging_node_id is not None

    @property
    def hovered_node(self) -> Optional[str]:
        return self.hovered_id if self.hovered_kind == 'node' else None

    @property
    def hovered_link(self) -> Optional[int]:
        return int(self.hovered_id) if self.hovered_kind == 'link' else None


IDLE = InteractionState()
