"""Tests for the render adapter, primitives and SVG output."""

import pytest

from forcegraph.builder import build_graph
from forcegraph.config import DEFAULT_COLORS, GraphConfig
from forcegraph.errors import NumericEdgeCase
from forcegraph.interaction import IDLE, InteractionState, TooltipState
from forcegraph.model import GroupType, Node
from forcegraph.render import RenderAdapter, frame_to_svg, label_text

from sample_rows import ROLES, WEIGHTED_ROLES, make_row


@pytest.fixture
def graph(chain_rows):
    graph = build_graph(chain_rows, ROLES)
    for i, node in enumerate(graph):
        node.x = 100.0 + 10 * i
        node.y = 100.0
    return graph


def labels_for(graph, **options):
    config = GraphConfig.from_dict(options)
    return {node.id: label_text(node, config) for node in graph}


class TestLabelText:
    """Tests for the label-visibility policy."""

    def test_all(self, graph):
        assert labels_for(graph) == {n: n for n in 'ABCDE'}

    def test_none(self, graph):
        assert set(labels_for(graph, labels='none').values()) == {''}

    def test_none_overrides_group_list(self, graph):
        """Listed groups stay unlabelled when labels are off."""
        labels = labels_for(graph, labels='none', label_types='G1,G2')
        assert set(labels.values()) == {''}

    def test_source_group(self, graph):
        labels = labels_for(graph, labels='source_group')
        assert labels == {'A': 'A', 'B': '', 'C': '', 'D': 'D', 'E': ''}

    def test_target_group(self, graph):
        labels = labels_for(graph, labels='target_group')
        assert labels == {'A': '', 'B': 'B', 'C': 'C', 'D': '', 'E': 'E'}

    def test_group_filter_takes_precedence(self, graph):
        labels = labels_for(graph, labels='source_group', label_types='G3, G2')
        assert labels == {'A': '', 'B': 'B', 'C': 'C', 'D': '', 'E': 'E'}

    def test_group_filter_ignored_when_labels_off(self, graph):
        assert set(labels_for(graph, labels='none', label_types='G1').values()) == {''}

    def test_on_hover_labels_every_node(self):
        node = Node(id='X', group='G', group_type=GroupType.TARGET)
        assert label_text(node, GraphConfig(labels='on_hover')) == 'X'


class TestRenderAdapter:
    """Tests for frame construction."""

    def test_primitive_counts(self, graph):
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame()
        assert len(frame.lines) == 3
        assert len(frame.circles) == 5
        assert len(frame.texts) == 5
        assert frame.tooltip is None
        assert (frame.generation, frame.tick) == (0, 0)

    def test_nan_positions_are_guarded(self, chain_rows):
        """Before the first tick nothing is drawn at NaN."""
        graph = build_graph(chain_rows, ROLES)
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame()

        for line in frame.lines:
            assert (line.x1, line.y1, line.x2, line.y2) == (0.0, 0.0, 0.0, 0.0)
        assert not any(circle.visible for circle in frame.circles)
        assert frame.texts == []

    def test_group_colours(self, graph):
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame()
        fills = {c.node_id: c.fill for c in frame.circles}
        assert fills == {
            'A': DEFAULT_COLORS[0],
            'B': DEFAULT_COLORS[1],
            'C': DEFAULT_COLORS[2],
            'D': DEFAULT_COLORS[0],
            'E': DEFAULT_COLORS[2],
        }

    def test_palette_cycles(self, graph):
        config = GraphConfig(color_range=['#111111', '#222222'])
        frame = RenderAdapter(graph, config, 400, 300).frame()
        assert frame.circles[2].fill == '#111111'

    def test_label_above_node(self, graph):
        frame = RenderAdapter(graph, GraphConfig(circle_radius=8), 400, 300).frame()
        text = frame.texts[0]
        assert text.node_id == 'A'
        assert (text.x, text.y) == (100.0, 100.0 - 8 - 3)
        assert text.anchor == 'middle'

    def test_unit_stroke_without_measure(self, graph):
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame()
        assert [line.stroke_width for line in frame.lines] == [1.0, 1.0, 1.0]
        assert {line.opacity for line in frame.lines} == {0.6}

    def test_weighted_stroke(self):
        graph = build_graph([make_row('A', 'G1', 'B', 'G2', weight=4)], WEIGHTED_ROLES)
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame()
        assert frame.lines[0].stroke_width == pytest.approx(2.0)

    def test_log_of_zero_draws_zero_width(self):
        with pytest.warns(NumericEdgeCase):
            graph = build_graph(
                [make_row('A', 'G1', 'B', 'G2', weight=0)],
                WEIGHTED_ROLES,
                config={'edge_weight': 'log10'},
            )
        frame = RenderAdapter(graph, GraphConfig(edge_weight='log10'), 400, 300).frame()
        assert frame.lines[0].stroke_width == 0.0

    def test_hovered_node_stroke(self, graph):
        state = InteractionState(hovered_id='A', hovered_kind='node')
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame(state=state)
        strokes = {c.node_id: (c.stroke, c.stroke_width) for c in frame.circles}
        assert strokes['A'] == ('#FFA500', 1.5)
        assert strokes['B'] == ('#fff', 1.0)

    def test_hovered_link_stroke(self, graph):
        state = InteractionState(hovered_id='1', hovered_kind='link')
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame(state=state)
        assert [line.stroke for line in frame.lines] == ['#000000', '#FFA500', '#000000']

    def test_highlight_fades_links(self, graph):
        state = InteractionState(
            hovered_id='A',
            hovered_kind='node',
            highlight_active=True,
            highlight_nodes=frozenset({'A', 'B'}),
            highlight_links=frozenset({0}),
        )
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame(state=state)
        assert frame.lines[0].opacity == pytest.approx(0.6)
        assert frame.lines[1].opacity == pytest.approx(0.06)
        assert frame.circles[4].opacity == pytest.approx(0.1)

    def test_tooltip_box(self, graph):
        state = InteractionState(tooltip=TooltipState(visible=True, x=20, y=30, html='<b>x</b>: 1'))
        frame = RenderAdapter(graph, GraphConfig(tooltip_font=13), 400, 300).frame(state=state)
        assert frame.tooltip.x == 20
        assert frame.tooltip.font_size == 13
        assert frame.primitives()[-1] is frame.tooltip


class TestFrameOutput:

    def test_to_dicts(self, graph):
        frame = RenderAdapter(graph, GraphConfig(), 400, 300).frame(state=IDLE)
        dicts = frame.to_dicts()

        assert dicts[0] == {'type': 'frame', 'generation': 0, 'tick': 0, 'width': 400, 'height': 300}
        assert [d['type'] for d in dicts[1:4]] == ['line', 'line', 'line']
        assert dicts[4]['type'] == 'circle'
        assert dicts[-1]['type'] == 'text'

    def test_svg(self, graph):
        state = InteractionState(tooltip=TooltipState(visible=True, x=20, y=30, html='<b>a</b>: x&amp;y'))
        svg = frame_to_svg(RenderAdapter(graph, GraphConfig(), 400, 300).frame(state=state))

        assert svg.startswith('<?xml')
        assert svg.endswith('</svg>')
        assert svg.count('<line ') == 3
        assert svg.count('<circle ') == 5
        assert '<title>A</title>' in svg
        assert 'x&amp;y' in svg
        assert 'id="tooltip"' in svg

    def test_svg_skips_hidden_nodes(self, chain_rows):
        graph = build_graph(chain_rows, ROLES)
        svg = frame_to_svg(RenderAdapter(graph, GraphConfig(), 400, 300).frame())
        assert '<circle ' not in svg
