"""Tests for graph construction from rows."""

import math

import pytest

from forcegraph.builder import build_graph, resolve_roles, validate_shape, verify_links
from forcegraph.errors import ConstructionError, DataShapeError, NoRenderableData, NumericEdgeCase
from forcegraph.model import FieldInfo, FieldRoles, Graph, GroupType, Link, QueryFields

from sample_rows import ROLES, WEIGHTED_ROLES, make_row


class TestBuildGraph:
    """Tests for node and link deduplication."""

    def test_single_weighted_row(self):
        """One row yields two nodes, two groups and one transformed link."""
        graph = build_graph([make_row('A', 'G1', 'B', 'G2', weight=4)], WEIGHTED_ROLES)

        assert list(graph.nodes) == ['A', 'B']
        assert graph.node('A').group == 'G1'
        assert graph.node('A').group_type == GroupType.SOURCE
        assert graph.node('B').group == 'G2'
        assert graph.node('B').group_type == GroupType.TARGET
        assert graph.groups == ['G1', 'G2']
        assert len(graph.links) == 1
        assert graph.links[0].weight == pytest.approx(2.0)
        assert graph.links[0].value == 4

    def test_rows_with_null_endpoints_are_skipped(self):
        rows = [
            make_row('A', 'G1', 'B', 'G2'),
            make_row(None, 'G1', 'C', 'G2'),
            make_row('D', 'G1', None, 'G2'),
            {'src': {'value': 'E'}, 'src_group': {'value': 'G1'}},
        ]
        graph = build_graph(rows, ROLES)

        assert list(graph.nodes) == ['A', 'B']
        assert len(graph.links) == 1
        assert graph.skipped_rows == 3

    def test_all_rows_null_raises(self):
        rows = [make_row(None, 'G1', 'B', 'G2'), make_row('A', 'G1', None, 'G2')]
        with pytest.raises(NoRenderableData) as exc_info:
            build_graph(rows, ROLES)
        assert exc_info.value.title == 'No nodes to plot.'

    def test_empty_input_raises(self):
        with pytest.raises(NoRenderableData):
            build_graph([], ROLES)

    def test_first_occurrence_wins(self):
        """A node keeps the group and group type of its first appearance."""
        rows = [
            make_row('A', 'G1', 'B', 'G2'),
            make_row('B', 'G9', 'C', 'G3'),
        ]
        graph = build_graph(rows, ROLES)

        assert graph.node('B').group == 'G2'
        assert graph.node('B').group_type == GroupType.TARGET
        assert 'G9' not in graph.groups
        assert graph.groups == ['G1', 'G2', 'G3']

    def test_group_order_follows_rows(self):
        rows = [make_row('X', 'Z', 'Y', 'A'), make_row('Y', 'A', 'W', 'Z')]
        graph = build_graph(rows, ROLES)

        assert graph.groups == ['Z', 'A']
        assert graph.group_ordinal('Z') == 0
        assert graph.group_ordinal('A') == 1

    def test_null_group_is_empty_string(self):
        graph = build_graph([make_row('A', None, 'B', 'G2')], ROLES)
        assert graph.node('A').group == ''
        assert graph.groups == ['', 'G2']

    def test_ids_are_strings(self):
        graph = build_graph([make_row(1, 'G1', 2.5, 'G2')], ROLES)
        assert list(graph.nodes) == ['1', '2.5']
        assert graph.links[0].source_id == '1'
        assert graph.links[0].target_id == '2.5'

    def test_unit_weight_without_measure(self):
        graph = build_graph([make_row('A', 'G1', 'B', 'G2', weight=9)], ROLES)
        assert graph.measure is None
        assert graph.links[0].weight == 1.0

    def test_self_loop_and_duplicate_links_kept(self):
        rows = [
            make_row('A', 'G1', 'A', 'G1'),
            make_row('A', 'G1', 'B', 'G2'),
            make_row('A', 'G1', 'B', 'G2'),
        ]
        graph = build_graph(rows, ROLES)
        assert len(graph) == 2
        assert len(graph.links) == 3

    def test_deterministic(self, chain_rows):
        first = build_graph(chain_rows, ROLES)
        second = build_graph(chain_rows, ROLES)
        assert first.to_dict() == second.to_dict()

    def test_links_reference_known_nodes(self, chain_rows):
        graph = build_graph(chain_rows, ROLES)
        ids = [node.id for node in graph]
        assert len(ids) == len(set(ids))
        for link in graph.links:
            assert link.source_id in graph.nodes
            assert link.target_id in graph.nodes

    def test_field_labels(self, fields):
        graph = build_graph([make_row('A', 'G1', 'B', 'G2', weight=3)], WEIGHTED_ROLES, fields)

        assert graph.node('A').node_field_label == 'Person'
        assert graph.node('A').group_field_label == 'Team'
        assert graph.node('B').node_field_label == 'Target Person'
        assert graph.measure.value_format == '#,##0.00'

    def test_labels_fall_back_to_field_names(self):
        graph = build_graph([make_row('A', 'G1', 'B', 'G2')], ROLES)
        assert graph.node('A').node_field_label == 'src'
        assert graph.node('B').group_field_label == 'tgt_group'

    def test_log_transform(self):
        graph = build_graph(
            [make_row('A', 'G1', 'B', 'G2', weight=1000)],
            WEIGHTED_ROLES,
            config={'edge_weight': 'log10'},
        )
        assert graph.links[0].weight == pytest.approx(3.0)

    def test_null_measure_warns(self):
        row = make_row('A', 'G1', 'B', 'G2')
        row['weight'] = {'value': None}
        with pytest.warns(NumericEdgeCase):
            graph = build_graph([row], WEIGHTED_ROLES)
        assert math.isnan(graph.links[0].weight)
        assert graph.links[0].value is None

    def test_non_numeric_measure(self):
        with pytest.raises(DataShapeError):
            build_graph([make_row('A', 'G1', 'B', 'G2', weight='lots')], WEIGHTED_ROLES)


class TestVerifyLinks:

    def test_dangling_link(self):
        graph = Graph(links=[Link('A', 'B')])
        with pytest.raises(ConstructionError):
            verify_links(graph)


class TestValidateShape:
    """Tests for dimension / measure / pivot bounds."""

    def _fields(self, dims=4, measures=0, pivots=0):
        return QueryFields(
            dimensions=[FieldInfo(f'd{i}') for i in range(dims)],
            measures=[FieldInfo(f'm{i}') for i in range(measures)],
            pivots=[FieldInfo(f'p{i}') for i in range(pivots)],
        )

    def test_valid_shapes(self):
        validate_shape(self._fields())
        validate_shape(self._fields(measures=1))

    def test_too_few_dimensions(self):
        with pytest.raises(DataShapeError) as exc_info:
            validate_shape(self._fields(dims=3))
        assert exc_info.value.title == 'Not enough dimensions'

    def test_too_many_dimensions(self):
        with pytest.raises(DataShapeError) as exc_info:
            validate_shape(self._fields(dims=5))
        assert exc_info.value.title == 'Too many dimensions'

    def test_too_many_measures(self):
        with pytest.raises(DataShapeError) as exc_info:
            validate_shape(self._fields(measures=2))
        assert exc_info.value.title == 'Too many measures'

    def test_pivots_rejected(self):
        with pytest.raises(DataShapeError) as exc_info:
            validate_shape(self._fields(pivots=1))
        assert exc_info.value.title == 'Too many pivots'


class TestResolveRoles:

    def test_dimension_order(self, fields):
        roles = resolve_roles(fields)
        assert roles == FieldRoles('src', 'src_group', 'tgt', 'tgt_group', weight='weight')

    def test_explicit_role_options(self, fields):
        roles = resolve_roles(fields, {'Node_1': 'tgt', 'Node_2': 'src', 'Group_1': None})
        assert roles.source_node == 'tgt'
        assert roles.target_node == 'src'
        assert roles.source_group == 'src_group'

    def test_fields_from_rows(self):
        fields = QueryFields.from_rows([make_row('A', 'G1', 'B', 'G2', weight=1)])
        assert [d.name for d in fields.dimensions] == ['src', 'src_group', 'tgt', 'tgt_group']
        assert [m.name for m in fields.measures] == ['weight']
