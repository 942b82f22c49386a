"""Tests for option resolution and validation."""

import pytest

from forcegraph.config import DEFAULT_COLORS, GraphConfig, LabelMode, load_config, load_options, resolve_config
from forcegraph.errors import ConfigError


class TestGraphConfig:
    """Tests for defaults, coercion and validation."""

    def test_defaults(self):
        config = GraphConfig.from_dict({})
        assert config.circle_radius == 5
        assert config.link_distance == 30
        assert config.link_opacity == 0.6
        assert config.edge_weight == 'sqrt'
        assert config.labels == LabelMode.ALL
        assert config.color_range == DEFAULT_COLORS
        assert config.highlight_selection is True
        assert config.tooltip is True

    def test_none_values_take_defaults(self):
        config = GraphConfig.from_dict({'circle_radius': None, 'labels': None})
        assert config.circle_radius == 5
        assert config.labels == LabelMode.ALL

    def test_unknown_keys_ignored(self):
        config = GraphConfig.from_dict({'Node_1': 'src', 'bogus': 1})
        assert config == GraphConfig()

    def test_legacy_keys(self):
        config = GraphConfig.from_dict({
            'linkDistance': 80,
            'labelTypes': 'G1',
            'tooltipFont': 14,
            'tooltipValFormat': '0.0',
        })
        assert config.link_distance == 80
        assert config.label_types == 'G1'
        assert config.tooltip_font == 14
        assert config.tooltip_val_format == '0.0'

    def test_numeric_coercion(self):
        config = GraphConfig.from_dict({'font_size': ['12'], 'circle_radius': '7.5'})
        assert config.font_size == 12.0
        assert config.circle_radius == 7.5

    def test_boolean_coercion(self):
        config = GraphConfig.from_dict({'tooltip': 'false', 'highlight_selection': 'True'})
        assert config.tooltip is False
        assert config.highlight_selection is True

    def test_label_mode_from_string(self):
        assert GraphConfig(labels='on_hover').labels == LabelMode.ON_HOVER
        assert GraphConfig.from_dict({'labels': 'none'}).labels == LabelMode.NONE

    def test_color_range_from_string(self):
        config = GraphConfig.from_dict({'color_range': '#ff0000, #00ff00'})
        assert config.color_range == ['#ff0000', '#00ff00']
        assert config.color_for(3) == '#00ff00'

    def test_label_filter(self):
        assert GraphConfig(label_types=' a, b ,,c').label_filter == ['a', 'b', 'c']
        assert GraphConfig().label_filter == []

    def test_label_types_from_list(self):
        """A list of groups is joined into the comma-separated form."""
        config = GraphConfig.from_dict({'label_types': ['G1', 'G2']})
        assert config.label_types == 'G1,G2'
        assert config.label_filter == ['G1', 'G2']

    @pytest.mark.parametrize('options,option', [
        ({'circle_radius': 100}, 'circle_radius'),
        ({'circle_radius': 0}, 'circle_radius'),
        ({'link_distance': 1}, 'link_distance'),
        ({'link_opacity': 1.5}, 'link_opacity'),
        ({'highlight_opacity': -0.1}, 'highlight_opacity'),
        ({'edge_weight': 'exp'}, 'edge_weight'),
        ({'font_weight': 'heavy'}, 'font_weight'),
        ({'labels': 'sometimes'}, 'labels'),
        ({'font_size': 'big'}, 'font_size'),
        ({'font_size': [10, 12]}, 'font_size'),
        ({'color_range': []}, 'color_range'),
        ({'color_range': 5}, 'color_range'),
        ({'link_color': 123}, 'link_color'),
        ({'font_color': ['#fff']}, 'font_color'),
        ({'edge_weight': ['sqrt']}, 'edge_weight'),
        ({'font_weight': {'bold': True}}, 'font_weight'),
        ({'label_types': 7}, 'label_types'),
        ({'tooltip_val_format': 0}, 'tooltip_val_format'),
    ])
    def test_invalid_options(self, options, option):
        with pytest.raises(ConfigError) as exc_info:
            GraphConfig.from_dict(options)
        assert exc_info.value.option == option

    def test_round_trip_dict(self):
        config = GraphConfig(labels='target_group', circle_radius=9)
        assert GraphConfig.from_dict(config.to_dict()) == config


class TestResolveConfig:

    def test_passes_config_through(self):
        config = GraphConfig()
        assert resolve_config(config) is config

    def test_none(self):
        assert resolve_config(None) == GraphConfig()


class TestLoadConfig:

    def test_yaml_file(self, tmp_path):
        path = tmp_path / 'graph.yaml'
        path.write_text('labels: on_hover\ncircle_radius: 8\nlinkDistance: 60\n')
        config = load_config(path)

        assert config.labels == LabelMode.ON_HOVER
        assert config.circle_radius == 8
        assert config.link_distance == 60

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        assert load_config(path) == GraphConfig()

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text('- 1\n- 2\n')
        with pytest.raises(ConfigError):
            load_config(path)


class TestLoadOptions:
    """Tests for reading only the options a file sets."""

    def test_only_file_keys(self, tmp_path):
        path = tmp_path / 'graph.yaml'
        path.write_text('link_color: "#ff0000"\nlinkDistance: 60\n')
        assert load_options(path) == {'link_color': '#ff0000', 'link_distance': 60}

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        assert load_options(path) == {}

    def test_invalid_value(self, tmp_path):
        path = tmp_path / 'graph.yaml'
        path.write_text('circle_radius: 100\n')
        with pytest.raises(ConfigError) as exc_info:
            load_options(path)
        assert exc_info.value.option == 'circle_radius'
