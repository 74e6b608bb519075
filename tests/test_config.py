"""
Tests for configuration loading.

Tests cover:
- Documented defaults
- Loading the shipped config file
- Partial files falling back to defaults
- Rejection of malformed or out-of-range values
"""

import json
from pathlib import Path

import pytest

from bouncygrid.core.config import (
    AppConfig,
    ConfigError,
    LayoutConfig,
    SpringConfig,
    load_app_config,
    parse_app_config,
)
from bouncygrid.core.geometry import EdgeInsets, Size

SHIPPED_CONFIG = Path(__file__).resolve().parents[1] / "config" / "app_config.json"


def write_config(tmp_path: Path, payload) -> Path:
    path = tmp_path / "app_config.json"
    path.write_text(json.dumps(payload))
    return path


class TestDefaults:
    def test_layout_constants(self):
        config = LayoutConfig()
        assert config.overscan_margin == 100.0
        assert config.resistance_divisor == 1500.0
        assert config.spring_length == 1.0
        assert config.spring_damping == 0.8

    def test_flow_defaults(self):
        flow = AppConfig.default().flow
        assert flow.interitem_spacing == 10.0
        assert flow.line_spacing == 10.0
        assert flow.item_size == Size(44.0, 44.0)
        assert flow.section_inset == EdgeInsets.uniform(10.0)

    def test_empty_payload_gives_defaults(self):
        assert parse_app_config({}) == AppConfig.default()


class TestLoading:
    def test_shipped_config_loads(self):
        config = load_app_config(SHIPPED_CONFIG)
        assert config.window.size == (480, 800)
        assert config.flow.section_counts == (120, 80)
        assert config.layout == LayoutConfig()
        assert config.springs.physics_step == pytest.approx(SpringConfig().physics_step)

    def test_partial_file(self, tmp_path):
        path = write_config(tmp_path, {"layout": {"overscan_margin": 250}, "flow": {"section_inset": 4}})
        config = load_app_config(path)
        assert config.layout.overscan_margin == 250.0
        assert config.layout.spring_damping == 0.8
        assert config.flow.section_inset == EdgeInsets.uniform(4.0)
        assert config.window == AppConfig.default().window

    def test_inset_object(self, tmp_path):
        path = write_config(tmp_path, {"flow": {"section_inset": {"top": 1, "bottom": 2}}})
        inset = load_app_config(path).flow.section_inset
        assert inset == EdgeInsets(top=1.0, left=10.0, bottom=2.0, right=10.0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_app_config(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_app_config(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = write_config(tmp_path, [1, 2, 3])
        with pytest.raises(ConfigError):
            load_app_config(path)


class TestValidation:
    @pytest.mark.parametrize(
        "payload",
        [
            {"layout": {"spring_damping": 0}},
            {"layout": {"spring_damping": 1.5}},
            {"layout": {"resistance_divisor": 0}},
            {"layout": {"overscan_margin": -1}},
            {"layout": {"overscan_margin": "wide"}},
            {"flow": {"item_size": [44, 0]}},
            {"flow": {"item_size": [44]}},
            {"flow": {"interitem_spacing": -2}},
            {"flow": {"section_counts": [3, -1]}},
            {"flow": {"section_counts": [1.5]}},
            {"flow": {"section_inset": "lots"}},
            {"springs": {"frequency": 0}},
            {"springs": {"item_mass": -1}},
            {"window": {"background_color": [0, 0, 300]}},
            {"window": {"size": [0, 100]}},
            {"window": "fullscreen"},
        ],
    )
    def test_rejected(self, payload):
        with pytest.raises(ConfigError):
            parse_app_config(payload)

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)

    def test_booleans_are_not_numbers(self):
        with pytest.raises(ConfigError):
            parse_app_config({"layout": {"overscan_margin": True}})
