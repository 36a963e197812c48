"""
Tests for planner configuration and its YAML loader.
"""

import pytest

from cargo_planner.algorithms.multi_start import auto_pack
from cargo_planner.config import (
    DEFAULT_BATTERY,
    DEFAULT_CONFIG,
    PlannerConfig,
    SortStrategy,
    TrialSpec,
    load_config,
)
from cargo_planner.errors import CargoPlannerError, ConfigError


class TestDefaults:
    def test_battery(self):
        assert [t.label for t in DEFAULT_BATTERY] == [
            "VOLUME", "FOOTPRINT", "MAX_DIM",
            "RANDOM_WEIGHTED[1]", "RANDOM_WEIGHTED[42]",
            "RANDOM_WEIGHTED[123]", "RANDOM_WEIGHTED[999]",
        ]

    def test_thresholds(self):
        assert DEFAULT_CONFIG.packing.min_space_dimension == 50.0
        assert DEFAULT_CONFIG.packing.unplaced_position == (0.0, -9999.0, 0.0)
        assert DEFAULT_CONFIG.staging.offset == 1500.0
        assert DEFAULT_CONFIG.interaction.snap_threshold == 150.0
        assert DEFAULT_CONFIG.interaction.collision_epsilon == 1.0

    def test_dict_round_trip(self):
        assert PlannerConfig.from_dict(DEFAULT_CONFIG.to_dict()) == DEFAULT_CONFIG

    def test_none_gives_defaults(self):
        assert PlannerConfig.from_dict(None) == DEFAULT_CONFIG


class TestFromDict:
    def test_partial_sections(self):
        cfg = PlannerConfig.from_dict({"staging": {"spacing": "50"}})
        assert cfg.staging.spacing == 50.0
        assert cfg.staging.offset == 1500.0
        assert cfg.packing == DEFAULT_CONFIG.packing

    @pytest.mark.parametrize("data", [
        {"bogus": {}},
        {"packing": {"min_dimension": 10}},
        {"packing": {"battery": []}},
        {"packing": {"battery": [{"strategy": "HEAVIEST"}]}},
        {"packing": {"battery": [{"seed": 3}]}},
        {"packing": {"unplaced_position": [0, 10, 0]}},
        {"packing": {"score_weights": [1, 2]}},
        {"packing": {"min_space_dimension": -1}},
        {"packing": {"min_space_dimension": 0}},
        {"packing": {"tie_threshold": -1}},
        {"packing": {"tie_threshold": 0}},
        {"packing": {"noise_amplitude": -0.5}},
        {"packing": {"noise_amplitude": "loud"}},
        {"packing": {"score_weights": [0, 0, 0]}},
        {"packing": {"score_weights": [1000000, 1000, -1]}},
        {"staging": {"row_width_limit": 0}},
        {"interaction": {"grid_step": 0}},
        {"interaction": {"snap_threshold": "near"}},
        {"staging": ["not", "a", "mapping"]},
    ])
    def test_rejects_bad_values(self, data):
        with pytest.raises(ConfigError):
            PlannerConfig.from_dict(data)

    def test_trial_spec_from_dict(self):
        assert TrialSpec.from_dict({"strategy": "RANDOM_WEIGHTED", "seed": 7}) == \
            TrialSpec(SortStrategy.RANDOM_WEIGHTED, 7)


class TestLoadConfig:
    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "planner.yaml"
        path.write_text(
            "packing:\n"
            "  min_space_dimension: 25\n"
            "  battery:\n"
            "    - {strategy: VOLUME}\n"
            "    - {strategy: RANDOM_WEIGHTED, seed: 7}\n"
            "staging:\n"
            "  offset: 2000\n"
        )
        cfg = load_config(path)
        assert cfg.packing.min_space_dimension == 25
        assert [t.label for t in cfg.packing.battery] == ["VOLUME", "RANDOM_WEIGHTED[7]"]
        assert cfg.staging.offset == 2000.0
        assert cfg.staging.spacing == 100.0

    def test_quoted_numbers_are_converted(self, tmp_path, make_item, cube_container):
        path = tmp_path / "quoted.yaml"
        path.write_text('packing:\n  tie_threshold: "0.1"\n  noise_amplitude: "0.3"\n')
        cfg = load_config(path)
        assert cfg.packing.tie_threshold == 0.1
        assert cfg.packing.noise_amplitude == 0.3

        items = [make_item("a", 500, 500, 500), make_item("bb", 400, 400, 400)]
        assert len(auto_pack(items, cube_container, cfg)) == 2

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == DEFAULT_CONFIG

    @pytest.mark.parametrize("text", ["- a\n- b\n", "packing: [unclosed\n"])
    def test_bad_documents(self, tmp_path, text):
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CargoPlannerError):
            load_config(tmp_path / "missing.yaml")
