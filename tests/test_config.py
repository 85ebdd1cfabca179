"""
Tests for SimulationConfig.
"""

from pathlib import Path

import pytest

from scenario_brain import SimulationConfig


class TestSimulationConfig:

    def test_defaults(self):
        config = SimulationConfig()

        assert config.decay_factor == 0.55
        assert config.insight_window == 3
        assert config.pace is False
        assert config.export_directory == Path("./profiles")

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SCENARIO_BRAIN_DECAY_FACTOR", "0.4")
        monkeypatch.setenv("SCENARIO_BRAIN_PACE", "TRUE")
        monkeypatch.setenv("SCENARIO_BRAIN_LOG_LEVEL", "debug")
        monkeypatch.setenv("SCENARIO_BRAIN_EXPORT_DIR", str(tmp_path))

        config = SimulationConfig.from_env()

        assert config.decay_factor == 0.4
        assert config.pace is True
        assert config.log_level == "DEBUG"
        assert config.export_directory == tmp_path

    @pytest.mark.parametrize("kwargs", [
        {'decay_factor': -0.1},
        {'decay_factor': 1.5},
        {'insight_window': 0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            SimulationConfig(**kwargs)
