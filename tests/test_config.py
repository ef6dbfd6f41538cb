from __future__ import annotations

import pytest

from circus.config import EngineConfig
from circus.errors import ConfigurationError


def test_defaults_describe_the_standard_board():
    config = EngineConfig()
    assert (config.rows, config.cols) == (9, 12)
    assert config.houses_count == 13
    assert config.max_steps == 300


def test_from_env_reads_prefixed_integers():
    config = EngineConfig.from_env({"CIRCUS_PRUNE_MARGIN": "80", "CIRCUS_MAX_DEPTH": "2", "OTHER": "x"})
    assert config.prune_margin == 80
    assert config.max_depth == 2
    assert config.rows == 9


def test_from_env_rejects_non_integers():
    with pytest.raises(ConfigurationError):
        EngineConfig.from_env({"CIRCUS_ROWS": "nine"})


def test_with_overrides_skips_missing_values():
    config = EngineConfig().with_overrides(max_steps=10, prune_margin=None)
    assert config.max_steps == 10
    assert config.prune_margin == EngineConfig().prune_margin


@pytest.mark.parametrize("overrides", [{"rows": 0}, {"cols": -1}, {"rows": 27}, {"search_budget": -5}])
def test_validate_rejects_bad_values(overrides):
    with pytest.raises(ConfigurationError):
        EngineConfig(**overrides).validate()
