"""Tests for configuration loading."""

import dataclasses

import pytest

from biolookup.config import AppConfig, BatchConfig, EnsemblConfig, get_config


def test_get_config_is_singleton():
    assert get_config() is get_config()
    assert isinstance(get_config(), AppConfig)


def test_values_from_environment():
    """conftest sets these before the package is imported."""
    cfg = get_config()
    assert cfg.ensembl.server == "https://rest.ensembl.test"
    assert cfg.uniprot.server == "https://rest.uniprot.test"
    assert cfg.batch.inter_request_delay == 0.0


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        get_config().batch.inter_request_delay = 5


def test_overrides():
    cfg = EnsemblConfig(server="http://localhost:3000", timeout=2)
    assert cfg.server == "http://localhost:3000"
    assert BatchConfig(inter_request_delay=0.5).inter_request_delay == 0.5
