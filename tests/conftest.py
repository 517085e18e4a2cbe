from datetime import datetime, timezone

import pytest

from natid_engine.engine_config import EngineConfig
from natid_engine.validators.be_nn import BelgianNationalNumber


FIXED_NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def nn():
    """National Number validator pinned to FIXED_NOW."""
    return BelgianNationalNumber(clock=lambda: FIXED_NOW)


@pytest.fixture
def config(tmp_path):
    """Config backed by a throwaway file."""
    return EngineConfig(str(tmp_path / "engine_config.json"))
