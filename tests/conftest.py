import pytest

from primgen import config


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Isolate tests from PRIMGEN_* variables set in the caller's environment."""
    monkeypatch.setattr(config, "OUTPUT_DIR", None)
    monkeypatch.setattr(config, "WRITE_COUNT_HEADER", True)
    monkeypatch.setattr(config, "MIN_RADIUS", 0.01)
    monkeypatch.setattr(config, "MIN_COUNT", 1)
