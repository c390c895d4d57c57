import logging

import pytest

from printsnmp import config
from printsnmp.config import WalkConfig
from printsnmp.const import MAX_REPETITIONS


def test_defaults():
    result = WalkConfig()
    assert result.timeout == 6
    assert result.retries == 3
    assert result.port == 161
    assert result.max_repetitions == MAX_REPETITIONS == 64


def test_replace():
    original = WalkConfig()
    result = original.replace(timeout=2, port=1161)
    assert result.timeout == 2
    assert result.port == 1161
    assert original.timeout == 6


def test_frozen():
    with pytest.raises(AttributeError):
        WalkConfig().timeout = 1  # type: ignore


@pytest.mark.parametrize(
    "kwargs", [{"max_repetitions": 0}, {"retries": 0}, {"retries": -1}]
)
def test_invalid(kwargs):
    with pytest.raises(ValueError):
        WalkConfig(**kwargs)


def test_initialize_idempotent():
    config.initialize()
    config.initialize()
    assert config.is_initialized()
    handlers = [
        handler
        for handler in logging.getLogger("printsnmp").handlers
        if isinstance(handler, logging.NullHandler)
    ]
    assert len(handlers) == 1
