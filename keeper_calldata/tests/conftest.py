"""
Pytest configuration and fixtures for keeper-calldata tests.

Usage:
    def test_something(encoder):
        assert encoder.encode_function_call("price", []).startswith("0x")
"""

import logging
import os

import pytest

from keeper_calldata.utils.config_manager import ENV_PREFIX
from keeper_calldata.utils.contract_utils import CalldataEncoder
from keeper_calldata.utils.interface import get_price_feed_interface


@pytest.fixture
def interface():
    """The embedded price-feed interface"""
    return get_price_feed_interface()


@pytest.fixture
def encoder(interface):
    """Encoder bound to the embedded price-feed interface"""
    return CalldataEncoder(interface)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any KEEPER_CALLDATA_* settings inherited from the shell"""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back after each test"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
