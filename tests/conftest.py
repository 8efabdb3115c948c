"""
Pytest fixtures for the Chain SDK tests.
"""
import copy

import pytest

from chain_sdk import Context
from tests.test_helpers import TEST_URL, TRANSACTION_JSON, TEMPLATE_JSON


@pytest.fixture
def ctx():
    """Context pointed at a local Chain Core."""
    context = Context(TEST_URL)
    yield context
    context.close()


@pytest.fixture
def transaction_json():
    return copy.deepcopy(TRANSACTION_JSON)


@pytest.fixture
def template_json():
    return copy.deepcopy(TEMPLATE_JSON)
