"""Root conftest.py with shared fixtures across all test types."""

import pytest

from methodutils.reflection import TypeArgumentCache
from tests.utils import sample_api as _sample_api


@pytest.fixture
def sample_api():
    """Module of sample callables."""
    return _sample_api


@pytest.fixture
def fresh_cache():
    """A TypeArgumentCache independent of the process-wide one."""
    return TypeArgumentCache()
