"""System test configuration and fixtures."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    """Click runner for invoking the methodutils CLI."""
    return CliRunner()
