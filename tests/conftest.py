"""Pytest configuration and fixtures."""

import pytest

from cijfer_converter.grading import GradingConfiguration, GradingMethod


@pytest.fixture
def default_config():
    """Return the default grading configuration."""
    return GradingConfiguration()


@pytest.fixture
def make_config():
    """Build a configuration with the given fields overriding the defaults."""

    def _make(**changes):
        return GradingConfiguration().with_changes(**changes)

    return _make


@pytest.fixture
def percentage_config(make_config):
    """50 points, cesuur at 55%."""
    return make_config(method=GradingMethod.PERCENTAGE, total_points=50, pass_percentage=55, voldoende=5.5)
