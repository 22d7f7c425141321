"""Shared fixtures for the stairs3d test suite."""
import matplotlib

matplotlib.use("Agg")

import pytest

from stairs3d import (
    CurvedStairParameters,
    NumSteps,
    StraightStairParameters,
    build_curved_geometry,
    build_straight_geometry,
)


@pytest.fixture
def straight_geometry():
    """Default straight run without sides, two steps."""
    return build_straight_geometry(StraightStairParameters(step_type=NumSteps(2), sides=False))


@pytest.fixture
def curved_geometry():
    """Default curved run (60 degrees, six steps) with sides."""
    return build_curved_geometry(CurvedStairParameters())
