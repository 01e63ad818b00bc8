import matplotlib
matplotlib.use("Agg")

import pytest

from snapsubd import primitives


@pytest.fixture
def quad():
    return primitives.unit_quad()


@pytest.fixture
def triangle():
    return primitives.unit_triangle()


@pytest.fixture
def cube():
    return primitives.cube()


@pytest.fixture
def prism():
    return primitives.triangular_prism()
