"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path

import numpy as np
import pytest

# Project root holds the package and the entry scripts
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def rng():
    """Seeded generator so randomized checks are reproducible"""
    return np.random.default_rng(1234)


@pytest.fixture
def one_to_nine():
    return [1, 2, 3, 4, 5, 6, 7, 8, 9]
