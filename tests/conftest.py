import os
import pathlib
import random
import sys

import pytest

# Ensure matplotlib uses a non-interactive backend for headless test runs.
os.environ.setdefault("MPLBACKEND", "Agg")

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def rng():
    return random.Random(20240611)


@pytest.fixture
def engine():
    from karatsuba.multiplier import KaratsubaMultiplier

    return KaratsubaMultiplier()
