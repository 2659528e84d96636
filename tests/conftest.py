import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from station_test_utils import TWO_ROOMS, THREE_ROOMS, build_grid  # noqa: E402


@pytest.fixture(autouse=True)
def _quiet_station_env(monkeypatch):
    """Keep a developer's shell/.env settings from leaking into assertions."""
    for key in (
        "STATION_SEED",
        "STATION_FOV_RADIUS",
        "STATION_MAX_DOORS",
        "STATION_ENABLE_METRICS",
        "STATION_LOG_LEVEL",
        "STATION_LOG_JSON",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def two_rooms():
    """Rooms A and B joined by one corridor cell; start in A, exit in B."""
    return build_grid(TWO_ROOMS, start=(1, 1), exit=(1, 7))


@pytest.fixture
def three_rooms():
    """A - corridor - B - corridor - C in a row; start in A, exit in C."""
    return build_grid(THREE_ROOMS, start=(1, 1), exit=(2, 9))
