import sys
from pathlib import Path


# Ensure the repository root (parent of this file's directory) is importable when running pytest from anywhere
THIS_DIR = Path(__file__).resolve().parent
ROOT_DIR = THIS_DIR.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import pytest

from dataset import Dataset, Observation


def make_dataset(years=(1900, 1901), base=8.0, variance_of=None) -> Dataset:
    """Contiguous monthly observations for each year, January first."""
    variance_of = variance_of or (lambda year, month: round((month - 6) * 0.1 + (year - 1900) * 0.01, 3))
    observations = tuple(
        Observation(year=y, month=m, variance=variance_of(y, m))
        for y in years
        for m in range(1, 13)
    )
    return Dataset(base_temperature=base, monthly_variance=observations)


@pytest.fixture()
def sample_dataset() -> Dataset:
    return make_dataset()


@pytest.fixture()
def sample_payload() -> dict:
    return {
        "baseTemperature": 8.66,
        "monthlyVariance": [
            {"year": 1753, "month": 1, "variance": -1.366},
            {"year": 1753, "month": 2, "variance": -2.223},
            {"year": 1753, "month": 3, "variance": 0.211},
        ],
    }


@pytest.fixture()
def dataset_factory():
    return make_dataset
