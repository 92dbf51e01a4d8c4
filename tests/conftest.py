import numpy as np
import pytest

from marksix.store import DrawStore


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def store(tmp_path):
    return DrawStore(str(tmp_path / "marksix-historical-data.json"))
