import matplotlib

matplotlib.use("Agg")

import pytest

from dond_classic.stats import StatsStore


@pytest.fixture
def store(tmp_path):
    return StatsStore(str(tmp_path / "stats.txt"))


def scripted(answers):
    """input() replacement that replays ``answers`` in order."""
    it = iter(answers)
    return lambda prompt="": next(it)
