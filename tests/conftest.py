# tests/conftest.py
import numpy as np
import pandas as pd
import pytest

from DataPreparation.preprocessing import normalize_types

FUELS = ["gasoline", "kerosene", "lpg", "thinner"]


def make_raw_frame(rows):
    """Raw sheet layout: seven columns in sheet order, original headers."""
    return pd.DataFrame(rows, columns=["SIZE", "FUEL", "DISTANCE", "DESIBEL",
                                       "AIRFLOW", "FREQUENCY", "STATUS"])


@pytest.fixture
def extinguisher_df():
    """
    400 trials shaped like the real experiments: closer flames, louder
    sound and stronger airflow raise the chance of putting the flame out.
    """
    rng = np.random.default_rng(7)
    n = 400
    fuel = rng.choice(FUELS, size=n)
    size = np.where(fuel == "lpg", rng.integers(6, 8, size=n), rng.integers(1, 6, size=n))
    distance = rng.integers(1, 20, size=n) * 10.0
    desibel = rng.uniform(72, 113, size=n).round()
    airflow = rng.uniform(0, 17, size=n).round(1)
    frequency = rng.integers(1, 76, size=n).astype(float)

    score = (-0.03 * distance + 0.08 * (desibel - 90) + 0.25 * airflow
             - 0.3 * size + rng.normal(0, 1.0, size=n))
    status = (score > np.median(score)).astype(int)

    df = pd.DataFrame({
        "size": size, "fuel": fuel, "distance": distance, "desibel": desibel,
        "airflow": airflow, "frequency": frequency, "status": status,
    })
    return normalize_types(df)


@pytest.fixture
def separable_df():
    """
    100 rows where distance < 5 means success; every other feature is a
    noise-free function of the row pattern and carries no label signal.
    Each of the ten patterns repeats ten times.
    """
    distances = [1.0, 2.0, 3.0, 4.0, 4.5, 6.0, 7.0, 8.0, 9.0, 9.5]
    rows = []
    for i in range(100):
        p = i % 10
        rows.append({
            "size": 1 + p % 3,
            "fuel": FUELS[p % 2],
            "distance": distances[p],
            "desibel": 90.0 + (p % 3) * 5,
            "airflow": 2.0 + (p % 4) * 3,
            "frequency": 10.0 + (p % 5) * 10,
            "status": int(distances[p] < 5),
        })
    return normalize_types(pd.DataFrame(rows))


@pytest.fixture
def raw_frame(raw_rows):
    return make_raw_frame(raw_rows)


@pytest.fixture
def raw_rows():
    return [
        [1, "gasoline", 10, 96, 0.0, 75, 0],
        [2, "kerosene", 20, 109, 11.2, 40, 1],
        [6, "lpg", 30, 103, 8.5, 20, 1],
        [3, "thinner", 190, 72, 0.0, 5, 0],
    ]
