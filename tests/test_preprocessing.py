import numpy as np
import pandas as pd
import pytest

from DataPreparation.data_loading import rename_columns
from DataPreparation.errors import DegenerateFeatureError, MissingDataError, SchemaError
from DataPreparation.preprocessing import (check_degenerate_features, check_missing_values,
                                           normalize_types, prepare_dataset)


def test_normalize_types_assigns_semantic_types(raw_frame):
    df = normalize_types(rename_columns(raw_frame))

    assert isinstance(df["fuel"].dtype, pd.CategoricalDtype)
    assert not df["fuel"].cat.ordered
    assert df["size"].cat.ordered
    assert list(df["size"].cat.categories) == [1, 2, 3, 6]
    assert df["distance"].dtype == np.float64
    assert df["status"].dtype == np.int64


def test_normalize_types_lowercases_fuel():
    df = pd.DataFrame({
        "size": [1, 2], "fuel": [" Gasoline", "LPG"], "distance": [10, 20],
        "desibel": [90, 95], "airflow": [1.0, 2.0], "frequency": [5, 6], "status": [0, 1],
    })

    assert normalize_types(df)["fuel"].tolist() == ["gasoline", "lpg"]


def test_normalize_types_rejects_non_binary_labels(raw_frame):
    df = rename_columns(raw_frame)
    df.loc[0, "status"] = 2

    with pytest.raises(SchemaError):
        normalize_types(df)


def test_missing_values_are_counted_and_raised(raw_frame):
    df = rename_columns(raw_frame)
    df.loc[1, "airflow"] = np.nan
    df.loc[2, "airflow"] = np.nan
    df.loc[3, "fuel"] = None

    with pytest.raises(MissingDataError) as exc:
        check_missing_values(df)

    assert exc.value.counts == {"fuel": 1, "airflow": 2}


def test_missing_values_drop_policy(raw_frame):
    df = rename_columns(raw_frame)
    df.loc[1, "airflow"] = np.nan

    clean = check_missing_values(df, drop=True)

    assert len(clean) == 3
    assert not clean.isna().any().any()


def test_complete_frame_passes_through(raw_frame):
    df = rename_columns(raw_frame)

    assert check_missing_values(df) is df


def test_degenerate_feature_detected(raw_frame):
    df = rename_columns(raw_frame)
    df["frequency"] = 50

    with pytest.raises(DegenerateFeatureError) as exc:
        check_degenerate_features(df)

    assert exc.value.column == "frequency"


def test_prepare_dataset_stops_on_missing_data(raw_frame):
    df = rename_columns(raw_frame)
    df.loc[0, "desibel"] = np.nan

    with pytest.raises(MissingDataError):
        prepare_dataset(df)
