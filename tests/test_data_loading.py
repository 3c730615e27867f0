import pytest

from config import COLUMN_NAMES, SHEET_NAME
from DataPreparation.data_loading import load_data, rename_columns
from DataPreparation.errors import SchemaError


def test_rename_columns_by_position(raw_frame):
    df = rename_columns(raw_frame)

    assert list(df.columns) == COLUMN_NAMES
    assert df["fuel"].tolist() == ["gasoline", "kerosene", "lpg", "thinner"]


def test_rename_columns_rejects_wrong_width(raw_frame):
    raw = raw_frame.drop(columns=["FREQUENCY"])

    with pytest.raises(SchemaError) as exc:
        rename_columns(raw)

    assert exc.value.stage == "data_loader"


def test_rename_columns_does_not_touch_input(raw_frame):
    rename_columns(raw_frame)

    assert "SIZE" in raw_frame.columns


def test_load_data_from_named_sheet(tmp_path, raw_frame, raw_rows):
    path = tmp_path / "fire.xlsx"
    raw_frame.to_excel(path, sheet_name=SHEET_NAME, index=False)

    df = load_data(str(path))

    assert list(df.columns) == COLUMN_NAMES
    assert len(df) == len(raw_rows)
    assert df["status"].tolist() == [0, 1, 1, 0]


def test_load_data_from_csv(tmp_path, raw_frame):
    path = tmp_path / "fire.csv"
    raw_frame.to_csv(path, index=False)

    df = load_data(str(path))

    assert list(df.columns) == COLUMN_NAMES
    assert df["distance"].tolist() == [10, 20, 30, 190]
