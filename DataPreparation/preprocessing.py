import pandas as pd

from config import CONTINUOUS_COLUMNS, NOMINAL_COLUMN, ORDINAL_COLUMN, TARGET
from DataPreparation.errors import DegenerateFeatureError, MissingDataError, SchemaError


# Display NaN summary and stop (or drop) on incomplete rows
def check_missing_values(df, drop=False):
    nan_info = df.isna().sum()
    nan_columns = nan_info[nan_info > 0]

    if len(nan_columns) == 0:
        print("\n>>> INFO: No NaN values in data.")
        return df

    print("\n>>> WARNING: Detected NaN values in the following columns:")
    for col, count in nan_columns.items():
        print(f"- Column '{col}': {count} NaN values")

    if not drop:
        raise MissingDataError(nan_columns.astype(int).to_dict())

    clean = df.dropna().reset_index(drop=True)
    print(f"Dropped {len(df) - len(clean)} incomplete rows, {len(clean)} remain")
    return clean


# Zero-range continuous columns cannot be min-max scaled
def check_degenerate_features(df, columns=CONTINUOUS_COLUMNS):
    for col in columns:
        values = df[col].dropna()
        if len(values) and values.min() == values.max():
            raise DegenerateFeatureError(col, values.min(), stage="type_normalizer")
    return df


def normalize_types(df):
    """
    Assign semantic types to the canonical columns.

    fuel   -> unordered category
    size   -> ordered category of its integer levels
    others -> float64, status -> int64 (only 0/1 allowed)
    """
    df = df.copy()

    df[NOMINAL_COLUMN] = df[NOMINAL_COLUMN].astype(str).str.strip().str.lower().astype("category")

    levels = sorted(pd.unique(df[ORDINAL_COLUMN].dropna().astype(int)))
    df[ORDINAL_COLUMN] = pd.Categorical(
        df[ORDINAL_COLUMN].astype("Int64"), categories=levels, ordered=True
    )

    for col in CONTINUOUS_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)

    labels = set(pd.unique(df[TARGET].dropna()))
    if not labels <= {0, 1}:
        raise SchemaError(f"labels must be 0 or 1, found {sorted(labels)}",
                          stage="type_normalizer", column=TARGET)
    df[TARGET] = df[TARGET].astype("int64")

    return df


# Typing + data-quality gate between loading and the modelling stages
def prepare_dataset(df, drop_missing=False):
    df = check_missing_values(df, drop=drop_missing)
    df = normalize_types(df)
    df = check_degenerate_features(df)
    return df
