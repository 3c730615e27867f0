import warnings
from collections import namedtuple

import pandas as pd
from sklearn.preprocessing import MinMaxScaler

from config import CONTINUOUS_COLUMNS, NOMINAL_COLUMN, ORDINAL_COLUMN, TARGET
from DataPreparation.errors import DegenerateFeatureError, UnseenCategoryWarning

# Fitted transform parameters, learned from the training split only
MinMaxParams = namedtuple("MinMaxParams", ["columns", "minimums", "maximums"])
OneHotParams = namedtuple("OneHotParams", ["column", "categories"])
PreparedTransforms = namedtuple("PreparedTransforms", ["scaler", "encoder", "feature_columns"])


# Min-max scaling
def fit_min_max(train_df, columns=CONTINUOUS_COLUMNS):
    columns = list(columns)
    # MinMaxScaler maps a constant column to 0, so reject it first
    for col in columns:
        lo = float(train_df[col].min())
        if lo == float(train_df[col].max()):
            raise DegenerateFeatureError(col, lo)

    scaler = MinMaxScaler().fit(train_df[columns].astype(float))
    minimums = dict(zip(columns, scaler.data_min_.astype(float).tolist()))
    maximums = dict(zip(columns, scaler.data_max_.astype(float).tolist()))
    return MinMaxParams(tuple(columns), minimums, maximums)


def transform_min_max(df, params):
    # Values outside the training range are left unclamped
    scaled = pd.DataFrame(index=df.index)
    for col in params.columns:
        lo, hi = params.minimums[col], params.maximums[col]
        scaled[col] = (df[col].astype(float) - lo) / (hi - lo)
    return scaled


# One-hot encoding of the nominal column
def fit_one_hot(train_df, column=NOMINAL_COLUMN):
    categories = sorted(str(v) for v in pd.unique(train_df[column].dropna()))
    return OneHotParams(column, tuple(categories))


def transform_one_hot(df, params):
    values = df[params.column].astype(str)

    unseen = sorted(set(values) - set(params.categories))
    if unseen:
        warnings.warn(
            f"{params.column}: levels {unseen} not seen during fit, encoded as all zeros",
            UnseenCategoryWarning, stacklevel=2
        )

    encoded = pd.DataFrame(index=df.index)
    for category in params.categories:
        encoded[f"{params.column}_{category}"] = (values == category).astype(int)
    return encoded


def ordinal_codes(df, column=ORDINAL_COLUMN):
    """Integer level values of the ordinal column (1..7 stay 1..7)."""
    return df[column].astype(int).rename(column)


# Concatenate scaled, encoded, ordinal and label columns in a fixed order
def assemble_features(df, scaler, encoder, target=TARGET):
    parts = [
        transform_min_max(df, scaler),
        transform_one_hot(df, encoder),
        ordinal_codes(df).to_frame(),
    ]
    if target in df.columns:
        parts.append(df[[target]])
    return pd.concat(parts, axis=1)


def prepare_features(train_df, test_df):
    scaler = fit_min_max(train_df)
    encoder = fit_one_hot(train_df)

    train_features = assemble_features(train_df, scaler, encoder)
    test_features = assemble_features(test_df, scaler, encoder)

    feature_columns = tuple(c for c in train_features.columns if c != TARGET)
    transforms = PreparedTransforms(scaler, encoder, feature_columns)

    print(f"Assembled {len(feature_columns)} feature columns: {list(feature_columns)}")
    out_of_range = ((test_features[list(scaler.columns)] < 0) |
                    (test_features[list(scaler.columns)] > 1)).sum()
    for col, count in out_of_range[out_of_range > 0].items():
        print(f"- Test column '{col}': {count} values outside the training range")

    return train_features, test_features, transforms


def feature_matrix(features, target=TARGET):
    """Split an assembled table into (X, y) as float / int numpy arrays."""
    X = features.drop(columns=[target]).to_numpy(dtype=float)
    y = features[target].to_numpy(dtype=int)
    return X, y
