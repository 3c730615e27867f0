import numpy as np
import pandas as pd
import pytest

from DataPreparation.errors import FoldCompositionError, SplitError
from DataPreparation.splitting import cv_folds, stratified_split


def test_split_is_a_partition(extinguisher_df):
    train, test = stratified_split(extinguisher_df)

    assert len(train) + len(test) == len(extinguisher_df)
    assert set(train.index).isdisjoint(test.index)
    assert set(train.index) | set(test.index) == set(extinguisher_df.index)
    assert len(train) == int(0.8 * len(extinguisher_df))


def test_split_preserves_label_proportion(extinguisher_df):
    overall = extinguisher_df["status"].mean()
    train, test = stratified_split(extinguisher_df)

    assert abs(train["status"].mean() - overall) <= 0.01
    assert abs(test["status"].mean() - overall) <= 0.01


def test_split_is_deterministic_per_seed(extinguisher_df):
    first, _ = stratified_split(extinguisher_df, seed=3)
    second, _ = stratified_split(extinguisher_df, seed=3)
    other, _ = stratified_split(extinguisher_df, seed=4)

    assert list(first.index) == list(second.index)
    assert list(first.index) != list(other.index)


def test_split_keeps_row_order(extinguisher_df):
    train, test = stratified_split(extinguisher_df)

    assert train.index.is_monotonic_increasing
    assert test.index.is_monotonic_increasing


def test_split_needs_two_classes(extinguisher_df):
    only_failures = extinguisher_df[extinguisher_df["status"] == 0]

    with pytest.raises(SplitError):
        stratified_split(only_failures)


def test_split_needs_two_rows_per_class():
    df = pd.DataFrame({"x": range(10), "status": [0] * 9 + [1]})

    with pytest.raises(SplitError) as exc:
        stratified_split(df)

    assert exc.value.stage == "splitter"
    assert exc.value.context["column"] == "status"


def test_split_needs_room_for_every_class_in_both_subsets():
    df = pd.DataFrame({"x": range(4), "status": [0, 1, 0, 1]})

    with pytest.raises(SplitError):
        stratified_split(df, train_fraction=0.8)


def test_cv_folds_cover_every_row_once():
    y = np.array([0, 1] * 25)
    folds = list(cv_folds(y, n_folds=5, seed=1))

    assert len(folds) == 5
    validation = np.concatenate([val for _, val in folds])
    assert sorted(validation.tolist()) == list(range(len(y)))
    for train_idx, val_idx in folds:
        assert set(train_idx).isdisjoint(val_idx)
        assert y[val_idx].mean() == pytest.approx(0.5)


def test_cv_folds_are_restartable():
    y = np.array([0, 0, 1] * 20)
    first = [(tr.tolist(), va.tolist()) for tr, va in cv_folds(y, seed=9)]
    second = [(tr.tolist(), va.tolist()) for tr, va in cv_folds(y, seed=9)]

    assert first == second


def test_cv_fold_without_both_classes_fails():
    y = np.array([0] * 20 + [1])

    with pytest.raises(FoldCompositionError) as exc:
        list(cv_folds(y, n_folds=5))

    assert exc.value.fold == 1


def test_cv_folds_need_enough_rows_per_class():
    y = np.array([0, 1] * 4)

    with pytest.raises(FoldCompositionError) as exc:
        list(cv_folds(y, n_folds=5))

    assert exc.value.fold == 1
    assert "{0: 4, 1: 4}" in str(exc.value)
