import numpy as np
from sklearn.model_selection import StratifiedKFold, train_test_split

from config import N_FOLDS, SEED, TARGET, TRAIN_FRACTION
from DataPreparation.errors import FoldCompositionError, SplitError


# Stratified train/test partition on the outcome label
def stratified_split(df, train_fraction=TRAIN_FRACTION, seed=SEED, target=TARGET):
    classes = df[target].dropna().unique()
    if len(classes) < 2:
        raise SplitError(f"need two label classes to stratify, found {sorted(classes)}",
                         stage="splitter", column=target)
    counts = df[target].value_counts()
    if counts.min() < 2:
        raise SplitError(f"every label class needs at least two rows to stratify, "
                         f"found {counts.sort_index().to_dict()}", stage="splitter", column=target)
    n_train = int(np.floor(train_fraction * len(df)))
    if min(n_train, len(df) - n_train) < len(classes):
        raise SplitError(f"{len(df)} rows cannot give both subsets one row per class",
                         stage="splitter", column=target, train_fraction=train_fraction)

    train_df, test_df = train_test_split(
        df, train_size=train_fraction, stratify=df[target], random_state=seed
    )
    # Keep the original row order inside each subset
    train_df = train_df.sort_index()
    test_df = test_df.sort_index()

    print(f"Train: {len(train_df)} rows (success rate {train_df[target].mean():.3f})")
    print(f"Test: {len(test_df)} rows (success rate {test_df[target].mean():.3f})")
    return train_df, test_df


def cv_folds(y, n_folds=N_FOLDS, seed=SEED):
    """
    Yield (train_idx, val_idx) positional index arrays for stratified k-fold CV.

    Every call with the same labels, fold count and seed produces the same
    sequence. A fold whose training or validation part misses a class raises
    FoldCompositionError.
    """
    y = np.asarray(y)
    classes, counts = np.unique(y, return_counts=True)
    all_classes = set(classes)
    if len(y) == 0 or counts.max() < n_folds:
        raise FoldCompositionError(
            1, all_classes,
            message=f"{n_folds} folds need at least {n_folds} rows of some class, "
                    f"found {dict(zip(classes.tolist(), counts.tolist()))}"
        )
    skf = StratifiedKFold(n_splits=n_folds, shuffle=True, random_state=seed)

    for fold, (train_idx, val_idx) in enumerate(skf.split(np.zeros(len(y)), y), start=1):
        train_classes = set(np.unique(y[train_idx]))
        val_classes = set(np.unique(y[val_idx]))
        if len(train_classes) < 2 or train_classes != all_classes:
            raise FoldCompositionError(fold, train_classes, part="training")
        if len(val_classes) < 2:
            raise FoldCompositionError(fold, val_classes, part="validation")
        yield train_idx, val_idx
