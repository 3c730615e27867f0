import warnings
from collections import namedtuple
from itertools import product

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.ensemble import RandomForestClassifier
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import accuracy_score
from sklearn.model_selection import ParameterGrid
from sklearn.neighbors import KNeighborsClassifier
from sklearn.neural_network import MLPClassifier
from sklearn.tree import DecisionTreeClassifier
from xgboost import XGBClassifier

from config import (FOREST_MAX_CANDIDATES, FOREST_N_ESTIMATORS, KNN_NEIGHBORS,
                    MLP_DECAYS, MLP_HIDDEN_UNITS, MLP_MAX_ITER, N_FOLDS, N_JOBS,
                    SEED, TREE_CCP_ALPHAS, XGB_GRID)
from DataPreparation.errors import FoldCompositionError, TrainingError
from DataPreparation.splitting import cv_folds

# build(params, seed) -> unfitted estimator
# param_grid(n_features, min_train_size) -> list of candidate dicts
ModelSpec = namedtuple("ModelSpec", ["name", "build", "param_grid"])
TrainedModel = namedtuple("TrainedModel", ["name", "estimator", "best_params", "search_trace"])


class RandomGuessClassifier(ClassifierMixin, BaseEstimator):
    """Ignores the features and draws a uniform success probability per row."""

    def __init__(self, random_state=None):
        self.random_state = random_state

    def fit(self, X, y):
        self.classes_ = np.unique(y)
        self.n_features_in_ = np.asarray(X).shape[1]
        return self

    def predict_proba(self, X):
        # Same seed on every call, so predict() agrees with predict_proba()
        rng = np.random.default_rng(self.random_state)
        p = rng.uniform(size=len(X))
        return np.column_stack([1 - p, p])

    def predict(self, X):
        return (self.predict_proba(X)[:, 1] >= 0.5).astype(int)


def _single_candidate(n_features, min_train_size):
    return [{}]


def _tree_grid(n_features, min_train_size):
    return list(ParameterGrid({"ccp_alpha": TREE_CCP_ALPHAS}))


def _knn_grid(n_features, min_train_size):
    neighbors = [k for k in KNN_NEIGHBORS if k <= min_train_size] or [min_train_size]
    return list(ParameterGrid({"n_neighbors": neighbors}))


def _forest_grid(n_features, min_train_size):
    count = min(FOREST_MAX_CANDIDATES, n_features)
    candidates = sorted(set(np.linspace(1, n_features, count).round().astype(int).tolist()))
    return list(ParameterGrid({"max_features": candidates}))


def _mlp_grid(n_features, min_train_size):
    return [{"hidden_units": h, "decay": d} for h, d in product(MLP_HIDDEN_UNITS, MLP_DECAYS)]


def _xgb_grid(n_features, min_train_size):
    return list(ParameterGrid(XGB_GRID))


def _build_mlp(params, seed):
    return MLPClassifier(hidden_layer_sizes=(params["hidden_units"],), alpha=params["decay"],
                         max_iter=MLP_MAX_ITER, random_state=seed)


MODEL_SPECS = [
    ModelSpec("Baseline",
              lambda params, seed: RandomGuessClassifier(random_state=seed),
              _single_candidate),
    ModelSpec("Logistic Regression",
              lambda params, seed: LogisticRegression(max_iter=1000),
              _single_candidate),
    ModelSpec("Decision Tree",
              lambda params, seed: DecisionTreeClassifier(random_state=seed, **params),
              _tree_grid),
    ModelSpec("K-Nearest Neighbors",
              lambda params, seed: KNeighborsClassifier(**params),
              _knn_grid),
    ModelSpec("Random Forest",
              lambda params, seed: RandomForestClassifier(
                  n_estimators=FOREST_N_ESTIMATORS, random_state=seed, **params),
              _forest_grid),
    ModelSpec("Neural Network",
              _build_mlp,
              _mlp_grid),
    ModelSpec("Gradient Boosted Trees",
              lambda params, seed: XGBClassifier(
                  eval_metric='logloss', random_state=seed, n_jobs=1, **params),
              _xgb_grid),
]


def get_model_spec(name):
    for spec in MODEL_SPECS:
        if spec.name == name:
            return spec
    raise KeyError(f"Unknown model: {name}")


def _fit_quietly(estimator, X, y):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=ConvergenceWarning)
        estimator.fit(X, y)
    return estimator


def _fold_error(spec, params, seed, X, y, train_idx, val_idx):
    # Returns (error, None) or (None, message)
    try:
        estimator = _fit_quietly(spec.build(params, seed), X[train_idx], y[train_idx])
        accuracy = accuracy_score(y[val_idx], estimator.predict(X[val_idx]))
    except Exception as e:
        return None, f"{type(e).__name__}: {e}"
    return 1.0 - accuracy, None


def grid_search(spec, X, y, n_folds=N_FOLDS, seed=SEED, n_jobs=N_JOBS, param_grid=None):
    """
    Cross-validated search over the candidate grid of one model.

    Every (candidate, fold) pair is an independent job; the trace averages
    the fold errors per candidate. Returns (trace, candidates) in grid order.
    """
    try:
        folds = list(cv_folds(y, n_folds=n_folds, seed=seed))
    except FoldCompositionError as e:
        raise TrainingError(spec.name, e, fold=e.fold) from e

    if param_grid is None:
        param_grid = spec.param_grid(X.shape[1], min(len(tr) for tr, _ in folds))

    jobs = [(c, f, params, tr, va)
            for c, params in enumerate(param_grid)
            for f, (tr, va) in enumerate(folds, start=1)]
    outcomes = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_fold_error)(spec, params, seed, X, y, tr, va)
        for _, _, params, tr, va in jobs
    )

    errors = np.zeros((len(param_grid), len(folds)))
    for (c, f, _, _, _), (error, message) in zip(jobs, outcomes):
        if message is not None:
            raise TrainingError(spec.name, message, fold=f)
        errors[c, f - 1] = error

    trace = pd.DataFrame(param_grid, index=range(len(param_grid)))
    trace["mean_error"] = errors.mean(axis=1)
    trace["std_error"] = errors.std(axis=1)
    trace["mean_accuracy"] = 1.0 - trace["mean_error"]
    return trace, param_grid


def train_model(spec, X, y, n_folds=N_FOLDS, seed=SEED, n_jobs=N_JOBS, param_grid=None):
    print(f"\nTraining {spec.name}...")
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=int)

    trace, candidates = grid_search(spec, X, y, n_folds=n_folds, seed=seed, n_jobs=n_jobs,
                                    param_grid=param_grid)
    # idxmin keeps the first candidate on ties
    best = int(trace["mean_error"].idxmin())
    best_params = dict(candidates[best])

    try:
        estimator = _fit_quietly(spec.build(best_params, seed), X, y)
    except Exception as e:
        raise TrainingError(spec.name, e) from e

    print(f"{spec.name}: {len(trace)} candidate(s), best CV accuracy "
          f"{trace.loc[best, 'mean_accuracy']:.3f} with {best_params or 'default parameters'}")
    return TrainedModel(spec.name, estimator, best_params, trace)


def train_all_models(X, y, specs=None, n_folds=N_FOLDS, seed=SEED, n_jobs=N_JOBS, grids=None):
    """
    Train every model; a failing model is reported and skipped.

    Returns (trained, failures) where failures maps model name -> message.
    """
    specs = MODEL_SPECS if specs is None else specs
    grids = grids or {}
    trained = {}
    failures = {}

    for spec in specs:
        try:
            trained[spec.name] = train_model(spec, X, y, n_folds=n_folds, seed=seed,
                                             n_jobs=n_jobs, param_grid=grids.get(spec.name))
        except TrainingError as e:
            print(f"Error training {spec.name}: {e}")
            failures[spec.name] = str(e)

    return trained, failures


def predict(model, X):
    """Return (predicted labels, success probabilities) for a trained model."""
    X = np.asarray(X, dtype=float)
    probabilities = model.estimator.predict_proba(X)[:, 1]
    labels = model.estimator.predict(X)
    return np.asarray(labels, dtype=int), probabilities
