import warnings
from collections import namedtuple

import numpy as np
import pandas as pd

from config import PCA_VARIANCE_THRESHOLD, TARGET
from DataPreparation.errors import InsufficientComponentsWarning

# components: (n_components, n_features) basis rows, already cut to k
PCAProjection = namedtuple("PCAProjection", [
    "feature_cols", "components", "explained_variance_ratio",
    "cumulative_variance", "n_components", "threshold"
])


def select_n_components(cumulative_variance, variance_threshold):
    """Smallest k with cumulative_variance[k-1] >= threshold, or None."""
    reached = np.flatnonzero(cumulative_variance >= variance_threshold)
    return int(reached[0]) + 1 if len(reached) else None


def fit_pca(train_features, variance_threshold=PCA_VARIANCE_THRESHOLD, target=TARGET):
    """
    Fit an uncentered, unscaled PCA basis on the training features.

    The basis is made of the right singular vectors of the raw feature
    matrix; the explained-variance ratio of component i is s_i^2 / sum(s^2).
    """
    feature_cols = [c for c in train_features.columns if c != target]
    X = train_features[feature_cols].to_numpy(dtype=float)

    _, singular_values, vt = np.linalg.svd(X, full_matrices=False)
    energy = singular_values ** 2
    explained_variance_ratio = energy / energy.sum()
    cumulative_variance = np.cumsum(explained_variance_ratio)

    n_components = select_n_components(cumulative_variance, variance_threshold)
    if n_components is None:
        n_components = len(explained_variance_ratio)
        warnings.warn(
            f"cumulative variance {cumulative_variance[-1]:.4f} stays below "
            f"{variance_threshold} with all {n_components} components; keeping all of them",
            InsufficientComponentsWarning, stacklevel=2
        )

    # Fix the sign of each component so the largest loading is positive
    signs = np.sign(vt[np.arange(vt.shape[0]), np.abs(vt).argmax(axis=1)])
    signs[signs == 0] = 1
    vt = vt * signs[:, None]

    return PCAProjection(
        feature_cols=tuple(feature_cols),
        components=vt[:n_components],
        explained_variance_ratio=explained_variance_ratio,
        cumulative_variance=cumulative_variance,
        n_components=n_components,
        threshold=variance_threshold,
    )


def component_names(n_components):
    return [f'PC{i + 1}' for i in range(n_components)]


def transform_pca(features, projection, target=TARGET):
    X = features[list(projection.feature_cols)].to_numpy(dtype=float)
    scores = X @ projection.components.T
    projected = pd.DataFrame(scores, columns=component_names(projection.n_components),
                             index=features.index)
    if target in features.columns:
        projected[target] = features[target].to_numpy()
    return projected


def get_loadings(projection):
    return pd.DataFrame(
        projection.components.T,
        columns=component_names(projection.n_components),
        index=list(projection.feature_cols)
    )
