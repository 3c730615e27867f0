from .pca_transformer import (PCAProjection, fit_pca, transform_pca, get_loadings,
                              select_n_components)
from .pca_visualizer import plot_scree, plot_loadings_heatmap, save_pca_results

__all__ = [
    'PCAProjection',
    'fit_pca',
    'transform_pca',
    'get_loadings',
    'select_n_components',
    'plot_scree',
    'plot_loadings_heatmap',
    'save_pca_results'
]
