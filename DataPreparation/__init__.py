from .data_loading import load_data, rename_columns, select_input_file
from .preprocessing import (check_missing_values, check_degenerate_features,
                            normalize_types, prepare_dataset)
from .splitting import stratified_split, cv_folds
from .encoder import (
    MinMaxParams,
    OneHotParams,
    PreparedTransforms,
    fit_min_max,
    transform_min_max,
    fit_one_hot,
    transform_one_hot,
    assemble_features,
    prepare_features,
    feature_matrix
)
from .file_operations import (auto_adjust_column_width, save_comparison_table, save_metrics,
                              save_fitted_transforms, load_fitted_transforms)

__all__ = [
    "load_data", "rename_columns", "select_input_file",
    "check_missing_values", "check_degenerate_features", "normalize_types", "prepare_dataset",
    "stratified_split", "cv_folds",
    "MinMaxParams", "OneHotParams", "PreparedTransforms",
    "fit_min_max", "transform_min_max", "fit_one_hot", "transform_one_hot",
    "assemble_features", "prepare_features", "feature_matrix",
    "auto_adjust_column_width", "save_comparison_table", "save_metrics",
    "save_fitted_transforms", "load_fitted_transforms"
]
