import os
import sys

from config import (DATA_FILE, MISSING_POLICY, N_FOLDS, N_JOBS, OUTPUT_DIR,
                    PCA_VARIANCE_THRESHOLD, SEED, TRAIN_FRACTION)
from DataPreparation import (load_data, prepare_dataset, stratified_split, prepare_features,
                             feature_matrix, save_comparison_table, save_metrics,
                             save_fitted_transforms)
from ModelComparison.PCA import (fit_pca, transform_pca, get_loadings,
                                 plot_scree, plot_loadings_heatmap, save_pca_results)
from ModelComparison.descriptive_stats import describe_dataset, hypothesis_tests
from ModelComparison.model_training import MODEL_SPECS, train_all_models
from ModelComparison.evaluation import evaluate_models, comparison_table, print_comparison
from ModelComparison.visualization import (create_plot_directories, plot_eda, plot_roc_curves,
                                           plot_confusion_matrices, plot_tuning_curves)


def run_pca_analysis(train_features, test_features, plots_dir=None):
    """Fit PCA on train, project both splits."""
    print("\n=== Starting PCA Analysis ===")
    projection = fit_pca(train_features, variance_threshold=PCA_VARIANCE_THRESHOLD)
    print(f"Number of components: {projection.n_components} "
          f"(cumulative variance {projection.cumulative_variance[projection.n_components - 1]:.5f})")

    train_pca = transform_pca(train_features, projection)
    test_pca = transform_pca(test_features, projection)

    if plots_dir:
        pca_dir = os.path.join(plots_dir, "pca")
        loadings_df = get_loadings(projection)
        plot_scree(projection, pca_dir)
        plot_loadings_heatmap(loadings_df, pca_dir)
        save_pca_results(loadings_df, train_pca, test_pca, pca_dir)

    return projection, train_pca, test_pca


def run_pipeline(df, output_dir=None, specs=None, grids=None, seed=SEED,
                 n_folds=N_FOLDS, n_jobs=N_JOBS, drop_missing=None):
    """
    Data preparation, PCA, training and evaluation on a loaded dataset.

    Data-quality errors propagate before any model is trained. Returns a
    dict with the comparison table and every intermediate artifact.
    """
    if drop_missing is None:
        drop_missing = MISSING_POLICY == "drop"

    print("\n=== Preparing Data ===")
    df = prepare_dataset(df, drop_missing=drop_missing)

    if output_dir:
        create_plot_directories(output_dir)
        describe_dataset(df)
        hypothesis_tests(df)
        plot_eda(df, os.path.join(output_dir, "eda"))

    train_df, test_df = stratified_split(df, train_fraction=TRAIN_FRACTION, seed=seed)
    train_features, test_features, transforms = prepare_features(train_df, test_df)

    projection, train_pca, test_pca = run_pca_analysis(train_features, test_features, output_dir)
    X_train, y_train = feature_matrix(train_pca)
    X_test, y_test = feature_matrix(test_pca)

    print("\n=== Training Models ===")
    specs = MODEL_SPECS if specs is None else specs
    trained, failures = train_all_models(X_train, y_train, specs=specs, n_folds=n_folds,
                                         seed=seed, n_jobs=n_jobs, grids=grids)

    print("\n=== Evaluating Models ===")
    records = evaluate_models(trained, failures, X_test, y_test,
                              order=[spec.name for spec in specs])
    table = comparison_table(records)
    print_comparison(table)

    if output_dir:
        plot_roc_curves(records, os.path.join(output_dir, "roc"))
        plot_confusion_matrices(records, os.path.join(output_dir, "confusion"))
        plot_tuning_curves(trained, os.path.join(output_dir, "tuning"))
        save_comparison_table(table, output_dir)
        save_metrics(records, trained, output_dir)
        save_fitted_transforms(transforms, projection, output_dir)

    return {
        'table': table,
        'records': records,
        'trained': trained,
        'failures': failures,
        'transforms': transforms,
        'projection': projection,
        'train': train_pca,
        'test': test_pca,
    }


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else (DATA_FILE if os.path.exists(DATA_FILE) else None)
    df = load_data(path)
    if df is None:
        print("No file selected.")
        return

    results = run_pipeline(df, output_dir=OUTPUT_DIR)

    print("\n=== Analysis Complete ===")
    print(f"All results saved to: {OUTPUT_DIR}")
    print(f"PCA components: {results['projection'].n_components}")


if __name__ == "__main__":
    main()
