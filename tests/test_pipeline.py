import json

import numpy as np
import pytest

from DataPreparation.errors import MissingDataError
from DataPreparation.file_operations import load_fitted_transforms
from ModelComparison import descriptive_stats
from ModelComparison.main import run_pipeline
from ModelComparison.model_training import MODEL_SPECS

SMALL_GRIDS = {
    "Decision Tree": [{"ccp_alpha": 0.0}, {"ccp_alpha": 0.01}],
    "K-Nearest Neighbors": [{"n_neighbors": 5}, {"n_neighbors": 9}],
    "Random Forest": [{"max_features": 2}],
    "Neural Network": [{"hidden_units": 3, "decay": 1e-3}],
    "Gradient Boosted Trees": [{"n_estimators": 50, "max_depth": 2, "learning_rate": 0.3,
                                "colsample_bytree": 0.8, "subsample": 1.0}],
}


@pytest.fixture(autouse=True)
def low_dpi(monkeypatch):
    monkeypatch.setattr("ModelComparison.visualization.DPI", 40)
    monkeypatch.setattr("ModelComparison.PCA.pca_visualizer.DPI", 40)


def test_pipeline_without_outputs(extinguisher_df):
    results = run_pipeline(extinguisher_df, specs=MODEL_SPECS[:3])

    table = results["table"]
    assert sorted(table["Model Name"]) == ["Baseline", "Decision Tree", "Logistic Regression"]
    assert (table["Status"] == "ok").all()
    assert len(results["train"]) + len(results["test"]) == len(extinguisher_df)


def test_full_pipeline_writes_report(extinguisher_df, tmp_path):
    results = run_pipeline(extinguisher_df, output_dir=str(tmp_path), grids=SMALL_GRIDS)

    table = results["table"]
    assert len(table) == len(MODEL_SPECS)
    assert (table["Status"] == "ok").all()
    metrics = ["Accuracy", "F1-Score", "Precision", "Recall", "AUC"]
    assert table[metrics].apply(lambda col: col.between(0, 1)).all().all()
    assert (table[metrics] == table[metrics].round(3)).all().all()

    best = table.set_index("Model Name")
    assert best.loc["Logistic Regression", "AUC"] > best.loc["Baseline", "AUC"]

    for name in ["model_comparison.xlsx", "model_comparison.csv",
                 "model_metrics.json", "fitted_transforms.joblib"]:
        assert (tmp_path / name).exists()
    assert (tmp_path / "pca" / "scree_plot.png").exists()
    assert (tmp_path / "roc" / "roc_curves_all_models.png").exists()
    assert (tmp_path / "eda" / "status_distribution.png").exists()
    assert (tmp_path / "tuning" / "tuning_decision_tree.png").exists()

    with open(tmp_path / "model_metrics.json") as f:
        saved = json.load(f)
    assert saved["Decision Tree"]["best_params"]["ccp_alpha"] in (0.0, 0.01)
    assert saved["Baseline"]["status"] == "ok"

    preparation, projection = load_fitted_transforms(tmp_path / "fitted_transforms.joblib")
    assert preparation.encoder.categories == ("gasoline", "kerosene", "lpg", "thinner")
    assert projection.n_components == results["projection"].n_components
    np.testing.assert_allclose(projection.components, results["projection"].components)


def test_pipeline_stops_before_training_on_missing_data(extinguisher_df):
    df = extinguisher_df.copy()
    df.loc[df.index[:3], "airflow"] = np.nan

    with pytest.raises(MissingDataError) as exc:
        run_pipeline(df, specs=MODEL_SPECS[:1])

    assert exc.value.counts == {"airflow": 3}


def test_pipeline_can_drop_incomplete_rows(extinguisher_df):
    df = extinguisher_df.copy()
    df.loc[df.index[:3], "airflow"] = np.nan

    results = run_pipeline(df, specs=MODEL_SPECS[:1], drop_missing=True)

    assert len(results["train"]) + len(results["test"]) == len(df) - 3


def test_hypothesis_tests_flag_informative_features(extinguisher_df):
    results = descriptive_stats.hypothesis_tests(extinguisher_df)

    by_status = results[results["test"] == "Mann-Whitney U by status"].set_index("feature")
    assert by_status.loc["airflow", "significant"]
    assert set(results["test"]) == {"chi-square vs status", "Mann-Whitney U by status",
                                    "ANOVA by fuel"}


def test_describe_dataset(extinguisher_df):
    summary = descriptive_stats.describe_dataset(extinguisher_df)

    assert list(summary["summary"].index) == ["distance", "desibel", "airflow", "frequency"]
    assert summary["balance"].sum() == len(extinguisher_df)
