from collections import namedtuple

import numpy as np
import pandas as pd
from sklearn.metrics import auc, confusion_matrix, roc_curve

from ModelComparison.model_training import predict

EvaluationRecord = namedtuple("EvaluationRecord", [
    "model_name", "status", "accuracy", "precision", "recall", "f1", "auc",
    "confusion", "roc", "error"
])

TABLE_COLUMNS = ["Model Name", "Accuracy", "F1-Score", "Precision", "Recall", "AUC", "Status"]


def _ratio(numerator, denominator, label, model_name):
    if denominator == 0:
        print(f"- {model_name}: {label} undefined (zero denominator), reported as 0.0")
        return 0.0
    return numerator / denominator


def confusion_metrics(y_true, y_pred, model_name="model"):
    """Accuracy, precision, recall and F1 for the positive class 1."""
    cm = confusion_matrix(y_true, y_pred, labels=[0, 1])
    tn, fp, fn, tp = (int(v) for v in cm.ravel())

    accuracy = _ratio(tp + tn, tn + fp + fn + tp, "accuracy", model_name)
    precision = _ratio(tp, tp + fp, "precision", model_name)
    recall = _ratio(tp, tp + fn, "recall", model_name)
    f1 = _ratio(2 * precision * recall, precision + recall, "F1", model_name)
    return cm, accuracy, precision, recall, f1


def roc_auc(y_true, probabilities):
    """ROC curve points and AUC; AUC is NaN when only one class is present."""
    y_true = np.asarray(y_true)
    if len(np.unique(y_true)) < 2:
        return None, float("nan")
    fpr, tpr, thresholds = roc_curve(y_true, probabilities, pos_label=1)
    return (fpr, tpr, thresholds), float(auc(fpr, tpr))


def evaluate_model(model, X_test, y_test):
    y_test = np.asarray(y_test, dtype=int)
    y_pred, probabilities = predict(model, X_test)

    cm, accuracy, precision, recall, f1 = confusion_metrics(y_test, y_pred, model.name)
    roc, area = roc_auc(y_test, probabilities)
    if roc is None:
        print(f"- {model.name}: test set holds a single class, AUC undefined")

    return EvaluationRecord(model.name, "ok", accuracy, precision, recall, f1, area,
                            cm, roc, None)


def failed_record(model_name, error):
    nan = float("nan")
    return EvaluationRecord(model_name, "failed", nan, nan, nan, nan, nan, None, None, error)


def evaluate_models(trained_models, failures, X_test, y_test, order=None):
    """One record per model, failed ones included, in training order."""
    names = order or list(trained_models) + [n for n in failures if n not in trained_models]
    records = []
    for name in names:
        if name in trained_models:
            try:
                records.append(evaluate_model(trained_models[name], X_test, y_test))
            except Exception as e:
                print(f"Error evaluating {name}: {e}")
                records.append(failed_record(name, f"[evaluation] {type(e).__name__}: {e}"))
        elif name in failures:
            records.append(failed_record(name, failures[name]))
    return records


def comparison_table(records, decimals=3):
    rows = [{
        "Model Name": r.model_name,
        "Accuracy": r.accuracy,
        "F1-Score": r.f1,
        "Precision": r.precision,
        "Recall": r.recall,
        "AUC": r.auc,
        "Status": r.status,
    } for r in records]
    table = pd.DataFrame(rows, columns=TABLE_COLUMNS)

    # Failed models sink to the bottom, NaN AUC sorts after real values
    table["_failed"] = table["Status"] == "failed"
    table = table.sort_values(["_failed", "AUC", "Accuracy"],
                              ascending=[True, False, False],
                              na_position="last", kind="mergesort")
    table = table.drop(columns="_failed").reset_index(drop=True)

    metric_cols = ["Accuracy", "F1-Score", "Precision", "Recall", "AUC"]
    table[metric_cols] = table[metric_cols].astype(float).round(decimals)
    return table


def print_comparison(table):
    print("\n=== Model Comparison ===")
    print(table.to_string(index=False))
