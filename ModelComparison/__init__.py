from .model_training import (MODEL_SPECS, ModelSpec, TrainedModel, RandomGuessClassifier,
                             get_model_spec, grid_search, train_model, train_all_models, predict)
from .evaluation import (EvaluationRecord, confusion_metrics, roc_auc, evaluate_model,
                         evaluate_models, comparison_table, print_comparison)
from .descriptive_stats import describe_dataset, hypothesis_tests

__all__ = [
    "MODEL_SPECS", "ModelSpec", "TrainedModel", "RandomGuessClassifier",
    "get_model_spec", "grid_search", "train_model", "train_all_models", "predict",
    "EvaluationRecord", "confusion_metrics", "roc_auc", "evaluate_model",
    "evaluate_models", "comparison_table", "print_comparison",
    "describe_dataset", "hypothesis_tests"
]
