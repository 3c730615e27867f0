import os
import json
import joblib
import numpy as np
import pandas as pd


# Adjust Excel column widths based on content
def auto_adjust_column_width(writer, sheet_name):
    worksheet = writer.sheets[sheet_name]
    for column_cells in worksheet.columns:
        max_length = 0
        column = column_cells[0].column_letter
        for cell in column_cells:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        worksheet.column_dimensions[column].width = max_length + 2


# Save the comparison table as Excel and CSV side by side
def save_comparison_table(table, save_dir, filename="model_comparison"):
    os.makedirs(save_dir, exist_ok=True)
    excel_path = os.path.join(save_dir, f"{filename}.xlsx")
    with pd.ExcelWriter(excel_path, engine='openpyxl') as writer:
        table.to_excel(writer, index=False, sheet_name='Comparison')
        auto_adjust_column_width(writer, 'Comparison')
    print(f"Excel file saved at: {excel_path}")

    csv_path = os.path.join(save_dir, f"{filename}.csv")
    table.to_csv(csv_path, index=False, encoding='utf-8')
    print(f"CSV file saved at: {csv_path}")
    return excel_path, csv_path


def _json_ready(value):
    if isinstance(value, dict):
        return {str(k): _json_ready(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_ready(v) for v in value]
    if isinstance(value, np.ndarray):
        return _json_ready(value.tolist())
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return None if np.isnan(value) else float(value)
    return value


# Save per-model metrics, best hyperparameters and confusion matrices
def save_metrics(evaluations, trained_models, save_dir, filename="model_metrics.json"):
    metrics = {}
    for record in evaluations:
        entry = {
            'status': record.status,
            'accuracy': record.accuracy,
            'precision': record.precision,
            'recall': record.recall,
            'f1_score': record.f1,
            'auc': record.auc,
            'confusion_matrix': record.confusion,
        }
        model = trained_models.get(record.model_name)
        if model is not None:
            entry['best_params'] = model.best_params
        if record.error is not None:
            entry['error'] = record.error
        metrics[record.model_name] = entry

    path = os.path.join(save_dir, filename)
    with open(path, 'w') as f:
        json.dump(_json_ready(metrics), f, indent=2)

    print(f"Extended metrics have been saved to '{path}'.")
    return path


# Persist fitted transform value objects for later reuse
def save_fitted_transforms(transforms, projection, save_dir, filename="fitted_transforms.joblib"):
    path = os.path.join(save_dir, filename)
    joblib.dump({'preparation': transforms, 'pca': projection}, path)
    print(f"Fitted transforms saved at: {path}")
    return path


def load_fitted_transforms(path):
    bundle = joblib.load(path)
    return bundle['preparation'], bundle['pca']
