import os
# Limit parallel processing CPU usage
os.environ["LOKY_MAX_CPU_COUNT"] = "4"

# Input workbook
DATA_FILE = "Acoustic_Extinguisher_Fire_Dataset.xlsx"
SHEET_NAME = "A_E_Fire_Dataset"

# Canonical column names, in the order they appear in the sheet
COLUMN_NAMES = ["size", "fuel", "distance", "desibel", "airflow", "frequency", "status"]
CONTINUOUS_COLUMNS = ["distance", "desibel", "airflow", "frequency"]
NOMINAL_COLUMN = "fuel"
ORDINAL_COLUMN = "size"
TARGET = "status"
CLASS_NAMES = ["Failure", "Success"]

# "raise" stops the pipeline on incomplete rows, "drop" removes them
MISSING_POLICY = "raise"

# Reproducibility
SEED = 42
TRAIN_FRACTION = 0.8
N_FOLDS = 5
N_JOBS = 1

PCA_VARIANCE_THRESHOLD = 0.999

# Hyperparameter search spaces
TREE_CCP_ALPHAS = [0.0, 0.001, 0.002, 0.005, 0.01, 0.02, 0.03, 0.05, 0.075, 0.1]
KNN_NEIGHBORS = [5, 7, 9, 11, 13, 15, 17, 19, 21, 23]
FOREST_MAX_CANDIDATES = 10
FOREST_N_ESTIMATORS = 500
MLP_HIDDEN_UNITS = [1, 3, 5, 7, 9]
MLP_DECAYS = [0.0, 1e-4, 1e-3, 1e-2, 1e-1]
MLP_MAX_ITER = 500
XGB_GRID = {
    "n_estimators": [50, 100, 150, 200, 250],
    "max_depth": [1, 2, 3, 4, 5],
    "learning_rate": [0.05, 0.1, 0.2, 0.3, 0.4],
    "colsample_bytree": [0.5, 0.6, 0.7, 0.8, 1.0],
    "subsample": [0.5, 0.625, 0.75, 0.875, 1.0],
}

# Output
OUTPUT_DIR = "results"
PLOT_SUBFOLDERS = ["eda", "pca", "roc", "tuning", "confusion"]

# Plot settings
DPI = 300
