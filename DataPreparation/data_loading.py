import os
import pandas as pd

from config import COLUMN_NAMES, SHEET_NAME
from DataPreparation.errors import SchemaError


# Open file dialog and return the selected workbook path
def select_input_file():
    from tkinter import Tk, filedialog

    root = Tk()
    root.withdraw()
    root.attributes('-topmost', True)
    print("Select the extinguisher dataset file...")
    file_path = filedialog.askopenfilename(
        filetypes=[("Excel files", "*.xlsx"), ("CSV files", "*.csv")],
        parent=root
    )
    root.destroy()
    return file_path or None


def rename_columns(df):
    """Rename the seven raw columns to the canonical names, by position."""
    if df.shape[1] != len(COLUMN_NAMES):
        raise SchemaError(
            f"expected {len(COLUMN_NAMES)} columns, found {df.shape[1]}",
            stage="data_loader", columns=list(df.columns)
        )
    df = df.copy()
    df.columns = COLUMN_NAMES
    return df


# Load the experiment sheet (or a CSV export of it)
def load_data(path=None, sheet_name=SHEET_NAME):
    if path is None:
        path = select_input_file()
        if path is None:
            return None

    print(f"Loading file: {path}")
    if os.path.splitext(str(path))[1].lower() == ".csv":
        df = pd.read_csv(path)
    else:
        df = pd.read_excel(path, sheet_name=sheet_name, engine="openpyxl")

    df = rename_columns(df)
    print(f"Loaded {len(df)} rows, {df.shape[1]} columns")
    return df
