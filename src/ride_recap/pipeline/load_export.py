# ============================================
# File: src/ride_recap/pipeline/load_export.py
# Description:
#   Locate and read the CSV files of a personal data export.
#
#   Large exports are split into numbered files, e.g.
#     Rider/trips_data-0.csv, Rider/trips_data-1.csv, ...
#   All files matching a dataset's base name are read in sorted order
#   and concatenated into one list of rows.
#
#   Every row is a dict[str, str]; missing values are "" (never NaN),
#   headers and values are stripped.
# ============================================

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
from tqdm import tqdm

DEFAULT_DATA_DIR = Path("Uber Data")

# dataset -> (sub-directory, file base name)
EXPORT_FILES: Dict[str, Tuple[str, str]] = {
    "trips": ("Rider", "trips_data"),
    "orders": ("Eats", "user_orders"),
    "profile": ("Account and Profile", "user_profile"),
    "ratings": ("Rider", "rider_lifetime_ratings_received"),
}

Record = Dict[str, str]


def _ensure_data_dir(data_dir: Optional[str | Path]) -> Path:
    path = Path(data_dir) if data_dir is not None else DEFAULT_DATA_DIR
    if not path.exists() or not path.is_dir():
        raise FileNotFoundError(f"Export folder not found or not a directory: {path}")
    return path


def find_export_files(data_dir: Path, sub_dir: str, base_name: str) -> List[Path]:
    """
    Return the CSV files in data_dir/sub_dir whose name starts with
    base_name, sorted so that -0, -1, -2 ... keep their order.
    """
    folder = data_dir / sub_dir
    if not folder.is_dir():
        print(f"[load_export] Directory not found: {sub_dir}")
        return []

    files = sorted(
        p
        for p in folder.glob("*.csv")
        if p.name.startswith(base_name) and not p.name.startswith(".")
    )
    if not files:
        print(f"[load_export] No files matching {base_name}*.csv in {sub_dir}")
    return files


def read_records(path: Path) -> List[Record]:
    """
    Read one export CSV. Rows with more fields than the header keep the
    leading fields (extras are dropped), short rows are padded with "".
    """
    n_cols = len(pd.read_csv(path, nrows=0).columns)

    df = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        on_bad_lines=lambda fields: fields[:n_cols],
    )
    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].str.strip()
    return df.to_dict(orient="records")


def load_dataset(data_dir: Path, sub_dir: str, base_name: str) -> List[Record]:
    files = find_export_files(data_dir, sub_dir, base_name)

    rows: List[Record] = []
    for path in tqdm(files, desc=base_name, unit="file", disable=len(files) < 2):
        try:
            records = read_records(path)
        except pd.errors.EmptyDataError:
            print(f"  ⚠ {sub_dir}/{path.name} is empty. Skipping this file.")
            continue
        except (UnicodeDecodeError, pd.errors.ParserError) as e:
            print(f"  ✗ Error reading {sub_dir}/{path.name}: {e}. Skipping this file.")
            continue

        rows.extend(records)
        print(f"  Loaded {len(records)} rows from {sub_dir}/{path.name}")
    return rows


def load_export(data_dir: Optional[str | Path] = None) -> Dict[str, List[Record]]:
    """
    Read every dataset of the export.

    Returns:
        dict: dataset name ("trips", "orders", "profile", "ratings")
        -> list of rows. A dataset with no files is an empty list.

    Raises:
        FileNotFoundError: the export folder itself does not exist.
    """
    root = _ensure_data_dir(data_dir)
    print(f"[load_export] Reading export from: {root}")

    return {
        name: load_dataset(root, sub_dir, base_name)
        for name, (sub_dir, base_name) in EXPORT_FILES.items()
    }
