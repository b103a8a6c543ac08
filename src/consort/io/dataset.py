"""Load subject-level datasets from disk."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..core.errors import InvalidDatasetError
from ..utils.logging import get_logger

logger = get_logger(__name__)


def load_dataset(path: Path) -> pd.DataFrame:
    """Read a CSV or parquet file into a DataFrame.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        InvalidDatasetError: If the suffix is neither ``.csv`` nor ``.parquet``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        df = pd.read_parquet(path)
    elif suffix == ".csv":
        df = pd.read_csv(path)
    else:
        raise InvalidDatasetError(f"Unsupported dataset format '{suffix}' (use .csv or .parquet)")
    logger.info(f"Loaded {len(df)} rows from {path}")
    return df


def save_dataset(df: pd.DataFrame, path: Path) -> Path:
    """Write ``df`` as CSV or parquet depending on the suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".parquet":
        df.to_parquet(path, index=False)
    else:
        df.to_csv(path, index=False)
    logger.info(f"Saved {len(df)} rows to {path}")
    return path
