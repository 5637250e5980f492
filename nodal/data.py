"""Load the cleaned two-column analysis table."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import pandas as pd

from nodal.utils import logging

logger = logging.get_default_logger()


def load_csv(path: str, value_col: str, label_col: str) -> pd.DataFrame:
    """Read a CSV file and keep complete rows with a 0/1 label.

    Args:
        path: CSV file
        value_col: Column with the number of positive lymph nodes
        label_col: Column with the 0/1 recurrence indicator

    Returns:
        pd.DataFrame: two columns, the count as float and the label as int
    """
    logger.info(f"Loading dataset: {path}")
    df = pd.read_csv(path, usecols=[value_col, label_col])

    df[value_col] = pd.to_numeric(df[value_col], errors="coerce")
    df[label_col] = pd.to_numeric(df[label_col], errors="coerce")

    n = len(df)
    df = df.dropna().reset_index(drop=True)
    if len(df) < n:
        logger.warning(f"Dropped {n - len(df)} incomplete row(s) of {n}")

    binary = df[label_col].isin([0, 1])
    if not binary.all():
        logger.warning(
            f"Dropped {(~binary).sum()} row(s) with a {label_col} label other than 0 or 1"
        )
        df = df[binary].reset_index(drop=True)

    df[value_col] = df[value_col].astype(float)
    df[label_col] = df[label_col].astype(int)

    return df
