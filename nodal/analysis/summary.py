"""Group splitting and descriptive statistics."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

from dataclasses import dataclass
from enum import Enum

import numpy as np
import pandas as pd

from nodal.analysis.kde import MIN_SAMPLE_SIZE
from nodal.analysis.posterior import priors_from_labels
from nodal.exceptions import InsufficientDataError
from nodal.utils import logging

logger = logging.get_default_logger()


class Group(Enum):
    NO_RECURRENCE = 0
    RECURRENCE = 1

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True, eq=False)
class GroupedSamples:
    """Node counts of both groups and their empirical priors."""

    no_recurrence: np.ndarray
    recurrence: np.ndarray
    prior_no: float
    prior_yes: float

    def sample(self, group: Group) -> np.ndarray:
        return self.recurrence if group is Group.RECURRENCE else self.no_recurrence


def _validate(frame: pd.DataFrame, value_col: str, label_col: str) -> None:
    missing = [c for c in (value_col, label_col) if c not in frame.columns]
    if missing:
        raise KeyError(f"Missing column(s): {missing}")
    if frame[[value_col, label_col]].isnull().values.any():
        raise ValueError("Data contains null values; clean the data first")
    if not frame[label_col].isin([g.value for g in Group]).all():
        raise ValueError(f"Column {label_col} must only contain 0 and 1")
    if (frame[value_col] < 0).any():
        raise ValueError(f"Column {value_col} must be non-negative")


def split_groups(frame: pd.DataFrame, value_col: str, label_col: str) -> GroupedSamples:
    """Partition the counts by the recurrence label.

    Raises:
        InsufficientDataError: a group has fewer than two observations
    """
    _validate(frame, value_col, label_col)

    samples = {}
    for group in Group:
        values = frame.loc[frame[label_col] == group.value, value_col].to_numpy(dtype=float)
        if values.size < MIN_SAMPLE_SIZE:
            raise InsufficientDataError(
                f"Group '{group.title}' has {values.size} observation(s), "
                f"at least {MIN_SAMPLE_SIZE} are required",
                group=group.title,
                size=values.size,
            )
        samples[group] = values
        logger.debug(f"Group '{group.title}': {values.size} observations")

    prior_no, prior_yes = priors_from_labels(frame[label_col].to_numpy())

    return GroupedSamples(
        no_recurrence=samples[Group.NO_RECURRENCE],
        recurrence=samples[Group.RECURRENCE],
        prior_no=prior_no,
        prior_yes=prior_yes,
    )


def summary_table(frame: pd.DataFrame, value_col: str, label_col: str) -> pd.DataFrame:
    """Count, mean, sd, median and max of the counts per group."""
    _validate(frame, value_col, label_col)

    table = (
        frame.groupby(label_col)[value_col]
        .agg(["count", "mean", "std", "median", "max"])
        .rename(columns={"std": "sd"})
        .reindex([g.value for g in Group])
    )
    table.index = [g.title for g in Group]
    table.index.name = "group"
    table["count"] = table["count"].fillna(0).astype(int)

    return table
