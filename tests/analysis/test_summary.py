"""Test the group splitting and the summary table."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import numpy as np
import pandas as pd
import pytest

from nodal.analysis.summary import Group, split_groups, summary_table
from nodal.exceptions import InsufficientDataError


def _frame():
    return pd.DataFrame(
        {
            "positive_nodes": [0, 0, 0, 0, 1, 2, 2, 3, 4, 5, 6, 8],
            "recurrence": [0] * 6 + [1] * 6,
        }
    )


def test_split_groups():
    samples = split_groups(_frame(), "positive_nodes", "recurrence")
    assert np.array_equal(samples.no_recurrence, [0, 0, 0, 0, 1, 2])
    assert np.array_equal(samples.recurrence, [2, 3, 4, 5, 6, 8])
    assert samples.prior_no == 0.5
    assert samples.prior_yes == 0.5
    assert samples.sample(Group.RECURRENCE) is samples.recurrence


def test_split_groups_unbalanced_priors():
    df = pd.DataFrame({"n": [0, 1, 2, 3, 4], "r": [0, 0, 0, 1, 1]})
    samples = split_groups(df, "n", "r")
    assert samples.prior_no == pytest.approx(0.6)
    assert samples.prior_yes == pytest.approx(0.4)
    assert samples.prior_no + samples.prior_yes == pytest.approx(1.0)


def test_split_groups_insufficient_group():
    df = pd.DataFrame({"n": [0, 1, 2, 3], "r": [0, 0, 0, 1]})
    with pytest.raises(InsufficientDataError) as e:
        split_groups(df, "n", "r")
    assert e.value.group == "Recurrence"
    assert e.value.size == 1


def test_split_groups_validation():
    with pytest.raises(KeyError):
        split_groups(_frame(), "nodes", "recurrence")

    df = _frame()
    df.loc[0, "recurrence"] = 2
    with pytest.raises(ValueError):
        split_groups(df, "positive_nodes", "recurrence")

    df = _frame()
    df.loc[0, "positive_nodes"] = -1
    with pytest.raises(ValueError):
        split_groups(df, "positive_nodes", "recurrence")


def test_summary_table():
    table = summary_table(_frame(), "positive_nodes", "recurrence")
    assert list(table.index) == ["No Recurrence", "Recurrence"]
    assert list(table.columns) == ["count", "mean", "sd", "median", "max"]

    no = table.loc["No Recurrence"]
    assert no["count"] == 6
    assert no["mean"] == pytest.approx(0.5)
    assert no["median"] == 0.0
    assert no["max"] == 2

    yes = table.loc["Recurrence"]
    assert yes["mean"] == pytest.approx(14 / 3)
    assert yes["sd"] == pytest.approx(np.std([2, 3, 4, 5, 6, 8], ddof=1))
    assert yes["median"] == 4.5
