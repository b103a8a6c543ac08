"""Deterministic sample cohort for demonstrations and tests."""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from ..content.template import (
    ANALYSED_FIELD,
    ARM_FIELD,
    EXCLUSION_REASONS,
    REASON_FIELD,
    SUBGROUP_FIELD,
)

SUBGROUPS = 4


def make_sample_dataset(
    n: int = 100,
    analysed_fraction: float = 0.4,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Build a cohort matching the reference template.

    Rows are split into four equal subgroups by position; subgroups 1 and
    2 belong to arm 2, subgroups 3 and 4 to arm 3.  The first
    ``analysed_fraction`` of each subgroup is analysed, the rest are
    excluded with reason codes cycling through 1, 2, 3.  With the
    defaults this gives arms of 50/50, subgroups of 25 and 10 analysed
    subjects per subgroup (60 excluded in total).

    Args:
        n: Number of subjects.  Zero yields an empty frame with the full schema.
        analysed_fraction: Share of each subgroup reaching the final layer.
        seed: If given, shuffle row order with this seed.  Counts do not change.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    if not 0.0 <= analysed_fraction <= 1.0:
        raise ValueError(f"analysed_fraction must lie in [0, 1], got {analysed_fraction}")

    index = np.arange(n)
    subgroup = index * SUBGROUPS // max(n, 1) + 1
    df = pd.DataFrame({"subject_id": index + 1, SUBGROUP_FIELD: subgroup.astype(int)})
    rank = df.groupby(SUBGROUP_FIELD).cumcount().to_numpy()
    size = df.groupby(SUBGROUP_FIELD)[SUBGROUP_FIELD].transform("size").to_numpy()
    n_analysed = np.floor(size * analysed_fraction + 0.5).astype(int)
    analysed = rank < n_analysed
    reasons = np.array(sorted(EXCLUSION_REASONS))
    reason = reasons[(rank - n_analysed) % len(reasons)] if n else np.array([], dtype=int)

    df[ARM_FIELD] = np.where(subgroup <= SUBGROUPS // 2, 2, 3).astype(int)
    df[ANALYSED_FIELD] = np.where(analysed, subgroup, 0).astype(int)
    df[REASON_FIELD] = np.where(analysed, 0, reason).astype(int)
    df = df[["subject_id", ARM_FIELD, SUBGROUP_FIELD, REASON_FIELD, ANALYSED_FIELD]]
    if seed is not None:
        df = df.sample(frac=1.0, random_state=seed).reset_index(drop=True)
    return df
