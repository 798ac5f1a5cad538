"""
Helpers for inspecting what a sampler actually drew.
"""
from typing import Hashable, Iterable, Mapping, Optional

import pandas as pd


def summarize_draws(
    draws: Iterable[Hashable],
    weights: Optional[Mapping[Hashable, float]] = None,
) -> pd.DataFrame:
    """
    Count how often each item was drawn.

    Args:
        draws: Sequence of drawn items
        weights: Optional weight mapping. Adds an `expected_frequency` column
                 (weights normalised over the mapping, non-positive weights
                 count as 0) and lists weighted items that were never drawn.

    Returns:
        DataFrame indexed by item with `count` and `frequency` columns,
        sorted by descending count.
    """
    counts = pd.Series(list(draws), dtype=object).value_counts()

    if weights is not None:
        missing = [item for item in weights if item not in counts.index]
        if missing:
            counts = pd.concat([counts, pd.Series(0, index=pd.Index(missing, dtype=object))])

    summary = pd.DataFrame({"count": counts.astype(int)})
    summary.index.name = "item"

    total = summary["count"].sum()
    summary["frequency"] = summary["count"] / total if total > 0 else 0.0

    if weights is not None:
        positive = pd.Series({item: max(float(weight), 0.0) for item, weight in weights.items()}, dtype=float)
        weight_total = positive.sum()
        expected = positive / weight_total if weight_total > 0 else positive * 0.0
        summary["expected_frequency"] = expected.reindex(summary.index).fillna(0.0)

    return summary.sort_values("count", ascending=False, kind="stable")
