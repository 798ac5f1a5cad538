"""
Tests for summarize_draws.
"""
import numpy as np

from grabbag import WeightedBagSampler, summarize_draws


def test_counts_and_frequencies():
    summary = summarize_draws(["A", "A", "B", "A"])

    assert list(summary.index) == ["A", "B"]
    assert summary.loc["A", "count"] == 3
    assert summary.loc["B", "count"] == 1
    np.testing.assert_allclose(summary["frequency"].to_numpy(), [0.75, 0.25])
    assert "expected_frequency" not in summary.columns


def test_expected_frequency_from_weights():
    summary = summarize_draws(["A", "A", "A", "B"], weights={"A": 3.0, "B": 1.0, "C": 0.0, "D": -2.0})

    assert summary.loc["C", "count"] == 0
    assert summary.loc["D", "count"] == 0
    np.testing.assert_allclose(summary.loc[["A", "B", "C", "D"], "expected_frequency"].to_numpy(), [0.75, 0.25, 0.0, 0.0])


def test_weighted_sampler_matches_expected_over_full_cycles():
    weights = {"copper": 6.0, "potion": 3.0, "sword": 1.0}
    sampler = WeightedBagSampler(list(weights), weights, seed=9)

    summary = summarize_draws(sampler.draw(100), weights=weights)
    np.testing.assert_allclose(
        summary["frequency"].to_numpy(),
        summary["expected_frequency"].to_numpy(),
    )


def test_empty_draws():
    summary = summarize_draws([])
    assert len(summary) == 0
    assert list(summary.columns) == ["count", "frequency"]
