"""Tests for usage fraction and bar geometry."""

import math

import pytest

from ndf.usage import (
    DEFAULT_ANOMALY_FRACTION,
    compute_fraction,
    is_anomalous,
    resolve_fraction,
    usage_bar,
)


@pytest.mark.parametrize("available", [0, 1, 10**12])
def test_empty_volume_is_zero(available):
    assert compute_fraction(0, available) == 0.0
    assert resolve_fraction(0, available) == 0.0


def test_valid_pair_fraction():
    assert compute_fraction(1000, 250) == 0.75
    assert compute_fraction(1000, 1000) == 0.0
    assert compute_fraction(1000, 0) == 1.0


def test_fraction_is_clamped():
    assert compute_fraction(500, 600) == 0.0
    assert compute_fraction(500, -100) == 1.0


def test_anomalous_pair_uses_policy_value():
    assert is_anomalous(500, 600)
    assert not is_anomalous(500, 500)
    assert not is_anomalous(0, 600)
    assert resolve_fraction(500, 600) == DEFAULT_ANOMALY_FRACTION == 0.10
    assert resolve_fraction(500, 600, anomaly_fraction=0.5) == 0.5


def test_anomaly_fraction_is_kept_in_range():
    assert resolve_fraction(500, 600, anomaly_fraction=1.5) == 1.0
    assert resolve_fraction(500, 600, anomaly_fraction=float("nan")) == 0.0


def test_three_quarters_used_is_not_high_usage():
    fraction = resolve_fraction(1000, 250)
    bar = usage_bar(fraction, width=50)

    assert fraction == 0.75
    assert bar.filled == 38
    assert bar.remaining == 12
    assert not bar.high_usage


def test_ninety_five_percent_used_is_high_usage():
    fraction = resolve_fraction(1000, 50)
    bar = usage_bar(fraction, width=50)

    assert math.isclose(fraction, 0.95)
    assert bar.filled == 48
    assert bar.remaining == 2
    assert bar.high_usage


def test_high_usage_boundary():
    # Exactly 80% used leaves 10 of 50 cells, which is not below the threshold
    assert not usage_bar(0.8, width=50).high_usage
    assert usage_bar(0.81, width=50).high_usage


def test_float_noise_does_not_add_a_cell():
    assert usage_bar(0.2, width=50).filled == 10
    assert usage_bar(0.1 + 0.2, width=10).filled == 3


def test_bar_extremes():
    assert usage_bar(0.0, width=50).filled == 0
    assert usage_bar(1.0, width=50).filled == 50
    assert usage_bar(1.0, width=50).remaining == 0
    assert usage_bar(0.001, width=50).filled == 1


def test_any_usage_fills_a_cell():
    assert usage_bar(1e-11, width=50).filled == 1
    assert usage_bar(resolve_fraction(10**15, 10**15 - 1), width=50).filled == 1


def test_computation_is_idempotent():
    first = resolve_fraction(12345, 678)
    second = resolve_fraction(12345, 678)
    assert first == second
    assert usage_bar(first) == usage_bar(second)
