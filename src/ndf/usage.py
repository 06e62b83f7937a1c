"""Usage fraction and bar geometry for a volume."""

import math
from dataclasses import dataclass

DEFAULT_BAR_WIDTH = 50
DEFAULT_HIGH_USAGE_RATIO = 0.2

# Substitute fraction for volumes reporting more available than total space.
DEFAULT_ANOMALY_FRACTION = 0.10


def _clamp(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def compute_fraction(total: int, available: int) -> float:
    """
    Compute the used fraction of a volume.

    Returns 0.0 for empty volumes; otherwise 1 - available/total clamped
    into [0.0, 1.0].
    """
    if total <= 0:
        return 0.0
    return _clamp(1.0 - available / total)


def is_anomalous(total: int, available: int) -> bool:
    """Check for the available > total pair some network shares report."""
    return total > 0 and available > total


def resolve_fraction(
    total: int,
    available: int,
    anomaly_fraction: float = DEFAULT_ANOMALY_FRACTION,
) -> float:
    """Usage fraction with the anomaly substitution applied."""
    if is_anomalous(total, available):
        return _clamp(anomaly_fraction)
    return compute_fraction(total, available)


@dataclass(frozen=True)
class UsageBar:
    """Fixed-width bar split into filled and remaining cells."""

    width: int
    filled: int
    high_usage_ratio: float = DEFAULT_HIGH_USAGE_RATIO

    @property
    def remaining(self) -> int:
        return self.width - self.filled

    @property
    def high_usage(self) -> bool:
        return self.remaining < self.high_usage_ratio * self.width


def usage_bar(
    fraction: float,
    width: int = DEFAULT_BAR_WIDTH,
    high_usage_ratio: float = DEFAULT_HIGH_USAGE_RATIO,
) -> UsageBar:
    """
    Build the bar for a usage fraction.

    Args:
        fraction: Resolved usage fraction, expected in [0.0, 1.0]
        width: Total number of cells
        high_usage_ratio: Remaining-cells ratio below which usage is high

    Returns:
        UsageBar with ceil(width * fraction) filled cells
    """
    cells = width * _clamp(fraction)
    # Float noise such as 10.000000000000002 must not add a cell
    nearest = round(cells)
    filled = nearest if math.isclose(cells, nearest, rel_tol=1e-9) else math.ceil(cells)
    filled = min(max(filled, 0), width)
    return UsageBar(width=width, filled=filled, high_usage_ratio=high_usage_ratio)
