"""Volume and mount sources for the reconciliation engine."""

from .volumes import PrimaryVolumeSource
from .mounts import SecondaryMountSource

__all__ = [
    "PrimaryVolumeSource",
    "SecondaryMountSource",
]
