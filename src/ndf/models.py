"""Volume entries reported by the sources and the reconciled records."""

from dataclasses import asdict, dataclass
from typing import Any, Dict

SOURCE_PRIMARY = "primary"
SOURCE_SECONDARY = "secondary"


@dataclass(frozen=True)
class VolumeInfo:
    name: str
    mount_path: str
    filesystem_type: str
    total_bytes: int
    available_bytes: int


@dataclass(frozen=True)
class MountUsage:
    total_bytes: int
    available_bytes: int


@dataclass(frozen=True)
class VolumeRecord:
    name: str
    mount_path: str
    filesystem_type: str
    total_bytes: int
    available_bytes: int
    usage_fraction: float
    anomalous: bool = False
    source: str = SOURCE_PRIMARY

    @property
    def used_bytes(self) -> int:
        return max(self.total_bytes - self.available_bytes, 0)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["used_bytes"] = self.used_bytes
        return data
