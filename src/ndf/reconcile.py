"""
Reconciliation of the primary and secondary sources into one volume list.

The primary source is authoritative for every path it reports. The
secondary source only fills in paths the primary source did not list,
which is where network shares usually show up.
"""

import logging
import os
from typing import List, Optional, Set

from .config import NdfConfig
from .errors import PathQueryFailed, SourceUnavailable
from .models import SOURCE_PRIMARY, SOURCE_SECONDARY, VolumeInfo, VolumeRecord
from .rules import ExclusionRules, MountFilters
from .sources import PrimaryVolumeSource, SecondaryMountSource
from .usage import DEFAULT_ANOMALY_FRACTION, is_anomalous, resolve_fraction

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "(unnamed)"


def _usable_name(name: Optional[str]) -> bool:
    """Names must be present and encodable as UTF-8 (no surrogate escapes)."""
    if not name:
        return False
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def name_from_path(path: str) -> str:
    """Label a mount by its last path segment."""
    name = os.path.basename(path.rstrip("/\\"))
    return name if _usable_name(name) else PLACEHOLDER_NAME


class VolumeReconciler:
    """Merges, de-duplicates and filters volumes from both sources."""

    def __init__(
        self,
        primary: PrimaryVolumeSource,
        secondary: SecondaryMountSource,
        rules: Optional[ExclusionRules] = None,
        anomaly_fraction: float = DEFAULT_ANOMALY_FRACTION,
    ):
        self.primary = primary
        self.secondary = secondary
        self.rules = rules or ExclusionRules.for_platform()
        self.anomaly_fraction = anomaly_fraction

    def reconcile(self, filters: Optional[MountFilters] = None) -> List[VolumeRecord]:
        """
        Build the final volume list for one run.

        Args:
            filters: User include/exclude lists

        Returns:
            Primary records in source order followed by secondary records

        Raises:
            SourceUnavailable: If the primary source cannot list volumes
        """
        filters = filters or MountFilters()
        seen_paths: Set[str] = set()

        volumes = self.primary.list_volumes()
        records = self._primary_records(volumes, filters, seen_paths)
        records.extend(self._secondary_records(filters, seen_paths))
        return records

    def _primary_records(
        self,
        volumes: List[VolumeInfo],
        filters: MountFilters,
        seen_paths: Set[str],
    ) -> List[VolumeRecord]:
        records = []

        for volume in volumes:
            path = volume.mount_path
            if not path:
                logger.debug(f"Dropping volume {volume.name!r} without a mount path")
                continue
            if path in seen_paths:
                continue
            # Mark as seen before filtering so the secondary source skips it too
            seen_paths.add(path)

            if self.rules.excludes(path, volume.filesystem_type):
                logger.debug(f"Excluding {path} ({volume.filesystem_type})")
                continue
            if not filters.allows(path):
                continue
            if not _usable_name(volume.name):
                logger.debug(f"Dropping {path}: missing or undecodable name")
                continue

            records.append(self._make_record(
                name=volume.name,
                path=path,
                filesystem_type=volume.filesystem_type,
                total=volume.total_bytes,
                available=volume.available_bytes,
                source=SOURCE_PRIMARY,
            ))

        return records

    def _secondary_records(self, filters: MountFilters, seen_paths: Set[str]) -> List[VolumeRecord]:
        try:
            paths = self.secondary.list_mount_paths()
        except SourceUnavailable as e:
            logger.warning(f"Secondary mount listing unavailable: {e}")
            return []

        records = []

        for path in paths:
            if not path or path in seen_paths:
                continue
            seen_paths.add(path)

            filesystem_type = self.secondary.filesystem_type(path)
            if self.rules.excludes(path, filesystem_type):
                logger.debug(f"Excluding {path} ({filesystem_type or 'unknown type'})")
                continue
            if not filters.allows(path):
                continue
            if self.rules.is_virtual_device(path):
                logger.debug(f"Excluding {path}: virtual device")
                continue

            try:
                usage = self.secondary.query_usage(path)
            except PathQueryFailed as e:
                logger.debug(f"Skipping {path}: {e}")
                continue

            total, available = usage.total_bytes, usage.available_bytes
            if total == 0 and available == 0:
                logger.debug(f"Skipping {path}: no usage data")
                continue

            records.append(self._make_record(
                name=name_from_path(path),
                path=path,
                filesystem_type=filesystem_type,
                total=total,
                available=available,
                source=SOURCE_SECONDARY,
            ))

        return records

    def _make_record(
        self,
        name: str,
        path: str,
        filesystem_type: str,
        total: int,
        available: int,
        source: str,
    ) -> VolumeRecord:
        anomalous = is_anomalous(total, available)
        if anomalous:
            logger.debug(
                f"{path} reports {available} bytes available of {total}; "
                f"assuming {self.anomaly_fraction:.0%} used"
            )

        return VolumeRecord(
            name=name,
            mount_path=path,
            filesystem_type=filesystem_type,
            total_bytes=total,
            available_bytes=available,
            usage_fraction=resolve_fraction(total, available, self.anomaly_fraction),
            anomalous=anomalous,
            source=source,
        )


def reconcile(
    filters: Optional[MountFilters] = None,
    config: Optional[NdfConfig] = None,
) -> List[VolumeRecord]:
    """
    Reconcile the live OS volume inventory.

    Raises SourceUnavailable if the primary volume listing fails.
    """
    config = config or NdfConfig()
    rules = ExclusionRules.for_platform(
        extra_prefixes=config.excluded_prefixes,
        extra_filesystems=config.excluded_filesystems,
    )
    reconciler = VolumeReconciler(
        PrimaryVolumeSource(),
        SecondaryMountSource(),
        rules=rules,
        anomaly_fraction=config.anomaly_fraction,
    )
    return reconciler.reconcile(filters)
