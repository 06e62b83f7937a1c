"""Secondary mount source: every mount path plus raw statvfs queries."""

import os
from typing import Dict, List

import psutil

from ..errors import PathIOError, SourceUnavailable, UnsupportedQuery
from ..models import MountUsage


class SecondaryMountSource:
    """
    Best-effort inventory of all mounted paths.

    Catches mounts the primary source leaves out, notably network shares
    and FUSE filesystems.
    """

    def __init__(self):
        self._filesystem_types: Dict[str, str] = {}

    def list_mount_paths(self) -> List[str]:
        """
        List every mount path known to the OS, in mount table order.

        Raises:
            SourceUnavailable: If the mount table cannot be read
        """
        try:
            partitions = psutil.disk_partitions(all=True)
        except (OSError, psutil.Error) as e:
            raise SourceUnavailable(f"Cannot list mount paths: {e}") from e

        paths = []
        for partition in partitions:
            # Stacked mounts: the last entry for a path is the one visible there
            self._filesystem_types[partition.mountpoint] = partition.fstype
            paths.append(partition.mountpoint)
        return paths

    def filesystem_type(self, path: str) -> str:
        """Filesystem type of the topmost mount at path in the last listing, or ""."""
        return self._filesystem_types.get(path, "")

    def query_usage(self, path: str) -> MountUsage:
        """
        Read total and available bytes for path with statvfs.

        Raises:
            UnsupportedQuery: If the platform has no statvfs
            PathIOError: If the path cannot be queried
        """
        statvfs = getattr(os, "statvfs", None)
        if statvfs is None:
            raise UnsupportedQuery(path, "statvfs is not available on this platform")

        try:
            st = statvfs(path)
        except OSError as e:
            raise PathIOError(path, e) from e

        block_size = st.f_frsize or st.f_bsize
        return MountUsage(
            total_bytes=st.f_blocks * block_size,
            available_bytes=st.f_bavail * block_size,
        )
