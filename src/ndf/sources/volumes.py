"""Primary volume source backed by psutil."""

import logging
import os
from typing import List

import psutil

from ..errors import SourceUnavailable
from ..models import VolumeInfo

logger = logging.getLogger(__name__)


class PrimaryVolumeSource:
    """Lists mounted volumes with their usage already computed."""

    def list_volumes(self) -> List[VolumeInfo]:
        """
        Collect usage information for all mounted physical volumes.

        Returns list of volumes with device name, mount point, filesystem type
        and total/available bytes.

        Raises:
            SourceUnavailable: If the partition listing itself fails
        """
        try:
            partitions = psutil.disk_partitions(all=False)
        except (OSError, psutil.Error) as e:
            raise SourceUnavailable(f"Cannot list mounted volumes: {e}") from e

        volumes = []

        for partition in partitions:
            if os.name == "nt":
                # Skip CD-ROM drives with no disk in them; they may block or
                # raise for a non-ready partition
                if "cdrom" in partition.opts or partition.fstype == "":
                    continue

            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except OSError as e:
                # Permission denied, stale mounts and the like
                logger.debug(f"Skipping {partition.mountpoint}: {e}")
                continue

            volumes.append(VolumeInfo(
                name=partition.device,
                mount_path=partition.mountpoint,
                filesystem_type=partition.fstype,
                total_bytes=int(usage.total),
                available_bytes=int(usage.free),
            ))

        return volumes
