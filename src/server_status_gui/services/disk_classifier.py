from __future__ import annotations

import logging
from typing import Iterable

from server_status_gui.models.disks import DiskGroups, DiskRecord

logger = logging.getLogger(__name__)

POOL_MARKER = "zpool-"
POOL_FS_TYPE = "zfs"


def is_storage_pool(record: DiskRecord) -> bool:
    return record.name.startswith(POOL_MARKER)


def strip_pool_marker(name: str) -> str:
    if name.startswith(POOL_MARKER):
        return name[len(POOL_MARKER):]
    return name


def classify_disks(records: Iterable[DiskRecord]) -> DiskGroups:
    """Split a host's disk list into regular filesystems and storage pools.

    Order is preserved inside each group. Datasets typed as the pool
    filesystem but not named with the pool marker belong to neither group;
    they are collected in ``unclassified`` and not rendered.
    """
    regular: list[DiskRecord] = []
    pools: list[DiskRecord] = []
    unclassified: list[DiskRecord] = []

    for rec in records:
        if is_storage_pool(rec):
            pools.append(rec)
        elif rec.file_system.lower() != POOL_FS_TYPE:
            regular.append(rec)
        else:
            logger.debug("Disk %s (%s) is neither a pool nor a regular filesystem", rec.name, rec.file_system)
            unclassified.append(rec)

    return DiskGroups(regular=regular, pools=pools, unclassified=unclassified)
