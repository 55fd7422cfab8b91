from server_status_gui.models.disks import DiskRecord
from server_status_gui.services.disk_classifier import (
    POOL_MARKER,
    classify_disks,
    is_storage_pool,
    strip_pool_marker,
)


def _disk(name, fs="ext4"):
    return DiskRecord(name=name, file_system=fs, used=1, total=2)


def test_partition_preserves_order():
    a, b, c = _disk("sda1"), _disk("zpool-tank", "zfs"), _disk("sdb1", "xfs")
    groups = classify_disks([a, b, c])
    assert groups.regular == [a, c]
    assert groups.pools == [b]
    assert groups.unclassified == []


def test_empty_input():
    groups = classify_disks([])
    assert groups.regular == []
    assert groups.pools == []


def test_pool_membership_is_by_name_only():
    # marker-named entries are pools whatever their reported type
    odd = _disk("zpool-backup", "ext4")
    assert classify_disks([odd]).pools == [odd]


def test_zfs_dataset_without_marker_is_in_neither_group():
    ds = _disk("tank/home", "ZFS")
    groups = classify_disks([ds])
    assert groups.regular == []
    assert groups.pools == []
    assert groups.unclassified == [ds]


def test_groups_are_disjoint():
    records = [_disk("sda1"), _disk("zpool-a", "zfs"), _disk("tank", "zfs"), _disk("zpool-b", "zfs"), _disk("sdc")]
    groups = classify_disks(records)
    ids = [id(r) for r in groups.regular + groups.pools + groups.unclassified]
    assert len(ids) == len(set(ids)) == len(records)
    assert [r.name for r in groups.pools] == ["zpool-a", "zpool-b"]


def test_input_is_not_mutated():
    records = [_disk("zpool-a", "zfs"), _disk("sda1")]
    snapshot = list(records)
    classify_disks(records)
    assert records == snapshot


def test_marker_helpers():
    assert POOL_MARKER == "zpool-"
    assert is_storage_pool(_disk("zpool-tank"))
    assert not is_storage_pool(_disk("tank-zpool-"))
    assert strip_pool_marker("zpool-tank") == "tank"
    assert strip_pool_marker("sda1") == "sda1"
