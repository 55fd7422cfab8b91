import pytest

from server_status_gui.models.disks import DiskRecord, HostDisks, MalformedRecordError


def test_from_dict_full():
    rec = DiskRecord.from_dict(
        {"name": "sda1", "mount_point": "/", "file_system": "ext4", "used": 70, "total": 100, "free": 30}
    )
    assert rec == DiskRecord(name="sda1", mount_point="/", file_system="ext4", used=70, total=100, free=30)


def test_from_dict_defaults_for_missing_fields():
    rec = DiskRecord.from_dict({"name": "zpool-tank", "mount_point": None})
    assert rec.mount_point == ""
    assert rec.file_system == ""
    assert rec.used == 0
    assert rec.total == 0
    assert rec.free is None


def test_missing_name_is_malformed():
    with pytest.raises(MalformedRecordError):
        DiskRecord.from_dict({"used": 1, "total": 2})


@pytest.mark.parametrize("obj", [{"name": "a", "used": -1}, {"name": "a", "total": "lots"}, ["a"]])
def test_bad_values_are_malformed(obj):
    with pytest.raises(MalformedRecordError):
        DiskRecord.from_dict(obj)


def test_malformed_is_a_value_error():
    assert issubclass(MalformedRecordError, ValueError)


def test_host_label_falls_back_to_name():
    assert HostDisks(name="n1", alias="", disks=[]).label == "n1"
    assert HostDisks(name="n1", alias="Node", disks=[]).label == "Node"
