from __future__ import annotations

import json
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def stats_doc() -> dict:
    return {
        "updated": 1700000000,
        "servers": [
            {
                "name": "node-1",
                "alias": "Node One",
                "online4": True,
                "si": False,
                "disks": [
                    {"name": "sda1", "mount_point": "/", "file_system": "ext4", "used": 70, "total": 100, "free": 30},
                    {"name": "zpool-tank", "mount_point": "", "file_system": "zfs", "used": 950, "total": 1000},
                    {"name": "tank/data", "mount_point": "/tank/data", "file_system": "ZFS", "used": 10, "total": 1000},
                ],
            },
            {
                "name": "node-2",
                "alias": "",
                "online4": False,
                "online6": False,
            },
        ],
    }


@pytest.fixture
def stats_file(tmp_path, stats_doc):
    p = tmp_path / "stats.json"
    p.write_text(json.dumps(stats_doc), encoding="utf-8")
    return p
