from datetime import datetime

from server_status_gui.gui.pages.overview_page import OverviewPage
from server_status_gui.gui.widgets.server_panel import POOLS_TITLE, REGULAR_TITLE, ServerPanel
from server_status_gui.models.common import CollectorResult
from server_status_gui.models.disks import DiskRecord, FeedSnapshot, HostDisks, Severity
from server_status_gui.services.usage_calculator import UsageThresholds


def _host(disks, name="node-1", online=True):
    return HostDisks(name=name, alias="", disks=disks, online=online)


def test_end_to_end_groups(qapp):
    panel = ServerPanel(
        _host(
            [
                DiskRecord(name="sda1", file_system="ext4", used=70, total=100),
                DiskRecord(name="zpool-tank", file_system="zfs", used=950, total=1000),
            ]
        )
    )
    assert panel.title() == "node-1"
    assert panel.section_titles() == [REGULAR_TITLE, POOLS_TITLE]

    [regular] = panel.regular_bars()
    assert regular.label_text() == "sda1"
    assert regular.bar_value() == 70
    assert regular.view().severity is Severity.WARNING

    [pool] = panel.pool_bars()
    assert pool.label_text() == "tank"
    assert pool.bar_value() == 95
    assert pool.view().severity is Severity.CRITICAL


def test_empty_groups_are_suppressed(qapp):
    panel = ServerPanel(_host([DiskRecord(name="sda1", used=1, total=2)]))
    assert panel.has_regular_section()
    assert not panel.has_pool_section()

    panel.set_host(_host([DiskRecord(name="zpool-a", file_system="zfs", used=1, total=2)]))
    assert not panel.has_regular_section()
    assert panel.has_pool_section()

    panel.set_host(_host([]))
    assert panel.section_titles() == []
    assert panel.regular_bars() == []
    assert panel.pool_bars() == []


def test_input_order_within_groups(qapp):
    names = ["sdb1", "zpool-b", "sda1", "zpool-a", "nvme0n1p1"]
    panel = ServerPanel(_host([DiskRecord(name=n, used=1, total=2) for n in names]))
    assert [b.label_text() for b in panel.regular_bars()] == ["sdb1", "sda1", "nvme0n1p1"]
    assert [b.label_text() for b in panel.pool_bars()] == ["b", "a"]


def test_failing_record_does_not_hide_siblings(qapp):
    panel = ServerPanel(
        _host(
            [
                DiskRecord(name="sda1", used=1, total=2),
                DiskRecord(name="broken", used=-5, total=10),
                DiskRecord(name="sdb1", used=1, total=2),
            ]
        )
    )
    assert [b.label_text() for b in panel.regular_bars()] == ["sda1", "sdb1"]
    assert len(panel.error_labels()) == 1


def test_offline_title_and_thresholds(qapp):
    panel = ServerPanel(_host([DiskRecord(name="sda1", used=50, total=100)], online=False))
    assert panel.title() == "node-1 (offline)"
    assert panel.regular_bars()[0].view().severity is Severity.NORMAL

    panel.set_thresholds(UsageThresholds(warning=40, critical=50))
    assert panel.regular_bars()[0].view().severity is Severity.CRITICAL


def _result(hosts):
    snap = FeedSnapshot(source="stats.json", updated=0, hosts=hosts)
    return CollectorResult.from_warnings(datetime(2024, 1, 1), snap, [])


def test_overview_tracks_hosts(qapp):
    page = OverviewPage()
    page.set_data(_result([_host([], name="a"), _host([], name="b")]))
    assert sorted(page.panels()) == ["a", "b"]

    panel_a = page.panels()["a"]
    page.set_data(_result([_host([DiskRecord(name="sda1", used=1, total=2)], name="a")]))
    assert list(page.panels()) == ["a"]
    assert page.panels()["a"] is panel_a
    assert len(panel_a.regular_bars()) == 1
