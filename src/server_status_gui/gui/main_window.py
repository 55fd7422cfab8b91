from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from PySide6.QtCore import QThreadPool, QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from server_status_gui.collectors.stats_feed_collector import StatsFeedCollector
from server_status_gui.gui.pages.overview_page import OverviewPage
from server_status_gui.gui.workers import Worker, WorkerJob
from server_status_gui.models.common import CollectorResult
from server_status_gui.models.disks import FeedSnapshot
from server_status_gui.services.config_service import ConfigService, DashboardConfig
from server_status_gui.services.report_service import ReportService

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, config_service: ConfigService | None = None, config: DashboardConfig | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Server Status")
        self.resize(900, 720)

        self._config_service = config_service or ConfigService()
        self._config = config or self._config_service.load()
        self._reporter = ReportService(self._config.thresholds)
        self._collector = self._build_collector(self._config)
        self._latest: CollectorResult[FeedSnapshot] | None = None

        self._thread_pool = QThreadPool.globalInstance()
        self._req_id = 0
        self._active_workers: set[Worker] = set()

        self._url = QLineEdit(self._config.feed_url)
        self._interval = QSpinBox()
        self._interval.setRange(1, 3600)
        self._interval.setSuffix(" s")
        self._interval.setValue(self._config.refresh_interval_s)

        apply_btn = QPushButton("Apply & Refresh")
        apply_btn.clicked.connect(self._on_apply_clicked)  # type: ignore[arg-type]

        feed_row = QHBoxLayout()
        feed_row.addWidget(QLabel("Feed"))
        feed_row.addWidget(self._url, 1)
        feed_row.addWidget(QLabel("Every"))
        feed_row.addWidget(self._interval)
        feed_row.addWidget(apply_btn)

        self._overview = OverviewPage(self._config.thresholds)

        central = QWidget()
        root = QVBoxLayout(central)
        root.addLayout(feed_row)
        root.addWidget(self._overview, 1)
        self.setCentralWidget(central)

        self.statusBar().showMessage("Ready")

        export_btn = QPushButton("Export Report")
        export_btn.clicked.connect(self._export_report)  # type: ignore[arg-type]
        self.statusBar().addPermanentWidget(export_btn)

        self._timer = QTimer(self)
        self._timer.setInterval(self._config.refresh_interval_s * 1000)
        self._timer.timeout.connect(self.refresh)  # type: ignore[arg-type]
        self._timer.start()

        self.refresh()

    def _build_collector(self, cfg: DashboardConfig) -> StatsFeedCollector:
        return StatsFeedCollector(source=cfg.feed_url, timeout_s=cfg.timeout_s)

    def _on_apply_clicked(self) -> None:
        url = self._url.text().strip() or self._config.feed_url
        self._config = replace(self._config, feed_url=url, refresh_interval_s=int(self._interval.value()))
        self._collector = self._build_collector(self._config)
        self._timer.setInterval(self._config.refresh_interval_s * 1000)
        try:
            self._config_service.save(self._config)
        except OSError as e:
            logger.warning("Failed to save config: %s", e)
            self._on_worker_error(self._req_id, f"config not saved: {e}")
            return
        self.statusBar().showMessage(
            f"Feed applied: {self._config.feed_url} every {self._config.refresh_interval_s}s"
        )
        self.refresh()

    def refresh(self) -> None:
        self._req_id += 1
        collector = self._collector

        def job() -> CollectorResult[FeedSnapshot]:
            return collector.collect()

        w = Worker(WorkerJob(req_id=self._req_id, fn=job))
        self._active_workers.add(w)
        w.signals.result.connect(self._on_feed_result)  # type: ignore[arg-type]
        w.signals.error.connect(self._on_worker_error)  # type: ignore[arg-type]
        w.signals.finished.connect(lambda _w=w: self._active_workers.discard(_w))  # type: ignore[arg-type]
        self._thread_pool.start(w)

    def _on_feed_result(self, req_id: int, res: Any) -> None:
        # a newer refresh supersedes this one
        if req_id != self._req_id:
            return
        if not isinstance(res, CollectorResult):
            return
        try:
            self._latest = res
            self._overview.set_data(res)
            self.statusBar().showMessage(
                f"Updated: {res.ts.strftime('%F %T')} | Status: {res.status} | Warnings: {res.warning_count}"
            )
        except Exception as e:  # noqa: BLE001
            logger.exception("Failed to render feed")
            self._on_worker_error(req_id, str(e))

    def _export_report(self) -> None:
        try:
            bundle = self._reporter.build_report(self._latest)
            out = self._reporter.default_report_path()
            written = self._reporter.write_html(out, bundle.html)
            self.statusBar().showMessage(f"Report exported: {written}")
        except OSError as e:
            self._on_worker_error(self._req_id, str(e))

    def _on_worker_error(self, req_id: int, msg: str) -> None:
        if req_id != self._req_id:
            return
        logger.error(msg)
        # Avoid frequent modal dialogs during periodic refresh.
        self.statusBar().showMessage(f"Error: {msg}")
