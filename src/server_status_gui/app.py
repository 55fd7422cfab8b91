from __future__ import annotations

import argparse
import faulthandler
import logging
import sys
from dataclasses import replace

from server_status_gui.collectors.stats_feed_collector import FeedError, StatsFeedCollector
from server_status_gui.services.config_service import ConfigService, DashboardConfig
from server_status_gui.services.report_service import ReportService

logger = logging.getLogger("server-status-gui")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="server-status-gui",
        description="Per-host disk usage dashboard for a stats.json feed",
    )
    parser.add_argument("--config", help="Path to config.json (default: XDG config dir)")
    parser.add_argument("--url", help="stats.json URL or local file path")
    parser.add_argument("--interval", type=int, help="Refresh interval in seconds")
    parser.add_argument("--export", metavar="PATH", help="Fetch once, write an HTML report to PATH and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def resolve_config(args: argparse.Namespace) -> tuple[ConfigService, DashboardConfig]:
    service = ConfigService(args.config)
    cfg = service.load()
    if args.url:
        cfg = replace(cfg, feed_url=args.url)
    if args.interval:
        cfg = replace(cfg, refresh_interval_s=max(1, int(args.interval)))
    return service, cfg


def export_report(cfg: DashboardConfig, path: str) -> int:
    collector = StatsFeedCollector(source=cfg.feed_url, timeout_s=cfg.timeout_s)
    try:
        result = collector.collect()
    except FeedError as e:
        logger.error("Export failed: %s", e)
        return 1

    reporter = ReportService(cfg.thresholds)
    bundle = reporter.build_report(result)
    written = reporter.write_html(path, bundle.html)
    logger.info("Report written to %s (%d hosts, %d warnings)", written, len(result.data.hosts), result.warning_count)
    return 0


def run(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    service, cfg = resolve_config(args)

    if args.export:
        raise SystemExit(export_report(cfg, args.export))

    faulthandler.enable()

    from PySide6.QtWidgets import QApplication

    from server_status_gui.gui.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Server Status")

    w = MainWindow(config_service=service, config=cfg)
    w.show()

    raise SystemExit(app.exec())


if __name__ == "__main__":
    run()
