"""Live log monitor entry point.

Usage: python -m wor_analyzer.monitor

Tails War of Rights server logs and reports respawns and round warnings
as they are written. Configure via environment variables:
    WOR_LOG_FILES         - Comma-separated log files to tail
    WOR_POLL_INTERVAL     - Seconds between file checks (default: 1.0)
    WOR_FROM_START        - 1 to replay existing content first, 0 to follow only (default: 1)
    WOR_PARSING_CONFIG    - Optional JSON parsing config (regiment rules, idle gap)
    WOR_IDLE_GAP_SECONDS  - Idle gap before a pseudo-round (default: 300)
"""

from __future__ import annotations

import logging
import signal
import sys
import time

from wor_analyzer.engine.interpreter import ChunkResult, LogInterpreter
from wor_analyzer.monitor.config import MonitorConfig
from wor_analyzer.monitor.tailer import LogTailer
from wor_analyzer.reporting.snapshot import format_clock

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("wor_monitor")


def main() -> None:
    config = MonitorConfig.from_env()
    errors = config.validate()
    if errors:
        for err in errors:
            logger.error("Config error: %s", err)
        sys.exit(1)

    logger.info(
        "Monitoring %d log file(s), poll=%.1fs, idle gap=%ds",
        len(config.log_files),
        config.poll_interval,
        config.parser.idle_gap_seconds,
    )

    # One interpreter per stream; nothing is shared between them
    tailers = [
        LogTailer(path, LogInterpreter(config.parser), from_start=config.from_start)
        for path in config.log_files
    ]
    for tailer in tailers:
        tailer.start()

    def report(tailer: LogTailer, result: ChunkResult) -> None:
        name = tailer.path.name
        for event in result.new_events:
            logger.info(
                "[%s] %s respawn %s (%s) round %d",
                name,
                format_clock(event.time),
                event.player,
                event.regiment,
                event.round_id,
            )
        for warning in result.new_warnings:
            logger.warning("[%s] %s", name, warning.message)
        if result.new_events or result.new_warnings:
            logger.info(
                "[%s] totals: %d respawns, %d rounds",
                name,
                result.total_events,
                result.total_rounds,
            )

    running = True

    # Handle graceful shutdown
    def shutdown(sig, frame):
        nonlocal running
        logger.info("Shutting down...")
        running = False

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    while running:
        for tailer in tailers:
            try:
                result = tailer.poll_once()
                if result is not None:
                    report(tailer, result)
            except OSError as e:
                logger.error("Error reading %s: %s", tailer.path, e)
        time.sleep(config.poll_interval)

    logger.info("Monitor stopped.")


if __name__ == "__main__":
    main()
