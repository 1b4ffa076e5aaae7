"""Monitor configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from wor_analyzer.config.settings import ParserSettings


@dataclass
class MonitorConfig:
    """Configuration for live tailing of server logs."""

    # Log files to tail, each with its own interpreter
    log_files: list[str] = field(default_factory=list)
    # Seconds between file size checks
    poll_interval: float = 1.0
    # Replay existing content before following new writes
    from_start: bool = True
    parser: ParserSettings = field(default_factory=ParserSettings)

    @classmethod
    def from_env(cls) -> MonitorConfig:
        """Load configuration from environment variables."""
        raw_files = os.environ.get("WOR_LOG_FILES", "")
        return cls(
            log_files=[p.strip() for p in raw_files.split(",") if p.strip()],
            poll_interval=float(os.environ.get("WOR_POLL_INTERVAL", "1.0")),
            from_start=os.environ.get("WOR_FROM_START", "1") != "0",
            parser=ParserSettings.from_env(),
        )

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if config is valid."""
        errors = []
        if not self.log_files:
            errors.append("WOR_LOG_FILES is required")
        for path in self.log_files:
            if not Path(path).is_file():
                errors.append(f"Log file does not exist: {path}")
        if self.poll_interval <= 0:
            errors.append("WOR_POLL_INTERVAL must be positive")
        errors.extend(self.parser.validate())
        return errors
