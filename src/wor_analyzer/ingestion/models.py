"""Data models for the ingestion layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ParsedLine:
    """Markers detected on a single complete log line."""

    raw: str
    timestamp: Optional[int] = None  # seconds since midnight
    is_init_marker: bool = False

    # Context updates
    game_rules: Optional[str] = None
    map_name: Optional[str] = None

    # Round lifecycle
    round_started: bool = False
    victory_team: Optional[int] = None

    # Player activity
    joined_player: Optional[str] = None
    left_player: Optional[str] = None
    respawn_player: Optional[str] = None

    @property
    def has_timestamp(self) -> bool:
        return self.timestamp is not None


@dataclass
class FileMetadata:
    """Metadata about a log file on disk."""

    file_path: str
    file_name: str
    file_size: int = 0
    line_count: int = 0
