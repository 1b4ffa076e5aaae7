"""Line-level parser for War of Rights server logs."""

from __future__ import annotations

import re
from typing import Optional

from wor_analyzer.ingestion.models import ParsedLine

# In-line clock token: <HH:MM:SS>
TIMESTAMP_PATTERN = re.compile(r"<(\d{2}):(\d{2}):(\d{2})>")

# Nothing before this marker belongs to a playable session
INIT_MARKER = "[CWarOfRightsGame] Initialized"

ROUND_START_MARKER = "CGameRulesEventHelper::OnRoundStarted"
VICTORY_MARKER = "CGameRulesEventHelper::OnVictory"

PATTERNS = {
    "game_rules": re.compile(r"Game rules class:\s*(\w+)"),
    "map_change": re.compile(r"PrepareLevel\s+(\w+)"),
    "victory_team": re.compile(r"TeamID:\s*(\d+)"),
    "join": re.compile(r"Player (.+?) has joined the server"),
    "leave": re.compile(r"Player (.+?) has left the server"),
    # [CPlayer::ClDoRespawn] "10thVA.A Player1"
    "respawn": re.compile(r"\[CPlayer::ClDoRespawn\]\s+\"([^\"]+)\""),
}


def parse_timestamp(line: str) -> Optional[int]:
    """Return the embedded clock token as seconds since midnight.

    Hours and minutes are not range checked; ``<25:61:00>`` is accepted
    numerically. Returns None when the line carries no clock token.
    """
    m = TIMESTAMP_PATTERN.search(line)
    if not m:
        return None
    hours, minutes, seconds = (int(g) for g in m.groups())
    return hours * 3600 + minutes * 60 + seconds


class LineParser:
    """Detects timestamps and game markers on individual log lines."""

    def parse_line(self, raw: str) -> Optional[ParsedLine]:
        """Parse a single complete log line.

        Returns a ParsedLine for the initialization marker or any line with a
        clock token, or None for blank/unrecognized lines.
        """
        line = raw.rstrip("\n\r")
        if not line.strip():
            return None

        is_init = INIT_MARKER in line
        timestamp = parse_timestamp(line)
        if timestamp is None and not is_init:
            return None

        parsed = ParsedLine(raw=line, timestamp=timestamp, is_init_marker=is_init)

        m = PATTERNS["game_rules"].search(line)
        if m:
            parsed.game_rules = m.group(1)

        m = PATTERNS["map_change"].search(line)
        if m:
            parsed.map_name = m.group(1)

        if ROUND_START_MARKER in line:
            parsed.round_started = True

        # A victory marker without a team id is ignored
        if VICTORY_MARKER in line:
            m = PATTERNS["victory_team"].search(line)
            if m:
                parsed.victory_team = int(m.group(1))

        m = PATTERNS["join"].search(line)
        if m:
            parsed.joined_player = m.group(1)

        m = PATTERNS["leave"].search(line)
        if m:
            parsed.left_player = m.group(1)

        m = PATTERNS["respawn"].search(line)
        if m:
            parsed.respawn_player = m.group(1)

        return parsed
