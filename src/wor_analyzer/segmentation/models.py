"""Data models for the segmentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

UNKNOWN_MAP = "Unknown Map"


class RoundStatus(Enum):
    INCOMPLETE = "Incomplete"
    COMPLETE = "Complete"
    PSEUDO = "Pseudo"


class Winner(Enum):
    USA = "USA"
    CSA = "CSA"
    UNKNOWN = "Unknown"


class SessionAction(Enum):
    JOIN = "join"
    LEAVE = "leave"


class WarningType(Enum):
    INCOMPLETE = "incomplete"
    PSEUDO = "pseudo"


# Team ids 1 and 2 both resolve to USA
TEAM_WINNERS = {
    0: Winner.CSA,
    1: Winner.USA,
    2: Winner.USA,
}


def winner_for_team(team_id: int) -> Winner:
    return TEAM_WINNERS.get(team_id, Winner.UNKNOWN)


@dataclass(frozen=True)
class LogEvent:
    """A recorded player respawn."""

    time: int  # seconds since midnight
    player: str  # display name as logged
    regiment: str
    round_id: int
    map: str


@dataclass
class Round:
    """One bounded engagement on a map."""

    id: int
    start_time: int
    map: str = UNKNOWN_MAP
    game_rules: Optional[str] = None
    status: RoundStatus = RoundStatus.INCOMPLETE
    end_time: Optional[int] = None
    winner: Optional[Winner] = None
    respawns: list[LogEvent] = field(default_factory=list)

    @property
    def is_closed(self) -> bool:
        return self.end_time is not None

    @property
    def duration(self) -> Optional[int]:
        if self.end_time is None:
            return None
        return self.end_time - self.start_time


@dataclass(frozen=True)
class PlayerSession:
    """A player joining or leaving the server."""

    player: str
    action: SessionAction
    time: int
    round_id: Optional[int] = None


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal structural anomaly. Append-only."""

    type: WarningType
    message: str


@dataclass
class ParseStats:
    """Summary counts derived from accumulated state."""

    total_respawns: int = 0
    total_rounds: int = 0
    maps: list[str] = field(default_factory=list)
    players: int = 0
    regiments: int = 0
