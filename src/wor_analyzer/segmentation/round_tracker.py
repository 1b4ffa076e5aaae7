"""Round lifecycle state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wor_analyzer.classification.regiment_classifier import RegimentClassifier
from wor_analyzer.ingestion.models import ParsedLine
from wor_analyzer.segmentation.models import (
    UNKNOWN_MAP,
    LogEvent,
    ParseWarning,
    PlayerSession,
    Round,
    RoundStatus,
    SessionAction,
    WarningType,
    winner_for_team,
)

# Respawns this soon after a round start are spill-over from the prior context
GRACE_WINDOW_SECONDS = 60


@dataclass
class LineOutcome:
    """What a single transition added to the accumulated state."""

    events: list[LogEvent] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
    sessions: list[PlayerSession] = field(default_factory=list)

    def extend(self, other: LineOutcome) -> None:
        self.events.extend(other.events)
        self.warnings.extend(other.warnings)
        self.sessions.extend(other.sessions)


class RoundStateMachine:
    """Tracks rounds, respawns, and player sessions for one log stream.

    Consumes ParsedLine objects in strict chronological order. The current
    round is held as an index into ``rounds``; rounds outlive their time as
    the current round.
    """

    def __init__(self, classifier: RegimentClassifier, idle_gap_seconds: int) -> None:
        self._classifier = classifier
        self._idle_gap = idle_gap_seconds
        self.reset()

    def reset(self) -> None:
        self.initialized = False
        self.round_counter = 0
        self.last_event_time: Optional[int] = None
        self.current_map: Optional[str] = None
        self.current_game_rules: Optional[str] = None
        self.events: list[LogEvent] = []
        self.rounds: list[Round] = []
        self.warnings: list[ParseWarning] = []
        self.sessions: list[PlayerSession] = []
        self._current_index: Optional[int] = None

    @property
    def current_round(self) -> Optional[Round]:
        if self._current_index is None:
            return None
        return self.rounds[self._current_index]

    def process_line(self, line: ParsedLine) -> LineOutcome:
        """Apply every transition the line triggers, in detector order."""
        outcome = LineOutcome()

        # Everything before the engine-initialized marker is ignored
        if not self.initialized:
            if line.is_init_marker:
                self.initialized = True
            return outcome

        if line.timestamp is None:
            return outcome
        ts = line.timestamp

        if line.game_rules is not None:
            self.current_game_rules = line.game_rules

        if line.map_name is not None:
            self._on_map_change(line.map_name, ts, outcome)

        if line.round_started:
            self._on_round_start(ts, outcome)

        if line.victory_team is not None:
            self._on_victory(line.victory_team, ts)

        if line.joined_player is not None:
            self._record_session(line.joined_player, SessionAction.JOIN, ts, outcome)

        if line.left_player is not None:
            self._record_session(line.left_player, SessionAction.LEAVE, ts, outcome)

        if line.respawn_player is not None:
            self._on_respawn(line.respawn_player, ts, outcome)

        return outcome

    def finish(self) -> LineOutcome:
        """End-of-stream transition: close a still-incomplete current round."""
        outcome = LineOutcome()
        current = self.current_round
        if current is not None and current.status == RoundStatus.INCOMPLETE:
            self._close_current(
                self._end_time_for(current, current.start_time),
                RoundStatus.INCOMPLETE,
                f"Round {current.id} ended without victory (end of log)",
                outcome,
            )
        return outcome

    # -- transitions -----------------------------------------------------

    def _on_map_change(self, new_map: str, ts: int, outcome: LineOutcome) -> None:
        current = self.current_round
        if current is not None:
            self._close_current(
                self._end_time_for(current, ts),
                RoundStatus.INCOMPLETE,
                f"Round {current.id} on {current.map} ended without victory (map change)",
                outcome,
            )
        self.current_map = new_map

    def _on_round_start(self, ts: int, outcome: LineOutcome) -> None:
        current = self.current_round
        if current is not None:
            self._close_current(
                self._end_time_for(current, ts),
                RoundStatus.INCOMPLETE,
                f"Round {current.id} ended without victory (new round started)",
                outcome,
            )
        self._open_round(ts, self.current_map or UNKNOWN_MAP, self.current_game_rules)

    def _on_victory(self, team_id: int, ts: int) -> None:
        current = self.current_round
        if current is None:
            return
        current.winner = winner_for_team(team_id)
        self._close_current(ts, RoundStatus.COMPLETE)

    def _record_session(
        self, player: str, action: SessionAction, ts: int, outcome: LineOutcome
    ) -> None:
        current = self.current_round
        session = PlayerSession(
            player=player,
            action=action,
            time=ts,
            round_id=current.id if current is not None else None,
        )
        self.sessions.append(session)
        outcome.sessions.append(session)

    def _on_respawn(self, player: str, ts: int, outcome: LineOutcome) -> None:
        regiment = self._classifier.classify(player)

        current = self.current_round
        if current is not None and ts - current.start_time < GRACE_WINDOW_SECONDS:
            return

        # Idle gap: synthesize a pseudo-round
        if self.last_event_time is not None and ts - self.last_event_time > self._idle_gap:
            if current is not None:
                self._close_current(
                    self._end_time_for(current, current.start_time), RoundStatus.INCOMPLETE
                )
            pseudo = self._open_round(ts, UNKNOWN_MAP, None, RoundStatus.PSEUDO)
            self._warn(
                WarningType.PSEUDO,
                f"Pseudo-round {pseudo.id} created after {self._idle_gap}s idle gap",
                outcome,
            )

        current = self.current_round
        if current is None:
            current = self._open_round(ts, self.current_map or UNKNOWN_MAP, self.current_game_rules)

        event = LogEvent(
            time=ts,
            player=player,
            regiment=regiment,
            round_id=current.id,
            map=current.map,
        )
        self.events.append(event)
        current.respawns.append(event)
        outcome.events.append(event)
        self.last_event_time = ts

    # -- helpers ---------------------------------------------------------

    def _end_time_for(self, current: Round, fallback: int) -> int:
        """Last respawn time if it falls inside the round, else the fallback."""
        if self.last_event_time is not None and self.last_event_time >= current.start_time:
            return self.last_event_time
        return fallback

    def _open_round(
        self,
        start_time: int,
        map_name: str,
        game_rules: Optional[str],
        status: RoundStatus = RoundStatus.INCOMPLETE,
    ) -> Round:
        self.round_counter += 1
        new_round = Round(
            id=self.round_counter,
            start_time=start_time,
            map=map_name,
            game_rules=game_rules,
            status=status,
        )
        self.rounds.append(new_round)
        self._current_index = len(self.rounds) - 1
        return new_round

    def _close_current(
        self,
        end_time: int,
        status: RoundStatus,
        warning: Optional[str] = None,
        outcome: Optional[LineOutcome] = None,
    ) -> None:
        current = self.current_round
        if current is None:
            return
        current.end_time = end_time
        current.status = status
        self._current_index = None
        if warning is not None and outcome is not None:
            self._warn(WarningType.INCOMPLETE, warning, outcome)

    def _warn(self, warning_type: WarningType, message: str, outcome: LineOutcome) -> None:
        warning = ParseWarning(type=warning_type, message=message)
        self.warnings.append(warning)
        outcome.warnings.append(warning)
