"""Log interpretation engine: one state machine for batch and incremental parsing."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from wor_analyzer.classification.regiment_classifier import RegimentClassifier
from wor_analyzer.config.settings import ParserSettings
from wor_analyzer.ingestion.chunk_buffer import ChunkReassembler
from wor_analyzer.ingestion.parser import LineParser
from wor_analyzer.segmentation.models import (
    LogEvent,
    ParseStats,
    ParseWarning,
    PlayerSession,
    Round,
)
from wor_analyzer.segmentation.round_tracker import LineOutcome, RoundStateMachine
from wor_analyzer.segmentation.stats import compute_stats

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1000

ProgressCallback = Callable[[int, int], None]


class InterpreterStateError(RuntimeError):
    """Raised when the interpreter is used without a valid stream state."""


@dataclass
class ChunkResult:
    """What one submitted chunk added, plus running totals."""

    new_events: list[LogEvent] = field(default_factory=list)
    new_warnings: list[ParseWarning] = field(default_factory=list)
    new_player_sessions: list[PlayerSession] = field(default_factory=list)
    stats: ParseStats = field(default_factory=ParseStats)
    total_events: int = 0
    total_rounds: int = 0


@dataclass
class ParseResult:
    """Snapshot of everything accumulated for a stream."""

    events: list[LogEvent] = field(default_factory=list)
    rounds: list[Round] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
    player_sessions: list[PlayerSession] = field(default_factory=list)
    stats: ParseStats = field(default_factory=ParseStats)


class LogInterpreter:
    """Incremental interpreter for one monitored log stream.

    Call reset() before submitting chunks. Chunks must arrive in stream
    order from a single caller; independent streams need independent
    interpreters. finish() marks the end of the stream.
    """

    def __init__(self, settings: Optional[ParserSettings] = None) -> None:
        self.settings = settings or ParserSettings()
        self._classifier = RegimentClassifier(self.settings.regiment_patterns)
        self._line_parser = LineParser()
        self._reassembler: Optional[ChunkReassembler] = None
        self._machine: Optional[RoundStateMachine] = None
        self._finished = False

    @property
    def is_ready(self) -> bool:
        return self._machine is not None

    @property
    def is_finished(self) -> bool:
        return self._finished

    def reset(self) -> None:
        """Discard all accumulated state and start a new stream."""
        self._reassembler = ChunkReassembler()
        self._machine = RoundStateMachine(self._classifier, self.settings.idle_gap_seconds)
        self._finished = False
        logger.debug("Interpreter reset (idle gap %ds)", self.settings.idle_gap_seconds)

    def process_chunk(self, text: str) -> ChunkResult:
        """Consume an arbitrary text fragment of the stream."""
        machine = self._require_machine()
        if self._finished:
            raise InterpreterStateError("Stream already finished; call reset() first")
        outcome = self._dispatch(self._reassembler.feed(text))
        return self._chunk_result(machine, outcome)

    def finish(self) -> ChunkResult:
        """Flush the trailing partial line and apply the end-of-stream transition."""
        machine = self._require_machine()
        if self._finished:
            return self._chunk_result(machine, LineOutcome())
        outcome = self._dispatch(self._reassembler.flush())
        outcome.extend(machine.finish())
        self._finished = True
        logger.debug(
            "Stream finished: %d respawns in %d rounds",
            len(machine.events),
            len(machine.rounds),
        )
        return self._chunk_result(machine, outcome)

    def get_state(self) -> ParseResult:
        """Return a snapshot decoupled from the live state."""
        machine = self._require_machine()
        return ParseResult(
            events=list(machine.events),
            rounds=[dataclasses.replace(r, respawns=list(r.respawns)) for r in machine.rounds],
            warnings=list(machine.warnings),
            player_sessions=list(machine.sessions),
            stats=compute_stats(machine.events, machine.rounds),
        )

    def feed_lines(
        self,
        lines: list[str],
        on_progress: Optional[ProgressCallback] = None,
    ) -> LineOutcome:
        """Dispatch already-complete lines, bypassing the reassembler."""
        self._require_machine()
        if self._finished:
            raise InterpreterStateError("Stream already finished; call reset() first")
        if self._reassembler.pending:
            raise InterpreterStateError("A partial line is buffered; submit the rest with process_chunk()")
        total = len(lines)
        outcome = LineOutcome()
        for i, line in enumerate(lines):
            if on_progress is not None and i % PROGRESS_INTERVAL == 0:
                on_progress(i, total)
            outcome.extend(self._dispatch((line,)))
        if on_progress is not None:
            on_progress(total, total)
        return outcome

    def _dispatch(self, lines: Iterable[str]) -> LineOutcome:
        outcome = LineOutcome()
        for raw in lines:
            parsed = self._line_parser.parse_line(raw)
            if parsed is None:
                continue
            outcome.extend(self._machine.process_line(parsed))
        return outcome

    def _require_machine(self) -> RoundStateMachine:
        if self._machine is None:
            raise InterpreterStateError("Interpreter has no stream state; call reset() first")
        return self._machine

    @staticmethod
    def _chunk_result(machine: RoundStateMachine, outcome: LineOutcome) -> ChunkResult:
        return ChunkResult(
            new_events=outcome.events,
            new_warnings=outcome.warnings,
            new_player_sessions=outcome.sessions,
            stats=compute_stats(machine.events, machine.rounds),
            total_events=len(machine.events),
            total_rounds=len(machine.rounds),
        )


def parse_log(
    text: str,
    on_progress: Optional[ProgressCallback] = None,
    settings: Optional[ParserSettings] = None,
) -> ParseResult:
    """Parse a complete log in one pass.

    Produces the same result as feeding the text through process_chunk in
    any fragmentation followed by finish(). The progress callback is purely
    observational.
    """
    interpreter = LogInterpreter(settings)
    interpreter.reset()
    interpreter.feed_lines(text.split("\n"), on_progress=on_progress)
    interpreter.finish()
    return interpreter.get_state()
