"""Tests for the log interpreter: batch parsing and incremental chunks."""

from __future__ import annotations

import pytest

from wor_analyzer.config.settings import ParserSettings
from wor_analyzer.engine import InterpreterStateError, LogInterpreter, parse_log
from wor_analyzer.segmentation.models import RoundStatus, SessionAction, WarningType, Winner


def _chunked(interpreter: LogInterpreter, text: str, size: int):
    results = [interpreter.process_chunk(text[i:i + size]) for i in range(0, len(text), size)]
    results.append(interpreter.finish())
    return results


class TestParseLog:
    """Test one-pass parsing of a complete log."""

    def test_sample_log(self, sample_log):
        result = parse_log(sample_log)

        assert [e.player for e in result.events] == [
            "10thVA.A Player1",
            "69thNY.B Player2",
            "CB[30thOH]Pvt.Smith",
            "[1stSC] Rebel",
            "(7TH AR) Sharpshooter",
        ]
        assert [e.regiment for e in result.events] == ["10thVA", "69thNY", "CB", "1stSC", "7thAR"]

        assert len(result.rounds) == 4
        first, second, third, fourth = result.rounds
        assert first.map == "Antietam"
        assert first.game_rules == "Skirmish"
        assert first.status == RoundStatus.COMPLETE
        assert first.winner == Winner.USA
        assert first.end_time == 1800
        assert len(first.respawns) == 3
        assert second.map == "Harpers_Ferry"
        assert second.status == RoundStatus.INCOMPLETE
        assert second.respawns == []
        assert third.status == RoundStatus.INCOMPLETE
        assert third.end_time == 2010
        assert fourth.status == RoundStatus.PSEUDO
        assert fourth.end_time is None

        assert [w.type for w in result.warnings] == [WarningType.PSEUDO, WarningType.PSEUDO]

        join, leave = result.player_sessions
        assert join.action == SessionAction.JOIN
        assert join.round_id is None
        assert leave.action == SessionAction.LEAVE
        assert leave.round_id == 3

    def test_stats(self, sample_log):
        stats = parse_log(sample_log).stats
        assert stats.total_respawns == 5
        assert stats.total_rounds == 4
        assert stats.maps == ["Antietam", "Unknown Map"]
        assert stats.players == 5
        assert stats.regiments == 5

    def test_empty_log(self):
        result = parse_log("")
        assert result.events == []
        assert result.rounds == []
        assert result.stats.total_rounds == 0

    def test_log_without_init_marker(self):
        text = "<00:01:00> CGameRulesEventHelper::OnRoundStarted\n" \
               '<00:02:00> [CPlayer::ClDoRespawn] "10thVA.A Player1"\n'
        result = parse_log(text)
        assert result.events == []
        assert result.rounds == []

    def test_crlf_line_endings(self, sample_log):
        assert parse_log(sample_log.replace("\n", "\r\n")) == parse_log(sample_log)

    def test_trailing_partial_line_processed(self):
        text = "[CWarOfRightsGame] Initialized\n" \
               '<00:02:00> [CPlayer::ClDoRespawn] "10thVA.A Player1"'
        assert len(parse_log(text).events) == 1

    def test_custom_idle_gap(self, sample_log):
        result = parse_log(sample_log, settings=ParserSettings(idle_gap_seconds=3600))
        assert [r.status for r in result.rounds] == [
            RoundStatus.COMPLETE,
            RoundStatus.INCOMPLETE,
        ]
        assert result.warnings[-1].message == "Round 2 ended without victory (end of log)"

    def test_progress_callback(self):
        calls = []
        parse_log("\n".join(["noise"] * 2500), on_progress=lambda cur, total: calls.append((cur, total)))
        assert calls == [(0, 2500), (1000, 2500), (2000, 2500), (2500, 2500)]

    def test_progress_callback_does_not_change_result(self, sample_log):
        assert parse_log(sample_log, on_progress=lambda cur, total: None) == parse_log(sample_log)


class TestLogInterpreter:
    """Test incremental chunk processing."""

    @pytest.mark.parametrize("size", [1, 2, 5, 13, 40, 97, 10_000])
    def test_chunk_invariance(self, sample_log, size):
        interpreter = LogInterpreter()
        interpreter.reset()
        _chunked(interpreter, sample_log, size)
        assert interpreter.get_state() == parse_log(sample_log)

    def test_uneven_fragments(self, sample_log):
        interpreter = LogInterpreter()
        interpreter.reset()
        cuts = [0, 3, 50, 51, 52, 200, 333, 334, len(sample_log)]
        for start, end in zip(cuts, cuts[1:]):
            interpreter.process_chunk(sample_log[start:end])
        interpreter.finish()
        assert interpreter.get_state() == parse_log(sample_log)

    def test_new_items_sum_to_totals(self, sample_log):
        interpreter = LogInterpreter()
        interpreter.reset()
        results = _chunked(interpreter, sample_log, 7)

        state = interpreter.get_state()
        assert [e for r in results for e in r.new_events] == state.events
        assert [w for r in results for w in r.new_warnings] == state.warnings
        assert [s for r in results for s in r.new_player_sessions] == state.player_sessions
        assert results[-1].total_events == len(state.events)
        assert results[-1].total_rounds == len(state.rounds)

    def test_respawn_split_mid_line(self, interpreter):
        interpreter.process_chunk("[CWarOfRightsGame] Initialized\n")
        interpreter.process_chunk("<00:01:00> CGameRulesEventHelper::OnRoundStarted\n")
        first = interpreter.process_chunk('<00:02:00> [CPlayer::ClDoRespawn] "10thVA')
        assert first.new_events == []
        second = interpreter.process_chunk('.A Player1"\n')
        assert len(second.new_events) == 1
        assert second.new_events[0].regiment == "10thVA"
        assert second.total_events == 1

    def test_chunk_reports_running_stats(self, interpreter):
        interpreter.process_chunk("[CWarOfRightsGame] Initialized\n")
        interpreter.process_chunk("<00:01:00> CGameRulesEventHelper::OnRoundStarted\n")
        interpreter.process_chunk('<00:02:00> [CPlayer::ClDoRespawn] "10thVA.A Player1"\n')
        result = interpreter.process_chunk('<00:02:30> [CPlayer::ClDoRespawn] "69thNY.B Player2"\n')
        assert result.stats.total_respawns == 2
        assert result.stats.regiments == 2
        assert result.total_rounds == 1

    def test_victory_chunk(self, interpreter):
        interpreter.process_chunk("[CWarOfRightsGame] Initialized\n")
        interpreter.process_chunk("<00:01:00> CGameRulesEventHelper::OnRoundStarted\n")
        interpreter.process_chunk("<00:30:00> CGameRulesEventHelper::OnVictory TeamID: 1\n")
        rnd = interpreter.get_state().rounds[0]
        assert rnd.status == RoundStatus.COMPLETE
        assert rnd.winner == Winner.USA

    def test_session_chunks(self, interpreter):
        interpreter.process_chunk("[CWarOfRightsGame] Initialized\n")
        joined = interpreter.process_chunk("<00:00:30> Player TestPlayer has joined the server\n")
        left = interpreter.process_chunk("<00:05:00> Player TestPlayer has left the server\n")
        assert joined.new_player_sessions[0].action == SessionAction.JOIN
        assert left.new_player_sessions[0].action == SessionAction.LEAVE

    def test_get_state_is_a_snapshot(self, interpreter):
        interpreter.process_chunk("[CWarOfRightsGame] Initialized\n")
        interpreter.process_chunk('<00:02:00> [CPlayer::ClDoRespawn] "10thVA.A Player1"\n')
        snapshot = interpreter.get_state()
        interpreter.process_chunk('<00:03:30> [CPlayer::ClDoRespawn] "69thNY.B Player2"\n')

        assert len(snapshot.events) == 1
        assert len(snapshot.rounds[0].respawns) == 1
        snapshot.rounds[0].respawns.clear()
        assert len(interpreter.get_state().rounds[0].respawns) == 2

    def test_reset_discards_state(self, interpreter, sample_log):
        interpreter.process_chunk(sample_log)
        interpreter.finish()
        interpreter.reset()

        state = interpreter.get_state()
        assert state.events == []
        assert state.rounds == []
        assert not interpreter.is_finished

        interpreter.process_chunk(sample_log)
        interpreter.finish()
        assert interpreter.get_state() == parse_log(sample_log)

    def test_reset_drops_pending_partial_line(self, interpreter):
        interpreter.process_chunk("[CWarOfRightsGame] Init")
        interpreter.reset()
        interpreter.process_chunk('ialized\n<00:02:00> [CPlayer::ClDoRespawn] "A"\n')
        assert interpreter.get_state().events == []

    def test_finish_is_idempotent(self, interpreter, sample_log):
        interpreter.process_chunk(sample_log)
        interpreter.finish()
        again = interpreter.finish()
        assert again.new_events == []
        assert again.new_warnings == []
        assert interpreter.get_state() == parse_log(sample_log)

    def test_independent_interpreters(self, sample_log):
        a = LogInterpreter()
        b = LogInterpreter()
        a.reset()
        b.reset()
        a.process_chunk(sample_log)
        assert b.get_state().events == []


class TestInterpreterState:
    """Test misuse of the interpreter lifecycle."""

    def test_process_before_reset(self):
        interpreter = LogInterpreter()
        assert not interpreter.is_ready
        with pytest.raises(InterpreterStateError):
            interpreter.process_chunk("[CWarOfRightsGame] Initialized\n")

    def test_get_state_before_reset(self):
        with pytest.raises(InterpreterStateError):
            LogInterpreter().get_state()

    def test_finish_before_reset(self):
        with pytest.raises(InterpreterStateError):
            LogInterpreter().finish()

    def test_process_after_finish(self, interpreter):
        interpreter.finish()
        assert interpreter.is_finished
        with pytest.raises(InterpreterStateError):
            interpreter.process_chunk("more\n")

    def test_feed_lines_with_pending_partial(self, interpreter):
        interpreter.process_chunk("partial")
        with pytest.raises(InterpreterStateError):
            interpreter.feed_lines(["line"])

    def test_state_error_is_runtime_error(self):
        assert issubclass(InterpreterStateError, RuntimeError)
