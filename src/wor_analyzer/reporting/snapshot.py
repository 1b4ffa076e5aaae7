"""JSON-ready rendering of parse results for downstream consumers."""

from __future__ import annotations

from typing import Optional

from wor_analyzer.engine.interpreter import ChunkResult, ParseResult
from wor_analyzer.segmentation.models import (
    LogEvent,
    ParseStats,
    ParseWarning,
    PlayerSession,
    Round,
)


def format_clock(seconds: Optional[int]) -> str:
    """Render seconds since midnight as HH:MM:SS."""
    if seconds is None:
        return "-"
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def event_to_dict(event: LogEvent) -> dict:
    return {
        "time": event.time,
        "player": event.player,
        "regiment": event.regiment,
        "roundId": event.round_id,
        "map": event.map,
    }


def round_to_dict(rnd: Round) -> dict:
    return {
        "id": rnd.id,
        "startTime": rnd.start_time,
        "endTime": rnd.end_time,
        "map": rnd.map,
        "gameRules": rnd.game_rules,
        "status": rnd.status.value,
        "winner": rnd.winner.value if rnd.winner is not None else None,
        "respawns": [event_to_dict(e) for e in rnd.respawns],
    }


def warning_to_dict(warning: ParseWarning) -> dict:
    return {"type": warning.type.value, "message": warning.message}


def session_to_dict(session: PlayerSession) -> dict:
    return {
        "player": session.player,
        "action": session.action.value,
        "time": session.time,
        "roundId": session.round_id,
    }


def stats_to_dict(stats: ParseStats) -> dict:
    return {
        "totalRespawns": stats.total_respawns,
        "totalRounds": stats.total_rounds,
        "maps": list(stats.maps),
        "players": stats.players,
        "regiments": stats.regiments,
    }


def result_to_dict(result: ParseResult) -> dict:
    """Render a snapshot as {events, rounds, warnings, playerSessions, stats}."""
    return {
        "events": [event_to_dict(e) for e in result.events],
        "rounds": [round_to_dict(r) for r in result.rounds],
        "warnings": [warning_to_dict(w) for w in result.warnings],
        "playerSessions": [session_to_dict(s) for s in result.player_sessions],
        "stats": stats_to_dict(result.stats),
    }


def chunk_result_to_dict(result: ChunkResult) -> dict:
    return {
        "newEvents": [event_to_dict(e) for e in result.new_events],
        "newWarnings": [warning_to_dict(w) for w in result.new_warnings],
        "newPlayerSessions": [session_to_dict(s) for s in result.new_player_sessions],
        "stats": stats_to_dict(result.stats),
        "totalEvents": result.total_events,
        "totalRounds": result.total_rounds,
    }
