"""Shared test fixtures and sample log data."""

from __future__ import annotations

import pytest

from wor_analyzer.config.settings import ParserSettings
from wor_analyzer.engine.interpreter import LogInterpreter


# Real log line samples for unit testing
SAMPLE_LINES = {
    "init": "<00:00:05> [CWarOfRightsGame] Initialized",
    "init_bare": "[CWarOfRightsGame] Initialized",
    "game_rules": "<00:00:10> Game rules class: Skirmish",
    "map_change": "<00:00:20> PrepareLevel Antietam",
    "round_start": "<00:01:00> CGameRulesEventHelper::OnRoundStarted",
    "victory_usa": "<00:30:00> CGameRulesEventHelper::OnVictory TeamID: 1",
    "victory_csa": "<00:30:00> CGameRulesEventHelper::OnVictory TeamID: 0",
    "victory_no_team": "<00:30:00> CGameRulesEventHelper::OnVictory",
    "join": "<00:00:30> Player TestPlayer has joined the server",
    "leave": "<00:05:00> Player TestPlayer has left the server",
    "respawn": '<00:02:00> [CPlayer::ClDoRespawn] "10thVA.A Player1"',
    "respawn_clan": '<00:02:10> [CPlayer::ClDoRespawn] "CB[30thOH]Pvt.Smith"',
    "noise": "<00:00:40> [Net] Connection established",
    "no_timestamp": "Loading shaders...",
    "blank": "",
}


SAMPLE_LOG = "\n".join([
    "Engine booting",
    '<00:00:01> [CPlayer::ClDoRespawn] "10thVA.A Ghost"',
    "[CWarOfRightsGame] Initialized",
    "<00:00:10> Game rules class: Skirmish",
    "<00:00:20> PrepareLevel Antietam",
    "<00:00:30> Player TestPlayer has joined the server",
    "<00:01:00> CGameRulesEventHelper::OnRoundStarted",
    '<00:01:30> [CPlayer::ClDoRespawn] "10thVA.A Early"',
    '<00:02:00> [CPlayer::ClDoRespawn] "10thVA.A Player1"',
    '<00:02:30> [CPlayer::ClDoRespawn] "69thNY.B Player2"',
    '<00:03:00> [CPlayer::ClDoRespawn] "CB[30thOH]Pvt.Smith"',
    "<00:30:00> CGameRulesEventHelper::OnVictory TeamID: 1",
    "<00:31:00> PrepareLevel Harpers_Ferry",
    "<00:32:00> CGameRulesEventHelper::OnRoundStarted",
    '<00:33:30> [CPlayer::ClDoRespawn] "[1stSC] Rebel"',
    "<00:34:00> Player TestPlayer has left the server",
    '<00:45:00> [CPlayer::ClDoRespawn] "(7TH AR) Sharpshooter"',
    "",
])


@pytest.fixture
def sample_log():
    """Two-round log: one won by USA, one cut off by the idle gap and end of log."""
    return SAMPLE_LOG


@pytest.fixture
def sample_log_path(tmp_path):
    """Sample log written to a temporary file."""
    path = tmp_path / "server.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return str(path)


@pytest.fixture
def interpreter():
    """Interpreter with default settings, already reset."""
    interp = LogInterpreter(ParserSettings())
    interp.reset()
    return interp
