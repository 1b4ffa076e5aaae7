"""Summary statistics, recomputed from accumulated state on every request."""

from __future__ import annotations

from typing import Sequence

from wor_analyzer.segmentation.models import LogEvent, ParseStats, Round


def compute_stats(events: Sequence[LogEvent], rounds: Sequence[Round]) -> ParseStats:
    """Count respawns, rounds, and distinct maps/players/regiments.

    Maps come from recorded respawns, in order of first appearance.
    """
    maps = list(dict.fromkeys(e.map for e in events))
    return ParseStats(
        total_respawns=len(events),
        total_rounds=len(rounds),
        maps=maps,
        players=len({e.player for e in events}),
        regiments=len({e.regiment for e in events}),
    )
