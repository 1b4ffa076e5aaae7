"""Ordered-rule regiment classifier for player display names."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from wor_analyzer.classification.normalizer import normalize_regiment
from wor_analyzer.config.regiment_patterns import DEFAULT_REGIMENT_PATTERNS, RegimentPattern

UNCATEGORIZED = "Uncategorized"


class RegimentClassifier:
    """Maps a raw player name to a canonical regiment tag.

    Rules are compiled once and scanned linearly; the first matching rule
    wins and later rules are never tried.
    """

    def __init__(self, patterns: Iterable[RegimentPattern] = DEFAULT_REGIMENT_PATTERNS) -> None:
        self._rules: tuple[tuple[RegimentPattern, re.Pattern], ...] = tuple(
            (rule, _compile(rule)) for rule in patterns
        )

    @property
    def rules(self) -> tuple[RegimentPattern, ...]:
        return tuple(rule for rule, _ in self._rules)

    def classify(self, player_name: str) -> str:
        """Return the canonical regiment for a name, or 'Uncategorized'."""
        match = self.match_rule(player_name)
        if match is None:
            return UNCATEGORIZED
        rule, m = match

        token = rule.clan_code or _extract_token(m, rule.extract_group)
        if not token:
            return UNCATEGORIZED
        return normalize_regiment(token, rule.normalize) or UNCATEGORIZED

    def match_rule(self, player_name: str) -> Optional[tuple[RegimentPattern, re.Match]]:
        """Return the first rule matching the name with its match object."""
        for rule, regex in self._rules:
            m = regex.search(player_name)
            if m:
                return rule, m
        return None


def _compile(rule: RegimentPattern) -> re.Pattern:
    try:
        return re.compile(rule.pattern, re.IGNORECASE)
    except re.error as e:
        raise ValueError(f"Invalid pattern for regiment rule '{rule.name}': {e}") from e


def _extract_token(m: re.Match, extract_group: Optional[int]) -> str:
    group = 1 if extract_group is None else extract_group
    if group > m.re.groups:
        group = 1 if m.re.groups >= 1 else 0
    token = (m.group(group) or "").strip()
    if not token and m.re.groups >= 1:
        token = (m.group(1) or "").strip()
    return token
