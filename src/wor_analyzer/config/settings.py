"""Parser configuration from environment variables or a JSON parsing config."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from wor_analyzer.config.regiment_patterns import (
    DEFAULT_REGIMENT_PATTERNS,
    KNOWN_STRATEGIES,
    RegimentPattern,
)

logger = logging.getLogger(__name__)

DEFAULT_IDLE_GAP_SECONDS = 300


@dataclass(frozen=True)
class ParserSettings:
    """Inputs the interpreter reads once, before parsing begins."""

    # Gap between respawns that starts a pseudo-round
    idle_gap_seconds: int = DEFAULT_IDLE_GAP_SECONDS
    # Ordered rule set; first match wins
    regiment_patterns: tuple[RegimentPattern, ...] = DEFAULT_REGIMENT_PATTERNS

    @classmethod
    def from_env(cls) -> ParserSettings:
        """Load settings from WOR_PARSING_CONFIG and WOR_IDLE_GAP_SECONDS.

        The idle gap from the environment overrides the one in the file.
        """
        config_path = os.environ.get("WOR_PARSING_CONFIG", "")
        settings = cls.from_file(config_path) if config_path else cls()

        idle_gap = os.environ.get("WOR_IDLE_GAP_SECONDS", "")
        if idle_gap:
            settings = cls(
                idle_gap_seconds=int(idle_gap),
                regiment_patterns=settings.regiment_patterns,
            )
        return settings

    @classmethod
    def from_file(cls, path: str) -> ParserSettings:
        """Load a JSON parsing config.

        Format: {"idleGapSeconds": 300, "regimentPatterns": [{"name": ...,
        "pattern": ..., "extractGroup": 1, "normalize": "removeSpaces"}]}.
        Missing keys fall back to the defaults.
        """
        with open(path, "r", encoding="utf-8") as f:
            doc = json.load(f)
        if not isinstance(doc, dict):
            raise ValueError(f"Parsing config must be a JSON object: {path}")

        patterns = DEFAULT_REGIMENT_PATTERNS
        raw_patterns = doc.get("regimentPatterns")
        if raw_patterns is not None:
            if not isinstance(raw_patterns, list):
                raise ValueError("regimentPatterns must be a list")
            patterns = tuple(_pattern_from_record(r, i) for i, r in enumerate(raw_patterns))

        idle_gap = int(doc.get("idleGapSeconds", DEFAULT_IDLE_GAP_SECONDS))

        logger.info(
            "Loaded parsing config %s (%d regiment rules, idle gap %ds)",
            Path(path).name,
            len(patterns),
            idle_gap,
        )
        return cls(idle_gap_seconds=idle_gap, regiment_patterns=patterns)

    def with_idle_gap(self, idle_gap_seconds: int) -> ParserSettings:
        return ParserSettings(
            idle_gap_seconds=idle_gap_seconds,
            regiment_patterns=self.regiment_patterns,
        )

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if settings are valid."""
        errors = []
        if self.idle_gap_seconds <= 0:
            errors.append(f"idleGapSeconds must be positive, got {self.idle_gap_seconds}")
        if not self.regiment_patterns:
            errors.append("regimentPatterns is empty")
        for rule in self.regiment_patterns:
            try:
                re.compile(rule.pattern)
            except re.error as e:
                errors.append(f"Rule '{rule.name}' has an invalid pattern: {e}")
            if rule.normalize is not None and rule.normalize not in KNOWN_STRATEGIES:
                errors.append(f"Rule '{rule.name}' uses unknown normalize '{rule.normalize}'")
        return errors


def resolve_settings(config_path: str = "", idle_gap_seconds: int = 0) -> ParserSettings:
    """Resolve parser settings from arguments, env vars, or defaults.

    Priority: explicit args > WOR_* env vars > built-in defaults.
    """
    settings = ParserSettings.from_file(config_path) if config_path else ParserSettings.from_env()
    if idle_gap_seconds:
        settings = settings.with_idle_gap(idle_gap_seconds)
    errors = settings.validate()
    if errors:
        raise ValueError("; ".join(errors))
    return settings


def _pattern_from_record(record: object, index: int) -> RegimentPattern:
    if not isinstance(record, dict) or "name" not in record or "pattern" not in record:
        raise ValueError(f"regimentPatterns[{index}] needs 'name' and 'pattern'")
    extract_group = record.get("extractGroup")
    return RegimentPattern(
        name=str(record["name"]),
        pattern=str(record["pattern"]),
        extract_group=int(extract_group) if extract_group is not None else None,
        normalize=record.get("normalize"),
        description=record.get("description", ""),
    )
