"""Default regiment rule set, in priority order.

The first rule whose pattern matches a player name wins. Clan rules and the
more specific wrapper rules must stay ahead of the generic bracket/brace
rules, otherwise clan-tagged names fall through to regiment extraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Normalization strategies that replace the captured text with a clan code
CLAN_CODES: dict[str, str] = {
    "extractCB": "CB",
    "extractCQB": "CQB",
    "extractTKO": "TKO",
    "extractJD": "JD",
    "extractV": "V",
}

TRANSFORMS = (
    "removeSpaces",
    "removeDash",
    "removeDotSuffix",
    "cleanCompanySuffix",
    "truncateState",
)

KNOWN_STRATEGIES = frozenset(TRANSFORMS) | frozenset(CLAN_CODES)


@dataclass(frozen=True)
class RegimentPattern:
    name: str
    pattern: str
    extract_group: Optional[int] = None  # None -> group 1, 0 -> whole match
    normalize: Optional[str] = None
    description: str = ""

    @property
    def clan_code(self) -> Optional[str]:
        if self.normalize is None:
            return None
        return CLAN_CODES.get(self.normalize)


DEFAULT_REGIMENT_PATTERNS: tuple[RegimentPattern, ...] = (
    # Clan prefixes (highest priority)
    RegimentPattern(
        name="CB Clan with Brackets",
        pattern=r"^CB\s*[\[\{]([^\]\}]+)[\]\}]",
        extract_group=0,
        normalize="extractCB",
        description="CB clan ahead of a bracketed regiment, e.g. CB[30thOH], CB {30thOH}",
    ),
    RegimentPattern(
        name="CB Clan Delimited",
        pattern=r"^CB\s*[_|]",
        extract_group=0,
        normalize="extractCB",
        description="CB clan with underscore or pipe, e.g. CB_8ThOhio_Pv2, CB|Player",
    ),
    RegimentPattern(
        name="CQB Clan",
        pattern=r"^CQB\s*[\[\{_|]",
        extract_group=0,
        normalize="extractCQB",
    ),
    RegimentPattern(
        name="TKO Clan",
        pattern=r"^TKO\s*[\[\{_|]",
        extract_group=0,
        normalize="extractTKO",
    ),
    RegimentPattern(
        name="JD Clan",
        pattern=r"^JD\s*[\[\{_|]",
        extract_group=0,
        normalize="extractJD",
    ),
    RegimentPattern(
        name="V Clan Delimited",
        pattern=r"^V\s*[_|]",
        extract_group=0,
        normalize="extractV",
        description="V-[regiment] is left to the wrapper rules",
    ),
    # Regiment inside a wrapper, allowing a space before the state
    RegimentPattern(
        name="Brackets with Spaces",
        pattern=r"\[([0-9]+(?:st|nd|rd|th)?\s*[A-Za-z]{2,4})(?:\s+[A-Za-z]{2,4})?\]",
        normalize="removeSpaces",
        description="e.g. [65th IL], [1stSC]",
    ),
    RegimentPattern(
        name="Braces with Spaces",
        pattern=r"\{([0-9]+(?:st|nd|rd|th)?\s*[A-Za-z]{2,4})(?:\s+[A-Za-z]{2,4})?\}",
        normalize="removeSpaces",
        description="e.g. PVT {65th IL} Fire Truck",
    ),
    RegimentPattern(
        name="Dashed Regiment in Wrapper",
        pattern=r"[\[\{\(]([0-9]+(?:st|nd|rd|th)?\s*-\s*[A-Za-z]{2,4})[\]\}\)]",
        normalize="removeDash",
        description="e.g. V-[65th-IL]PVT.Dman",
    ),
    RegimentPattern(
        name="Leading Parentheses",
        pattern=r"^\(([^)]+)\)",
        normalize="cleanCompanySuffix",
        description="e.g. (7TH AR) CCSPC VooDoo, (6thAR.WA)OrdSgt",
    ),
    RegimentPattern(
        name="Prefix Before Any Wrapper",
        pattern=r"^([A-Za-z]{2,4})\s*-?\s*[\[\{\(][^\]\}\)]+[\]\}\)]",
        extract_group=1,
    ),
    # Generic wrappers
    RegimentPattern(
        name="Square Brackets (Generic)",
        pattern=r"\[([^\]]+)\]",
        normalize="cleanCompanySuffix",
        description="Leftmost [] token",
    ),
    RegimentPattern(
        name="Curly Braces (Generic)",
        pattern=r"\{([^}]+)\}",
        normalize="cleanCompanySuffix",
        description="Leftmost {} token",
    ),
    # Unwrapped formats
    RegimentPattern(
        name="Dotted Company Prefix",
        pattern=r"^([0-9]+(?:st|nd|rd|th)[A-Za-z]{2,4}(?:\.[A-Za-z]{1,3})?)\b",
        normalize="removeDotSuffix",
        description="e.g. 10thVA.A Player1",
    ),
    RegimentPattern(
        name="Underscore Delimiter",
        pattern=r"^([A-Z]+)_([0-9]+(?:st|nd|rd|th)?[A-Z]+)",
        extract_group=2,
        normalize="truncateState",
        description="e.g. GR_8ThOhio_Pvt -> 8thOH",
    ),
)
