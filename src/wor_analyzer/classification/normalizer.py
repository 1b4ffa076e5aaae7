"""Canonicalizes raw regiment tokens captured from player names."""

from __future__ import annotations

import re
from typing import Optional

# Trailing company designators: "10thVA.A", "10thVA.A*", "10thUS C"
COMPANY_DOT_SUFFIX = re.compile(r"\.[A-Z](\*)?$", re.IGNORECASE)
TRAILING_ASTERISKS = re.compile(r"\*+$")
COMPANY_LETTER_SUFFIX = re.compile(r"\s+[A-Z](\*)?$", re.IGNORECASE)

WHITESPACE = re.compile(r"\s+")

# Removed in order, each at most once
KNOWN_COMPANY_SUFFIXES = [
    re.compile(r"\.CAV$", re.IGNORECASE),
    re.compile(r"\.WA$", re.IGNORECASE),
    re.compile(r"\.\(LB\)$", re.IGNORECASE),
    re.compile(r"\(LB\)$", re.IGNORECASE),
    re.compile(r"\{[A-Z]\}$", re.IGNORECASE),
    re.compile(r"\{[A-Z]{2}\}$", re.IGNORECASE),
    re.compile(r"\[[A-Z]\]$", re.IGNORECASE),
    re.compile(r"\.[A-Z]{1,3}$", re.IGNORECASE),
]

# "8ThOhio" -> "8ThOH"; two-letter state codes such as "8thOH" are left alone
TRAILING_STATE_NAME = re.compile(r"^(\d+(?:st|nd|rd|th)?)([a-z]+)$", re.IGNORECASE)

ORDINAL = re.compile(r"(\d+)(ST|ND|RD|TH)")


def _remove_dot_suffix(token: str) -> str:
    return token.split(".", 1)[0]


def _clean_company_suffix(token: str) -> str:
    for pattern in KNOWN_COMPANY_SUFFIXES:
        token = pattern.sub("", token)
    return token


def _truncate_state(token: str) -> str:
    m = TRAILING_STATE_NAME.match(token)
    if m is None or len(m.group(2)) < 3:
        return token
    return m.group(1) + m.group(2)[:2].upper()


TRANSFORM_FUNCS = {
    "removeSpaces": lambda token: WHITESPACE.sub("", token),
    "removeDash": lambda token: token.replace("-", ""),
    "removeDotSuffix": _remove_dot_suffix,
    "cleanCompanySuffix": _clean_company_suffix,
    "truncateState": _truncate_state,
}


def normalize_regiment(token: str, strategy: Optional[str] = None) -> str:
    """Canonicalize a raw regiment token.

    Strips company designators, applies the rule's named transform, removes
    whitespace, uppercases, and lowercases ordinal suffixes:
    ``"30th OH"`` -> ``"30thOH"``. Unknown strategies apply no transform.
    Already canonical tags come back unchanged.
    """
    token = COMPANY_DOT_SUFFIX.sub("", token)
    token = TRAILING_ASTERISKS.sub("", token)
    token = COMPANY_LETTER_SUFFIX.sub("", token)

    transform = TRANSFORM_FUNCS.get(strategy) if strategy else None
    if transform is not None:
        token = transform(token)

    token = WHITESPACE.sub("", token)
    token = token.upper()
    token = ORDINAL.sub(lambda m: m.group(1) + m.group(2).lower(), token)
    return token.strip()
