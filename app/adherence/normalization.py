"""
Label normalisation.

Older sessions and plans use labels that were later renamed.  Both the
plan side and the session side pass every type and area label through
:func:`normalize_label` so that synonyms land on the same hierarchical key.
"""

from __future__ import annotations

# Canonical labels
RALLY = "Rally"
BASKETS = "Baskets"
BASE_GAME = "Base game"
NET_GAME = "Net game"
FIRST_BALLS = "First balls"
POINTS = "Points"

# Lower-cased label -> canonical label.
_SYNONYMS: dict[str, str] = {
    # Types
    "live ball": RALLY,
    "rally": RALLY,
    "baskets": BASKETS,
    # Areas
    "baseline": BASE_GAME,
    "baseline work": BASE_GAME,
    "base game": BASE_GAME,
    "net game": NET_GAME,
    "first balls": FIRST_BALLS,
    "points": POINTS,
}


def normalize_label(label: str) -> str:
    """Return the canonical spelling of a type or area label.

    Matching is case-insensitive and ignores surrounding whitespace.
    Unknown labels are returned unchanged.
    """
    if not label:
        return label
    return _SYNONYMS.get(" ".join(label.split()).lower(), label)
