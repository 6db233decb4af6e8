"""Ranked tiers, divisions and their display form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class RankedTier(IntEnum):
    UNRANKED = 0
    IRON = 1
    BRONZE = 2
    SILVER = 3
    GOLD = 4
    PLATINUM = 5
    EMERALD = 6
    DIAMOND = 7
    MASTER = 8
    GRANDMASTER = 9
    CHALLENGER = 10
    UNKNOWN = 11


_DIVISIONS = {"": 0, "NA": 0, "I": 1, "II": 2, "III": 3, "IV": 4, "V": 5}

_TIER_NAMES = {
    RankedTier.UNRANKED: "Unranked",
    RankedTier.IRON: "Iron",
    RankedTier.BRONZE: "Bronze",
    RankedTier.SILVER: "Silver",
    RankedTier.GOLD: "Gold",
    RankedTier.PLATINUM: "Platinum",
    RankedTier.EMERALD: "Emerald",
    RankedTier.DIAMOND: "Diamond",
    RankedTier.MASTER: "Master",
    RankedTier.GRANDMASTER: "Grandmaster",
    RankedTier.CHALLENGER: "Challenger",
    RankedTier.UNKNOWN: "Unranked",
}

# The client's tier strings; "IRON" is not part of this table.
_TIERS_BY_STRING = {
    "NONE": RankedTier.UNRANKED,
    "BRONZE": RankedTier.BRONZE,
    "SILVER": RankedTier.SILVER,
    "GOLD": RankedTier.GOLD,
    "PLATINUM": RankedTier.PLATINUM,
    "EMERALD": RankedTier.EMERALD,
    "DIAMOND": RankedTier.DIAMOND,
    "MASTER": RankedTier.MASTER,
    "GRANDMASTER": RankedTier.GRANDMASTER,
    "CHALLENGER": RankedTier.CHALLENGER,
}


def division_from_string(text: str) -> int:
    """Convert a roman-numeral division to its number.

    Raises ValueError for a string that is not a known division.
    """
    try:
        return _DIVISIONS[text]
    except KeyError:
        raise ValueError(f"unknown division: {text!r}") from None


def tier_name(tier: RankedTier) -> str:
    """Human-readable name of a tier."""
    return _TIER_NAMES[tier]


def tier_from_string(text: str) -> RankedTier:
    """Map the client's tier string to a tier; anything unknown is UNRANKED."""
    return _TIERS_BY_STRING.get(text, RankedTier.UNRANKED)


@dataclass(frozen=True)
class Ranking:
    """A player's position in a ranked queue."""

    tier: RankedTier = RankedTier.UNRANKED
    division: int = 0
    lp: int = 0

    def to_display_string(self) -> str:
        name = tier_name(self.tier)
        if self.tier == RankedTier.UNRANKED:
            return name
        if self.tier < RankedTier.MASTER:
            return f"{name}{self.division} ({self.lp}LP)"
        return f"{name} ({self.lp}LP)"

    def __str__(self) -> str:
        return self.to_display_string()