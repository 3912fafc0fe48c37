"""Typed play and game records built from raw match data rows."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from ..constants import (
    COL_ASSIST_TYPE,
    COL_LOCATION,
    COL_MINUTE,
    COL_OUTCOME,
    COL_PHASE_OF_MATCH,
    COL_PLAY_CONTEXT,
    COL_PLAY_TYPE,
    COL_SHOT_ATTEMPT,
    COL_SHOT_DISTANCE,
    COL_SHOT_OUTCOME,
    COL_SUCCESS,
    COL_WIN_IMPACT,
    COL_XG,
    GOAL_MARKER,
    YES_MARKER,
)

_INT_PREFIX = re.compile(r"^\s*([+-]?[0-9]+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def parse_int_prefix(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer of ``value`` ("45'" -> 45, "12.7" -> 12)."""
    if not value:
        return None
    m = _INT_PREFIX.match(value)
    if not m:
        return None
    return int(m.group(1))


def parse_float_prefix(value: Optional[str]) -> Optional[float]:
    """Parse the leading decimal number of ``value``; None when absent or non-finite."""
    if not value:
        return None
    m = _FLOAT_PREFIX.match(value)
    if not m:
        return None
    try:
        parsed = float(m.group(1))
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def coerce_int(value: Optional[str], default: int = 0) -> int:
    parsed = parse_int_prefix(value)
    return default if parsed is None else parsed


def coerce_xg(value: Optional[str]) -> float:
    parsed = parse_float_prefix(value)
    return 0.0 if parsed is None else parsed


def coerce_distance(value: Optional[str]) -> Optional[int]:
    # blank and unparseable distances are both "unknown"
    return parse_int_prefix(value)


def is_shot_attempt(row: Mapping[str, str]) -> bool:
    return row.get(COL_SHOT_ATTEMPT, "") == YES_MARKER


def is_goal(row: Mapping[str, str]) -> bool:
    return row.get(COL_SHOT_OUTCOME, "") == GOAL_MARKER


def row_xg(row: Mapping[str, str]) -> float:
    return coerce_xg(row.get(COL_XG))


@dataclass(frozen=True)
class PlayEvent:
    """One play-by-play row with typed fields."""

    minute: int = 0
    play_type: str = ""
    shot_attempt: str = ""
    shot_distance: Optional[int] = None
    shot_outcome: str = ""
    xg: float = 0.0
    play_context: str = ""
    location: str = ""
    outcome: str = ""
    success: bool = False
    win_impact: int = 0
    assist_type: str = ""
    phase_of_match: str = ""

    @classmethod
    def from_record(cls, row: Mapping[str, str]) -> "PlayEvent":
        return cls(
            minute=coerce_int(row.get(COL_MINUTE)),
            play_type=row.get(COL_PLAY_TYPE, ""),
            shot_attempt=row.get(COL_SHOT_ATTEMPT, ""),
            shot_distance=coerce_distance(row.get(COL_SHOT_DISTANCE)),
            shot_outcome=row.get(COL_SHOT_OUTCOME, ""),
            xg=coerce_xg(row.get(COL_XG)),
            play_context=row.get(COL_PLAY_CONTEXT, ""),
            location=row.get(COL_LOCATION, ""),
            outcome=row.get(COL_OUTCOME, ""),
            success=row.get(COL_SUCCESS, "") == YES_MARKER,
            win_impact=coerce_int(row.get(COL_WIN_IMPACT)),
            assist_type=row.get(COL_ASSIST_TYPE, ""),
            phase_of_match=row.get(COL_PHASE_OF_MATCH, ""),
        )

    @property
    def is_shot_attempt(self) -> bool:
        return self.shot_attempt == YES_MARKER

    @property
    def is_goal(self) -> bool:
        return self.shot_outcome == GOAL_MARKER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minute": self.minute,
            "playType": self.play_type,
            "shotAttempt": self.shot_attempt,
            "shotDistance": self.shot_distance,
            "shotOutcome": self.shot_outcome,
            "xG": self.xg,
            "playContext": self.play_context,
            "location": self.location,
            "outcome": self.outcome,
            "success": self.success,
            "winImpact": self.win_impact,
            "assistType": self.assist_type,
            "phaseOfMatch": self.phase_of_match,
        }


@dataclass(frozen=True)
class Game:
    game_id: str
    opponent: str
    date: str
    season: str
    plays: Tuple[PlayEvent, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gameId": self.game_id,
            "opponent": self.opponent,
            "date": self.date,
            "season": self.season,
            "plays": [play.to_dict() for play in self.plays],
        }


__all__ = [
    "Game",
    "PlayEvent",
    "coerce_distance",
    "coerce_int",
    "coerce_xg",
    "is_goal",
    "is_shot_attempt",
    "parse_float_prefix",
    "parse_int_prefix",
    "row_xg",
]
