"""
Aggregation of play-by-play match data into the dashboard views.

Every function here is pure apart from the diagnostics it writes to the
supplied logger: the result depends only on the records passed in.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import setup_logger
from .constants import (
    COL_DATE,
    COL_GAME_ID,
    COL_LOCATION,
    COL_OPPONENT,
    COL_PLAY_TYPE,
    COL_SEASON,
    GAME_REQUIRED_COLUMNS,
)
from .domain.contracts import (
    ComprehensiveData,
    GoalEvent,
    KeyStats,
    PlayTypeEntry,
    ShotMapEntry,
    TeamComparisonEntry,
)
from .domain.plays import Game, PlayEvent, is_goal, is_shot_attempt, row_xg
from .errors import AggregationError
from .tabular_loader import Record, parse_delimited

_logger = setup_logger(__name__)

REQUIRED_RESULT_KEYS = ("goalsTimeline", "games")
_DECIMAL_ID = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def _percent(numerator: float, denominator: float) -> float:
    return (numerator / denominator) * 100 if denominator else 0.0


def _numeric_id(value: str) -> Optional[float]:
    # plain decimal notation only; "nan", "inf" and "1_000" are not numbers here
    if not _DECIMAL_ID.fullmatch(value.strip()):
        return None
    parsed = float(value)
    return parsed if math.isfinite(parsed) else None


# ---------------------------------------------------------------------------
# Stage 1: keys
# ---------------------------------------------------------------------------

def extract_keys(records: Iterable[Record]) -> Tuple[List[str], List[str]]:
    """
    Return (game_ids, opponents) in one pass.

    Game ids are ordered by numeric value; ids that are not numbers keep
    their first-seen order after the numeric ones. Opponents are the
    non-empty names in first-seen order.
    """
    seen_ids: Dict[str, None] = {}
    seen_opponents: Dict[str, None] = {}
    for row in records:
        seen_ids.setdefault(row.get(COL_GAME_ID, ""), None)
        opponent = row.get(COL_OPPONENT, "")
        if opponent:
            seen_opponents.setdefault(opponent, None)

    numeric: List[Tuple[float, str]] = []
    other: List[str] = []
    for game_id in seen_ids:
        value = _numeric_id(game_id)
        if value is None:
            other.append(game_id)
        else:
            numeric.append((value, game_id))
    # sort() is stable, so "1" and "01" keep their first-seen order
    numeric.sort(key=lambda pair: pair[0])
    return [game_id for _, game_id in numeric] + other, list(seen_opponents)


# ---------------------------------------------------------------------------
# Stage 2: games
# ---------------------------------------------------------------------------

def materialize_games(
    records: Sequence[Record],
    game_ids: Sequence[str],
    logger: Optional[logging.Logger] = None,
) -> List[Game]:
    """Build one Game per id, dropping ids with no plays or missing fields."""
    log = logger or _logger
    rows_by_game: Dict[str, List[Record]] = {}
    for row in records:
        rows_by_game.setdefault(row.get(COL_GAME_ID, ""), []).append(row)

    games: List[Game] = []
    for game_id in game_ids:
        game_rows = rows_by_game.get(game_id)
        if not game_rows:
            log.warning("game_skipped: game_id=%s reason=no_plays", game_id)
            continue
        first = game_rows[0]
        missing = [col for col in GAME_REQUIRED_COLUMNS if not first.get(col)]
        if missing:
            log.warning(
                "game_skipped: game_id=%s reason=missing_fields fields=%s row=%r",
                game_id,
                ",".join(missing),
                first,
            )
            continue
        games.append(
            Game(
                game_id=game_id,
                opponent=first[COL_OPPONENT],
                date=first[COL_DATE],
                season=first[COL_SEASON],
                plays=tuple(PlayEvent.from_record(row) for row in game_rows),
            )
        )
    return games


# ---------------------------------------------------------------------------
# Stage 3: views
# ---------------------------------------------------------------------------

def goals_timeline(games: Iterable[Game]) -> List[GoalEvent]:
    timeline: List[GoalEvent] = []
    for game in games:
        for play in game.plays:
            if not play.is_goal:
                continue
            timeline.append(
                {
                    "minute": play.minute,
                    "gameId": game.game_id,
                    "opponent": game.opponent,
                    "playType": play.play_type,
                    "playContext": play.play_context,
                    "location": play.location,
                    "xG": play.xg,
                    "winImpact": play.win_impact,
                }
            )
    return timeline


@dataclass
class _Bucket:
    count: int = 0
    shots: int = 0
    goals: int = 0
    xg_sum: float = 0.0

    def add(self, row: Record) -> None:
        self.count += 1
        if is_shot_attempt(row):
            self.shots += 1
        if is_goal(row):
            self.goals += 1
        self.xg_sum += row_xg(row)


def shot_map(records: Iterable[Record]) -> Dict[str, ShotMapEntry]:
    """Shot attempts grouped by field location."""
    buckets: Dict[str, _Bucket] = {}
    for row in records:
        location = row.get(COL_LOCATION, "")
        if not location or not is_shot_attempt(row):
            continue
        buckets.setdefault(location, _Bucket()).add(row)

    return {
        location: {
            "totalShots": b.count,
            "goals": b.goals,
            "avgXG": _ratio(b.xg_sum, b.count),
            "successRate": _percent(b.goals, b.count),
        }
        for location, b in buckets.items()
    }


def play_type_distribution(records: Iterable[Record]) -> Dict[str, PlayTypeEntry]:
    """All plays grouped by play type, shots or not."""
    buckets: Dict[str, _Bucket] = {}
    for row in records:
        play_type = row.get(COL_PLAY_TYPE, "")
        if play_type:
            buckets.setdefault(play_type, _Bucket()).add(row)

    return {
        play_type: {
            "count": b.count,
            "shots": b.shots,
            "goals": b.goals,
            "avgXG": _ratio(b.xg_sum, b.count),
        }
        for play_type, b in buckets.items()
    }


def team_comparison(
    games: Iterable[Game],
    opponents: Iterable[str],
) -> Dict[str, TeamComparisonEntry]:
    """Per-opponent totals over the materialized games."""
    by_opponent: Dict[str, List[Game]] = {opponent: [] for opponent in opponents}
    for game in games:
        by_opponent.setdefault(game.opponent, []).append(game)

    comparison: Dict[str, TeamComparisonEntry] = {}
    for opponent, opponent_games in by_opponent.items():
        goals = shots = 0
        xg_sum = 0.0
        for game in opponent_games:
            for play in game.plays:
                goals += play.is_goal
                shots += play.is_shot_attempt
                xg_sum += play.xg
        comparison[opponent] = {
            "gamesPlayed": len(opponent_games),
            "totalGoals": goals,
            "totalShots": shots,
            "totalXG": xg_sum,
            "conversionRate": _percent(goals, shots),
            "avgXGPerShot": _ratio(xg_sum, shots),
        }
    return comparison


def key_statistics(records: Iterable[Record], game_ids: Sequence[str]) -> KeyStats:
    """League-wide totals over every raw row."""
    totals = _Bucket()
    for row in records:
        totals.add(row)
    return {
        "totalGames": len(game_ids),
        "totalGoals": totals.goals,
        "totalShots": totals.shots,
        "totalXG": totals.xg_sum,
        "overallConversionRate": _percent(totals.goals, totals.shots),
        "avgXGPerShot": _ratio(totals.xg_sum, totals.shots),
    }


# ---------------------------------------------------------------------------
# Stage 4: assembly
# ---------------------------------------------------------------------------

def validate_comprehensive_data(result: dict) -> dict:
    """Raise AggregationError when a required view is absent."""
    missing = [key for key in REQUIRED_RESULT_KEYS if result.get(key) is None]
    if missing:
        _logger.error("comprehensive_data_invalid: missing=%s", ",".join(missing))
        raise AggregationError(missing)
    return result


def build_comprehensive_data(
    records: Sequence[Record],
    logger: Optional[logging.Logger] = None,
) -> ComprehensiveData:
    log = logger or _logger
    game_ids, opponents = extract_keys(records)
    games = materialize_games(records, game_ids, logger=log)

    result: ComprehensiveData = {
        "goalsTimeline": goals_timeline(games),
        "shotMapData": shot_map(records),
        "playTypeData": play_type_distribution(records),
        "teamComparison": team_comparison(games, opponents),
        "keyStats": key_statistics(records, game_ids),
        "games": [game.to_dict() for game in games],
        "opponents": opponents,
    }
    log.debug(
        "comprehensive_data_built: rows=%d games=%d/%d goals=%d",
        len(records),
        len(games),
        len(game_ids),
        len(result["goalsTimeline"]),
    )
    validate_comprehensive_data(result)
    return result


def comprehensive_data_from_text(
    text: str,
    delimiter: str = ",",
    logger: Optional[logging.Logger] = None,
) -> ComprehensiveData:
    records = parse_delimited(text, delimiter=delimiter, logger=logger)
    return build_comprehensive_data(records, logger=logger)


__all__ = [
    "build_comprehensive_data",
    "comprehensive_data_from_text",
    "extract_keys",
    "goals_timeline",
    "key_statistics",
    "materialize_games",
    "play_type_distribution",
    "shot_map",
    "team_comparison",
    "validate_comprehensive_data",
]
