from typing import Any, Dict, List, TypedDict


class GoalEvent(TypedDict):
    minute: int
    gameId: str
    opponent: str
    playType: str
    playContext: str
    location: str
    xG: float
    winImpact: int


class ShotMapEntry(TypedDict):
    totalShots: int
    goals: int
    avgXG: float
    successRate: float      # percent, 0..100


class PlayTypeEntry(TypedDict):
    count: int
    shots: int
    goals: int
    avgXG: float


class TeamComparisonEntry(TypedDict):
    gamesPlayed: int
    totalGoals: int
    totalShots: int
    totalXG: float
    conversionRate: float   # percent, 0..100
    avgXGPerShot: float


class KeyStats(TypedDict):
    totalGames: int
    totalGoals: int
    totalShots: int
    totalXG: float
    overallConversionRate: float
    avgXGPerShot: float


class ComprehensiveData(TypedDict):
    goalsTimeline: List[GoalEvent]
    shotMapData: Dict[str, ShotMapEntry]
    playTypeData: Dict[str, PlayTypeEntry]
    teamComparison: Dict[str, TeamComparisonEntry]
    keyStats: KeyStats
    games: List[Dict[str, Any]]    # Game.to_dict() payloads
    opponents: List[str]


class NarrativeResponse(TypedDict, total=False):
    response: str
    researcher: str
    model: str
