"""
Column names and literal markers of the play-by-play match data file.
"""

# ==================== INPUT COLUMNS ====================

COL_GAME_ID = "Game ID"
COL_OPPONENT = "Opponent"
COL_DATE = "Date"
COL_SEASON = "Season"
COL_MINUTE = "Minute"
COL_PLAY_TYPE = "Play Type"
COL_SHOT_ATTEMPT = "Shot Attempt"
COL_SHOT_DISTANCE = "Shot Distance"
COL_SHOT_OUTCOME = "Shot Outcome"
COL_XG = "xG"
COL_PLAY_CONTEXT = "Play Context"
COL_LOCATION = "Location on Field"
COL_OUTCOME = "Outcome"
COL_SUCCESS = "Success"
COL_WIN_IMPACT = "Win Impact"
COL_ASSIST_TYPE = "Assist Type"
COL_PHASE_OF_MATCH = "Phase of Match"

EXPECTED_COLUMNS = (
    COL_GAME_ID,
    COL_OPPONENT,
    COL_DATE,
    COL_SEASON,
    COL_MINUTE,
    COL_PLAY_TYPE,
    COL_SHOT_ATTEMPT,
    COL_SHOT_DISTANCE,
    COL_SHOT_OUTCOME,
    COL_XG,
    COL_PLAY_CONTEXT,
    COL_LOCATION,
    COL_OUTCOME,
    COL_SUCCESS,
    COL_WIN_IMPACT,
    COL_ASSIST_TYPE,
    COL_PHASE_OF_MATCH,
)

# Required on the first row of a game for the game to be kept
GAME_REQUIRED_COLUMNS = (COL_OPPONENT, COL_DATE, COL_SEASON)

# ==================== MARKERS ====================
# Compared case-sensitively, matching the casing of the authored data.

YES_MARKER = "Yes"
GOAL_MARKER = "Goal"

# ==================== PROMPT GROUNDING ====================

MAX_RELEVANT_ROWS = 5
